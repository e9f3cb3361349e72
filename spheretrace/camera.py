import numpy as np
from numpy.typing import NDArray

from spheretrace.common import Camera, Settings


def canvas_to_viewport(
    x: int,
    y: int,
    width: int,
    height: int,
    viewport_size: float = 1.0,
    d: float = 1.0,
) -> NDArray[np.float64]:
    viewport_width = viewport_size
    viewport_height = viewport_size * height / width

    return np.array([
        x * viewport_width / width,
        y * viewport_height / height,
        d,
    ], dtype=np.float64)


def ray_direction(camera: Camera, x: int, y: int, settings: Settings) -> NDArray[np.float64]:
    direction = canvas_to_viewport(
        x,
        y,
        settings.width,
        settings.height,
        settings.viewport_size,
        settings.projection_plane_d,
    )
    return camera.rotation @ direction
