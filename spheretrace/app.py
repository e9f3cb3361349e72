import logging
import time
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from spheretrace.common import Camera, Light, LightType, Scene, Settings, Sphere
from spheretrace.vectors import clamp_color, vec

logger = logging.getLogger(__name__)


def canvas_columns(width: int) -> range:
    """Canvas x coordinates, left to right, with 0 at the center."""
    return range(-(width // 2), width - width // 2)


def canvas_rows(height: int) -> range:
    """Canvas y coordinates, top to bottom, with 0 at the center."""
    return range(height // 2, height // 2 - height, -1)


class App:
    def __init__(self, settings: Settings, scene: Optional[Scene] = None):
        self.settings = settings
        self.scene = scene if scene is not None else self.create_scene()

        self.image = np.empty(
            (settings.height, settings.width, 3),
            dtype=np.uint8,
        )
        self.image[:, :] = clamp_color(self.scene.background_color)

        self.elapsed_ms = 0

    def put_pixel(self, x: int, y: int, color: NDArray) -> None:
        column = self.settings.width // 2 + x
        row = self.settings.height // 2 - y

        if 0 <= column < self.settings.width and 0 <= row < self.settings.height:
            self.image[row, column, :] = clamp_color(color)

    def run(self):
        logger.info(
            "rendering %dx%d, %d spheres, %d lights, recursion depth %d",
            self.settings.width,
            self.settings.height,
            len(self.scene.spheres),
            len(self.scene.lights),
            self.settings.recursion_depth,
        )

        start = time.perf_counter()
        self.render()
        self.elapsed_ms = int((time.perf_counter() - start) * 1000)

        logger.info("render took %d milliseconds", self.elapsed_ms)

    def render(self):
        raise NotImplementedError

    def create_scene(self) -> Scene:
        sphere_red = Sphere(
            center=vec(0, -1, 3),
            radius=1,
            color=vec(255, 0, 0),
            specular=500,
            reflective=0.2,
        )
        sphere_blue = Sphere(
            center=vec(2, 0, 4),
            radius=1,
            color=vec(0, 0, 255),
            specular=500,
            reflective=0.3,
        )
        sphere_green = Sphere(
            center=vec(-2, 0, 4),
            radius=1,
            color=vec(0, 255, 0),
            specular=10,
            reflective=0.4,
        )
        sphere_floor = Sphere(
            center=vec(0, -5001, 0),
            radius=5000,
            color=vec(255, 255, 0),
            specular=1000,
            reflective=0.5,
        )
        sphere_top = Sphere(
            center=vec(0, 2, 2),
            radius=2,
            color=vec(255, 255, 0),
            specular=1000,
            reflective=0.5,
        )

        lights = (
            Light(LightType.AMBIENT, 0.2),
            Light(LightType.POINT, 0.6, vec(2, 1, 0)),
            Light(LightType.DIRECTIONAL, 0.2, vec(1, 4, 4)),
        )

        camera = Camera.from_buffers(
            [3, 0, 1],
            [
                0.7071, 0.0, -0.7071,
                0.0, 1.0, 0.0,
                0.7071, 0.0, 0.7071,
            ],
        )

        return Scene(
            spheres=(
                sphere_red,
                sphere_blue,
                sphere_green,
                sphere_floor,
                sphere_top,
            ),
            lights=lights,
            camera=camera,
            background_color=vec(255, 255, 255),
        )
