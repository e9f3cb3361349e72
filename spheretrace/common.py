import enum
from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

# Smallest ray parameter accepted by shadow and reflection probes
EPSILON = 1e-3


@dataclass
class Settings:
    width: int = 320
    height: int = 320
    recursion_depth: int = 3
    viewport_size: float = 1.0
    projection_plane_d: float = 1.0
    workers: int = 0  # 0 means os.cpu_count()
    bands: int = 16
    progress: bool = True


class LightType(enum.Enum):
    AMBIENT = 0
    POINT = 1
    DIRECTIONAL = 2


@dataclass(frozen=True, eq=False)
class Light:
    kind: LightType
    intensity: float
    # world position for point lights, direction for directional ones
    position: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))


@dataclass(frozen=True, eq=False)
class Sphere:
    center: NDArray[np.float64]
    radius: float
    color: NDArray[np.float64]
    specular: int = -1
    reflective: float = 0.0


@dataclass(frozen=True, eq=False)
class Camera:
    position: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    rotation: NDArray[np.float64] = field(default_factory=lambda: np.eye(3))

    @classmethod
    def from_buffers(cls, position: Sequence[float], rotation: Sequence[float]) -> "Camera":
        """Build a camera from 3 position floats and a row-major 3x3 rotation."""
        return cls(
            position=np.array(position, dtype=np.float64),
            rotation=np.array(rotation, dtype=np.float64).reshape(3, 3),
        )


@dataclass(frozen=True, eq=False)
class Scene:
    spheres: Tuple[Sphere, ...]
    lights: Tuple[Light, ...]
    camera: Camera = field(default_factory=Camera)
    background_color: NDArray[np.float64] = field(
        default_factory=lambda: np.array([255.0, 255.0, 255.0]),
    )
    # sphere geometry packed for the compiled intersection loops
    sphere_centers: NDArray[np.float64] = field(init=False, repr=False)
    sphere_radii: NDArray[np.float64] = field(init=False, repr=False)

    def __post_init__(self):
        centers = np.array([sphere.center for sphere in self.spheres], dtype=np.float64).reshape(-1, 3)
        radii = np.array([sphere.radius for sphere in self.spheres], dtype=np.float64)

        object.__setattr__(self, "sphere_centers", np.ascontiguousarray(centers))
        object.__setattr__(self, "sphere_radii", radii)
