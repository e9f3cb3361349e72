import numpy as np
from numpy.typing import NDArray


def vec(x: float, y: float, z: float) -> NDArray[np.float64]:
    return np.array([x, y, z], dtype=np.float64)


def dot(u: NDArray[np.float64], v: NDArray[np.float64]) -> float:
    return float(np.sum(u * v))


def length(v: NDArray[np.float64]) -> float:
    return float(np.sqrt(dot(v, v)))


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    norm = length(v)
    assert norm > 1e-12, "cannot normalize a zero-length vector"

    return v / norm


def reflect(v: NDArray[np.float64], normal: NDArray[np.float64]) -> NDArray[np.float64]:
    """Mirror ``v`` about ``normal``.

    Both vectors point away from the surface, so the result does as well.
    """
    return 2 * dot(normal, v) * normal - v


def clamp_color(color: NDArray[np.float64]) -> NDArray[np.uint8]:
    return np.clip(color, 0.0, 255.0).astype(np.uint8)
