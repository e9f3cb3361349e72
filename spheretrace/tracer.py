import math
from typing import Optional, Tuple

import numba
import numpy as np
from numpy.typing import NDArray

from spheretrace.camera import ray_direction
from spheretrace.common import EPSILON, LightType, Scene, Settings, Sphere
from spheretrace.vectors import clamp_color, dot, length, normalize, reflect


@numba.njit
def solve_quadratic(k1: float, k2: float, k3: float) -> Tuple[float, float]:
    discriminant = k2 * k2 - 4 * k1 * k3
    if discriminant < 0:
        return math.inf, math.inf

    root = math.sqrt(discriminant)
    return (-k2 + root) / (2 * k1), (-k2 - root) / (2 * k1)


@numba.njit
def sphere_roots(
    center: NDArray[np.float64],
    radius: float,
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
) -> Tuple[float, float]:
    oc0 = origin[0] - center[0]
    oc1 = origin[1] - center[1]
    oc2 = origin[2] - center[2]

    k1 = direction[0] * direction[0] + direction[1] * direction[1] + direction[2] * direction[2]
    k2 = 2 * (oc0 * direction[0] + oc1 * direction[1] + oc2 * direction[2])
    k3 = oc0 * oc0 + oc1 * oc1 + oc2 * oc2 - radius * radius

    return solve_quadratic(k1, k2, k3)


@numba.njit
def nearest_root(
    centers: NDArray[np.float64],
    radii: NDArray[np.float64],
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
    t_min: float,
    t_max: float,
    exclude: int,
) -> Tuple[int, float]:
    closest_t = math.inf
    closest = -1
    for i in range(centers.shape[0]):
        if i == exclude:
            continue

        t1, t2 = sphere_roots(centers[i], radii[i], origin, direction)
        if t_min < t1 < t_max and t1 < closest_t:
            closest_t = t1
            closest = i
        if t_min < t2 < t_max and t2 < closest_t:
            closest_t = t2
            closest = i

    return closest, closest_t


@numba.njit
def any_root(
    centers: NDArray[np.float64],
    radii: NDArray[np.float64],
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
    t_min: float,
    t_max: float,
    exclude: int,
) -> bool:
    for i in range(centers.shape[0]):
        if i == exclude:
            continue

        t1, t2 = sphere_roots(centers[i], radii[i], origin, direction)
        if t_min < t1 < t_max or t_min < t2 < t_max:
            return True

    return False


def intersect_ray_sphere(
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
    sphere: Sphere,
) -> Tuple[float, float]:
    """Both ray parameters at which the ray meets the sphere.

    ``(inf, inf)`` means the ray misses. The roots come in no particular
    near/far order, so callers have to check each one against their interval.
    """
    return sphere_roots(
        np.asarray(sphere.center, dtype=np.float64),
        float(sphere.radius),
        np.asarray(origin, dtype=np.float64),
        np.asarray(direction, dtype=np.float64),
    )


def closest_intersection(
    scene: Scene,
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
    t_min: float,
    t_max: float,
    exclude: Optional[int] = None,
) -> Tuple[Optional[int], float]:
    """Index of the first sphere the ray meets inside ``(t_min, t_max)``, and where.

    Returns ``(None, inf)`` on a miss. Earlier spheres win ties.
    """
    closest, closest_t = nearest_root(
        scene.sphere_centers,
        scene.sphere_radii,
        np.asarray(origin, dtype=np.float64),
        np.asarray(direction, dtype=np.float64),
        float(t_min),
        float(t_max),
        -1 if exclude is None else exclude,
    )
    if closest < 0:
        return None, math.inf

    return closest, closest_t


def is_occluded(
    scene: Scene,
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
    t_min: float,
    t_max: float,
    exclude: Optional[int] = None,
) -> bool:
    return bool(any_root(
        scene.sphere_centers,
        scene.sphere_radii,
        np.asarray(origin, dtype=np.float64),
        np.asarray(direction, dtype=np.float64),
        float(t_min),
        float(t_max),
        -1 if exclude is None else exclude,
    ))


def compute_lighting(
    scene: Scene,
    point: NDArray[np.float64],
    normal: NDArray[np.float64],
    view: NDArray[np.float64],
    specular: int,
    exclude: Optional[int] = None,
) -> float:
    """Light intensity reaching ``point``, unclamped.

    ``view`` points back towards the viewer. The sphere at index ``exclude``
    is the shaded one and does not cast a shadow on itself.
    """
    normal = normal / length(normal)
    view_length = length(view)

    intensity = 0.0
    for light in scene.lights:
        if light.kind is LightType.AMBIENT:
            intensity += light.intensity
            continue

        if light.kind is LightType.POINT:
            dir_to_light = light.position - point
            t_max = 1.0
        else:
            dir_to_light = light.position
            t_max = math.inf

        if is_occluded(scene, point, dir_to_light, EPSILON, t_max, exclude):
            continue

        # Diffuse
        n_dot_l = dot(normal, dir_to_light)
        if n_dot_l > 0:
            intensity += light.intensity * n_dot_l / length(dir_to_light)

        # Specular
        if specular >= 0:
            reflected = reflect(dir_to_light, normal)
            r_dot_v = dot(reflected, view)
            if r_dot_v > 0:
                cos_angle = r_dot_v / (length(reflected) * view_length)
                intensity += light.intensity * cos_angle ** specular

    return intensity


def trace_ray(
    scene: Scene,
    origin: NDArray[np.float64],
    direction: NDArray[np.float64],
    t_min: float,
    t_max: float,
    depth: int,
    exclude: Optional[int] = None,
) -> NDArray[np.float64]:
    nearest, closest_t = closest_intersection(scene, origin, direction, t_min, t_max, exclude)
    if nearest is None:
        return scene.background_color

    sphere = scene.spheres[nearest]

    point = origin + closest_t * direction
    normal = normalize(point - sphere.center)
    view = -direction

    local_color = compute_lighting(scene, point, normal, view, sphere.specular, nearest) * sphere.color

    if sphere.reflective <= 0 or depth <= 0:
        return local_color

    reflected_color = trace_ray(
        scene,
        point,
        reflect(view, normal),
        EPSILON,
        math.inf,
        depth - 1,
        nearest,
    )

    return (1 - sphere.reflective) * local_color + sphere.reflective * reflected_color


def get_pixel_color(scene: Scene, settings: Settings, x: int, y: int) -> NDArray[np.uint8]:
    direction = ray_direction(scene.camera, x, y, settings)

    # t = 1 is the projection plane, nothing in front of it is drawn
    color = trace_ray(
        scene,
        scene.camera.position,
        direction,
        1.0,
        math.inf,
        settings.recursion_depth,
    )
    return clamp_color(color)
