import numpy as np

from spheretrace.common import Camera, Light, LightType, Scene, Sphere
from spheretrace.vectors import vec


def test_scene_packs_sphere_geometry():
    scene = Scene(
        spheres=(Sphere(vec(1, 2, 3), 4, vec(0, 0, 0)), Sphere(vec(-1, 0, 5), 0.5, vec(0, 0, 0))),
        lights=(),
    )

    np.testing.assert_array_equal(scene.sphere_centers, [[1, 2, 3], [-1, 0, 5]])
    np.testing.assert_array_equal(scene.sphere_radii, [4, 0.5])
    assert scene.sphere_centers.dtype == np.float64


def test_scene_objects_compare_by_identity():
    sphere = Sphere(vec(0, 0, 0), 1, vec(255, 0, 0))
    twin = Sphere(vec(0, 0, 0), 1, vec(255, 0, 0))
    light = Light(LightType.POINT, 0.5, vec(1, 1, 1))

    assert sphere == sphere
    assert sphere != twin
    assert light != Light(LightType.POINT, 0.5, vec(1, 1, 1))
    assert Camera() != Camera()
    assert len({sphere, twin, light}) == 3

    scene = Scene(spheres=(sphere,), lights=(light,))
    assert scene == scene
    assert scene in {scene}
