import numpy as np
import pytest

from spheretrace.app import App, canvas_columns, canvas_rows
from spheretrace.common import Light, LightType, Scene, Settings, Sphere
from spheretrace.cpu_rt import CpuApp
from spheretrace.parallel_rt import ParallelApp, render_band, split_rows
from spheretrace.tracer import get_pixel_color
from spheretrace.vectors import vec


def test_canvas_ranges():
    assert list(canvas_columns(4)) == [-2, -1, 0, 1]
    assert list(canvas_rows(4)) == [2, 1, 0, -1]
    assert list(canvas_columns(5)) == [-2, -1, 0, 1, 2]
    assert list(canvas_rows(5)) == [2, 1, 0, -1, -2]


def test_image_starts_as_background():
    scene = Scene(spheres=(), lights=(), background_color=vec(10, 20, 30))
    app = App(Settings(width=3, height=2), scene)

    assert app.image.shape == (2, 3, 3)
    assert (app.image == np.array([10, 20, 30], dtype=np.uint8)).all()


def test_put_pixel():
    app = App(Settings(width=4, height=4))

    app.put_pixel(0, 0, vec(1, 2, 3))
    app.put_pixel(-2, 2, vec(300, -5, 10))

    np.testing.assert_array_equal(app.image[2, 2], [1, 2, 3])
    np.testing.assert_array_equal(app.image[0, 0], [255, 0, 10])


def test_put_pixel_outside_canvas_is_ignored():
    app = App(Settings(width=4, height=4))
    before = app.image.copy()

    app.put_pixel(2, 0, vec(0, 0, 0))
    app.put_pixel(0, -2, vec(0, 0, 0))
    app.put_pixel(-3, 0, vec(0, 0, 0))

    np.testing.assert_array_equal(app.image, before)


def test_base_app_has_no_renderer():
    with pytest.raises(NotImplementedError):
        App(Settings(width=2, height=2)).run()


def test_default_scene():
    scene = App(Settings(width=2, height=2)).scene

    assert len(scene.spheres) == 5
    assert [light.kind for light in scene.lights] == [
        LightType.AMBIENT,
        LightType.POINT,
        LightType.DIRECTIONAL,
    ]
    np.testing.assert_array_equal(scene.camera.position, vec(3, 0, 1))


def test_split_rows():
    bands = split_rows(10, 3)

    assert [len(band) for band in bands] == [4, 3, 3]
    np.testing.assert_array_equal(np.concatenate(bands), np.arange(10))
    assert len(split_rows(2, 16)) == 2


def small_scene():
    return Scene(
        spheres=(
            Sphere(vec(0, 0, 4), 1, vec(255, 0, 0), specular=10, reflective=0.3),
            Sphere(vec(0, -101, 0), 100, vec(0, 0, 255), reflective=0.5),
        ),
        lights=(
            Light(LightType.AMBIENT, 0.2),
            Light(LightType.POINT, 0.6, vec(2, 2, 0)),
        ),
    )


def test_render_band_matches_pixels():
    settings = Settings(width=6, height=6, progress=False)
    scene = small_scene()

    first_row, band = render_band(np.array([2, 3]), scene, settings)

    assert first_row == 2
    assert band.shape == (2, 6, 3)
    np.testing.assert_array_equal(band[0, 3], get_pixel_color(scene, settings, 0, 1))
    np.testing.assert_array_equal(band[1, 0], get_pixel_color(scene, settings, -3, 0))


def test_cpu_app_renders_every_pixel():
    settings = Settings(width=8, height=6, recursion_depth=1, progress=False)
    scene = small_scene()

    app = CpuApp(settings, scene)
    app.run()

    for row, y in enumerate(canvas_rows(settings.height)):
        for column, x in enumerate(canvas_columns(settings.width)):
            np.testing.assert_array_equal(app.image[row, column], get_pixel_color(scene, settings, x, y))

    # the red sphere is in the middle of the frame
    assert app.image[3, 4, 0] > app.image[3, 4, 2]


def test_parallel_app_matches_cpu_app():
    settings = Settings(width=12, height=10, recursion_depth=2, workers=2, bands=3, progress=False)
    scene = small_scene()

    cpu = CpuApp(settings, scene)
    cpu.run()
    parallel = ParallelApp(settings, scene)
    parallel.run()

    np.testing.assert_array_equal(parallel.image, cpu.image)
