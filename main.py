import argparse
import logging

import matplotlib.pyplot as plt

from spheretrace.common import Settings
from spheretrace.cpu_rt import CpuApp
from spheretrace.parallel_rt import ParallelApp
from spheretrace.raster import draw_filled_triangle, draw_wireframe_triangle
from spheretrace.vectors import vec

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description="Ray trace a scene of spheres")
    parser.add_argument("--cpu", action="store_true", help="Render serially in this process")

    parser.add_argument("--width", type=int, default=320, help="Image width")
    parser.add_argument("--height", type=int, default=320, help="Image height")
    parser.add_argument("--depth", type=int, default=3, help="Number of times a ray can be reflected")
    parser.add_argument("--viewport-size", type=float, default=1.0, help="Viewport width in scene units")
    parser.add_argument("--distance", type=float, default=1.0, help="Distance from camera to projection plane")
    parser.add_argument("--workers", type=int, default=0, help="Worker processes, 0 for one per CPU")
    parser.add_argument("--bands", type=int, default=16, help="Number of row bands to split the image into")
    parser.add_argument("--no-progress", action="store_true")

    parser.add_argument("--debug-triangle", action="store_true", help="Draw a triangle over the render")
    parser.add_argument("--output", type=str, default=None, help="Save the image to this path")
    parser.add_argument("--no-show", action="store_true", help="Do not open a window")

    return parser


def parse_settings(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error("image size must be positive")
    if args.depth < 0:
        parser.error("--depth must not be negative")
    if args.viewport_size <= 0 or args.distance <= 0:
        parser.error("--viewport-size and --distance must be positive")
    if args.workers < 0 or args.bands <= 0:
        parser.error("--workers must not be negative and --bands must be positive")

    settings = Settings(
        width=args.width,
        height=args.height,
        recursion_depth=args.depth,
        viewport_size=args.viewport_size,
        projection_plane_d=args.distance,
        workers=args.workers,
        bands=args.bands,
        progress=not args.no_progress,
    )
    return args, settings


def save_image(image, path):
    plt.imsave(path, image)
    logger.info("saved %s", path)


def main():
    logging.basicConfig(level=logging.INFO)
    args, settings = parse_settings()

    if args.cpu:
        app = CpuApp(settings)
    else:
        app = ParallelApp(settings)

    app.run()

    if args.debug_triangle:
        p0, p1, p2 = (-200, -250), (200, 50), (20, 250)
        draw_filled_triangle(app, p0, p1, p2, vec(0, 255, 0))
        draw_wireframe_triangle(app, p0, p1, p2, vec(0, 0, 0))

    if args.output is not None:
        save_image(app.image, args.output)

    if not args.no_show:
        plt.imshow(app.image)
        plt.title("Time: {} milliseconds".format(app.elapsed_ms))
        plt.show(block=True)


if __name__ == "__main__":
    main()
