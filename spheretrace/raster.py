"""Line and triangle rasterization drawn straight into an ``App`` pixel buffer.

Points are ``(x, y)`` canvas coordinates, origin at the canvas center, y up.
Used to overlay debug geometry on top of a rendered image.
"""
from typing import List, Tuple

from numpy.typing import NDArray

from spheretrace.app import App

Point = Tuple[int, int]


def interpolate(i0: int, d0: float, i1: int, d1: float) -> List[float]:
    """Values of a linear function ``d(i)`` sampled at every integer in ``[i0, i1]``."""
    if i0 == i1:
        return [float(d0)]

    values = []
    a = (d1 - d0) / (i1 - i0)
    d = float(d0)
    for _ in range(i0, i1 + 1):
        values.append(d)
        d += a

    return values


def draw_line(app: App, p0: Point, p1: Point, color: NDArray) -> None:
    (x0, y0), (x1, y1) = p0, p1

    if abs(x1 - x0) > abs(y1 - y0):
        # horizontal-ish, walk left to right
        if x0 > x1:
            (x0, y0), (x1, y1) = (x1, y1), (x0, y0)

        ys = interpolate(x0, y0, x1, y1)
        for x in range(x0, x1 + 1):
            app.put_pixel(x, int(ys[x - x0]), color)
    else:
        # vertical-ish, walk bottom to top
        if y0 > y1:
            (x0, y0), (x1, y1) = (x1, y1), (x0, y0)

        xs = interpolate(y0, x0, y1, x1)
        for y in range(y0, y1 + 1):
            app.put_pixel(int(xs[y - y0]), y, color)


def draw_wireframe_triangle(app: App, p0: Point, p1: Point, p2: Point, color: NDArray) -> None:
    draw_line(app, p0, p1, color)
    draw_line(app, p1, p2, color)
    draw_line(app, p2, p0, color)


def draw_filled_triangle(app: App, p0: Point, p1: Point, p2: Point, color: NDArray) -> None:
    p0, p1, p2 = sorted((p0, p1, p2), key=lambda p: p[1])
    (x0, y0), (x1, y1), (x2, y2) = p0, p1, p2

    # x coordinates of the edges, per row
    x01 = interpolate(y0, x0, y1, x1)
    x12 = interpolate(y1, x1, y2, x2)
    x02 = interpolate(y0, x0, y2, x2)

    # the two short sides share the row of p1
    x012 = x01[:-1] + x12

    middle = len(x02) // 2
    if x02[middle] < x012[middle]:
        x_left, x_right = x02, x012
    else:
        x_left, x_right = x012, x02

    for y in range(y0, y2 + 1):
        for x in range(int(x_left[y - y0]), int(x_right[y - y0]) + 1):
            app.put_pixel(x, y, color)
