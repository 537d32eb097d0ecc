"""Layout-space to canvas-space geometry.

Layout space puts the origin at the top-left corner of the canvas with
y growing downward. Canvas space (what the surface clipper expects)
puts the origin at the canvas center with y growing upward:

    canvas_x = x - canvas_w / 2
    canvas_y = canvas_h / 2 - y

The transform is a translation plus a vertical flip. Rotation and skew
are never applied, so clip rectangles are always axis-aligned.
"""

import math
from typing import NamedTuple


class Rect(NamedTuple):
    """Axis-aligned rectangle in canvas space.

    (x, y) is the top-left corner: x grows right, y grows up, so the
    rectangle spans [x, x + w] horizontally and [y - h, y] vertically.
    """

    x: float
    y: float
    w: float
    h: float


def clamp_extent(value: float) -> float:
    """Clamp a width/height to a non-negative finite value.

    Negative, NaN and infinite extents become 0 (a zero-area rectangle).
    """
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def to_canvas_space(
    x: float,
    y: float,
    width: float,
    height: float,
    canvas_width: float,
    canvas_height: float,
) -> Rect:
    """Convert a top-left layout box into a centered canvas-space Rect.

    Width and height are copied through unchanged unless they are
    negative or non-finite, in which case they clamp to 0.
    """
    return Rect(
        x=x - canvas_width / 2,
        y=canvas_height / 2 - y,
        w=clamp_extent(width),
        h=clamp_extent(height),
    )


def rect_to_pixel_box(
    rect: Rect, canvas_width: int, canvas_height: int,
) -> tuple[int, int, int, int]:
    """Map a canvas-space Rect back to a pixel box (left, top, right, bottom).

    The box is clamped to the canvas, so right >= left and bottom >= top
    always hold. A rect fully outside the canvas yields an empty box.
    """
    left = rect.x + canvas_width / 2
    top = canvas_height / 2 - rect.y

    def _clamp(v, hi):
        if math.isnan(v):
            return 0
        return int(round(max(0, min(hi, v))))

    x0 = _clamp(left, canvas_width)
    y0 = _clamp(top, canvas_height)
    x1 = max(x0, _clamp(left + rect.w, canvas_width))
    y1 = max(y0, _clamp(top + rect.h, canvas_height))
    return x0, y0, x1, y1
