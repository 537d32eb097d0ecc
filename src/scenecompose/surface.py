"""Render surface contract and a numpy-backed raster surface.

Scenes only rely on ``set_clipper``. The raster surface adds the few
drawing calls the bundled scenes and the preview CLI need.
"""

from typing import Protocol

import numpy as np
from PIL import Image

from .geometry import Rect, rect_to_pixel_box


class RenderSurface(Protocol):
    def set_clipper(self, rect: Rect | None) -> None:
        """Set the active clip region, or clear it with None."""


class RasterSurface:
    """RGB frame buffer with an active axis-aligned clipper.

    The clipper is kept in canvas space and mapped to a pixel box at
    draw time. ``fill`` honours the clipper, ``clear`` does not.
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: tuple[int, int, int] = (0, 0, 0),
    ):
        self.width = width
        self.height = height
        self.frame = np.zeros((height, width, 3), dtype=np.uint8)
        self.clipper: Rect | None = None
        self.clear(background)

    def set_clipper(self, rect: Rect | None) -> None:
        self.clipper = rect

    def clip_box(self) -> tuple[int, int, int, int]:
        """Current drawable pixel box (left, top, right, bottom)."""
        if self.clipper is None:
            return 0, 0, self.width, self.height
        return rect_to_pixel_box(self.clipper, self.width, self.height)

    def clear(self, color: tuple[int, int, int]) -> None:
        """Fill the whole frame, ignoring the clipper."""
        self.frame[:, :] = color

    def fill(self, color: tuple[int, int, int]) -> None:
        """Fill the clipped region. A zero-area clip paints nothing."""
        x0, y0, x1, y1 = self.clip_box()
        if x1 > x0 and y1 > y0:
            self.frame[y0:y1, x0:x1] = color

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.frame)
