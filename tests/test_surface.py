"""Tests for the numpy raster surface."""

import numpy as np
from PIL import Image

from scenecompose.geometry import Rect, to_canvas_space
from scenecompose.surface import RasterSurface


RED = (255, 0, 0)


class TestRasterSurface:
    def test_initial_background(self):
        s = RasterSurface(4, 3, background=(10, 20, 30))
        assert s.frame.shape == (3, 4, 3)
        assert s.frame.dtype == np.uint8
        assert (s.frame == (10, 20, 30)).all()
        assert s.clipper is None

    def test_fill_without_clip_covers_frame(self):
        s = RasterSurface(4, 3)
        s.fill(RED)
        assert (s.frame == RED).all()

    def test_fill_respects_clipper(self):
        s = RasterSurface(800, 600)
        s.set_clipper(to_canvas_space(100, 50, 200, 150, 800, 600))
        s.fill(RED)
        assert (s.frame[50:200, 100:300] == RED).all()
        assert s.frame[:50].sum() == 0
        assert s.frame[200:].sum() == 0
        assert s.frame[:, :100].sum() == 0
        assert s.frame[:, 300:].sum() == 0

    def test_zero_area_clip_paints_nothing(self):
        s = RasterSurface(10, 10)
        s.set_clipper(Rect(0, 0, 0, 0))
        s.fill(RED)
        assert s.frame.sum() == 0

    def test_clearing_clipper_restores_full_frame(self):
        s = RasterSurface(10, 10)
        s.set_clipper(Rect(-5, 5, 1, 1))
        s.set_clipper(None)
        assert s.clip_box() == (0, 0, 10, 10)

    def test_clear_ignores_clipper(self):
        s = RasterSurface(10, 10)
        s.set_clipper(Rect(0, 0, 0, 0))
        s.clear(RED)
        assert (s.frame == RED).all()

    def test_to_image(self):
        s = RasterSurface(6, 4, background=RED)
        img = s.to_image()
        assert isinstance(img, Image.Image)
        assert img.size == (6, 4)
        assert img.getpixel((0, 0)) == RED
