"""Tests for the boolean pixel canvas."""

from __future__ import annotations

import pytest

from schip8.core.frame_buffer import FrameBuffer
from schip8.core.types import GFX_H, GFX_W


class TestFrameBuffer:

    def test_default_shape(self):
        fb = FrameBuffer()
        assert fb.pixels.shape == (GFX_W, GFX_H)
        assert not fb.pixels.any()

    @pytest.mark.parametrize("width, height", [(0, 8), (8, 0), (-1, 8)])
    def test_rejects_bad_dimensions(self, width, height):
        with pytest.raises(ValueError):
            FrameBuffer(width, height)

    def test_toggle_returns_new_state(self):
        fb = FrameBuffer(8, 4)
        assert fb.toggle_pixel(2, 3) is True
        assert fb.read_pixel(2, 3)
        assert fb.toggle_pixel(2, 3) is False
        assert not fb.read_pixel(2, 3)

    def test_clear(self):
        fb = FrameBuffer(8, 4)
        fb.write_pixel(1, 1, True)
        fb.clear()
        assert not fb.pixels.any()

    def test_snapshot_is_independent(self):
        fb = FrameBuffer(8, 4)
        snap = fb.snapshot()
        fb.write_pixel(0, 0, True)
        assert not snap[0, 0]

    def test_scroll_down_fills_top(self):
        fb = FrameBuffer(4, 4)
        fb.pixels[:, 0] = True
        fb.scroll_down(1)
        assert not fb.pixels[:, 0].any()
        assert fb.pixels[:, 1].all()

    def test_scroll_down_past_height_clears(self):
        fb = FrameBuffer(4, 4)
        fb.pixels[:, :] = True
        fb.scroll_down(10)
        assert not fb.pixels.any()

    def test_scroll_right_drops_rightmost(self):
        fb = FrameBuffer(8, 2)
        fb.write_pixel(7, 0, True)
        fb.write_pixel(1, 1, True)
        fb.scroll_right(4)
        assert fb.read_pixel(5, 1)
        assert fb.pixels.sum() == 1

    def test_scroll_left_drops_leftmost(self):
        fb = FrameBuffer(8, 2)
        fb.write_pixel(0, 0, True)
        fb.write_pixel(6, 1, True)
        fb.scroll_left(4)
        assert fb.read_pixel(2, 1)
        assert fb.pixels.sum() == 1

    def test_zero_scroll_is_noop(self):
        fb = FrameBuffer(4, 4)
        fb.write_pixel(1, 1, True)
        fb.scroll_down(0)
        fb.scroll_left(0)
        fb.scroll_right(0)
        assert fb.read_pixel(1, 1)
        assert fb.pixels.sum() == 1

    def test_repr_counts_lit_pixels(self):
        fb = FrameBuffer(4, 4)
        fb.write_pixel(0, 0, True)
        assert "lit=1" in repr(fb)
