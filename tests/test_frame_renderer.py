"""Tests for the numpy palette look-up and surface rendering."""

from __future__ import annotations

import numpy as np
import pygame

from schip8.core.types import GFX_H, GFX_W, Mode
from schip8.shell.frame_renderer import BACKGROUND, FOREGROUND, FrameRenderer


def blank() -> np.ndarray:
    return np.zeros((GFX_W, GFX_H), dtype=bool)


class TestFrameRenderer:

    def test_standard_mode_crops_to_small_canvas(self):
        frame = blank()
        frame[100, 50] = True
        rgb = FrameRenderer().to_rgb(Mode.STANDARD, frame)
        assert rgb.shape == (64, 32, 3)
        assert (rgb == (0x1C, 0x28, 0x41)).all()

    def test_super_mode_uses_full_canvas(self):
        frame = blank()
        frame[100, 50] = True
        rgb = FrameRenderer().to_rgb(Mode.SUPER, frame)
        assert rgb.shape == (128, 64, 3)
        assert tuple(rgb[100, 50]) == (0xFF, 0xFF, 0xFF)
        assert tuple(rgb[0, 0]) == (0x1C, 0x28, 0x41)

    def test_set_colours(self):
        renderer = FrameRenderer(BACKGROUND, FOREGROUND)
        renderer.set_colours(0x000000, 0x00FF00)
        frame = blank()
        frame[1, 1] = True
        rgb = renderer.to_rgb(Mode.STANDARD, frame)
        assert tuple(rgb[1, 1]) == (0x00, 0xFF, 0x00)
        assert tuple(rgb[0, 0]) == (0x00, 0x00, 0x00)

    def test_render_returns_mode_sized_surface(self):
        frame = blank()
        frame[3, 2] = True
        renderer = FrameRenderer()
        surface = renderer.render(Mode.STANDARD, frame)
        assert surface.get_size() == (64, 32)
        assert surface.get_at((3, 2))[:3] == (0xFF, 0xFF, 0xFF)
        assert surface.get_at((0, 0))[:3] == (0x1C, 0x28, 0x41)
        assert renderer.render(Mode.STANDARD, frame) is surface
        assert isinstance(surface, pygame.Surface)
