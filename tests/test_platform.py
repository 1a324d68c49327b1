"""Headless tests for the pygame window and audio device."""

from __future__ import annotations

import numpy as np
import pygame
import pytest

from schip8.core.types import GFX_H, GFX_W, Mode
from schip8.platform.audio import AudioDevice, build_square_wave
from schip8.platform.window import Window


@pytest.fixture
def window():
    win = Window(scale=2)
    yield win
    win.shutdown()


class TestWindow:

    def test_window_size(self, window):
        assert window.scale == 2
        assert pygame.display.get_surface().get_size() == (GFX_W * 2, GFX_H * 2)

    def test_scale_clamped(self):
        win = Window(scale=0)
        try:
            assert win.scale == 1
        finally:
            win.shutdown()

    def test_standard_frame_fills_window(self, window):
        frame = np.zeros((GFX_W, GFX_H), dtype=bool)
        frame[63, 31] = True
        window.present(Mode.STANDARD, frame)
        screen = pygame.display.get_surface()
        # One standard pixel covers 4x4 screen pixels at scale 2.
        assert screen.get_at((255, 127))[:3] == (0xFF, 0xFF, 0xFF)
        assert screen.get_at((252, 124))[:3] == (0xFF, 0xFF, 0xFF)
        assert screen.get_at((251, 123))[:3] == (0x1C, 0x28, 0x41)


class TestAudio:

    def test_square_wave_shape(self):
        wave = build_square_wave(sample_rate=44100, tone_hz=441)
        assert wave.dtype == np.int16
        assert wave.shape == (100,)
        assert (wave[:50] > 0).all()
        assert (wave[50:] < 0).all()

    def test_square_wave_stereo(self):
        wave = build_square_wave(channels=2)
        assert wave.ndim == 2
        assert wave.shape[1] == 2

    def test_disabled_device_is_silent(self):
        audio = AudioDevice(enabled=False)
        audio.set_audio(True)
        assert audio.on
        assert not audio.enabled
        audio.shutdown()

    def test_gate_on_and_off(self):
        audio = AudioDevice()
        try:
            audio.set_audio(True)
            assert audio.on
            audio.set_audio(False)
            assert not audio.on
        finally:
            audio.shutdown()
