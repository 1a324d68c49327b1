"""
Beep output for SCHIP8.
Uses pygame.mixer to gate a fixed square-wave tone on and off.

The interpreter only exposes whether its sound timer is running, so the
device needs no sample streaming: a short looping square wave is built
once with numpy, and :meth:`AudioDevice.set_audio` starts or stops it.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pygame

from schip8.shell.interfaces import AudioSink

logger = logging.getLogger(__name__)

_SAMPLE_RATE: int = 44100
_TONE_HZ: int = 440
_VOLUME: float = 0.25

# Mixer buffer size (in samples).  Smaller values reduce latency.
_MIXER_BUFFER_SAMPLES: int = 512


def build_square_wave(
    sample_rate: int = _SAMPLE_RATE,
    tone_hz: int = _TONE_HZ,
    volume: float = _VOLUME,
    channels: int = 1,
) -> np.ndarray:
    """Return one period of a signed 16-bit square wave.

    The result has shape ``(samples,)`` for mono or ``(samples, channels)``
    otherwise, ready for :func:`pygame.sndarray.make_sound`.
    """
    period = max(2, sample_rate // tone_hz)
    amplitude = int(volume * 32767)
    wave = np.full(period, amplitude, dtype=np.int16)
    wave[period // 2 :] = -amplitude
    if channels > 1:
        wave = np.repeat(wave[:, np.newaxis], channels, axis=1)
    return wave


class AudioDevice(AudioSink):
    """Gate a looping beep on and off.

    Parameters
    ----------
    enabled:
        Set to ``False`` to create the device in a silent / no-op mode.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled: bool = enabled
        self._channel: Optional[pygame.mixer.Channel] = None
        self._beep: Optional[pygame.mixer.Sound] = None
        self._on: bool = False

        if not self._enabled:
            logger.info("AudioDevice: disabled (silent mode)")
            return

        self._init_mixer()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def on(self) -> bool:
        """The last state passed to :meth:`set_audio`."""
        return self._on

    def set_audio(self, on: bool) -> None:
        """Start or stop the beep."""
        self._on = on
        if self._channel is None or self._beep is None:
            return
        if on:
            self._channel.play(self._beep, loops=-1)
        else:
            self._channel.stop()

    def shutdown(self) -> None:
        """Stop playback and release the mixer."""
        self._shutdown_mixer()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _init_mixer(self) -> None:
        """Initialise the pygame mixer and build the beep."""
        try:
            pygame.mixer.init(
                frequency=_SAMPLE_RATE,
                size=-16,       # signed 16-bit
                channels=1,     # mono
                buffer=_MIXER_BUFFER_SAMPLES,
            )
        except pygame.error as exc:
            logger.warning("AudioDevice: mixer init failed (%s); running silent", exc)
            self._enabled = False
            return

        # The driver may have granted a different format than requested.
        frequency, _size, channels = pygame.mixer.get_init()
        wave = build_square_wave(sample_rate=frequency, channels=channels)
        self._beep = pygame.sndarray.make_sound(wave)
        self._channel = pygame.mixer.Channel(0)

        logger.info(
            "AudioDevice: mixer ready at %d Hz, %d ch (%d Hz tone)",
            frequency,
            channels,
            _TONE_HZ,
        )

    def _shutdown_mixer(self) -> None:
        """Stop the mixer channel and release resources."""
        if self._channel is not None:
            self._channel.stop()
            self._channel = None
        self._beep = None
        if pygame.mixer.get_init():
            pygame.mixer.quit()
