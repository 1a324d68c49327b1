"""Shared fixtures for the SCHIP8 test suite."""

from __future__ import annotations

import os

# pygame collaborators run headless against the SDL dummy drivers.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import random

import pytest

from schip8.core.interpreter import Interpreter


class FakeClock:
    """Manually advanced stand-in for :func:`time.monotonic`."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def interp() -> Interpreter:
    """A blank interpreter with a seeded random source."""
    return Interpreter(rng=random.Random(1234))
