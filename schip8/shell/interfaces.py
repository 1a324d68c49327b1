"""
Capability interfaces consumed by the presentation loop.

The :class:`~schip8.shell.presentation_loop.PresentationLoop` never talks to
pygame directly; it is handed one object per capability.  The pygame
implementations live in :mod:`schip8.platform`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from schip8.core.types import Mode


class InputKind(IntEnum):
    QUIT = 0
    TOGGLE_PAUSE = 1
    RESET = 2
    KEYPAD = 3


@dataclass(frozen=True)
class InputEvent:
    """One user action.  *keys* is only meaningful for ``KEYPAD`` events."""

    kind: InputKind
    keys: Tuple[bool, ...] = ()


class Renderer(ABC):
    """Displays frames produced by the interpreter."""

    @abstractmethod
    def present(self, mode: Mode, frame: np.ndarray) -> None: ...


class AudioSink(ABC):
    """On/off beep output."""

    @abstractmethod
    def set_audio(self, on: bool) -> None: ...


class InputSource(ABC):
    """Polled source of user input."""

    @abstractmethod
    def poll_input(self) -> Optional[InputEvent]:
        """Return the next pending input event, or ``None``."""
