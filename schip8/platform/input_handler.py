"""
Input handler for SCHIP8.
Maps keyboard keys to the 16-key hex keypad and to emulator controls.

Keyboard layout
---------------

The left-hand 4x4 block of a QWERTY keyboard stands in for the COSMAC VIP
keypad::

    Keyboard         Keypad
    1 2 3 4          1 2 3 C
    Q W E R    ->    4 5 6 D
    A S D F          7 8 9 E
    Z X C V          A 0 B F

===========  ==================
Key          Action
===========  ==================
Return       Pause / resume
Backspace    Reset
Escape       Quit
===========  ==================

Closing the window is treated like Escape.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import pygame

from schip8.core.types import NUM_KEYS
from schip8.shell.interfaces import InputEvent, InputKind, InputSource

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Keyboard -> keypad mapping
# ---------------------------------------------------------------------------

_KEY_MAP: dict[int, int] = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

_CONTROL_MAP: dict[int, InputKind] = {
    pygame.K_ESCAPE:    InputKind.QUIT,
    pygame.K_RETURN:    InputKind.TOGGLE_PAUSE,
    pygame.K_BACKSPACE: InputKind.RESET,
}


class InputHandler(InputSource):
    """Translates pygame keyboard events into :class:`InputEvent` values.

    The handler keeps its own keypad snapshot, updated from key-down and
    key-up events, so every ``KEYPAD`` event carries the full 16-key state.
    """

    def __init__(self) -> None:
        self._keys: List[bool] = [False] * NUM_KEYS

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def keys(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def poll_input(self) -> Optional[InputEvent]:
        """Take one event off the pygame queue and translate it."""
        event = pygame.event.poll()
        if event.type == pygame.NOEVENT:
            return None
        return self.handle_event(event)

    def handle_event(self, event: pygame.event.Event) -> Optional[InputEvent]:
        """Translate a single pygame event.  Unmapped events yield ``None``."""
        if event.type == pygame.QUIT:
            return InputEvent(InputKind.QUIT)

        if event.type == pygame.KEYDOWN:
            control = _CONTROL_MAP.get(event.key)
            if control is not None:
                return InputEvent(control)
            return self._set_key(event.key, True)

        if event.type == pygame.KEYUP:
            return self._set_key(event.key, False)

        return None

    def clear_all(self) -> None:
        """Release every keypad key."""
        self._keys = [False] * NUM_KEYS

    # ------------------------------------------------------------------
    # Keypad helpers
    # ------------------------------------------------------------------

    def _set_key(self, key: int, down: bool) -> Optional[InputEvent]:
        pad = _KEY_MAP.get(key)
        if pad is None:
            return None
        self._keys[pad] = down
        logger.debug("Keypad %X %s", pad, "down" if down else "up")
        return InputEvent(InputKind.KEYPAD, tuple(self._keys))
