"""
Frame renderer for SCHIP8.
Converts a boolean canvas snapshot into an RGB pygame Surface.

Only the region addressed by the current mode is rendered: the top-left
64x32 corner in standard mode, the full 128x64 canvas in super mode.  The
window scales whichever surface it receives to fill the display, so a
standard-mode frame appears at twice the pixel size of a super-mode one.

The look-up from pixel state to colour is a two-entry numpy table indexed
by the boolean array, so the whole frame converts in one vectorised step.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

import numpy as np
import pygame

from schip8.core.types import Mode

logger = logging.getLogger(__name__)


# Colours (0xRRGGBB)
BACKGROUND: int = 0x1C2841
FOREGROUND: int = 0xFFFFFF


def _rgb(colour: int) -> Tuple[int, int, int]:
    return (colour >> 16) & 0xFF, (colour >> 8) & 0xFF, colour & 0xFF


class FrameRenderer:
    """Turn interpreter frames into pygame surfaces.

    Parameters
    ----------
    background, foreground:
        ``0xRRGGBB`` colours for unset and set pixels.
    """

    def __init__(self, background: int = BACKGROUND, foreground: int = FOREGROUND) -> None:
        self._lut: np.ndarray = np.zeros((2, 3), dtype=np.uint8)
        self.set_colours(background, foreground)

        # One reusable surface per mode.
        self._surfaces: Dict[Mode, pygame.Surface] = {
            mode: pygame.Surface((Mode.width(mode), Mode.height(mode)))
            for mode in Mode
        }

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def set_colours(self, background: int, foreground: int) -> None:
        """Replace the two display colours."""
        self._lut[0] = _rgb(background)
        self._lut[1] = _rgb(foreground)

    def to_rgb(self, mode: Mode, frame: np.ndarray) -> np.ndarray:
        """Return a ``(width, height, 3)`` uint8 array for the visible region."""
        visible = frame[: Mode.width(mode), : Mode.height(mode)]
        return self._lut[visible.astype(np.uint8)]

    def render(self, mode: Mode, frame: np.ndarray) -> pygame.Surface:
        """Render *frame* and return the surface for *mode*.

        The same :class:`pygame.Surface` is reused on every call for a
        given mode.
        """
        surface = self._surfaces[mode]
        pygame.surfarray.blit_array(surface, self.to_rgb(mode, frame))
        return surface
