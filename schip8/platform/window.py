"""
Display window for SCHIP8.
Uses pygame to show the frames produced by the emulation thread.

The window is sized for the full 128x64 canvas times ``scale``.  Standard
mode frames (64x32) are stretched to the same window, so sprites keep their
on-screen size when a ROM switches modes.

Typical usage::

    window = Window(scale=8)
    window.present(Mode.SUPER, frame)
    window.shutdown()
"""

from __future__ import annotations

import logging
import time

import numpy as np
import pygame

from schip8.core.types import GFX_H, GFX_W, Mode
from schip8.shell.frame_renderer import FrameRenderer
from schip8.shell.interfaces import Renderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE: str = "SCHIP8"

# Minimum / maximum allowed display scale factors.
_MIN_SCALE: int = 1
_MAX_SCALE: int = 16


class Window(Renderer):
    """Pygame window that presents interpreter frames.

    Parameters
    ----------
    scale:
        Integer scale factor applied to the 128x64 canvas.
    title:
        Base window caption.
    """

    def __init__(self, scale: int = 8, *, title: str = _WINDOW_TITLE) -> None:
        self._scale: int = max(_MIN_SCALE, min(_MAX_SCALE, scale))
        self._title: str = title

        if not pygame.get_init():
            pygame.init()

        self._display_width: int = GFX_W * self._scale
        self._display_height: int = GFX_H * self._scale
        self._screen: pygame.Surface = pygame.display.set_mode(
            (self._display_width, self._display_height),
        )
        pygame.display.set_caption(self._title)

        self._frame_renderer: FrameRenderer = FrameRenderer()

        # ---- performance counters ----------------------------------------
        self._frame_count: int = 0
        self._fps_update_time: float = time.monotonic()
        self._fps_display: float = 0.0

        logger.info(
            "Window: %dx%d canvas, %dx%d display (scale=%d)",
            GFX_W,
            GFX_H,
            self._display_width,
            self._display_height,
            self._scale,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def fps(self) -> float:
        """The measured redraws per second (updated once per second)."""
        return self._fps_display

    # ------------------------------------------------------------------
    # Renderer
    # ------------------------------------------------------------------

    def present(self, mode: Mode, frame: np.ndarray) -> None:
        """Draw *frame* scaled to fill the window and flip the display."""
        surface = self._frame_renderer.render(mode, frame)
        scaled = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(scaled, (0, 0))
        pygame.display.flip()
        self._update_fps()

    # ------------------------------------------------------------------
    # FPS tracking
    # ------------------------------------------------------------------

    def _update_fps(self) -> None:
        """Update the FPS shown in the title roughly once per second."""
        self._frame_count += 1
        now = time.monotonic()
        elapsed = now - self._fps_update_time
        if elapsed >= 1.0:
            self._fps_display = self._frame_count / elapsed
            self._frame_count = 0
            self._fps_update_time = now
            pygame.display.set_caption(
                f"{self._title}  [{self._fps_display:.1f} fps]"
            )

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def shutdown(self) -> None:
        logger.info("Closing window")
        pygame.display.quit()
