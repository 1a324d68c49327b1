"""
FrameBuffer -- the monochrome pixel canvas for SCHIP8.

The canvas is a ``numpy`` boolean array of shape ``(width, height)`` indexed
as ``pixels[x, y]``.  Column-major indexing matches what
``pygame.surfarray`` expects, so the presentation side can blit a snapshot
without transposing.

Standard dimensions
-------------------

========  =====  ======  ==========================
Mode      width  height  addressed region
========  =====  ======  ==========================
STANDARD  64     32      top-left corner of canvas
SUPER     128    64      entire canvas
========  =====  ======  ==========================

Scroll operations always act on the full canvas regardless of mode.
"""

from __future__ import annotations

import numpy as np

from schip8.core.types import GFX_H, GFX_W


class FrameBuffer:
    """Holds the on/off state of every pixel on the canvas.

    Parameters
    ----------
    width:
        Canvas width in pixels.  Defaults to :data:`GFX_W`.
    height:
        Canvas height in pixels.  Defaults to :data:`GFX_H`.
    """

    def __init__(self, width: int = GFX_W, height: int = GFX_H) -> None:
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        if height <= 0:
            raise ValueError(f"height must be positive, got {height}")

        self.width: int = width
        self.height: int = height
        self.pixels: np.ndarray = np.zeros((width, height), dtype=bool)

    # ------------------------------------------------------------------
    # Pixel helpers
    # ------------------------------------------------------------------

    def read_pixel(self, x: int, y: int) -> bool:
        return bool(self.pixels[x, y])

    def write_pixel(self, x: int, y: int, on: bool) -> None:
        self.pixels[x, y] = on

    def toggle_pixel(self, x: int, y: int) -> bool:
        """XOR a single pixel and return its new state."""
        on = not self.pixels[x, y]
        self.pixels[x, y] = on
        return on

    # ------------------------------------------------------------------
    # Whole-canvas operations
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Turn every pixel off."""
        self.pixels[:, :] = False

    def scroll_down(self, rows: int) -> None:
        """Shift the canvas down by *rows*; vacated rows at the top are unset."""
        if rows <= 0:
            return
        rows = min(rows, self.height)
        self.pixels[:, rows:] = self.pixels[:, : self.height - rows].copy()
        self.pixels[:, :rows] = False

    def scroll_right(self, columns: int) -> None:
        """Shift the canvas right by *columns*; vacated columns are unset."""
        if columns <= 0:
            return
        columns = min(columns, self.width)
        self.pixels[columns:, :] = self.pixels[: self.width - columns, :].copy()
        self.pixels[:columns, :] = False

    def scroll_left(self, columns: int) -> None:
        """Shift the canvas left by *columns*; vacated columns are unset."""
        if columns <= 0:
            return
        columns = min(columns, self.width)
        self.pixels[: self.width - columns, :] = self.pixels[columns:, :].copy()
        self.pixels[self.width - columns :, :] = False

    def snapshot(self) -> np.ndarray:
        """Return an independent copy of the canvas."""
        return self.pixels.copy()

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"FrameBuffer("
            f"width={self.width}, "
            f"height={self.height}, "
            f"lit={int(self.pixels.sum())})"
        )
