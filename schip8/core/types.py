"""
Core enumerations and build-time constants for SCHIP8.

Memory map (4096 bytes)::

    0xFFF +---------------------+
          |                     |
          |  Program + data     |
          |                     |
    0x200 +---------------------+  PROGRAM_START
          |  (unused)           |
    0x0F0 +---------------------+
          |  High-res font      |  8x10 glyphs, 16 x 10 bytes
    0x050 +---------------------+  HIRES_FONT_START
          |  Low-res font       |  4x5 glyphs, 16 x 5 bytes
    0x000 +---------------------+  LORES_FONT_START

The canvas is always GFX_W x GFX_H.  Standard mode only addresses the
top-left SMALL_GFX_W x SMALL_GFX_H sub-rectangle.
"""

from enum import IntEnum


class Mode(IntEnum):
    STANDARD = 0
    SUPER = 1

    @staticmethod
    def width(mode):
        return GFX_W if mode == Mode.SUPER else SMALL_GFX_W

    @staticmethod
    def height(mode):
        return GFX_H if mode == Mode.SUPER else SMALL_GFX_H


# Memory
RAM_SIZE: int = 4096
PROGRAM_START: int = 0x200
MAX_ROM_SIZE: int = RAM_SIZE - PROGRAM_START
ADDRESS_MASK: int = 0x0FFF

# Register file
NUM_REGISTERS: int = 16
FLAG_REGISTER: int = 0xF
STACK_SIZE: int = 16
NUM_RPL_FLAGS: int = 8
NUM_KEYS: int = 16

# Fonts
LORES_GLYPH_BYTES: int = 5
HIRES_GLYPH_BYTES: int = 10
LORES_FONT_START: int = 0x000
HIRES_FONT_START: int = LORES_FONT_START + 16 * LORES_GLYPH_BYTES

# Display
GFX_W: int = 128
GFX_H: int = 64
SMALL_GFX_W: int = 64
SMALL_GFX_H: int = 32

# Default logical rates (Hz)
CPU_HZ: int = 500
TIMER_HZ: int = 60
REFRESH_HZ: int = 120

# Sleep between loop iterations (seconds)
IDLE_SLEEP: float = 0.001
