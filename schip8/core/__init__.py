# SCHIP8 core
"""
Emulation-side code: the interpreter, its canvas, the rate limiters and the
channel protocol.  Nothing in this package imports pygame.
"""

from schip8.core.errors import (
    Chip8Error,
    ChannelClosedError,
    RomLoadError,
    RomTooLargeError,
    UnknownOpcodeError,
)
from schip8.core.interpreter import Interpreter
from schip8.core.types import Mode

__all__ = [
    "Chip8Error",
    "ChannelClosedError",
    "Interpreter",
    "Mode",
    "RomLoadError",
    "RomTooLargeError",
    "UnknownOpcodeError",
]
