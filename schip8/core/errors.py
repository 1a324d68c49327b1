"""
Fault types raised by the SCHIP8 core.

None of these are recovered in place.  The owning loop (or ``main``) turns
them into a controlled shutdown with a diagnostic message.
"""

from __future__ import annotations


class Chip8Error(Exception):
    """Base class for every SCHIP8 fault."""


class UnknownOpcodeError(Chip8Error):
    """The fetched instruction word matches no known opcode."""

    def __init__(self, opcode: int, address: int) -> None:
        self.opcode: int = opcode
        self.address: int = address
        super().__init__(f"Unknown opcode ${opcode:04X} at ${address:03X}")


class RomLoadError(Chip8Error):
    """The ROM could not be read."""


class RomTooLargeError(RomLoadError):
    """The ROM does not fit between the program start and the end of RAM."""

    def __init__(self, size: int, limit: int) -> None:
        self.size: int = size
        self.limit: int = limit
        super().__init__(
            f"ROM is {size} bytes; at most {limit} bytes fit into memory"
        )


class ChannelClosedError(Chip8Error):
    """The other end of a message channel has gone away."""
