"""
ROM loading service for SCHIP8.

CHIP-8 ROMs carry no header: the file is a raw program image that is
copied verbatim to RAM at ``PROGRAM_START``.  This service reads the file
and checks that it fits before any emulation starts.
"""

from __future__ import annotations

import logging
import os

from schip8.core.errors import RomLoadError, RomTooLargeError
from schip8.core.types import MAX_ROM_SIZE

logger = logging.getLogger(__name__)


class RomBytesService:
    """Read and validate ROM images from disk."""

    @staticmethod
    def read(path: str) -> bytes:
        """Return the full contents of the ROM at *path*.

        Raises:
            RomLoadError: If the file is missing or cannot be read.
            RomTooLargeError: If the file exceeds :data:`MAX_ROM_SIZE`.
        """
        if not os.path.isfile(path):
            raise RomLoadError(f"ROM file not found: {path}")
        try:
            with open(path, "rb") as fh:
                data = fh.read()
        except OSError as exc:
            raise RomLoadError(f"Cannot read ROM {path}: {exc}") from exc

        RomBytesService.check_size(data)
        logger.debug("Read %d bytes from %s", len(data), path)
        return data

    @staticmethod
    def check_size(rom_bytes: bytes) -> None:
        """Raise :class:`RomTooLargeError` if *rom_bytes* cannot fit in RAM."""
        if len(rom_bytes) > MAX_ROM_SIZE:
            raise RomTooLargeError(len(rom_bytes), MAX_ROM_SIZE)
