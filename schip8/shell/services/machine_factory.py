"""
Interpreter creation factory for SCHIP8.

Typical usage::

    interpreter = MachineFactory.create("roms/INVADERS")
"""

from __future__ import annotations

import logging
import os
import random
from typing import Optional

from schip8.core.interpreter import Interpreter
from schip8.shell.services.rom_bytes_service import RomBytesService

logger = logging.getLogger(__name__)


class MachineFactory:
    """Create a ready-to-run interpreter from a ROM file."""

    @staticmethod
    def create(rom_path: str, rng: Optional[random.Random] = None) -> Interpreter:
        """Build an interpreter with the ROM at *rom_path* loaded.

        Raises:
            RomLoadError: If the ROM is missing, unreadable or too large.
        """
        rom_bytes = RomBytesService.read(rom_path)
        interpreter = Interpreter(rng=rng)
        interpreter.load_rom(rom_bytes)
        logger.info("Created %r from %s", interpreter, os.path.basename(rom_path))
        return interpreter
