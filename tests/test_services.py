"""Tests for ROM loading and interpreter creation."""

from __future__ import annotations

import pytest

from schip8.core.errors import RomLoadError, RomTooLargeError
from schip8.core.types import MAX_ROM_SIZE, PROGRAM_START
from schip8.shell.services.machine_factory import MachineFactory
from schip8.shell.services.rom_bytes_service import RomBytesService


class TestRomBytesService:

    def test_reads_whole_file(self, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x00\xE0\x12\x00")
        assert RomBytesService.read(str(rom)) == b"\x00\xE0\x12\x00"

    def test_missing_file(self, tmp_path):
        with pytest.raises(RomLoadError, match="not found"):
            RomBytesService.read(str(tmp_path / "missing.ch8"))

    def test_directory_is_not_a_rom(self, tmp_path):
        with pytest.raises(RomLoadError):
            RomBytesService.read(str(tmp_path))

    def test_oversized_file(self, tmp_path):
        rom = tmp_path / "big.ch8"
        rom.write_bytes(bytes(MAX_ROM_SIZE + 1))
        with pytest.raises(RomTooLargeError):
            RomBytesService.read(str(rom))


class TestMachineFactory:

    def test_create_loads_rom(self, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x6A\x42")
        interp = MachineFactory.create(str(rom))
        assert interp.rom == b"\x6A\x42"
        assert interp.fetch() == 0x6A42
        assert interp.pc == PROGRAM_START

    def test_create_propagates_load_errors(self, tmp_path):
        with pytest.raises(RomLoadError):
            MachineFactory.create(str(tmp_path / "missing.ch8"))
