# tests/loader/test_rom_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
"""
import pytest

from retro_chip8.config.builder import MachineBuilder
from retro_chip8.core.errors import ProgramTooLargeError
from retro_chip8.loader.loader import RomLoader

@pytest.fixture
def machine():
    return MachineBuilder().build_machine()

class TestRomLoader:
    def test_load_rom(self, tmp_path, machine):
        cpu, bus = machine
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x60\x05\x12\x00")
        assert RomLoader().load_rom(rom, cpu) == 4
        assert [bus.read(a) for a in range(0x200, 0x204)] == [0x60, 0x05, 0x12, 0x00]

    def test_load_rom_str_path(self, tmp_path, machine):
        cpu, bus = machine
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x00\xE0")
        RomLoader().load_rom(str(rom), cpu)
        assert bus.read(0x201) == 0xE0

    def test_missing_file(self, tmp_path, machine):
        cpu, _ = machine
        with pytest.raises(FileNotFoundError):
            RomLoader().load_rom(tmp_path / "missing.ch8", cpu)

    def test_empty_file(self, tmp_path, machine):
        cpu, _ = machine
        rom = tmp_path / "empty.ch8"
        rom.write_bytes(b"")
        with pytest.raises(ValueError, match="empty"):
            RomLoader().load_rom(rom, cpu)

    # @intent:test_case_too_large 容量を超えるイメージはメモリに書き込まれずに拒否されることを検証します。
    def test_too_large(self, tmp_path, machine):
        cpu, bus = machine
        rom = tmp_path / "big.ch8"
        rom.write_bytes(b"\x11" * 0xE01)
        with pytest.raises(ProgramTooLargeError):
            RomLoader().load_rom(rom, cpu)
        assert bus.read(0x200) == 0x00

    def test_odd_length_warns(self, tmp_path, machine):
        cpu, bus = machine
        rom = tmp_path / "odd.ch8"
        rom.write_bytes(b"\x60\x05\x12")
        with pytest.warns(UserWarning, match="odd length"):
            RomLoader().load_rom(rom, cpu)
        assert bus.read(0x202) == 0x12
