# tests/transport/test_bus.py
"""
retro_chip8.transport.busモジュールの単体テスト。
"""
import pytest
from retro_chip8.transport.bus import Bus, Device, RAM
from retro_chip8.core.errors import MemoryAccessError

# @intent:test_suite 共通バスとRAMデバイスの基本的な機能とエラーハンドリングを検証します。

class TestRAM:
    def test_ram_init_valid_size(self):
        ram = RAM(16)
        assert ram.get_size() == 16
        assert all(b == 0 for b in ram._memory)

    def test_ram_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(-1)
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(1.5)

    def test_ram_read_write_within_bounds(self):
        ram = RAM(4)
        ram.write(0, 0x12)
        ram.write(3, 0x78)
        assert ram.read(0) == 0x12
        assert ram.read(3) == 0x78

    # @intent:test_case_oob 境界外アドレスはMemoryAccessError（IndexErrorの一種）となることを検証します。
    def test_ram_read_write_out_of_bounds(self):
        ram = RAM(4)
        with pytest.raises(MemoryAccessError) as excinfo:
            ram.read(4)
        assert excinfo.value.address == 4
        with pytest.raises(IndexError):
            ram.write(-1, 0x00)

    def test_ram_write_invalid_data(self):
        ram = RAM(1)
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            ram.write(0, 0x100)
        with pytest.raises(ValueError, match="Data -1 is not an 8-bit value."):
            ram.write(0, -1)

class TestBus:
    @pytest.fixture
    def bus(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        return bus

    def test_register_and_access_device(self):
        bus = Bus()
        ram1 = RAM(16)
        ram2 = RAM(16)
        bus.register_device(0x0000, 0x000F, ram1)
        bus.register_device(0x0010, 0x001F, ram2)

        bus.write(0x001A, 0xBB)
        assert bus.read(0x001A) == 0xBB
        assert ram2.read(0x0A) == 0xBB

    def test_access_unmapped_address(self, bus):
        with pytest.raises(MemoryAccessError) as excinfo:
            bus.read(0x1000)
        assert excinfo.value.address == 0x1000
        with pytest.raises(MemoryAccessError):
            bus.write(0x1FFF, 0x00)

    def test_register_device_invalid_range(self):
        bus = Bus()
        with pytest.raises(ValueError):
            bus.register_device(0x200, 0x100, RAM(0x100))
        with pytest.raises(ValueError):
            bus.register_device(-1, 0x100, RAM(0x100))

    def test_register_device_size_mismatch(self):
        bus = Bus()
        with pytest.raises(ValueError, match="does not match"):
            bus.register_device(0x000, 0x0FF, RAM(0x200))

    def test_register_non_device(self):
        bus = Bus()
        with pytest.raises(TypeError):
            bus.register_device(0x000, 0x0FF, object())

    def test_load(self, bus):
        bus.load(0x200, b"\x12\x34")
        assert bus.read(0x200) == 0x12
        assert bus.read(0x201) == 0x34

    # @intent:test_case_load_atomic 範囲外を含むロードは何も書き込まないことを検証します。
    def test_load_out_of_bounds_writes_nothing(self, bus):
        with pytest.raises(MemoryAccessError) as excinfo:
            bus.load(0xFFE, b"\x01\x02\x03")
        assert excinfo.value.address == 0x1000
        assert bus.read(0xFFE) == 0x00
        assert bus.read(0xFFF) == 0x00

    def test_check_range(self, bus):
        bus.check_range(0xFFE, 2)
        bus.check_range(0x1000, 0)
        with pytest.raises(MemoryAccessError) as excinfo:
            bus.check_range(0xFFD, 5)
        assert excinfo.value.address == 0x1000

    def test_check_range_across_devices(self):
        bus = Bus()
        bus.register_device(0x000, 0x0FF, RAM(0x100))
        bus.register_device(0x100, 0x1FF, RAM(0x100))
        bus.check_range(0x0F0, 0x20)

class DummyDevice(Device):
    def read(self, address: int) -> int:
        return address & 0xFF

    def write(self, address: int, data: int) -> None:
        pass

def test_custom_device_offset():
    bus = Bus()
    bus.register_device(0x100, 0x1FF, DummyDevice())
    assert bus.read(0x123) == 0x23
