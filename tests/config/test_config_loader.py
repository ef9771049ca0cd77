# tests/config/test_config_loader.py
"""
retro_chip8.configパッケージの単体テスト。
"""
import pytest

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import MachineConfig, DEFAULT_KEY_MAP
from retro_chip8.config.builder import MachineBuilder
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.core.errors import MemoryAccessError

class TestConfigLoader:
    def test_defaults(self):
        config = ConfigLoader().load_from_string("")
        assert config == MachineConfig()
        assert config.cycles_per_frame == 10
        assert config.frame_rate == 60
        assert config.key_map == DEFAULT_KEY_MAP

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text(
            "cycles_per_frame: 20\n"
            "frame_rate: 30\n"
            "display:\n"
            "  pixel_size: 10\n"
            "  foreground: '#33FF33'\n"
            "audio:\n"
            "  frequency: 880\n"
            "  volume: 0.5\n"
        )
        config = ConfigLoader().load_from_file(str(path))
        assert config.cycles_per_frame == 20
        assert config.frame_rate == 30
        assert config.display.pixel_size == 10
        assert config.display.foreground == "#33FF33"
        assert config.display.background == "#000000"
        assert config.audio.frequency == 880.0
        assert config.audio.volume == 0.5

    # @intent:test_case_key_map キー名は大文字化され、16進文字列のキー番号を受け付けることを検証します。
    def test_key_map(self):
        config = ConfigLoader().load_from_string(
            "key_map:\n"
            "  up: 0x5\n"
            "  '1': 1\n"
            "  space: '0xF'\n"
        )
        assert config.key_map == {"UP": 5, "1": 1, "SPACE": 0xF}

    def test_hex_string_integer(self):
        config = ConfigLoader().load_from_string("cycles_per_frame: '0x10'\n")
        assert config.cycles_per_frame == 16

    @pytest.mark.parametrize("text", [
        "cycles_per_frame: -1\n",
        "frame_rate: 0\n",
        "cycles_per_frame: true\n",
        "cycles_per_frame: abc\n",
        "display:\n  pixel_size: 0\n",
        "audio:\n  volume: 1.5\n",
        "key_map:\n  Q: 16\n",
        "- 1\n- 2\n",
    ])
    def test_invalid_values(self, text):
        with pytest.raises(ValueError):
            ConfigLoader().load_from_string(text)

    def test_unknown_key_warns(self):
        with pytest.warns(UserWarning, match="Unknown machine config key 'turbo'"):
            ConfigLoader().load_from_string("turbo: true\n")

class TestMachineBuilder:
    def test_build_machine(self):
        cpu, bus = MachineBuilder().build_machine()
        assert isinstance(cpu, Chip8Cpu)
        assert bus.read(0xFFF) == 0x00
        with pytest.raises(MemoryAccessError):
            bus.read(0x1000)
        assert bus.read(0x000) == 0xF0 # フォント「0」の先頭行
