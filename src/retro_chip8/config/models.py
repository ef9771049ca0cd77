from dataclasses import dataclass, field
from typing import Dict

# @intent:constant 一般的なキー配置（1234/QWER/ASDF/ZXCV）からキー番号への対応。
DEFAULT_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    pixel_size: int = 20
    foreground: str = "#FFFFFF"
    background: str = "#000000"

@dataclass
class AudioConfig:
    frequency: float = 440.0
    volume: float = 0.25
    sample_rate: int = 44100

@dataclass
class MachineConfig:
    cycles_per_frame: int = 10 # 60fps x 10 = 600命令/秒
    frame_rate: int = 60
    display: DisplayConfig = field(default_factory=DisplayConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    key_map: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))
