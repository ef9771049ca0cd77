import warnings
import yaml
from typing import Dict, Any
from .models import MachineConfig, DisplayConfig, AudioConfig, DEFAULT_KEY_MAP

_KNOWN_KEYS = {"cycles_per_frame", "frame_rate", "display", "audio", "key_map"}

# @intent:responsibility YAML形式のマシン設定ファイルを読み込み、MachineConfigに変換します。
class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse_config(data or {})

    def load_from_string(self, text: str) -> MachineConfig:
        return self.parse_config(yaml.safe_load(text) or {})

    def parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Machine config must be a mapping, got {type(data).__name__}")

        for key in data:
            if key not in _KNOWN_KEYS:
                warnings.warn(f"Unknown machine config key '{key}' ignored")

        cycles = self._parse_int(data.get("cycles_per_frame", 10))
        if cycles < 0:
            raise ValueError(f"cycles_per_frame must not be negative: {cycles}")
        frame_rate = self._parse_int(data.get("frame_rate", 60))
        if frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive: {frame_rate}")

        display_data = data.get("display", {}) or {}
        display = DisplayConfig(
            pixel_size=self._parse_int(display_data.get("pixel_size", 20)),
            foreground=str(display_data.get("foreground", "#FFFFFF")),
            background=str(display_data.get("background", "#000000")),
        )
        if display.pixel_size <= 0:
            raise ValueError(f"pixel_size must be positive: {display.pixel_size}")

        audio_data = data.get("audio", {}) or {}
        audio = AudioConfig(
            frequency=float(audio_data.get("frequency", 440.0)),
            volume=float(audio_data.get("volume", 0.25)),
            sample_rate=self._parse_int(audio_data.get("sample_rate", 44100)),
        )
        if not 0.0 <= audio.volume <= 1.0:
            raise ValueError(f"volume must be within 0.0-1.0: {audio.volume}")

        key_map = dict(DEFAULT_KEY_MAP)
        if "key_map" in data:
            key_map = {}
            for name, index in (data.get("key_map") or {}).items():
                value = self._parse_int(index)
                if not 0 <= value <= 0xF:
                    raise ValueError(f"Key index for '{name}' out of range 0x0-0xF: {value}")
                key_map[str(name).upper()] = value

        return MachineConfig(
            cycles_per_frame=cycles,
            frame_rate=frame_rate,
            display=display,
            audio=audio,
            key_map=key_map,
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
