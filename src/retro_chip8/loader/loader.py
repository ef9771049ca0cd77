# retro_chip8/loader/loader.py
"""
プログラムローダーモジュール。
ヘッダを持たない生のバイト列（.ch8）をそのままメモリの0x200以降に配置します。
"""
import warnings
from pathlib import Path
from typing import Union

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import MEMORY_SIZE, PROGRAM_START
from retro_chip8.core.errors import ProgramTooLargeError

class RomLoader:
    """
    CHIP-8のプログラムイメージを読み込み、CPUにロードするローダー。
    """
    # @intent:responsibility ファイルを読み込み、検証してからCPUへロードします。
    # @intent:post-condition 実行開始前に不正なイメージ（空、容量超過）を拒否します。
    def load_rom(self, file_path: Union[str, Path], cpu: Chip8Cpu) -> int:
        """
        ファイルの内容を0x200からロードし、ロードしたバイト数を返します。
        """
        with open(file_path, 'rb') as f:
            data = f.read()
        self.validate(data, str(file_path))
        cpu.load(data)
        return len(data)

    def validate(self, data: bytes, name: str = "<memory>") -> None:
        if not data:
            raise ValueError(f"Program image {name} is empty.")
        capacity = MEMORY_SIZE - PROGRAM_START
        if len(data) > capacity:
            raise ProgramTooLargeError(len(data), capacity)
        if len(data) % 2 != 0:
            warnings.warn(f"Program image {name} has odd length ({len(data)} bytes); the last instruction is incomplete.")
