# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from typing import Tuple

from retro_chip8.common.types import Nibble
from retro_chip8.transport.bus import Bus

Nibbles = Tuple[Nibble, Nibble, Nibble, Nibble]

# @intent:utility_function バスから16ビットの命令語をビッグエンディアン形式で読み込みます。
def read_word(bus: Bus, addr: int) -> int:
    """Big-endian 16-bit read."""
    return (bus.read(addr) << 8) | bus.read(addr + 1)

# @intent:utility_function 16ビットの命令語を上位から4つのニブル(d1, d2, d3, d4)に分割します。
def split_nibbles(opcode: int) -> Nibbles:
    return (
        Nibble((opcode >> 12) & 0xF),
        Nibble((opcode >> 8) & 0xF),
        Nibble((opcode >> 4) & 0xF),
        Nibble(opcode & 0xF),
    )

# @intent:utility_function 3つのニブルを桁順に連結して12ビットのアドレスを作ります。
def concat_digits(a: int, b: int, c: int) -> int:
    """
    例: (0xF, 0xA, 0x7) -> 0xFA7
    """
    return (Nibble(a) << 8) | (Nibble(b) << 4) | Nibble(c)

# @intent:utility_function "8xy4"のようなパターン表記を(mask, value)の組に変換します。
# @intent:pre-condition 16進数字は固定値、x/y/n/kはワイルドカードとして扱います。
def compile_pattern(pattern: str) -> Tuple[int, int]:
    if len(pattern) != 4:
        raise ValueError(f"Instruction pattern must have 4 digits: {pattern!r}")
    mask = 0
    value = 0
    for digit in pattern:
        mask <<= 4
        value <<= 4
        if digit in "xynk":
            continue
        mask |= 0xF
        value |= int(digit, 16)
    return mask, value

# @intent:utility_function パターン中の固定桁の数（具体性）を返します。
def specificity(pattern: str) -> int:
    return sum(1 for digit in pattern if digit not in "xynk")

def reg(index: int) -> str:
    return f"V{index:X}"

def imm8(value: int) -> str:
    return f"#{value:02X}"

def addr12(value: int) -> str:
    return f"${value:03X}"
