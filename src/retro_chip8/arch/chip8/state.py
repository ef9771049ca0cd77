# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import Iterator, List

from retro_chip8.common.types import Nibble
from retro_chip8.core.state import CpuState
from retro_chip8.core.errors import StackOverflowError, StackUnderflowError
from retro_chip8.display.framebuffer import Framebuffer

# @intent:constant メモリマップとハードウェア構成の定数です。
MEMORY_SIZE = 0x1000
FONT_START = 0x000
PROGRAM_START = 0x200
STACK_DEPTH = 16
NUM_REGISTERS = 16
NUM_KEYS = 16
FLAG_REGISTER = Nibble(0xF)
FONT_GLYPH_SIZE = 5

# @intent:constant 16進数字0〜Fの組み込みフォント（各5バイト、アドレス0x000から連続配置）。
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
])

# @intent:responsibility V0〜VFの16本の8bit汎用レジスタを保持します。
# @intent:rationale インデックスはNibbleとして検証し、値は8bitに制約します。
class RegisterFile:
    """
    固定長16本の8bitレジスタ。範囲外のインデックスや値はValueErrorとなります。
    """
    def __init__(self):
        self._values = bytearray(NUM_REGISTERS)

    def __getitem__(self, index: int) -> int:
        return self._values[Nibble(index)]

    def __setitem__(self, index: int, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Register value {value} is not an 8-bit value.")
        self._values[Nibble(index)] = value

    def __len__(self) -> int:
        return NUM_REGISTERS

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RegisterFile):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return "RegisterFile(" + " ".join(f"{v:02X}" for v in self._values) + ")"

    def clear(self) -> None:
        self._values[:] = bytes(NUM_REGISTERS)

# @intent:responsibility 16個のキーの押下状態を保持します。
class Keypad:
    def __init__(self):
        self._pressed: List[bool] = [False] * NUM_KEYS

    def is_pressed(self, key: int) -> bool:
        return self._pressed[Nibble(key)]

    def set(self, key: int, pressed: bool) -> None:
        self._pressed[Nibble(key)] = bool(pressed)

    # @intent:responsibility 押されているキーのうち最小の番号を返します。なければNone。
    def first_pressed(self):
        for key in range(NUM_KEYS):
            if self._pressed[key]:
                return key
        return None

    def release_all(self) -> None:
        self._pressed = [False] * NUM_KEYS

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Keypad):
            return self._pressed == other._pressed
        return NotImplemented

    def __repr__(self) -> str:
        return "Keypad(" + "".join(f"{k:X}" for k in range(NUM_KEYS) if self._pressed[k]) + ")"

# @intent:responsibility CHIP-8 CPUの全てのレジスタ、スタック、タイマー、画面、キー状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    spは呼び出しスタックの深さ（0〜16）を表します。
    """
    pc: int = PROGRAM_START
    v: RegisterFile = field(default_factory=RegisterFile)
    i: int = 0x0000 # Index Register
    delay_timer: int = 0x00
    sound_timer: int = 0x00
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    keypad: Keypad = field(default_factory=Keypad)
    framebuffer: Framebuffer = field(default_factory=Framebuffer, compare=False)
    halted: bool = False

    # @intent:accessor フラグレジスタVFへのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value

    # @intent:responsibility 戻りアドレスをスタックに積みます。
    # @intent:post-condition 17段目の積み込みはStackOverflowErrorとなり、状態は変化しません。
    def push(self, address: int) -> None:
        if self.sp >= STACK_DEPTH:
            raise StackOverflowError(depth=STACK_DEPTH)
        self.stack[self.sp] = address
        self.sp += 1

    def pop(self) -> int:
        if self.sp <= 0:
            raise StackUnderflowError()
        self.sp -= 1
        return self.stack[self.sp]

    # @intent:responsibility 外部クロックに同期して2つのタイマーを1ずつ減算します（0で停止）。
    def tick_timers(self) -> None:
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
