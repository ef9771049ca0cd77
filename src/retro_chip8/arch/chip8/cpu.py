# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
from typing import Optional

from retro_chip8.common.types import Nibble
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import ProgramTooLargeError
from retro_chip8.core.snapshot import Operation, Metadata, Snapshot
from retro_chip8.display.framebuffer import FramebufferSnapshot
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState, FONT, FONT_START, MEMORY_SIZE, PROGRAM_START
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction
from retro_chip8.arch.chip8.instructions.base import read_word

HALT_OPERATION = Operation(opcode_hex="FFFF", mnemonic="HALT", pattern="FFFF", cycle_count=0)

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシンのCPU。
    メモリはバス経由でアクセスし、レジスタ・スタック・タイマー・画面・キー状態はChip8CpuStateが保持します。
    1つのインスタンスは同時に1つの呼び出し元からのみ操作される前提です。
    """
    # @intent:pre-condition バスは0x000〜0xFFFにメモリがマップされている必要があります。
    def __init__(self, bus: Bus):
        super().__init__(bus)
        self._install_font()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility CPUの状態を初期化し、フォントを再配置します。ロード済みのプログラムは保持されます。
    def reset(self) -> None:
        super().reset()
        self._install_font()

    def _install_font(self) -> None:
        self._bus.load(FONT_START, FONT)

    # @intent:responsibility プログラムイメージを0x200から配置します。
    # @intent:pre-condition 0x200 + len(data) <= 4096。超える場合は何も書き込まずにProgramTooLargeErrorとします。
    def load(self, data: bytes) -> None:
        capacity = MEMORY_SIZE - PROGRAM_START
        if len(data) > capacity:
            raise ProgramTooLargeError(len(data), capacity)
        self._bus.load(PROGRAM_START, data)

    # @intent:responsibility 入力側からキーの押下状態を更新します。
    def set_key(self, index: int, pressed: bool) -> None:
        self._state.keypad.set(Nibble(index), pressed)

    # @intent:responsibility 入力側がフォーカスを失ったときなどに、全てのキーを離された状態にします。
    def release_keys(self) -> None:
        self._state.keypad.release_all()

    # @intent:responsibility 外部クロック（通常60Hz）に合わせてタイマーを1回進めます。
    def tick(self) -> None:
        self._state.tick_timers()

    @property
    def framebuffer(self) -> FramebufferSnapshot:
        return self._state.framebuffer.snapshot()

    @property
    def sound_timer(self) -> int:
        return self._state.sound_timer

    @property
    def sound_active(self) -> bool:
        return self._state.sound_timer > 0

    @property
    def halted(self) -> bool:
        return self._state.halted

    def _fetch(self) -> int:
        return read_word(self._bus, self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus)

    # @intent:responsibility 停止中はフェッチを行わず、PCを進めずにHALTのスナップショットを返します。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        if not self._state.halted:
            return None
        return Snapshot(
            state=self._state,
            operation=HALT_OPERATION,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=HALT_OPERATION.text()),
        )
