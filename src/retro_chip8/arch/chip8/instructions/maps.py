# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令パターンと命令実装のマッピング定義。

各パターンは4桁の表記で、16進数字は固定値、x/y/n/kはワイルドカードです。
デコードは固定桁の多いパターンから順に照合し、最初に一致したものを採用します。
"""
from typing import Callable, Dict, List, NamedTuple, Tuple

from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from . import alu, control, load
from .base import compile_pattern, specificity

ExecFunc = Callable[[Chip8CpuState, Bus, Operation], None]

# @intent:data_structure 1命令分の定義。operandsはオペランド表示のテンプレートです。
class InstructionEntry(NamedTuple):
    pattern: str
    mnemonic: str
    operands: Tuple[str, ...]
    execute: ExecFunc

# @intent:map 命令定義テーブル（宣言順）。
INSTRUCTION_TABLE: List[InstructionEntry] = [
    # Control
    InstructionEntry("00E0", "CLS", (), control.execute_cls),
    InstructionEntry("00EE", "RET", (), control.execute_ret),
    InstructionEntry("1nnn", "JP", ("{nnn}",), control.execute_jp),
    InstructionEntry("2nnn", "CALL", ("{nnn}",), control.execute_call),
    InstructionEntry("3xkk", "SE", ("{x}", "{kk}"), control.execute_se_imm),
    InstructionEntry("4xkk", "SNE", ("{x}", "{kk}"), control.execute_sne_imm),
    InstructionEntry("5xy0", "SE", ("{x}", "{y}"), control.execute_se_reg),
    InstructionEntry("9xy0", "SNE", ("{x}", "{y}"), control.execute_sne_reg),
    InstructionEntry("Bnnn", "JP", ("V0", "{nnn}"), control.execute_jp_v0),
    InstructionEntry("FFFF", "HALT", (), control.execute_halt),

    # ALU
    InstructionEntry("6xkk", "LD", ("{x}", "{kk}"), alu.execute_ld_imm),
    InstructionEntry("7xkk", "ADD", ("{x}", "{kk}"), alu.execute_add_imm),
    InstructionEntry("8xy0", "LD", ("{x}", "{y}"), alu.execute_ld_reg),
    InstructionEntry("8xy1", "OR", ("{x}", "{y}"), alu.execute_or),
    InstructionEntry("8xy2", "AND", ("{x}", "{y}"), alu.execute_and),
    InstructionEntry("8xy3", "XOR", ("{x}", "{y}"), alu.execute_xor),
    InstructionEntry("8xy4", "ADD", ("{x}", "{y}"), alu.execute_add_reg),
    InstructionEntry("8xy5", "SUB", ("{x}", "{y}"), alu.execute_sub),
    InstructionEntry("8xy6", "SHR", ("{x}",), alu.execute_shr),
    InstructionEntry("8xy7", "SUBN", ("{x}", "{y}"), alu.execute_subn),
    InstructionEntry("8xyE", "SHL", ("{x}",), alu.execute_shl),
    InstructionEntry("Cxkk", "RND", ("{x}", "{kk}"), alu.execute_rnd),

    # Memory / Timer / Input / Display
    InstructionEntry("Annn", "LD", ("I", "{nnn}"), load.execute_ld_i),
    InstructionEntry("Dxyn", "DRW", ("{x}", "{y}", "{n}"), load.execute_drw),
    InstructionEntry("Ex9E", "SKP", ("{x}",), load.execute_skp),
    InstructionEntry("ExA1", "SKNP", ("{x}",), load.execute_sknp),
    InstructionEntry("Fx07", "LD", ("{x}", "DT"), load.execute_ld_vx_dt),
    InstructionEntry("Fx0A", "LD", ("{x}", "K"), load.execute_wait_key),
    InstructionEntry("Fx15", "LD", ("DT", "{x}"), load.execute_ld_dt),
    InstructionEntry("Fx18", "LD", ("ST", "{x}"), load.execute_ld_st),
    InstructionEntry("Fx1E", "ADD", ("I", "{x}"), load.execute_add_i),
    InstructionEntry("Fx29", "LD", ("F", "{x}"), load.execute_ld_font),
    InstructionEntry("Fx33", "LD", ("B", "{x}"), load.execute_ld_bcd),
    InstructionEntry("Fx55", "LD", ("[I]", "{x}"), load.execute_store_regs),
    InstructionEntry("Fx65", "LD", ("{x}", "[I]"), load.execute_load_regs),
]

# @intent:data_structure デコード用にコンパイルされた1エントリ。
class DecodeEntry(NamedTuple):
    mask: int
    value: int
    entry: InstructionEntry

# @intent:map 固定桁の多い順に並べたデコードテーブル。同数の場合は宣言順を保ちます。
DECODE_TABLE: List[DecodeEntry] = [
    DecodeEntry(*compile_pattern(entry.pattern), entry)
    for entry in sorted(INSTRUCTION_TABLE, key=lambda e: specificity(e.pattern), reverse=True)
]

# @intent:map パターン表記から実行関数へのマッピングテーブル。
EXECUTE_MAP: Dict[str, ExecFunc] = {entry.pattern: entry.execute for entry in INSTRUCTION_TABLE}
