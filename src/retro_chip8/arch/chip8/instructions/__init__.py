# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Dict, List, Optional

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.core.errors import IllegalInstructionError, StackOverflowError, StackUnderflowError
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Nibbles, split_nibbles, concat_digits, reg, imm8, addr12
from .maps import DECODE_TABLE, EXECUTE_MAP, InstructionEntry

UNKNOWN_MNEMONIC = "UNKNOWN"

# @intent:responsibility パターン表記に従ってニブルからオペランド値を取り出します（パターン中の出現順）。
def _extract_operands(pattern: str, nibbles: Nibbles) -> List[int]:
    if pattern[1:] == "nnn":
        return [concat_digits(nibbles[1], nibbles[2], nibbles[3])]
    values: List[int] = []
    if pattern[1] == "x":
        values.append(int(nibbles[1]))
    if pattern[2] == "y":
        values.append(int(nibbles[2]))
    if pattern[2:] == "kk":
        values.append((nibbles[2] << 4) | nibbles[3])
    elif pattern[3] == "n":
        values.append(int(nibbles[3]))
    return values

def _format_operands(entry: InstructionEntry, nibbles: Nibbles) -> List[str]:
    fields: Dict[str, str] = {
        "x": reg(nibbles[1]),
        "y": reg(nibbles[2]),
        "n": str(int(nibbles[3])),
        "kk": imm8((nibbles[2] << 4) | nibbles[3]),
        "nnn": addr12(concat_digits(nibbles[1], nibbles[2], nibbles[3])),
    }
    return [template.format(**fields) for template in entry.operands]

# @intent:responsibility パターンテーブルから命令語に一致する定義を探します。
def match_instruction(opcode: int) -> Optional[InstructionEntry]:
    for decode_entry in DECODE_TABLE:
        if opcode & decode_entry.mask == decode_entry.value:
            return decode_entry.entry
    return None

# @intent:responsibility CHIP-8の命令語をデコードします。
def decode_opcode(opcode: int, pc: Optional[int] = None) -> Operation:
    """
    16ビットの命令語をデコードし、Operationオブジェクトを返します。
    どのパターンにも一致しない場合はUNKNOWNのOperationを返し、実行時にエラーとなります。
    """
    if not 0 <= opcode <= 0xFFFF:
        raise ValueError(f"Opcode {opcode} is not a 16-bit value.")
    nibbles = split_nibbles(opcode)
    entry = match_instruction(opcode)
    if entry is None:
        return Operation(opcode_hex=f"{opcode:04X}", mnemonic=UNKNOWN_MNEMONIC,
                         operands=[f"#{opcode:04X}"], address=pc)
    return Operation(
        opcode_hex=f"{opcode:04X}",
        mnemonic=entry.mnemonic,
        operands=_format_operands(entry, nibbles),
        operand_values=_extract_operands(entry.pattern, nibbles),
        pattern=entry.pattern,
        address=pc,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:pre-condition state.pcは既に次の命令を指している必要があります。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus) -> None:
    """
    デコードされた命令を実行し、CPUの状態を変更します。
    未定義命令はIllegalInstructionErrorとなります。
    """
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor is None:
        raise IllegalInstructionError(operation.opcode, operation.address)
    try:
        executor(state, bus, operation)
    except StackOverflowError as e:
        if e.address is not None:
            raise
        raise StackOverflowError(operation.address, e.depth) from None
    except StackUnderflowError as e:
        if e.address is not None:
            raise
        raise StackUnderflowError(operation.address) from None
