# retro_chip8/core/errors.py
"""
Core Layer (例外定義)

仮想マシンのコア内部で発生する致命的な状態を表す例外を定義します。
いずれも再試行されず、呼び出し元（ドライバやUI）が停止するか報告するかを判断します。
"""
from typing import Optional

# @intent:responsibility コア内部で発生する全ての例外の基底クラスです。
class Chip8Error(Exception):
    """仮想マシン実行中のエラーの基底クラス。"""


# @intent:responsibility どのパターンにも一致しない命令語の実行を表します。
class IllegalInstructionError(Chip8Error, ValueError):
    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        self.address = address
        where = f" at {address:#05x}" if address is not None else ""
        super().__init__(f"Illegal instruction {opcode:04X}{where}.")


# @intent:responsibility 16段を超えるサブルーチン呼び出しを表します。
class StackOverflowError(Chip8Error, OverflowError):
    def __init__(self, address: Optional[int] = None, depth: int = 16):
        self.address = address
        self.depth = depth
        where = f" at {address:#05x}" if address is not None else ""
        super().__init__(f"Stack overflow{where}: call depth exceeds {depth}.")


# @intent:responsibility 空のスタックからの復帰を表します。
class StackUnderflowError(Chip8Error, IndexError):
    def __init__(self, address: Optional[int] = None):
        self.address = address
        where = f" at {address:#05x}" if address is not None else ""
        super().__init__(f"Stack underflow{where}: return with empty stack.")


# @intent:responsibility アドレス空間外へのメモリアクセスを表します。
# @intent:pre-condition `address`は問題となった実効アドレス。`pc`/`opcode`は命令が特定できた場合のみ設定されます。
class MemoryAccessError(Chip8Error, IndexError):
    def __init__(self, address: int, pc: Optional[int] = None, opcode: Optional[int] = None):
        self.address = address
        self.pc = pc
        self.opcode = opcode
        message = f"Memory access out of bounds at address {address:#06x}"
        if pc is not None:
            message += f" (instruction at {pc:#05x}"
            if opcode is not None:
                message += f": {opcode:04X}"
            message += ")"
        super().__init__(message + ".")


# @intent:responsibility 0x200以降の空き領域に収まらないプログラムイメージを表します。
class ProgramTooLargeError(Chip8Error, ValueError):
    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"Program image of {size} bytes exceeds available space of {capacity} bytes.")
