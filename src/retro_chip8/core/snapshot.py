# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクルの実行結果（CPU状態と実行した命令）を
記録するデータ構造を定義します。UIとドライバへの情報提供に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState

# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（命令語、パターン、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "8124"
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2"]
    operand_values: List[int] = field(default_factory=list) # デコード済みのオペランド値
    cycle_count: int = 1
    length: int = 2 # 命令のバイト長
    pattern: str = "" # 例: "8xy4"
    address: Optional[int] = None # デコードされたアドレス

    @property
    def opcode(self) -> int:
        return int(self.opcode_hex, 16)

    # @intent:responsibility 表示用のアセンブリ表記を返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "LD V0, #05"

# @intent:responsibility ある一時点におけるCPUの状態と実行した命令を記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令サイクル実行直後の状態を記録したデータ構造。
    stateはCPUが保持する状態オブジェクトそのものを参照します。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
