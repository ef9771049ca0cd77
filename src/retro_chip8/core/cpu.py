# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Optional

from retro_chip8.transport.bus import Bus
from retro_chip8.core.errors import Chip8Error, MemoryAccessError
from retro_chip8.core.snapshot import Snapshot, Operation, Metadata
from retro_chip8.core.state import CpuState

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        """
        現在のCPUの状態（レジスタ値など）を返します。
        """
        return self._state

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility メモリから次の命令語をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCから次の命令語をフェッチし、その値を返します。PCは変更しません。
        """
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        """
        与えられた命令語を解析し、Operationオブジェクトとして返します。
        """
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        """
        デコードされた命令を実行し、CPUの状態を更新します。
        """
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:flow HALT判定→フェッチ→デコード→PC更新→実行→Snapshot生成 の順序で処理を行います。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUの状態を含むSnapshotオブジェクトを返します。
        範囲外のメモリアクセスは、命令のアドレスと命令語を付加したMemoryAccessErrorとして送出されます。
        例外が発生した場合、PCは失敗した命令のアドレスに戻ります。
        """
        initial_pc = self._state.pc

        halt_snapshot = self._handle_halt(initial_pc)
        if halt_snapshot:
            return halt_snapshot

        opcode: Optional[int] = None
        try:
            opcode = self._fetch()
            operation = self._decode(opcode)
            self._update_pc(operation)
            self._execute(operation)
        except Chip8Error as e:
            self._state.pc = initial_pc
            if not isinstance(e, MemoryAccessError) or e.pc is not None:
                raise
            raise MemoryAccessError(e.address, pc=initial_pc, opcode=opcode) from e

        return self._create_snapshot(operation)

    # @intent:return HALT中であればその状態のSnapshot、そうでなければNone。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        return None

    # @intent:responsibility 命令実行前にPCを命令長分進めます。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    def _create_snapshot(self, operation: Operation) -> Snapshot:
        self._cycle_count += operation.cycle_count

        return Snapshot(
            state=self.get_state(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=operation.text())
        )
