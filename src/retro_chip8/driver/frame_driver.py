# retro_chip8/driver/frame_driver.py
"""
フレームドライバモジュール。

外部の一定周期（通常60Hz）で呼び出され、1フレームにつきタイマーを1回進め、
設定された数の命令を実行する責務を負います。描画と音声は呼び出し側が行います。
"""
from typing import Optional

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.core.snapshot import Snapshot

MAX_CYCLES_PER_FRAME = 1000

# @intent:responsibility CPUのステップ実行とタイマー更新をフレーム単位で駆動します。
class FrameDriver:
    """
    1フレーム = タイマー1tick + cycles_per_frame回のstep。
    CPUで発生した例外はそのまま呼び出し元に伝播します。
    """
    # @intent:pre-condition cycles_per_frameは0以上。MAX_CYCLES_PER_FRAMEを超える値はMAX_CYCLES_PER_FRAMEに丸められます。
    def __init__(self, cpu: Chip8Cpu, cycles_per_frame: int = 10):
        if cycles_per_frame < 0:
            raise ValueError("cycles_per_frame must not be negative.")
        self._cpu = cpu
        self._cycles_per_frame = min(cycles_per_frame, MAX_CYCLES_PER_FRAME)
        self._frame_count = 0
        self._halt_reported = False

    @property
    def cycles_per_frame(self) -> int:
        return self._cycles_per_frame

    @property
    def frame_count(self) -> int:
        return self._frame_count

    # @intent:responsibility 1フレーム分の処理を行い、最後に実行した命令のSnapshotを返します。
    def run_frame(self) -> Optional[Snapshot]:
        self._cpu.tick()
        last_snapshot: Optional[Snapshot] = None
        for _ in range(self._cycles_per_frame):
            if self._cpu.halted:
                if not self._halt_reported:
                    print(f"Program halted at PC: {self._cpu.get_state().pc:#05x}")
                    self._halt_reported = True
                break
            last_snapshot = self._cpu.step()
        self._frame_count += 1
        return last_snapshot

    def speed_up(self) -> int:
        self._cycles_per_frame = min(self._cycles_per_frame + 1, MAX_CYCLES_PER_FRAME)
        return self._cycles_per_frame

    def slow_down(self) -> int:
        if self._cycles_per_frame > 0:
            self._cycles_per_frame -= 1
        return self._cycles_per_frame

    def reset(self) -> None:
        self._cpu.reset()
        self._frame_count = 0
        self._halt_reported = False
