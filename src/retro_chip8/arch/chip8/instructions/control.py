# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（画面消去、ジャンプ、サブルーチン、条件スキップ、停止）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState

# 実行時点でstate.pcは既に次の命令を指しています。スキップは更に2進めます。

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.framebuffer.clear()

# --- RET (00EE) ---
def execute_ret(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = state.pop()

# --- JP addr (1nnn) ---
def execute_jp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = op.operand_values[0]

# --- CALL addr (2nnn) ---
# @intent:responsibility 次の命令のアドレスを積んでからジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.push(state.pc)
    state.pc = op.operand_values[0]

# --- SE Vx, byte (3xkk) ---
def execute_se_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, kk = op.operand_values
    if state.v[x] == kk:
        state.pc += 2

# --- SNE Vx, byte (4xkk) ---
def execute_sne_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, kk = op.operand_values
    if state.v[x] != kk:
        state.pc += 2

# --- SE Vx, Vy (5xy0) ---
def execute_se_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    if state.v[x] == state.v[y]:
        state.pc += 2

# --- SNE Vx, Vy (9xy0) ---
def execute_sne_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    if state.v[x] != state.v[y]:
        state.pc += 2

# --- JP V0, addr (Bnnn) ---
# @intent:responsibility nnn + V0へジャンプします。
# @intent:post-condition 結果がアドレス空間を超えても折り返さず、次のフェッチでMemoryAccessErrorとなります。
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = op.operand_values[0] + state.v[0]

# --- HALT (FFFF) ---
# @intent:responsibility 停止命令。PCを停止命令自身に戻し、以後のstepを無効化します。
def execute_halt(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc -= 2
    state.halted = True
