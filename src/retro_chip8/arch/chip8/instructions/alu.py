# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFにフラグを書き込む命令は、結果レジスタへの書き込みを先に行い、フラグを最後に書き込みます。
これにより、Vx = VF の場合でもフラグの値が残ります。
"""
import random

from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState

# --- LD Vx, byte (6xkk) ---
def execute_ld_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, kk = op.operand_values
    state.v[x] = kk

# --- ADD Vx, byte (7xkk) ---
# @intent:responsibility 8bitで折り返す加算。フラグは変化しません。
def execute_add_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, kk = op.operand_values
    state.v[x] = (state.v[x] + kk) & 0xFF

# --- LD Vx, Vy (8xy0) ---
def execute_ld_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] = state.v[y]

# --- OR / AND / XOR (8xy1, 8xy2, 8xy3) ---
def execute_or(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] = state.v[x] | state.v[y]

def execute_and(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] = state.v[x] & state.v[y]

def execute_xor(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] = state.v[x] ^ state.v[y]

# --- ADD Vx, Vy (8xy4) ---
# @intent:responsibility Vx = Vx + Vy。結果が255を超えた場合VF = 1、それ以外は0。
def execute_add_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    res = state.v[x] + state.v[y]
    state.v[x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0

# --- SUB Vx, Vy (8xy5) ---
# @intent:responsibility Vx = Vx - Vy。VF = NOT borrow（実行前に Vx >= Vy なら1）。
def execute_sub(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    v1, v2 = state.v[x], state.v[y]
    state.v[x] = (v1 - v2) & 0xFF
    state.vf = 1 if v1 >= v2 else 0

# --- SHR Vx (8xy6) ---
# @intent:responsibility Vxを右に1ビットシフトし、押し出されたビット0をVFに設定します。Vyは参照しません。
def execute_shr(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    shifted_bit = state.v[x] & 0x01
    state.v[x] = state.v[x] >> 1
    state.vf = shifted_bit

# --- SUBN Vx, Vy (8xy7) ---
# @intent:responsibility Vx = Vy - Vx。VF = NOT borrow（実行前に Vy >= Vx なら1）。
def execute_subn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y = op.operand_values
    v1, v2 = state.v[x], state.v[y]
    state.v[x] = (v2 - v1) & 0xFF
    state.vf = 1 if v2 >= v1 else 0

# --- SHL Vx (8xyE) ---
# @intent:responsibility Vxを左に1ビットシフトし、押し出されたビット7をVFに設定します。
def execute_shl(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    shifted_bit = (state.v[x] >> 7) & 0x01
    state.v[x] = (state.v[x] << 1) & 0xFF
    state.vf = shifted_bit

# --- RND Vx, byte (Cxkk) ---
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, kk = op.operand_values
    state.v[x] = random.randint(0, 0xFF) & kk
