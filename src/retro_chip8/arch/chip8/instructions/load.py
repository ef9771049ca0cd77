# src/retro_chip8/arch/chip8/instructions/load.py
"""
メモリ、Iレジスタ、タイマー、キー入力、描画に関する命令の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState, FONT_START, FONT_GLYPH_SIZE

# --- LD I, addr (Annn) ---
def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = op.operand_values[0]

# --- ADD I, Vx (Fx1E) ---
# @intent:responsibility I = I + Vx（16bit、フラグ変化なし）。
def execute_add_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    state.i = (state.i + state.v[x]) & 0xFFFF

# --- LD F, Vx (Fx29) ---
# @intent:responsibility Vxの値に対応するフォントグリフのアドレス（5 x Vx）をIに設定します。
def execute_ld_font(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    state.i = FONT_START + FONT_GLYPH_SIZE * state.v[x]

# --- LD B, Vx (Fx33) ---
# @intent:responsibility Vxの10進表現の百の位をI、十の位をI+1、一の位をI+2に格納します。
def execute_ld_bcd(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    value = state.v[x]
    bus.check_range(state.i, 3)
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
# @intent:responsibility V0〜Vx（xを含む）をIから始まるメモリへ順に格納します。Iは変化しません。
# @intent:post-condition 範囲外を含む場合は何も書き込まずにMemoryAccessErrorとなります。
def execute_store_regs(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    bus.check_range(state.i, x + 1)
    for index in range(x + 1):
        bus.write(state.i + index, state.v[index])

# --- LD Vx, [I] (Fx65) ---
def execute_load_regs(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = op.operand_values[0]
    bus.check_range(state.i, x + 1)
    for index in range(x + 1):
        state.v[index] = bus.read(state.i + index)

# --- LD Vx, DT (Fx07) ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[op.operand_values[0]] = state.delay_timer

# --- LD DT, Vx (Fx15) ---
def execute_ld_dt(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.delay_timer = state.v[op.operand_values[0]]

# --- LD ST, Vx (Fx18) ---
def execute_ld_st(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.sound_timer = state.v[op.operand_values[0]]

# --- SKP Vx (Ex9E) ---
# @intent:pre-condition キー番号はVxの下位4ビットです。
def execute_skp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if state.keypad.is_pressed(state.v[op.operand_values[0]] & 0xF):
        state.pc += 2

# --- SKNP Vx (ExA1) ---
def execute_sknp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    if not state.keypad.is_pressed(state.v[op.operand_values[0]] & 0xF):
        state.pc += 2

# --- LD Vx, K (Fx0A) ---
# @intent:responsibility キー0〜Fを昇順に走査し、最初に押されているキー番号をVxに格納します。
# @intent:rationale スレッドをブロックせず、押されていなければPCを2戻して次のstepで同じ命令を再実行します。
def execute_wait_key(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    key = state.keypad.first_pressed()
    if key is None:
        state.pc -= 2
        return
    state.v[op.operand_values[0]] = key

# --- DRW Vx, Vy, nibble (Dxyn) ---
# @intent:responsibility Iから読んだnバイトのスプライトを(Vx, Vy)にXOR描画し、衝突をVFに設定します。
# @intent:post-condition スプライトの読み込みが範囲外の場合、VFと画面は変化しません。VFは座標を読む前に0へリセットされます。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x, y, n = op.operand_values
    sprite = [bus.read(state.i + row) for row in range(n)]
    state.vf = 0
    origin_x = state.v[x]
    origin_y = state.v[y]
    if state.framebuffer.blit(sprite, origin_x, origin_y):
        state.vf = 1
