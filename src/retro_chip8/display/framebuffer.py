# retro_chip8/display/framebuffer.py
"""
Display Layer (フレームバッファ)

64x32のモノクロフレームバッファと、スプライトのXOR描画（ブリット）を提供します。
座標計算は全て画面サイズを法として折り返します。
"""
from typing import List, Sequence, Tuple

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8

FramebufferSnapshot = Tuple[Tuple[bool, ...], ...]

# @intent:responsibility 画面の点灯状態を保持し、スプライトの描画と衝突判定を行います。
class Framebuffer:
    """
    行優先（row-major）で保持されるモノクロのフレームバッファ。
    """
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self._pixels: List[List[bool]] = [[False] * width for _ in range(height)]

    def clear(self) -> None:
        for row in self._pixels:
            for x in range(self.width):
                row[x] = False

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[y % self.height][x % self.width]

    def set_pixel(self, x: int, y: int, lit: bool) -> None:
        self._pixels[y % self.height][x % self.width] = lit

    # @intent:responsibility スプライトをXORで描画し、点灯済みピクセルを消したかどうかを返します。
    # @intent:pre-condition sprite_rowsの各要素は8bit値で、最上位ビットが最も左の列に対応します。
    def blit(self, sprite_rows: Sequence[int], origin_x: int, origin_y: int) -> bool:
        """
        スプライトを(origin_x, origin_y)を起点にXOR描画します。
        ビットが立っている位置のピクセルが既に点灯していた場合に衝突とし、
        一度Trueになった衝突フラグは同じ描画中に戻りません。
        """
        collision = False
        for row, sprite_byte in enumerate(sprite_rows):
            y = (origin_y + row) % self.height
            line = self._pixels[y]
            for column in range(SPRITE_WIDTH):
                if not (sprite_byte << column) & 0x80:
                    continue
                x = (origin_x + column) % self.width
                if line[x]:
                    collision = True
                line[x] = not line[x]
        return collision

    # @intent:responsibility 描画側へ渡す読み取り専用のコピーを返します。
    def snapshot(self) -> FramebufferSnapshot:
        return tuple(tuple(row) for row in self._pixels)
