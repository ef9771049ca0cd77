"""
スクリーンビューモジュール。
フレームバッファのスナップショットを拡大した矩形として描画します。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QPaintEvent

from retro_chip8.display.framebuffer import FramebufferSnapshot, SCREEN_WIDTH, SCREEN_HEIGHT

# @intent:responsibility 64x32の画面を指定されたピクセルサイズで描画します。
class ScreenView(QWidget):
    def __init__(self, pixel_size: int = 20, foreground: str = "#FFFFFF", background: str = "#000000", parent=None):
        super().__init__(parent)
        self._pixel_size = pixel_size
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._framebuffer: Optional[FramebufferSnapshot] = None
        self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        return QSize(SCREEN_WIDTH * self._pixel_size, SCREEN_HEIGHT * self._pixel_size)

    @property
    def pixel_size(self) -> int:
        return self._pixel_size

    # @intent:responsibility 表示するフレームバッファを差し替え、再描画を要求します。
    def set_framebuffer(self, framebuffer: FramebufferSnapshot) -> None:
        if framebuffer == self._framebuffer:
            return
        self._framebuffer = framebuffer
        self.update()

    def framebuffer(self) -> Optional[FramebufferSnapshot]:
        return self._framebuffer

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), self._background)
            if self._framebuffer is None:
                return
            size = self._pixel_size
            for y, row in enumerate(self._framebuffer):
                for x, lit in enumerate(row):
                    if lit:
                        painter.fillRect(x * size, y * size, size, size, self._foreground)
        finally:
            painter.end()
