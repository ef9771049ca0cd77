# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
スクリーンとステータスバーを保持し、フレームタイマーで仮想マシンを駆動します。
"""
from PySide6.QtWidgets import QMainWindow, QApplication, QLabel, QMessageBox
from PySide6.QtGui import QPalette, QColor, QKeyEvent, QCloseEvent
from PySide6.QtCore import Qt, QEvent, QTimer, Slot

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import MachineConfig
from retro_chip8.core.errors import Chip8Error
from retro_chip8.driver.frame_driver import FrameDriver
from .audio import SquareWaveTone
from .keymap import resolve_key_map, lookup_key
from .screen_view import ScreenView

SPEED_UP_KEYS = (int(Qt.Key_Plus), int(Qt.Key_Equal))
SLOW_DOWN_KEYS = (int(Qt.Key_Minus),)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、フレームごとの駆動・描画・音声・入力を仲介します。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    全ての処理はQtのイベントループ（メインスレッド）上で行われます。
    """
    def __init__(self, cpu: Chip8Cpu, config: MachineConfig, title: str = "", enable_audio: bool = True, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"CHIP-8 Interpreter - {title}" if title else "CHIP-8 Interpreter")

        self.cpu = cpu
        self.config = config
        self.driver = FrameDriver(cpu, config.cycles_per_frame)
        self._key_map = resolve_key_map(config.key_map)
        self.tone = SquareWaveTone(config.audio, self) if enable_audio else None

        self.screen_view = ScreenView(
            config.display.pixel_size, config.display.foreground, config.display.background
        )
        self.setCentralWidget(self.screen_view)
        self.status_label = QLabel(self)
        self.statusBar().addPermanentWidget(self.status_label)
        self._set_dark_theme()

        self.frame_timer = QTimer(self)
        self.frame_timer.setTimerType(Qt.PreciseTimer)
        self.frame_timer.setInterval(max(1, round(1000 / config.frame_rate)))
        self.frame_timer.timeout.connect(self._on_frame)

        self._update_status()

    def start(self) -> None:
        self.frame_timer.start()

    def stop(self) -> None:
        self.frame_timer.stop()
        if self.tone:
            self.tone.set_active(False)

    # @intent:responsibility 1フレーム分（タイマー更新、命令実行、音声ゲート、描画）を処理します。
    @Slot()
    def _on_frame(self):
        try:
            self.driver.run_frame()
        except Chip8Error as e:
            self.stop()
            self.statusBar().showMessage(f"Stopped: {e}")
            QMessageBox.critical(self, "Error", f"Execution stopped: {e}")
            return
        finally:
            self.screen_view.set_framebuffer(self.cpu.framebuffer)

        if self.tone:
            self.tone.set_active(self.cpu.sound_active)
        if self.cpu.halted:
            self.stop()
            self.statusBar().showMessage("Halted")

    def _update_status(self):
        self.status_label.setText(f"Cycles/frame: {self.driver.cycles_per_frame}")

    # @intent:responsibility キー押下を仮想マシンのキー入力と速度調整に振り分けます。
    def keyPressEvent(self, event: QKeyEvent):
        key = int(event.key())
        if key == int(Qt.Key_Escape):
            self.close()
            return
        if key in SPEED_UP_KEYS:
            self.driver.speed_up()
            self._update_status()
            return
        if key in SLOW_DOWN_KEYS:
            self.driver.slow_down()
            self._update_status()
            return
        index = lookup_key(self._key_map, key)
        if index is None:
            super().keyPressEvent(event)
            return
        self.cpu.set_key(index, True)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        index = lookup_key(self._key_map, event.key())
        if index is None:
            super().keyReleaseEvent(event)
            return
        self.cpu.set_key(index, False)

    # @intent:responsibility ウィンドウが非アクティブになったとき、全てのキーを離された状態にします。
    def changeEvent(self, event: QEvent):
        if event.type() == QEvent.ActivationChange and not self.isActiveWindow():
            self.cpu.release_keys()
        super().changeEvent(event)

    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        QApplication.setPalette(dark_palette)
        self.setStyleSheet("QStatusBar { background-color: #101010; }")

    def closeEvent(self, event: QCloseEvent):
        self.stop()
        if self.tone:
            self.tone.stop()
        event.accept()
