"""
ブザー音声モジュール。

サウンドタイマーが0より大きい間だけ矩形波を鳴らします。
QAudioSinkがプル方式で読み出すQIODeviceとして矩形波ジェネレータを実装し、
ゲートのオン/オフで無音と矩形波を切り替えます。
"""
import warnings
from array import array
from typing import Tuple

from PySide6.QtCore import QIODevice, QObject
from PySide6.QtMultimedia import QAudioFormat, QAudioSink, QMediaDevices

from retro_chip8.config.models import AudioConfig

BYTES_PER_SAMPLE = 2 # Int16, mono

# @intent:utility_function 16bit符号付きの矩形波サンプル列を生成し、次の位相とともに返します。
def square_wave_samples(phase: float, phase_inc: float, volume: float, count: int, active: bool) -> Tuple[bytes, float]:
    samples = array("h", bytes(count * BYTES_PER_SAMPLE))
    if not active:
        return samples.tobytes(), phase
    amplitude = int(volume * 32767)
    for index in range(count):
        samples[index] = amplitude if phase <= 0.5 else -amplitude
        phase = (phase + phase_inc) % 1.0
    return samples.tobytes(), phase

# @intent:responsibility QAudioSinkに矩形波（またはゲートオフ時は無音）を供給します。
class SquareWaveGenerator(QIODevice):
    def __init__(self, config: AudioConfig, parent=None):
        super().__init__(parent)
        self._phase = 0.0
        self._phase_inc = config.frequency / config.sample_rate
        self._volume = config.volume
        self.active = False

    def readData(self, maxlen: int) -> bytes:
        count = maxlen // BYTES_PER_SAMPLE
        data, self._phase = square_wave_samples(self._phase, self._phase_inc, self._volume, count, self.active)
        return data

    def writeData(self, data) -> int:
        return 0

    def bytesAvailable(self) -> int:
        return 4096 + super().bytesAvailable()

    def isSequential(self) -> bool:
        return True

# @intent:responsibility サウンドタイマーの値に応じてブザーをオン/オフします。
class SquareWaveTone(QObject):
    """
    出力デバイスが無い環境では警告を出して無音で動作します。
    """
    def __init__(self, config: AudioConfig, parent=None):
        super().__init__(parent)
        self._generator = SquareWaveGenerator(config, self)
        self._sink = None

        device = QMediaDevices.defaultAudioOutput()
        if device.isNull():
            warnings.warn("No audio output device available; sound disabled")
            return

        audio_format = QAudioFormat()
        audio_format.setSampleRate(config.sample_rate)
        audio_format.setChannelCount(1)
        audio_format.setSampleFormat(QAudioFormat.Int16)
        if not device.isFormatSupported(audio_format):
            warnings.warn("Audio output does not support 16-bit mono; sound disabled")
            return

        self._generator.open(QIODevice.ReadOnly)
        self._sink = QAudioSink(device, audio_format, self)
        self._sink.start(self._generator)

    @property
    def enabled(self) -> bool:
        return self._sink is not None

    @property
    def active(self) -> bool:
        return self._generator.active

    def set_active(self, active: bool) -> None:
        self._generator.active = active

    def stop(self) -> None:
        self._generator.active = False
        if self._sink is not None:
            self._sink.stop()
            self._sink = None
