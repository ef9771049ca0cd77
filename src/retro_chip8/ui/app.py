# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
プログラムイメージと設定を読み込み、メインウィンドウを起動します。
"""
import argparse
import os
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication, QFileDialog

from retro_chip8.config.builder import MachineBuilder
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import MachineConfig
from retro_chip8.core.errors import Chip8Error
from retro_chip8.driver.frame_driver import MAX_CYCLES_PER_FRAME
from retro_chip8.loader.loader import RomLoader
from .main_window import MainWindow

def _cycles_per_frame(text: str) -> int:
    try:
        value = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if not 0 <= value <= MAX_CYCLES_PER_FRAME:
        raise argparse.ArgumentTypeError(f"must be within 0-{MAX_CYCLES_PER_FRAME}: {value}")
    return value

def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", nargs="?", help="program image (.ch8); a file dialog is shown when omitted")
    parser.add_argument("--config", help="machine config (YAML)")
    parser.add_argument("--cycles", type=_cycles_per_frame, help=f"instructions per frame, 0-{MAX_CYCLES_PER_FRAME} (overrides config)")
    parser.add_argument("--no-sound", action="store_true", help="disable the buzzer")
    return parser.parse_args(argv)

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。終了コードを返します。
    """
    args = _parse_args(argv)
    app = QApplication.instance() or QApplication(sys.argv[:1])

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()
    except (OSError, ValueError) as e:
        print(f"Failed to load config: {e}")
        return 1
    if args.cycles is not None:
        config.cycles_per_frame = args.cycles

    rom_path = args.rom
    if not rom_path:
        rom_path, _ = QFileDialog.getOpenFileName(None, "Open CHIP-8 ROM", "", "CHIP-8 ROM (*.ch8);;All Files (*)")
        if not rom_path:
            print("No game selected! Exiting...")
            return 0

    cpu, _bus = MachineBuilder().build_machine()
    try:
        RomLoader().load_rom(rom_path, cpu)
    except (OSError, ValueError, Chip8Error) as e:
        print(f"ROM not readable: {e}")
        return 1

    main_win = MainWindow(cpu, config, title=os.path.basename(rom_path), enable_audio=not args.no_sound)
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
