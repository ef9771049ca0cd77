"""
retro_chip8 - CHIP-8 仮想マシンとPySide6フロントエンド。
"""
__version__ = "0.1.0"
