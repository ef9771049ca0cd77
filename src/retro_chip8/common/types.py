"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型（4ビット値など）を定義します。
"""

# @intent:data_structure 0〜15に制約された4ビット整数（ニブル）。
class Nibble(int):
    """
    0〜15の範囲に制約された整数型。
    レジスタ番号やキー番号など、4ビットで表現されるインデックスに使用します。
    範囲外の値は生成時にValueErrorとなるため、インデックスとして安全に使用できます。
    """
    def __new__(cls, value: int) -> "Nibble":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Nibble must be an integer, got {value!r}.")
        if not 0 <= value <= 0xF:
            raise ValueError(f"Nibble {value} is out of range 0x0-0xF.")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Nibble({int(self):#x})"
