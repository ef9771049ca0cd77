"""
キーマッピングモジュール。

設定ファイルのキー名（"1", "Q" など）をQtのキーコードに変換し、
キーイベントから仮想マシンのキー番号(0〜F)を引けるようにします。
"""
import warnings
from typing import Dict, Optional

from PySide6.QtCore import Qt

# @intent:responsibility キー名からキー番号への対応を、Qtキーコードからキー番号への対応に変換します。
def resolve_key_map(key_map: Dict[str, int]) -> Dict[int, int]:
    resolved: Dict[int, int] = {}
    for name, index in key_map.items():
        qt_key = getattr(Qt.Key, f"Key_{name.upper()}", None)
        if qt_key is None:
            warnings.warn(f"Unknown key name '{name}' in key map ignored")
            continue
        resolved[int(qt_key)] = index
    return resolved

def lookup_key(resolved: Dict[int, int], qt_key: int) -> Optional[int]:
    return resolved.get(int(qt_key))
