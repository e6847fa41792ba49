"""
命名引擎 — Figma 圖層名稱 → 檔名 stem 與 React 元件識別字

stem 只取路徑最後一段（Figma 允許 Folder/Sub/Name 形式的巢狀命名），
並去除重音符號；識別字一律加上固定前綴，避免數字開頭。
"""

import re
import unicodedata

from .errors import InvalidNameError

DEFAULT_PREFIX = "Icon"

# NFD 分解後的組合用附加符號
_COMBINING_MARKS = re.compile("[\u0300-\u036f]")

_IDENTIFIER_PART = re.compile(r"[A-Za-z0-9]+")


def normalize_stem(name: str) -> str:
    """Figma 節點名稱 → 小寫、無重音、只含最後一段路徑的 stem."""
    leaf = name.split("/")[-1]
    stem = unicodedata.normalize("NFD", leaf.lower())
    stem = _COMBINING_MARKS.sub("", stem)
    stem = stem.replace("/", "_").strip()
    if not stem:
        raise InvalidNameError(f"Icon name {name!r} normalizes to an empty stem")
    return stem


def to_component_identifier(stem: str, prefix: str = DEFAULT_PREFIX) -> str:
    """arrow_left / arrow-left → IconArrowLeft."""
    # JS 識別字只取 ASCII 英數字；² ½ 等字元視為分隔
    parts = _IDENTIFIER_PART.findall(stem)
    if not parts:
        raise InvalidNameError(f"Stem {stem!r} has no characters usable in an identifier")
    identifier = prefix + "".join(p[:1].upper() + p[1:] for p in parts)
    if not identifier.isidentifier():
        raise InvalidNameError(f"Stem {stem!r} yields invalid identifier {identifier!r}")
    return identifier


def derive_names(name: str, prefix: str = DEFAULT_PREFIX) -> tuple[str, str]:
    """回傳 (file_stem, component_name)."""
    stem = normalize_stem(name)
    return stem, to_component_identifier(stem, prefix)
