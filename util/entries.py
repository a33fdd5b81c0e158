"""
姓名輸入項目（entry）的資料模型。

一個姓名由一串 entry 組成：
- Character：已解析的字，帶筆畫數與五行（可能未知）
- Placeholder：保留位置的佔位符，可帶筆畫數
- OtherEntry：其他種類，不列入筆畫計算
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

CHARACTER = "character"
PLACEHOLDER = "placeholder"

# 佔位符使用的私用區字元
PLACEHOLDER_CHAR = "\ue000"


class FiveGridError(ValueError):
    """五格計算時的資料錯誤"""


class MissingStrokeError(FiveGridError):
    """計算所需的字缺少筆畫數"""

    def __init__(self, grid_key: str, entry: Any = None):
        self.grid_key = grid_key
        self.entry = entry
        value = getattr(entry, "value", None)
        target = f" ({value})" if value else ""
        super().__init__(f"Missing stroke count for {grid_key} grid calculation{target}.")


class FiveElement(Enum):
    METAL = ("metal", "金")
    WOOD = ("wood", "木")
    WATER = ("water", "水")
    FIRE = ("fire", "火")
    EARTH = ("earth", "土")

    def __init__(self, en: str, zh: str):
        self.en = en
        self.zh = zh

    @classmethod
    def from_value(cls, value: Any) -> Optional["FiveElement"]:
        """接受 FiveElement、英文或中文名稱，無法辨識時回傳 None"""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            value = value.get("en") or value.get("zh")
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        for element in cls:
            if key in (element.en, element.zh):
                return element
        return None


class Polarity(str, Enum):
    YIN = "yin"
    YANG = "yang"


@dataclass(frozen=True)
class Character:
    value: str
    strokes: Optional[int] = None
    element: Optional[FiveElement] = None
    type: str = field(default=CHARACTER, init=False)


@dataclass(frozen=True)
class Placeholder:
    strokes: Optional[int] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False, compare=False)
    value: str = PLACEHOLDER_CHAR
    type: str = field(default=PLACEHOLDER, init=False)


@dataclass(frozen=True)
class OtherEntry:
    """不列入計算的 entry 種類"""
    type: str
    value: Optional[str] = None


Entry = Union[Character, Placeholder, OtherEntry]


def is_countable_entry(entry: Any) -> bool:
    return getattr(entry, "type", None) in (CHARACTER, PLACEHOLDER)


def is_character_entry(entry: Any) -> bool:
    return getattr(entry, "type", None) == CHARACTER


def _coerce_strokes(raw: Any) -> Optional[int]:
    """將筆畫數轉為正整數，無效值回傳 None"""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else None


def get_stroke_count(entry: Any) -> Optional[int]:
    """取出 entry 的筆畫數；沒有或無效時回傳 None"""
    if entry is None:
        return None
    return _coerce_strokes(getattr(entry, "strokes", None))


def entry_from_mapping(data: Mapping[str, Any]) -> Entry:
    """
    將 UI 或 API 傳來的 dict 轉成 entry。

    接受 `strokes`、`strokeCount` 或 `stroke_count` 欄位，數字或數字字串皆可。
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"Entry must be a mapping, got {type(data).__name__}")

    entry_type = str(data.get("type") or "").strip().lower()
    raw_strokes = data.get("strokes")
    if raw_strokes is None:
        raw_strokes = data.get("strokeCount", data.get("stroke_count"))
    strokes = _coerce_strokes(raw_strokes)

    if entry_type == CHARACTER:
        return Character(
            value=str(data.get("value") or data.get("char") or ""),
            strokes=strokes,
            element=FiveElement.from_value(data.get("element")),
        )
    if entry_type == PLACEHOLDER:
        metadata = {k: v for k, v in data.items()
                    if k not in ("type", "value", "strokes", "strokeCount", "stroke_count")}
        return Placeholder(strokes=strokes, metadata=metadata)
    return OtherEntry(type=entry_type or "unknown", value=data.get("value"))


def entry_to_dict(entry: Entry) -> dict:
    data = {"type": entry.type, "value": getattr(entry, "value", None)}
    if is_countable_entry(entry):
        data["strokes"] = get_stroke_count(entry)
    element = getattr(entry, "element", None)
    if element is not None:
        data["element"] = {"en": element.en, "zh": element.zh}
    return data
