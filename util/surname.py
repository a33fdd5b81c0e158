"""
姓氏與名字的切分。

以固定的複姓字典判斷前兩個字是否為複姓，否則視為單姓。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from util.entries import is_character_entry, is_countable_entry

MAX_SURNAME_LENGTH = 2

# 常見複姓（繁體與簡體寫法）
COMPOUND_SURNAMES = frozenset({
    "歐陽", "司馬", "上官", "諸葛", "東方", "皇甫", "尉遲", "公孫", "慕容", "長孫",
    "宇文", "司徒", "夏侯", "軒轅", "令狐", "鍾離", "澹臺", "公冶", "申屠", "太史",
    "端木", "呼延", "南宮", "獨孤", "西門", "聞人", "万俟", "赫連", "濮陽", "百里",
    "東郭", "拓跋", "宗政", "司空", "閭丘", "子車", "亓官", "司寇", "巫馬", "公西",
    "顓孫", "壤駟", "公良", "漆雕", "樂正", "宰父", "穀梁", "羊舌", "微生", "梁丘",
    "左丘", "東門", "公羊", "第五", "仲孫", "鮮于", "張簡", "范姜",
    "欧阳", "诸葛", "东方", "尉迟", "公孙", "长孙", "轩辕", "钟离", "澹台", "独孤",
    "闻人", "赫连", "东郭", "闾丘", "颛孙", "壤驷", "乐正", "谷梁", "鲜于", "张简",
})


@dataclass(frozen=True)
class SegmentationContext:
    countable_entries: Tuple[Any, ...]
    countable_indices: Tuple[int, ...]
    surname_length: int
    surname_entries: Tuple[Any, ...]
    surname_indices: Tuple[int, ...]
    given_name_entries: Tuple[Any, ...]
    given_name_indices: Tuple[int, ...]
    effective_length: int

    def to_dict(self) -> dict:
        return {
            "surname_length": self.surname_length,
            "effective_length": self.effective_length,
            "countable_indices": list(self.countable_indices),
            "surname_indices": list(self.surname_indices),
            "given_name_indices": list(self.given_name_indices),
        }


def is_compound_surname(value: str) -> bool:
    return value in COMPOUND_SURNAMES


def detect_compound_surname(countable_entries: Sequence[Any]) -> bool:
    """
    前兩個可計算的 entry 都必須是字（不是佔位符），且相連後在複姓字典內。
    """
    if len(countable_entries) < 2:
        return False
    first, second = countable_entries[0], countable_entries[1]
    if not (is_character_entry(first) and is_character_entry(second)):
        return False
    return is_compound_surname(f"{first.value or ''}{second.value or ''}")


def determine_surname_length(countable_entries: Sequence[Any], override: Optional[int] = None) -> int:
    count = len(countable_entries)
    if isinstance(override, int) and not isinstance(override, bool) and override >= 0:
        return min(override, MAX_SURNAME_LENGTH, count)
    if detect_compound_surname(countable_entries):
        return 2
    return min(1, count)


def resolve_segmentation(entries: Sequence[Any],
                         surname_length: Optional[int] = None,
                         effective_length: Optional[int] = None) -> SegmentationContext:
    """
    將 entries 切分為姓氏與名字兩段。

    Args:
        entries: 姓名的 entry 序列，非可計算的 entry 會被略過。
        surname_length: 指定姓氏長度，最多兩字且不超過可計算 entry 數量。
        effective_length: 指定有效長度，預設為可計算 entry 數量。

    Returns:
        SegmentationContext: 本次計算共用的切分結果。
    """
    countable_entries = []
    countable_indices = []
    for index, entry in enumerate(entries or ()):
        if is_countable_entry(entry):
            countable_entries.append(entry)
            countable_indices.append(index)

    length = determine_surname_length(countable_entries, surname_length)

    return SegmentationContext(
        countable_entries=tuple(countable_entries),
        countable_indices=tuple(countable_indices),
        surname_length=length,
        surname_entries=tuple(countable_entries[:length]),
        surname_indices=tuple(countable_indices[:length]),
        given_name_entries=tuple(countable_entries[length:]),
        given_name_indices=tuple(countable_indices[length:]),
        effective_length=effective_length if isinstance(effective_length, int) else len(countable_entries),
    )
