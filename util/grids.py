"""
五格的計算公式。

每一格都是 Grid 的子類別，以 key 識別（total、heaven、earth、personality、outer），
由 `calculate(entries, context, results)` 計算結果：
- 結構不足（例如沒有名字）時回傳 None
- 需要的字缺少筆畫數時丟出 MissingStrokeError

外格需要同一輪已算好的總格與人格，所以必須最後計算。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple

from util.entries import FiveElement, MissingStrokeError, Polarity, entry_to_dict, get_stroke_count
from util.surname import SegmentationContext, resolve_segmentation
from util.wuxing import classify, normalize_draw


@dataclass(frozen=True)
class GridResult:
    stroke_count: int
    element: Optional[FiveElement] = None
    polarity: Optional[Polarity] = None
    entries_used: Tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def build(cls, stroke_count: int, entries_used: Sequence[Any] = ()) -> "GridResult":
        classification = classify(stroke_count)
        return cls(
            stroke_count=stroke_count,
            element=classification.element if classification else None,
            polarity=classification.polarity if classification else None,
            entries_used=tuple(entries_used),
        )

    def to_dict(self) -> dict:
        return {
            "stroke_count": self.stroke_count,
            "draw": normalize_draw(self.stroke_count),
            "element": {"en": self.element.en, "zh": self.element.zh} if self.element else None,
            "polarity": self.polarity.value if self.polarity else None,
            "entries_used": [entry_to_dict(entry) for entry in self.entries_used],
        }


def sum_stroke_counts(entries: Sequence[Any]) -> Optional[int]:
    """加總筆畫數；任一字缺筆畫或沒有任何字時回傳 None"""
    if not entries:
        return None
    total = 0
    for entry in entries:
        strokes = get_stroke_count(entry)
        if strokes is None:
            return None
        total += strokes
    return total


def require_stroke_total(grid_key: str, entries: Sequence[Any]) -> int:
    total = 0
    for entry in entries:
        strokes = get_stroke_count(entry)
        if strokes is None:
            raise MissingStrokeError(grid_key, entry)
        total += strokes
    return total


class Grid:
    """五格的共用基底，提供顯示資訊與註記範圍的計算"""

    def __init__(self, key: str, id: str, label: str = "", position: str = "top", level: int = 1):
        if not key or not id:
            raise ValueError("Grid requires both key and id.")
        self.key = key
        self.id = id
        self.label = label or ""
        self.position = "bottom" if position == "bottom" else "top"
        self.level = max(1, int(level or 1))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"

    def resolve_context(self, entries: Sequence[Any],
                        context: Optional[SegmentationContext] = None) -> SegmentationContext:
        if isinstance(context, SegmentationContext):
            return context
        return resolve_segmentation(entries)

    def calculate(self, entries: Sequence[Any],
                  context: Optional[SegmentationContext] = None,
                  results: Optional[Mapping[str, Optional[GridResult]]] = None) -> Optional[GridResult]:
        raise NotImplementedError

    def resolve_indices(self, entries: Sequence[Any],
                        context: Optional[SegmentationContext] = None) -> Tuple[int, ...]:
        return ()

    def get_default_range(self, default_length: int = 3) -> Tuple[int, int]:
        return 0, max(1, default_length) - 1

    def get_range(self, entries: Sequence[Any],
                  context: Optional[SegmentationContext] = None,
                  default_length: int = 3) -> Tuple[int, int]:
        """註記線涵蓋的位置範圍 (start, end)"""
        indices = sorted(self.resolve_indices(entries, context))
        if not indices:
            return self.get_default_range(default_length)
        return indices[0], indices[-1]


class _ShortNameRangeMixin:
    """有效長度不足兩字時，註記範圍改用預設值"""

    def get_range(self, entries, context=None, default_length=3):
        ctx = self.resolve_context(entries, context)
        if ctx.effective_length <= 1:
            return self.get_default_range(default_length)
        return super().get_range(entries, ctx, default_length)


class TotalGrid(_ShortNameRangeMixin, Grid):
    def __init__(self):
        super().__init__(key="total", id="five-grid-total", label="總格", position="top", level=2)

    def calculate(self, entries, context=None, results=None):
        ctx = self.resolve_context(entries, context)
        if ctx.effective_length <= 1 or not ctx.countable_entries:
            return None

        stroke_total = sum_stroke_counts(ctx.countable_entries)
        if stroke_total is None:
            return None
        return GridResult.build(stroke_total, ctx.countable_entries)

    def resolve_indices(self, entries, context=None):
        return self.resolve_context(entries, context).countable_indices

    def get_default_range(self, default_length=3):
        return 0, max(2, default_length - 1)


class HeavenGrid(Grid):
    def __init__(self):
        super().__init__(key="heaven", id="five-grid-heaven", label="天格", position="bottom", level=1)

    def calculate(self, entries, context=None, results=None):
        surname_entries = self.resolve_context(entries, context).surname_entries
        if not surname_entries:
            return None

        stroke_total = require_stroke_total(self.key, surname_entries)
        # 單姓加一劃
        if len(surname_entries) == 1:
            stroke_total += 1
        return GridResult.build(stroke_total, surname_entries)

    def resolve_indices(self, entries, context=None):
        return self.resolve_context(entries, context).surname_indices

    def get_default_range(self, default_length=3):
        return 0, 0


class EarthGrid(_ShortNameRangeMixin, Grid):
    def __init__(self):
        super().__init__(key="earth", id="five-grid-earth", label="地格", position="bottom", level=1)

    def calculate(self, entries, context=None, results=None):
        given_name_entries = self.resolve_context(entries, context).given_name_entries
        if not given_name_entries:
            return None

        # 單名加一劃；多字名只取前兩字
        if len(given_name_entries) == 1:
            entries_used = given_name_entries
            stroke_total = require_stroke_total(self.key, entries_used) + 1
        else:
            entries_used = given_name_entries[:2]
            stroke_total = require_stroke_total(self.key, entries_used)
        return GridResult.build(stroke_total, entries_used)

    def resolve_indices(self, entries, context=None):
        return self.resolve_context(entries, context).given_name_indices

    def get_default_range(self, default_length=3):
        if default_length <= 1:
            return 0, 0
        return 1, max(1, default_length - 1)


class PersonalityGrid(_ShortNameRangeMixin, Grid):
    def __init__(self):
        super().__init__(key="personality", id="five-grid-personality", label="人格", position="bottom", level=2)

    def calculate(self, entries, context=None, results=None):
        ctx = self.resolve_context(entries, context)
        if not ctx.surname_entries or not ctx.given_name_entries:
            return None

        entries_used = (ctx.surname_entries[-1], ctx.given_name_entries[0])
        return GridResult.build(require_stroke_total(self.key, entries_used), entries_used)

    def resolve_indices(self, entries, context=None):
        ctx = self.resolve_context(entries, context)
        indices = []
        if ctx.surname_indices:
            indices.append(ctx.surname_indices[-1])
        if ctx.given_name_indices:
            indices.append(ctx.given_name_indices[0])
        return tuple(indices)

    def get_default_range(self, default_length=3):
        return 0, max(2, default_length - 1)


class OuterGrid(_ShortNameRangeMixin, Grid):
    def __init__(self):
        super().__init__(key="outer", id="five-grid-outer", label="外格", position="top", level=1)

    def calculate(self, entries, context=None, results=None):
        ctx = self.resolve_context(entries, context)
        surname_count = len(ctx.surname_entries)
        given_count = len(ctx.given_name_entries)
        if ctx.effective_length <= 1 or surname_count == 0 or given_count == 0:
            return None

        # 單姓單名固定為 2
        if surname_count == 1 and given_count == 1:
            return GridResult.build(2)

        results = results or {}
        total = results.get("total")
        personality = results.get("personality")
        if total is None or personality is None:
            return None

        base = total.stroke_count - personality.stroke_count
        if surname_count == 2 and given_count >= 2:
            return GridResult.build(base)
        # 單姓多字名、複姓單名加一
        return GridResult.build(base + 1)

    def resolve_indices(self, entries, context=None):
        return self.resolve_context(entries, context).countable_indices

    def get_default_range(self, default_length=3):
        return 0, max(2, default_length - 1)


def create_default_grids():
    """依計算順序建立五格：外格依賴總格與人格，必須排在最後"""
    return [TotalGrid(), HeavenGrid(), EarthGrid(), PersonalityGrid(), OuterGrid()]
