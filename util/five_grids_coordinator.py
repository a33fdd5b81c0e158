from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from core.logger_config import setup_logger
from util.entries import FiveGridError
from util.grids import Grid, GridResult, create_default_grids
from util.surname import SegmentationContext, resolve_segmentation

logger = setup_logger('five_grids')

ContextArg = Union[SegmentationContext, Mapping[str, Any], None]


class FiveGridsCoordinator:
    """
    管理五格的計算順序與最近一次的結果。

    每次 update 都以完整的 entries 重新計算，依註冊順序執行各格，
    並把本輪已算出的結果傳給後面的格（外格需要總格與人格）。
    """

    def __init__(self, grids: Optional[Sequence[Grid]] = None):
        self._grids: Dict[str, Grid] = {}
        self._results: Dict[str, Optional[GridResult]] = {}

        for grid in grids or create_default_grids():
            self.register_grid(grid)

    def register_grid(self, grid: Grid):
        """註冊一格；相同 key 會取代原本的位置"""
        if not isinstance(grid, Grid):
            raise TypeError(f"grid must be an instance of Grid, got {type(grid).__name__}")
        self._grids[grid.key] = grid

    def get_grids(self) -> List[Grid]:
        return list(self._grids.values())

    def get_grid(self, key: str) -> Optional[Grid]:
        if not key:
            return None
        return self._grids.get(key)

    def get_result(self, key: str) -> Optional[GridResult]:
        if not key:
            return None
        return self._results.get(key)

    def get_results(self) -> Dict[str, Optional[GridResult]]:
        return dict(self._results)

    def build_context(self, entries: Sequence[Any], context: ContextArg = None) -> SegmentationContext:
        if isinstance(context, SegmentationContext):
            return context
        options = context or {}
        if not isinstance(options, Mapping):
            raise TypeError(f"context must be a SegmentationContext or a mapping, got {type(context).__name__}")
        return resolve_segmentation(
            entries,
            surname_length=options.get("surname_length"),
            effective_length=options.get("effective_length"),
        )

    def update(self, entries: Sequence[Any], context: ContextArg = None) -> Dict[str, Optional[GridResult]]:
        """
        以整串 entries 計算所有已註冊的格。

        Args:
            entries: 姓名的 entry 序列（list 或 tuple）。
            context: 事先算好的 SegmentationContext，或含 surname_length / effective_length 的 dict。

        Returns:
            dict: grid key -> GridResult，無法計算的格為 None。
        """
        if not isinstance(entries, (list, tuple)):
            raise TypeError(f"entries must be a list or tuple, got {type(entries).__name__}")

        ctx = self.build_context(entries, context)
        results: Dict[str, Optional[GridResult]] = {}

        for key, grid in self._grids.items():
            try:
                results[key] = grid.calculate(entries, ctx, dict(results))
            except FiveGridError as e:
                logger.warning(f"Failed to calculate five grid '{key}': {e}")
                results[key] = None
            except Exception:
                logger.exception(f"Unexpected error while calculating five grid '{key}'.")
                results[key] = None

        # 整批替換，避免外部看到只更新一半的結果
        self._results = results
        return dict(results)

    def reset(self):
        self._results = {}
