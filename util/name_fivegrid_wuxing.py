from typing import Any, Dict, Mapping, Optional, Sequence

from core.logger_config import setup_logger
from util.entries import entry_from_mapping
from util.five_grids_coordinator import FiveGridsCoordinator
from util.grids import GridResult
from util.surname import resolve_segmentation

logger = setup_logger('name_fivegrid_wuxing')

# 報告的顯示順序
REPORT_ORDER = (
    ("heaven", "天格"),
    ("personality", "人格"),
    ("earth", "地格"),
    ("outer", "外格"),
    ("total", "總格"),
)

POLARITY_ZH = {"yin": "陰", "yang": "陽"}


def three_talents_key(results: Mapping[str, Optional[GridResult]]) -> Optional[str]:
    """三才：天格、人格、地格的五行依序組合，例如「木火土」"""
    elements = []
    for key in ("heaven", "personality", "earth"):
        result = results.get(key)
        if result is None or result.element is None:
            return None
        elements.append(result.element.zh)
    return "".join(elements)


def results_to_dict(results: Mapping[str, Optional[GridResult]]) -> Dict[str, Optional[dict]]:
    return {key: result.to_dict() if result is not None else None for key, result in results.items()}


def format_five_grids_report(results: Mapping[str, Optional[GridResult]]) -> str:
    """格式化五格與五行結果為文字報告"""
    lines = ["姓名五格＆五行分析："]
    for key, label in REPORT_ORDER:
        result = results.get(key)
        if result is None:
            lines.append(f"{label}：無法計算")
            continue
        if result.element is None:
            lines.append(f"{label}：{result.stroke_count}")
            continue
        polarity = POLARITY_ZH.get(result.polarity.value, "") if result.polarity else ""
        lines.append(f"{label}：{result.stroke_count}（{result.element.zh}，{polarity}）")
    talents = three_talents_key(results)
    if talents:
        lines.append(f"三才：{talents}")
    return "\n".join(lines)


def analyze_five_grids(raw_entries: Sequence[Any], surname_length: Optional[int] = None) -> Dict[str, Any]:
    """
    計算姓名五格、五行與三才。

    Args:
        raw_entries: entry 物件或 dict 的序列。
        surname_length: 指定姓氏長度，不指定時自動判斷複姓。

    Returns:
        dict: 包含 segmentation、grids、three_talents 與 report。
    """
    if not isinstance(raw_entries, (list, tuple)):
        raise TypeError("entries must be a list")

    entries = [entry_from_mapping(item) if isinstance(item, Mapping) else item for item in raw_entries]
    context = resolve_segmentation(entries, surname_length=surname_length)

    coordinator = FiveGridsCoordinator()
    results = coordinator.update(entries, context)

    logger.info(f"Analyzed five grids for {context.effective_length} entries "
                f"(surname length {context.surname_length})")
    return {
        "segmentation": context.to_dict(),
        "grids": results_to_dict(results),
        "three_talents": three_talents_key(results),
        "report": format_five_grids_report(results),
    }
