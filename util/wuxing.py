import math
from dataclasses import dataclass
from typing import Optional

from util.entries import FiveElement, Polarity

# 尾數對應五行：1、2 木；3、4 火；5、6 土；7、8 金；9、0 水
DIGIT_TO_ELEMENT = {
    1: FiveElement.WOOD, 2: FiveElement.WOOD,
    3: FiveElement.FIRE, 4: FiveElement.FIRE,
    5: FiveElement.EARTH, 6: FiveElement.EARTH,
    7: FiveElement.METAL, 8: FiveElement.METAL,
    9: FiveElement.WATER, 0: FiveElement.WATER,
}


@dataclass(frozen=True)
class Classification:
    polarity: Polarity
    element: FiveElement


def classify(stroke_count) -> Optional[Classification]:
    """根據筆畫數尾數判斷陰陽與五行，非正整數回傳 None"""
    if isinstance(stroke_count, bool) or not isinstance(stroke_count, (int, float)):
        return None
    if not math.isfinite(stroke_count) or stroke_count <= 0:
        return None
    # 尾數必須是整數才對得到五行
    if isinstance(stroke_count, float) and not stroke_count.is_integer():
        return None

    digit = int(stroke_count) % 10
    polarity = Polarity.YANG if digit % 2 == 1 else Polarity.YIN
    return Classification(polarity=polarity, element=DIGIT_TO_ELEMENT[digit])


def normalize_draw(stroke_count) -> Optional[int]:
    """將筆畫數換算到 1～81 的數理範圍"""
    if isinstance(stroke_count, bool) or not isinstance(stroke_count, (int, float)):
        return None
    if not math.isfinite(stroke_count):
        return None
    draw = math.floor(stroke_count)
    if draw <= 0:
        return None
    return (draw - 1) % 81 + 1
