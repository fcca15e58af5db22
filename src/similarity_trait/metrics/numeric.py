"""数値ペアの類似度。

同じ「変化率」でも失敗方針の違う実装を並べている。
``PercentChange`` は生の float を返し、基準値 0 では ``±inf`` / ``nan`` になる。
``CheckedPercentChange`` は同じ入力で ``None`` を返す。
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _percent_change(before: float, after: float) -> float:
    if before == 0:
        if after == 0:
            return math.nan
        return math.copysign(math.inf, after)
    return 100.0 * (after - before) / abs(before)


class AbsoluteDifference:
    """2 つの数値の差の絶対値。"""

    @staticmethod
    def similarity(pair: tuple[float, float]) -> float | None:
        """差が有限でない場合 (``inf - inf`` など) は ``None``。"""

        before, after = pair
        difference = abs(after - before)
        if isinstance(difference, float) and not math.isfinite(difference):
            return None
        return difference


class PercentChange:
    """1 つ目を基準にした 2 つ目の変化率 (%)。"""

    @staticmethod
    def similarity(pair: tuple[float, float]) -> float:
        before, after = pair
        return _percent_change(before, after)


class CheckedPercentChange:
    """基準値が 0 のとき ``None`` を返す変化率 (%)。"""

    @staticmethod
    def similarity(pair: tuple[float, float]) -> float | None:
        before, after = pair
        if before == 0:
            return None
        return _percent_change(before, after)


class PercentChangeBetween:
    """2 入力版の変化率 (%)。"""

    @staticmethod
    def similarity(before: float, after: float, /) -> float:
        return _percent_change(before, after)


@dataclass(frozen=True, slots=True)
class Baseline:
    """基準値を保持し、別の値との変化率を返す。"""

    value: float

    def similarity(self, other: float, /) -> float:
        return _percent_change(self.value, other)


@dataclass(frozen=True, slots=True)
class NumberPair:
    """自身が持つ 2 値の変化率を返す。"""

    before: float
    after: float

    def similarity(self) -> float:
        return _percent_change(self.before, self.after)


__all__ = [
    "AbsoluteDifference",
    "PercentChange",
    "CheckedPercentChange",
    "PercentChangeBetween",
    "Baseline",
    "NumberPair",
]
