"""数値の集合に対する散らばりの指標。"""

from __future__ import annotations

import statistics
from collections.abc import Sequence


class PopulationStandardDeviation:
    """母標準偏差 ``sqrt(mean((x - mean)^2))``。空の入力では ``None``。"""

    @staticmethod
    def similarity(numbers: Sequence[float]) -> float | None:
        if len(numbers) == 0:
            return None
        return statistics.pstdev(numbers)


__all__ = ["PopulationStandardDeviation"]
