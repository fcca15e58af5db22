"""文字列の距離。"""

from __future__ import annotations

from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein

from similarity_trait.core.composition import reduce_pairwise


class HammingDistance:
    """位置ごとに異なる文字の数。

    長さが異なる場合は短い方の長さまでを比較し、余りは数えない。
    """

    @staticmethod
    def similarity(pair: tuple[str, str]) -> int:
        first, second = pair
        return sum(1 for a, b in zip(first, second) if a != b)


class MaximumHammingDistance:
    """集合内の順序なしペアにおけるハミング距離の最大値。2 件未満なら 0。"""

    @staticmethod
    def similarity(strings: Sequence[str]) -> int:
        return reduce_pairwise(HammingDistance, strings, reducer=max, default=0)


class LevenshteinDistance:
    """挿入・削除・置換の最小回数。"""

    @staticmethod
    def similarity(pair: tuple[str, str]) -> int:
        first, second = pair
        return Levenshtein.distance(first, second)


__all__ = ["HammingDistance", "MaximumHammingDistance", "LevenshteinDistance"]
