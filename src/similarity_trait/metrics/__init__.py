"""同梱の類似度実装とレジストリへの登録。"""

from __future__ import annotations

from collections.abc import Sequence

from similarity_trait.core.protocols import SimilarityShape
from similarity_trait.core.registry import SimilarityRegistry

from .dispersion import PopulationStandardDeviation
from .numeric import (
    AbsoluteDifference,
    Baseline,
    CheckedPercentChange,
    NumberPair,
    PercentChange,
    PercentChangeBetween,
)
from .text import HammingDistance, LevenshteinDistance, MaximumHammingDistance


def parse_number(text: str) -> int | float:
    """整数として読めれば int、そうでなければ float にする。"""

    value = text.strip()
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError as exc:
        msg = f"数値として解釈できません: {text!r}"
        raise ValueError(msg) from exc


def _expect_pair(values: Sequence[str]) -> tuple[str, str]:
    if len(values) != 2:
        msg = f"値を 2 つ指定してください (指定数: {len(values)})"
        raise ValueError(msg)
    return values[0], values[1]


def parse_number_pair(values: Sequence[str]) -> tuple[int | float, int | float]:
    first, second = _expect_pair(values)
    return parse_number(first), parse_number(second)


def parse_numbers(values: Sequence[str]) -> list[int | float]:
    return [parse_number(value) for value in values]


def parse_word_pair(values: Sequence[str]) -> tuple[str, str]:
    return _expect_pair(values)


def parse_words(values: Sequence[str]) -> list[str]:
    return list(values)


def register_builtin_metrics(registry: SimilarityRegistry) -> SimilarityRegistry:
    """同梱の実装をすべて ``registry`` に登録する。"""

    registry.add(
        "absolute-difference",
        AbsoluteDifference,
        shape=SimilarityShape.PAIRWISE,
        parser=parse_number_pair,
    )
    registry.add(
        "percent-change",
        PercentChange,
        shape=SimilarityShape.PAIRWISE,
        parser=parse_number_pair,
    )
    registry.add(
        "checked-percent-change",
        CheckedPercentChange,
        shape=SimilarityShape.PAIRWISE,
        parser=parse_number_pair,
    )
    registry.add(
        "population-standard-deviation",
        PopulationStandardDeviation,
        shape=SimilarityShape.COLLECTION,
        parser=parse_numbers,
    )
    registry.add(
        "hamming-distance",
        HammingDistance,
        shape=SimilarityShape.PAIRWISE,
        parser=parse_word_pair,
    )
    registry.add(
        "maximum-hamming-distance",
        MaximumHammingDistance,
        shape=SimilarityShape.COLLECTION,
        parser=parse_words,
    )
    registry.add(
        "levenshtein-distance",
        LevenshteinDistance,
        shape=SimilarityShape.PAIRWISE,
        parser=parse_word_pair,
    )
    return registry


__all__ = [
    "AbsoluteDifference",
    "PercentChange",
    "CheckedPercentChange",
    "PercentChangeBetween",
    "Baseline",
    "NumberPair",
    "PopulationStandardDeviation",
    "HammingDistance",
    "MaximumHammingDistance",
    "LevenshteinDistance",
    "parse_number",
    "parse_number_pair",
    "parse_numbers",
    "parse_word_pair",
    "parse_words",
    "register_builtin_metrics",
]
