"""ペア単位の類似度を集合へ広げる組み合わせ部品。"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Iterator, Sequence
from itertools import combinations
from typing import Any, TypeVar

from similarity_trait.core.protocols import SimilarityIO

ItemT = TypeVar("ItemT")
OutputT = TypeVar("OutputT")

PairwiseOperation = Callable[[tuple[ItemT, ItemT]], OutputT]


def iter_pairs(collection: Sequence[ItemT]) -> Iterator[tuple[ItemT, ItemT]]:
    """``i < j`` となる順序なしペアを列挙する。"""

    return combinations(collection, 2)


def _as_operation(pairwise: Any) -> Callable[[Any], Any]:
    if inspect.isclass(pairwise):
        return pairwise.similarity
    if callable(pairwise):
        return pairwise
    msg = f"{pairwise!r} is not a similarity implementation"
    raise TypeError(msg)


def reduce_pairwise(
    pairwise: type[SimilarityIO[tuple[ItemT, ItemT], OutputT]] | PairwiseOperation,
    collection: Sequence[ItemT],
    *,
    reducer: Callable[[Iterable[OutputT]], OutputT] = max,
    default: OutputT | int = 0,
) -> OutputT | int:
    """すべての順序なしペアにペア単位の類似度を適用し、``reducer`` で集約する。

    要素数が 2 未満のときは ``default`` を返す。
    """

    if len(collection) < 2:
        return default
    operation = _as_operation(pairwise)
    return reducer(operation(pair) for pair in iter_pairs(collection))


__all__ = ["iter_pairs", "reduce_pairwise"]
