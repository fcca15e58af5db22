"""類似度インターフェースの定義。

``SimilarityIO`` が正規のシグネチャで、1 つの入力から 1 つの出力を返す
``similarity`` 操作だけを持つ。実装はインスタンスを生成せずに型そのもので
呼び出せるよう、``similarity`` を ``staticmethod`` として宣言する::

    class PercentChange:
        @staticmethod
        def similarity(pair: tuple[int, int]) -> float:
            a, b = pair
            return 100.0 * (b - a) / abs(a)

    PercentChange.similarity((100, 120))  # 20.0

入力・出力の型に制約はない。ペアの比較ならタプル、集合の比較なら
シーケンスを受け取る。計算が未定義になり得る場合に ``X | None`` を返すか、
例外や非有限値に任せるかは各実装が決めて文書化する。対称性や可換性も
インターフェースは保証しない。

``SimilarityIIO`` / ``SimilaritySO`` / ``SimilaritySIO`` は同じ考え方の
派生形で、入力の渡し方だけが異なる。
"""

from __future__ import annotations

import inspect
from enum import Enum
from typing import Any, Protocol, TypeVar, runtime_checkable

InputT = TypeVar("InputT", contravariant=True)
Input0T = TypeVar("Input0T", contravariant=True)
Input1T = TypeVar("Input1T", contravariant=True)
OutputT = TypeVar("OutputT", covariant=True)


class SimilarityShape(str, Enum):
    """入力の形に関する慣例。型システムでは強制しない。"""

    PAIRWISE = "pairwise"
    COLLECTION = "collection"
    EITHER = "either"


@runtime_checkable
class SimilarityIO(Protocol[InputT, OutputT]):
    """1 入力 1 出力の類似度。実装クラスそのものがこのプロトコルを満たす。"""

    @staticmethod
    def similarity(input: InputT, /) -> OutputT:  # pragma: no cover - protocol
        """入力の類似度を返す。"""
        ...


@runtime_checkable
class SimilarityIIO(Protocol[Input0T, Input1T, OutputT]):
    """2 入力 1 出力の類似度。"""

    @staticmethod
    def similarity(input0: Input0T, input1: Input1T, /) -> OutputT:  # pragma: no cover
        ...


@runtime_checkable
class SimilaritySO(Protocol[OutputT]):
    """自身の属性同士を比較する類似度。"""

    def similarity(self) -> OutputT:  # pragma: no cover - protocol
        ...


@runtime_checkable
class SimilaritySIO(Protocol[InputT, OutputT]):
    """自身と別の値を比較する類似度。"""

    def similarity(self, input: InputT, /) -> OutputT:  # pragma: no cover - protocol
        ...


Similarity = SimilarityIO


def is_static_similarity(candidate: Any) -> bool:
    """インスタンスなしで ``similarity`` を呼び出せるクラスかどうか。"""

    if not inspect.isclass(candidate):
        return False
    try:
        attribute = inspect.getattr_static(candidate, "similarity")
    except AttributeError:
        return False
    return isinstance(attribute, (staticmethod, classmethod))


__all__ = [
    "Similarity",
    "SimilarityIO",
    "SimilarityIIO",
    "SimilaritySO",
    "SimilaritySIO",
    "SimilarityShape",
    "is_static_similarity",
]
