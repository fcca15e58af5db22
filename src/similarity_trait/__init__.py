"""任意の入力から任意の出力を求める類似度インターフェース。"""

from .core import (
    Similarity,
    SimilarityEntry,
    SimilarityEvaluationError,
    SimilarityIIO,
    SimilarityIO,
    SimilarityRegistry,
    SimilarityRegistryError,
    SimilarityShape,
    SimilaritySIO,
    SimilaritySO,
    get_default_registry,
    is_static_similarity,
    reduce_pairwise,
    reset_default_registry,
)

__all__ = [
    "Similarity",
    "SimilarityIO",
    "SimilarityIIO",
    "SimilaritySO",
    "SimilaritySIO",
    "SimilarityShape",
    "is_static_similarity",
    "SimilarityEntry",
    "SimilarityRegistry",
    "SimilarityRegistryError",
    "SimilarityEvaluationError",
    "get_default_registry",
    "reduce_pairwise",
    "reset_default_registry",
]
