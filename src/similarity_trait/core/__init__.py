"""類似度インターフェースとレジストリ。"""

from .composition import iter_pairs, reduce_pairwise
from .protocols import (
    Similarity,
    SimilarityIIO,
    SimilarityIO,
    SimilarityShape,
    SimilaritySIO,
    SimilaritySO,
    is_static_similarity,
)
from .registry import (
    SimilarityEntry,
    SimilarityEvaluationError,
    SimilarityRegistry,
    SimilarityRegistryError,
    get_default_registry,
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
    "SimilarityEvaluationError",
    "SimilarityRegistry",
    "SimilarityRegistryError",
    "get_default_registry",
    "reset_default_registry",
    "iter_pairs",
    "reduce_pairwise",
]
