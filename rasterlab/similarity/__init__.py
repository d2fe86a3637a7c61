# Picture similarity scoring

from .cosine import (
    SimilarityScorer,
    intensity_vector,
    cosine_similarity,
)

__all__ = [
    "SimilarityScorer",
    "intensity_vector",
    "cosine_similarity",
]
