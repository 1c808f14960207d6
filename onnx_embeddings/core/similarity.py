# onnx_embeddings/core/similarity.py

"""
Similarity engine: cosine top-K ranking over a corpus and dot product.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from onnx_embeddings.core.domain.entities import SimilarityMatch
from onnx_embeddings.core.domain.errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    ShapeMismatchError,
)
from onnx_embeddings.core.normalization import normalize, to_matrix

__all__ = [
    "cosine_similarity_matrix",
    "dot_product",
    "top_k_by_cosine_similarity",
    "top_k_indices",
]


def cosine_similarity_matrix(corpus, query) -> np.ndarray:
    """
    cos_sim(query, corpus) = query_norm @ corpus_norm.T

    Args:
        corpus: ``[N, hidden]`` matrix.
        query: ``[M, hidden]`` matrix.

    Returns:
        np.ndarray: ``[M, N]`` similarity scores.
    """
    corpus_m = to_matrix(corpus)
    query_m = to_matrix(query)
    if corpus_m.shape[1] != query_m.shape[1]:
        raise ShapeMismatchError(
            f"Hidden dimension mismatch: corpus {corpus_m.shape[1]} vs query {query_m.shape[1]}"
        )
    corpus_norm = normalize(corpus_m, dim=1)
    query_norm = normalize(query_m, dim=1)
    return query_norm @ corpus_norm.T


def top_k_indices(scores: np.ndarray, limit: int) -> np.ndarray:
    """
    Indices of the ``limit`` largest values of a 1-D array, descending.

    Ties are resolved in favour of the lower index.
    """
    n = scores.shape[0]
    if limit >= n:
        return np.argsort(-scores, kind="stable")

    # Partial selection, then fix the boundary: argpartition does not keep
    # index order among values equal to the k-th largest.
    kth = np.partition(scores, n - limit)[n - limit]
    above = np.flatnonzero(scores > kth)
    tied = np.flatnonzero(scores == kth)[: limit - above.size]
    chosen = np.concatenate([above, tied])
    order = np.lexsort((chosen, -scores[chosen]))
    return chosen[order]


def top_k_by_cosine_similarity(
    corpus, query, limit: int
) -> List[List[SimilarityMatch]]:
    """
    Rank ``corpus`` rows against every ``query`` row by cosine similarity.

    Returns one list per query row, each holding ``limit`` matches sorted by
    descending score.

    Raises:
        InvalidArgumentError: ``limit`` outside ``[1, len(corpus)]``.
        ShapeMismatchError: non 2-D inputs or differing hidden dimensions.
    """
    similar = cosine_similarity_matrix(corpus, query)
    corpus_size = similar.shape[1]
    if limit < 1 or limit > corpus_size:
        raise InvalidArgumentError(
            f"limit must be between 1 and the corpus size ({corpus_size}), got {limit}"
        )

    results: List[List[SimilarityMatch]] = []
    for row in similar:
        idxs = top_k_indices(row, limit)
        results.append(
            [SimilarityMatch(score=float(row[i]), index=int(i)) for i in idxs]
        )
    return results


def dot_product(vector_a: Sequence[float], vector_b: Sequence[float]) -> float:
    a = np.asarray(vector_a, dtype=np.float32).reshape(-1)
    b = np.asarray(vector_b, dtype=np.float32).reshape(-1)
    if a.size != b.size:
        raise DimensionMismatchError(
            f"Dot product needs equal lengths, got {a.size} and {b.size}"
        )
    return float(np.dot(a, b))
