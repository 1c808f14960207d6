# onnx_embeddings/core/services/search.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from onnx_embeddings.core.domain.entities import SimilarityMatch
from onnx_embeddings.core.services.embedding import EmbeddingService
from onnx_embeddings.core.similarity import dot_product, top_k_by_cosine_similarity


@dataclass(frozen=True)
class Comparison:
    matches: List[List[SimilarityMatch]]
    dot_product: Optional[float] = None


class SemanticSearchService:
    """Embeds corpus and query sentences and ranks the corpus per query."""

    def __init__(self, embedder: EmbeddingService):
        self.embedder = embedder

    def rank(
        self,
        corpus: Sequence[str],
        query: Sequence[str],
        limit: int,
        max_sequence_length: Optional[int] = None,
    ) -> Comparison:
        corpus_result = self.embedder.generate_embeddings(
            corpus, max_sequence_length=max_sequence_length
        )
        query_result = self.embedder.generate_embeddings(
            query, max_sequence_length=max_sequence_length
        )
        matches = top_k_by_cosine_similarity(
            corpus_result.as_matrix(), query_result.as_matrix(), limit
        )

        # A single sentence on each side is the pairwise comparison case.
        dot = None
        if len(corpus) == 1 and len(query) == 1:
            dot = dot_product(corpus_result.embeddings, query_result.embeddings)

        return Comparison(matches=matches, dot_product=dot)
