# scripts/compare_sentences.py

"""
Sample program: embeds two sentences with the configured model and prints
their cosine similarity and dot product as truncated percentages.

Usage:
    python -m scripts.compare_sentences ["first sentence" "second sentence"]
"""

import logging
import sys
from typing import List, Optional

from onnx_embeddings.app.factory import configured_pooling, load_model
from onnx_embeddings.core.domain.errors import EmbeddingError
from onnx_embeddings.core.services.embedding import EmbeddingService
from onnx_embeddings.core.similarity import dot_product, top_k_by_cosine_similarity
from onnx_embeddings.infrastructure.models.variants import get_variant
from onnx_embeddings.settings import settings
from onnx_embeddings.utils import format_embedding, to_percentage_non_rounding

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def compare(service: EmbeddingService, query1: str, query2: str) -> List[str]:
    """Embed both queries and return the report lines."""
    normalize = settings.normalize_embeddings
    places = settings.percentage_decimal_places

    first = service.generate_embeddings([query1], normalize=normalize)
    second = service.generate_embeddings([query2], normalize=normalize)

    lines = [
        f"Query 1 embeddings:\n{format_embedding(first.embeddings)}",
        f"Query 2 embeddings:\n{format_embedding(second.embeddings)}",
    ]

    top_k = top_k_by_cosine_similarity(first.as_matrix(), second.as_matrix(), limit=1)
    for row in top_k:
        for match in row:
            lines.append(
                f"Cosine similarity score: {to_percentage_non_rounding(match.score, places)}"
            )

    dot = dot_product(first.embeddings, second.embeddings)
    lines.append(f"Dot product similarity score: {to_percentage_non_rounding(dot, places)}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    query1, query2 = settings.sample_query_1, settings.sample_query_2
    if len(args) >= 2:
        query1, query2 = args[0], args[1]
    elif args:
        logger.error("Pass two sentences, or none to use the configured samples.")
        return 2

    try:
        variant = get_variant(settings.model_variant)
        logger.info(f"Loading {variant.name} from {settings.model_path}")
        service = load_model(
            variant=variant,
            model_path=settings.model_path,
            tokenizer_name=settings.tokenizer_name,
            max_sequence_length=settings.max_sequence_length,
            pooling=configured_pooling(),
        )
        for line in compare(service, query1, query2):
            print(f"{line}\n")
    except EmbeddingError as e:
        logger.error(f"Halting script: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
