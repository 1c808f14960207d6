# onnx_embeddings/app/api_router.py

"""
FastAPI router for the application endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from onnx_embeddings.app.dependencies import get_embedding_service, get_search_service
from onnx_embeddings.core.domain.errors import (
    ConfigurationError,
    EngineContractError,
    InvalidArgumentError,
)
from onnx_embeddings.core.services.embedding import EmbeddingService
from onnx_embeddings.core.services.search import SemanticSearchService
from onnx_embeddings.models import (
    EmbedRequest,
    EmbedResponse,
    Match,
    SimilarityRequest,
    SimilarityResponse,
)
from onnx_embeddings.settings import settings
from onnx_embeddings.utils import to_percentage_non_rounding

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http_error(err: Exception) -> HTTPException:
    if isinstance(err, (ConfigurationError, InvalidArgumentError)):
        logger.warning(f"Rejected request: {err}")
        return HTTPException(422, detail=str(err))
    logger.error(f"Inference engine contract violated: {err}")
    return HTTPException(500, detail=str(err))


# ---------------------- API Endpoints ---------------------- #


@router.post("/embed", response_model=EmbedResponse)
def embed(
    request: EmbedRequest,
    service: EmbeddingService = Depends(get_embedding_service),
) -> EmbedResponse:
    normalize = request.normalize
    if normalize is None:
        normalize = settings.normalize_embeddings
    try:
        result = service.generate_embeddings(
            request.sentences,
            max_sequence_length=request.max_sequence_length,
            normalize=normalize,
        )
    except (ConfigurationError, InvalidArgumentError, EngineContractError) as err:
        raise _to_http_error(err) from err

    return EmbedResponse(
        model=service.variant.name,
        dimensions=list(result.dimensions),
        embeddings=result.rows(),
    )


@router.post("/similarity", response_model=SimilarityResponse)
def similarity(
    request: SimilarityRequest,
    service: SemanticSearchService = Depends(get_search_service),
) -> SimilarityResponse:
    """
    Ranks `corpus` against every sentence in `query` by cosine similarity.

    Args:
        request (SimilarityRequest): corpus, query and the number of matches per query.
        service (SemanticSearchService): search service dependency.

    Returns:
        SimilarityResponse: one list of matches per query sentence, plus the
        dot product when both sides hold a single sentence.
    """
    try:
        limit = request.limit or settings.similarity_top_k
        comparison = service.rank(request.corpus, request.query, limit)
    except (ConfigurationError, InvalidArgumentError, EngineContractError) as err:
        raise _to_http_error(err) from err

    places = settings.percentage_decimal_places
    results = [
        [
            Match(
                index=m.index,
                score=m.score,
                percentage=to_percentage_non_rounding(m.score, places),
            )
            for m in row
        ]
        for row in comparison.matches
    ]
    return SimilarityResponse(results=results, dot_product=comparison.dot_product)
