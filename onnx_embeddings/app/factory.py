# onnx_embeddings/app/factory.py

"""
Singleton lifecycle for EmbeddingService:
- Initialized ONCE on first call to get_embedding_service().
- To reset (e.g. for tests or settings reload), call reset_embedding_service().
- For multiprocess (e.g., uvicorn workers>1), each process holds its own
  session; the ONNX session is never shared across processes.
"""

import logging
from typing import Optional

from onnx_embeddings.core.domain.entities import ModelVariant, Pooling
from onnx_embeddings.core.services.embedding import EmbeddingService
from onnx_embeddings.core.services.search import SemanticSearchService
from onnx_embeddings.infrastructure.inference.onnx_session import OnnxInferenceEngine
from onnx_embeddings.infrastructure.models.variants import get_variant
from onnx_embeddings.infrastructure.tokenizers.hf_tokenizer import HuggingFaceTokenizer
from onnx_embeddings.settings import settings

logger = logging.getLogger(__name__)


def load_model(
    variant: ModelVariant,
    model_path: str,
    tokenizer_name: Optional[str] = None,
    max_sequence_length: Optional[int] = None,
    pooling: Optional[Pooling] = None,
) -> EmbeddingService:
    """Build tokenizer + ONNX session once and wrap them in an EmbeddingService."""
    tokenizer = HuggingFaceTokenizer(
        tokenizer_name or variant.hf_repo_name,
        local_files_only=settings.tokenizer_local_files_only,
    )
    engine = OnnxInferenceEngine(
        model_path=model_path,
        output_names=variant.output_names,
        providers=settings.onnx_providers,
        serialize_runs=settings.onnx_serialize_runs,
    )
    return EmbeddingService(
        variant=variant,
        tokenizer=tokenizer,
        engine=engine,
        default_max_sequence_length=max_sequence_length,
        default_pooling=pooling,
    )


def configured_pooling() -> Optional[Pooling]:
    return Pooling(settings.pooling) if settings.pooling else None


_embedding_service = None


def get_embedding_service(force_reload: bool = False) -> EmbeddingService:
    global _embedding_service
    if force_reload or _embedding_service is None:
        variant = get_variant(settings.model_variant)
        logger.info(f"Loading {variant.name} from {settings.model_path}")
        _embedding_service = load_model(
            variant=variant,
            model_path=settings.model_path,
            tokenizer_name=settings.tokenizer_name,
            max_sequence_length=settings.max_sequence_length,
            pooling=configured_pooling(),
        )
    return _embedding_service


def get_search_service() -> SemanticSearchService:
    return SemanticSearchService(get_embedding_service())


def reset_embedding_service():
    """
    Reset the singleton embedding service (for tests, dev, or controlled reload).
    """
    global _embedding_service
    _embedding_service = None
