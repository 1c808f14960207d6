"""FastAPI dependencies for the application."""

from onnx_embeddings.app.factory import get_embedding_service as _get_embedding_service
from onnx_embeddings.app.factory import get_search_service as _get_search_service
from onnx_embeddings.core.services.embedding import EmbeddingService
from onnx_embeddings.core.services.search import SemanticSearchService


def get_embedding_service() -> EmbeddingService:
    """Return the singleton :class:`EmbeddingService` instance."""
    return _get_embedding_service()


def get_search_service() -> SemanticSearchService:
    return _get_search_service()


__all__ = ["get_embedding_service", "get_search_service"]
