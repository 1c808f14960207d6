"""
File: onnx_embeddings/app/__init__.py
FastAPI application module.
"""

from .main import app
from .dependencies import get_embedding_service

__all__ = [
    "app",
    "get_embedding_service"
]
