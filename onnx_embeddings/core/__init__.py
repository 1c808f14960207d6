"""
File: onnx_embeddings/core/__init__.py
Core module with the numeric reductions and the embedding pipeline.
"""

from .normalization import normalize
from .pooling import cls_pooling, mean_pooling
from .shapes import BatchShapes, build_batch_shapes
from .similarity import dot_product, top_k_by_cosine_similarity

__all__ = [
    "BatchShapes",
    "build_batch_shapes",
    "cls_pooling",
    "dot_product",
    "mean_pooling",
    "normalize",
    "top_k_by_cosine_similarity",
]
