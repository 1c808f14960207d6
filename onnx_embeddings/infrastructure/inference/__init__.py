"""
File: onnx_embeddings/infrastructure/inference/__init__.py
Inference engine adapters.
"""

from .onnx_session import OnnxInferenceEngine

__all__ = ["OnnxInferenceEngine"]
