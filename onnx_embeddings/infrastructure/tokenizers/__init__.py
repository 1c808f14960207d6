"""
File: onnx_embeddings/infrastructure/tokenizers/__init__.py
Tokenizer adapters.
"""

from .hf_tokenizer import HuggingFaceTokenizer

__all__ = ["HuggingFaceTokenizer"]
