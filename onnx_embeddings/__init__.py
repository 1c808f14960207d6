"""
ONNX sentence embeddings: tokenization -> ONNX inference -> pooling ->
normalization, plus cosine/dot-product similarity.
"""

__version__ = "0.1.0"
