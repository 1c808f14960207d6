"""
File: onnx_embeddings/core/domain/errors.py
Error taxonomy raised by the embedding core.
"""

__all__ = [
    "EmbeddingError",
    "ConfigurationError",
    "InvalidArgumentError",
    "ShapeMismatchError",
    "DimensionMismatchError",
    "EngineContractError",
]


class EmbeddingError(Exception):
    """Base class for every error raised by the embedding core."""


class ConfigurationError(EmbeddingError, ValueError):
    """Invalid model/batch configuration (sequence length, empty batch, unknown variant)."""


class InvalidArgumentError(EmbeddingError, ValueError):
    """A caller supplied an argument outside the accepted range."""


class ShapeMismatchError(InvalidArgumentError):
    """A flat buffer does not match its declared tensor shape."""


class DimensionMismatchError(ShapeMismatchError):
    """Two vectors that must have equal length do not."""


class EngineContractError(EmbeddingError, RuntimeError):
    """The inference engine does not expose the outputs the model variant expects."""
