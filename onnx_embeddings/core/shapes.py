"""
File: onnx_embeddings/core/shapes.py
Batch shape bookkeeping: tensor dimensions for model inputs/outputs and
flat-buffer -> shaped-array conversion.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import prod
from typing import Sequence

import numpy as np

from onnx_embeddings.core.domain.entities import TensorShape
from onnx_embeddings.core.domain.errors import ConfigurationError, ShapeMismatchError

__all__ = [
    "BatchShapes",
    "DEFAULT_MAX_SEQUENCE_LENGTH",
    "as_tensor",
    "build_batch_shapes",
    "default_sequence_length",
    "validate_batch_size",
    "validate_sequence_length",
]


# Used when no length is configured, capped at the model maximum.
DEFAULT_MAX_SEQUENCE_LENGTH = 256


@dataclass(frozen=True)
class BatchShapes:
    inputs: TensorShape  # [batch, sequence]
    token_output: TensorShape  # [batch, sequence, hidden]
    sentence_output: TensorShape  # [batch, hidden]


def validate_sequence_length(
    max_sequence_length: int, model_max_sequence_length: int
) -> None:
    if max_sequence_length <= 0:
        raise ConfigurationError(
            f"max_sequence_length must be positive, got {max_sequence_length}"
        )
    if max_sequence_length > model_max_sequence_length:
        raise ConfigurationError(
            f"The provided max sequence length {max_sequence_length} is greater than "
            f"the maximum supported sequence length {model_max_sequence_length}."
        )


def default_sequence_length(model_max_sequence_length: int) -> int:
    return min(DEFAULT_MAX_SEQUENCE_LENGTH, model_max_sequence_length)


def validate_batch_size(batch_size: int) -> None:
    if batch_size <= 0:
        raise ConfigurationError(f"batch_size must be at least 1, got {batch_size}")


def build_batch_shapes(
    batch_size: int,
    max_sequence_length: int,
    hidden_dim: int,
    model_max_sequence_length: int,
) -> BatchShapes:
    """
    Compute the tensor shapes for one inference call.

    Raises:
        ConfigurationError: empty batch, non-positive extents, or a sequence
            length above what the model supports.
    """
    validate_batch_size(batch_size)
    validate_sequence_length(max_sequence_length, model_max_sequence_length)
    if hidden_dim <= 0:
        raise ConfigurationError(f"hidden_dim must be positive, got {hidden_dim}")

    return BatchShapes(
        inputs=(batch_size, max_sequence_length),
        token_output=(batch_size, max_sequence_length, hidden_dim),
        sentence_output=(batch_size, hidden_dim),
    )


def as_tensor(buffer, shape: Sequence[int], dtype=np.float32) -> np.ndarray:
    """Reshape a flat buffer into ``shape``; the element counts must agree exactly."""
    shape = tuple(int(extent) for extent in shape)
    if any(extent < 0 for extent in shape):
        raise ShapeMismatchError(f"Negative extent in shape {shape}")
    flat = np.asarray(buffer, dtype=dtype).reshape(-1)
    expected = prod(shape)
    if flat.size != expected:
        raise ShapeMismatchError(
            f"Buffer of {flat.size} elements does not match shape {shape} ({expected} elements)"
        )
    return flat.reshape(shape)
