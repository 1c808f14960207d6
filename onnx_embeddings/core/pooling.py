# onnx_embeddings/core/pooling.py

"""
Token-level -> sentence-level reductions.

See: https://huggingface.co/sentence-transformers/all-MiniLM-L6-v2#usage-huggingface-transformers
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from onnx_embeddings.core.domain.errors import ShapeMismatchError
from onnx_embeddings.core.shapes import as_tensor

__all__ = ["cls_pooling", "mean_pooling", "MASK_CLAMP_MIN"]

MASK_CLAMP_MIN = 1e-9


def _check_shapes(
    token_embeddings_shape: Sequence[int], attention_mask_shape: Sequence[int]
) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    token_shape = tuple(token_embeddings_shape)
    mask_shape = tuple(attention_mask_shape)
    if len(token_shape) != 3:
        raise ShapeMismatchError(
            f"Token embeddings must be [batch, sequence, hidden], got {token_shape}"
        )
    if len(mask_shape) != 2:
        raise ShapeMismatchError(
            f"Attention mask must be [batch, sequence], got {mask_shape}"
        )
    if token_shape[:2] != mask_shape:
        raise ShapeMismatchError(
            f"Attention mask {mask_shape} does not match token embeddings {token_shape}"
        )
    return token_shape, mask_shape


def mean_pooling(
    token_embeddings,
    attention_mask,
    token_embeddings_shape: Sequence[int],
    attention_mask_shape: Sequence[int],
) -> np.ndarray:
    """
    Masked mean pooling.

    Padding positions (mask == 0) do not contribute. Rows with an all-zero
    mask yield a zero vector: the token count is clamped to ``MASK_CLAMP_MIN``.

    Returns:
        np.ndarray: float32 array of shape ``[batch, hidden]``.
    """
    token_shape, mask_shape = _check_shapes(token_embeddings_shape, attention_mask_shape)
    embeddings = as_tensor(token_embeddings, token_shape, dtype=np.float32)
    mask = as_tensor(attention_mask, mask_shape, dtype=np.float32)

    mask_expanded = np.broadcast_to(mask[:, :, np.newaxis], token_shape)

    sum_embeddings = (embeddings * mask_expanded).sum(axis=1)
    sum_mask = np.clip(
        mask_expanded.sum(axis=1), MASK_CLAMP_MIN, np.finfo(np.float32).max
    )

    return sum_embeddings / sum_mask


def cls_pooling(
    token_embeddings,
    token_embeddings_shape: Sequence[int],
) -> np.ndarray:
    """First-token ([CLS]) vector of every row, shape ``[batch, hidden]``."""
    token_shape = tuple(token_embeddings_shape)
    if len(token_shape) != 3:
        raise ShapeMismatchError(
            f"Token embeddings must be [batch, sequence, hidden], got {token_shape}"
        )
    if token_shape[1] == 0:
        raise ShapeMismatchError("Cannot take the first token of an empty sequence")
    embeddings = as_tensor(token_embeddings, token_shape, dtype=np.float32)
    return embeddings[:, 0, :].copy()
