from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from onnx_embeddings.core.domain.errors import InvalidArgumentError, ShapeMismatchError
from onnx_embeddings.core.shapes import as_tensor

__all__ = ["normalize", "to_matrix", "DEFAULT_EPS"]

DEFAULT_EPS = 1e-12


def to_matrix(values, shape: Optional[Sequence[int]] = None) -> np.ndarray:
    """2-D float32 view of ``values``; flat buffers need an explicit ``shape``."""
    if shape is not None:
        matrix = as_tensor(values, shape, dtype=np.float32)
    else:
        matrix = np.asarray(values, dtype=np.float32)
    if matrix.ndim != 2:
        raise ShapeMismatchError(f"Expected a 2-D matrix, got shape {matrix.shape}")
    return matrix


def normalize(
    matrix,
    shape: Optional[Sequence[int]] = None,
    p: float = 2.0,
    dim: int = -1,
    eps: float = DEFAULT_EPS,
) -> np.ndarray:
    """
    Lp-normalize a 2-D matrix along ``dim``, same semantics as
    ``torch.nn.functional.normalize``.

    Norms are clamped to ``eps`` so zero rows come back (near) zero instead
    of NaN.
    """
    if p <= 0:
        raise InvalidArgumentError(f"Norm order p must be positive, got {p}")
    values = to_matrix(matrix, shape)
    if not -values.ndim <= dim < values.ndim:
        raise InvalidArgumentError(f"dim {dim} out of range for a 2-D matrix")

    if np.isinf(p):
        norms = np.max(np.abs(values), axis=dim, keepdims=True)
    elif p == 2.0:
        norms = np.sqrt(np.sum(values * values, axis=dim, keepdims=True))
    else:
        norms = np.sum(np.abs(values) ** p, axis=dim, keepdims=True) ** (1.0 / p)

    denom = np.broadcast_to(np.maximum(norms, eps), values.shape)
    return (values / denom).astype(np.float32)
