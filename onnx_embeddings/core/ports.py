"""
File: onnx_embeddings/core/ports.py
Domain Interfaces - Adapters
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

from onnx_embeddings.core.domain.entities import Embedding, TokenBatch


# -------- Ports --------
@runtime_checkable
class TokenizerPort(Protocol):
    def encode(
        self,
        sentences: Sequence[str],
        max_sequence_length: int,
        with_token_type_ids: bool = False,
    ) -> TokenBatch: ...


@runtime_checkable
class InferenceEnginePort(Protocol):
    output_names: Tuple[str, ...]

    def run(self, feeds: Mapping[str, np.ndarray]) -> Mapping[str, np.ndarray]: ...


@runtime_checkable
class EmbedderPort(Protocol):
    dim: int

    def embed(self, texts: Sequence[str]) -> Sequence[Embedding]: ...
