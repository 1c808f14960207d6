from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from onnx_embeddings.core.domain.errors import ShapeMismatchError

Embedding = Sequence[float]
TensorShape = Tuple[int, ...]

INPUT_IDS = "input_ids"
ATTENTION_MASK = "attention_mask"
TOKEN_TYPE_IDS = "token_type_ids"

LAST_HIDDEN_STATE = "last_hidden_state"
TOKEN_EMBEDDINGS = "token_embeddings"
SENTENCE_EMBEDDING = "sentence_embedding"


def _flat_int64(values) -> np.ndarray:
    return np.asarray(values, dtype=np.int64).reshape(-1)


@dataclass(frozen=True)
class TokenBatch:
    """
    Tokenizer output for one inference call.

    All arrays are flat, sentence-major, and hold exactly
    ``batch_size * sequence_length`` elements.
    """

    input_ids: np.ndarray
    attention_mask: np.ndarray
    batch_size: int
    sequence_length: int
    token_type_ids: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        expected = self.batch_size * self.sequence_length
        for name in (INPUT_IDS, ATTENTION_MASK, TOKEN_TYPE_IDS):
            values = getattr(self, name)
            if values is None:
                continue
            flat = _flat_int64(values)
            if flat.size != expected:
                raise ShapeMismatchError(
                    f"{name} has {flat.size} elements, expected "
                    f"{self.batch_size} x {self.sequence_length} = {expected}"
                )
            object.__setattr__(self, name, flat)

    @property
    def shape(self) -> TensorShape:
        return (self.batch_size, self.sequence_length)

    @property
    def has_token_type_ids(self) -> bool:
        return self.token_type_ids is not None


class InputKind(str, Enum):
    """Closed set of input contracts a model graph can declare."""

    BASIC = "basic"
    EXTENDED = "extended"

    @property
    def input_names(self) -> Tuple[str, ...]:
        if self is InputKind.EXTENDED:
            return (INPUT_IDS, ATTENTION_MASK, TOKEN_TYPE_IDS)
        return (INPUT_IDS, ATTENTION_MASK)

    @property
    def needs_token_type_ids(self) -> bool:
        return self is InputKind.EXTENDED

    def build_feeds(self, batch: TokenBatch) -> Dict[str, np.ndarray]:
        """Named ``[batch, sequence]`` int64 tensors for the inference engine."""
        if self.needs_token_type_ids and not batch.has_token_type_ids:
            raise ShapeMismatchError(
                "Model input requires token_type_ids but the batch has none"
            )
        return {
            name: getattr(batch, name).reshape(batch.shape)
            for name in self.input_names
        }


class Pooling(str, Enum):
    """How the sentence embedding is obtained from the graph outputs."""

    MEAN = "mean"  # masked mean over token-level output
    CLS = "cls"  # first token of token-level output
    GRAPH = "graph"  # pooled inside the exported graph


@dataclass(frozen=True)
class ModelVariant:
    name: str
    hf_repo_name: str
    max_sequence_length: int
    embedding_dimension: int
    input_kind: InputKind
    output_names: Tuple[str, ...]
    pooling: Pooling
    token_output_name: str
    sentence_output_name: Optional[str] = None

    @property
    def supports_graph_pooling(self) -> bool:
        return self.sentence_output_name is not None


@dataclass(frozen=True)
class EmbeddingResult:
    """Flat ``[batch, hidden]`` embeddings plus their dimensions."""

    embeddings: np.ndarray
    dimensions: TensorShape

    def as_matrix(self) -> np.ndarray:
        return self.embeddings.reshape(self.dimensions)

    def rows(self) -> List[List[float]]:
        return self.as_matrix().tolist()


@dataclass(frozen=True)
class SimilarityMatch:
    score: float
    index: int
