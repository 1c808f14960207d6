# onnx_embeddings/core/services/embedding.py

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

import numpy as np

from onnx_embeddings.core.domain.entities import (
    EmbeddingResult,
    ModelVariant,
    Pooling,
)
from onnx_embeddings.core.domain.errors import (
    ConfigurationError,
    EngineContractError,
    ShapeMismatchError,
)
from onnx_embeddings.core.normalization import normalize as l2_normalize
from onnx_embeddings.core.pooling import cls_pooling, mean_pooling
from onnx_embeddings.core.ports import EmbedderPort, InferenceEnginePort, TokenizerPort
from onnx_embeddings.core.shapes import (
    BatchShapes,
    as_tensor,
    build_batch_shapes,
    default_sequence_length,
    validate_batch_size,
    validate_sequence_length,
)

logger = logging.getLogger(__name__)


class EmbeddingService(EmbedderPort):
    """
    Sentence embedding pipeline for one model variant:
      1) tokenize to fixed-length [batch, sequence] buffers
      2) run the ONNX graph
      3) pool token outputs into one vector per sentence
      4) L2-normalize (optional)

    Tokenizer and engine are built once and reused; the service keeps no
    per-call state.
    """

    def __init__(
        self,
        variant: ModelVariant,
        tokenizer: TokenizerPort,
        engine: InferenceEnginePort,
        default_max_sequence_length: Optional[int] = None,
        default_pooling: Optional[Pooling] = None,
    ):
        if set(engine.output_names) != set(variant.output_names):
            raise EngineContractError(
                f"Engine outputs {list(engine.output_names)} do not match "
                f"{variant.name} outputs {list(variant.output_names)}"
            )
        self.variant = variant
        self.tokenizer = tokenizer
        self.engine = engine
        if default_max_sequence_length is None:
            default_max_sequence_length = default_sequence_length(
                variant.max_sequence_length
            )
        self.default_max_sequence_length = default_max_sequence_length
        validate_sequence_length(
            self.default_max_sequence_length, variant.max_sequence_length
        )
        self.default_pooling = default_pooling
        self.dim = variant.embedding_dimension
        self._resolve_pooling(default_pooling)

    def _resolve_pooling(self, pooling: Optional[Pooling]) -> Pooling:
        if pooling is None:
            pooling = self.default_pooling or self.variant.pooling
        pooling = Pooling(pooling)
        if pooling is Pooling.GRAPH and not self.variant.supports_graph_pooling:
            raise ConfigurationError(
                f"{self.variant.name} has no in-graph sentence embedding output"
            )
        return pooling

    def _output(self, outputs: Mapping[str, np.ndarray], name: str) -> np.ndarray:
        if name not in outputs:
            raise EngineContractError(f"Inference engine returned no '{name}' output")
        return outputs[name]

    def _pool(
        self,
        pooling: Pooling,
        outputs: Mapping[str, np.ndarray],
        attention_mask: np.ndarray,
        shapes: BatchShapes,
    ) -> np.ndarray:
        if pooling is Pooling.GRAPH:
            return as_tensor(
                self._output(outputs, self.variant.sentence_output_name),
                shapes.sentence_output,
            )
        token_output = self._output(outputs, self.variant.token_output_name)
        if pooling is Pooling.CLS:
            return cls_pooling(token_output, shapes.token_output)
        return mean_pooling(
            token_output, attention_mask, shapes.token_output, shapes.inputs
        )

    def generate_embeddings(
        self,
        sentences: Sequence[str],
        max_sequence_length: Optional[int] = None,
        normalize: bool = True,
        pooling: Optional[Pooling] = None,
    ) -> EmbeddingResult:
        """
        Embed ``sentences`` into a flat ``[batch, hidden]`` buffer.

        Raises:
            ConfigurationError: empty batch or sequence length above the
                model's maximum; raised before anything is tokenized.
            ShapeMismatchError: tokenizer/engine buffers disagree with the
                computed shapes.
            EngineContractError: the engine did not return an expected output.
        """
        if max_sequence_length is None:
            max_sequence_length = self.default_max_sequence_length
        validate_batch_size(len(sentences))
        validate_sequence_length(max_sequence_length, self.variant.max_sequence_length)
        pooling = self._resolve_pooling(pooling)

        shapes = build_batch_shapes(
            batch_size=len(sentences),
            max_sequence_length=max_sequence_length,
            hidden_dim=self.variant.embedding_dimension,
            model_max_sequence_length=self.variant.max_sequence_length,
        )

        batch = self.tokenizer.encode(
            sentences,
            max_sequence_length,
            with_token_type_ids=self.variant.input_kind.needs_token_type_ids,
        )
        if batch.shape != shapes.inputs:
            raise ShapeMismatchError(
                f"Tokenizer produced {batch.shape}, expected {shapes.inputs}"
            )

        feeds = self.variant.input_kind.build_feeds(batch)
        logger.debug(
            f"Running {self.variant.name} on {shapes.inputs} ({pooling.value} pooling)"
        )
        outputs = self.engine.run(feeds)

        embeddings = self._pool(pooling, outputs, batch.attention_mask, shapes)
        if normalize:
            embeddings = l2_normalize(embeddings)

        return EmbeddingResult(
            embeddings=np.ascontiguousarray(embeddings, dtype=np.float32).reshape(-1),
            dimensions=shapes.sentence_output,
        )

    # ------------------------------------------------------------------
    # Port Implementation
    # ------------------------------------------------------------------
    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []
        return self.generate_embeddings(texts).rows()
