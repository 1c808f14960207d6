"""
File: onnx_embeddings/infrastructure/tokenizers/hf_tokenizer.py
WordPiece tokenizer adapter backed by `transformers.AutoTokenizer`.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from transformers import AutoTokenizer

from onnx_embeddings.core.domain.entities import TokenBatch
from onnx_embeddings.core.ports import TokenizerPort

logger = logging.getLogger(__name__)


class HuggingFaceTokenizer(TokenizerPort):
    """Pads/truncates every sentence to exactly ``max_sequence_length`` tokens."""

    def __init__(self, name_or_path: str, local_files_only: bool = False):
        self.name_or_path = name_or_path
        self.tokenizer = AutoTokenizer.from_pretrained(
            name_or_path, local_files_only=local_files_only
        )
        logger.info(f"Loaded tokenizer {name_or_path}")

    def encode(
        self,
        sentences: Sequence[str],
        max_sequence_length: int,
        with_token_type_ids: bool = False,
    ) -> TokenBatch:
        encoded = self.tokenizer(
            list(sentences),
            padding="max_length",
            truncation=True,
            max_length=max_sequence_length,
            return_token_type_ids=with_token_type_ids,
            return_tensors="np",
        )

        token_type_ids = None
        if with_token_type_ids:
            token_type_ids = encoded["token_type_ids"].astype(np.int64)

        return TokenBatch(
            input_ids=encoded["input_ids"].astype(np.int64),
            attention_mask=encoded["attention_mask"].astype(np.int64),
            token_type_ids=token_type_ids,
            batch_size=len(sentences),
            sequence_length=max_sequence_length,
        )
