# onnx_embeddings/infrastructure/models/variants.py

"""
Supported exported models. Each entry fixes the graph's input/output
contract so the embedding service never has to inspect types at runtime.
"""

from typing import Dict

from onnx_embeddings.core.domain.entities import (
    LAST_HIDDEN_STATE,
    SENTENCE_EMBEDDING,
    TOKEN_EMBEDDINGS,
    InputKind,
    ModelVariant,
    Pooling,
)
from onnx_embeddings.core.domain.errors import ConfigurationError

__all__ = ["MINILM_L6_V2", "GTE_LARGE_EN_V1_5", "VARIANTS", "get_variant"]

MINILM_L6_V2 = ModelVariant(
    name="all-MiniLM-L6-v2",
    hf_repo_name="sentence-transformers/all-MiniLM-L6-v2",
    max_sequence_length=256,
    embedding_dimension=384,
    input_kind=InputKind.BASIC,
    output_names=(TOKEN_EMBEDDINGS, SENTENCE_EMBEDDING),
    pooling=Pooling.MEAN,
    token_output_name=TOKEN_EMBEDDINGS,
    sentence_output_name=SENTENCE_EMBEDDING,
)

GTE_LARGE_EN_V1_5 = ModelVariant(
    name="gte-large-en-v1.5",
    hf_repo_name="Alibaba-NLP/gte-large-en-v1.5",
    max_sequence_length=8192,
    embedding_dimension=1024,
    input_kind=InputKind.EXTENDED,
    output_names=(LAST_HIDDEN_STATE,),
    pooling=Pooling.CLS,
    token_output_name=LAST_HIDDEN_STATE,
)

VARIANTS: Dict[str, ModelVariant] = {
    MINILM_L6_V2.name: MINILM_L6_V2,
    GTE_LARGE_EN_V1_5.name: GTE_LARGE_EN_V1_5,
}


def get_variant(name: str) -> ModelVariant:
    try:
        return VARIANTS[name]
    except KeyError as err:
        raise ConfigurationError(
            f"Unsupported model variant: {name}. Known: {sorted(VARIANTS)}"
        ) from err
