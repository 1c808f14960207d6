# onnx_embeddings/models.py
from typing import List, Optional

from pydantic import BaseModel, Field


# API
class EmbedRequest(BaseModel):
    """Request schema for the `/embed` endpoint."""

    sentences: List[str] = Field(..., min_length=1, description="Sentences to embed")
    max_sequence_length: Optional[int] = Field(
        None, ge=1, description="Tokens per sentence (defaults to the configured value)"
    )
    normalize: Optional[bool] = Field(
        None, description="L2-normalize every embedding (defaults to NORMALIZE_EMBEDDINGS)"
    )


class EmbedResponse(BaseModel):
    model: str
    dimensions: List[int]
    embeddings: List[List[float]]


class SimilarityRequest(BaseModel):
    """Request schema for the `/similarity` endpoint."""

    corpus: List[str] = Field(..., min_length=1, description="Sentences to rank")
    query: List[str] = Field(..., min_length=1, description="Query sentences")
    limit: Optional[int] = Field(
        None, ge=1, description="Matches returned per query (defaults to SIMILARITY_TOP_K)"
    )


class Match(BaseModel):
    index: int
    score: float
    percentage: str


class SimilarityResponse(BaseModel):
    results: List[List[Match]]
    dot_product: Optional[float] = None
