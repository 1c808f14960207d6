"""
File: onnx_embeddings/settings.py
Global configuration loaded via environment variables.
Use a `.env` file or export vars before running.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # RUNTIME
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    # MODEL
    model_variant: str = Field(
        "all-MiniLM-L6-v2", pattern="^(all-MiniLM-L6-v2|gte-large-en-v1.5)$"
    )
    model_path: str = "assets/models/all-MiniLM-L6-v2.onnx"
    tokenizer_name: Optional[str] = None  # defaults to the variant's HF repo
    tokenizer_local_files_only: bool = False
    # EMBEDDING
    max_sequence_length: Optional[int] = None  # 256, capped at the model maximum
    normalize_embeddings: bool = True
    pooling: Optional[str] = Field(None, pattern="^(mean|cls|graph)$")
    # ONNX RUNTIME
    onnx_providers: Optional[List[str]] = None  # CUDA first when available
    onnx_serialize_runs: bool = True
    # SIMILARITY / DISPLAY
    similarity_top_k: int = 1
    percentage_decimal_places: int = Field(2, ge=0, le=8)
    # SAMPLE
    sample_query_1: str = "That is a happy person"
    sample_query_2: str = "That is a very happy person"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", protected_namespaces=()
    )


settings = Settings()
