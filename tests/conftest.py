# tests/conftest.py
import dataclasses
import logging
import sys
from pathlib import Path

import pytest

# --- 1. Add project root to PYTHONPATH ---
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)  # Basic config for test logs

# --- 2. Patch Settings globally for the test session ---
from onnx_embeddings.settings import settings as global_app_settings

global_app_settings.model_variant = "all-MiniLM-L6-v2"
global_app_settings.model_path = str(PROJECT_ROOT / "tests/data/does-not-exist.onnx")
global_app_settings.max_sequence_length = None
global_app_settings.pooling = None
global_app_settings.onnx_providers = None
global_app_settings.percentage_decimal_places = 2

from onnx_embeddings.app import factory as app_factory_module  # noqa: E402
from onnx_embeddings.core.services.embedding import EmbeddingService  # noqa: E402
from onnx_embeddings.infrastructure.models.variants import (  # noqa: E402
    GTE_LARGE_EN_V1_5,
    MINILM_L6_V2,
)
from tests.doubles import DummyEngine, DummyTokenizer  # noqa: E402


# --- 3. Test doubles for the external collaborators (see tests/doubles.py) ---
@pytest.fixture
def tiny_minilm():
    return dataclasses.replace(MINILM_L6_V2, embedding_dimension=8, max_sequence_length=16)


@pytest.fixture
def tiny_gte():
    return dataclasses.replace(GTE_LARGE_EN_V1_5, embedding_dimension=8, max_sequence_length=32)


@pytest.fixture
def dummy_tokenizer():
    return DummyTokenizer()


@pytest.fixture
def make_service(dummy_tokenizer):
    """Factory for EmbeddingService instances wired to the test doubles."""

    def _make(variant, **kwargs):
        engine = DummyEngine(variant)
        return EmbeddingService(
            variant=variant, tokenizer=dummy_tokenizer, engine=engine, **kwargs
        )

    return _make


@pytest.fixture
def minilm_service(make_service, tiny_minilm):
    return make_service(tiny_minilm)


# --- 4. Reset the EmbeddingService singleton around every test ---
@pytest.fixture(scope="function", autouse=True)
def reset_embedding_service_singleton():
    app_factory_module.reset_embedding_service()
    yield
    app_factory_module.reset_embedding_service()


@pytest.fixture
def installed_service(minilm_service, monkeypatch):
    """Make the app factory hand out the dummy-backed service."""
    monkeypatch.setattr(app_factory_module, "_embedding_service", minilm_service)
    return minilm_service
