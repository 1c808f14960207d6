# tests/integration/test_api_endpoints.py

import numpy as np
import pytest
from fastapi.testclient import TestClient
from pytest import approx

from onnx_embeddings.app.main import app  # lifespan warms the singleton
from onnx_embeddings.core.domain.errors import EngineContractError
from onnx_embeddings.settings import settings
from tests.doubles import CLS_ID, SEP_ID, DummyTokenizer, token_vector


# --- TestClient wired to the dummy-backed singleton ---
@pytest.fixture(scope="function")
def client(installed_service) -> TestClient:
    with TestClient(app) as c:
        yield c


# --- Tests ---


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "model": settings.model_variant}


def test_embed_returns_unit_vectors(client: TestClient, installed_service):
    resp = client.post("/api/embed", json={"sentences": ["a happy person", "a cat"]})
    assert resp.status_code == 200

    body = resp.json()
    assert body["model"] == installed_service.variant.name
    assert body["dimensions"] == [2, installed_service.dim]
    assert len(body["embeddings"]) == 2
    for row in body["embeddings"]:
        assert sum(v * v for v in row) == approx(1.0, abs=1e-4)


def test_embed_without_normalization(client: TestClient, installed_service):
    resp = client.post("/api/embed", json={"sentences": ["happy"], "normalize": False})
    assert resp.status_code == 200

    # mean over [CLS] happy [SEP]; padding is masked out
    hidden = installed_service.dim
    ids = [CLS_ID, DummyTokenizer.word_id("happy"), SEP_ID]
    expected = np.mean([token_vector(i, hidden) for i in ids], axis=0)
    assert resp.json()["embeddings"][0] == approx(expected.tolist(), abs=1e-5)


def test_embed_sequence_too_long_is_422(client: TestClient, installed_service):
    too_long = installed_service.variant.max_sequence_length + 1
    resp = client.post(
        "/api/embed", json={"sentences": ["hello"], "max_sequence_length": too_long}
    )
    assert resp.status_code == 422
    assert "greater than the maximum" in resp.json()["detail"]


def test_embed_empty_batch_rejected_by_schema(client: TestClient):
    resp = client.post("/api/embed", json={"sentences": []})
    assert resp.status_code == 422


def test_similarity_single_pair(client: TestClient):
    resp = client.post(
        "/api/similarity",
        json={"corpus": ["a happy person"], "query": ["a happy person"]},
    )
    assert resp.status_code == 200

    body = resp.json()
    assert len(body["results"]) == 1
    match = body["results"][0][0]
    assert match["index"] == 0
    assert match["score"] == approx(1.0, abs=1e-4)
    assert match["percentage"] in ("100%", "99.99%")
    assert body["dot_product"] == approx(1.0, abs=1e-4)


def test_similarity_ranks_corpus(client: TestClient):
    corpus = ["stock prices fell", "a happy person", "the cat sat"]
    resp = client.post(
        "/api/similarity",
        json={"corpus": corpus, "query": ["a happy person", "the cat sat"], "limit": 2},
    )
    assert resp.status_code == 200

    body = resp.json()
    assert [len(row) for row in body["results"]] == [2, 2]
    assert body["results"][0][0]["index"] == 1
    assert body["results"][1][0]["index"] == 2
    for row in body["results"]:
        assert row[0]["score"] >= row[1]["score"]
    assert body["dot_product"] is None


def test_similarity_limit_above_corpus_is_422(client: TestClient):
    resp = client.post(
        "/api/similarity", json={"corpus": ["one"], "query": ["two"], "limit": 3}
    )
    assert resp.status_code == 422


def test_engine_contract_violation_is_500(client: TestClient, installed_service, monkeypatch):
    monkeypatch.setattr(installed_service.engine, "run", lambda feeds: {})
    resp = client.post("/api/embed", json={"sentences": ["hello"]})
    assert resp.status_code == 500
    assert "token_embeddings" in resp.json()["detail"]


def test_engine_errors_are_typed(installed_service, monkeypatch):
    monkeypatch.setattr(installed_service.engine, "run", lambda feeds: {})
    with pytest.raises(EngineContractError):
        installed_service.generate_embeddings(["hello"])


def test_similarity_limit_defaults_to_setting(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "similarity_top_k", 2)
    resp = client.post(
        "/api/similarity",
        json={"corpus": ["one", "two", "three"], "query": ["two"]},
    )
    assert resp.status_code == 200
    assert len(resp.json()["results"][0]) == 2


def test_embed_normalization_defaults_to_setting(
    client: TestClient, installed_service, monkeypatch
):
    monkeypatch.setattr(settings, "normalize_embeddings", False)
    resp = client.post("/api/embed", json={"sentences": ["happy"]})
    assert resp.status_code == 200

    ids = [CLS_ID, DummyTokenizer.word_id("happy"), SEP_ID]
    expected = np.mean([token_vector(i, installed_service.dim) for i in ids], axis=0)
    assert resp.json()["embeddings"][0] == approx(expected.tolist(), abs=1e-5)
