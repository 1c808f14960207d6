# tests/unit/infrastructure/test_onnx_session.py
from types import SimpleNamespace
from unittest import mock

import numpy as np
import pytest

from onnx_embeddings.core.domain.errors import EngineContractError
from onnx_embeddings.infrastructure.inference import onnx_session
from onnx_embeddings.infrastructure.inference.onnx_session import (
    OnnxInferenceEngine,
    select_providers,
)


def _fake_session(output_names, input_names=("input_ids", "attention_mask")):
    session = mock.Mock()
    session.get_outputs.return_value = [SimpleNamespace(name=n) for n in output_names]
    session.get_inputs.return_value = [SimpleNamespace(name=n) for n in input_names]
    return session


def test_output_contract_checked_at_construction():
    session = _fake_session(["last_hidden_state"])
    with pytest.raises(EngineContractError, match="declares outputs"):
        OnnxInferenceEngine(
            "model.onnx",
            output_names=("token_embeddings", "sentence_embedding"),
            session=session,
        )


def test_output_order_does_not_matter():
    session = _fake_session(["sentence_embedding", "token_embeddings"])
    engine = OnnxInferenceEngine(
        "model.onnx",
        output_names=("token_embeddings", "sentence_embedding"),
        session=session,
    )
    assert engine.input_names == ("input_ids", "attention_mask")


@pytest.mark.parametrize("serialize_runs", [True, False])
def test_run_maps_outputs_by_name(serialize_runs):
    session = _fake_session(["last_hidden_state"])
    hidden = np.ones((1, 2, 4), dtype=np.float32)
    session.run.return_value = [hidden]
    engine = OnnxInferenceEngine(
        "model.onnx",
        output_names=("last_hidden_state",),
        serialize_runs=serialize_runs,
        session=session,
    )
    feeds = {"input_ids": np.zeros((1, 2), dtype=np.int64)}

    outputs = engine.run(feeds)

    session.run.assert_called_once_with(["last_hidden_state"], feeds)
    assert outputs["last_hidden_state"] is hidden


@mock.patch("onnx_embeddings.infrastructure.inference.onnx_session.ort")
def test_session_built_from_model_path(mock_ort):
    mock_ort.get_available_providers.return_value = ["CPUExecutionProvider"]
    mock_ort.InferenceSession.return_value = _fake_session(["last_hidden_state"])

    OnnxInferenceEngine("assets/model.onnx", output_names=("last_hidden_state",))

    mock_ort.InferenceSession.assert_called_once_with(
        "assets/model.onnx", providers=["CPUExecutionProvider"]
    )


def test_select_providers_prefers_cuda(monkeypatch):
    monkeypatch.setattr(
        onnx_session.ort,
        "get_available_providers",
        lambda: ["CUDAExecutionProvider", "CPUExecutionProvider"],
    )
    assert select_providers() == ["CUDAExecutionProvider", "CPUExecutionProvider"]
    assert select_providers(["CPUExecutionProvider"]) == ["CPUExecutionProvider"]


def test_select_providers_falls_back_to_cpu(monkeypatch):
    monkeypatch.setattr(
        onnx_session.ort, "get_available_providers", lambda: ["CPUExecutionProvider"]
    )
    assert select_providers(["TensorrtExecutionProvider"]) == ["CPUExecutionProvider"]
