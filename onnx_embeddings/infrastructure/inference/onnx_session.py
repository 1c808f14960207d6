# onnx_embeddings/infrastructure/inference/onnx_session.py

import logging
import threading
from typing import Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
import onnxruntime as ort  # type: ignore

from onnx_embeddings.core.domain.errors import EngineContractError
from onnx_embeddings.core.ports import InferenceEnginePort

logger = logging.getLogger(__name__)


def select_providers(requested: Optional[Sequence[str]] = None) -> list:
    available = ort.get_available_providers()
    if requested:
        selected = [p for p in requested if p in available]
        if not selected:
            logger.warning(
                f"None of the requested providers {list(requested)} are available "
                f"({available}); falling back to CPU."
            )
            selected = ["CPUExecutionProvider"]
        return selected
    if "CUDAExecutionProvider" in available:
        return ["CUDAExecutionProvider", "CPUExecutionProvider"]
    return ["CPUExecutionProvider"]


class OnnxInferenceEngine(InferenceEnginePort):
    """
    Long-lived ONNX Runtime session with a fixed named-output contract.

    The declared graph outputs are checked once, at construction; a model
    exported with different output names fails here instead of on the
    first request.
    """

    def __init__(
        self,
        model_path: str,
        output_names: Sequence[str],
        providers: Optional[Sequence[str]] = None,
        serialize_runs: bool = True,
        session: Optional[ort.InferenceSession] = None,
    ):
        self.model_path = model_path
        self.output_names: Tuple[str, ...] = tuple(output_names)
        self.session = session or ort.InferenceSession(
            model_path, providers=select_providers(providers)
        )
        self._lock = threading.Lock() if serialize_runs else None
        self._check_outputs()
        logger.info(
            f"ONNX session ready for {model_path} (outputs: {list(self.output_names)})"
        )

    def _check_outputs(self) -> None:
        declared = [o.name for o in self.session.get_outputs()]
        if set(declared) != set(self.output_names):
            raise EngineContractError(
                f"Model {self.model_path} declares outputs {declared}, "
                f"expected {list(self.output_names)}"
            )

    @property
    def input_names(self) -> Tuple[str, ...]:
        return tuple(i.name for i in self.session.get_inputs())

    def run(self, feeds: Mapping[str, np.ndarray]) -> Dict[str, np.ndarray]:
        names = list(self.output_names)
        if self._lock is None:
            outputs = self.session.run(names, dict(feeds))
        else:
            with self._lock:
                outputs = self.session.run(names, dict(feeds))
        return dict(zip(names, outputs))
