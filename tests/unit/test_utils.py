# tests/unit/test_utils.py
import numpy as np
import pytest

from onnx_embeddings.utils import format_embedding, to_percentage_non_rounding


@pytest.mark.parametrize(
    "value,places,expected",
    [
        (0.123456, 2, "12.34%"),
        (0.99999, 2, "99.99%"),
        (1.0, 2, "100%"),
        (0.5, 0, "50%"),
        (0.987, 0, "98%"),
        (-0.123456, 2, "-12.34%"),
        (0.0, 3, "0%"),
    ],
)
def test_percentage_truncates(value, places, expected):
    assert to_percentage_non_rounding(value, places) == expected


def test_percentage_rejects_negative_places():
    with pytest.raises(ValueError):
        to_percentage_non_rounding(0.5, -1)


def test_format_embedding():
    assert format_embedding([0.5, -0.25]) == "[ 0.5, -0.25 ]"
    assert format_embedding([]) == "[ ]"


def test_format_embedding_prints_float32_without_widening():
    values = np.array([0.1, 1.0, -0.7], dtype=np.float32)
    assert format_embedding(values) == "[ 0.1, 1, -0.7 ]"
