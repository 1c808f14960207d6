"""
Utils: light display helpers
"""

from decimal import Decimal
from typing import Iterable

import numpy as np

__all__ = ["format_embedding", "to_percentage_non_rounding"]


def to_percentage_non_rounding(value: float, decimal_places: int = 2) -> str:
    """
    Render a [-1, 1] score as a percentage, truncating (never rounding) to
    ``decimal_places``.

    >>> to_percentage_non_rounding(0.123456)
    '12.34%'
    """
    if decimal_places < 0:
        raise ValueError("decimal_places must be >= 0")
    divide_by = 10**decimal_places
    truncated = int(value * 100 * divide_by)
    return f"{Decimal(truncated) / Decimal(divide_by):f}%"


def format_embedding(values: Iterable[float]) -> str:
    """Shortest text that round-trips each value as float32."""
    items = ", ".join(
        np.format_float_positional(np.float32(v), unique=True, trim="-")
        for v in values
    )
    return f"[ {items} ]" if items else "[ ]"
