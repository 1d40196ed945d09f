"""Numeric helpers shared by the engines and reporting.

Rounding is half-up at a fixed number of places, so 0.005 rounds to 0.01
and -0.005 rounds to 0.0.
"""
from __future__ import annotations

import math
import re
from typing import Optional

# Leading number of a raw input string: sign, digits, fraction, exponent.
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def round_to(value: float, places: int) -> float:
    if not math.isfinite(value):
        return value
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def round2(value: float) -> float:
    return round_to(value, 2)


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse the leading number of raw input text.

    Surrounding whitespace and trailing characters after the number are
    ignored ("12.5abc" -> 12.5). Returns None for empty, non-numeric or
    non-finite input.
    """
    if text is None:
        return None
    m = _NUMBER_PREFIX.match(str(text).strip())
    if not m:
        return None
    value = float(m.group(0))
    if not math.isfinite(value):
        return None
    return value
