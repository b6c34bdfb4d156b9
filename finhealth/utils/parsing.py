"""Permissive numeric parsing for free-text form fields.

Every form value passes through ``parse_numeric_or_zero`` exactly once, at the
boundary where raw form data becomes a typed record. Scorers never see text.
"""
from __future__ import annotations

import math
import re
from typing import Any

_RUPEE_RE = re.compile(r"₹|\brs\.?|\binr\b", re.IGNORECASE)
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_numeric_or_zero(value: Any) -> float:
    """
    Parse a form value into a float, returning 0.0 for anything unusable.

    Handles:
      - 100000, 1.5e5 (numbers pass through; NaN/inf become 0)
      - "100000", " 42 ", "₹1,00,000", "Rs. 25,000"
      - "12abc" -> 12.0 (leading number wins)
      - None, "", "abc" -> 0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        f = float(value)
        return f if math.isfinite(f) else 0.0

    s = _RUPEE_RE.sub("", str(value)).replace(",", "").strip()
    m = _LEADING_NUMBER_RE.match(s)
    if not m:
        return 0.0
    try:
        f = float(m.group(0))
    except ValueError:
        return 0.0
    return f if math.isfinite(f) else 0.0


def round_half_up(x: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(x + 0.5))


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))
