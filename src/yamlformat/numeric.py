"""Float rendering without scientific notation."""

from __future__ import annotations

import math
from decimal import Decimal

NAN_LITERAL = ".nan"
POS_INF_LITERAL = ".inf"
NEG_INF_LITERAL = "-.inf"


def canonical_float(value: float) -> str:
    """Render *value* as fixed-point decimal text.

    Uses the shortest digit string that round-trips to the same 64-bit
    float, so ``0.1`` stays ``0.1`` and ``1e-07`` becomes ``0.0000001``.
    A zero fractional part is dropped (``100.0`` -> ``100``).
    """
    if math.isnan(value):
        return NAN_LITERAL
    if math.isinf(value):
        return POS_INF_LITERAL if value > 0 else NEG_INF_LITERAL

    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def is_integral(value: float) -> bool:
    """True for finite floats with no fractional part."""
    return math.isfinite(value) and float(value).is_integer()
