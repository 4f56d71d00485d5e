"""Common parsing utilities for exchange adapters."""

import math
from typing import Any


def parse_float(value: Any) -> float | None:
    """Parse a numeric API field; blank, malformed and non-finite values become None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def parse_nonzero(value: Any) -> float | None:
    """Like parse_float, but 0 is treated as missing (venues send 0 for "no data")."""
    parsed = parse_float(value)
    return parsed or None


def parse_positive(value: Any) -> float | None:
    parsed = parse_float(value)
    return parsed if parsed is not None and parsed > 0 else None


def leverage_from_margin(margin_fraction: Any, default: int) -> int:
    """Max leverage from an initial margin fraction (0.04 -> 25x)."""
    margin = parse_float(margin_fraction)
    if margin is None or margin <= 0:
        return default
    return math.floor(1 / margin)


def pct_change(current: float | None, reference: float | None) -> float | None:
    """Percent change from reference to current; None without a positive reference."""
    if current is None or reference is None or reference <= 0:
        return None
    return (current - reference) / reference * 100
