"""
numeric.py
----------
Shared rounding and division helpers for the projection engine.

Rounding is half-up (2.5 -> 3, -2.5 -> -2) so whole-unit money and
2-decimal ratios come out identical to the figures lenders see in the
deal room.  Python's built-in round() is banker's rounding and must not
be used for reported figures.
"""

import math
import numbers


MONEY_DECIMALS   = 0   # whole currency units
RATIO_DECIMALS   = 2   # leverage, DSCR, coverage
PERCENT_DECIMALS = 1   # summary percentages (paydown %)


def round_half_up(value: float, decimals: int = 0) -> float:
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def round_money(value: float) -> float:
    return round_half_up(value, MONEY_DECIMALS)


def round_ratio(value: float) -> float:
    return round_half_up(value, RATIO_DECIMALS)


def round_percent(value: float) -> float:
    return round_half_up(value, PERCENT_DECIMALS)


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """numerator / denominator when denominator > 0, else default (never inf/nan)."""
    if denominator > 0:
        return numerator / denominator
    return default


def pct_of(base: float, pct: float) -> float:
    """Apply a whole-number percentage (9.5 = 9.5%) to base."""
    return base * (pct / 100)


def is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints past float range (e.g. 10**400 from a JSON payload)
        return False
