"""
Pure easing functions.
No imports from the rest of the project except the Easing enum.
"""
from __future__ import annotations
from typing import Callable, Dict

from domain.enums import Easing

EasingFn = Callable[[float], float]


def linear(p: float) -> float:
    return p


def ease_out_cubic(p: float) -> float:
    """Fast start, gentle settle: 1 - (1 - p)^3."""
    inv = 1.0 - p
    return 1.0 - inv * inv * inv


_CURVES: Dict[Easing, EasingFn] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
}


def get_easing(easing: Easing | str) -> EasingFn:
    """Look up a curve by enum member or by its string value."""
    return _CURVES[Easing(easing)]
