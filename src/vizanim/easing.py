"""Easing curves mapping [0, 1] -> [0, 1]."""

from __future__ import annotations

from typing import Callable

from vizanim.spec import Ease

EaseFn = Callable[[float], float]


def linear(p: float) -> float:
    return p


def ease_in(p: float) -> float:
    return p * p


def ease_out(p: float) -> float:
    return 1.0 - (1.0 - p) * (1.0 - p)


def ease_in_out(p: float) -> float:
    if p < 0.5:
        return 2.0 * p * p
    return 1.0 - (-2.0 * p + 2.0) ** 2 / 2.0


EASINGS: dict[Ease, EaseFn] = {
    Ease.LINEAR: linear,
    Ease.EASE_IN: ease_in,
    Ease.EASE_OUT: ease_out,
    Ease.EASE_IN_OUT: ease_in_out,
}


def clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


def get_easing(easing: Ease | str | None) -> EaseFn:
    """Look up a curve by enum or name. None means linear."""
    if easing is None:
        return linear
    return EASINGS[Ease(easing)]


def ease(easing: Ease | str | None, p: float) -> float:
    return get_easing(easing)(p)
