"""Compute per-track values at a timeline time and write them to the host."""

from __future__ import annotations

from bisect import bisect_right

from vizanim.adapter import HostAdapter, flush_adapter
from vizanim.easing import clamp01, get_easing
from vizanim.tracks import CompiledTimeline, InternalTween, Track


def active_tween(track: Track, t: float) -> InternalTween | None:
    """Latest tween with ``start <= t`` (last declared among equal starts)."""
    i = bisect_right(track.starts, t)
    if i == 0:
        return None
    return track.tweens[i - 1]


def value_at(track: Track, t: float) -> float:
    tween = active_tween(track, t)
    if tween is None:
        return track.base

    start_value = tween.resolved_from if tween.resolved_from is not None else track.base
    if tween.duration <= 0:
        return tween.to

    local = t - tween.start
    if local <= 0:
        return start_value
    if local >= tween.duration:
        return tween.to

    p = clamp01(local / tween.duration)
    eased = get_easing(tween.easing)(p)
    return start_value + (tween.to - start_value) * eased


def sample(timeline: CompiledTimeline, t: float) -> dict[str, float]:
    """Values of every track at ``t`` without touching a host."""
    return {track.key: value_at(track, t) for track in timeline.tracks}


def apply_at(timeline: CompiledTimeline, t: float, adapter: HostAdapter) -> None:
    """Write every track's value at ``t``, then flush once."""
    for track in timeline.tracks:
        adapter.set(track.target, track.property, value_at(track, t))
    flush_adapter(adapter)
