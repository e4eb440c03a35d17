"""Fix every tween's starting value, once per load."""

from __future__ import annotations

import logging

from vizanim.adapter import HostAdapter
from vizanim.tracks import CompiledTimeline, Track

logger = logging.getLogger(__name__)


def capture_base(track: Track, adapter: HostAdapter) -> float:
    got = adapter.get(track.target, track.property)
    if isinstance(got, bool) or not isinstance(got, (int, float)):
        logger.debug("No live value for %s, using 0", track.key)
        return 0.0
    return float(got)


def resolve_track(track: Track, adapter: HostAdapter) -> None:
    """Resolve froms on one track.

    Precedence: explicit ``from_``; else the previous tween's ``to`` when that
    tween has ended by this one's start; else the captured base. Only the
    immediately preceding tween is considered.
    """
    track.base = capture_base(track, adapter)
    prev = None
    for tween in track.tweens:
        if tween.spec.from_ is not None:
            tween.resolved_from = tween.spec.from_
        elif prev is not None and prev.end <= tween.start:
            tween.resolved_from = prev.to
        else:
            tween.resolved_from = track.base
        prev = tween


def resolve_from_values(timeline: CompiledTimeline, adapter: HostAdapter) -> bool:
    """Resolve every track unless already done. Returns True if work was done.

    Later calls are no-ops: by then the host's live values may be the
    engine's own writes.
    """
    if timeline.resolved:
        return False
    for track in timeline.tracks:
        resolve_track(track, adapter)
    timeline.resolved = True
    return True
