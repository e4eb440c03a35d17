"""Group a flat tween list into per-(target, property) tracks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from vizanim.spec import AnimationTarget, AnimProperty, Ease, TweenSpec


@dataclass
class InternalTween:
    """A tween placed on the timeline, plus its resolved starting value."""

    spec: TweenSpec
    index: int
    start: float
    end: float
    resolved_from: float | None = None

    @property
    def to(self) -> float:
        return self.spec.to

    @property
    def duration(self) -> float:
        return self.spec.duration

    @property
    def easing(self) -> Ease | None:
        return self.spec.easing


@dataclass
class Track:
    """All tweens of one target property, sorted by start time."""

    target: AnimationTarget
    property: AnimProperty
    tweens: list[InternalTween] = field(default_factory=list)
    base: float = 0.0
    starts: list[float] = field(default_factory=list, repr=False)

    @property
    def key(self) -> str:
        return track_key(self.target, self.property)


@dataclass
class CompiledTimeline:
    """Tracks derived from one spec load; ``resolved`` flips once froms are fixed."""

    tracks: list[Track] = field(default_factory=list)
    total_duration: float = 0.0
    resolved: bool = False

    def track(self, target: AnimationTarget, prop: AnimProperty) -> Track | None:
        key = track_key(target, prop)
        for track in self.tracks:
            if track.key == key:
                return track
        return None


def track_key(target: AnimationTarget, prop: AnimProperty) -> str:
    return f"{target}|{prop}"


def compile_tracks(tweens: Iterable[TweenSpec]) -> CompiledTimeline:
    """Build tracks in encounter order.

    Within a track tweens are stable-sorted by start, so equal starts keep
    declaration order (the last declared wins at evaluation).
    """
    by_key: dict[str, Track] = {}
    total = 0.0

    for index, spec in enumerate(tweens):
        start = spec.delay
        end = start + spec.duration
        total = max(total, end)

        key = track_key(spec.target, spec.property)
        track = by_key.get(key)
        if track is None:
            track = Track(target=spec.target, property=spec.property)
            by_key[key] = track
        track.tweens.append(InternalTween(spec=spec, index=index, start=start, end=end))

    for track in by_key.values():
        track.tweens.sort(key=lambda t: t.start)
        track.starts = [t.start for t in track.tweens]

    return CompiledTimeline(tracks=list(by_key.values()), total_duration=total)
