"""Animation data model and wire format."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable

SPEC_VERSION = "viz-anim/1"

CORE_PROPERTIES = ("x", "y", "opacity", "scale", "rotation", "strokeDashoffset")

# Targets are opaque "<kind>:<id>" strings; properties are open-ended names.
AnimationTarget = str
AnimProperty = str

# (adapter) -> None; registers host-specific properties at play time.
AdapterExtension = Callable[[Any], None]


class UnsupportedSpecVersion(ValueError):
    """Serialized spec carries a version this library does not understand."""


class Ease(str, Enum):
    """Interpolation curve names."""

    LINEAR = "linear"
    EASE_IN = "easeIn"
    EASE_OUT = "easeOut"
    EASE_IN_OUT = "easeInOut"


def node_target(node_id: str) -> AnimationTarget:
    return f"node:{node_id}"


def edge_target(a: str, b: str | None = None) -> AnimationTarget:
    """Edge target from an edge id, or from its two endpoints."""
    edge_id = a if b is None else f"{a}->{b}"
    return f"edge:{edge_id}"


def overlay_target(key: str) -> AnimationTarget:
    return f"overlay:{key}"


def split_target(target: AnimationTarget) -> tuple[str, str]:
    """Split a target into (kind, id). Kind is empty when there is no colon."""
    kind, sep, ident = str(target).partition(":")
    if not sep:
        return "", str(target)
    return kind, ident


def _finite(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class TweenSpec:
    """One property interpolation on one target.

    Times are in milliseconds. ``delay`` is the absolute start time on the
    timeline; ``from_`` overrides the captured/chained starting value.
    """

    target: AnimationTarget
    property: AnimProperty
    to: float
    duration: float
    delay: float = 0.0
    easing: Ease | None = None
    from_: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "to", _finite("to", self.to))
        duration = _finite("duration", self.duration)
        delay = _finite("delay", self.delay)
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        object.__setattr__(self, "duration", duration)
        object.__setattr__(self, "delay", delay)
        if self.from_ is not None:
            object.__setattr__(self, "from_", _finite("from", self.from_))
        if self.easing is not None and not isinstance(self.easing, Ease):
            object.__setattr__(self, "easing", Ease(self.easing))

    @property
    def start(self) -> float:
        return self.delay

    @property
    def end(self) -> float:
        return self.delay + self.duration

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": "tween",
            "target": self.target,
            "property": self.property,
            "to": self.to,
            "duration": self.duration,
        }
        if self.delay:
            data["delay"] = self.delay
        if self.easing is not None:
            data["easing"] = self.easing.value
        if self.from_ is not None:
            data["from"] = self.from_
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TweenSpec:
        if not isinstance(data, dict):
            raise ValueError(f"Tween entry must be an object, got {type(data).__name__}")
        kind = data.get("kind", "tween")
        if kind != "tween":
            raise ValueError(f"Unknown animation entry kind: {kind!r}")
        try:
            target = data["target"]
            prop = data["property"]
            to = data["to"]
            duration = data["duration"]
        except KeyError as e:
            raise ValueError(f"Tween is missing required field {e.args[0]!r}") from e
        return cls(
            target=str(target),
            property=str(prop),
            to=to,
            duration=duration,
            delay=data.get("delay", 0.0),
            easing=data.get("easing"),
            from_=data.get("from"),
        )


@dataclass(frozen=True)
class AnimationSpec:
    """Portable compiled timeline.

    ``extensions`` is a side channel for adapter registration callables. It is
    not part of the data: equality, repr and serialization ignore it.
    """

    tweens: tuple[TweenSpec, ...] = ()
    version: str = SPEC_VERSION
    extensions: tuple[AdapterExtension, ...] = field(
        default=(), compare=False, repr=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "tweens", tuple(self.tweens))
        object.__setattr__(self, "extensions", tuple(self.extensions))

    def __len__(self) -> int:
        return len(self.tweens)


def combine_specs(specs: Iterable[AnimationSpec]) -> AnimationSpec:
    """Merge specs into one; tween delays are already absolute."""
    tweens: list[TweenSpec] = []
    extensions: list[AdapterExtension] = []
    for spec in specs:
        tweens.extend(spec.tweens)
        extensions.extend(spec.extensions)
    return AnimationSpec(tweens=tuple(tweens), extensions=tuple(extensions))


def spec_to_dict(spec: AnimationSpec) -> dict[str, Any]:
    return {
        "version": spec.version,
        "tweens": [t.to_dict() for t in spec.tweens],
    }


def spec_from_dict(data: dict[str, Any]) -> AnimationSpec:
    version = data.get("version")
    if version != SPEC_VERSION:
        raise UnsupportedSpecVersion(
            f"Unsupported animation spec version {version!r} (expected {SPEC_VERSION!r})"
        )
    raw_tweens = data.get("tweens", [])
    if not isinstance(raw_tweens, list):
        raise ValueError("tweens must be a list")
    return AnimationSpec(tweens=tuple(TweenSpec.from_dict(t) for t in raw_tweens))


def dumps(spec: AnimationSpec, indent: int | None = None) -> str:
    return json.dumps(spec_to_dict(spec), indent=indent)


def loads(text: str) -> AnimationSpec:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Animation spec must be a JSON object")
    return spec_from_dict(data)
