"""Fluent authoring API that compiles to an AnimationSpec."""

from __future__ import annotations

import math
from typing import Any, Callable, Mapping

from vizanim.spec import (
    AdapterExtension,
    AnimationSpec,
    AnimationTarget,
    Ease,
    TweenSpec,
    edge_target,
    node_target,
    overlay_target,
)


class AnimationAuthoringError(ValueError):
    """Builder used incorrectly (programmer error)."""


def _is_number(v: Any) -> bool:
    return (
        isinstance(v, (int, float))
        and not isinstance(v, bool)
        and math.isfinite(v)
    )


class AnimationBuilder:
    """Compile "select target, move cursor, animate" calls into tweens.

    Authoring is sequential by default: every ``to()`` advances the cursor by
    its duration. ``at()`` and ``wait()`` are the only ways to overlap or
    reorder.

    Example:
        spec = (
            AnimationBuilder()
            .node("a").to({"x": 320}, duration=1200)
            .wait(600)
            .to({"x": 120}, duration=1200)
            .build()
        )
    """

    def __init__(self) -> None:
        self._cursor = 0.0
        self._target: AnimationTarget | None = None
        self._tweens: list[TweenSpec] = []
        self._extensions: list[AdapterExtension] = []

    @property
    def cursor(self) -> float:
        """Current cursor time in ms."""
        return self._cursor

    def node(self, node_id: str) -> AnimationBuilder:
        self._target = node_target(node_id)
        return self

    def edge(self, a: str, b: str | None = None) -> AnimationBuilder:
        """Select an edge by id (``edge("a->b")``) or endpoints (``edge("a", "b")``)."""
        self._target = edge_target(a, b)
        return self

    def overlay(self, key: str) -> AnimationBuilder:
        self._target = overlay_target(key)
        return self

    def target(self, target: AnimationTarget) -> AnimationBuilder:
        """Select a raw ``"kind:id"`` target."""
        self._target = target
        return self

    def at(self, ms: float) -> AnimationBuilder:
        self._cursor = max(0.0, float(ms))
        return self

    def wait(self, ms: float) -> AnimationBuilder:
        self._cursor = max(0.0, self._cursor + max(0.0, float(ms)))
        return self

    def to(
        self,
        props: Mapping[str, Any],
        duration: float,
        easing: Ease | str | None = None,
        from_: Mapping[str, Any] | None = None,
    ) -> AnimationBuilder:
        """Tween each numeric entry of ``props`` on the selected target.

        Non-numeric entries are skipped. ``from_`` supplies explicit starting
        values per property.
        """
        if self._target is None:
            raise AnimationAuthoringError(
                "AnimationBuilder.to(): no target selected (call node(), edge() or overlay())"
            )

        duration = max(0.0, float(duration))
        ease = Ease(easing) if easing is not None else None
        froms = from_ or {}

        for prop, value in props.items():
            if not _is_number(value):
                continue
            start = froms.get(prop)
            self._tweens.append(
                TweenSpec(
                    target=self._target,
                    property=prop,
                    to=value,
                    duration=duration,
                    delay=self._cursor,
                    easing=ease,
                    from_=start if _is_number(start) else None,
                )
            )

        self._cursor += duration
        return self

    def extend_adapter(self, extension: AdapterExtension) -> AnimationBuilder:
        """Carry an adapter registration callable with the built spec."""
        self._extensions.append(extension)
        return self

    def build(self) -> AnimationSpec:
        return AnimationSpec(
            tweens=tuple(self._tweens),
            extensions=tuple(self._extensions),
        )


def build_animation_spec(callback: Callable[[AnimationBuilder], Any]) -> AnimationSpec:
    """One-shot compilation: ``build_animation_spec(lambda a: a.node("x").to(...))``."""
    builder = AnimationBuilder()
    callback(builder)
    return builder.build()
