"""Host adapter protocol and a direct in-memory adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Protocol, runtime_checkable

from vizanim.spec import AdapterExtension, AnimationTarget, AnimProperty

PropReader = Callable[[Any], "float | None"]
PropWriter = Callable[[Any, float], None]


@runtime_checkable
class HostAdapter(Protocol):
    """Capability set the engine drives.

    ``flush()`` is optional; when present it is called once per evaluation,
    after every ``set()`` of that evaluation.
    """

    def get(self, target: AnimationTarget, prop: AnimProperty) -> float | None:
        ...

    def set(self, target: AnimationTarget, prop: AnimProperty, value: float) -> None:
        ...


def flush_adapter(adapter: HostAdapter) -> None:
    flush = getattr(adapter, "flush", None)
    if callable(flush):
        flush()


def apply_extensions(adapter: Any, extensions: Iterable[AdapterExtension]) -> None:
    """Run adapter extension callables in order."""
    for extension in extensions:
        extension(adapter)


def state_key(target: AnimationTarget, prop: AnimProperty) -> str:
    return f"{target}|{prop}"


@dataclass
class DictAdapter:
    """Adapter over a plain dict keyed by ``"target|property"``.

    Missing keys read as None. Every write lands in ``values``.
    """

    values: dict[str, float] = field(default_factory=dict)
    on_flush: Callable[[dict[str, float]], None] | None = None
    flush_count: int = field(default=0, init=False)

    def get(self, target: AnimationTarget, prop: AnimProperty) -> float | None:
        return self.values.get(state_key(target, prop))

    def set(self, target: AnimationTarget, prop: AnimProperty, value: float) -> None:
        self.values[state_key(target, prop)] = value

    def flush(self) -> None:
        self.flush_count += 1
        if self.on_flush is not None:
            self.on_flush(self.values)
