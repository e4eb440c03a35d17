"""Registry adapter: maps "kind:id" targets to elements and property handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from vizanim.adapter import PropReader, PropWriter
from vizanim.spec import AnimationTarget, AnimProperty, split_target

logger = logging.getLogger(__name__)

TargetResolver = Callable[[str], Any]


class AdapterRegistrationError(ValueError):
    """Conflicting or missing target kind registration."""


@dataclass
class KindHandle:
    """Chainable handle for registering properties on one target kind.

    Example:
        adapter.kind("node", nodes.get).prop(
            "x", get=lambda n: n.x, set=lambda n, v: setattr(n, "x", v)
        )
    """

    adapter: RegistryAdapter
    kind: str

    def prop(
        self,
        name: str,
        get: PropReader | None = None,
        set: PropWriter | None = None,
    ) -> KindHandle:
        self.adapter.register(self.kind, name, get=get, set=set)
        return self


class RegistryAdapter:
    """Host adapter built from per-kind resolvers and per-property handlers.

    Anything unregistered (kind, element id or property) reads as None and
    ignores writes.
    """

    def __init__(self, flush: Callable[[], None] | None = None) -> None:
        self._flush = flush
        self._resolvers: dict[str, TargetResolver] = {}
        self._handles: dict[str, KindHandle] = {}
        self._readers: dict[str, dict[str, PropReader]] = {}
        self._writers: dict[str, dict[str, PropWriter]] = {}

    def register_target_kind(self, kind: str, resolver: TargetResolver) -> None:
        self._resolvers[kind] = resolver

    def register(
        self,
        kind: str,
        prop: str,
        get: PropReader | None = None,
        set: PropWriter | None = None,
    ) -> None:
        if get is not None:
            self._readers.setdefault(kind, {})[prop] = get
        if set is not None:
            self._writers.setdefault(kind, {})[prop] = set

    register_property = register

    def kind(self, name: str, resolver: TargetResolver | None = None) -> KindHandle:
        existing = self._resolvers.get(name)
        if existing is not None:
            if resolver is not None and resolver != existing:
                raise AdapterRegistrationError(
                    f'Target kind "{name}" already registered with a different resolver'
                )
        elif resolver is None:
            raise AdapterRegistrationError(f'Target kind "{name}" is not registered yet')
        else:
            self.register_target_kind(name, resolver)

        handle = self._handles.get(name)
        if handle is None:
            handle = KindHandle(self, name)
            self._handles[name] = handle
        return handle

    def has_kind(self, name: str) -> bool:
        return name in self._resolvers

    def has_property(self, kind: str, prop: str) -> bool:
        return prop in self._readers.get(kind, {}) or prop in self._writers.get(kind, {})

    def _resolve(self, target: AnimationTarget) -> tuple[str, Any] | None:
        kind, ident = split_target(target)
        resolver = self._resolvers.get(kind)
        if resolver is None:
            logger.debug("No resolver for target %r", target)
            return None
        element = resolver(ident)
        if element is None:
            return None
        return kind, element

    def get(self, target: AnimationTarget, prop: AnimProperty) -> float | None:
        resolved = self._resolve(target)
        if resolved is None:
            return None
        kind, element = resolved
        reader = self._readers.get(kind, {}).get(prop)
        if reader is None:
            logger.debug("No reader for %s.%s", kind, prop)
            return None
        return reader(element)

    def set(self, target: AnimationTarget, prop: AnimProperty, value: float) -> None:
        resolved = self._resolve(target)
        if resolved is None:
            return
        kind, element = resolved
        writer = self._writers.get(kind, {}).get(prop)
        if writer is None:
            return
        writer(element, value)

    def flush(self) -> None:
        if self._flush is not None:
            self._flush()
