"""Minimal diagram scene model and its registry-backed adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from vizanim.registry import RegistryAdapter


@dataclass
class SceneNode:
    """A node with a layout position and runtime (animated) overrides."""

    id: str
    x: float = 0.0
    y: float = 0.0
    opacity: float | None = None
    runtime: dict[str, float] = field(default_factory=dict)


@dataclass
class SceneEdge:
    """An edge between two nodes. The id defaults to ``"source->target"``."""

    source: str
    target: str
    id: str | None = None
    runtime: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.id is None:
            self.id = f"{self.source}->{self.target}"


@dataclass
class SceneOverlay:
    """Registry-rendered overlay; animated values live in ``params``."""

    key: str
    params: dict[str, Any] = field(default_factory=dict)


class Scene:
    """Collection of nodes, edges and overlays with lookup helpers."""

    def __init__(
        self,
        nodes: list[SceneNode] | None = None,
        edges: list[SceneEdge] | None = None,
        overlays: list[SceneOverlay] | None = None,
    ) -> None:
        self._nodes: dict[str, SceneNode] = {}
        self._edges: dict[str, SceneEdge] = {}
        self._overlays: dict[str, SceneOverlay] = {}
        for node in nodes or []:
            self.add_node(node)
        for edge in edges or []:
            self.add_edge(edge)
        for overlay in overlays or []:
            self.add_overlay(overlay)

    def add_node(self, node: SceneNode) -> Scene:
        if node.id in self._nodes:
            raise ValueError(f"Duplicate node id {node.id!r}")
        self._nodes[node.id] = node
        return self

    def add_edge(self, edge: SceneEdge) -> Scene:
        if edge.id in self._edges:
            raise ValueError(f"Duplicate edge id {edge.id!r}")
        self._edges[edge.id] = edge
        return self

    def add_overlay(self, overlay: SceneOverlay) -> Scene:
        self._overlays[overlay.key] = overlay
        return self

    def node(self, node_id: str) -> SceneNode | None:
        return self._nodes.get(node_id)

    def edge(self, edge_id: str) -> SceneEdge | None:
        return self._edges.get(edge_id)

    def overlay(self, key: str) -> SceneOverlay | None:
        return self._overlays.get(key)

    @property
    def nodes(self) -> list[SceneNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[SceneEdge]:
        return list(self._edges.values())

    @property
    def overlays(self) -> list[SceneOverlay]:
        return list(self._overlays.values())


def _runtime_writer(name: str) -> Callable[[Any, float], None]:
    def write(el: Any, value: float) -> None:
        el.runtime[name] = value

    return write


def create_scene_adapter(
    scene: Scene, request_render: Callable[[], None] | None = None
) -> RegistryAdapter:
    """Adapter for the core node/edge properties of ``scene``.

    Overlays are resolvable by key but carry no properties until an adapter
    extension registers some.
    """
    adapter = RegistryAdapter(flush=request_render)

    node = adapter.kind("node", scene.node)
    edge = adapter.kind("edge", scene.edge)
    adapter.kind("overlay", scene.overlay)

    (
        node.prop("x", get=lambda n: n.runtime.get("x", n.x), set=_runtime_writer("x"))
        .prop("y", get=lambda n: n.runtime.get("y", n.y), set=_runtime_writer("y"))
        .prop(
            "opacity",
            get=lambda n: n.runtime.get(
                "opacity", n.opacity if n.opacity is not None else 1.0
            ),
            set=_runtime_writer("opacity"),
        )
        .prop("scale", get=lambda n: n.runtime.get("scale", 1.0), set=_runtime_writer("scale"))
        .prop("rotation", get=lambda n: n.runtime.get("rotation"), set=_runtime_writer("rotation"))
    )

    (
        edge.prop(
            "opacity", get=lambda e: e.runtime.get("opacity", 1.0), set=_runtime_writer("opacity")
        ).prop(
            "strokeDashoffset",
            get=lambda e: e.runtime.get("strokeDashoffset"),
            set=_runtime_writer("strokeDashoffset"),
        )
    )

    return adapter
