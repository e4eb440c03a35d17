"""Basic demo show: two nodes, an edge, and an overlay progress bar."""

from __future__ import annotations

from vizanim import (
    AnimationBuilder,
    AnimationSpec,
    ManualFrameScheduler,
    Scene,
    SceneEdge,
    SceneNode,
    SceneOverlay,
    TimerFrameScheduler,
    play_animation_spec,
)


def build_scene() -> Scene:
    return Scene(
        nodes=[SceneNode("a", x=120, y=80), SceneNode("b", x=320, y=80, opacity=0.2)],
        edges=[SceneEdge("a", "b")],
        overlays=[SceneOverlay("progress", params={"value": 0.0})],
    )


def build_spec() -> AnimationSpec:
    def overlay_props(adapter) -> None:
        adapter.kind("overlay").prop(
            "value",
            get=lambda o: o.params.get("value"),
            set=lambda o, v: o.params.__setitem__("value", v),
        )

    anim = AnimationBuilder().extend_adapter(overlay_props)

    # Slide node a across, then back after a pause
    anim.node("a").to({"x": 320}, duration=1200, easing="easeInOut")
    anim.wait(600).to({"x": 120}, duration=1200, easing="easeInOut")

    # Fade b in while a is moving
    anim.at(300).node("b").to({"opacity": 1.0}, duration=800, easing="easeOut")

    # Dash flow along the edge, whole show
    anim.at(0).edge("a", "b").to({"strokeDashoffset": -200}, duration=3000, from_={"strokeDashoffset": 0})

    # Progress overlay tracks the timeline
    anim.at(0).overlay("progress").to({"value": 1.0}, duration=3000)

    return anim.build()


def _report(scene: Scene) -> None:
    parts = [
        f"{n.id}: x={n.runtime.get('x', n.x):.1f} opacity={n.runtime.get('opacity', 1.0):.2f}"
        for n in scene.nodes
    ]
    parts.append(f"progress={scene.overlay('progress').params['value']:.2f}")
    print("  ".join(parts))


def run(fps: float = 60.0) -> None:
    scene = build_scene()
    player = play_animation_spec(
        scene,
        build_spec(),
        request_render=lambda: _report(scene),
        scheduler=TimerFrameScheduler(fps=fps),
    )
    try:
        player.wait()
    except KeyboardInterrupt:
        player.stop()


def run_headless(frame_ms: float = 16.0) -> Scene:
    """Play the show to completion on a virtual clock and return the final scene."""
    scene = build_scene()
    scheduler = ManualFrameScheduler()
    play_animation_spec(scene, build_spec(), scheduler=scheduler)
    scheduler.run_until_idle(frame_ms)
    return scene


if __name__ == "__main__":
    run()
