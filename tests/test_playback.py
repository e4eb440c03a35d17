"""Tests for scene playback and frame schedulers."""

import threading
import time

import pytest

from vizanim.adapter import DictAdapter
from vizanim.builder import AnimationBuilder
from vizanim.player import Player
from vizanim.playback import create_scene_playback, play_animation_spec
from vizanim.scene import Scene, SceneNode, SceneOverlay
from vizanim.scheduler import FrameScheduler, ManualFrameScheduler, TimerFrameScheduler
from vizanim.spec import AnimationSpec, TweenSpec


def overlay_value(adapter) -> None:
    adapter.kind("overlay").prop(
        "value",
        get=lambda o: o.params.get("value"),
        set=lambda o, v: o.params.__setitem__("value", v),
    )


class BlockingAdapter(DictAdapter):
    """Holds writes made on timer threads until ``release`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def set(self, target: str, prop: str, value: float) -> None:
        if threading.current_thread() is not threading.main_thread():
            self.entered.set()
            self.release.wait(5.0)
        super().set(target, prop, value)


def slow_spec() -> AnimationSpec:
    return AnimationSpec(tweens=[TweenSpec("node:a", "x", to=1000, duration=10_000)])


@pytest.fixture
def scene() -> Scene:
    return Scene(
        nodes=[SceneNode("a", x=120)],
        overlays=[SceneOverlay("progress", params={"value": 0.0})],
    )


class TestManualFrameScheduler:
    def test_advance_fires_pending_once(self) -> None:
        scheduler = ManualFrameScheduler(start=100)
        seen: list[float] = []
        scheduler.request_frame(seen.append)
        assert scheduler.now() == 100
        assert scheduler.advance(16) == 1
        assert seen == [116]
        assert scheduler.advance(16) == 0

    def test_requested_during_frame_waits(self) -> None:
        scheduler = ManualFrameScheduler()
        seen: list[float] = []

        def again(now: float) -> None:
            seen.append(now)
            if len(seen) < 3:
                scheduler.request_frame(again)

        scheduler.request_frame(again)
        scheduler.advance(10)
        assert seen == [10]
        assert scheduler.pending == 1
        assert scheduler.run_until_idle(frame_ms=10) == 2
        assert seen == [10, 20, 30]

    def test_cancel(self) -> None:
        scheduler = ManualFrameScheduler()
        handle = scheduler.request_frame(lambda now: pytest.fail("cancelled frame ran"))
        scheduler.cancel_frame(handle)
        scheduler.cancel_frame(handle)
        scheduler.advance(16)

    def test_is_frame_scheduler(self) -> None:
        assert isinstance(ManualFrameScheduler(), FrameScheduler)
        assert isinstance(TimerFrameScheduler(), FrameScheduler)


class TestTimerFrameScheduler:
    def test_cancelled_frame_never_runs(self) -> None:
        scheduler = TimerFrameScheduler(fps=10)
        ran = threading.Event()
        handle = scheduler.request_frame(lambda now: ran.set())
        scheduler.cancel_frame(handle)
        assert not ran.wait(0.3)

    def test_plays_to_completion(self) -> None:
        adapter = DictAdapter()
        player = Player(adapter, scheduler=TimerFrameScheduler(fps=100))
        player.load(AnimationSpec(tweens=[TweenSpec("node:a", "x", to=10, duration=50)]))
        player.play()
        assert player.wait(timeout=5.0)
        assert player.time() == 50
        assert adapter.values["node:a|x"] == 10

    def test_pause_play_during_frame_keeps_one_pending(self) -> None:
        adapter = BlockingAdapter()
        scheduler = TimerFrameScheduler(fps=100)
        player = Player(adapter, scheduler=scheduler)
        player.load(slow_spec())
        player.play()
        assert adapter.entered.wait(5.0)

        def toggle() -> None:
            player.pause()
            player.play()

        other = threading.Thread(target=toggle)
        other.start()
        time.sleep(0.05)
        adapter.release.set()
        other.join(5.0)
        time.sleep(0.1)
        try:
            assert player.is_playing()
            assert scheduler.pending <= 1
        finally:
            player.stop()
        assert scheduler.pending == 0

    def test_stop_during_frame_leaves_start_pose(self) -> None:
        adapter = BlockingAdapter()
        scheduler = TimerFrameScheduler(fps=100)
        player = Player(adapter, scheduler=scheduler)
        player.load(slow_spec())
        player.play()
        assert adapter.entered.wait(5.0)

        other = threading.Thread(target=player.stop)
        other.start()
        time.sleep(0.05)
        adapter.release.set()
        other.join(5.0)
        time.sleep(0.1)
        assert not player.is_playing()
        assert player.time() == 0
        assert scheduler.pending == 0
        assert adapter.values["node:a|x"] == 0


class TestScenePlayback:
    def test_create_scene_playback(self, scene: Scene) -> None:
        scheduler = ManualFrameScheduler()
        player = create_scene_playback(scene, scheduler=scheduler, extensions=[overlay_value])
        assert player.scheduler is scheduler
        player.load(AnimationBuilder().overlay("progress").to({"value": 1.0}, duration=100).build())
        player.seek(50)
        assert scene.overlay("progress").params["value"] == pytest.approx(0.5)

    def test_default_scheduler(self, scene: Scene) -> None:
        assert isinstance(create_scene_playback(scene).scheduler, TimerFrameScheduler)

    def test_extensions_applied_before_first_evaluation(self, scene: Scene) -> None:
        scene.overlay("progress").params["value"] = 0.25
        spec = (
            AnimationBuilder()
            .extend_adapter(overlay_value)
            .overlay("progress")
            .to({"value": 1.0}, duration=100)
            .build()
        )
        player = play_animation_spec(scene, spec, scheduler=ManualFrameScheduler(), autoplay=False)
        # the base was captured through the extension's reader
        assert player.timeline.tracks[0].base == 0.25
        player.seek(50)
        assert scene.overlay("progress").params["value"] == pytest.approx(0.625)

    def test_without_extension_overlay_is_ignored(self, scene: Scene) -> None:
        spec = AnimationBuilder().overlay("progress").to({"value": 1.0}, duration=100).build()
        player = play_animation_spec(scene, spec, scheduler=ManualFrameScheduler(), autoplay=False)
        player.seek(100)
        assert scene.overlay("progress").params["value"] == 0.0

    def test_multiple_specs_play_together(self, scene: Scene) -> None:
        scheduler = ManualFrameScheduler()
        renders: list[int] = []
        move = AnimationBuilder().node("a").to({"x": 320}, duration=1000).build()
        progress = (
            AnimationBuilder()
            .extend_adapter(overlay_value)
            .overlay("progress")
            .to({"value": 1.0}, duration=2000)
            .build()
        )
        player = play_animation_spec(
            scene,
            [move, progress],
            request_render=lambda: renders.append(1),
            scheduler=scheduler,
        )
        assert player.is_playing()
        assert player.duration() == 2000

        scheduler.advance(500)
        assert scene.node("a").runtime["x"] == pytest.approx(220)
        assert scene.overlay("progress").params["value"] == pytest.approx(0.25)

        scheduler.run_until_idle(frame_ms=100)
        assert scene.node("a").runtime["x"] == 320
        assert scene.overlay("progress").params["value"] == 1.0
        assert len(renders) == 1 + 1 + 15

    def test_empty_spec_not_autoplayed(self, scene: Scene) -> None:
        scheduler = ManualFrameScheduler()
        player = play_animation_spec(scene, AnimationSpec(), scheduler=scheduler)
        assert not player.is_playing()
        assert scheduler.pending == 0
