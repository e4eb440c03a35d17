"""Scene playback harness: wire specs, extensions and a scene adapter together."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from vizanim.adapter import apply_extensions
from vizanim.player import Player
from vizanim.scene import Scene, create_scene_adapter
from vizanim.scheduler import FrameScheduler
from vizanim.spec import AdapterExtension, AnimationSpec, combine_specs

logger = logging.getLogger(__name__)


def create_scene_playback(
    scene: Scene,
    request_render: Callable[[], None] | None = None,
    scheduler: FrameScheduler | None = None,
    extensions: Iterable[AdapterExtension] = (),
) -> Player:
    """Player bound to ``scene``, with ``extensions`` applied to its adapter."""
    adapter = create_scene_adapter(scene, request_render)
    apply_extensions(adapter, extensions)
    if scheduler is None:
        return Player(adapter)
    return Player(adapter, scheduler=scheduler)


def play_animation_spec(
    scene: Scene,
    spec: AnimationSpec | Iterable[AnimationSpec],
    request_render: Callable[[], None] | None = None,
    scheduler: FrameScheduler | None = None,
    autoplay: bool = True,
) -> Player:
    """Load one or more specs against ``scene`` and optionally start playing.

    Specs are played together; extensions they carry are applied before the
    first evaluation.
    """
    specs = [spec] if isinstance(spec, AnimationSpec) else list(spec)
    combined = combine_specs(specs)
    player = create_scene_playback(
        scene,
        request_render=request_render,
        scheduler=scheduler,
        extensions=combined.extensions,
    )
    player.load(combined)
    if autoplay and combined.tweens:
        player.play()
    logger.debug("Scene playback ready: %d specs, %d tweens", len(specs), len(combined))
    return player
