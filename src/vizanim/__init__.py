"""vizanim - animation timeline engine for diagram scenes."""

from vizanim.spec import (
    SPEC_VERSION,
    CORE_PROPERTIES,
    Ease,
    TweenSpec,
    AnimationSpec,
    UnsupportedSpecVersion,
    combine_specs,
    node_target,
    edge_target,
    overlay_target,
    split_target,
    spec_to_dict,
    spec_from_dict,
    dumps,
    loads,
)
from vizanim.easing import EASINGS, ease, get_easing
from vizanim.adapter import HostAdapter, DictAdapter, apply_extensions
from vizanim.registry import RegistryAdapter, KindHandle, AdapterRegistrationError
from vizanim.scene import Scene, SceneNode, SceneEdge, SceneOverlay, create_scene_adapter
from vizanim.builder import AnimationBuilder, AnimationAuthoringError, build_animation_spec
from vizanim.tracks import Track, InternalTween, CompiledTimeline, compile_tracks
from vizanim.resolve import resolve_from_values
from vizanim.evaluate import apply_at, sample, value_at
from vizanim.scheduler import FrameScheduler, ManualFrameScheduler, TimerFrameScheduler
from vizanim.player import Player, PlayerState
from vizanim.playback import create_scene_playback, play_animation_spec
from vizanim.config import PlaybackSettings, load_settings

__all__ = [
    # Spec
    "SPEC_VERSION",
    "CORE_PROPERTIES",
    "Ease",
    "TweenSpec",
    "AnimationSpec",
    "UnsupportedSpecVersion",
    "combine_specs",
    "node_target",
    "edge_target",
    "overlay_target",
    "split_target",
    "spec_to_dict",
    "spec_from_dict",
    "dumps",
    "loads",
    # Easing
    "EASINGS",
    "ease",
    "get_easing",
    # Adapters
    "HostAdapter",
    "DictAdapter",
    "apply_extensions",
    "RegistryAdapter",
    "KindHandle",
    "AdapterRegistrationError",
    # Scene
    "Scene",
    "SceneNode",
    "SceneEdge",
    "SceneOverlay",
    "create_scene_adapter",
    # Builder
    "AnimationBuilder",
    "AnimationAuthoringError",
    "build_animation_spec",
    # Engine
    "Track",
    "InternalTween",
    "CompiledTimeline",
    "compile_tracks",
    "resolve_from_values",
    "apply_at",
    "sample",
    "value_at",
    # Playback
    "FrameScheduler",
    "ManualFrameScheduler",
    "TimerFrameScheduler",
    "Player",
    "PlayerState",
    "create_scene_playback",
    "play_animation_spec",
    # Config
    "PlaybackSettings",
    "load_settings",
]

__version__ = "0.1.0"
