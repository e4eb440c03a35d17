"""Playback settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_FPS = 60.0
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass
class PlaybackSettings:
    fps: float = DEFAULT_FPS
    log_level: str = DEFAULT_LOG_LEVEL


def _clamp_fps(value: float) -> float:
    return max(1.0, min(240.0, float(value)))


def _parse_fps(raw: str | None) -> float:
    if raw is None:
        return DEFAULT_FPS
    try:
        return _clamp_fps(float(raw))
    except (TypeError, ValueError):
        return DEFAULT_FPS


def _parse_log_level(raw: str | None) -> str:
    if raw is None:
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    return level if level in _LOG_LEVELS else DEFAULT_LOG_LEVEL


def load_settings(environ: Mapping[str, str] | None = None) -> PlaybackSettings:
    """Settings from ``VIZANIM_FPS`` and ``VIZANIM_LOG_LEVEL``; bad values fall back to defaults."""
    env = os.environ if environ is None else environ
    return PlaybackSettings(
        fps=_parse_fps(env.get("VIZANIM_FPS")),
        log_level=_parse_log_level(env.get("VIZANIM_LOG_LEVEL")),
    )


def configure_logging(settings: PlaybackSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
