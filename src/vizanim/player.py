"""Playback controller: load/play/pause/seek/stop over a host adapter."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum

from vizanim.adapter import HostAdapter
from vizanim.evaluate import apply_at
from vizanim.resolve import resolve_from_values
from vizanim.scheduler import FrameScheduler, TimerFrameScheduler
from vizanim.spec import AnimationSpec
from vizanim.tracks import CompiledTimeline, compile_tracks

logger = logging.getLogger(__name__)


class PlayerState(Enum):
    """Playback states."""

    UNLOADED = "unloaded"
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass
class Player:
    """Drives a compiled timeline forward in time against an adapter.

    Every operation before ``load()`` is a silent no-op. There is at most one
    pending frame request at any time; pause, stop and load cancel it.

    Operations hold an internal lock, so a frame delivered on a timer thread
    never interleaves with a call from another thread. Each frame request
    carries a generation number; a frame from an older request is dropped
    even if it was already being delivered when it was cancelled.

    Example:
        player = Player(adapter, scheduler=ManualFrameScheduler())
        player.load(spec).play()
    """

    adapter: HostAdapter
    scheduler: FrameScheduler = field(default_factory=TimerFrameScheduler)

    _spec: AnimationSpec | None = field(default=None, init=False, repr=False)
    _timeline: CompiledTimeline = field(default_factory=CompiledTimeline, init=False, repr=False)
    _state: PlayerState = field(default=PlayerState.UNLOADED, init=False, repr=False)
    _time: float = field(default=0.0, init=False, repr=False)
    _last_frame_time: float = field(default=0.0, init=False, repr=False)
    _frame: int | None = field(default=None, init=False, repr=False)
    _generation: int = field(default=0, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)
    _done_event: threading.Event = field(default_factory=threading.Event, init=False, repr=False)

    def __post_init__(self) -> None:
        self._done_event.set()

    @property
    def state(self) -> PlayerState:
        return self._state

    @property
    def timeline(self) -> CompiledTimeline:
        return self._timeline

    @property
    def spec(self) -> AnimationSpec | None:
        return self._spec

    def _cancel_frame(self) -> None:
        self._generation += 1
        if self._frame is not None:
            self.scheduler.cancel_frame(self._frame)
            self._frame = None

    def _request_frame(self) -> None:
        self._generation += 1
        generation = self._generation
        self._frame = self.scheduler.request_frame(lambda now: self._tick(now, generation))

    def _resolve(self) -> None:
        if resolve_from_values(self._timeline, self.adapter):
            logger.debug("Resolved start values for %d tracks", len(self._timeline.tracks))

    def _set_state(self, state: PlayerState) -> None:
        self._state = state
        if state is PlayerState.PLAYING:
            self._done_event.clear()
        else:
            self._done_event.set()

    def load(self, spec: AnimationSpec) -> Player:
        """Replace the timeline and show its t=0 pose."""
        with self._lock:
            self._cancel_frame()
            self._spec = spec
            self._timeline = compile_tracks(spec.tweens)
            self._time = 0.0
            self._set_state(PlayerState.IDLE)
            logger.debug(
                "Loaded %d tweens into %d tracks, duration %.1fms",
                len(spec.tweens),
                len(self._timeline.tracks),
                self._timeline.total_duration,
            )
            self._resolve()
            apply_at(self._timeline, 0.0, self.adapter)
        return self

    def play(self) -> None:
        with self._lock:
            if self._state in (PlayerState.UNLOADED, PlayerState.PLAYING):
                return
            self._resolve()
            self._set_state(PlayerState.PLAYING)
            self._last_frame_time = self.scheduler.now()
            self._request_frame()
            logger.debug("Play from %.1fms", self._time)

    def _tick(self, now: float, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._state is not PlayerState.PLAYING:
                return
            self._frame = None
            delta = now - self._last_frame_time
            self._last_frame_time = now
            total = self._timeline.total_duration
            self._time = min(total, self._time + delta)
            apply_at(self._timeline, self._time, self.adapter)
            if self._time >= total:
                self._set_state(PlayerState.IDLE)
                logger.debug("Playback finished at %.1fms", self._time)
                return
            self._request_frame()

    def pause(self) -> None:
        with self._lock:
            if self._state is not PlayerState.PLAYING:
                return
            self._cancel_frame()
            self._set_state(PlayerState.PAUSED)
            logger.debug("Paused at %.1fms", self._time)

    def seek(self, ms: float) -> None:
        """Jump to ``ms`` (clamped to the timeline) without changing play state."""
        with self._lock:
            if self._state is PlayerState.UNLOADED:
                return
            self._resolve()
            self._time = max(0.0, min(self._timeline.total_duration, float(ms)))
            apply_at(self._timeline, self._time, self.adapter)

    def stop(self) -> None:
        """Return to t=0 and the resolved start pose."""
        with self._lock:
            if self._state is PlayerState.UNLOADED:
                return
            self._cancel_frame()
            self._set_state(PlayerState.IDLE)
            self._time = 0.0
            self._resolve()
            apply_at(self._timeline, 0.0, self.adapter)
            logger.debug("Stopped")

    def is_playing(self) -> bool:
        return self._state is PlayerState.PLAYING

    def time(self) -> float:
        return self._time

    def duration(self) -> float:
        return self._timeline.total_duration

    def wait(self, timeout: float | None = None) -> bool:
        """Block until playback is no longer running. Returns False on timeout."""
        return self._done_event.wait(timeout)
