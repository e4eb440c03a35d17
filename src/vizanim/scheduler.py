"""Frame scheduling primitives ("call me back before the next frame")."""

from __future__ import annotations

import itertools
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol, runtime_checkable

FrameCallback = Callable[[float], None]


@runtime_checkable
class FrameScheduler(Protocol):
    """Host frame primitive. Times are milliseconds on the scheduler's clock."""

    def now(self) -> float:
        ...

    def request_frame(self, callback: FrameCallback) -> int:
        ...

    def cancel_frame(self, handle: int) -> None:
        ...


@dataclass
class ManualFrameScheduler:
    """Virtual clock for headless playback and tests.

    Nothing happens until ``advance()`` is called. Callbacks requested while a
    frame is firing run on the next ``advance()``.
    """

    start: float = 0.0

    _now: float = field(default=0.0, init=False, repr=False)
    _pending: dict[int, FrameCallback] = field(default_factory=dict, init=False, repr=False)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1), init=False, repr=False)

    def __post_init__(self) -> None:
        self._now = float(self.start)

    def now(self) -> float:
        return self._now

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, ms: float) -> int:
        """Move the clock forward and fire one frame. Returns callbacks run."""
        self._now += max(0.0, float(ms))
        due = list(self._pending.values())
        self._pending.clear()
        ran = 0
        for callback in due:
            callback(self._now)
            ran += 1
        return ran

    def run_until_idle(self, frame_ms: float = 16.0, max_frames: int = 100_000) -> int:
        """Step frames of ``frame_ms`` until nothing is pending. Returns frames stepped."""
        frames = 0
        while self._pending and frames < max_frames:
            self.advance(frame_ms)
            frames += 1
        return frames


@dataclass
class TimerFrameScheduler:
    """Real-time frames on ``threading.Timer`` at a fixed rate.

    Firing and cancellation share a lock, so a frame cancelled before it
    starts never runs.
    """

    fps: float = 60.0

    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)
    _timers: dict[int, threading.Timer] = field(default_factory=dict, init=False, repr=False)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1), init=False, repr=False)

    @property
    def frame_duration(self) -> float:
        return 1.0 / max(1.0, self.fps)

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def request_frame(self, callback: FrameCallback) -> int:
        with self._lock:
            handle = next(self._ids)
            timer = threading.Timer(self.frame_duration, self._fire, args=(handle, callback))
            timer.daemon = True
            self._timers[handle] = timer
            timer.start()
            return handle

    def _fire(self, handle: int, callback: FrameCallback) -> None:
        with self._lock:
            if self._timers.pop(handle, None) is None:
                return
        callback(self.now())

    def cancel_frame(self, handle: int) -> None:
        with self._lock:
            timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.cancel()

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._timers)
