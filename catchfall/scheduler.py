"""
Host clock contract for Catchfall games.

Games never talk to a wall clock or an event loop directly. They ask a
Scheduler for three things:

- a frame callback, called with the elapsed seconds since the last frame
- a one-shot callback after N milliseconds
- a periodic callback every N milliseconds

and they cancel what they asked for through the returned TimerHandle.

FrameScheduler is the implementation used by the pygame loop and by the
tests: the host calls advance(dt) once per frame and every due callback runs
inside that call. Timers are decremented by measured elapsed time, never by
call count, so behavior is the same at 30 Hz and 144 Hz.

Usage:
    scheduler = FrameScheduler()
    tick = scheduler.every_frame(engine.update)
    spawn = scheduler.call_every(1000, engine.spawn)

    while running:
        dt = clock.tick(60) / 1000.0
        scheduler.advance(dt)

    spawn.cancel()
    tick.cancel()
"""
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from catchfall.logging import get_logger

log = get_logger('scheduler')

_handle_ids = itertools.count(1)


class TimerHandle:
    """A scheduled callback. Cancelling is immediate and idempotent."""

    FRAME = "frame"
    ONE_SHOT = "one_shot"
    PERIODIC = "periodic"

    def __init__(
        self,
        kind: str,
        callback: Callable,
        interval: float = 0.0,
    ):
        """
        Args:
            kind: FRAME, ONE_SHOT or PERIODIC
            callback: Function to call; frame callbacks receive dt
            interval: Seconds until (next) firing for timers
        """
        self.id = next(_handle_ids)
        self.kind = kind
        self.callback = callback
        self.interval = interval
        self.remaining = interval
        self.fire_count = 0
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"TimerHandle(id={self.id}, kind={self.kind}, interval={self.interval:.3f}, {state})"


class Scheduler(ABC):
    """Abstract host scheduler."""

    @abstractmethod
    def every_frame(self, callback: Callable[[float], None]) -> TimerHandle:
        """Call callback(dt) once per host frame, dt in seconds."""
        pass

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Call callback() once after delay_ms milliseconds."""
        pass

    @abstractmethod
    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Call callback() every interval_ms milliseconds until cancelled."""
        pass

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        """Cancel a handle. None is accepted and ignored."""
        if handle is not None:
            handle.cancel()


class FrameScheduler(Scheduler):
    """Scheduler driven by an explicit advance(dt) per host frame.

    Frame callbacks run first, then due timers. Callbacks registered during
    an advance() run from the next advance() on. A periodic timer that falls
    behind (after a long stall) fires at most max_catch_up times per advance
    and drops the rest of its backlog.

    Registering and cancelling are safe from any thread. advance() itself
    must be driven by one thread, and callbacks run on it outside the
    internal lock.
    """

    def __init__(self, max_catch_up: int = 5):
        if max_catch_up < 1:
            raise ValueError(f"max_catch_up must be at least 1, got {max_catch_up}")
        self._max_catch_up = max_catch_up
        self._lock = threading.Lock()
        self._frame_callbacks: List[TimerHandle] = []
        self._timers: List[TimerHandle] = []
        self.elapsed = 0.0
        self.frame_count = 0

    def every_frame(self, callback: Callable[[float], None]) -> TimerHandle:
        handle = TimerHandle(TimerHandle.FRAME, callback)
        with self._lock:
            self._frame_callbacks.append(handle)
        return handle

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return self._add_timer(TimerHandle.ONE_SHOT, delay_ms, callback)

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError(f"Periodic interval must be positive, got {interval_ms}")
        return self._add_timer(TimerHandle.PERIODIC, interval_ms, callback)

    def _add_timer(self, kind: str, ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(kind, callback, interval=max(0.0, ms) / 1000.0)
        with self._lock:
            self._timers.append(handle)
        log.trace("Scheduled %r", handle)
        return handle

    @property
    def active_timers(self) -> List[TimerHandle]:
        """Live one-shot and periodic timers."""
        with self._lock:
            return [t for t in self._timers if t.active]

    @property
    def active_frame_callbacks(self) -> List[TimerHandle]:
        with self._lock:
            return [h for h in self._frame_callbacks if h.active]

    def advance(self, dt: float) -> None:
        """Advance the clock by dt seconds, running everything that is due.

        Args:
            dt: Elapsed seconds since the previous advance (negative is clamped to 0)
        """
        dt = max(0.0, dt)
        self.elapsed += dt
        self.frame_count += 1

        with self._lock:
            frame_callbacks = list(self._frame_callbacks)
            timers = list(self._timers)

        for handle in frame_callbacks:
            if handle.active:
                handle.fire_count += 1
                handle.callback(dt)

        for handle in timers:
            if not handle.active:
                continue
            handle.remaining -= dt
            fired = 0
            while handle.active and handle.remaining <= 0:
                handle.fire_count += 1
                fired += 1
                if handle.kind == TimerHandle.ONE_SHOT:
                    handle.cancel()
                    handle.callback()
                    break
                handle.remaining += handle.interval
                handle.callback()
                if fired >= self._max_catch_up and handle.remaining <= 0:
                    log.debug("Dropping timer backlog for %r", handle)
                    handle.remaining = handle.interval
                    break

        # Rebuilt under the lock so timers registered meanwhile are kept
        with self._lock:
            self._frame_callbacks = [h for h in self._frame_callbacks if h.active]
            self._timers = [t for t in self._timers if t.active]

    def cancel_all(self) -> None:
        """Cancel every frame callback and timer."""
        with self._lock:
            for handle in self._frame_callbacks + self._timers:
                handle.cancel()
            self._frame_callbacks.clear()
            self._timers.clear()
