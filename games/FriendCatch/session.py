"""
FriendCatch - Session lifecycle.

SessionController is the one object a host talks to: it starts and ends
sessions and owns every timer it arms. Ticks, spawns and pointer input are
serialised behind one re-entrant lock, so pointer events and start/end may
arrive from other threads. The scheduler must still be advanced from a
single thread.

Usage:
    scheduler = FrameScheduler()
    session = SessionController(config, registry, scheduler, visuals)
    session.on_game_over.append(lambda score: print("Final score", score))

    if session.start():
        while session.state == GameState.RUNNING:
            scheduler.advance(dt)
"""
import random
import threading
from typing import Callable, List, Optional

from catchfall.games.game_state import GameState
from catchfall.games.input.input_event import PointerEvent
from catchfall.logging import emit_record, get_logger
from catchfall.scheduler import Scheduler, TimerHandle
from models import Rectangle, ScoreSnapshot, SessionSummary
from games.FriendCatch.assets import VisualProvider
from games.FriendCatch.config import GameConfig
from games.FriendCatch.difficulty import DifficultyController
from games.FriendCatch.engine import SimulationEngine
from games.FriendCatch.factory import EntityFactory
from games.FriendCatch.kinds import KindRegistry
from games.FriendCatch.resolver import InputResolver
from games.FriendCatch.score import CatchOutcome, ScoreState

log = get_logger('session')


class SpawnTimer:
    """Sole owner of the periodic spawn timer.

    There is never more than one live scheduler handle: arm() drops any
    previous handle first and rearm() swaps handles under the lock.
    """

    def __init__(self, scheduler: Scheduler, callback: Callable[[], None]):
        self._scheduler = scheduler
        self._callback = callback
        self._lock = threading.Lock()
        self._handle: Optional[TimerHandle] = None
        self.interval_ms: Optional[float] = None
        self.rearm_count = 0

    @property
    def armed(self) -> bool:
        return self._handle is not None and self._handle.active

    def arm(self, interval_ms: float) -> None:
        with self._lock:
            self._arm(interval_ms)

    def disarm(self) -> None:
        with self._lock:
            self._disarm()

    def rearm(self, interval_ms: float) -> None:
        """Replace the running timer with one at a new interval."""
        with self._lock:
            self._disarm()
            self._arm(interval_ms)
            self.rearm_count += 1
        log.debug("Spawn timer rearmed at %.0fms", interval_ms)

    def _arm(self, interval_ms: float) -> None:
        self._disarm()
        self._handle = self._scheduler.call_every(interval_ms, self._callback)
        self.interval_ms = interval_ms

    def _disarm(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None


class SessionController:
    """Start/end orchestration for FriendCatch sessions.

    Listener lists (append callables to subscribe):
        on_change: ScoreSnapshot after every score, lives or effect change
        on_state_change: GameState after every state transition
        on_game_over: final score when a session ends
        on_not_ready: no arguments, when start() is refused
    """

    def __init__(
        self,
        config: GameConfig,
        registry: KindRegistry,
        scheduler: Scheduler,
        visuals: VisualProvider,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.registry = registry
        self.visuals = visuals
        self._scheduler = scheduler
        self._lock = threading.RLock()
        self._rng = rng or random.Random(config.seed)

        self.on_change: List[Callable[[ScoreSnapshot], None]] = []
        self.on_state_change: List[Callable[[GameState], None]] = []
        self.on_game_over: List[Callable[[int], None]] = []
        self.on_not_ready: List[Callable[[], None]] = []

        self.spawn_timer = SpawnTimer(scheduler, self._spawn)
        self.difficulty = DifficultyController(config, registry, on_interval_change=self.spawn_timer.rearm)
        self.factory = EntityFactory(config, self._rng)
        self.engine = SimulationEngine(
            config, registry, self.factory, self.difficulty,
            on_game_over=self._on_out_of_lives,
        )
        self.resolver = InputResolver(self.engine)

        self._state = GameState.IDLE
        self._score = ScoreState(config)
        self._frame_handle: Optional[TimerHandle] = None
        self._final_score: Optional[int] = None
        self._summary: Optional[SessionSummary] = None
        self._sessions_started = 0

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score_state(self) -> ScoreState:
        return self._score

    @property
    def final_score(self) -> Optional[int]:
        """Score frozen at the end of the last session, None while running or idle."""
        return self._final_score

    @property
    def summary(self) -> Optional[SessionSummary]:
        return self._summary

    @property
    def frame_armed(self) -> bool:
        return self._frame_handle is not None and self._frame_handle.active

    def snapshot(self) -> ScoreSnapshot:
        with self._lock:
            return self._score.snapshot()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> bool:
        """Start (or restart) a session.

        Returns:
            False without changing anything if visuals are still loading
        """
        with self._lock:
            if not self.visuals.all_accounted_for():
                log.warning("Start refused: visuals still loading")
                for callback in self.on_not_ready:
                    callback()
                return False

            self._disarm()

            self._score = ScoreState(self.config, on_change=self._on_score_change)
            self.engine.reset(self._score)
            self.difficulty.reset()
            self._final_score = None
            self._summary = None
            self._sessions_started += 1

            self._frame_handle = self._scheduler.every_frame(self.tick)
            self.spawn_timer.arm(self.difficulty.current.spawn_interval_ms)

            log.info("Session %d started (pacing=%s, lives=%d)",
                     self._sessions_started, self.config.pacing, self._score.lives)
            self._set_state(GameState.RUNNING)
            self._notify_change(self._score.snapshot())
            return True

    def end(self, reason: str = 'stopped') -> bool:
        """End the running session. Safe to call more than once.

        All timers are cancelled before this returns, so no tick or spawn
        runs afterwards.

        Returns:
            True if a running session was ended by this call
        """
        with self._lock:
            if self._state != GameState.RUNNING:
                return False

            self._disarm()
            self._final_score = self._score.score
            self._summary = SessionSummary(
                final_score=self._score.score,
                level=self._score.level,
                catches=self._score.catches,
                misses=self._score.misses,
                harmful_caught=self._score.harmful_caught,
                power_ups_caught=self._score.power_ups_caught,
                duration=self.engine.elapsed,
                reason=reason,
            )
            self._set_state(GameState.ENDED)

            log.info("Session ended (%s): score=%d level=%d",
                     reason, self._final_score, self._summary.level)
            emit_record('session', {'event': 'session_end', **self._summary.model_dump()})

            for callback in self.on_game_over:
                callback(self._final_score)
            return True

    def _disarm(self) -> None:
        if self._frame_handle is not None:
            self._scheduler.cancel(self._frame_handle)
            self._frame_handle = None
        self.spawn_timer.disarm()

    def _on_out_of_lives(self) -> None:
        self.end('out_of_lives')

    # =========================================================================
    # Scheduler callbacks
    # =========================================================================

    def tick(self, dt: float) -> None:
        """Frame callback: advance the simulation by dt seconds."""
        with self._lock:
            if self._state != GameState.RUNNING:
                return
            self.engine.update(dt)

    def _spawn(self) -> None:
        with self._lock:
            if self._state != GameState.RUNNING:
                return
            self.engine.spawn()

    # =========================================================================
    # Input
    # =========================================================================

    def handle_pointer(self, event: PointerEvent,
                       display_rect: Optional[Rectangle] = None) -> Optional[CatchOutcome]:
        """Resolve a pointer event.

        Args:
            event: Pointer event in display coordinates
            display_rect: Where the field is drawn; defaults to the event's target_rect
        """
        rect = display_rect or event.target_rect
        return self.resolve_pointer(event.position.x, event.position.y, rect)

    def resolve_pointer(self, x: float, y: float, display_rect: Rectangle) -> Optional[CatchOutcome]:
        """Resolve a display-space pointer position.

        Returns:
            CatchOutcome if an entity was caught, None otherwise (including
            when no session is running)
        """
        with self._lock:
            if self._state != GameState.RUNNING:
                return None
            entity = self.resolver.resolve(
                x, y, display_rect, self.config.field_width, self.config.field_height,
            )
            if entity is None:
                return None
            return self.engine.catch(entity)

    # =========================================================================
    # Notification
    # =========================================================================

    def _on_score_change(self, snapshot: ScoreSnapshot) -> None:
        self.difficulty.observe(snapshot)
        self._notify_change(snapshot)

    def _notify_change(self, snapshot: ScoreSnapshot) -> None:
        for callback in self.on_change:
            callback(snapshot)

    def _set_state(self, state: GameState) -> None:
        self._state = state
        for callback in self.on_state_change:
            callback(state)
