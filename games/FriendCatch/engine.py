"""
FriendCatch - Simulation engine.

Owns the live entity collection and advances it once per host frame.
Motion is frame-rate independent: fall speeds are pixels per reference
frame, and each tick moves entities by dt / reference_frame of them.

Tick order:
    1. Decay timed effects by dt
    2. Move entities, newest first; remove those that fell out, charging
       a miss for beneficial ones. Stop the tick as soon as lives run out.
    3. Age feedback markers
"""
from typing import Callable, List, Optional, Tuple

from catchfall.logging import get_logger
from games.FriendCatch.config import (
    CATCH_MARKER_COLOR,
    GameConfig,
    PENALTY_MARKER_COLOR,
    POWER_UP_MARKER_COLOR,
)
from games.FriendCatch.difficulty import DifficultyController
from games.FriendCatch.effects import FeedbackMarker
from games.FriendCatch.entity import Entity
from games.FriendCatch.factory import EntityFactory
from games.FriendCatch.kinds import KindRegistry
from games.FriendCatch.score import CatchOutcome, ScoreState

log = get_logger('engine')


class SimulationEngine:
    """Entity lifecycle and per-tick update for one session.

    Args:
        config: Game configuration
        registry: Kinds that can spawn
        factory: Builds new entities
        difficulty: Supplies the schedule used for each spawn
        on_game_over: Called once when lives reach zero during a tick or catch
    """

    def __init__(
        self,
        config: GameConfig,
        registry: KindRegistry,
        factory: EntityFactory,
        difficulty: DifficultyController,
        on_game_over: Optional[Callable[[], None]] = None,
    ):
        self._config = config
        self._registry = registry
        self._factory = factory
        self._difficulty = difficulty
        self._on_game_over = on_game_over
        self._entities: List[Entity] = []
        self._markers: List[FeedbackMarker] = []
        self._score: Optional[ScoreState] = None
        self._game_over = False
        self.elapsed = 0.0

    @property
    def entities(self) -> Tuple[Entity, ...]:
        """Live entities in spawn order (oldest first)."""
        return tuple(self._entities)

    @property
    def markers(self) -> Tuple[FeedbackMarker, ...]:
        return tuple(self._markers)

    @property
    def score_state(self) -> Optional[ScoreState]:
        return self._score

    @property
    def game_over(self) -> bool:
        return self._game_over

    def reset(self, score_state: ScoreState) -> None:
        """Drop all entities and markers and attach a fresh ScoreState."""
        self._entities.clear()
        self._markers.clear()
        self._score = score_state
        self._game_over = False
        self.elapsed = 0.0

    def add(self, entity: Entity) -> Entity:
        """Insert an already-built entity (spawn order = insertion order)."""
        self._entities.append(entity)
        return entity

    def remove(self, entity: Entity) -> bool:
        """Remove an entity. Returns False if it was not live."""
        try:
            self._entities.remove(entity)
        except ValueError:
            return False
        return True

    def spawn(self) -> Optional[Entity]:
        """Create one entity using the current level and score."""
        if self._score is None or self._game_over:
            return None
        schedule = self._difficulty.schedule(self._score.level, self._score.score)
        kind = self._factory.choose_kind(schedule, self._registry)
        entity = self._factory.create(kind, self._config.field_width, schedule)
        log.trace("Spawned %s", entity)
        return self.add(entity)

    def update(self, dt: float) -> None:
        """Advance the simulation by dt seconds."""
        score = self._score
        if score is None or self._game_over:
            return
        self.elapsed += dt

        score.decay_effects(dt)

        frames = dt / self._config.reference_frame
        speed_factor = score.speed_factor
        field_height = self._config.field_height

        for i in range(len(self._entities) - 1, -1, -1):
            entity = self._entities[i]
            entity.advance(frames, speed_factor)
            if not entity.has_exited(field_height):
                continue
            del self._entities[i]
            score.record_miss(entity)
            if score.is_game_over:
                self._signal_game_over()
                return

        self._markers = [m for m in self._markers if m.update(dt)]

    def catch(self, entity: Entity) -> Optional[CatchOutcome]:
        """Resolve a catch of a live entity.

        Returns:
            CatchOutcome, or None if the entity was already struck or is not live
        """
        if self._score is None or self._game_over or entity not in self._entities:
            return None
        if not entity.mark_struck():
            return None
        self.remove(entity)

        outcome = self._score.resolve_catch(entity, self._factory.rng)
        self._add_marker(entity, outcome)

        if self._score.is_game_over:
            self._signal_game_over()
        return outcome

    def _add_marker(self, entity: Entity, outcome: CatchOutcome) -> None:
        lifetime = self._config.marker_lifetime_ms / 1000.0
        if lifetime <= 0:
            return
        if outcome.effect is not None:
            color = POWER_UP_MARKER_COLOR
        elif outcome.lives_delta < 0 or outcome.score_delta < 0:
            color = PENALTY_MARKER_COLOR
        else:
            color = CATCH_MARKER_COLOR
        self._markers.append(FeedbackMarker(
            text=outcome.label,
            x=entity.x + entity.size / 2,
            y=entity.y + entity.size / 2,
            color=color,
            lifetime=lifetime,
        ))

    def _signal_game_over(self) -> None:
        if self._game_over:
            return
        self._game_over = True
        log.info("Out of lives with %d entities on field", len(self._entities))
        if self._on_game_over is not None:
            self._on_game_over()

    def render(self, surface, visuals) -> None:
        """Draw the field onto a RenderSurface.

        Args:
            surface: RenderSurface to issue draw calls on
            visuals: VisualProvider for entity images and fallback colors
        """
        surface.clear(self._config.field_width, self._config.field_height)
        for entity in self._entities:
            name = entity.name
            if visuals.is_ready(name):
                surface.draw_image(visuals.visual(name), entity.x, entity.y, entity.size, entity.size)
            else:
                surface.draw_rect(visuals.fallback_color(name), entity.x, entity.y, entity.size, entity.size)
        for marker in self._markers:
            surface.draw_text(marker.text, marker.x, marker.y, marker.color, marker.alpha)
