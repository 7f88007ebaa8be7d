"""
FriendCatch - Entity factory.
"""
import itertools
import random
from typing import Optional

from games.FriendCatch.config import GameConfig
from games.FriendCatch.difficulty import DifficultySchedule
from games.FriendCatch.entity import Entity
from games.FriendCatch.kinds import KindRegistry, KindSpec


class EntityFactory:
    """Creates falling entities.

    Construction only: the factory never touches the engine or the score.
    All randomness comes from the factory's own Random, so a seeded factory
    produces the same sequence of kinds, positions and speeds.
    """

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        self._config = config
        self._rng = rng or random.Random(config.seed)
        self._serials = itertools.count(1)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def choose_kind(self, difficulty: DifficultySchedule, registry: KindRegistry) -> KindSpec:
        """Draw a kind against the schedule's cumulative thresholds."""
        return registry[difficulty.kind_for(self._rng.random())]

    def create(self, kind: KindSpec, field_width: float, difficulty: DifficultySchedule) -> Entity:
        """Create an entity just above the field.

        Args:
            kind: Kind to spawn
            field_width: Play-field width; the entity spawns fully inside it
            difficulty: Current schedule, supplies the speed multiplier

        Returns:
            New Entity at y = -size
        """
        size = self._config.entity_size
        x = self._rng.uniform(0, max(0.0, field_width - size))
        speed = self._rng.uniform(self._config.min_fall_speed, self._config.max_fall_speed)
        return Entity(
            kind=kind,
            x=x,
            y=-size,
            size=size,
            base_speed=speed * difficulty.speed_multiplier,
            serial=next(self._serials),
        )
