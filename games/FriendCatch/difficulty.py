"""
FriendCatch - Difficulty progression.

The schedule is a pure function of level and score: spawn interval,
per-kind spawn thresholds and fall-speed multiplier. Nothing patches a
schedule in place; a new one is computed whenever the inputs change.

DifficultyController watches score snapshots and, when the level changes,
asks the spawn timer owner to rearm once with the new interval.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from catchfall.logging import get_logger
from models import ScoreSnapshot
from games.FriendCatch.config import GameConfig
from games.FriendCatch.kinds import KindRegistry, KindRole, KindSpec

log = get_logger('difficulty')


@dataclass(frozen=True)
class DifficultySchedule:
    """Derived spawn parameters for one level/score.

    Attributes:
        level: Level the schedule was computed for
        spawn_interval_ms: Milliseconds between spawns
        kind_thresholds: Cumulative (upper bound, kind name) pairs, last bound is 1.0
        speed_multiplier: Scales the uniform fall speed drawn at spawn
        harmful_probability: Share of spawns that are harmful
    """
    level: int
    spawn_interval_ms: float
    kind_thresholds: Tuple[Tuple[float, str], ...]
    speed_multiplier: float
    harmful_probability: float

    def kind_for(self, roll: float) -> str:
        """Kind name for a uniform roll in [0, 1)."""
        for bound, name in self.kind_thresholds:
            if roll < bound:
                return name
        return self.kind_thresholds[-1][1]


class DifficultyController:
    """Computes schedules and rearms spawning when the level changes.

    Args:
        config: Game configuration
        registry: Kinds to distribute spawn probability over
        on_interval_change: Called with the new spawn interval (ms) when the level changes
    """

    def __init__(self, config: GameConfig, registry: KindRegistry,
                 on_interval_change: Optional[Callable[[float], None]] = None):
        self._config = config
        self._registry = registry
        self._on_interval_change = on_interval_change
        self._level = 1
        self._current = self.schedule(1, 0)

    @property
    def current(self) -> DifficultySchedule:
        """Schedule for the last observed level."""
        return self._current

    @property
    def level(self) -> int:
        return self._level

    def reset(self) -> DifficultySchedule:
        """Back to level 1 without notifying."""
        self._level = 1
        self._current = self.schedule(1, 0)
        return self._current

    def schedule(self, level: int, score: int = 0) -> DifficultySchedule:
        """Compute the schedule for a level and score."""
        cfg = self._config
        steps = max(0, level - 1)

        interval = max(cfg.min_spawn_interval_ms,
                       cfg.spawn_interval_ms - steps * cfg.spawn_interval_step_ms)

        harmful = min(cfg.harmful_cap, cfg.harmful_base + steps * cfg.harmful_growth)

        speed = 1.0 + steps * cfg.speed_growth_per_level
        if cfg.speed_score_divisor > 0:
            speed += max(0, score) / cfg.speed_score_divisor

        return DifficultySchedule(
            level=level,
            spawn_interval_ms=interval,
            kind_thresholds=self._thresholds(harmful),
            speed_multiplier=speed,
            harmful_probability=harmful,
        )

    def _thresholds(self, harmful: float) -> Tuple[Tuple[float, str], ...]:
        shares = {
            KindRole.HARMFUL: harmful,
            KindRole.POWER_UP: self._config.power_up_chance,
        }
        # Roles with nothing spawnable hand their share to beneficial kinds
        for role in list(shares):
            if not self._spawnable(role):
                shares[role] = 0.0
        shares[KindRole.BENEFICIAL] = 1.0 - shares[KindRole.HARMFUL] - shares[KindRole.POWER_UP]

        weighted: List[Tuple[float, KindSpec]] = []
        for role in (KindRole.BENEFICIAL, KindRole.HARMFUL, KindRole.POWER_UP):
            kinds = self._spawnable(role)
            total = sum(k.weight for k in kinds)
            for kind in kinds:
                weighted.append((shares[role] * kind.weight / total, kind))

        thresholds = []
        cumulative = 0.0
        for probability, kind in weighted:
            if probability <= 0:
                continue
            cumulative += probability
            thresholds.append((cumulative, kind.name))
        thresholds[-1] = (1.0, thresholds[-1][1])
        return tuple(thresholds)

    def _spawnable(self, role: KindRole) -> List[KindSpec]:
        return [k for k in self._registry.by_role(role) if k.weight > 0]

    def observe(self, snapshot: ScoreSnapshot) -> bool:
        """React to a score change.

        Returns:
            True if the level changed and the spawn interval was reprogrammed
        """
        if snapshot.level == self._level:
            return False
        self._level = snapshot.level
        self._current = self.schedule(snapshot.level, snapshot.score)
        log.info("Level %d: spawn every %.0fms, harmful %.0f%%",
                 self._current.level, self._current.spawn_interval_ms,
                 self._current.harmful_probability * 100)
        if self._on_interval_change is not None:
            self._on_interval_change(self._current.spawn_interval_ms)
        return True
