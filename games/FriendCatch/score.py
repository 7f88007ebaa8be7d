"""
FriendCatch - Score, lives and level.

ScoreState is the single owner of score, lives, active effects and the
session statistics. The only transitions that touch score or lives are
resolve_catch() (an entity was tapped) and record_miss() (an entity fell
out). Level is never stored; it is recomputed from score on every read.
"""
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from catchfall.logging import get_logger
from models import ScoreSnapshot
from games.FriendCatch.config import GameConfig
from games.FriendCatch.effects import ActiveEffects
from games.FriendCatch.entity import Entity
from games.FriendCatch.kinds import KindRole, PowerUpVariant

log = get_logger('score')


@dataclass
class CatchOutcome:
    """What a single catch did to the score panel."""
    kind_name: str
    role: KindRole
    score_delta: int = 0
    lives_delta: int = 0
    effect: Optional[PowerUpVariant] = None
    level_before: int = 1
    level_after: int = 1

    @property
    def leveled_up(self) -> bool:
        return self.level_after > self.level_before

    @property
    def label(self) -> str:
        """Short feedback text for the catch marker."""
        if self.effect == PowerUpVariant.SLOW_TIME:
            return "Slow!"
        if self.effect == PowerUpVariant.EXTRA_LIFE:
            return f"+{self.lives_delta} life"
        parts = []
        if self.score_delta:
            parts.append(f"{self.score_delta:+d}")
        if self.lives_delta:
            parts.append(f"{self.lives_delta:+d} life")
        return " ".join(parts) or self.kind_name


class ScoreState:
    """Score, lives, level and timed effects for one session.

    Args:
        config: Game configuration (initial lives, level threshold, power-ups)
        on_change: Called with a ScoreSnapshot after every mutating transition
    """

    def __init__(self, config: GameConfig,
                 on_change: Optional[Callable[[ScoreSnapshot], None]] = None):
        self._config = config
        self._on_change = on_change
        self.score = 0
        self.lives = config.initial_lives
        self.effects = ActiveEffects()
        self.catches = 0
        self.misses = 0
        self.harmful_caught = 0
        self.power_ups_caught = 0

    @property
    def level(self) -> int:
        return self.score // self._config.level_up_threshold + 1

    @property
    def is_game_over(self) -> bool:
        return self.lives <= 0

    @property
    def speed_factor(self) -> float:
        """Product of active speed modifiers."""
        if self.effects.is_active(PowerUpVariant.SLOW_TIME):
            return self._config.slow_factor
        return 1.0

    def snapshot(self) -> ScoreSnapshot:
        return ScoreSnapshot(
            score=self.score,
            lives=self.lives,
            level=self.level,
            active_effect_label=self.effects.label(),
            catches=self.catches,
            misses=self.misses,
        )

    def resolve_catch(self, entity: Entity, rng: random.Random) -> CatchOutcome:
        """Apply the effect of catching an entity.

        Args:
            entity: The struck entity
            rng: Random source for power-up selection

        Returns:
            CatchOutcome describing the change
        """
        kind = entity.kind
        level_before = self.level
        outcome = CatchOutcome(kind_name=kind.name, role=kind.role, level_before=level_before)
        self.catches += 1

        if kind.is_beneficial:
            self.score += kind.points
            outcome.score_delta = kind.points

        elif kind.is_harmful:
            self.harmful_caught += 1
            self.lives -= kind.life_penalty
            outcome.lives_delta = -kind.life_penalty
            penalty = kind.score_penalty + self._config.harmful_score_penalty
            new_score = max(0, self.score - penalty)
            outcome.score_delta = new_score - self.score
            self.score = new_score

        else:
            self.power_ups_caught += 1
            variant = kind.power_up or self._choose_power_up(rng)
            outcome.effect = variant
            if variant == PowerUpVariant.SLOW_TIME:
                self.effects.activate(
                    variant,
                    self._config.slow_time_duration_ms / 1000.0,
                    self._config.slow_time_stacking,
                )
            elif variant == PowerUpVariant.EXTRA_LIFE:
                self.lives += self._config.bonus_lives
                outcome.lives_delta = self._config.bonus_lives

        outcome.level_after = self.level
        log.debug("Caught %s: score=%d lives=%d level=%d", kind.name, self.score, self.lives, self.level)
        if outcome.leveled_up:
            log.info("Level up: %d -> %d at score %d", level_before, outcome.level_after, self.score)
        self._notify()
        return outcome

    def record_miss(self, entity: Entity) -> bool:
        """Apply the miss penalty for an entity that fell out of the field.

        Only beneficial entities that were never struck count as misses.

        Returns:
            True if a life was lost
        """
        if entity.struck or not entity.kind.is_beneficial:
            return False
        self.misses += 1
        self.lives -= 1
        log.debug("Missed %s: lives=%d", entity.kind.name, self.lives)
        self._notify()
        return True

    def decay_effects(self, dt: float) -> List[PowerUpVariant]:
        """Tick timed effects down by dt seconds; notifies when any expire."""
        expired = self.effects.decay(dt)
        if expired:
            log.debug("Effects expired: %s", ", ".join(e.value for e in expired))
            self._notify()
        return expired

    def _choose_power_up(self, rng: random.Random) -> PowerUpVariant:
        weights = self._config.power_up_weights
        variants = [PowerUpVariant(name) for name, w in weights.items() if w > 0]
        if self._config.power_up_selection == 'uniform' or not variants:
            # Weights are ignored
            return rng.choice(list(PowerUpVariant))
        return rng.choices(variants, weights=[weights[v.value] for v in variants])[0]

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.snapshot())
