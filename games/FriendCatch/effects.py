"""
FriendCatch - Timed effects and feedback markers.

ActiveEffects holds power-up timers. They tick down by elapsed wall time,
never by frame count, so a 5 second slow-time lasts 5 seconds at any frame
rate.

FeedbackMarker is the cosmetic "+10" / "-1 life" text left where an
entity was caught.
"""
from dataclasses import dataclass
from typing import Dict, List, Tuple

from games.FriendCatch.kinds import PowerUpVariant

# Timed variants; EXTRA_LIFE is instantaneous and never lands here
_LABELS = {
    PowerUpVariant.SLOW_TIME: "Slow time",
}


class ActiveEffects:
    """Mapping of timed effect -> remaining seconds."""

    REFRESH = 'refresh'
    EXTEND = 'extend'

    def __init__(self):
        self._remaining: Dict[PowerUpVariant, float] = {}

    def activate(self, effect: PowerUpVariant, duration: float, stacking: str = REFRESH) -> float:
        """Start an effect, or refresh/extend it if already running.

        Args:
            effect: Effect to activate
            duration: Seconds to add (extend) or reset to (refresh)
            stacking: 'refresh' or 'extend'

        Returns:
            Remaining seconds after activation
        """
        current = self._remaining.get(effect, 0.0)
        if stacking == self.EXTEND:
            remaining = current + duration
        else:
            remaining = max(current, duration)
        self._remaining[effect] = remaining
        return remaining

    def decay(self, dt: float) -> List[PowerUpVariant]:
        """Subtract dt seconds from every effect and drop the expired ones.

        Returns:
            Effects that expired during this call
        """
        expired = []
        for effect in list(self._remaining):
            self._remaining[effect] -= dt
            if self._remaining[effect] <= 0:
                del self._remaining[effect]
                expired.append(effect)
        return expired

    def is_active(self, effect: PowerUpVariant) -> bool:
        return effect in self._remaining

    def remaining(self, effect: PowerUpVariant) -> float:
        return self._remaining.get(effect, 0.0)

    def items(self) -> List[Tuple[PowerUpVariant, float]]:
        return list(self._remaining.items())

    def label(self) -> str:
        """HUD label, e.g. 'Slow time 3.2s', or '' when nothing is active."""
        parts = [
            f"{_LABELS.get(effect, effect.value)} {remaining:.1f}s"
            for effect, remaining in self._remaining.items()
        ]
        return ", ".join(parts)

    def clear(self) -> None:
        self._remaining.clear()

    def __len__(self) -> int:
        return len(self._remaining)


@dataclass
class FeedbackMarker:
    """Short-lived text shown where an entity was caught."""
    text: str
    x: float
    y: float
    color: Tuple[int, int, int]
    lifetime: float
    age: float = 0.0
    rise_speed: float = 30.0  # pixels per second

    def update(self, dt: float) -> bool:
        """Age the marker. Returns False when it has expired."""
        self.age += dt
        self.y -= self.rise_speed * dt
        return self.age < self.lifetime

    @property
    def progress(self) -> float:
        """0.0 when created, 1.0 when expired."""
        if self.lifetime <= 0:
            return 1.0
        return min(1.0, self.age / self.lifetime)

    @property
    def alpha(self) -> int:
        """Opacity for drawing; fades linearly to 0 over the lifetime."""
        return int(round(255 * (1.0 - self.progress)))
