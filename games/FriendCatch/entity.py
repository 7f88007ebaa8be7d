"""
FriendCatch - Falling entity.

Entities fall straight down from above the play-field. Their base speed is
fixed at spawn; the speed actually applied each tick is derived from it and
the currently active modifiers, so a slow-time power-up never rewrites it.
"""
from dataclasses import dataclass

from models import Rectangle
from games.FriendCatch.kinds import KindSpec


@dataclass
class Entity:
    """A falling object owned by the SimulationEngine.

    Position is the top-left corner of the bounding square, in simulation
    coordinates (y grows downward).

    Attributes:
        kind: Registry entry for this entity
        x: Left edge
        y: Top edge
        size: Edge length of the bounding square
        base_speed: Pixels per reference frame, captured at spawn
        vx: Horizontal pixels per reference frame
        serial: Spawn order, unique per engine
        struck: Set once when the entity is caught
    """
    kind: KindSpec
    x: float
    y: float
    size: float
    base_speed: float
    vx: float = 0.0
    serial: int = 0
    struck: bool = False

    @property
    def name(self) -> str:
        return self.kind.name

    @property
    def bounds(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.size, height=self.size)

    def effective_speed(self, speed_factor: float = 1.0) -> float:
        """Speed for this tick; never negative, never stored.

        Args:
            speed_factor: Product of active speed modifiers (1.0 = none)
        """
        return max(0.0, self.base_speed * speed_factor)

    def advance(self, frames: float, speed_factor: float = 1.0) -> None:
        """Move by the given number of reference frames.

        Args:
            frames: Elapsed time expressed in reference frames (may be fractional)
            speed_factor: Product of active speed modifiers
        """
        self.y += self.effective_speed(speed_factor) * frames
        self.x += self.vx * frames

    def has_exited(self, field_height: float) -> bool:
        """True once the entity is past the bottom boundary."""
        return self.y > field_height

    def contains_point(self, px: float, py: float) -> bool:
        """Axis-aligned containment test, edges inclusive.

        Args:
            px: Point x in simulation coordinates
            py: Point y in simulation coordinates
        """
        return (self.x <= px <= self.x + self.size and
                self.y <= py <= self.y + self.size)

    def mark_struck(self) -> bool:
        """Mark this entity as caught.

        Returns:
            True the first time, False if it was already struck
        """
        if self.struck:
            return False
        self.struck = True
        return True

    def __str__(self) -> str:
        return (f"Entity(#{self.serial} {self.name}, x={self.x:.1f}, y={self.y:.1f}, "
                f"speed={self.base_speed:.2f}{', struck' if self.struck else ''})")
