"""
Pointer Event - Represents a single tap or click.

Uses a frozen dataclass so events can be passed around and queued freely.
"""
from dataclasses import dataclass
from typing import Optional

from models import Point2D, Rectangle


@dataclass(frozen=True)
class PointerEvent:
    """Immutable pointer event from any source.

    Attributes:
        position: Where the pointer landed, in display (window) coordinates
        timestamp: Time when the event occurred (seconds, from monotonic clock)
        target_rect: On-screen rectangle the play-field was displayed in
            when the event happened; used to map back to simulation space
        pointer_id: Touch finger id, or None for a mouse
    """
    position: Point2D
    timestamp: float
    target_rect: Rectangle
    pointer_id: Optional[int] = None

    def __post_init__(self):
        """Validate timestamp is non-negative."""
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"PointerEvent(pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"t={self.timestamp:.3f}, rect={self.target_rect})")
