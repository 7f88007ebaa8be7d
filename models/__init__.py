"""
Unified models library for the Catchfall project.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric and color types (Point2D, Color, Rectangle)
- FriendCatch: Score snapshot and session summary for the FriendCatch game

Usage:
    >>> from models import Point2D, Rectangle
    >>> from models.friendcatch import ScoreSnapshot
"""

from .primitives import (
    Point2D,
    Color,
    Rectangle,
)

from .friendcatch import (
    ScoreSnapshot,
    SessionSummary,
)

__all__ = [
    'Point2D',
    'Color',
    'Rectangle',
    'ScoreSnapshot',
    'SessionSummary',
]
