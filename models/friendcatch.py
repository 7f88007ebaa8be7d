"""
FriendCatch data models.

These models are the read-only view a presentation layer gets of a
session: the score panel snapshot and the summary of a finished session.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ScoreSnapshot(BaseModel):
    """Immutable view of the score panel after a transition.

    Attributes:
        score: Current score (non-negative)
        lives: Remaining lives (may be zero or negative once the session ended)
        level: Current level, starting at 1
        active_effect_label: Human-readable label of active power-ups, or ""
        catches: Entities caught this session
        misses: Beneficial entities that fell out this session

    Examples:
        >>> snap = ScoreSnapshot(score=120, lives=2, level=2)
        >>> snap.is_alive
        True
    """
    score: int = 0
    lives: int = 0
    level: int = Field(default=1, ge=1)
    active_effect_label: str = ""
    catches: int = Field(default=0, ge=0)
    misses: int = Field(default=0, ge=0)

    @field_validator('score')
    @classmethod
    def validate_score(cls, v: int) -> int:
        """Validate score is non-negative."""
        if v < 0:
            raise ValueError(f'Score must be non-negative, got {v}')
        return v

    @computed_field
    @property
    def is_alive(self) -> bool:
        """True while the player still has lives left."""
        return self.lives > 0

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        effect = f", effect={self.active_effect_label}" if self.active_effect_label else ""
        return f"ScoreSnapshot(score={self.score}, lives={self.lives}, level={self.level}{effect})"


class SessionSummary(BaseModel):
    """Summary of a finished session, emitted as a structured log record."""
    final_score: int = Field(..., ge=0)
    level: int = Field(..., ge=1)
    catches: int = Field(default=0, ge=0)
    misses: int = Field(default=0, ge=0)
    harmful_caught: int = Field(default=0, ge=0)
    power_ups_caught: int = Field(default=0, ge=0)
    duration: float = Field(default=0.0, ge=0, description="Seconds of simulated play")
    reason: Optional[str] = None

    model_config = ConfigDict(frozen=True)
