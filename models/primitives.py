"""
Geometry and color primitives.

Everything here is immutable. Rectangles double as the on-screen area the
play-field is displayed in, so they know how to letterbox themselves into a
window and how to map a display point back into the field's own space.
"""

from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Point2D(BaseModel):
    """A position. y grows downward; negative values are valid (above the field)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f})"


class Color(BaseModel):
    """RGBA color, components 0-255.

    Also accepts the compact forms used in YAML files: a list of three or
    four numbers, or a "#rrggbb" string.

    Examples:
        >>> Color.model_validate([255, 215, 0]).as_rgb_tuple
        (255, 215, 0)
        >>> Color.model_validate('#8b0000').r
        139
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: int = Field(default=255, ge=0, le=255)

    @model_validator(mode='before')
    @classmethod
    def from_compact(cls, value: Any) -> Any:
        if isinstance(value, str):
            hex_digits = value.lstrip('#')
            if len(hex_digits) not in (6, 8):
                raise ValueError(f"Expected '#rrggbb' or '#rrggbbaa', got '{value}'")
            value = [int(hex_digits[i:i + 2], 16) for i in range(0, len(hex_digits), 2)]
        if isinstance(value, (list, tuple)):
            if len(value) not in (3, 4):
                raise ValueError(f'Color needs 3 or 4 components, got {list(value)}')
            return dict(zip('rgba', value))
        return value

    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        """(r, g, b) for pygame drawing calls."""
        return (self.r, self.g, self.b)

    @property
    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


class Rectangle(BaseModel):
    """Axis-aligned rectangle, top-left origin (pygame convention).

    Attributes:
        x: Left edge
        y: Top edge
        width: Must be positive
        height: Must be positive
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        """Edges inclusive."""
        return self.left <= px <= self.right and self.top <= py <= self.bottom

    def to_local(self, px: float, py: float, local_width: float, local_height: float) -> Tuple[float, float]:
        """Map a point inside this rectangle into a local_width x local_height space.

        Used to turn a window position into play-field coordinates when the
        field is drawn scaled. Points outside the rectangle map outside the
        local space; nothing is clamped.
        """
        return ((px - self.left) * local_width / self.width,
                (py - self.top) * local_height / self.height)

    @classmethod
    def letterbox(cls, outer: Tuple[float, float], inner: Tuple[float, float]) -> 'Rectangle':
        """Largest rectangle with inner's aspect ratio, centered in outer."""
        outer_w, outer_h = outer
        inner_w, inner_h = inner
        scale = min(outer_w / inner_w, outer_h / inner_h)
        width = max(1.0, inner_w * scale)
        height = max(1.0, inner_h * scale)
        return cls(x=(outer_w - width) / 2, y=(outer_h - height) / 2, width=width, height=height)

    def __str__(self) -> str:
        return f"Rectangle({self.x:.0f}, {self.y:.0f}, {self.width:.0f}x{self.height:.0f})"
