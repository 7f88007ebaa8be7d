"""
FriendCatch - Render surfaces.

The engine issues four kinds of draw calls and never reads anything back.
PygameSurface implements them on a pygame.Surface sized to the logical
play-field; the game mode scales that surface into the window.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

import pygame

Color = Tuple[int, int, int]


class RenderSurface(ABC):
    """Draw-call sink used by SimulationEngine.render()."""

    @abstractmethod
    def clear(self, width: float, height: float) -> None:
        pass

    @abstractmethod
    def draw_image(self, handle, x: float, y: float, w: float, h: float) -> None:
        pass

    @abstractmethod
    def draw_rect(self, color: Color, x: float, y: float, w: float, h: float) -> None:
        pass

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float, color: Color, alpha: int = 255) -> None:
        """Draw text centered on (x, y); alpha 0 is fully transparent."""
        pass


class PygameSurface(RenderSurface):
    """RenderSurface backed by a pygame.Surface."""

    def __init__(self, surface: pygame.Surface, background: Color = (0, 0, 0),
                 font: Optional[pygame.font.Font] = None):
        self.surface = surface
        self.background = background
        self._font = font
        self._scaled: Dict[Tuple[int, int, int], pygame.Surface] = {}

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 28)
        return self._font

    def clear(self, width: float, height: float) -> None:
        if self.surface.get_size() != (int(width), int(height)):
            self.surface = pygame.Surface((int(width), int(height)))
        self.surface.fill(self.background)

    def draw_image(self, handle: pygame.Surface, x: float, y: float, w: float, h: float) -> None:
        size = (int(w), int(h))
        key = (id(handle), size[0], size[1])
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = pygame.transform.scale(handle, size)
            self._scaled[key] = scaled
        self.surface.blit(scaled, (int(x), int(y)))

    def draw_rect(self, color: Color, x: float, y: float, w: float, h: float) -> None:
        pygame.draw.rect(self.surface, color, pygame.Rect(int(x), int(y), int(w), int(h)))

    def draw_text(self, text: str, x: float, y: float, color: Color, alpha: int = 255) -> None:
        rendered = self.font.render(text, True, color)
        if alpha < 255:
            rendered.set_alpha(max(0, alpha))
        self.surface.blit(rendered, rendered.get_rect(center=(int(x), int(y))))
