"""
FriendCatch game mode.

Friends and bombs fall from the top of the field. Tap friends to score,
avoid bombs, and don't let friends reach the bottom. Stars grant slow-time
or an extra life.

The simulation runs at a fixed logical resolution (the field). Each frame
the field is drawn to an offscreen surface and scaled into the largest
letterboxed rectangle that fits the window; pointer events carry that
rectangle so the resolver can map them back into field coordinates.
"""
from typing import List, Optional, Tuple

import pygame

from catchfall.games import BaseGame, GameState
from catchfall.games.input.input_event import PointerEvent
from catchfall.logging import get_logger
from catchfall.scheduler import FrameScheduler
from models import Rectangle
from games.FriendCatch.assets import FallbackVisualProvider, ImageVisualProvider, VisualProvider
from games.FriendCatch.config import (
    BACKGROUND_COLOR,
    GameConfig,
    HUD_TEXT_COLOR,
    OVERLAY_COLOR,
    PACING_PRESETS,
    RESTART_GRACE_MS,
    load_game_config,
)
from games.FriendCatch.kinds import load_kind_registry
from games.FriendCatch.renderer import PygameSurface
from games.FriendCatch.session import SessionController

log = get_logger('friendcatch')

LETTERBOX_COLOR = (0, 0, 0)


def fit_field(screen_size: Tuple[int, int], field_size: Tuple[int, int]) -> Rectangle:
    """Where the field is drawn in a window of screen_size."""
    if screen_size[0] <= 0 or screen_size[1] <= 0:
        # Minimised window
        return Rectangle(x=0, y=0, width=field_size[0], height=field_size[1])
    return Rectangle.letterbox(screen_size, field_size)


class FriendCatchMode(BaseGame):
    """
    FriendCatch game mode.

    Click or tap to start. The session ends when lives reach zero; click
    again to play another round.
    """

    # Game metadata
    NAME = "Friend Catch"
    DESCRIPTION = "Catch falling friends, avoid the bombs."
    VERSION = "1.0.0"
    AUTHOR = "Catchfall Team"

    # CLI argument definitions
    ARGUMENTS = [
        {
            'name': '--pacing',
            'type': str,
            'default': None,
            'choices': sorted(PACING_PRESETS),
            'help': 'Device speed preset (classic=original tuning, archery=slow, blaster=fast)'
        },
        {
            'name': '--lives',
            'type': int,
            'default': None,
            'help': 'Starting lives'
        },
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for reproducible spawns'
        },
        {
            'name': '--no-images',
            'action': 'store_true',
            'default': False,
            'help': 'Draw colored squares instead of loading images'
        },
    ]

    def __init__(
        self,
        pacing: Optional[str] = None,
        lives: Optional[int] = None,
        seed: Optional[int] = None,
        no_images: bool = False,
        config: Optional[GameConfig] = None,
        visuals: Optional[VisualProvider] = None,
        restart_grace_ms: Optional[float] = None,
        **overrides,
    ):
        """
        Initialize game mode.

        Args:
            pacing: Pacing preset name
            lives: Starting lives (overrides config)
            seed: Random seed
            no_images: Skip image loading, draw fallback colors
            config: Prebuilt config (pacing/lives/seed/overrides are ignored)
            visuals: Prebuilt visual provider (tests)
            restart_grace_ms: Ignore clicks this long after game over (default RESTART_GRACE_MS)
            **overrides: Extra GameConfig fields

        Raises:
            InvalidConfigurationError: Bad pacing or values
        """
        if config is None:
            if no_images:
                overrides['load_images'] = False
            config = load_game_config(pacing, initial_lives=lives, seed=seed, **overrides)
        self.config = config
        self.registry = load_kind_registry(config.kinds_file)

        if visuals is None:
            if config.load_images:
                visuals = ImageVisualProvider(self.registry)
                visuals.load()
            else:
                visuals = FallbackVisualProvider(self.registry)
        self.visuals = visuals

        self.scheduler = FrameScheduler()
        self.session = SessionController(config, self.registry, self.scheduler, self.visuals)

        self._field = PygameSurface(
            pygame.Surface((config.field_width, config.field_height)),
            background=BACKGROUND_COLOR,
        )
        self._display_rect = Rectangle(x=0, y=0, width=config.field_width, height=config.field_height)

        self._clock = 0.0
        self._ended_at: Optional[float] = None
        self._restart_grace_ms = restart_grace_ms if restart_grace_ms is not None else RESTART_GRACE_MS
        self.session.on_state_change.append(self._on_state_change)

        # Fonts (initialized lazily)
        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 32)
        return self._font

    def _get_font_large(self) -> pygame.font.Font:
        if self._font_large is None:
            self._font_large = pygame.font.Font(None, 64)
        return self._font_large

    @property
    def state(self) -> GameState:
        return self.session.state

    def get_score(self) -> int:
        final = self.session.final_score
        if final is not None:
            return final
        return self.session.snapshot().score

    def display_rect(self) -> Rectangle:
        """On-screen rectangle the field was last drawn into."""
        return self._display_rect

    def start(self) -> bool:
        return self.session.start()

    def reset(self) -> None:
        self.session.start()

    def close(self) -> None:
        if isinstance(self.visuals, ImageVisualProvider):
            self.visuals.shutdown()

    def handle_input(self, events: List[PointerEvent]) -> None:
        """
        Process pointer events.

        The state is read once per batch. While running, each event may
        catch one entity; if the session ends partway through, the rest of
        the batch is dropped. From IDLE any click starts a game. From ENDED
        a click restarts only once RESTART_GRACE_MS has passed since game
        over, so taps already in flight cannot skip the game-over screen.
        """
        if not events:
            return
        state = self.session.state

        if state == GameState.RUNNING:
            for event in events:
                self.session.handle_pointer(event)
                if self.session.state != GameState.RUNNING:
                    break
            return

        if state == GameState.ENDED and not self.can_restart():
            return
        self.session.start()

    def can_restart(self) -> bool:
        """True once the game-over grace period has passed."""
        if self._ended_at is None:
            return True
        return (self._clock - self._ended_at) * 1000.0 >= self._restart_grace_ms

    def _on_state_change(self, state: GameState) -> None:
        self._ended_at = self._clock if state == GameState.ENDED else None

    def update(self, dt: float) -> None:
        """Advance timers and the simulation by dt seconds."""
        self._clock += max(0.0, dt)
        self.scheduler.advance(dt)

    def render(self, screen: pygame.Surface) -> None:
        """Render field, HUD and overlays."""
        self._display_rect = fit_field(screen.get_size(), (self.config.field_width, self.config.field_height))
        rect = self._display_rect

        self.session.engine.render(self._field, self.visuals)

        screen.fill(LETTERBOX_COLOR)
        scaled = pygame.transform.scale(self._field.surface, (int(rect.width), int(rect.height)))
        screen.blit(scaled, (int(rect.x), int(rect.y)))

        self._render_hud(screen, rect)

        if self.session.state == GameState.IDLE:
            if self.visuals.all_accounted_for():
                self._render_overlay(screen, rect, "FRIEND CATCH", "Click to start")
            else:
                self._render_overlay(screen, rect, "FRIEND CATCH", "Loading...")
        elif self.session.state == GameState.ENDED:
            lines = [f"Final score: {self.get_score()}"]
            if self.can_restart():
                lines.append("Click to restart")
            self._render_overlay(screen, rect, "GAME OVER", *lines)

    def _render_hud(self, screen: pygame.Surface, rect: Rectangle) -> None:
        snapshot = self.session.snapshot()
        font = self._get_font()
        left = int(rect.x) + 10
        top = int(rect.y) + 10

        lines = [
            f"Score: {snapshot.score}",
            f"Lives: {max(0, snapshot.lives)}",
            f"Level: {snapshot.level}",
        ]
        if snapshot.active_effect_label:
            lines.append(snapshot.active_effect_label)

        for i, line in enumerate(lines):
            text = font.render(line, True, HUD_TEXT_COLOR)
            screen.blit(text, (left, top + i * 28))

    def _render_overlay(self, screen: pygame.Surface, rect: Rectangle, title: str, *lines: str) -> None:
        overlay = pygame.Surface((int(rect.width), int(rect.height)), pygame.SRCALPHA)
        overlay.fill(OVERLAY_COLOR)
        screen.blit(overlay, (int(rect.x), int(rect.y)))

        center_x = int(rect.x + rect.width / 2)
        center_y = int(rect.y + rect.height / 2)

        title_text = self._get_font_large().render(title, True, (255, 255, 255))
        screen.blit(title_text, title_text.get_rect(center=(center_x, center_y - 50)))

        for i, line in enumerate(lines):
            text = self._get_font().render(line, True, (255, 255, 255))
            screen.blit(text, text.get_rect(center=(center_x, center_y + 10 + i * 36)))
