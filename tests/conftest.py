"""Shared fixtures for Catchfall and FriendCatch tests."""
import os
import random

# Headless pygame; must be set before pygame initialises a display
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pygame
import pytest

from catchfall.logging import disable_logging
from catchfall.scheduler import FrameScheduler
from models import Rectangle
from games.FriendCatch.assets import FallbackVisualProvider, VisualProvider
from games.FriendCatch.config import load_game_config
from games.FriendCatch.difficulty import DifficultyController
from games.FriendCatch.engine import SimulationEngine
from games.FriendCatch.entity import Entity
from games.FriendCatch.factory import EntityFactory
from games.FriendCatch.kinds import load_kind_registry
from games.FriendCatch.renderer import RenderSurface
from games.FriendCatch.score import ScoreState
from games.FriendCatch.session import SessionController

FRAME = 1.0 / 60.0


@pytest.fixture(scope='session', autouse=True)
def pygame_headless():
    """Initialise pygame once for the whole run, quietly."""
    disable_logging()
    pygame.init()
    yield
    pygame.quit()


def make_config(**overrides):
    """Classic pacing with values pinned so .env files cannot shift them."""
    values = dict(
        initial_lives=3,
        field_width=400,
        field_height=600,
        level_up_threshold=50,
        harmful_score_penalty=0,
        reference_fps=60.0,
        spawn_interval_step_ms=100.0,
        harmful_growth=0.05,
        harmful_cap=0.5,
        speed_growth_per_level=0.0,
        speed_score_divisor=200.0,
        power_up_chance=0.05,
        power_up_selection='weighted',
        power_up_weights={'slow_time': 2.0, 'extra_life': 1.0},
        slow_time_duration_ms=5000.0,
        slow_factor=0.5,
        slow_time_stacking='refresh',
        bonus_lives=1,
        marker_lifetime_ms=600.0,
        load_images=False,
        seed=1234,
    )
    values.update(overrides)
    return load_game_config('classic', **values)


def make_entity(kind, x=0.0, y=0.0, size=50.0, speed=2.0, serial=0):
    return Entity(kind=kind, x=x, y=y, size=size, base_speed=speed, serial=serial)


class RecordingSurface(RenderSurface):
    """RenderSurface that records every call as a tuple."""

    def __init__(self):
        self.calls = []

    def clear(self, width, height):
        self.calls.append(('clear', width, height))

    def draw_image(self, handle, x, y, w, h):
        self.calls.append(('image', handle, x, y, w, h))

    def draw_rect(self, color, x, y, w, h):
        self.calls.append(('rect', color, x, y, w, h))

    def draw_text(self, text, x, y, color, alpha=255):
        self.calls.append(('text', text, x, y, color, alpha))

    def of(self, kind):
        return [c for c in self.calls if c[0] == kind]


class StubVisuals(VisualProvider):
    """Visual provider whose readiness is set by the test."""

    def __init__(self, registry, accounted=True, ready=()):
        super().__init__(registry)
        self.accounted = accounted
        self.ready = set(ready)

    def is_ready(self, kind_name):
        return kind_name in self.ready

    def visual(self, kind_name):
        return f"image:{kind_name}"

    def all_accounted_for(self):
        return self.accounted


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def registry():
    return load_kind_registry()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def field_rect(config):
    """Display rectangle identical to the simulation field."""
    return Rectangle(x=0, y=0, width=config.field_width, height=config.field_height)


@pytest.fixture
def game_over_calls():
    return []


@pytest.fixture
def engine(config, registry, rng, game_over_calls):
    """Engine attached to a fresh ScoreState, with no session around it."""
    difficulty = DifficultyController(config, registry)
    factory = EntityFactory(config, rng)
    eng = SimulationEngine(config, registry, factory, difficulty,
                           on_game_over=lambda: game_over_calls.append(True))
    eng.reset(ScoreState(config))
    return eng


@pytest.fixture
def session_factory(registry, scheduler):
    """Build a SessionController for a config, with fallback visuals."""
    def build(config=None, visuals=None):
        config = config or make_config()
        visuals = visuals or FallbackVisualProvider(registry)
        return SessionController(config, registry, scheduler, visuals, rng=random.Random(7))
    return build
