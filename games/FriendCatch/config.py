"""
FriendCatch - Configuration loader with pacing presets.

Loads settings from the .env file in the game directory (real environment
variables win), exposes them as module constants, and bundles them into a
validated GameConfig. Pacing presets cover input devices from slow (archery)
to fast (blaster); 'classic' is the original browser game's tuning.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from catchfall.errors import InvalidConfigurationError

GAME_DIR = Path(__file__).parent

# Load .env from game directory
load_dotenv(GAME_DIR / '.env')


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Play-field (simulation resolution, independent of window size)
FIELD_WIDTH = _get_int('FIELD_WIDTH', 400)
FIELD_HEIGHT = _get_int('FIELD_HEIGHT', 600)

# Window
WINDOW_WIDTH = _get_int('WINDOW_WIDTH', 480)
WINDOW_HEIGHT = _get_int('WINDOW_HEIGHT', 720)
TARGET_FPS = _get_int('TARGET_FPS', 60)

# Fall speeds are pixels per reference frame
REFERENCE_FPS = _get_float('REFERENCE_FPS', 60.0)

# Game rules
DEFAULT_LIVES = _get_int('DEFAULT_LIVES', 3)
LEVEL_UP_THRESHOLD = _get_int('LEVEL_UP_THRESHOLD', 50)
HARMFUL_SCORE_PENALTY = _get_int('HARMFUL_SCORE_PENALTY', 0)

# Difficulty progression
SPAWN_INTERVAL_STEP_MS = _get_float('SPAWN_INTERVAL_STEP_MS', 100.0)
HARMFUL_GROWTH = _get_float('HARMFUL_GROWTH', 0.05)
HARMFUL_CAP = _get_float('HARMFUL_CAP', 0.5)
SPEED_GROWTH_PER_LEVEL = _get_float('SPEED_GROWTH_PER_LEVEL', 0.0)
SPEED_SCORE_DIVISOR = _get_float('SPEED_SCORE_DIVISOR', 200.0)  # 0 disables score scaling

# Power-ups
POWER_UP_CHANCE = _get_float('POWER_UP_CHANCE', 0.05)
POWER_UP_SELECTION = os.getenv('POWER_UP_SELECTION', 'weighted')  # weighted | uniform
SLOW_TIME_WEIGHT = _get_float('SLOW_TIME_WEIGHT', 2.0)
EXTRA_LIFE_WEIGHT = _get_float('EXTRA_LIFE_WEIGHT', 1.0)
SLOW_TIME_DURATION_MS = _get_float('SLOW_TIME_DURATION_MS', 5000.0)
SLOW_FACTOR = _get_float('SLOW_FACTOR', 0.5)
SLOW_TIME_STACKING = os.getenv('SLOW_TIME_STACKING', 'refresh')  # refresh | extend
BONUS_LIVES = _get_int('BONUS_LIVES', 1)

# Effects
MARKER_LIFETIME_MS = _get_float('MARKER_LIFETIME_MS', 600.0)

# Taps ignored this long after game over, so a late tap cannot restart
RESTART_GRACE_MS = _get_float('RESTART_GRACE_MS', 500.0)

# Assets
KINDS_FILE = Path(os.getenv('KINDS_FILE', str(GAME_DIR / 'kinds.yaml')))
LOAD_IMAGES = _get_bool('LOAD_IMAGES', True)

# Default pacing
DEFAULT_PACING = os.getenv('DEFAULT_PACING', 'classic')

# Visual
BACKGROUND_COLOR = (235, 245, 255)
HUD_TEXT_COLOR = (30, 30, 60)
OVERLAY_COLOR = (0, 0, 0, 150)
CATCH_MARKER_COLOR = (40, 160, 40)
PENALTY_MARKER_COLOR = (200, 30, 30)
POWER_UP_MARKER_COLOR = (40, 90, 220)


@dataclass
class PacingPreset:
    """Timing and sizing parameters for a specific input device speed."""
    name: str
    spawn_interval_ms: float       # Milliseconds between spawns at level 1
    min_spawn_interval_ms: float   # Floor for the spawn interval
    min_fall_speed: float          # Pixels per reference frame
    max_fall_speed: float
    entity_size: float             # Edge of the bounding square
    harmful_base: float            # Harmful probability at level 1
    spawn_interval_step_ms: float = SPAWN_INTERVAL_STEP_MS  # Interval cut per level
    harmful_growth: float = HARMFUL_GROWTH                  # Harmful probability added per level
    initial_lives: int = DEFAULT_LIVES


# classic: spawn interval max(500, 1000 - score / 10) and bomb chance
# min(0.5, 0.2 + score / 500), sampled at each 50-point level; 30 lives
PACING_PRESETS: Dict[str, PacingPreset] = {
    'classic': PacingPreset(
        name='classic',
        spawn_interval_ms=1000,
        min_spawn_interval_ms=500,
        min_fall_speed=1.0,
        max_fall_speed=3.0,
        entity_size=50,
        harmful_base=0.2,
        spawn_interval_step_ms=5.0,
        harmful_growth=0.1,
        initial_lives=30,
    ),
    'archery': PacingPreset(
        name='archery',
        spawn_interval_ms=4000,
        min_spawn_interval_ms=2500,
        min_fall_speed=0.5,
        max_fall_speed=1.0,
        entity_size=80,
        harmful_base=0.1,
    ),
    'throwing': PacingPreset(
        name='throwing',
        spawn_interval_ms=1800,
        min_spawn_interval_ms=900,
        min_fall_speed=0.8,
        max_fall_speed=2.0,
        entity_size=64,
        harmful_base=0.15,
    ),
    'blaster': PacingPreset(
        name='blaster',
        spawn_interval_ms=600,
        min_spawn_interval_ms=250,
        min_fall_speed=1.5,
        max_fall_speed=4.0,
        entity_size=40,
        harmful_base=0.25,
    ),
}


class GameConfig(BaseModel):
    """Validated configuration for one FriendCatch game.

    Construction fails fast (pydantic ValidationError) on out-of-range
    values; load_game_config() wraps that in InvalidConfigurationError.
    """
    pacing: str = 'classic'

    field_width: int = Field(default=FIELD_WIDTH, gt=0)
    field_height: int = Field(default=FIELD_HEIGHT, gt=0)
    entity_size: float = Field(default=50.0, gt=0)

    initial_lives: int = Field(default=DEFAULT_LIVES, gt=0)
    level_up_threshold: int = Field(default=LEVEL_UP_THRESHOLD, gt=0)
    harmful_score_penalty: int = Field(default=HARMFUL_SCORE_PENALTY, ge=0)

    min_fall_speed: float = Field(default=1.0, ge=0)
    max_fall_speed: float = Field(default=3.0, gt=0)
    reference_fps: float = Field(default=REFERENCE_FPS, gt=0)

    spawn_interval_ms: float = Field(default=1000.0, gt=0)
    min_spawn_interval_ms: float = Field(default=500.0, gt=0)
    spawn_interval_step_ms: float = Field(default=SPAWN_INTERVAL_STEP_MS, ge=0)

    harmful_base: float = Field(default=0.2, ge=0, le=1)
    harmful_growth: float = Field(default=HARMFUL_GROWTH, ge=0, le=1)
    harmful_cap: float = Field(default=HARMFUL_CAP, ge=0, le=1)
    speed_growth_per_level: float = Field(default=SPEED_GROWTH_PER_LEVEL, ge=0)
    speed_score_divisor: float = Field(default=SPEED_SCORE_DIVISOR, ge=0)

    power_up_chance: float = Field(default=POWER_UP_CHANCE, ge=0, le=1)
    power_up_selection: Literal['weighted', 'uniform'] = 'weighted'
    power_up_weights: Dict[str, float] = Field(
        default_factory=lambda: {'slow_time': SLOW_TIME_WEIGHT, 'extra_life': EXTRA_LIFE_WEIGHT}
    )
    slow_time_duration_ms: float = Field(default=SLOW_TIME_DURATION_MS, gt=0)
    slow_factor: float = Field(default=SLOW_FACTOR, gt=0, le=1)
    slow_time_stacking: Literal['refresh', 'extend'] = 'refresh'
    bonus_lives: int = Field(default=BONUS_LIVES, ge=0)

    marker_lifetime_ms: float = Field(default=MARKER_LIFETIME_MS, ge=0)

    kinds_file: Path = KINDS_FILE
    load_images: bool = LOAD_IMAGES
    seed: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_ranges(self) -> 'GameConfig':
        """Cross-field checks that single-field constraints cannot express."""
        if self.min_fall_speed > self.max_fall_speed:
            raise ValueError(
                f'min_fall_speed ({self.min_fall_speed}) exceeds max_fall_speed ({self.max_fall_speed})'
            )
        if self.min_spawn_interval_ms > self.spawn_interval_ms:
            raise ValueError(
                f'min_spawn_interval_ms ({self.min_spawn_interval_ms}) exceeds '
                f'spawn_interval_ms ({self.spawn_interval_ms})'
            )
        if self.entity_size > self.field_width:
            raise ValueError(
                f'entity_size ({self.entity_size}) does not fit field_width ({self.field_width})'
            )
        if self.harmful_base > self.harmful_cap:
            raise ValueError(f'harmful_base ({self.harmful_base}) exceeds harmful_cap ({self.harmful_cap})')
        if self.harmful_cap + self.power_up_chance > 1:
            raise ValueError('harmful_cap + power_up_chance must leave room for beneficial kinds')
        unknown = set(self.power_up_weights) - {'slow_time', 'extra_life'}
        if unknown:
            raise ValueError(f'Unknown power-up variants: {sorted(unknown)}')
        if any(w < 0 for w in self.power_up_weights.values()):
            raise ValueError('Power-up weights must be non-negative')
        if self.power_up_chance > 0 and not any(w > 0 for w in self.power_up_weights.values()):
            raise ValueError('At least one power-up variant needs a positive weight')
        return self

    @property
    def reference_frame(self) -> float:
        """Seconds in one reference frame; fall speeds are per reference frame."""
        return 1.0 / self.reference_fps


def load_game_config(pacing: Optional[str] = None, **overrides: Any) -> GameConfig:
    """Build a GameConfig from a pacing preset, env defaults and overrides.

    Args:
        pacing: Preset name (classic, archery, throwing, blaster); None uses DEFAULT_PACING
        **overrides: GameConfig field values; None values are ignored

    Returns:
        Validated GameConfig

    Raises:
        InvalidConfigurationError: Unknown pacing or out-of-range values
    """
    pacing = pacing or DEFAULT_PACING
    preset = PACING_PRESETS.get(pacing)
    if preset is None:
        raise InvalidConfigurationError(
            f"Unknown pacing '{pacing}', expected one of {sorted(PACING_PRESETS)}"
        )

    values: Dict[str, Any] = {
        'pacing': preset.name,
        'spawn_interval_ms': preset.spawn_interval_ms,
        'min_spawn_interval_ms': preset.min_spawn_interval_ms,
        'min_fall_speed': preset.min_fall_speed,
        'max_fall_speed': preset.max_fall_speed,
        'entity_size': preset.entity_size,
        'harmful_base': preset.harmful_base,
        'spawn_interval_step_ms': preset.spawn_interval_step_ms,
        'harmful_growth': preset.harmful_growth,
        'initial_lives': preset.initial_lives,
        'power_up_selection': POWER_UP_SELECTION,
        'slow_time_stacking': SLOW_TIME_STACKING,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return GameConfig(**values)
    except ValidationError as e:
        raise InvalidConfigurationError(str(e)) from e
