"""Tests for FriendCatch configuration and pacing presets."""

import pytest
from pydantic import ValidationError

from catchfall.errors import InvalidConfigurationError
from games.FriendCatch.config import PACING_PRESETS, GameConfig, load_game_config
from games.FriendCatch.difficulty import DifficultyController

from conftest import make_config


class TestPacingPresets:
    """Tests for the pacing presets."""

    def test_classic_matches_browser_tuning(self):
        """Classic pacing: 50px items, speed 1-3, 1000ms spawn, 500ms floor."""
        config = load_game_config('classic')
        assert config.entity_size == 50
        assert config.min_fall_speed == 1.0
        assert config.max_fall_speed == 3.0
        assert config.spawn_interval_ms == 1000
        assert config.min_spawn_interval_ms == 500

    def test_classic_lives(self):
        assert load_game_config('classic').initial_lives == 30

    @pytest.mark.parametrize('score', [0, 50, 100, 250, 1000, 5000])
    def test_classic_difficulty_curve(self, registry, score):
        """Spawn interval and bomb chance follow the classic score formulas at each level."""
        config = load_game_config('classic', level_up_threshold=50, harmful_cap=0.5)
        level = score // 50 + 1
        schedule = DifficultyController(config, registry).schedule(level, score)

        assert schedule.spawn_interval_ms == pytest.approx(max(500, 1000 - score / 10))
        assert schedule.harmful_probability == pytest.approx(min(0.5, 0.2 + score / 500))

    @pytest.mark.parametrize('name', sorted(PACING_PRESETS))
    def test_every_preset_is_valid(self, name):
        config = load_game_config(name)
        assert config.pacing == name

    def test_archery_is_slower_than_blaster(self):
        archery = load_game_config('archery')
        blaster = load_game_config('blaster')
        assert archery.spawn_interval_ms > blaster.spawn_interval_ms
        assert archery.max_fall_speed < blaster.max_fall_speed

    def test_unknown_pacing(self):
        with pytest.raises(InvalidConfigurationError, match="Unknown pacing"):
            load_game_config('catapult')


class TestOverrides:
    """Tests for load_game_config overrides."""

    def test_override_wins_over_preset(self):
        config = load_game_config('classic', entity_size=30, initial_lives=7)
        assert config.entity_size == 30
        assert config.initial_lives == 7

    def test_none_overrides_are_ignored(self):
        config = load_game_config('archery', entity_size=None)
        assert config.entity_size == PACING_PRESETS['archery'].entity_size

    def test_reference_frame(self, config):
        assert config.reference_frame == pytest.approx(1 / 60)


class TestValidation:
    """Out-of-range values fail before any session starts."""

    @pytest.mark.parametrize('overrides', [
        {'entity_size': -5},
        {'spawn_interval_ms': 0},
        {'field_width': 0},
        {'initial_lives': 0},
        {'min_fall_speed': 4.0, 'max_fall_speed': 2.0},
        {'min_spawn_interval_ms': 2000},
        {'entity_size': 500},
        {'harmful_base': 1.5},
        {'harmful_base': 0.6, 'harmful_cap': 0.5},
        {'harmful_cap': 0.98, 'power_up_chance': 0.05},
        {'slow_factor': 0},
        {'power_up_weights': {'teleport': 1.0}},
        {'power_up_weights': {'slow_time': 0.0, 'extra_life': 0.0}},
        {'power_up_selection': 'random'},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(InvalidConfigurationError):
            make_config(**overrides)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            make_config(spawn_interval_ms=-1)

    def test_direct_construction_raises_validation_error(self):
        with pytest.raises(ValidationError):
            GameConfig(field_height=0)

    def test_config_is_frozen(self, config):
        with pytest.raises(ValidationError):
            config.initial_lives = 99

    def test_zero_weights_allowed_without_power_ups(self):
        config = make_config(power_up_chance=0.0, power_up_weights={'slow_time': 0.0})
        assert config.power_up_chance == 0.0
