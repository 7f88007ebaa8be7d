"""Tests for the kind registry and its YAML loader."""

import pytest

from catchfall.errors import InvalidConfigurationError
from games.FriendCatch.kinds import (
    KindRegistry,
    KindRole,
    KindSpec,
    PowerUpVariant,
    load_kind_registry,
    parse_kind_registry,
)


class TestDefaultRegistry:
    """Tests for the bundled kinds.yaml."""

    def test_bundled_kinds(self, registry):
        assert registry.names == ['friend', 'bomb', 'star']
        assert len(registry) == 3

    def test_roles(self, registry):
        assert registry['friend'].is_beneficial
        assert registry['bomb'].is_harmful
        assert registry['star'].is_power_up
        assert registry.by_role(KindRole.HARMFUL) == [registry['bomb']]

    def test_scoring_values(self, registry):
        assert registry['friend'].points == 10
        assert registry['bomb'].life_penalty == 1
        assert registry['star'].power_up is None

    def test_fallback_color_parsed(self, registry):
        assert registry['friend'].color.as_rgb_tuple == (255, 215, 0)

    def test_image_path_relative_to_file(self, registry):
        path = registry.image_path('friend')
        assert path.name == 'friend.png'
        assert path.parent.name == 'assets'


class TestKindSpec:
    """Tests for KindSpec validation."""

    def test_power_up_on_wrong_role(self):
        with pytest.raises(ValueError):
            KindSpec(name='x', role=KindRole.BENEFICIAL, power_up=PowerUpVariant.SLOW_TIME)

    def test_color_out_of_range(self):
        with pytest.raises(ValueError):
            KindSpec(name='x', role=KindRole.BENEFICIAL, color=[300, 0, 0])

    def test_negative_weight(self):
        with pytest.raises(ValueError):
            KindSpec(name='x', role=KindRole.BENEFICIAL, weight=-1)


class TestRegistryValidation:
    """Tests for registry-level checks."""

    def test_duplicate_names(self):
        friend = KindSpec(name='friend', role=KindRole.BENEFICIAL)
        with pytest.raises(InvalidConfigurationError, match="Duplicate"):
            KindRegistry([friend, friend])

    def test_needs_beneficial_kind(self):
        bomb = KindSpec(name='bomb', role=KindRole.HARMFUL, life_penalty=1)
        with pytest.raises(InvalidConfigurationError):
            KindRegistry([bomb])

    def test_beneficial_kind_must_spawn(self):
        friend = KindSpec(name='friend', role=KindRole.BENEFICIAL, weight=0)
        with pytest.raises(InvalidConfigurationError):
            KindRegistry([friend])

    def test_parse_requires_kinds_mapping(self):
        with pytest.raises(InvalidConfigurationError):
            parse_kind_registry({'items': []})

    def test_parse_wraps_field_errors(self):
        with pytest.raises(InvalidConfigurationError, match="Invalid kind 'friend'"):
            parse_kind_registry({'kinds': {'friend': {'role': 'villain'}}})


class TestLoadFromFile:
    """Tests for load_kind_registry with custom files."""

    def test_load_custom_file(self, tmp_path):
        path = tmp_path / 'kinds.yaml'
        path.write_text(
            "kinds:\n"
            "  apple:\n"
            "    role: beneficial\n"
            "    points: 5\n"
            "    color: [0, 200, 0]\n"
            "  clock:\n"
            "    role: power_up\n"
            "    power_up: slow_time\n"
        )
        registry = load_kind_registry(path)

        assert registry['apple'].points == 5
        assert registry['clock'].power_up == PowerUpVariant.SLOW_TIME
        assert registry.image_path('apple') is None
        assert registry.base_dir == tmp_path

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidConfigurationError, match="Cannot read"):
            load_kind_registry(tmp_path / 'nope.yaml')

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / 'kinds.yaml'
        path.write_text("kinds: [unclosed\n")
        with pytest.raises(InvalidConfigurationError):
            load_kind_registry(path)
