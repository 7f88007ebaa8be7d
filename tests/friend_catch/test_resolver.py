"""Tests for display-to-simulation mapping and hit resolution."""

import pytest

from models import Rectangle
from games.FriendCatch.resolver import InputResolver

from conftest import make_entity


@pytest.fixture
def resolver(engine):
    return InputResolver(engine)


class TestCoordinateCorrection:
    """Tests for InputResolver.to_simulation."""

    def test_half_size_display(self):
        """Display width 200 over sim width 400: x=50 maps to 100."""
        rect = Rectangle(x=0, y=0, width=200, height=300)
        sim_x, sim_y = InputResolver.to_simulation(50, 30, rect, 400, 600)
        assert sim_x == 100
        assert sim_y == 60

    def test_offset_display(self):
        """Letterbox offsets are removed before scaling."""
        rect = Rectangle(x=100, y=20, width=800, height=1200)
        sim_x, sim_y = InputResolver.to_simulation(500, 620, rect, 400, 600)
        assert (sim_x, sim_y) == (200, 300)

    def test_identity(self, field_rect):
        assert InputResolver.to_simulation(12.5, 7, field_rect, 400, 600) == (12.5, 7)


class TestResolve:
    """Tests for InputResolver.resolve."""

    def test_hit(self, resolver, engine, registry, field_rect):
        entity = engine.add(make_entity(registry['friend'], x=100, y=100))
        assert resolver.resolve(125, 125, field_rect, 400, 600) is entity

    def test_miss(self, resolver, engine, registry, field_rect):
        engine.add(make_entity(registry['friend'], x=100, y=100))
        assert resolver.resolve(10, 10, field_rect, 400, 600) is None

    def test_scaled_hit(self, resolver, engine, registry):
        """A tap on a half-size display still lands on the right entity."""
        entity = engine.add(make_entity(registry['friend'], x=100, y=200))
        rect = Rectangle(x=0, y=0, width=200, height=300)
        assert resolver.resolve(60, 110, rect, 400, 600) is entity
        # Without correction (60, 110) would be outside the entity
        assert not entity.contains_point(60, 110)

    def test_topmost_wins(self, resolver, engine, registry, field_rect):
        """Overlapping entities resolve to the most recently spawned."""
        engine.add(make_entity(registry['friend'], x=100, y=100, serial=1))
        newer = engine.add(make_entity(registry['bomb'], x=120, y=120, serial=2))
        assert resolver.resolve(130, 130, field_rect, 400, 600) is newer

    def test_struck_entities_are_skipped(self, resolver, engine, registry, field_rect):
        older = engine.add(make_entity(registry['friend'], x=100, y=100, serial=1))
        newer = engine.add(make_entity(registry['friend'], x=100, y=100, serial=2))
        newer.mark_struck()
        assert resolver.resolve(110, 110, field_rect, 400, 600) is older

    def test_edges_inclusive(self, resolver, engine, registry, field_rect):
        entity = engine.add(make_entity(registry['friend'], x=100, y=100, size=50))
        assert resolver.resolve(150, 150, field_rect, 400, 600) is entity
