"""Tests for visual providers and the degraded fallback path."""

import pygame
import pytest

from games.FriendCatch.assets import FallbackVisualProvider, ImageVisualProvider
from games.FriendCatch.kinds import load_kind_registry


@pytest.fixture
def image_registry(tmp_path):
    """Registry where 'friend' has a real bitmap and 'bomb' a missing file."""
    surface = pygame.Surface((8, 8))
    surface.fill((0, 255, 0))
    pygame.image.save(surface, str(tmp_path / 'friend.bmp'))
    (tmp_path / 'broken.bmp').write_bytes(b'not an image')

    path = tmp_path / 'kinds.yaml'
    path.write_text(
        "kinds:\n"
        "  friend:\n"
        "    role: beneficial\n"
        "    points: 10\n"
        "    image: friend.bmp\n"
        "  bomb:\n"
        "    role: harmful\n"
        "    life_penalty: 1\n"
        "    color: [139, 0, 0]\n"
        "    image: missing.bmp\n"
        "  star:\n"
        "    role: power_up\n"
        "    image: broken.bmp\n"
        "  plain:\n"
        "    role: beneficial\n"
        "    points: 1\n"
    )
    return load_kind_registry(path)


class TestImageVisualProvider:
    """Tests for background image loading."""

    def test_not_accounted_before_load(self, image_registry):
        provider = ImageVisualProvider(image_registry)
        assert not provider.all_accounted_for()

    def test_loads_and_falls_back(self, image_registry):
        provider = ImageVisualProvider(image_registry)
        provider.load()
        try:
            assert provider.wait(timeout=5.0)
        finally:
            provider.shutdown()

        assert provider.is_ready('friend')
        assert provider.visual('friend').get_size() == (8, 8)
        assert not provider.is_ready('bomb')
        assert not provider.is_ready('star')
        assert set(provider.failed) == {'bomb', 'star'}
        assert provider.fallback_color('bomb') == (139, 0, 0)

    def test_os_error_still_accounts_for_kind(self, image_registry, monkeypatch):
        """A loader raising something other than pygame.error still falls back."""
        def unreadable(path):
            raise PermissionError(13, 'Permission denied', path)

        monkeypatch.setattr(pygame.image, 'load', unreadable)
        provider = ImageVisualProvider(image_registry)
        provider.load()
        try:
            assert provider.wait(timeout=5.0)
        finally:
            provider.shutdown()

        assert provider.all_accounted_for()
        assert set(provider.failed) == {'friend', 'bomb', 'star'}
        assert 'PermissionError' in provider.failed['friend']
        assert not provider.is_ready('friend')

    def test_kind_without_image_is_accounted(self, image_registry):
        provider = ImageVisualProvider(image_registry)
        provider.load()
        provider.wait(timeout=5.0)
        provider.shutdown()
        assert not provider.is_ready('plain')
        assert provider.all_accounted_for()

    def test_bundled_kinds_degrade_to_colors(self, registry):
        """The bundled registry loads or falls back for every kind."""
        provider = ImageVisualProvider(registry)
        provider.load()
        assert provider.wait(timeout=5.0)
        provider.shutdown()
        for kind in registry:
            if not provider.is_ready(kind.name):
                assert provider.fallback_color(kind.name) == kind.color.as_rgb_tuple

    def test_load_is_idempotent(self, image_registry):
        provider = ImageVisualProvider(image_registry)
        provider.load()
        provider.load()
        provider.wait(timeout=5.0)
        provider.shutdown()
        assert provider.all_accounted_for()


class TestFallbackVisualProvider:
    """Tests for the colors-only provider."""

    def test_always_accounted_never_ready(self, registry):
        provider = FallbackVisualProvider(registry)
        assert provider.all_accounted_for()
        assert not provider.is_ready('friend')
        assert provider.visual('friend') is None
        assert provider.fallback_color('friend') == (255, 215, 0)
