"""
FriendCatch - Visual providers.

The engine never loads images itself. It asks a VisualProvider whether a
kind's visual is ready and, if not, draws the kind's fallback color. Image
loading happens on a background thread so a session can start as soon as
every image has either loaded or failed ("accounted for").
"""
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, List, Optional, Set, Tuple

import pygame

from catchfall.errors import AssetLoadError
from catchfall.logging import get_logger
from games.FriendCatch.kinds import KindRegistry

log = get_logger('assets')


class VisualProvider(ABC):
    """Source of per-kind visuals."""

    def __init__(self, registry: KindRegistry):
        self._registry = registry

    @abstractmethod
    def is_ready(self, kind_name: str) -> bool:
        """True if visual(kind_name) returns a drawable handle."""
        pass

    @abstractmethod
    def visual(self, kind_name: str):
        """Drawable handle for a kind; only valid when is_ready() is True."""
        pass

    @abstractmethod
    def all_accounted_for(self) -> bool:
        """True once every kind's visual has loaded or failed."""
        pass

    def fallback_color(self, kind_name: str) -> Tuple[int, int, int]:
        """Solid color drawn while the visual is missing."""
        return self._registry[kind_name].color.as_rgb_tuple


class FallbackVisualProvider(VisualProvider):
    """Colored squares only. Always accounted for, never ready."""

    def is_ready(self, kind_name: str) -> bool:
        return False

    def visual(self, kind_name: str):
        return None

    def all_accounted_for(self) -> bool:
        return True


class ImageVisualProvider(VisualProvider):
    """Loads each kind's image file on a worker thread.

    A kind without an image path is accounted for immediately. A failed
    load is logged and counted as accounted for; that kind keeps its
    fallback color for the rest of the run.
    """

    def __init__(self, registry: KindRegistry, max_workers: int = 2):
        super().__init__(registry)
        self._lock = threading.Lock()
        self._images: Dict[str, pygame.Surface] = {}
        self._failed: Dict[str, str] = {}
        self._accounted: Set[str] = set()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._futures: List[Future] = []
        self._max_workers = max_workers

    def load(self) -> None:
        """Start loading every kind's image in the background. Returns immediately."""
        if self._executor is not None:
            return
        self._executor = ThreadPoolExecutor(max_workers=self._max_workers,
                                            thread_name_prefix='friendcatch-assets')
        for kind in self._registry:
            path = self._registry.image_path(kind.name)
            if path is None:
                with self._lock:
                    self._accounted.add(kind.name)
                continue
            self._futures.append(self._executor.submit(self._load_one, kind.name, path))
        log.debug("Loading %d images", len(self._futures))

    def _load_one(self, name: str, path) -> None:
        # Any failure here must still account for the kind, or start() waits forever
        try:
            if not path.exists():
                raise AssetLoadError(name, f"file not found: {path}")
            image = pygame.image.load(str(path))
        except Exception as e:
            error = e if isinstance(e, AssetLoadError) else AssetLoadError(name, f"{type(e).__name__}: {e}")
            log.warning("%s; using fallback color", error)
            with self._lock:
                self._failed[name] = error.reason
                self._accounted.add(name)
            return

        with self._lock:
            self._images[name] = image
            self._accounted.add(name)
        log.debug("Loaded image for '%s' from %s", name, path)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until all loads finish (for tests and scripted hosts).

        Returns:
            True if everything is accounted for
        """
        if self._futures:
            wait(self._futures, timeout=timeout)
        return self.all_accounted_for()

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)

    @property
    def failed(self) -> Dict[str, str]:
        """Kind name -> failure reason."""
        with self._lock:
            return dict(self._failed)

    def is_ready(self, kind_name: str) -> bool:
        with self._lock:
            return kind_name in self._images

    def visual(self, kind_name: str) -> Optional[pygame.Surface]:
        with self._lock:
            return self._images.get(kind_name)

    def all_accounted_for(self) -> bool:
        if self._executor is None:
            return False
        with self._lock:
            return all(kind.name in self._accounted for kind in self._registry)
