"""
Input Manager - Buffers pointer events between frames.
"""
from typing import List, Optional

from catchfall.games.input.input_event import PointerEvent
from catchfall.games.input.sources.base import InputSource


class InputManager:
    """Collects events from one swappable source into a per-frame buffer.

    The host calls update(dt) once per frame and hands get_events() to the
    game. Each event is delivered exactly once.
    """

    def __init__(self, source: Optional[InputSource] = None):
        self._source = source
        self._pending: List[PointerEvent] = []
        self.events_seen = 0

    @property
    def source(self) -> Optional[InputSource]:
        return self._source

    @source.setter
    def source(self, source: Optional[InputSource]) -> None:
        """Swap sources; events buffered from the old one are dropped."""
        self._source = source
        self._pending.clear()

    def update(self, dt: float) -> None:
        if self._source is None:
            return
        self._source.update(dt)
        events = self._source.poll_events()
        self.events_seen += len(events)
        self._pending.extend(events)

    def get_events(self) -> List[PointerEvent]:
        """Events buffered since the last call, oldest first."""
        events, self._pending = self._pending, []
        return events

    def clear_events(self) -> None:
        """Drop buffered events and anything the source is still holding."""
        self._pending.clear()
        if self._source is not None:
            self._source.poll_events()
