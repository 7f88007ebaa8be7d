"""
Base Input Source - Abstract interface for input backends.
"""
from abc import ABC, abstractmethod
from typing import List

from catchfall.games.input.input_event import PointerEvent


class InputSource(ABC):
    """Abstract base class for input sources.

    All input backends (mouse, touch, scripted) must implement this interface.
    """

    @abstractmethod
    def poll_events(self) -> List[PointerEvent]:
        """Poll for new input events.

        Returns:
            List of PointerEvent objects since last poll.
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update the input source, collecting events.

        Args:
            dt: Delta time in seconds since last update.
        """
        pass


class ScriptedInputSource(InputSource):
    """Input source fed by code, for demos and tests."""

    def __init__(self):
        self._event_queue: List[PointerEvent] = []

    def push(self, event: PointerEvent) -> None:
        self._event_queue.append(event)

    def poll_events(self) -> List[PointerEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        pass
