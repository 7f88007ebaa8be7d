"""
Mouse Input Source - Mouse clicks and single-finger taps.
"""
import time
from typing import Callable, List, Set

import pygame

from models import Point2D, Rectangle
from catchfall.games.input.input_event import PointerEvent
from catchfall.games.input.sources.base import InputSource


class MouseInputSource(InputSource):
    """Pointer source for pygame windows.

    Converts left mouse clicks and the first active touch into PointerEvents
    carrying the on-screen rectangle the play-field is displayed in.
    Additional simultaneous fingers are ignored. Mouse events that SDL
    synthesizes from touches are dropped so a tap is never counted twice.
    Non-pointer events are re-posted to the pygame event queue for the
    main loop.
    """

    def __init__(self, target_rect_provider: Callable[[], Rectangle]):
        """
        Args:
            target_rect_provider: Returns the current on-screen play-field rectangle
        """
        self._target_rect_provider = target_rect_provider
        self._event_queue: List[PointerEvent] = []
        self._active_fingers: Set[int] = set()

    def poll_events(self) -> List[PointerEvent]:
        """Get new input events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect pointer presses."""
        passthrough = []
        for event in pygame.event.get():
            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1 and not getattr(event, 'touch', False):
                    pos_x, pos_y = event.pos
                    self._queue(float(pos_x), float(pos_y), None)
            elif event.type == pygame.FINGERDOWN:
                first_contact = not self._active_fingers
                self._active_fingers.add(event.finger_id)
                if first_contact:
                    width, height = pygame.display.get_window_size()
                    self._queue(event.x * width, event.y * height, event.finger_id)
            elif event.type == pygame.FINGERUP:
                self._active_fingers.discard(event.finger_id)
            elif event.type not in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP, pygame.FINGERMOTION):
                passthrough.append(event)

        for event in passthrough:
            pygame.event.post(event)

    def _queue(self, x: float, y: float, pointer_id) -> None:
        self._event_queue.append(PointerEvent(
            position=Point2D(x=x, y=y),
            timestamp=time.monotonic(),
            target_rect=self._target_rect_provider(),
            pointer_id=pointer_id,
        ))

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
