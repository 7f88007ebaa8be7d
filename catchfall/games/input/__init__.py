"""
Pointer input layer for Catchfall games.

Provides unified input handling so a game reacts identically to a mouse
click, a tap, or a scripted event in tests.
"""

from catchfall.games.input.input_event import PointerEvent
from catchfall.games.input.input_manager import InputManager

__all__ = ['PointerEvent', 'InputManager']
