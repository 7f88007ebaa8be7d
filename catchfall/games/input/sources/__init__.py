"""Input sources that produce PointerEvents."""

from catchfall.games.input.sources.base import InputSource, ScriptedInputSource
from catchfall.games.input.sources.mouse import MouseInputSource

__all__ = ['InputSource', 'ScriptedInputSource', 'MouseInputSource']
