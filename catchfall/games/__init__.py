"""
Catchfall Game Framework.

Provides:
- base_game: BaseGame class that all games should inherit from
- game_state: Standard GameState enum
- input: Pointer input events, sources and manager
"""

from catchfall.games.game_state import GameState
from catchfall.games.base_game import BaseGame

__all__ = [
    'GameState',
    'BaseGame',
]
