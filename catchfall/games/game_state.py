"""Common GameState enum for all Catchfall games.

All games report one of these states so a host loop (and any presentation
layer) can toggle start and game-over screens without knowing the game.
"""
from enum import Enum


class GameState(Enum):
    """Coarse session states.

    States:
        IDLE: No session has been started yet (start screen)
        RUNNING: Active gameplay in progress
        ENDED: Session finished; final score is frozen

    Transitions:
        IDLE -> RUNNING     start()
        ENDED -> RUNNING    start() (restart)
        RUNNING -> RUNNING  start() (restart, everything reset)
        RUNNING -> ENDED    end(), or lives reaching zero
    """
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"

    @property
    def is_terminal(self) -> bool:
        return self == GameState.ENDED
