"""
Catchfall - a small arcade framework for pointer-driven falling-object games.

Provides:
- logging: unified module loggers and structured record sinks
- scheduler: host clock contract (frame callbacks, one-shot and periodic timers)
- errors: configuration and asset errors shared by games
- games: BaseGame, GameState, and the pointer input layer
"""

__version__ = "1.0.0"

__all__ = ['__version__']
