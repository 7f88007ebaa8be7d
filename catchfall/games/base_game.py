"""
BaseGame: the contract between a game and its host loop.

A host (a standalone main.py, a test) does four things with a game every
frame: feed it pointer events, advance it by dt seconds, draw it, and read
its state and score. Everything else, including how the game schedules its
own timers, stays inside the game.

Metadata and command-line options are class attributes, so a host can list
games and build their argument parsers without instantiating anything.
"""
import argparse
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import pygame

from catchfall.games.game_state import GameState


class BaseGame(ABC):
    """Abstract pointer-driven game.

    Class attributes:
        NAME, DESCRIPTION, VERSION, AUTHOR: Shown by hosts and game_info
        ARGUMENTS: argparse option specs; each dict holds 'name' plus any
            add_argument() keyword ('type', 'default', 'help', 'choices',
            'action'). Window options from _WINDOW_ARGUMENTS are appended
            unless the game already declares an option with the same name.
    """

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    ARGUMENTS: List[Dict[str, Any]] = []

    _WINDOW_ARGUMENTS: List[Dict[str, Any]] = [
        {'name': '--width', 'type': int, 'default': None,
         'help': 'Window width in pixels (simulation size is unchanged)'},
        {'name': '--height', 'type': int, 'default': None,
         'help': 'Window height in pixels (simulation size is unchanged)'},
        {'name': '--fullscreen', 'action': 'store_true', 'default': False,
         'help': 'Run fullscreen'},
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Game options followed by window options, first declaration of a name wins."""
        merged: Dict[str, Dict[str, Any]] = {}
        for spec in list(cls.ARGUMENTS) + list(cls._WINDOW_ARGUMENTS):
            merged.setdefault(spec['name'], spec)
        return list(merged.values())

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
        for spec in cls.get_arguments():
            options = {key: value for key, value in spec.items() if key != 'name'}
            parser.add_argument(spec['name'], **options)
        return parser

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    @property
    @abstractmethod
    def state(self) -> GameState:
        pass

    @abstractmethod
    def get_score(self) -> int:
        pass

    @abstractmethod
    def handle_input(self, events: List) -> None:
        """Consume the PointerEvents collected since the last frame."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance by dt seconds of wall time."""
        pass

    @abstractmethod
    def render(self, screen: pygame.Surface) -> None:
        pass

    def reset(self) -> None:
        """Return to a fresh game. No-op unless overridden."""
        pass
