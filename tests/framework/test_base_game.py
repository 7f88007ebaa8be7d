"""Tests for BaseGame metadata and argument merging."""

import argparse

import pytest

from catchfall.games import BaseGame, GameState


class TinyGame(BaseGame):
    NAME = "Tiny"
    ARGUMENTS = [
        {'name': '--lives', 'type': int, 'default': None, 'help': 'Starting lives'},
        {'name': '--width', 'type': int, 'default': 320, 'help': 'Fixed width'},
    ]

    @property
    def state(self):
        return GameState.IDLE

    def get_score(self):
        return 0

    def handle_input(self, events):
        pass

    def update(self, dt):
        pass

    def render(self, screen):
        pass


def test_cannot_instantiate_abstract():
    with pytest.raises(TypeError):
        BaseGame()


def test_game_arguments_take_precedence():
    args = TinyGame.get_arguments()
    names = [a['name'] for a in args]
    assert names == ['--lives', '--width', '--height', '--fullscreen']
    width = next(a for a in args if a['name'] == '--width')
    assert width['default'] == 320


def test_get_info():
    info = TinyGame.get_info()
    assert info['name'] == "Tiny"
    assert info['description'] == BaseGame.DESCRIPTION
    assert len(info['arguments']) == 4


def test_reset_is_optional():
    TinyGame().reset()


def test_add_arguments_builds_parser():
    parser = TinyGame.add_arguments(argparse.ArgumentParser())
    args = parser.parse_args(['--lives', '2', '--fullscreen'])
    assert (args.lives, args.width, args.fullscreen) == (2, 320, True)
