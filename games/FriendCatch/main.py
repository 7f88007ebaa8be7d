#!/usr/bin/env python3
"""
Friend Catch - Standalone entry point.

Run this to play Friend Catch with mouse or touch input.

Usage:
    python main.py
    python main.py --fullscreen
    python main.py --pacing archery --lives 5
"""

import argparse
import os
import sys

import pygame

# Support running from any directory - add project root to path
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from catchfall.errors import InvalidConfigurationError
from catchfall.games import GameState
from catchfall.games.input import InputManager
from catchfall.games.input.sources import MouseInputSource
from catchfall.logging import close_all_sinks, configure_logging, create_sink, get_logger, register_sink
from games.FriendCatch.config import TARGET_FPS, WINDOW_HEIGHT, WINDOW_WIDTH
from games.FriendCatch.game_mode import FriendCatchMode

log = get_logger('main')


def build_parser() -> argparse.ArgumentParser:
    """Argument parser built from FriendCatchMode's declared options."""
    parser = FriendCatchMode.add_arguments(argparse.ArgumentParser(description=FriendCatchMode.DESCRIPTION))
    parser.add_argument('--log-level', type=str, default=None,
                        help='Console log level (TRACE, DEBUG, INFO, WARNING, ERROR)')
    parser.add_argument('--record-sessions', action='store_true',
                        help='Append a JSONL record of every finished session to the log directory')
    return parser


def main(argv=None):
    """Run Friend Catch."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)
    if args.record_sessions:
        configure_logging(records={'session'})
    register_sink('session', create_sink('session'))

    # Initialize pygame
    pygame.init()

    # Create display
    if args.fullscreen:
        pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        width = args.width or WINDOW_WIDTH
        height = args.height or WINDOW_HEIGHT
        pygame.display.set_mode((width, height), pygame.RESIZABLE)

    pygame.display.set_caption("Friend Catch")

    try:
        game = FriendCatchMode(
            pacing=args.pacing,
            lives=args.lives,
            seed=args.seed,
            no_images=args.no_images,
        )
    except InvalidConfigurationError as e:
        log.error("Invalid configuration: %s", e)
        pygame.quit()
        return 2

    # Pointer events carry the field's current on-screen rectangle
    input_manager = InputManager(MouseInputSource(game.display_rect))

    game.session.on_game_over.append(lambda score: print(f"\nGAME OVER! Score: {score}"))

    clock = pygame.time.Clock()
    running = True

    print("=" * 50)
    print("FRIEND CATCH")
    print("=" * 50)
    print("\nCatch the friends, avoid the bombs!")
    print("\nControls:")
    print("  - Click or tap to catch")
    print("  - ESC to quit")
    print("  - R to restart")
    print("=" * 50)

    while running:
        dt = clock.tick(TARGET_FPS) / 1000.0

        # Update input
        input_manager.update(dt)

        # Handle pygame events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    if game.start():
                        print("\n--- RESTARTING ---\n")

        # Get input events and pass to game
        game.handle_input(input_manager.get_events())

        # Update game
        game.update(dt)

        # Render
        screen = pygame.display.get_surface()
        game.render(screen)
        pygame.display.flip()

    if game.state == GameState.RUNNING:
        game.session.end('quit')
    game.close()
    close_all_sinks()
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
