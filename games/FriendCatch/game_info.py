"""
Friend Catch - Game Info

This file defines the game's metadata and provides the factory function
for creating game instances.
"""

# Game metadata
NAME = "Friend Catch"
DESCRIPTION = "Catch falling friends, avoid the bombs."
VERSION = "1.0.0"
AUTHOR = "Catchfall Team"

# CLI arguments live on FriendCatchMode.ARGUMENTS (see get_info())


def get_game_mode(**kwargs):
    """
    Factory function to create a FriendCatchMode instance.

    Args:
        **kwargs: Game configuration options
            - pacing: Pacing preset name
            - lives: Starting lives
            - seed: Random seed
            - no_images: Skip image loading

    Returns:
        FriendCatchMode instance
    """
    from games.FriendCatch.game_mode import FriendCatchMode

    # Filter out None values
    game_kwargs = {k: v for k, v in kwargs.items() if v is not None}

    # Map CLI arg names to constructor params
    param_map = {
        'pacing': 'pacing',
        'lives': 'lives',
        'seed': 'seed',
        'no_images': 'no_images',
    }

    constructor_kwargs = {}
    for cli_name, param_name in param_map.items():
        if cli_name in game_kwargs:
            constructor_kwargs[param_name] = game_kwargs[cli_name]

    return FriendCatchMode(**constructor_kwargs)
