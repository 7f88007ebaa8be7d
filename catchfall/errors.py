"""Exceptions shared by the Catchfall framework and its games."""


class InvalidConfigurationError(ValueError):
    """Raised when game configuration is out of range.

    Configuration is validated when a game is configured, before any
    session starts, so a bad value never surfaces mid-tick.
    """
    pass


class AssetLoadError(Exception):
    """Raised by a loader when a visual cannot be loaded.

    Visual providers catch this at their boundary, log it and fall back
    to a placeholder. It never reaches the game loop.
    """

    def __init__(self, name: str, reason: str):
        super().__init__(f"Failed to load asset '{name}': {reason}")
        self.name = name
        self.reason = reason
