"""
FriendCatch - Pointer to entity resolution.

The play-field is simulated at a fixed logical resolution but displayed at
whatever size the window allows, so every pointer position is first
rescaled from display space into simulation space. A tap hits at most one
entity: the newest (topmost drawn) one containing the point.
"""
from typing import Optional, Tuple

from models import Rectangle
from games.FriendCatch.engine import SimulationEngine
from games.FriendCatch.entity import Entity


class InputResolver:
    """Maps pointer positions onto the engine's live entities."""

    def __init__(self, engine: SimulationEngine):
        self._engine = engine

    @staticmethod
    def to_simulation(
        pointer_x: float,
        pointer_y: float,
        display_rect: Rectangle,
        sim_width: float,
        sim_height: float,
    ) -> Tuple[float, float]:
        """Convert a display-space point to simulation space.

        Args:
            pointer_x: Pointer x in display coordinates
            pointer_y: Pointer y in display coordinates
            display_rect: Where the play-field is drawn on screen
            sim_width: Logical play-field width
            sim_height: Logical play-field height

        Returns:
            (sim_x, sim_y)
        """
        return display_rect.to_local(pointer_x, pointer_y, sim_width, sim_height)

    def resolve(
        self,
        pointer_x: float,
        pointer_y: float,
        display_rect: Rectangle,
        sim_width: float,
        sim_height: float,
    ) -> Optional[Entity]:
        """Find the topmost unstruck entity under the pointer.

        Returns:
            The entity, or None if the pointer hits nothing
        """
        sim_x, sim_y = self.to_simulation(pointer_x, pointer_y, display_rect, sim_width, sim_height)
        for entity in reversed(self._engine.entities):
            if entity.struck:
                continue
            if entity.contains_point(sim_x, sim_y):
                return entity
        return None
