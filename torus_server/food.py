"""Food entity definition."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants, utils
from .utils import Position


@dataclass
class Food:
    """The single food item a room's snakes compete for."""

    position: Position
    value: int = constants.FOOD_VALUE

    @classmethod
    def spawn_random(cls) -> "Food":
        """Create food on a random interior cell."""

        return cls(position=utils.random_food_position())

    def relocate(self) -> None:
        """Move the food to a fresh random interior cell."""

        self.position = utils.random_food_position()

    def to_dict(self) -> dict[str, int]:
        """Serialise the food to a JSON friendly dictionary."""

        return self.position.to_dict()
