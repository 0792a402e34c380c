"""Snake entity implementation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from . import constants, utils
from .utils import Position


@dataclass
class Snake:
    """Authoritative representation of a snake controlled by a player."""

    body: List[Position]
    direction: str
    color: str
    last_update: float

    @property
    def head(self) -> Position:
        return self.body[0]

    @property
    def tail(self) -> Position:
        return self.body[-1]

    def turn(self, direction: str) -> bool:
        """Change heading unless ``direction`` reverses the current one.

        Returns ``True`` when the new heading was applied.
        """

        if direction not in constants.OPPOSITES:
            return False
        if utils.is_opposite(direction, self.direction):
            return False
        self.direction = direction
        return True

    def move(self, now: float) -> Optional[Position]:
        """Advance the snake by one cell if the movement interval has elapsed.

        Returns the new head, or ``None`` while the snake is throttled. The body
        length is preserved: the new head is prepended and the tail dropped.
        """

        if now - self.last_update < constants.MOVE_INTERVAL:
            return None
        new_head = utils.step(self.head, self.direction)
        self.body.insert(0, new_head)
        self.body.pop()
        self.last_update = now
        return new_head

    def grow(self) -> None:
        """Extend the snake by duplicating its tail segment."""

        self.body.append(self.tail)

    def to_snapshot(self) -> dict:
        """Return a snapshot representation for clients."""

        return {
            "body": [segment.to_dict() for segment in self.body],
            "direction": self.direction,
            "color": self.color,
        }


def create_snake(player_index: int, now: float) -> Snake:
    """Create the starting snake for the player seated at ``player_index``.

    The head sits on the player's spawn point with the remaining segments
    trailing to the left, heading right.
    """

    if not 0 <= player_index < len(constants.SPAWN_POINTS):
        raise ValueError(f"No spawn point for player index {player_index}")
    x, y = constants.SPAWN_POINTS[player_index]
    size = constants.GRID_SIZE
    body = [Position((x - offset) % size, y) for offset in range(constants.INITIAL_SNAKE_LENGTH)]
    return Snake(
        body=body,
        direction="right",
        color=constants.SNAKE_COLORS[player_index],
        last_update=now,
    )
