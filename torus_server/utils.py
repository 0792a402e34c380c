"""Grid geometry primitives used by the authoritative game server."""

from __future__ import annotations

from dataclasses import dataclass
import random

from . import constants


@dataclass(frozen=True)
class Position:
    """A single cell on the toroidal grid.

    Positions are immutable so they can be shared between a snake body, the
    food and collision checks without defensive copies.
    """

    x: int
    y: int

    def to_dict(self) -> dict[str, int]:
        """Serialise the position to a JSON friendly dictionary."""

        return {"x": self.x, "y": self.y}


_OFFSETS: dict[str, tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


def step(position: Position, direction: str) -> Position:
    """Return the cell one unit away from ``position`` in ``direction``.

    Both axes wrap modulo the grid size, so the result is always on the grid.
    """

    try:
        dx, dy = _OFFSETS[direction]
    except KeyError:
        raise ValueError(f"Unknown direction: {direction!r}") from None
    size = constants.GRID_SIZE
    return Position((position.x + dx) % size, (position.y + dy) % size)


def manhattan_distance(a: Position, b: Position) -> int:
    """Return ``|dx| + |dy|`` between two cells, ignoring wrap-around."""

    return abs(a.x - b.x) + abs(a.y - b.y)


def is_opposite(a: str, b: str) -> bool:
    return constants.OPPOSITES.get(a) == b


def random_food_position() -> Position:
    """Return a uniformly random cell that is not on the outermost ring."""

    upper = constants.GRID_SIZE - 2
    return Position(random.randint(1, upper), random.randint(1, upper))
