"""Collision helpers for the game server."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

from .utils import Position

if TYPE_CHECKING:
    from .room import Player


def self_collision(head: Position, body: Sequence[Position]) -> bool:
    """Return ``True`` if ``head`` overlaps any non-head segment of ``body``."""

    return any(segment == head for segment in body[1:])


def cross_snake_collision(head: Position, players: Iterable["Player"], self_id: str) -> bool:
    """Return ``True`` if ``head`` hits another live player's snake."""

    for player in players:
        if player.id == self_id or player.eliminated:
            continue
        if head in player.snake.body:
            return True
    return False
