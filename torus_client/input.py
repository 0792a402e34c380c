"""Translate local input into commands for the server."""

from __future__ import annotations

from typing import Dict, Optional

import pygame

from torus_server.constants import OPPOSITES

KEY_DIRECTIONS: Dict[int, str] = {
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_w: "up",
    pygame.K_s: "down",
    pygame.K_a: "left",
    pygame.K_d: "right",
}


def direction_for_key(key: int) -> Optional[str]:
    return KEY_DIRECTIONS.get(key)


def turn_for_key(key: int, current: Optional[str]) -> Optional[str]:
    """Return the direction worth sending for ``key``, if any.

    Presses that repeat the current heading or reverse it are dropped locally;
    the server would ignore them anyway.
    """

    direction = direction_for_key(key)
    if direction is None or direction == current:
        return None
    if current is not None and OPPOSITES[direction] == current:
        return None
    return direction
