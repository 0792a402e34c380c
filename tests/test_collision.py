from __future__ import annotations

from torus_server.collision import cross_snake_collision, self_collision
from torus_server.room import Player
from torus_server.snake import create_snake
from torus_server.utils import Position


def test_self_collision_ignores_head() -> None:
    body = [Position(1, 1), Position(2, 1), Position(3, 1)]
    assert not self_collision(Position(1, 1), body)
    assert self_collision(Position(3, 1), body)


def test_cross_snake_collision_skips_self_and_eliminated_players() -> None:
    me = Player(id="me", index=0, snake=create_snake(0, now=0.0))
    other = Player(id="other", index=1, snake=create_snake(1, now=0.0))
    ghost = Player(id="ghost", index=2, snake=create_snake(2, now=0.0), eliminated=True)
    players = [me, other, ghost]

    assert not cross_snake_collision(Position(1, 2), players, "me")
    assert cross_snake_collision(Position(11, 12), players, "me")
    assert not cross_snake_collision(Position(1, 22), players, "me")
