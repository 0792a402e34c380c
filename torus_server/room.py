"""Authoritative simulation of a single game room."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import math
import random
from typing import List, Optional, Sequence

from . import collision, constants, utils
from .food import Food
from .snake import Snake, create_snake


@dataclass
class Player:
    """A seated player. Players are kept after elimination for reporting."""

    id: str
    index: int
    snake: Snake
    score: int = 0
    eliminated: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "snake": self.snake.to_snapshot(),
            "score": self.score,
            "eliminated": self.eliminated,
        }


class Room:
    """Holds one game's players, food and timer and advances it on every tick."""

    def __init__(self, code: str, capacity: int, duration: int) -> None:
        self.code = code
        self.capacity = capacity
        self.duration = duration
        self.players: List[Player] = []
        self.food = Food.spawn_random()
        self.active: bool = False
        self.started_at: Optional[float] = None
        self.task: Optional[asyncio.Task[None]] = None

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.capacity

    def add_player(self, player_id: str, now: float) -> Player:
        """Seat ``player_id`` at the next free index."""

        index = len(self.players)
        player = Player(id=player_id, index=index, snake=create_snake(index, now))
        self.players.append(player)
        return player

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def live_players(self) -> List[Player]:
        return [player for player in self.players if not player.eliminated]

    def time_remaining(self, now: float) -> int:
        """Whole seconds left on the clock; the full duration before start."""

        if self.started_at is None:
            return self.duration
        return self.duration - math.floor(now - self.started_at)

    def leader(self) -> Optional[Player]:
        """Return the player with the strictly highest score.

        Ties go to whoever joined first.
        """

        best: Optional[Player] = None
        for player in self.players:
            if best is None or player.score > best.score:
                best = player
        return best

    def tick(self, now: float) -> None:
        """Advance the room by one simulation step."""

        contenders: List[Player] = []
        for player in self.players:
            if player.eliminated:
                continue
            new_head = player.snake.move(now)
            if new_head is None:
                continue

            if new_head == self.food.position:
                contenders.append(player)

            if collision.self_collision(new_head, player.snake.body) or collision.cross_snake_collision(
                new_head, self.players, player.id
            ):
                self._penalise(player, now)

        # Contention is resolved only once every snake has moved.
        if contenders:
            self.resolve_food(contenders)

    def _penalise(self, player: Player, now: float) -> None:
        player.score = max(0, player.score - constants.WALL_PENALTY)
        if player.score == 0:
            player.eliminated = True
            logging.info("Room %s: player %s eliminated", self.code, player.id)
        else:
            player.snake = create_snake(player.index, now)

    def _contention_key(self, player: Player) -> tuple[int, int, int]:
        distance = utils.manhattan_distance(player.snake.head, self.food.position)
        return distance, -len(player.snake.body), -player.score

    def resolve_food(self, contenders: Sequence[Player]) -> Player:
        """Award the food to exactly one contender and relocate it.

        Contenders are ranked by distance from head to food, then body length,
        then score; anything still tied is settled at random.
        """

        best = min(self._contention_key(player) for player in contenders)
        finalists = [player for player in contenders if self._contention_key(player) == best]
        winner = random.choice(finalists)
        winner.snake.grow()
        winner.score += self.food.value
        self.food.relocate()
        return winner
