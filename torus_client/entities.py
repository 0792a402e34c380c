"""Client side entity representations mirroring the server state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class Cell:
    """A single grid cell for rendering."""

    x: int
    y: int


@dataclass
class PlayerEntity:
    """Renderable player state synchronised from the server."""

    id: str
    color: Tuple[int, int, int]
    score: int = 0
    eliminated: bool = False
    direction: str = "right"
    body: List[Cell] = field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: dict) -> "PlayerEntity":
        snake = snapshot.get("snake", {})
        return cls(
            id=str(snapshot["id"]),
            color=parse_color(snake.get("color", "#FFFFFF")),
            score=int(snapshot.get("score", 0)),
            eliminated=bool(snapshot.get("eliminated", False)),
            direction=snake.get("direction", "right"),
            body=[Cell(int(segment["x"]), int(segment["y"])) for segment in snake.get("body", [])],
        )


def parse_color(value: str) -> Tuple[int, int, int]:
    """Convert ``#RRGGBB`` into an RGB tuple."""

    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class GameView:
    """Everything the renderer needs, updated from server events."""

    def __init__(self) -> None:
        self.player_id: Optional[str] = None
        self.room_code: Optional[str] = None
        self.players: List[PlayerEntity] = []
        self.food: Optional[Cell] = None
        self.time_remaining: Optional[int] = None
        self.winner: Optional[PlayerEntity] = None
        self.game_over_reason: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def started(self) -> bool:
        return self.time_remaining is not None

    @property
    def finished(self) -> bool:
        return self.game_over_reason is not None

    def apply(self, event: dict) -> None:
        """Fold one server event into the view."""

        kind = event.get("type")
        if kind == "welcome":
            self.player_id = event.get("id")
        elif kind == "gameCreated":
            self.room_code = event.get("roomCode")
        elif kind == "gameState":
            self.room_code = event.get("roomCode", self.room_code)
            self.players = [PlayerEntity.from_snapshot(payload) for payload in event.get("players", [])]
            food = event.get("food")
            self.food = Cell(int(food["x"]), int(food["y"])) if food else None
            self.time_remaining = event.get("timeRemaining")
        elif kind == "gameOver":
            winner = event.get("winner")
            self.winner = PlayerEntity.from_snapshot(winner) if winner else None
            self.game_over_reason = event.get("reason")
        elif kind == "error":
            self.error = event.get("message")

    def me(self) -> Optional[PlayerEntity]:
        for player in self.players:
            if player.id == self.player_id:
                return player
        return None
