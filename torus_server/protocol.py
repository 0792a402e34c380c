"""JSON protocol helpers for the websocket transport."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from .room import Player, Room

CREATE_GAME = "createGame"
JOIN_GAME = "joinGame"
UPDATE_DIRECTION = "updateDirection"

GAME_CREATED = "gameCreated"
GAME_STATE = "gameState"
GAME_OVER = "gameOver"
ERROR = "error"
WELCOME = "welcome"


def parse_client_message(message: str | bytes) -> dict:
    """Parse a raw client ``message`` into a Python dictionary."""

    try:
        payload = json.loads(message)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid client message") from exc
    if not isinstance(payload, dict):
        raise ValueError("Client message must be a JSON object")
    return payload


def encode(payload: Dict[str, Any]) -> str:
    return json.dumps(payload)


def welcome(player_id: str) -> Dict[str, Any]:
    return {"type": WELCOME, "id": player_id}


def game_created(room_code: str) -> Dict[str, Any]:
    return {"type": GAME_CREATED, "roomCode": room_code}


def game_state(room: Room, time_remaining: int) -> Dict[str, Any]:
    """Build the per-tick state broadcast for ``room``."""

    return {
        "type": GAME_STATE,
        "roomCode": room.code,
        "players": [player.to_dict() for player in room.players],
        "food": room.food.to_dict(),
        "timeRemaining": time_remaining,
    }


def game_over(winner: Optional[Player], reason: str) -> Dict[str, Any]:
    return {
        "type": GAME_OVER,
        "winner": winner.to_dict() if winner is not None else None,
        "reason": reason,
    }


def error(message: str) -> Dict[str, Any]:
    return {"type": ERROR, "message": message}
