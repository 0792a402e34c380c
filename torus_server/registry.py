"""Room registry: creates rooms, seats players and routes their actions."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Dict, List, Optional

from . import constants, protocol
from .room import Player, Room
from .scheduler import Broadcast, TickScheduler


class GameError(Exception):
    """Base class for errors reported back to the requesting client."""


class RoomNotFound(GameError):
    def __init__(self, code: str) -> None:
        super().__init__("Game not found")
        self.code = code


class RoomFull(GameError):
    def __init__(self, code: str) -> None:
        super().__init__("Game is full")
        self.code = code


class RoomRegistry:
    """Maps room codes to rooms and owns the scheduler that ticks them."""

    def __init__(self, broadcast: Broadcast, clock: Callable[[], float] = time.monotonic) -> None:
        self._rooms: Dict[str, Room] = {}
        self.broadcast = broadcast
        self.clock = clock
        self.scheduler = TickScheduler(self, broadcast, clock)

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, code: object) -> bool:
        return code in self._rooms

    def get(self, code: str) -> Optional[Room]:
        return self._rooms.get(code)

    def rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def remove(self, code: str) -> None:
        if self._rooms.pop(code, None) is not None:
            logging.info("Room %s removed", code)

    def _generate_code(self) -> str:
        while True:
            code = "".join(random.choices(constants.ROOM_CODE_ALPHABET, k=constants.ROOM_CODE_LENGTH))
            if code not in self._rooms:
                return code

    def create_room(self, player_id: str, duration: int, capacity: int) -> Room:
        """Create a room seating ``player_id`` as its first player.

        ``capacity`` is clamped to the number of spawn points available.
        """

        if duration <= 0:
            raise ValueError("Game time must be positive")
        capacity = max(1, min(capacity, constants.MAX_PLAYERS))
        room = Room(self._generate_code(), capacity, duration)
        room.add_player(player_id, self.clock())
        self._rooms[room.code] = room
        logging.info("Room %s created by %s (%d players, %ds)", room.code, player_id, capacity, duration)
        if room.is_full:
            self.scheduler.start(room)
        return room

    def join_room(self, code: str, player_id: str) -> Player:
        room = self._rooms.get(code)
        if room is None:
            raise RoomNotFound(code)
        existing = room.get_player(player_id)
        if existing is not None:
            return existing
        if room.is_full:
            raise RoomFull(code)

        player = room.add_player(player_id, self.clock())
        logging.info("Player %s joined room %s as #%d", player_id, code, player.index)
        if room.is_full and not room.active:
            self.scheduler.start(room)
        self.broadcast(room, protocol.game_state(room, room.duration))
        return player

    def update_direction(self, code: str, player_id: str, direction: str) -> bool:
        """Steer ``player_id``'s snake. Unknown targets and reversals are ignored."""

        room = self._rooms.get(code)
        if room is None:
            return False
        player = room.get_player(player_id)
        if player is None or player.eliminated:
            return False
        applied = player.snake.turn(direction)
        if not applied:
            logging.debug("Ignored direction %r for %s in room %s", direction, player_id, code)
        return applied

    def disconnect(self, player_id: str) -> None:
        """Eliminate ``player_id`` everywhere and end rooms left with one player."""

        for room in self.rooms():
            player = room.get_player(player_id)
            if player is None:
                continue
            player.eliminated = True
            remaining = room.live_players()
            if len(remaining) == 1:
                self.scheduler.end_game(room, remaining[0], "lastPlayer")
            elif not remaining:
                self.scheduler.stop(room)
                self.remove(room.code)
