"""Per-room tick tasks driving the simulation and state broadcasts."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from . import constants, protocol
from .room import Player, Room

if TYPE_CHECKING:
    from .registry import RoomRegistry

Broadcast = Callable[[Room, Dict[str, Any]], None]


class TickScheduler:
    """Runs one asyncio task per active room.

    Every iteration checks that the room is still active and still registered
    before touching it, so a stopped or removed room never ticks again.
    """

    def __init__(
        self,
        registry: "RoomRegistry",
        broadcast: Broadcast,
        clock: Callable[[], float] = time.monotonic,
        interval: float = constants.TICK_INTERVAL,
    ) -> None:
        self.registry = registry
        self.broadcast = broadcast
        self.clock = clock
        self.interval = interval

    def start(self, room: Room) -> None:
        """Activate ``room`` and spawn its tick task unless one is running."""

        if room.task is not None and not room.task.done():
            return
        room.active = True
        room.started_at = self.clock()
        room.task = asyncio.create_task(self._run(room), name=f"room-{room.code}")
        logging.info("Room %s started with %d players", room.code, len(room.players))

    def is_live(self, room: Room) -> bool:
        return room.active and self.registry.get(room.code) is room

    async def _run(self, room: Room) -> None:
        while self.is_live(room):
            try:
                self.tick_room(room)
            except Exception:
                logging.exception("Tick failed for room %s, discarding it", room.code)
                self.stop(room)
                self.registry.remove(room.code)
                return
            await asyncio.sleep(self.interval)

    def tick_room(self, room: Room) -> None:
        """Run one scheduled iteration: timeout check, simulation, broadcast."""

        if not self.is_live(room):
            return
        now = self.clock()
        remaining = room.time_remaining(now)
        if remaining <= 0:
            self.end_game(room, room.leader(), "time")
            return
        room.tick(now)
        self.broadcast(room, protocol.game_state(room, remaining))

    def end_game(self, room: Room, winner: Optional[Player], reason: str) -> None:
        """Stop ``room``, announce the result and drop it from the registry."""

        self.stop(room)
        self.broadcast(room, protocol.game_over(winner, reason))
        self.registry.remove(room.code)
        logging.info(
            "Room %s over (%s), winner %s",
            room.code,
            reason,
            winner.id if winner is not None else None,
        )

    def stop(self, room: Room) -> None:
        """Stop ticking ``room``. Safe to call any number of times."""

        room.active = False
        task, room.task = room.task, None
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # The loop exits on its own when stopped from inside its own tick.
        if task is not current:
            task.cancel()

    def stop_all(self) -> None:
        for room in self.registry.rooms():
            self.stop(room)
