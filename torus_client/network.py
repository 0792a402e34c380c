"""Websocket networking client."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import websockets
from websockets.asyncio.client import ClientConnection, connect

# Queued when the server goes away so the frame loop can stop.
DISCONNECTED: Dict[str, Any] = {"type": "disconnect"}


class NetworkClient:
    """Sends player events and queues every server event for the frame loop."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        self.websocket: Optional[ClientConnection] = None
        self.events: asyncio.Queue[Dict[str, Any]] = asyncio.Queue()
        self._listener: Optional[asyncio.Task[None]] = None

    async def connect(self) -> Dict[str, Any]:
        """Open the connection and return the server's welcome event."""

        self.websocket = await connect(self.uri)
        self._listener = asyncio.create_task(self._listen(self.websocket))
        return await self.next_event()

    async def _listen(self, websocket: ClientConnection) -> None:
        try:
            async for message in websocket:
                try:
                    event = json.loads(message)
                except json.JSONDecodeError:
                    continue
                if isinstance(event, dict):
                    self.events.put_nowait(event)
        except websockets.ConnectionClosed:
            pass
        finally:
            self.events.put_nowait(DISCONNECTED)

    async def send_event(self, kind: str, **fields: Any) -> None:
        if self.websocket is None:
            raise RuntimeError("Client is not connected")
        await self.websocket.send(json.dumps({"type": kind, **fields}))

    async def create_game(self, game_time: int, max_players: int) -> None:
        await self.send_event("createGame", gameTime=game_time, maxPlayers=max_players)

    async def join_game(self, room_code: str) -> None:
        await self.send_event("joinGame", roomCode=room_code)

    async def send_direction(self, room_code: str, direction: str) -> None:
        await self.send_event("updateDirection", roomCode=room_code, direction=direction)

    async def next_event(self) -> Dict[str, Any]:
        return await self.events.get()

    async def close(self) -> None:
        if self.websocket is not None:
            await self.websocket.close()
        if self._listener is not None:
            await self._listener
