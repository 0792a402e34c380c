"""Entry point for the asyncio based game server."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass, field
import logging
from typing import Any, Dict
import uuid

import websockets
from websockets.asyncio.server import ServerConnection, serve

from . import protocol
from .registry import GameError, RoomRegistry
from .room import Room


@dataclass
class ClientConnection:
    """A connected player and the messages queued for delivery to them."""

    player_id: str
    websocket: ServerConnection
    outbox: asyncio.Queue[str] = field(default_factory=asyncio.Queue)

    def send(self, payload: Dict[str, Any]) -> None:
        self.outbox.put_nowait(protocol.encode(payload))

    async def pump(self) -> None:
        """Deliver queued messages in order until the connection closes."""

        while True:
            message = await self.outbox.get()
            await self.websocket.send(message)


class GameServer:
    """Websocket front end: turns client events into registry calls."""

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port
        self.clients: Dict[str, ClientConnection] = {}
        self.registry = RoomRegistry(self.broadcast)

    async def start(self) -> None:
        """Start the websocket server and run until cancelled."""

        async with serve(self._handle_client, self.host, self.port) as server:
            logging.info("Server listening on %s:%s", self.host, self.port)
            try:
                await server.serve_forever()
            finally:
                self.registry.scheduler.stop_all()

    def broadcast(self, room: Room, payload: Dict[str, Any]) -> None:
        """Queue ``payload`` for every connected player seated in ``room``."""

        message = protocol.encode(payload)
        for player in room.players:
            client = self.clients.get(player.id)
            if client is not None:
                client.outbox.put_nowait(message)

    async def _handle_client(self, websocket: ServerConnection) -> None:
        client = ClientConnection(player_id=uuid.uuid4().hex, websocket=websocket)
        self.clients[client.player_id] = client
        writer = asyncio.create_task(self._pump(client))
        client.send(protocol.welcome(client.player_id))
        logging.info("Client %s connected", client.player_id)
        try:
            async for message in websocket:
                try:
                    payload = protocol.parse_client_message(message)
                except ValueError:
                    continue
                self.dispatch(client, payload)
        except websockets.ConnectionClosed:
            pass
        finally:
            logging.info("Client %s disconnected", client.player_id)
            self.clients.pop(client.player_id, None)
            writer.cancel()
            self.registry.disconnect(client.player_id)

    async def _pump(self, client: ClientConnection) -> None:
        try:
            await client.pump()
        except websockets.ConnectionClosed:
            pass
        except Exception:
            logging.exception("Failed to send to client %s, dropping it", client.player_id)
            self.clients.pop(client.player_id, None)
            await client.websocket.close()

    def dispatch(self, client: ClientConnection, payload: Dict[str, Any]) -> None:
        """Handle one parsed client event."""

        kind = payload.get("type")
        try:
            if kind == protocol.CREATE_GAME:
                room = self.registry.create_room(
                    client.player_id,
                    duration=int(payload.get("gameTime", 0)),
                    capacity=int(payload.get("maxPlayers", 2)),
                )
                client.send(protocol.game_created(room.code))
            elif kind == protocol.JOIN_GAME:
                self.registry.join_room(str(payload.get("roomCode", "")), client.player_id)
            elif kind == protocol.UPDATE_DIRECTION:
                self.registry.update_direction(
                    str(payload.get("roomCode", "")),
                    client.player_id,
                    str(payload.get("direction", "")),
                )
            else:
                logging.debug("Ignoring message of type %r from %s", kind, client.player_id)
        except GameError as exc:
            client.send(protocol.error(str(exc)))
        except (TypeError, ValueError, OverflowError) as exc:
            logging.debug("Ignoring malformed %r from %s: %s", kind, client.player_id, exc)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Torus Snake server")
    parser.add_argument("--host", default="0.0.0.0", help="Host interface to bind to")
    parser.add_argument("--port", type=int, default=8765, help="Port to listen on")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="[%(levelname)s] %(message)s")
    server = GameServer(args.host, args.port)
    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logging.info("Server stopped")


if __name__ == "__main__":
    main()
