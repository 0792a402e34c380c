from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List

import pytest

from torus_server.main import ClientConnection, GameServer


class FakeWebSocket:
    """Stands in for a server connection: scripted inbound, recorded outbound."""

    def __init__(self, inbound: List[str] | None = None) -> None:
        self.inbound = inbound or []
        self.sent: List[Dict[str, Any]] = []
        self.closed = False

    async def send(self, message: str) -> None:
        self.sent.append(json.loads(message))

    async def close(self) -> None:
        self.closed = True

    def __aiter__(self):
        return self._messages()

    async def _messages(self):
        for message in self.inbound:
            await asyncio.sleep(0.01)
            yield message
        await asyncio.sleep(0.01)


def _connect(server: GameServer, player_id: str) -> ClientConnection:
    client = ClientConnection(player_id=player_id, websocket=FakeWebSocket())
    server.clients[player_id] = client
    return client


def _drain(client: ClientConnection) -> List[Dict[str, Any]]:
    messages = []
    while not client.outbox.empty():
        messages.append(json.loads(client.outbox.get_nowait()))
    return messages


@pytest.fixture()
def server() -> GameServer:
    return GameServer("127.0.0.1", 0)


def test_create_game_replies_with_room_code(server: GameServer) -> None:
    alice = _connect(server, "alice")

    server.dispatch(alice, {"type": "createGame", "gameTime": 60, "maxPlayers": 2})

    [reply] = _drain(alice)
    assert reply["type"] == "gameCreated"
    assert reply["roomCode"] in server.registry


def test_join_missing_room_reports_error_to_caller_only(server: GameServer) -> None:
    alice = _connect(server, "alice")
    bob = _connect(server, "bob")

    server.dispatch(bob, {"type": "joinGame", "roomCode": "NOPE42"})

    assert _drain(bob) == [{"type": "error", "message": "Game not found"}]
    assert _drain(alice) == []


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "createGame", "gameTime": "soon", "maxPlayers": 2},
        {"type": "createGame", "gameTime": -5, "maxPlayers": 2},
        {"type": "createGame", "gameTime": 30, "maxPlayers": None},
        {"type": "createGame", "gameTime": float("inf"), "maxPlayers": 2},
        {"type": "createGame", "gameTime": 30, "maxPlayers": float("-inf")},
        {"type": "fly"},
        {},
    ],
)
def test_malformed_messages_are_ignored(server: GameServer, payload: Dict[str, Any]) -> None:
    alice = _connect(server, "alice")

    server.dispatch(alice, payload)

    assert _drain(alice) == []
    assert len(server.registry) == 0


@pytest.mark.asyncio
async def test_full_room_flow(server: GameServer) -> None:
    alice = _connect(server, "alice")
    bob = _connect(server, "bob")
    carol = _connect(server, "carol")

    server.dispatch(alice, {"type": "createGame", "gameTime": 30, "maxPlayers": 2})
    code = _drain(alice)[0]["roomCode"]
    server.dispatch(bob, {"type": "joinGame", "roomCode": code})

    room = server.registry.get(code)
    assert room is not None and room.active
    for client in (alice, bob):
        [state] = _drain(client)
        assert state["type"] == "gameState"
        assert state["timeRemaining"] == 30

    server.dispatch(carol, {"type": "joinGame", "roomCode": code})
    assert _drain(carol) == [{"type": "error", "message": "Game is full"}]

    server.dispatch(bob, {"type": "updateDirection", "roomCode": code, "direction": "down"})
    assert room.get_player("bob").snake.direction == "down"

    server.registry.scheduler.stop_all()
    await asyncio.sleep(0)


def test_broadcast_skips_disconnected_players(server: GameServer) -> None:
    alice = _connect(server, "alice")
    server.dispatch(alice, {"type": "createGame", "gameTime": 30, "maxPlayers": 3})
    code = _drain(alice)[0]["roomCode"]
    server.registry.join_room(code, "ghost")

    [state] = _drain(alice)
    assert [player["id"] for player in state["players"]] == ["alice", "ghost"]


@pytest.mark.asyncio
async def test_connection_lifecycle(server: GameServer) -> None:
    websocket = FakeWebSocket(
        [
            "garbage",
            '{"type": "createGame", "gameTime": Infinity, "maxPlayers": 2}',
            json.dumps({"type": "createGame", "gameTime": 30, "maxPlayers": 2}),
        ]
    )

    await server._handle_client(websocket)

    kinds = [message["type"] for message in websocket.sent]
    assert kinds == ["welcome", "gameCreated"]
    assert server.clients == {}
    assert len(server.registry) == 0


class BrokenWebSocket(FakeWebSocket):
    async def send(self, message: str) -> None:
        raise RuntimeError("socket buffer exploded")


@pytest.mark.asyncio
async def test_failed_send_drops_the_client(server: GameServer) -> None:
    websocket = BrokenWebSocket()
    alice = ClientConnection(player_id="alice", websocket=websocket)
    server.clients["alice"] = alice
    server.dispatch(alice, {"type": "createGame", "gameTime": 30, "maxPlayers": 3})
    code = _drain(alice)[0]["roomCode"]
    alice.send({"type": "error", "message": "Game is full"})

    await asyncio.wait_for(server._pump(alice), timeout=1)

    assert "alice" not in server.clients
    assert websocket.closed

    server.registry.join_room(code, "bob")
    assert alice.outbox.empty()
