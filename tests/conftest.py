from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest

from torus_server.registry import RoomRegistry
from torus_server.room import Room


class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class BroadcastRecorder:
    """Collects everything the server would have pushed to a room."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, Dict[str, Any]]] = []

    def __call__(self, room: Room, payload: Dict[str, Any]) -> None:
        self.messages.append((room.code, payload))

    def of_type(self, kind: str) -> List[Dict[str, Any]]:
        return [payload for _, payload in self.messages if payload["type"] == kind]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def recorder() -> BroadcastRecorder:
    return BroadcastRecorder()


@pytest.fixture()
def registry(clock: FakeClock, recorder: BroadcastRecorder) -> RoomRegistry:
    return RoomRegistry(recorder, clock=clock)
