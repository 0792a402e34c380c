"""Entry point for the pygame based client."""

from __future__ import annotations

import argparse
import asyncio
import logging

import pygame

from .entities import GameView
from .input import turn_for_key
from .network import NetworkClient
from .render import Renderer


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Torus Snake client")
    parser.add_argument("--host", default="127.0.0.1", help="Server host")
    parser.add_argument("--port", type=int, default=8765, help="Server port")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--create", action="store_true", help="Create a new room")
    group.add_argument("--join", metavar="CODE", help="Join an existing room")
    parser.add_argument("--game-time", type=int, default=60, help="Game length in seconds")
    parser.add_argument("--max-players", type=int, default=2, help="Players needed to start")
    parser.add_argument("--width", type=int, default=600, help="Window width")
    parser.add_argument("--height", type=int, default=640, help="Window height")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args()


async def run_client(args: argparse.Namespace) -> None:
    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Torus Snake")
    renderer = Renderer(screen)
    clock = pygame.time.Clock()

    network = NetworkClient(f"ws://{args.host}:{args.port}")
    view = GameView()
    view.apply(await network.connect())
    if args.create:
        await network.create_game(args.game_time, args.max_players)
    else:
        view.room_code = args.join.upper()
        await network.join_game(view.room_code)

    event_task = asyncio.create_task(network.next_event())
    running = True

    while running:
        clock.tick(60)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and view.room_code and not view.finished:
                me = view.me()
                direction = turn_for_key(event.key, me.direction if me else None)
                if direction is not None:
                    await network.send_direction(view.room_code, direction)

        while event_task.done():
            server_event = event_task.result()
            if server_event.get("type") == "disconnect":
                logging.info("Server closed the connection")
                running = False
                break
            view.apply(server_event)
            if server_event.get("type") == "gameCreated":
                logging.info("Room code: %s", view.room_code)
            event_task = asyncio.create_task(network.next_event())
            await asyncio.sleep(0)

        renderer.draw(view)
        renderer.present()
        await asyncio.sleep(0)

    event_task.cancel()
    await network.close()
    pygame.quit()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="[%(levelname)s] %(message)s")
    asyncio.run(run_client(args))


if __name__ == "__main__":
    main()
