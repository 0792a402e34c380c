"""Pygame based renderer for the game client."""

from __future__ import annotations

from typing import Iterable, Optional

import pygame

from torus_server.constants import GRID_SIZE

from .entities import Cell, GameView, PlayerEntity

HUD_HEIGHT = 40


class Renderer:
    """Responsible for all drawing tasks."""

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self.font = pygame.font.SysFont("arial", 18)
        self.banner_font = pygame.font.SysFont("arial", 32)
        self.background_color = (20, 24, 28)
        self.grid_color = (40, 46, 52)
        self.food_color = (255, 200, 90)
        self.text_color = (230, 230, 230)

    @property
    def cell_size(self) -> int:
        usable = min(self.screen.get_width(), self.screen.get_height() - HUD_HEIGHT)
        return max(1, usable // GRID_SIZE)

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        size = self.cell_size
        return pygame.Rect(cell.x * size, HUD_HEIGHT + cell.y * size, size, size)

    def clear(self) -> None:
        self.screen.fill(self.background_color)

    def draw_grid(self) -> None:
        size = self.cell_size
        extent = size * GRID_SIZE
        for index in range(GRID_SIZE + 1):
            offset = index * size
            pygame.draw.line(self.screen, self.grid_color, (offset, HUD_HEIGHT), (offset, HUD_HEIGHT + extent))
            pygame.draw.line(self.screen, self.grid_color, (0, HUD_HEIGHT + offset), (extent, HUD_HEIGHT + offset))

    def draw_food(self, food: Optional[Cell]) -> None:
        if food is None:
            return
        pygame.draw.ellipse(self.screen, self.food_color, self._cell_rect(food))

    def draw_snakes(self, players: Iterable[PlayerEntity]) -> None:
        for player in players:
            if player.eliminated:
                continue
            for index, cell in enumerate(player.body):
                rect = self._cell_rect(cell)
                if index:
                    rect = rect.inflate(-4, -4)
                pygame.draw.rect(self.screen, player.color, rect)

    def draw_hud(self, view: GameView) -> None:
        parts = []
        if view.room_code:
            parts.append(f"Room {view.room_code}")
        if view.time_remaining is not None:
            parts.append(f"{view.time_remaining}s")
        else:
            parts.append("Waiting for players")
        x = 10
        for text in parts:
            surface = self.font.render(text, True, self.text_color)
            self.screen.blit(surface, (x, 10))
            x += surface.get_width() + 20
        for player in view.players:
            label = f"{player.score}" + (" X" if player.eliminated else "")
            surface = self.font.render(label, True, player.color)
            self.screen.blit(surface, (x, 10))
            x += surface.get_width() + 16

    def draw_banner(self, view: GameView) -> None:
        if view.error:
            text = view.error
        elif view.finished:
            if view.winner is None:
                text = "Game over"
            elif view.winner.id == view.player_id:
                text = "You win!"
            else:
                text = f"Game over ({view.game_over_reason})"
        else:
            return
        surface = self.banner_font.render(text, True, self.text_color)
        rect = surface.get_rect(center=(self.screen.get_width() / 2, self.screen.get_height() / 2))
        self.screen.blit(surface, rect)

    def draw(self, view: GameView) -> None:
        self.clear()
        self.draw_grid()
        self.draw_food(view.food)
        self.draw_snakes(view.players)
        self.draw_hud(view)
        self.draw_banner(view)

    def present(self) -> None:
        pygame.display.flip()
