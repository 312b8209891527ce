from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from treasure_tetris.game import PieceSnapshot, Progress
from treasure_tetris.game.pieces import cells_at, rgb_for_tag


BACKGROUND = (10, 10, 14)
EMPTY_CELL = (20, 20, 26)
TEXT = (230, 230, 230)
ENERGY_BAR = (240, 200, 60)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return rgb_for_tag(v) or EMPTY_CELL


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 220) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 3 + self.panel_width,
            height * self.cell_size + self.margin * 2,
        )

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)

    def _grid_surface(self, board: np.ndarray, piece: Optional[PieceSnapshot]) -> pygame.Surface:
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(int(board[y, x])), self._cell_rect(x, y))
        if piece is not None:
            color = _color_for_value(int(piece.kind))
            for x, y in cells_at(piece.shape, piece.x, piece.y):
                # Cells above the top edge are not drawn
                if y >= 0:
                    pygame.draw.rect(surf, color, self._cell_rect(x, y))
        return surf

    def _draw_panel(self, screen: pygame.Surface, x0: int, progress: Progress, status: str) -> None:
        lines = [
            f"Score: {progress.score}",
            f"Level: {progress.level}",
            f"Energy: {progress.energy} / {progress.energy_threshold}",
        ]
        y = self.margin
        for txt in lines:
            screen.blit(self.font.render(txt, True, TEXT), (x0, y))
            y += 24

        fill = min(1.0, progress.energy / progress.energy_threshold)
        bar = pygame.Rect(x0, y, self.panel_width - self.margin, 12)
        pygame.draw.rect(screen, (60, 60, 70), bar)
        pygame.draw.rect(screen, ENERGY_BAR, pygame.Rect(bar.x, bar.y, int(bar.width * fill), bar.height))
        y += 30

        if progress.treasure_unlocked:
            screen.blit(self.font.render("Treasure unlocked!", True, ENERGY_BAR), (x0, y))
            screen.blit(self.font.render(f"Code: {progress.treasure_code}", True, TEXT), (x0, y + 24))
            y += 60

        screen.blit(self.font.render(status, True, TEXT), (x0, y))

    def draw(
        self,
        screen: pygame.Surface,
        board: np.ndarray,
        piece: Optional[PieceSnapshot],
        progress: Progress,
        status: str = "",
    ) -> None:
        screen.fill(BACKGROUND)
        grid_surf = self._grid_surface(board, piece)
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_panel(screen, grid_surf.get_width() + self.margin * 2, progress, status)
        pygame.display.flip()
