from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict

import pygame

from treasure_tetris.game import GameConfig, GameSession, SessionStatus, TetrisEngine
from .renderer import Renderer


STATUS_TEXT = {
    SessionStatus.NOT_STARTED: "Press Enter to start",
    SessionStatus.RUNNING: "P: pause  Enter: restart",
    SessionStatus.PAUSED: "Paused - P to resume",
    SessionStatus.GAME_OVER: "Game Over - Enter to restart",
}


def key_bindings(session: GameSession) -> Dict[int, Callable[[], object]]:
    return {
        pygame.K_LEFT: lambda: session.move(-1, 0),
        pygame.K_RIGHT: lambda: session.move(1, 0),
        pygame.K_DOWN: lambda: session.move(0, 1),
        pygame.K_UP: session.rotate,
        pygame.K_SPACE: session.hard_drop,
        pygame.K_p: session.toggle_pause,
        pygame.K_RETURN: session.start,
    }


def run(seed: int | None = None, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        session = GameSession(TetrisEngine(GameConfig(random_seed=seed)))
        renderer = Renderer(cell_size=cell_size)
        bindings = key_bindings(session)

        grid = session.engine.grid
        screen = pygame.display.set_mode(renderer.window_size(grid.width, grid.height))
        pygame.display.set_caption("Treasure Tetris")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = bindings.get(event.key)
                        if command is not None:
                            command()

            # Gravity
            session.tick(pygame.time.get_ticks())

            engine = session.engine
            renderer.draw(
                screen,
                engine.board_snapshot(),
                engine.piece_snapshot(),
                engine.progress_snapshot(),
                STATUS_TEXT[session.status],
            )
            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Treasure Tetris")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
