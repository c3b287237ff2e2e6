"""Command entry point: load a map, start the background workers and play."""

from __future__ import annotations

import argparse
import curses
import sys
import threading

from .character import execute_action
from .game import ENEMY, Game, add_random_traps, run_enemy, run_portal, run_trap
from .ui import Screen

DEFAULT_MAP = "mapa.txt"
FIXED_TRAPS = ((25, 15), (30, 15))
RANDOM_TRAPS = 3


def _start(target, *args) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


def start_workers(game: Game, stop: threading.Event) -> list[threading.Thread]:
    """Start portal, trap and enemy threads; the last fixed trap can be disarmed."""
    for x, y in FIXED_TRAPS:
        if not (0 <= y < len(game.grid) and 0 <= x < len(game.grid[y])):
            raise ValueError(f"fixed trap at ({x}, {y}) lies outside the map")

    threads = [_start(run_portal, game, stop)]
    for x, y in FIXED_TRAPS:
        disarm = threading.Event()
        game.trap_disarm = disarm
        threads.append(_start(run_trap, game, x, y, disarm, stop))

    enemies = [
        (x, y)
        for y, row in enumerate(game.grid)
        for x, element in enumerate(row)
        if element.symbol == ENEMY.symbol
    ]
    for x, y in enemies:
        threads.append(_start(run_enemy, game, x, y, stop))

    threads.extend(add_random_traps(game, RANDOM_TRAPS, stop))
    return threads


def _play(stdscr, game: Game) -> None:
    screen = Screen(stdscr)
    game.on_change = screen.draw
    screen.draw(game)
    stop = threading.Event()
    try:
        start_workers(game, stop)
        while execute_action(game, screen.read_event()):
            screen.draw(game)
    finally:
        stop.set()
        game.on_change = None


def main(argv=None) -> int:
    """Run the game on the given map file."""
    parser = argparse.ArgumentParser(prog="jogo", description="Terminal map game.")
    parser.add_argument("map", nargs="?", default=DEFAULT_MAP, help="map file")
    args = parser.parse_args(argv)

    game = Game()
    try:
        game.load_map(args.map)
    except OSError as exc:
        print(f"jogo: {exc}", file=sys.stderr)
        return 1

    curses.wrapper(_play, game)
    return 0


if __name__ == "__main__":
    sys.exit(main())