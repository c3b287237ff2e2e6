"""Game state, map elements and the background workers that animate the map."""

from __future__ import annotations

import enum
import random
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

_POLL_INTERVAL = 0.1
_PORTAL_TICK = 0.3


class Color(enum.Enum):
    """Abstract colours used by map elements; the screen maps them to terminal colours."""

    DEFAULT = "default"
    BLACK = "black"
    DARK_GRAY = "dark_gray"
    RED = "red"
    GREEN = "green"


@dataclass(frozen=True)
class Element:
    """Anything that can occupy a map cell."""

    symbol: str
    color: Color = Color.DEFAULT
    background: Color = Color.DEFAULT
    solid: bool = False


CHARACTER = Element("☺", Color.DARK_GRAY, Color.DEFAULT, True)
ENEMY = Element("☠", Color.RED, Color.DEFAULT, True)
WALL = Element("▤", Color.BLACK, Color.DARK_GRAY, True)
VEGETATION = Element("♣", Color.GREEN, Color.DEFAULT, False)
EMPTY = Element(" ", Color.DEFAULT, Color.DEFAULT, False)
PORTAL = Element("○", Color.GREEN, Color.DEFAULT, False)
TRAP = Element("▲", Color.RED, Color.DEFAULT, True)

_LOADABLE = {element.symbol: element for element in (WALL, ENEMY, VEGETATION)}


class Game:
    """The map, the player's position and the status line, guarded by one lock."""

    def __init__(
        self,
        on_change: Optional[Callable[["Game"], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.grid: list[list[Element]] = []
        self.x = 0
        self.y = 0
        self.start_x = 0
        self.start_y = 0
        self.last_visited = EMPTY
        self.status = ""
        self.lock = threading.RLock()
        self.on_change = on_change
        self.rng = rng if rng is not None else random.Random()

    def load_map(self, path) -> None:
        """Build the grid from a text file, one row per line."""
        grid: list[list[Element]] = []
        with Path(path).open(encoding="utf-8") as handle:
            for y, raw in enumerate(handle):
                line = raw.removesuffix("\n").removesuffix("\r")
                row = []
                for x, char in enumerate(line):
                    if char == CHARACTER.symbol:
                        self.x, self.y = x, y
                        self.start_x, self.start_y = x, y
                    row.append(_LOADABLE.get(char, EMPTY))
                grid.append(row)
        self.grid = grid

    def can_move_to(self, x: int, y: int) -> bool:
        """Whether the player may step onto (x, y); traps can be stepped on."""
        if not 0 <= y < len(self.grid):
            return False
        if not 0 <= x < len(self.grid[y]):
            return False
        cell = self.grid[y][x]
        if cell.symbol == TRAP.symbol:
            return True
        return not cell.solid

    def move_element(self, x: int, y: int, dx: int, dy: int) -> None:
        """Move the element at (x, y) by (dx, dy), restoring what it stood on."""
        nx, ny = x + dx, y + dy
        element = self.grid[y][x]
        self.grid[y][x] = self.last_visited
        self.last_visited = self.grid[ny][nx]
        self.grid[ny][nx] = element

    def find_start_point(self) -> tuple[int, int]:
        """Position of the character symbol on the grid, or (1, 1) when absent."""
        for y, row in enumerate(self.grid):
            for x, element in enumerate(row):
                if element.symbol == CHARACTER.symbol:
                    return x, y
        return 1, 1

    def find_free_position(self) -> tuple[int, int]:
        """A random empty, passable cell within the width of the first row."""
        with self.lock:
            if not self.grid:
                raise ValueError("the map is empty")
            width = len(self.grid[0])
            free = [
                (x, y)
                for y, row in enumerate(self.grid)
                for x, element in enumerate(row[:width])
                if not element.solid and element.symbol == EMPTY.symbol
            ]
            if not free:
                raise ValueError("no free cell on the map")
            return self.rng.choice(free)

    def set_trap(self, x: int, y: int, active: bool) -> None:
        """Show an armed trap at (x, y), or clear the cell."""
        with self.lock:
            self.grid[y][x] = TRAP if active else EMPTY

    def step_enemy(self, x: int, y: int, direction: int) -> Optional[tuple[int, int]]:
        """Advance a vertically patrolling enemy one step.

        Returns the enemy's new row and direction, or None if the enemy is gone.
        """
        with self.lock:
            if self.grid[y][x].symbol != ENEMY.symbol:
                return None
            ny = y + direction
            if (
                ny < 0
                or ny >= len(self.grid)
                or x >= len(self.grid[ny])
                or self.grid[ny][x].solid
            ):
                return y, -direction
            if (self.x, self.y) == (x, ny):
                self.status = "⚡ O inimigo tentou te atingir, mas mudou de direção!"
                return y, -direction
            target = self.grid[ny][x].symbol
            if target in (EMPTY.symbol, VEGETATION.symbol):
                self.grid[y][x] = EMPTY
                self.grid[ny][x] = ENEMY
                return ny, direction
            return y, -direction

    def notify(self) -> None:
        """Tell the listener, if any, that the game state changed."""
        if self.on_change is not None:
            self.on_change(self)


def run_trap(
    game: Game,
    x: int,
    y: int,
    disarm: threading.Event,
    stop: threading.Event,
    period: float = 3.0,
) -> None:
    """Toggle a fixed trap every period until it is disarmed or stopped."""
    active = False
    while not stop.is_set():
        if disarm.wait(period):
            with game.lock:
                game.grid[y][x] = EMPTY
                game.status = "🔕 Armadilha foi desativada!"
            game.notify()
            return
        if stop.is_set():
            return
        active = not active
        game.set_trap(x, y, active)
        game.notify()
        with game.lock:
            if active and (game.x, game.y) == (x, y):
                game.status = "💥 Você pisou numa armadilha!"


def run_random_trap(
    game: Game,
    x: int,
    y: int,
    stop: threading.Event,
    period: float = 3.0,
) -> None:
    """Toggle a trap every period; a player caught on it is sent back to the start."""
    active = False
    next_tick = time.monotonic() + period
    while True:
        if time.monotonic() >= next_tick:
            active = not active
            game.set_trap(x, y, active)
            game.notify()
            next_tick += period
        with game.lock:
            if active and (game.x, game.y) == (x, y):
                game.status = "💥 Você caiu numa armadilha! Voltando para o início!"
                game.x, game.y = game.find_start_point()
        wait = max(0.0, min(_POLL_INTERVAL, next_tick - time.monotonic()))
        if stop.wait(wait):
            return


def add_random_traps(game: Game, count: int, stop: threading.Event) -> list[threading.Thread]:
    """Start count random traps on free cells; returns their threads."""
    threads = []
    for _ in range(count):
        x, y = game.find_free_position()
        thread = threading.Thread(
            target=run_random_trap, args=(game, x, y, stop), daemon=True
        )
        thread.start()
        threads.append(thread)
    return threads


def run_portal(
    game: Game,
    stop: threading.Event,
    lifetime: float = 5.0,
    pause: float = 3.0,
) -> None:
    """Keep opening portals at random free cells, each for a limited time."""
    while not stop.is_set():
        x, y = game.find_free_position()
        with game.lock:
            game.grid[y][x] = PORTAL
        game.notify()

        deadline = time.monotonic() + lifetime
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                with game.lock:
                    if game.grid[y][x].symbol == PORTAL.symbol:
                        game.grid[y][x] = EMPTY
                        game.status = "⏱️ O portal desapareceu!"
                game.notify()
                break
            if stop.wait(min(_PORTAL_TICK, remaining)):
                return
            with game.lock:
                entered = (game.x, game.y) == (x, y)
                if entered:
                    game.grid[y][x] = EMPTY
                    game.status = "🚪 Você entrou no portal a tempo!"
            if entered:
                game.notify()
                break

        if stop.wait(pause):
            return


def run_enemy(
    game: Game,
    x: int,
    y: int,
    stop: threading.Event,
    period: float = 0.5,
) -> None:
    """Patrol an enemy up and down its column until it disappears or is stopped."""
    direction = 1
    while not stop.wait(period):
        step = game.step_enemy(x, y, direction)
        if step is None:
            return
        y, direction = step
        game.notify()