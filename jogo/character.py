"""Player actions: moving, interacting and disarming nearby traps."""

from __future__ import annotations

import threading
from typing import Optional

from .game import TRAP, Game
from .ui import EventKind, KeyEvent

_STEPS = {
    "w": (0, -1),
    "a": (-1, 0),
    "s": (0, 1),
    "d": (1, 0),
}

_NEIGHBOURS = ((0, 1), (1, 0), (0, -1), (-1, 0))


def move(game: Game, key: str) -> None:
    """Move the player one cell according to a WASD key.

    Stepping onto a trap sends the player back to the starting point.
    """
    dx, dy = _STEPS.get(key, (0, 0))
    with game.lock:
        nx, ny = game.x + dx, game.y + dy
        if not game.can_move_to(nx, ny):
            return
        target = game.grid[ny][nx]
        game.move_element(game.x, game.y, dx, dy)
        game.x, game.y = nx, ny
        if target.symbol == TRAP.symbol:
            game.status = "💥 Você caiu numa armadilha!"
            game.x, game.y = game.start_x, game.start_y


def interact(game: Game) -> None:
    """Report the position the player interacts at."""
    with game.lock:
        game.status = f"Interagindo em ({game.x}, {game.y})"


def try_disarm_trap(game: Game) -> None:
    """Signal the disarmable trap if an armed trap lies next to the player."""
    disarm: Optional[threading.Event] = getattr(game, "trap_disarm", None)
    with game.lock:
        if not game.grid:
            return
        width = len(game.grid[0])
        for dx, dy in _NEIGHBOURS:
            nx, ny = game.x + dx, game.y + dy
            if not (0 <= ny < len(game.grid) and 0 <= nx < width):
                continue
            row = game.grid[ny]
            if nx >= len(row) or row[nx].symbol != TRAP.symbol:
                continue
            if disarm is not None and not disarm.is_set():
                disarm.set()
                game.status = "🔵 Você desativou uma armadilha!"


def execute_action(game: Game, event: KeyEvent) -> bool:
    """Apply a key event to the game; returns False when the game should end."""
    if event.kind is EventKind.QUIT:
        return False
    if event.kind is EventKind.INTERACT:
        interact(game)
        try_disarm_trap(game)
    elif event.kind is EventKind.MOVE:
        move(game, event.key)
    return True