# jogo

A small terminal game drawn with `curses`. You walk a character around a map
loaded from a text file. Enemies patrol up and down their column, traps switch
on and off every few seconds, and a portal opens for a short time on a random
free cell.

## Installing

```
pip install .
```

The game needs the standard `curses` module, so it runs on POSIX terminals.

## Playing

```
jogo            # loads mapa.txt from the current directory
jogo mymap.txt  # loads another map file
```

If the map file cannot be opened, `jogo` prints the error and exits with
status 1.

Controls:

- `w`, `a`, `s`, `d`: move one cell
- `e`: interact; shows your position in the status line and disarms the
  disarmable trap if an armed trap is right next to you
- `Esc`: quit

What happens on the map:

- Walking onto an armed trap sends you back to your starting position.
- Two fixed traps sit at columns 25 and 30 of row 15 and toggle every 3
  seconds; the one at column 30 can be disarmed with `e`. The map must be
  large enough to hold them, otherwise a `ValueError` is raised.
- Three more traps are placed on random free cells and toggle every 3 seconds.
- Each enemy (`☠`) moves one cell every half second along its column, turning
  back at walls, map edges, or when you are in its way.
- A portal (`○`) opens on a random free cell for 5 seconds; stepping on it
  closes it. A new one appears 3 seconds later.

## Map files

A map is UTF-8 text, one line per row:

| Character | Meaning                       |
|-----------|-------------------------------|
| `▤`       | wall (blocks movement)        |
| `☠`       | enemy (patrols vertically)    |
| `♣`       | vegetation (walkable)         |
| `☺`       | player start position         |

Any other character is an empty floor cell.

## Using the game model

`jogo.game.Game` holds the grid (`grid`), the player position (`x`, `y`),
the start position (`start_x`, `start_y`) and the status line (`status`),
guarded by `lock`. It can be driven without a terminal:

```python
from jogo.game import Game
from jogo.character import move, execute_action
from jogo.ui import KeyEvent, EventKind

game = Game()
game.load_map("mapa.txt")
move(game, "d")
execute_action(game, KeyEvent(EventKind.INTERACT))
print(game.x, game.y, game.status)
```

Other pieces:

- `jogo.game`: `Element`, the map elements (`WALL`, `ENEMY`, `TRAP`, ...),
  and the worker functions `run_trap`, `run_random_trap`, `add_random_traps`,
  `run_portal` and `run_enemy`, each of which runs until a `threading.Event`
  is set. `Game(on_change=...)` is called whenever a worker changes the state.
- `jogo.ui`: `translate_key` turns a key into a `KeyEvent`; `Screen` draws a
  `Game` on a curses window and reads keys.
- `jogo.character`: `move`, `interact`, `try_disarm_trap` and
  `execute_action`.
- `jogo.main`: `start_workers(game, stop)` starts all background threads;
  `main(argv)` is the command.

## What it does not do

There is no score, no goal or win condition, no enemy damage and no saving of
a game. Interacting only reports your position and disarms the one
disarmable trap.

## Running the tests

```
pip install ".[test]"
pytest
```