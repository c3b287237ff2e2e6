"""Terminal screen: keyboard events and drawing of the game state."""

from __future__ import annotations

import curses
import enum
from dataclasses import dataclass

from .game import CHARACTER, Color, Element, Game

HELP_TEXT = "Use WASD para mover e E para interagir. ESC para sair."
TEXT_COLOR = Color.DARK_GRAY

_ESCAPE = "\x1b"


class EventKind(enum.Enum):
    """What a key press asks the game to do."""

    NONE = "none"
    QUIT = "quit"
    INTERACT = "interact"
    MOVE = "move"


@dataclass(frozen=True)
class KeyEvent:
    """A translated key press; key carries the character for moves."""

    kind: EventKind = EventKind.NONE
    key: str = ""


def translate_key(key) -> KeyEvent:
    """Turn a value from the terminal (a character or a key code) into an event."""
    if isinstance(key, int):
        if key == 27:
            return KeyEvent(EventKind.QUIT)
        if key in (-1, curses.KEY_RESIZE):
            return KeyEvent()
        return KeyEvent(EventKind.MOVE)
    if not key:
        return KeyEvent()
    if key == _ESCAPE:
        return KeyEvent(EventKind.QUIT)
    if key == "e":
        return KeyEvent(EventKind.INTERACT)
    if len(key) == 1 and key.isprintable():
        return KeyEvent(EventKind.MOVE, key)
    return KeyEvent(EventKind.MOVE)


class Screen:
    """Draws a game on a curses window and reads keys from it."""

    def __init__(self, stdscr) -> None:
        self._stdscr = stdscr
        self._pairs: dict[tuple[int, int], int] = {}
        self._colors = False
        self._default_colors = False
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.keypad(True)
        try:
            if curses.has_colors():
                curses.start_color()
                self._colors = True
                try:
                    curses.use_default_colors()
                    self._default_colors = True
                except curses.error:
                    pass
        except curses.error:
            self._colors = False

    def read_event(self) -> KeyEvent:
        """Block for the next key and translate it."""
        try:
            key = self._stdscr.get_wch()
        except curses.error:
            return KeyEvent()
        return translate_key(key)

    def draw(self, game: Game) -> None:
        """Render the map, the player and the status bar."""
        with game.lock:
            self._stdscr.erase()
            for y, row in enumerate(game.grid):
                for x, element in enumerate(row):
                    self._put_element(x, y, element)
            self._put_element(game.x, game.y, CHARACTER)
            text_attr = self._attr(TEXT_COLOR, Color.DEFAULT)
            rows = len(game.grid)
            self._put(rows + 1, 0, game.status, text_attr)
            self._put(rows + 3, 0, HELP_TEXT, text_attr)
            self._stdscr.refresh()

    def _put_element(self, x: int, y: int, element: Element) -> None:
        self._put(y, x, element.symbol, self._attr(element.color, element.background))

    def _put(self, y: int, x: int, text: str, attr: int) -> None:
        if not text or x < 0 or y < 0:
            return
        try:
            self._stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    def _color_number(self, color: Color, foreground: bool) -> int:
        if color is Color.DEFAULT:
            if self._default_colors:
                return -1
            return curses.COLOR_WHITE if foreground else curses.COLOR_BLACK
        if color is Color.DARK_GRAY:
            return 8 if curses.COLORS >= 16 else curses.COLOR_WHITE
        return {
            Color.BLACK: curses.COLOR_BLACK,
            Color.RED: curses.COLOR_RED,
            Color.GREEN: curses.COLOR_GREEN,
        }[color]

    def _attr(self, fg: Color, bg: Color) -> int:
        if not self._colors:
            return 0
        key = (self._color_number(fg, True), self._color_number(bg, False))
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return 0
            try:
                curses.init_pair(pair, *key)
            except curses.error:
                return 0
            self._pairs[key] = pair
        return curses.color_pair(pair)