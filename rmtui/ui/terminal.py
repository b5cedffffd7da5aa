import curses
from typing import Optional, Tuple

from rich.cells import cell_len

from . import keys
from .render import Frame

_SPECIAL_KEYS = {
    curses.KEY_UP: keys.UP,
    curses.KEY_DOWN: keys.DOWN,
    curses.KEY_LEFT: keys.LEFT,
    curses.KEY_RIGHT: keys.RIGHT,
    curses.KEY_ENTER: keys.ENTER,
    curses.KEY_BACKSPACE: keys.BACKSPACE,
}

_CONTROL_CHARS = {
    "\n": keys.ENTER,
    "\r": keys.ENTER,
    "\x7f": keys.BACKSPACE,
    "\b": keys.BACKSPACE,
    "\x1b": keys.ESCAPE,
}

INPUT_STATUS_PAIR = 1


def translate_key(raw) -> Optional[str]:
    if isinstance(raw, int):
        return _SPECIAL_KEYS.get(raw)
    if raw in _CONTROL_CHARS:
        return _CONTROL_CHARS[raw]
    if keys.is_printable(raw):
        return raw
    return None


class CursesScreen:
    """Copies rendered frames to a curses window and reads keys from it."""

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr
        self.stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # terminal cannot hide the cursor
        self.input_attr = curses.A_REVERSE
        if curses.has_colors():
            curses.start_color()
            curses.init_pair(INPUT_STATUS_PAIR, curses.COLOR_WHITE, curses.COLOR_BLUE)
            self.input_attr = curses.color_pair(INPUT_STATUS_PAIR)

    def size(self) -> Tuple[int, int]:
        return self.stdscr.getmaxyx()

    def _write(self, row: int, text: str, attr: int = curses.A_NORMAL) -> None:
        try:
            self.stdscr.addstr(row, 0, text, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen.
            pass

    def draw(self, frame: Frame) -> None:
        self.stdscr.erase()
        for row, line in enumerate(frame.lines):
            if row == frame.status_row:
                self._write(row, line, self.input_attr if frame.input_mode else curses.A_REVERSE)
            else:
                self._write(row, line)
        if frame.highlight_row is not None and frame.lines:
            width = cell_len(frame.lines[0])
            self.stdscr.chgat(frame.highlight_row, 1, max(width - 2, 0), curses.A_REVERSE | curses.A_BOLD)
        if frame.modal is not None:
            top, left, height, width = frame.modal
            for row in range(top, top + height):
                self.stdscr.chgat(row, left, width, curses.A_BOLD)
        self.stdscr.refresh()

    def poll_key(self, timeout: float) -> Optional[str]:
        self.stdscr.timeout(int(timeout * 1000))
        try:
            raw = self.stdscr.get_wch()
        except curses.error:
            return None
        return translate_key(raw)
