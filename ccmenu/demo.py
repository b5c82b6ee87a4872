"""Interactive demonstration of the menu: pick fruit, toggle menu options.

Selecting an item whose name starts with ``!`` toggles whether the named
item can be chosen. The ``T...`` items toggle row-major order, the grid
format, descriptions, multiple selection and case-insensitive matching.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable, TextIO

from ccmenu.constants import control
from ccmenu.menu import ESCAPE, Menu
from ccmenu.terminal import Attr, Key, MenuOption

DEMO_TITLE = "A Test Menu"
DEMO_Y = 20
DEMO_X = 12
FORMAT_ROWS = 4
FORMAT_COLS = 5

DEMO_ITEMS: tuple[tuple[str, str], ...] = (
    ("Apple", "An apple"),
    ("Pear", "A pair of pears"),
    ("Banana", "Big banana"),
    ("Orange", "An orange orange"),
    ("Anchovies", "Something for pizza"),
    ("Grapes", "A bunch of grapes"),
    ("Peach", "A peck of peaches"),
    ("Cherry", "A quart of cherries"),
    ("Raspberry", "A red raspberry"),
    ("Pumpkin", "A pumpkin for pie"),
    ("Squash", "A squished squash"),
    ("Tomato", "A red tomato"),
    ("Strawberry", "A sweet strawberry"),
    ("Cherry Tomato", "A cherry tomato"),
    ("Cucumber", "Sliced cucumbers"),
    ("Radish", "A horse radish"),
    ("Lettuce", "Lettuce for salads"),
    ("Corn", "A cob of corn"),
    ("Carrots", "Carrots are not for rabbits"),
    ("Catnip", "Catnip is for cats"),
    ("Turnip", "Turnips are tasty"),
    ("Potatoes", "Potatoes for dinner"),
    ("Tangerine", "Tangerines are sweet"),
    ("!Catnip", "Toggle catnip on/off"),
    ("!Corn", "Toggle corn on/off"),
    ("TRMajor", "Toggle row-major order"),
    ("TFormat", "Toggle menu format"),
    ("TDesc", "Toggle descriptive format"),
    ("TMulti", "Toggle multi selection"),
    ("TICase", "Toggle ignore case"),
)


def build_demo_menu(lines: int = 24, columns: int = 80) -> Menu:
    """Create the demonstration menu for a screen of the given size."""
    menu = Menu(lines, columns)
    for name, desc in DEMO_ITEMS:
        menu.add_item(name, desc)
    menu.set_title(DEMO_TITLE, Attr.REVERSE, 0)
    menu.set_coord(DEMO_Y, DEMO_X)
    return menu


@dataclass
class DemoState:
    """The shown demonstration menu together with the options being toggled."""

    lines: int = 24
    columns: int = 80
    format_rows: int = FORMAT_ROWS
    format_cols: int = FORMAT_COLS
    formatted: bool = False
    menu: Menu = field(init=False)
    options: MenuOption = field(init=False)

    def __post_init__(self) -> None:
        self.menu = build_demo_menu(self.lines, self.columns)
        self.menu.show()
        self.options = self.menu.options

    def _rebuild(self) -> None:
        self.menu = build_demo_menu(self.lines, self.columns)
        self.menu.set_options(self.options)
        if self.formatted:
            self.menu.set_format(self.format_rows, self.format_cols)
        self.menu.show()

    def apply(self, selection: str) -> None:
        """Act on a selection returned by the menu."""
        lowered = selection.lower()
        if selection.startswith("!"):
            name = selection[1:]
            self.menu.set_item_selectable(name, not self.menu.is_item_selectable(name))
        elif lowered.startswith("tformat"):
            self.formatted = not self.formatted
            self._rebuild()
        elif lowered.startswith("tdesc"):
            self.options ^= MenuOption.SHOWDESC
            self._rebuild()
        elif lowered.startswith("tmulti"):
            self.options ^= MenuOption.ONEVALUE
            self.menu.set_options(self.options)
        elif lowered.startswith("trmajor"):
            self.options ^= MenuOption.ROWMAJOR
            self._rebuild()
        elif lowered.startswith("ticase"):
            self.options ^= MenuOption.IGNORECASE
            self.menu.set_options(self.options)
        self.options = self.menu.options


def _drive(state: DemoState, keys: Iterable[int], emit: Callable[[str], None]) -> None:
    """Feed keys to the menu until it is left without a choice."""
    for code in keys:
        if not state.menu.handle_key(code):
            continue
        selection = state.menu.selection_value()
        if selection is None:
            return
        emit(f"selected: {selection}")
        state.apply(selection)
        emit(f"options: 0x{int(state.options):04X}")


_NAMED_KEYS = {"ESC": ESCAPE, "ESCAPE": ESCAPE, "SPACE": ord(" ")}


def _parse_key(text: str) -> int:
    """Turn one line of scripted input into a key code."""
    if len(text) == 1:
        return ord(text)
    if len(text) == 2 and text[0] == "^":
        return control(text[1])
    name = text.upper()
    if name in _NAMED_KEYS:
        return _NAMED_KEYS[name]
    try:
        return int(Key[name])
    except KeyError:
        raise ValueError(f"unknown key {text!r}") from None


def _scripted_keys(stream: TextIO) -> list[int]:
    keys = []
    for line in stream:
        entry = line.rstrip("\r\n")
        if not entry.strip():
            continue
        keys.append(_parse_key(entry if len(entry) == 1 else entry.strip()))
    return keys


def _run_curses() -> None:
    import curses

    key_map = {
        curses.KEY_DOWN: Key.DOWN,
        curses.KEY_UP: Key.UP,
        curses.KEY_LEFT: Key.LEFT,
        curses.KEY_RIGHT: Key.RIGHT,
        curses.KEY_NPAGE: Key.NPAGE,
        curses.KEY_PPAGE: Key.PPAGE,
        curses.KEY_HOME: Key.HOME,
        curses.KEY_END: Key.END,
        curses.KEY_BACKSPACE: Key.BACKSPACE,
        curses.KEY_ENTER: Key.ENTER,
        10: Key.ENTER,
        13: Key.ENTER,
    }

    def paint(stdscr, menu: Menu) -> None:
        stdscr.erase()
        geometry = menu.geometry()
        if geometry is not None:
            for offset, line in enumerate(menu.render()):
                try:
                    stdscr.addstr(geometry.top + offset, geometry.left, line)
                except curses.error:
                    pass
        stdscr.refresh()

    def body(stdscr) -> None:
        stdscr.keypad(True)
        lines, columns = stdscr.getmaxyx()
        state = DemoState(lines, columns)

        def keys():
            while True:
                paint(stdscr, state.menu)
                beeps = state.menu.beeps
                raw = stdscr.getch()
                if raw < 0:
                    continue
                yield int(key_map.get(raw, raw))
                if state.menu.beeps != beeps:
                    curses.beep()

        _drive(state, keys(), lambda _text: None)

    curses.wrapper(body)


def main(argv: list[str] | None = None) -> int:
    """Run the demonstration; without a terminal, keys are read one per line."""
    parser = argparse.ArgumentParser(prog="ccmenu-demo", description="Menu demonstration.")
    parser.add_argument("--lines", type=int, default=24, help="screen lines for scripted input")
    parser.add_argument("--columns", type=int, default=80, help="screen columns for scripted input")
    args = parser.parse_args(argv)

    if sys.stdin.isatty() and sys.stdout.isatty():
        _run_curses()
        return 0

    try:
        keys = _scripted_keys(sys.stdin)
    except ValueError as exc:
        print(f"ccmenu-demo: {exc}", file=sys.stderr)
        return 2
    state = DemoState(args.lines, args.columns)
    _drive(state, keys, print)
    return 0


if __name__ == "__main__":
    sys.exit(main())