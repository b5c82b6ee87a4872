"""A selection menu model: items, layout, key handling and a text rendering.

The menu keeps its items in the order they were added and lays them out in
a grid of ``format_rows`` by ``format_cols`` cells. Each cell is the mark
column, the item name and, when descriptions are shown, the description
prefixed with ``"- "``. Navigation wraps around, and typing printable
characters searches item names by prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ccmenu.constants import control
from ccmenu.terminal import KEY_MIN, Attr, Key, MenuOption

MODULE_PREFIX = "COBCURSES-MENU-"
NAME_WIDTH = 32
DESC_WIDTH = 64
DEFAULT_FORMAT_ROWS = 16
DEFAULT_Y = 10
DEFAULT_X = 40
MARK = ">"
ESCAPE = 0o33

DEFAULT_OPTIONS = (
    MenuOption.ONEVALUE
    | MenuOption.ROWMAJOR
    | MenuOption.IGNORECASE
    | MenuOption.SHOWDESC
    | MenuOption.SHOWMATCH
)

MenuModule = Callable[[str], object]
Resolver = Callable[[str], Optional[MenuModule]]


def dynamic_module_name(module: str | None) -> str | None:
    """Name of the module that supplies a dynamic menu's items, or None."""
    if module is None:
        return None
    return (MODULE_PREFIX + module).rstrip(" ")


@dataclass
class MenuItem:
    """One menu entry."""

    name: str
    desc: str
    selectable: bool = True
    selected: bool = False

    @property
    def description(self) -> str:
        """The description as displayed beside the name."""
        return "- " + self.desc


@dataclass(frozen=True)
class MenuGeometry:
    """Placement of the menu window and of the item area within it."""

    top: int
    left: int
    rows: int
    cols: int
    sub_top: int
    sub_rows: int
    sub_cols: int
    format_rows: int
    format_cols: int


class Menu:
    """A menu of named items shown in a boxed window on a terminal."""

    def __init__(self, lines: int = 24, columns: int = 80) -> None:
        self.lines = lines
        self.columns = columns
        self.title: str | None = None
        self.title_attr = Attr.REVERSE
        self.title_pair = 0
        self.y = DEFAULT_Y
        self.x = DEFAULT_X
        self.beeps = 0
        self._items: list[MenuItem] = []
        self._options = MenuOption(DEFAULT_OPTIONS)
        self._maxrows = 0
        self._maxcols = 0
        self._hidden = True
        self._built = False
        self._geometry: MenuGeometry | None = None
        self._format_rows = DEFAULT_FORMAT_ROWS
        self._format_cols = 1
        self._current = 0
        self._top = 0
        self._pattern = ""
        self._module: str | None = None
        self._item_limit = 0
        self._loaded = False
        self._chosen: MenuItem | None = None

    # -- state -----------------------------------------------------------

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return tuple(self._items)

    @property
    def options(self) -> MenuOption:
        return self._options

    @property
    def hidden(self) -> bool:
        return self._hidden

    @property
    def module(self) -> str | None:
        return self._module

    @property
    def item_limit(self) -> int:
        return self._item_limit

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def current(self) -> MenuItem | None:
        """The item under the cursor, once the menu has been shown."""
        if not self._built:
            return None
        return self._items[self._current]

    @property
    def selection(self) -> str | None:
        """Name of the item chosen by the last completed key sequence."""
        return self._chosen.name if self._chosen is not None else None

    # -- configuration ---------------------------------------------------

    def add_item(self, name: str, desc: str) -> Menu:
        """Append an item; a shown menu is taken down to be laid out again."""
        self._items.append(MenuItem(name, desc))
        if self._built:
            self._built = False
            self._geometry = None
            self._hidden = True
        return self

    def set_title(self, title: str | None, attr: Attr, pair: int) -> Menu:
        """Set the title text (None for no title area) and its look."""
        self.title = title
        self.title_attr = attr
        self.title_pair = pair
        return self

    def set_coord(self, y: int, x: int) -> Menu:
        """Set the preferred top left corner of the menu window."""
        self.y = y
        self.x = x
        return self

    def set_format(self, maxrows: int, maxcols: int) -> Menu:
        """Set the largest grid of rows and columns to show at once."""
        self._maxrows = maxrows
        self._maxcols = maxcols
        return self

    def set_options(self, opts: MenuOption) -> MenuOption:
        """Replace the options, returning the ones previously in effect."""
        previous = self._options
        opts = MenuOption(opts)
        if (opts ^ previous) & MenuOption.ONEVALUE:
            for item in self._items:
                item.selected = False
        self._options = opts
        return previous

    def _find_item(self, name: str) -> MenuItem | None:
        return next((item for item in self._items if item.name == name), None)

    def set_item_selectable(self, name: str, selectable: bool) -> bool:
        """Change whether the named item can be chosen; return its prior state."""
        item = self._find_item(name)
        if item is None:
            return False
        prior = item.selectable
        item.selectable = bool(selectable)
        return prior

    def is_item_selectable(self, name: str) -> bool:
        """True if the named item exists and can be chosen."""
        item = self._find_item(name)
        return item is not None and item.selectable

    def set_dynamic(self, module: str | None, item_limit: int) -> Menu:
        """Take items from a supplying module when shown; 0 means no limit."""
        self._module = dynamic_module_name(module)
        self._item_limit = item_limit
        return self

    # -- showing ---------------------------------------------------------

    def _load_dynamic(self, resolve: Resolver) -> None:
        """Ask the module for items: "O" opens, "R" reads, "C" closes.

        "O" and "C" return 0 on success. "R" returns a ``(name, desc)``
        tuple for each item and anything else at the end.
        """
        assert self._module is not None
        supplier = resolve(self._module)
        if supplier is None or supplier("O"):
            return
        count = 0
        while True:
            entry = supplier("R")
            if not isinstance(entry, tuple):
                break
            name, desc = entry
            self.add_item(name[:NAME_WIDTH].rstrip(" "), desc[:DESC_WIDTH].rstrip(" "))
            count += 1
            if self._item_limit and count >= self._item_limit:
                break
        supplier("C")

    def show(self, resolve: Resolver | None = None) -> Menu:
        """Lay out and post the menu; dynamic items are fetched the first time."""
        if not self._hidden:
            return self
        if not self._built:
            if self._module is not None and not self._loaded and resolve is not None:
                self._loaded = True
                self._load_dynamic(resolve)
            geometry = self.geometry()
            if geometry is None:
                return self
            self._geometry = geometry
            self._format_rows = geometry.format_rows
            self._format_cols = geometry.format_cols
            self._current = 0
            self._top = 0
            self._built = True
        self._pattern = ""
        self._hidden = False
        return self

    def hide(self) -> Menu:
        """Take the menu off the screen, keeping its state."""
        self._hidden = True
        return self

    def _name_width(self) -> int:
        return max(len(item.name) for item in self._items)

    def _desc_width(self) -> int:
        return max(len(item.description) for item in self._items)

    def _cell_width(self) -> int:
        width = len(MARK) + self._name_width()
        if self._options & MenuOption.SHOWDESC:
            width += 1 + self._desc_width()
        return width

    def _scale(self, rows: int, cols: int) -> tuple[int, int]:
        total_rows = -(-len(self._items) // cols)
        height = min(rows, total_rows)
        width = cols * self._cell_width() + (cols - 1)
        return height, width

    def geometry(self) -> MenuGeometry | None:
        """Compute where the menu would be placed; None when it has no items."""
        if not self._items:
            return None
        title_rows = 2 if self.title else 0
        if self._maxrows > 0:
            rows, cols = self._maxrows, max(self._maxcols, 1)
            while True:
                height, width = self._scale(rows, cols)
                if width <= self.columns and height + title_rows <= self.lines:
                    break
                changed = False
                if width > self.columns and cols > 1:
                    cols -= 1
                    changed = True
                if height + title_rows > self.lines and rows > 1:
                    rows -= 1
                    changed = True
                if not changed:
                    break
        else:
            rows, cols = DEFAULT_FORMAT_ROWS, 1
            height, width = self._scale(rows, cols)

        if self.title and len(self.title) > width:
            width = len(self.title) + 2

        win_rows = height + title_rows + 2
        win_cols = width + 2
        top = self.y
        if top + win_rows > self.lines:
            top = max(self.lines - win_rows, 0)
        left = self.x
        if left + win_cols > self.columns:
            left = max(self.columns - win_cols, 0)
        return MenuGeometry(
            top=top,
            left=left,
            rows=win_rows,
            cols=win_cols,
            sub_top=1 + title_rows,
            sub_rows=height,
            sub_cols=width,
            format_rows=rows,
            format_cols=cols,
        )

    # -- grid ------------------------------------------------------------

    def _total_rows(self) -> int:
        return -(-len(self._items) // self._format_cols)

    def _visible_rows(self) -> int:
        return min(self._format_rows, self._total_rows())

    def _position(self, index: int) -> tuple[int, int]:
        if self._options & MenuOption.ROWMAJOR:
            return divmod(index, self._format_cols)
        col, row = divmod(index, self._total_rows())
        return row, col

    def _index(self, row: int, col: int) -> int | None:
        total = self._total_rows()
        if not (0 <= row < total and 0 <= col < self._format_cols):
            return None
        if self._options & MenuOption.ROWMAJOR:
            index = row * self._format_cols + col
        else:
            index = col * total + row
        return index if index < len(self._items) else None

    def _show_current(self) -> None:
        row, _ = self._position(self._current)
        visible = self._visible_rows()
        if row < self._top:
            self._top = row
        elif row >= self._top + visible:
            self._top = row - visible + 1

    def _move_to(self, index: int) -> None:
        self._current = index
        self._pattern = ""
        self._show_current()

    def _down(self) -> None:
        row, col = self._position(self._current)
        index = self._index(row + 1, col)
        self._move_to(index if index is not None else self._index(0, col) or 0)

    def _up(self) -> None:
        row, col = self._position(self._current)
        index = self._index(row - 1, col)
        if index is None:
            index = next(
                i
                for i in (self._index(r, col) for r in reversed(range(self._total_rows())))
                if i is not None
            )
        self._move_to(index)

    def _right(self) -> None:
        row, col = self._position(self._current)
        index = self._index(row, col + 1)
        self._move_to(index if index is not None else self._index(row, 0) or 0)

    def _left(self) -> None:
        row, col = self._position(self._current)
        index = self._index(row, col - 1)
        if index is None:
            index = next(
                i
                for i in (self._index(row, c) for c in reversed(range(self._format_cols)))
                if i is not None
            )
        self._move_to(index)

    def _first(self) -> None:
        self._move_to(0)

    def _last(self) -> None:
        self._move_to(len(self._items) - 1)

    def _page_down(self) -> None:
        visible, total = self._visible_rows(), self._total_rows()
        if self._top + visible >= total:
            return
        new_top = min(self._top + visible, total - visible)
        delta = new_top - self._top
        self._top = new_top
        row, col = self._position(self._current)
        index = self._index(row + delta, col)
        self._move_to(index if index is not None else len(self._items) - 1)

    def _page_up(self) -> None:
        if self._top == 0:
            return
        new_top = max(self._top - self._visible_rows(), 0)
        delta = self._top - new_top
        self._top = new_top
        row, col = self._position(self._current)
        index = self._index(row - delta, col)
        self._move_to(index if index is not None else 0)

    def _scroll_up_line(self) -> None:
        if self._top == 0:
            return
        self._top -= 1
        row, col = self._position(self._current)
        if row >= self._top + self._visible_rows():
            index = self._index(row - 1, col)
            self._move_to(index if index is not None else self._current)

    # -- matching --------------------------------------------------------

    def _matches(self, item: MenuItem, pattern: str) -> bool:
        if self._options & MenuOption.IGNORECASE:
            return item.name.upper().startswith(pattern.upper())
        return item.name.startswith(pattern)

    def _search(self, pattern: str, start: int, step: int) -> int | None:
        count = len(self._items)
        for offset in range(count):
            index = (start + step * offset) % count
            if self._matches(self._items[index], pattern):
                return index
        return None

    def _clear_pattern(self) -> None:
        self._pattern = ""

    def _back_pattern(self) -> None:
        self._pattern = self._pattern[:-1]

    def _next_match(self) -> None:
        if self._pattern:
            index = self._search(self._pattern, self._current + 1, 1)
            if index is not None:
                self._current = index
                self._show_current()

    def _prev_match(self) -> None:
        if self._pattern:
            index = self._search(self._pattern, self._current - 1, -1)
            if index is not None:
                self._current = index
                self._show_current()

    def _add_to_pattern(self, ch: str) -> None:
        candidate = self._pattern + ch
        index = self._search(candidate, self._current, 1)
        if index is not None:
            self._current = index
            self._pattern = candidate
            self._show_current()

    def _toggle(self) -> None:
        item = self._items[self._current]
        if self._options & MenuOption.ONEVALUE or not item.selectable:
            return
        item.selected = not item.selected

    # -- interaction -----------------------------------------------------

    def handle_key(self, key: int | str) -> bool:
        """Apply one keystroke; return True once a choice or cancel is made.

        After True, :attr:`selection` holds the chosen name or None.
        """
        code = ord(key) if isinstance(key, str) else int(key)
        if not self._built:
            self._chosen = None
            return True
        action = _KEY_ACTIONS.get(code)
        if action is not None:
            action(self)
            return False
        if code == Key.ENTER:
            item = self._items[self._current]
            if item.selectable:
                self._chosen = item
                return True
            self.beeps += 1
            return False
        if code in _EXIT_KEYS:
            self._chosen = None
            return True
        if code < KEY_MIN and 32 <= code < 127:
            self._add_to_pattern(chr(code))
        return False

    def selection_value(self) -> str | None:
        """The chosen name, followed by other selected names in multi-value mode."""
        chosen = self._chosen
        if chosen is None:
            return None
        if self._options & MenuOption.ONEVALUE:
            return chosen.name
        value = chosen.name.rstrip(" ")
        for item in self._items:
            if item.selected and item is not chosen:
                value = (value + "," + item.name).rstrip(" ")
        return value

    def render(self) -> list[str]:
        """Draw the menu window as text lines; empty while hidden."""
        if not self._built or self._hidden or self._geometry is None:
            return []
        inner = self._geometry.cols - 2
        border = "+" + "-" * inner + "+"
        out = [border]
        if self.title:
            text = self.title
            if not self._options & MenuOption.SHOWDESC:
                text = self._items[self._current].desc
            out.append("|" + _center(text, inner) + "|")
            out.append(border)
        cell_width = self._cell_width()
        for row in range(self._top, self._top + self._visible_rows()):
            cells = []
            for col in range(self._format_cols):
                index = self._index(row, col)
                cells.append(" " * cell_width if index is None else self._cell(index))
            out.append("|" + " ".join(cells).ljust(inner)[:inner] + "|")
        out.append(border)
        return out

    def _cell(self, index: int) -> str:
        item = self._items[index]
        if self._options & MenuOption.ONEVALUE:
            marked = index == self._current
        else:
            marked = item.selected
        text = (MARK if marked else " ") + item.name.ljust(self._name_width())
        if self._options & MenuOption.SHOWDESC:
            text += " " + item.description.ljust(self._desc_width())
        return text


def _center(text: str, width: int) -> str:
    text = text[:width]
    return (" " * ((width - len(text)) // 2) + text).ljust(width)


_KEY_ACTIONS: dict[int, Callable[[Menu], None]] = {
    control("N"): Menu._down,
    Key.DOWN: Menu._down,
    control("P"): Menu._up,
    Key.UP: Menu._up,
    control("V"): Menu._page_down,
    Key.NPAGE: Menu._page_down,
    control("Y"): Menu._page_up,
    Key.PPAGE: Menu._page_up,
    control("U"): Menu._scroll_up_line,
    control("D"): Menu._scroll_up_line,
    Key.LEFT: Menu._left,
    Key.RIGHT: Menu._right,
    control("A"): Menu._clear_pattern,
    control("C"): Menu._next_match,
    control("X"): Menu._next_match,
    control("R"): Menu._prev_match,
    control("T"): Menu._toggle,
    ord(" "): Menu._toggle,
    control("H"): Menu._back_pattern,
    Key.BACKSPACE: Menu._back_pattern,
    Key.HOME: Menu._first,
    Key.END: Menu._last,
}

_EXIT_KEYS = frozenset({ESCAPE, control("G"), control("O"), ord(".")})