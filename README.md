# ccmenu

Building blocks for text-terminal menus, with no dependencies outside the
standard library:

- `ccmenu.constants`: the `ReturnCode` and `CompType` enums, and the helpers
  `is_bool`, `to_bool`, `bool_char` (Y/N flag characters) and `control`
  (the code produced by Ctrl plus a character).
- `ccmenu.terminal`: `Colour`, `Attr`, `Key`, `Acs` (line-drawing codes),
  `MenuOption`, `MouseEvent`, the mouse button-state helpers
  `bstate_pressed`, `bstate_released`, `bstate_clicked`,
  `bstate_double_clicked`, `bstate_triple_clicked`, `is_acs`, and a base
  `Terminal` object that can be disposed of once (a second `dispose()` raises
  `TerminalDisposedError`; it also works as a context manager).
- `ccmenu.units`: `UnitOptionParser` for unit-specification strings, and
  `check_units_string` to validate one.
- `ccmenu.menu`: a `Menu` model with items, a title, selectability, items
  fetched from a supplying module, screen-fitting geometry, key handling and
  a plain-text rendering.
- `ccmenu.demo`: a demonstration menu and the `ccmenu-demo` command.

## Installation

```
pip install .
```

## Unit specifications

A specification is a comma separated list of options (`-append=value`,
`-asis`, `-ucase`, `-lcase`) and units (`name=exponent` or
`name=exponent:low/high`), with exponents from -999 to 999.

```python
from ccmenu.units import check_units_string, UnitsSpecError

result = check_units_string("-asis,-append=ohms,k=3,M=6 ")
print(result.option_count, result.unit_count)   # 2 2

try:
    check_units_string("-bogus,k=3")
except UnitsSpecError as exc:
    print(exc.message, exc.position)   # message and 1-based position
```

Trailing blanks are ignored. The error also carries `offset` (0-based) and
the option and unit counts found before it.

To step through the entries:

```python
from ccmenu.units import UnitOptionParser

parser = UnitOptionParser("-ucase,u=-3:-1/-5,k=3")
for option in parser:
    print(option.type, option.name, option.expon, option.low, option.high)
```

Iteration raises `UnitsSpecError` on a bad entry; `parser.next()` instead
returns a `UnitOption` whose type is `UnitType.ERROR` (or `UnitType.NULL` at
the end). The `-ucase` and `-lcase` options change the case of the unit names
and values that follow them.

## Menus

```python
from ccmenu.menu import Menu
from ccmenu.terminal import Attr, Key

menu = Menu(lines=24, columns=80)
menu.add_item("Apple", "An apple")
menu.add_item("Pear", "A pair of pears")
menu.set_title("Fruit", Attr.REVERSE, 0)
menu.set_coord(5, 10)
menu.show()

print("\n".join(menu.render()))

menu.handle_key(Key.DOWN)
if menu.handle_key(Key.ENTER):
    print(menu.selection_value())   # "Pear"
```

`handle_key` returns True once a choice is made (Enter on a selectable item)
or the menu is left (Escape, Ctrl-G, Ctrl-O or `.`); `selection_value()` is
then the chosen name or None. Printable characters search item names by
prefix. Items can be made unselectable with `set_item_selectable`. With
`MenuOption.ONEVALUE` turned off (`set_options`), space or Ctrl-T toggles
items and `selection_value()` returns a comma-separated list of the chosen
item and the other selected items. `set_format` limits the grid of rows and
columns, shrunk as needed to fit the screen; `geometry()` reports the
placement.

`set_dynamic(module, item_limit)` makes the menu take items from a supplier
when first shown with `show(resolve)`: `resolve` is called with the name
`"COBCURSES-MENU-" + module` and returns a callable (or None). That callable
is called with `"O"` to open (0 means success), `"R"` repeatedly to read
`(name, desc)` tuples until something other than a tuple comes back, and
`"C"` to close. An `item_limit` of 0 means no limit.

## Demo

```
ccmenu-demo
```

On a terminal this shows the demonstration menu with curses. Choosing an
entry starting with `!` toggles whether another entry can be selected; the
`T...` entries toggle row-major order, the grid format, descriptions,
multi-selection and case-insensitive matching.

When standard input or output is not a terminal, keys are read one per line
from standard input: a single character, `^X` for a control key, `ESC`,
`SPACE`, or a `Key` name such as `DOWN` or `ENTER`. Each choice prints
`selected: <value>` and `options: 0x....`. `--lines` and `--columns` set the
screen size for this mode.

## What is not included

There is no full terminal driver: `Terminal` only tracks whether it has been
disposed of, and the menu draws itself as text lines rather than through a
screen library. Dynamic menu items come only from the Python callables you
supply.

## Tests

```
pip install .[test]
pytest
```