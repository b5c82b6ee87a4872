"""Terminal vocabulary: colours, attributes, keys, line-drawing codes, mouse and menu options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag


class Colour(IntEnum):
    """The eight basic terminal colours."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


class Attr(IntFlag):
    """Display attributes independent of any particular terminal library."""

    NORMAL = 0x000001
    STANDOUT = 0x000002
    UNDERLINE = 0x000004
    REVERSE = 0x000008
    BLINK = 0x000010
    DIM = 0x000020
    BOLD = 0x000040
    ALTCHARSET = 0x000080
    INVIS = 0x000100
    PROTECT = 0x000200
    HORIZONTAL = 0x000400
    LEFT = 0x000800
    LOW = 0x001000
    RIGHT = 0x002000
    TOP = 0x004000
    VERTICAL = 0x008000
    ATTRIBUTES = 0x00FFFF


_KEY_NAMES = (
    "BREAK SRESET RESET DOWN UP LEFT SLEFT RIGHT SRIGHT HOME SHOME BACKSPACE "
    "F0 F1 F2 F3 F4 F5 F6 F7 F8 F9 F10 F11 F12 "
    "DL SDL IL DC SDC IC SIC EIC CLEAR EOS EOL SEOL SF SR NPAGE PPAGE "
    "STAB CTAB CATAB ENTER PRINT SPRINT LL A1 A3 B2 C1 C3 BTAB BEG SBEG "
    "CANCEL SCANCEL CLOSE COMMAND SCOMMAND COPY SCOPY CREATE SCREATE END "
    "EXIT SEXIT FIND SFIND HELP SHELP MARK MESSAGE SMESSAGE MOVE SMOVE "
    "NEXT SNEXT OPEN OPTIONS SOPTIONS PREVIOUS SPREVIOUS REDO SREDO "
    "REFERENCE REFRESH REPLACE SREPLACE RESTART RESUME SRSUME SAVE SSAVE "
    "SELECT SEND SUNDO SUSPEND SSUSPEND UNDO MOUSE RESIZE EVENT UNDEFINED IDLE"
).split()

Key = IntEnum(
    "Key",
    [(name, 0x0100 + offset) for offset, name in enumerate(_KEY_NAMES)],
    module=__name__,
)
Key.__doc__ = "Special key codes; ordinary characters keep their own codes below these."

KEY_MIN = Key.BREAK
KEY_MAX = Key.IDLE


class Acs(IntEnum):
    """Line-drawing and symbol characters carried as control codes."""

    ULCORNER = 0x01
    LLCORNER = 0x02
    URCORNER = 0x03
    LRCORNER = 0x04
    LTEE = 0x05
    RTEE = 0x06
    BTEE = 0x07
    TTEE = 0x08
    HLINE = 0x09
    VLINE = 0x0A
    PLUS = 0x0B
    S1 = 0x0C
    S9 = 0x0D
    DIAMOND = 0x0F
    CKBOARD = 0x10
    DEGREE = 0x11
    PLMINUS = 0x12
    BULLET = 0x13
    LARROW = 0x14
    RARROW = 0x15
    DARROW = 0x16
    UARROW = 0x17
    BOARD = 0x18
    LANTERN = 0x19
    BLOCK = 0x1A
    LEQUAL = 0x1B
    GEQUAL = 0x1C
    PI = 0x1D
    NEQUAL = 0x1E
    STERLING = 0x1F


ACS_MAX = Acs.STERLING


def is_acs(ch: str | int) -> bool:
    """True if ``ch`` falls in the control-code range used for special characters."""
    if isinstance(ch, str):
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        code = ord(ch)
    elif isinstance(ch, int):
        code = ch
    else:
        raise TypeError(f"expected a character or an integer code, got {type(ch).__name__}")
    return 0 <= code <= ACS_MAX


class MenuOption(IntFlag):
    """Menu behaviour options."""

    ONEVALUE = 0x01
    ROWMAJOR = 0x02
    IGNORECASE = 0x04
    SHOWDESC = 0x08
    NONCYCLIC = 0x10
    SHOWMATCH = 0x20


def _shifted(mask: int, button: int) -> int:
    if button > 1:
        return mask << ((button - 1) * 8)
    return mask


def bstate_pressed(button: int) -> int:
    """Button-state bit for ``button`` being pressed."""
    return _shifted(0x01, button)


def bstate_released(button: int) -> int:
    """Button-state bit for ``button`` being released."""
    return _shifted(0x02, button)


def bstate_clicked(button: int) -> int:
    """Button-state bit for a single click of ``button``."""
    return _shifted(0x04, button)


def bstate_double_clicked(button: int) -> int:
    """Button-state bit for a double click of ``button``."""
    return _shifted(0x08, button)


def bstate_triple_clicked(button: int) -> int:
    """Button-state bit for a triple click of ``button``."""
    return _shifted(0x10, button)


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event: device id, 1-based position and button states."""

    id: int
    x: int
    y: int
    z: int = 0
    bstate: int = 0


class TerminalDisposedError(RuntimeError):
    """Raised when a terminal object is used after it was disposed of."""


class Terminal:
    """Base terminal object; concrete back ends extend it."""

    def __init__(self) -> None:
        self._disposed = False

    def dispose(self) -> None:
        """Release the terminal; disposing of it a second time is an error."""
        if self._disposed:
            raise TerminalDisposedError("terminal has already been disposed of")
        self._disposed = True

    def disposed(self) -> bool:
        """True once :meth:`dispose` has been called."""
        return self._disposed

    def __enter__(self) -> Terminal:
        if self._disposed:
            raise TerminalDisposedError("terminal has already been disposed of")
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._disposed:
            self.dispose()