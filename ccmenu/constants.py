"""Return codes, value types and small character helpers shared by the package."""

from __future__ import annotations

from enum import IntEnum

# Environment variable names understood by the runtime.
TOPDIR_ENVNAME = "COBCURSES_TOPDIR"
DATADIR_ENVNAME = "COBCURSES_DATADIR"
NORECOVERY_ENVNAME = "COBCURSES_NORECOVERY"
SHAREDIR_ENVNAME = "COBCURSES_SHAREDIR"
TRACE_ENVNAME = "COBCURSES_TRACE"
TRACE_LEVEL_ENVNAME = "COBCURSES_TRACE_LEVEL"
USER_SHELL_ENVNAME = "USER_SHELL"

# Exponent limits for scientific notation.
MAXIMUM_EE = 999
MINIMUM_EE = -999

# Flag characters indexed by truth value.
_FLAG_CHARS = ("N", "Y")


class ReturnCode(IntEnum):
    """Result codes reported to calling programs."""

    OK = 0
    FAILED = 1
    OPEN = 2
    NSUPPORT = 3
    TRUNCATED = 4
    NOTFOUND = 5
    BADPARM = 6
    END = 7
    RESOURCE = 8


class CompType(IntEnum):
    """Binary floating point item kinds."""

    NON_COMP = 0
    COMP_1 = 1
    COMP_2 = 2


def _char_code(ch: str | int) -> int:
    """Return the byte value of a single character or integer code."""
    if isinstance(ch, int):
        return ch & 0xFF
    if isinstance(ch, str):
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        return ord(ch) & 0xFF
    raise TypeError(f"expected a character or an integer code, got {type(ch).__name__}")


def is_bool(ch: str) -> bool:
    """True if ``ch`` is one of the flag characters Y, y, N or n."""
    return isinstance(ch, str) and len(ch) == 1 and ch in "YyNn"


def to_bool(ch: str) -> bool:
    """Interpret a flag character: Y or y is true, anything else false."""
    return isinstance(ch, str) and len(ch) == 1 and ch in "Yy"


def bool_char(flag: object) -> str:
    """Return ``"Y"`` for a truthy value and ``"N"`` otherwise."""
    truth = bool(flag)
    return _FLAG_CHARS[int(truth)]


def control(ch: str | int) -> int:
    """Return the control code produced by holding Ctrl with ``ch``."""
    return _char_code(ch) & 0x1F