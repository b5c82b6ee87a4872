"""Parser for unit specification strings such as ``"-asis,-append=ohms,k=3,M=6"``.

A specification is a comma separated list of entries. An entry is either an
option (``-name`` or ``-name=value``) or a unit (``name=exponent`` or
``name=exponent:low/high``), where exponents are signed integers in the
range -999 to 999.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from ccmenu.constants import MAXIMUM_EE, MINIMUM_EE

END_OF_OPTIONS = "End of options."

MSG_NEED_ALPHA = "ERROR: Bad format- need alpha or '-'."
MSG_BAD_END = "ERROR: Bad foramt- not at end, or ','."
MSG_BAD_RANGE = "ERROR: Bad format- exponent range."
MSG_UNKNOWN_OPTION = "ERROR: Unknown option name."
MSG_NEEDS_VALUE = "ERROR: Option requires a value."
MSG_NO_VALUE = "ERROR: Option does not take a value."
MSG_BAD_VALUE = "ERROR: Bad value or range of value."

_INTEGER = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")


class UnitType(Enum):
    """Kind of entry produced by the parser."""

    NULL = "null"
    ERROR = "error"
    APPEND = "append"
    ASIS = "asis"
    UCASE = "ucase"
    LCASE = "lcase"
    UNIT = "unit"


_OPTION_NAMES = {
    "-append": UnitType.APPEND,
    "-asis": UnitType.ASIS,
    "-ucase": UnitType.UCASE,
    "-lcase": UnitType.LCASE,
}

_CASE_OF_OPTION = {
    UnitType.ASIS: "A",
    UnitType.UCASE: "U",
    UnitType.LCASE: "L",
}


@dataclass(frozen=True)
class UnitOption:
    """One parsed entry; for errors ``value`` holds the message."""

    type: UnitType
    name: str = ""
    value: str = ""
    expon: int = 0
    low: int = 0
    high: int = 0
    has_range: bool = False

    @property
    def is_option(self) -> bool:
        """True for the dash-prefixed options."""
        return self.type in (UnitType.APPEND, UnitType.ASIS, UnitType.UCASE, UnitType.LCASE)


class UnitsSpecError(ValueError):
    """A unit specification string could not be parsed."""

    def __init__(self, message: str, offset: int, option_count: int = 0, unit_count: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.option_count = option_count
        self.unit_count = unit_count

    @property
    def position(self) -> int:
        """The 1-based position in the text where the error was found."""
        return self.offset + 1


@dataclass(frozen=True)
class UnitsCheck:
    """Counts of options and units found in a valid specification."""

    option_count: int
    unit_count: int


def _ascii_upper(text: str) -> str:
    return "".join(c.upper() if c.isascii() else c for c in text)


def _ascii_lower(text: str) -> str:
    return "".join(c.lower() if c.isascii() else c for c in text)


def _is_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _extract_exponent(text: str, pos: int) -> tuple[int, int] | None:
    """Read a signed exponent at ``pos``; return (value, next position) or None."""
    end = len(text)
    if pos >= end:
        return None
    start = pos
    if text[pos] in "+-":
        pos += 1
    digits_start = pos
    while pos < end and _is_digit(text[pos]):
        pos += 1
    if pos == digits_start:
        return None
    value = int(text[start:pos])
    if not MINIMUM_EE <= value <= MAXIMUM_EE:
        return None
    return value, pos


class UnitOptionParser:
    """Step through the entries of a unit specification string.

    The letter case setting ('A' as is, 'U' upper, 'L' lower) changes as
    case options are met and is kept when new text is opened.
    """

    def __init__(self, text: str | None = None) -> None:
        self._text: str | None = None
        self._offset = 0
        self._case = "A"
        self.open(text)

    @property
    def text(self) -> str:
        """The text being parsed, or an empty string when none is open."""
        return self._text if self._text is not None else ""

    @property
    def offset(self) -> int:
        """Current 0-based position within the text."""
        return self._offset

    @property
    def case(self) -> str:
        """Current case setting: 'A', 'U' or 'L'."""
        return self._case

    def open(self, text: str | None) -> UnitOptionParser:
        """Start parsing ``text`` from its beginning; None means no text."""
        self._text = text
        self._offset = 0
        return self

    def next(self) -> UnitOption:
        """Parse the next entry; a NULL entry marks the end of the text."""
        if self._text is None:
            return UnitOption(UnitType.NULL, value=END_OF_OPTIONS)
        return self._parse(self._text)

    def __iter__(self) -> Iterator[UnitOption]:
        """Yield each entry; raise :class:`UnitsSpecError` on a bad one."""
        while True:
            option = self.next()
            if option.type is UnitType.NULL:
                return
            if option.type is UnitType.ERROR:
                raise UnitsSpecError(option.value, self._offset)
            yield option

    def _parse(self, text: str) -> UnitOption:
        end = len(text)
        pos = self._offset
        while pos < end and text[pos] in " ,":
            pos += 1
        if pos >= end:
            return UnitOption(UnitType.NULL, value=END_OF_OPTIONS)

        first = text[pos]
        is_opt = first == "-"
        if not (is_opt or _is_alpha(first)):
            self._offset = pos
            return UnitOption(UnitType.ERROR, value=MSG_NEED_ALPHA)
        if is_opt:
            pos += 1

        start = pos
        while pos < end and _is_alnum(text[pos]):
            pos += 1
        name = ("-" if is_opt else "") + text[start:pos]

        value = ""
        have_eq = False
        if pos < end and text[pos] == "=":
            have_eq = True
            pos += 1
            start = pos
            while pos < end and text[pos] not in ",:\0":
                pos += 1
            value = text[start:pos]

        self._offset = pos

        if pos < end and not (text[pos] == "," or (not is_opt and text[pos] == ":")):
            return UnitOption(UnitType.ERROR, name=name, value=MSG_BAD_END)

        has_range = False
        low = high = 0
        if pos < end and text[pos] == ":":
            parsed = _extract_exponent(text, pos + 1)
            if parsed is None or parsed[1] >= end or text[parsed[1]] != "/":
                return UnitOption(UnitType.ERROR, name=name, value=MSG_BAD_RANGE)
            low, pos = parsed
            parsed = _extract_exponent(text, pos + 1)
            if parsed is None or parsed[1] >= end or text[parsed[1]] != ",":
                return UnitOption(UnitType.ERROR, name=name, value=MSG_BAD_RANGE)
            high, pos = parsed
            if low > high:
                low, high = high, low
            has_range = True
            self._offset = pos

        if self._case == "U":
            if not is_opt:
                name = _ascii_upper(name)
            value = _ascii_upper(value)
        elif self._case == "L":
            if not is_opt:
                name = _ascii_lower(name)
            value = _ascii_lower(value)

        if is_opt:
            return self._option(name, value, have_eq)
        return self._unit(name, value, has_range, low, high)

    def _option(self, name: str, value: str, have_eq: bool) -> UnitOption:
        utype = _OPTION_NAMES.get(_ascii_lower(name))
        if utype is None:
            return UnitOption(UnitType.ERROR, name=name, value=MSG_UNKNOWN_OPTION)
        if utype in _CASE_OF_OPTION:
            self._case = _CASE_OF_OPTION[utype]
        if utype is UnitType.APPEND:
            if not value:
                return UnitOption(UnitType.ERROR, name=name, value=MSG_NEEDS_VALUE)
        elif value or have_eq:
            return UnitOption(UnitType.ERROR, name=name, value=MSG_NO_VALUE)
        return UnitOption(utype, name=name, value=value)

    @staticmethod
    def _unit(name: str, value: str, has_range: bool, low: int, high: int) -> UnitOption:
        if not _INTEGER.fullmatch(value):
            return UnitOption(UnitType.ERROR, name=name, value=MSG_BAD_VALUE)
        expon = int(value)
        if not MINIMUM_EE <= expon <= MAXIMUM_EE:
            return UnitOption(UnitType.ERROR, name=name, value=MSG_BAD_VALUE)
        if not has_range:
            low = high = expon
        return UnitOption(
            UnitType.UNIT,
            name=name,
            value=value,
            expon=expon,
            low=low,
            high=high,
            has_range=has_range,
        )


def check_units_string(text: str) -> UnitsCheck:
    """Validate a specification, returning counts of options and units.

    Trailing blanks are ignored. On a bad entry :class:`UnitsSpecError` is
    raised, carrying the message, the offset and the counts found so far.
    """
    parser = UnitOptionParser(text.rstrip(" "))
    option_count = 0
    unit_count = 0
    while True:
        option = parser.next()
        if option.type is UnitType.NULL:
            break
        if option.type is UnitType.ERROR:
            raise UnitsSpecError(option.value, parser.offset, option_count, unit_count)
        if option.type is UnitType.UNIT:
            unit_count += 1
        else:
            option_count += 1
    return UnitsCheck(option_count, unit_count)