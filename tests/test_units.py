import pytest

from ccmenu.units import (
    END_OF_OPTIONS,
    MSG_BAD_END,
    MSG_BAD_RANGE,
    MSG_BAD_VALUE,
    MSG_NEED_ALPHA,
    MSG_NEEDS_VALUE,
    MSG_NO_VALUE,
    MSG_UNKNOWN_OPTION,
    UnitOptionParser,
    UnitsCheck,
    UnitsSpecError,
    UnitType,
    check_units_string,
)


def test_counts_options_and_units():
    opts = ["-asis", "-append=ohms"]
    units = ["k=3", "M=6"]
    result = check_units_string(",".join(opts + units) + " ")
    assert result == UnitsCheck(len(opts), len(units))


def test_unknown_option_reports_position():
    text = "-ncase,m=6,k=3 "
    with pytest.raises(UnitsSpecError) as info:
        check_units_string(text)
    assert info.value.message == MSG_UNKNOWN_OPTION
    assert info.value.offset == text.index(",")
    assert info.value.position == info.value.offset + 1


def test_error_keeps_counts_found_so_far():
    good = ["-asis", "k=3"]
    text = ",".join(good) + ",-bogus"
    with pytest.raises(UnitsSpecError) as info:
        check_units_string(text)
    assert info.value.option_count == 1
    assert info.value.unit_count == 1


def test_unit_values_and_plain_range():
    parser = UnitOptionParser("-append=ohms,k=3,M=6")
    items = list(parser)
    assert [o.type for o in items] == [UnitType.APPEND, UnitType.UNIT, UnitType.UNIT]
    assert items[0].value == "ohms"
    assert items[1].name == "k"
    assert items[1].expon == 3
    assert items[1].low == items[1].high == items[1].expon
    assert not items[1].has_range


def test_range_is_swapped_into_order():
    parser = UnitOptionParser("u=-3:-1/-5,m=3")
    unit = parser.next()
    assert unit.type is UnitType.UNIT
    assert unit.expon == -3
    assert unit.low == -5
    assert unit.high == -1
    assert unit.has_range
    assert parser.next().expon == 3


def test_range_must_be_followed_by_comma():
    parser = UnitOptionParser("u=-3:-1/-5")
    option = parser.next()
    assert option.type is UnitType.ERROR
    assert option.value == MSG_BAD_RANGE


def test_range_out_of_limits_is_rejected():
    with pytest.raises(UnitsSpecError) as info:
        check_units_string("u=1:-1000/5,k=3")
    assert info.value.message == MSG_BAD_RANGE


def test_bad_leading_character_offset():
    text = ",,  9m=3"
    with pytest.raises(UnitsSpecError) as info:
        check_units_string(text)
    assert info.value.offset == text.index("9")


def test_ucase_option_changes_following_units():
    parser = UnitOptionParser("-ucase,mm=6,-append=ohms")
    names = [(o.name, o.value) for o in parser]
    assert names == [("-ucase", ""), ("MM", "6"), ("-append", "OHMS")]
    assert parser.case == "U"


def test_lcase_then_asis():
    parser = UnitOptionParser("-lcase,MM=6,-asis,KK=3")
    names = [o.name for o in parser]
    assert names == ["-lcase", "mm", "-asis", "KK"]
    assert parser.case == "A"


def test_option_names_ignore_case():
    parser = UnitOptionParser("-ASIS,-Append=V")
    kinds = [o.type for o in parser]
    assert kinds == [UnitType.ASIS, UnitType.APPEND]


def test_case_setting_survives_reopen():
    parser = UnitOptionParser("-ucase")
    list(parser)
    parser.open("ab=2")
    assert parser.next().name == "AB"


def test_no_text_gives_end():
    parser = UnitOptionParser(None)
    option = parser.next()
    assert option.type is UnitType.NULL
    assert option.value == END_OF_OPTIONS
    assert parser.text == ""


def test_end_repeats_after_exhaustion():
    parser = UnitOptionParser("k=3")
    assert parser.next().type is UnitType.UNIT
    assert parser.next().type is UnitType.NULL
    assert parser.next().value == END_OF_OPTIONS


def test_iteration_raises_on_error():
    parser = UnitOptionParser("k=3,-nope")
    seen = []
    with pytest.raises(UnitsSpecError) as info:
        for option in parser:
            seen.append(option.name)
    assert seen == ["k"]
    assert info.value.message == MSG_UNKNOWN_OPTION


def test_empty_and_blank_text_are_valid():
    assert check_units_string("   ") == UnitsCheck(0, 0)
    assert check_units_string("") == UnitsCheck(0, 0)


def test_exponent_limits_accepted():
    parser = UnitOptionParser("a=-999,b=+999")
    values = [o.expon for o in parser]
    assert values == [-999, 999]


def test_reopen_resets_offset():
    parser = UnitOptionParser("k=3")
    list(parser)
    assert parser.offset == len("k=3")
    parser.open("m=6")
    assert parser.offset == 0
    assert parser.next().expon == 6