import io
import sys

import pytest

from ccmenu.demo import DemoState, build_demo_menu, main
from ccmenu.menu import DEFAULT_OPTIONS
from ccmenu.terminal import Attr, MenuOption


def test_build_demo_menu_items_and_title():
    menu = build_demo_menu(24, 80)
    names = [item.name for item in menu.items]
    assert len(names) == 30
    assert names[0] == "Apple"
    assert names[-1] == "TICase"
    assert "Cherry Tomato" in names
    assert menu.title == "A Test Menu"
    assert menu.title_attr == Attr.REVERSE
    assert (menu.y, menu.x) == (20, 12)
    assert menu.hidden


def test_demo_state_starts_shown_with_defaults():
    state = DemoState()
    assert not state.menu.hidden
    assert state.options == DEFAULT_OPTIONS
    assert state.formatted is False


def test_toggle_item_selectability():
    state = DemoState()
    assert state.menu.is_item_selectable("Catnip")
    state.apply("!Catnip")
    assert not state.menu.is_item_selectable("Catnip")
    state.apply("!Catnip")
    assert state.menu.is_item_selectable("Catnip")


def test_toggle_unknown_item_changes_nothing():
    state = DemoState()
    before = [item.selectable for item in state.menu.items]
    state.apply("!Nothing")
    assert [item.selectable for item in state.menu.items] == before


def test_tmulti_keeps_menu_and_flips_onevalue():
    state = DemoState()
    menu = state.menu
    state.apply("TMulti")
    assert state.menu is menu
    assert not state.options & MenuOption.ONEVALUE
    state.apply("TMulti")
    assert state.options & MenuOption.ONEVALUE


def test_tdesc_rebuilds_menu_with_options():
    state = DemoState()
    old = state.menu
    state.apply("TDesc")
    assert state.menu is not old
    assert not state.menu.hidden
    assert not state.menu.options & MenuOption.SHOWDESC
    assert state.options == state.menu.options


def test_trmajor_rebuilds_and_flips_row_major():
    state = DemoState()
    state.apply("TRMajor")
    assert not state.menu.options & MenuOption.ROWMAJOR
    assert not state.menu.hidden


def test_tformat_limits_grid():
    state = DemoState()
    state.apply("TFormat")
    assert state.formatted
    geometry = state.menu.geometry()
    assert 1 <= geometry.format_rows <= 4
    assert 1 <= geometry.format_cols <= 5
    state.apply("TFormat")
    assert not state.formatted


def test_prefix_match_is_case_insensitive():
    state = DemoState()
    state.apply("ticase")
    assert state.options == DEFAULT_OPTIONS ^ MenuOption.IGNORECASE
    assert state.menu.options == state.options


def test_ordinary_selection_leaves_state():
    state = DemoState()
    menu = state.menu
    state.apply("Apple")
    assert state.menu is menu
    assert state.options == DEFAULT_OPTIONS


def test_main_scripted_selection(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("ENTER\nESC\n"))
    assert main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "selected: Apple"
    assert out[1] == "options: 0x002F"
    assert len(out) == 2


def test_main_pattern_search_selection(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("!\nENTER\n.\n"))
    assert main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "selected: !Catnip"


def test_main_rejects_unknown_key(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("NOSUCHKEY\n"))
    assert main([]) == 2
    assert "NOSUCHKEY" in capsys.readouterr().err


@pytest.mark.parametrize("escape", ["ESC", "^G", "^O", "."])
def test_main_escape_keys_end_without_output(monkeypatch, capsys, escape):
    monkeypatch.setattr(sys, "stdin", io.StringIO(escape + "\nENTER\n"))
    assert main([]) == 0
    assert capsys.readouterr().out == ""