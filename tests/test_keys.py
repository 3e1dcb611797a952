import pytest

from horseman.utils.keys import key_name, parse_modifiers


@pytest.mark.parametrize("key,expected", [
    ("Enter", "Enter"),
    ("a", "a"),
    (16777220, "Enter"),
    (16777216, "Escape"),
    (16777264, "F1"),
    (16777275, "F12"),
    (65, "A"),
])
def test_key_name(key, expected):
    assert key_name(key) == expected


def test_modifier_bitmask():
    assert parse_modifiers(0x02000000 | 0x08000000) == ["Shift", "Alt"]
    assert parse_modifiers(0x04000000 | 0x10000000) == ["Control", "Meta"]


def test_modifier_string():
    assert parse_modifiers("shift+ctrl") == ["Shift", "Control"]
    assert parse_modifiers("Alt + cmd") == ["Alt", "Meta"]
    assert parse_modifiers("keypad+shift") == ["Shift"]


def test_no_modifiers():
    assert parse_modifiers(None) == []
    assert parse_modifiers(0) == []
    assert parse_modifiers("") == []
