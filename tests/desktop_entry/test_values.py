"""Tests for the Exec and list value grammars."""

import pytest

from appimage_integration.desktop_entry import ExecValue, StringsValue


def test_exec_value_round_trip():
    value = ExecValue.parse('test-app --arg1 "arg 2"')

    assert value.parts == ["test-app", "--arg1", "arg 2"]
    assert value.to_string() == 'test-app --arg1 "arg 2"'


@pytest.mark.parametrize(
    ("raw", "parts"),
    [
        ("app", ["app"]),
        ("  app   %U  ", ["app", "%U"]),
        (r"app arg\ with\ spaces", ["app", "arg with spaces"]),
        (r'app "say \"hi\""', ["app", 'say "hi"']),
        ('app ""', ["app", ""]),
        ("", []),
    ],
)
def test_exec_value_tokenizing(raw, parts):
    assert ExecValue.parse(raw).parts == parts


def test_exec_value_quotes_tokens_that_need_it():
    value = ExecValue(["/opt/My Apps/app", 'a"b', "c\\d", "", "%F"])

    assert value.to_string() == (
        '"/opt/My Apps/app" "a\\"b" "c\\\\d" "" %F'
    )
    assert ExecValue.parse(value.to_string()).parts == value.parts


def test_exec_value_indexing():
    value = ExecValue.parse("old-exec %U")
    value[0] = "/path/to/app.AppImage"

    assert value[0] == "/path/to/app.AppImage"
    assert len(value) == 2
    assert list(value) == ["/path/to/app.AppImage", "%U"]
    assert str(value) == "/path/to/app.AppImage %U"


def test_set_executable_on_empty_value_appends():
    value = ExecValue.parse("")
    value.set_executable("/path/to/app.AppImage")

    assert value.parts == ["/path/to/app.AppImage"]


def test_strings_value_parse():
    value = StringsValue.parse("action1;action2;action3")

    assert len(value) == 3
    for action in ("action1", "action2", "action3"):
        assert action in value
    assert "" not in value


def test_strings_value_drops_empty_segments_and_trims():
    value = StringsValue.parse(" a ; ;b;;")

    assert list(value) == ["a", "b"]
    assert value.to_string() == "a;b;"


def test_strings_value_empty():
    value = StringsValue.parse("")

    assert len(value) == 0
    assert str(value) == ""
