"""Tests for the DesktopEntry model."""

import pytest

from appimage_integration.desktop_entry import (
    DesktopEntry,
    parse_bool,
    split_key_path,
)

SAMPLE = """\
# leading comment
[Desktop Entry]
Name=Test App
Exec=test-app %U

Icon=test-app
Actions=new-window;

[Desktop Action new-window]
Name=New Window
Exec=test-app --new-window
"""


def test_set_then_get_and_exists():
    entry = DesktopEntry()
    entry.set("Group/Key", "value")

    assert entry.get("Group/Key") == "value"
    assert entry.exists("Group/Key")


def test_get_unset_path_returns_empty_string():
    entry = DesktopEntry.parse(SAMPLE)

    assert entry.get("Desktop Entry/Missing") == ""
    assert entry.get("No Group/Key") == ""
    assert not entry.exists("Desktop Entry/Missing")


def test_exists_distinguishes_empty_from_absent():
    entry = DesktopEntry.parse("[G]\nEmpty=\n")

    assert entry.exists("G/Empty")
    assert entry.get("G/Empty") == ""


def test_parse_skips_comments_and_blank_lines():
    entry = DesktopEntry.parse(SAMPLE)

    assert entry.groups() == ["Desktop Entry", "Desktop Action new-window"]
    assert entry.get("Desktop Entry/Icon") == "test-app"
    assert entry.get("Desktop Action new-window/Exec") == (
        "test-app --new-window"
    )


def test_parse_ignores_lines_without_separator():
    entry = DesktopEntry.parse("[G]\nnot a key value line\nKey=v\n")

    assert entry.paths() == ["G/Key"]


def test_parse_keeps_value_separators_after_first():
    entry = DesktopEntry.parse("[G]\nExec=env A=B app\n")

    assert entry.get("G/Exec") == "env A=B app"


def test_parse_trims_whitespace_and_keeps_escapes():
    entry = DesktopEntry.parse("[G]\n Comment =  a\\sb\\;c  \n")

    assert entry.get("G/Comment") == "a\\sb\\;c"
    assert "Comment=a\\sb\\;c\n" in entry.to_text()


def test_lines_before_header_belong_to_unnamed_group():
    entry = DesktopEntry.parse("Stray=1\n[G]\nKey=2\n")

    assert entry.get("/Stray") == "1"
    assert entry.get("G/Key") == "2"


def test_to_text_emits_headers_and_keys():
    entry = DesktopEntry()
    entry.set("Desktop Entry/Name", "App")
    entry.set("Desktop Entry/Exec", "app")

    assert entry.to_text() == "[Desktop Entry]\nName=App\nExec=app\n"
    assert str(entry) == entry.to_text()


def test_to_text_writes_unnamed_group_first():
    entry = DesktopEntry()
    entry.set("G/Key", "2")
    entry.set("/Stray", "1")

    text = entry.to_text()

    assert text.startswith("Stray=1\n")
    assert DesktopEntry.parse(text) == entry


@pytest.mark.parametrize(
    "text",
    [
        SAMPLE,
        "Stray=1\n[G]\nKey=2\n",
        "[A]\nName[de]=Ä Ö\n[B]\nExec=\"quoted arg\" x\\sy\n",
        "",
    ],
)
def test_round_trip_preserves_contents(text):
    first = DesktopEntry.parse(text)
    second = DesktopEntry.parse(first.to_text())

    assert second == first
    assert dict(second.items()) == dict(first.items())


def test_equality_ignores_order():
    first = DesktopEntry.parse("[A]\nX=1\nY=2\n[B]\nZ=3\n")
    second = DesktopEntry.parse("[B]\nZ=3\n[A]\nY=2\nX=1\n")

    assert first == second


def test_remove_deletes_key_only():
    entry = DesktopEntry.parse(SAMPLE)
    entry.remove("Desktop Entry/Icon")
    entry.remove("Desktop Entry/Never")

    assert not entry.exists("Desktop Entry/Icon")
    assert "Desktop Entry" in entry.groups()


def test_copy_is_independent():
    entry = DesktopEntry.parse(SAMPLE)
    clone = entry.copy()
    clone.set("Desktop Entry/Name", "Changed")

    assert entry.get("Desktop Entry/Name") == "Test App"
    assert clone != entry


def test_split_key_path_uses_last_separator():
    assert split_key_path("Desktop Entry/Icon") == ("Desktop Entry", "Icon")
    assert split_key_path("G/a/b") == ("G/a", "b")
    assert split_key_path("/Stray") == ("", "Stray")
    assert split_key_path("G") == ("G", "")


def test_group_name_with_slash_round_trips():
    text = "[Desktop Entry]\nName=A\n\n[Desktop Action web/site]\nExec=b\n"
    entry = DesktopEntry.parse(text)

    assert entry.groups() == ["Desktop Entry", "Desktop Action web/site"]
    assert entry.get("Desktop Action web/site/Exec") == "b"
    assert "[Desktop Action web/site]\nExec=b\n" in entry.to_text()
    assert DesktopEntry.parse(entry.to_text()) == entry

    entry.set("Desktop Action web/site/Name", "Site")
    assert entry.groups() == ["Desktop Entry", "Desktop Action web/site"]


@pytest.mark.parametrize(
    ("value", "default", "expected"),
    [
        ("true", False, True),
        ("TRUE", False, True),
        (" false ", True, False),
        ("", True, True),
        ("", False, False),
        ("yes", False, False),
    ],
)
def test_parse_bool(value, default, expected):
    assert parse_bool(value, default) is expected
