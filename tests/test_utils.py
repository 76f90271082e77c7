"""Tests for hashing and sanitizing helpers."""

import hashlib
import os

import pytest

from appimage_integration.exceptions import InvalidParameterError
from appimage_integration.utils import canonical_path, hash_path, sanitize_for_path


def test_hash_path_is_md5_of_file_uri(tmp_path):
    path = tmp_path / "app.AppImage"
    expected = hashlib.md5(path.resolve().as_uri().encode()).hexdigest()

    assert hash_path(path) == expected
    assert len(hash_path(path)) == 32


def test_hash_path_is_stable_for_equivalent_paths(tmp_path, monkeypatch):
    path = tmp_path / "app.AppImage"
    path.write_text("")
    link = tmp_path / "link.AppImage"
    link.symlink_to(path)
    monkeypatch.chdir(tmp_path)

    assert hash_path("app.AppImage") == hash_path(path)
    assert hash_path(str(tmp_path / "sub" / ".." / "app.AppImage")) == (
        hash_path(path)
    )
    assert hash_path(link) == hash_path(path)


def test_hash_path_differs_between_paths(tmp_path):
    assert hash_path(tmp_path / "a") != hash_path(tmp_path / "b")


def test_hash_path_rejects_empty():
    with pytest.raises(InvalidParameterError):
        hash_path("")


def test_canonical_path_expands_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))

    assert canonical_path("~/app.AppImage") == (
        tmp_path.resolve() / "app.AppImage"
    )
    assert os.path.isabs(canonical_path("relative"))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Test App", "Test_App"),
        ("My App (1.0)", "My_App__1.0_"),
        ("../../etc/passwd", "_._.._etc_passwd"),
        (".hidden", "_hidden"),
        ("safe-name_1.2", "safe-name_1.2"),
        ("", ""),
    ],
)
def test_sanitize_for_path(value, expected):
    assert sanitize_for_path(value) == expected
