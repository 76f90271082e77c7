"""Tests for AppDir and DirectoryPayload."""

import os

import pytest

from appimage_integration.exceptions import InvalidParameterError
from appimage_integration.payload import (
    AppDir,
    DirectoryPayload,
    Package,
    PayloadEntryType,
)


def test_app_dir_requires_directory(tmp_path):
    with pytest.raises(InvalidParameterError):
        AppDir(tmp_path / "missing")


def test_app_dir_is_a_package(app_dir):
    package = AppDir(app_dir)

    assert isinstance(package, Package)
    assert package.get_path() == app_dir


def test_directory_payload_reports_types(app_dir):
    entries = {entry.path: entry for entry in DirectoryPayload(app_dir).entries()}

    assert entries["usr"].type is PayloadEntryType.DIRECTORY
    assert entries["usr/bin/test-app"].type is PayloadEntryType.FILE
    assert entries[".DirIcon"].type is PayloadEntryType.SYMLINK
    assert entries[".DirIcon"].link_target == (
        "usr/share/icons/hicolor/256x256/apps/test-app.png"
    )
    assert entries[".DirIcon"].read() == b""
    assert entries["usr/bin/test-app"].read() == b"#!/bin/sh\n"


def test_directory_payload_does_not_follow_directory_links(tmp_path):
    (tmp_path / "real").mkdir()
    (tmp_path / "real" / "file").write_text("x")
    os.symlink("real", tmp_path / "alias")

    paths = [entry.path for entry in DirectoryPayload(tmp_path).entries()]

    assert paths.count("real/file") == 1
    assert "alias/file" not in paths
    assert "alias" in paths


def test_entry_type_from_mode(tmp_path):
    fifo = tmp_path / "fifo"
    os.mkfifo(fifo)

    assert PayloadEntryType.from_mode(fifo.lstat().st_mode) is (
        PayloadEntryType.FIFO
    )
    assert PayloadEntryType.from_mode(0) is PayloadEntryType.UNKNOWN
