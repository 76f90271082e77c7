"""Tests for ResourcesExtractor."""

import io
from collections.abc import Iterator
from pathlib import Path

import pytest

from appimage_integration.exceptions import EntryFormatError, NotFoundError
from appimage_integration.payload import (
    AppDir,
    PayloadEntry,
    PayloadEntryType,
    ResourcesExtractor,
)


class InMemoryPackage:
    """Archive-like package counting how often its payload is enumerated."""

    def __init__(self, files: dict[str, bytes], links: dict[str, str]) -> None:
        self.file_data = files
        self.links = links
        self.enumerations = 0

    def get_path(self) -> Path:
        return Path("/virtual/app.AppImage")

    def files(self) -> Iterator[PayloadEntry]:
        self.enumerations += 1
        directories = sorted(
            {
                str(Path(path).parent)
                for path in [*self.file_data, *self.links]
                if "/" in path
            }
        )
        for directory in directories:
            yield PayloadEntry(directory, PayloadEntryType.DIRECTORY)
        for path, data in self.file_data.items():
            yield PayloadEntry(
                path,
                PayloadEntryType.FILE,
                opener=lambda data=data: io.BytesIO(data),
            )
        for path, target in self.links.items():
            yield PayloadEntry(path, PayloadEntryType.SYMLINK, link_target=target)


@pytest.fixture
def package() -> InMemoryPackage:
    return InMemoryPackage(
        files={
            "app.desktop": b"[Desktop Entry]\nName=App\n",
            "usr/share/icons/hicolor/32x32/apps/app.png": b"small",
            "usr/share/icons/hicolor/64x64/apps/app.png": b"large",
            "usr/share/mime/packages/app.xml": b"<mime-info/>",
            "usr/share/mime/packages/.xml": b"",
            "usr/share/mime/packages/readme.txt": b"",
            "usr/share/doc/app/app.desktop": b"nested",
            "broken.txt": b"\xff\xfe\xfa",
        },
        links={
            ".DirIcon": "usr/share/icons/hicolor/64x64/apps/app.png",
            "usr/share/pixmaps/app.png": "../icons/hicolor/32x32/apps/app.png",
            "absolute-link": "/usr/share/icons/hicolor/32x32/apps/app.png",
            "chained": ".DirIcon",
            "loop-a": "loop-b",
            "loop-b": "loop-a",
            "dangling": "usr/share/missing.png",
        },
    )


@pytest.fixture
def extractor(package) -> ResourcesExtractor:
    return ResourcesExtractor(package)


def test_desktop_entry_path_is_root_file(extractor):
    assert extractor.get_desktop_entry_path() == "app.desktop"


def test_desktop_entry_path_missing():
    package = InMemoryPackage({"usr/share/app.desktop": b""}, {})

    assert ResourcesExtractor(package).get_desktop_entry_path() is None


def test_icon_file_paths(extractor):
    paths = extractor.get_icon_file_paths("app")

    assert sorted(paths) == [
        "usr/share/icons/hicolor/32x32/apps/app.png",
        "usr/share/icons/hicolor/64x64/apps/app.png",
    ]
    assert extractor.get_icon_file_paths("other") == []


def test_mime_type_packages_paths(extractor):
    assert extractor.get_mime_type_packages_paths() == [
        "usr/share/mime/packages/app.xml"
    ]


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (".DirIcon", b"large"),
        ("usr/share/pixmaps/app.png", b"small"),
        ("absolute-link", b"small"),
        ("chained", b"large"),
    ],
)
def test_extract_follows_links(extractor, path, expected):
    assert extractor.extract(path) == expected


def test_extract_many_keeps_requested_keys(extractor):
    result = extractor.extract_many(
        [".DirIcon", "usr/share/icons/hicolor/64x64/apps/app.png", "app.desktop"]
    )

    assert result == {
        ".DirIcon": b"large",
        "usr/share/icons/hicolor/64x64/apps/app.png": b"large",
        "app.desktop": b"[Desktop Entry]\nName=App\n",
    }


def test_extraction_uses_one_enumeration_pass(package, extractor):
    extractor.entries()
    package.enumerations = 0

    extractor.extract_many([".DirIcon", "app.desktop", "chained"])

    assert package.enumerations == 1


def test_index_is_built_once(package, extractor):
    extractor.get_desktop_entry_path()
    extractor.get_icon_file_paths("app")
    extractor.resolve(".DirIcon")

    assert package.enumerations == 1


def test_extract_missing_lists_every_path(extractor):
    with pytest.raises(NotFoundError) as exc_info:
        extractor.extract_many(["app.desktop", "nope.png", "dangling"])

    assert "nope.png" in str(exc_info.value)
    assert "dangling" in str(exc_info.value)
    assert "app.desktop" not in exc_info.value.message


def test_extract_directory_is_not_found(extractor):
    with pytest.raises(NotFoundError):
        extractor.extract("usr/share/mime/packages")


def test_link_loop_is_not_found(extractor):
    with pytest.raises(NotFoundError):
        extractor.extract("loop-a")


def test_extract_text(extractor):
    assert extractor.extract_text("app.desktop").startswith("[Desktop Entry]")


def test_extract_text_drops_byte_order_mark():
    package = InMemoryPackage(
        {"app.desktop": b"\xef\xbb\xbf[Desktop Entry]\nName=App\n"}, {}
    )

    text = ResourcesExtractor(package).extract_text("app.desktop")

    assert text == "[Desktop Entry]\nName=App\n"


def test_extract_text_rejects_invalid_utf8(extractor):
    with pytest.raises(EntryFormatError):
        extractor.extract_text("broken.txt")


def test_extract_to_creates_parents(extractor, tmp_path):
    icon_target = tmp_path / "out" / "deep" / "icon.png"
    desktop_target = tmp_path / "out" / "app.desktop"

    extractor.extract_to({".DirIcon": icon_target, "app.desktop": desktop_target})

    assert icon_target.read_bytes() == b"large"
    assert desktop_target.read_bytes().startswith(b"[Desktop Entry]")


def test_extract_to_same_source_twice(extractor, tmp_path):
    extractor.extract_to(
        {
            ".DirIcon": tmp_path / "a.png",
            "chained": tmp_path / "b.png",
        }
    )

    assert (tmp_path / "a.png").read_bytes() == b"large"
    assert (tmp_path / "b.png").read_bytes() == b"large"


def test_app_dir_symlink_extraction(app_dir):
    extractor = ResourcesExtractor(AppDir(app_dir))
    large_icon = app_dir / "usr/share/icons/hicolor/256x256/apps/test-app.png"

    assert extractor.entries()[".DirIcon"] is PayloadEntryType.SYMLINK
    assert extractor.extract(".DirIcon") == large_icon.read_bytes()
    assert extractor.get_desktop_entry_path() == "test-app.desktop"
