"""Pytest configuration and fixtures for appimage-integration tests."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

DESKTOP_ENTRY_TEXT = """\
[Desktop Entry]
Type=Application
Name=Test App
Name[de]=Test Anwendung
Exec=test-app %U
Icon=test-app
Categories=Utility;
X-AppImage-Version=1.0.0
"""

AppDirFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("appimage_integration"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


def write_png(path: Path, size: int, color=(200, 30, 30, 255)) -> Path:
    """Write a solid square PNG of ``size`` pixels."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (size, size), color).save(path, "PNG")
    return path


@pytest.fixture
def make_app_dir(tmp_path: Path) -> AppDirFactory:
    """Build AppDir trees on disk.

    The default tree holds a root desktop entry, 128px and 256px themed
    icons, an executable and a relative ``.DirIcon`` link to the large
    icon.
    """

    def _make(
        name: str = "TestApp.AppDir",
        desktop_text: str | None = DESKTOP_ENTRY_TEXT,
        themed_icons: bool = True,
        dir_icon: bool = True,
    ) -> Path:
        root = tmp_path / name
        root.mkdir()

        if desktop_text is not None:
            (root / "test-app.desktop").write_text(desktop_text)

        binary = root / "usr" / "bin" / "test-app"
        binary.parent.mkdir(parents=True)
        binary.write_text("#!/bin/sh\n")

        icon_dir = root / "usr" / "share" / "icons" / "hicolor"
        large_icon = icon_dir / "256x256" / "apps" / "test-app.png"
        if themed_icons:
            write_png(icon_dir / "128x128" / "apps" / "test-app.png", 128)
            write_png(large_icon, 256)
        else:
            write_png(root / "icon-source.png", 64)

        if dir_icon:
            target = (
                "usr/share/icons/hicolor/256x256/apps/test-app.png"
                if themed_icons
                else "icon-source.png"
            )
            (root / ".DirIcon").symlink_to(target)

        return root

    return _make


@pytest.fixture
def app_dir(make_app_dir: AppDirFactory) -> Path:
    """Default AppDir tree."""
    return make_app_dir()


@pytest.fixture
def data_home(tmp_path: Path) -> Path:
    """Empty XDG data home."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def cache_home(tmp_path: Path) -> Path:
    """Empty XDG cache home."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def make_png() -> Callable[..., Path]:
    """Expose :func:`write_png` to tests."""
    return write_png
