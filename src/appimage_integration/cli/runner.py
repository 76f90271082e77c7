"""CLI runner for appimage-integration.

Orchestrates the execution of CLI commands by routing parsed
arguments to the integration manager.
"""

from argparse import Namespace
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from appimage_integration import __version__
from appimage_integration.config import Settings, SettingsManager
from appimage_integration.exceptions import IntegrationError
from appimage_integration.integration import IntegrationManager
from appimage_integration.logger import ConfigurationError, get_logger
from appimage_integration.logger.config import configure_from_settings
from appimage_integration.payload import AppDir, AppImage, Package

from .parser import CLIParser

logger = get_logger(__name__)


@contextmanager
def open_package(path: Path) -> Iterator[Package]:
    """Open ``path`` as an AppDir or an AppImage.

    Raises:
        EntryFormatError: If a file is not a recognised AppImage
        OSError: If the path cannot be read

    """
    if path.is_dir():
        yield AppDir(path)
        return
    with AppImage(path) as app_image:
        yield app_image


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(self, settings_manager: SettingsManager | None = None) -> None:
        """Initialize the runner.

        Args:
            settings_manager: Settings source, defaults to the user config

        """
        self.settings_manager = settings_manager or SettingsManager()

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Run the CLI application.

        Args:
            argv: Arguments to parse, defaults to ``sys.argv[1:]``

        Returns:
            Process exit code: 0 on success, 1 on any failure

        """
        args = CLIParser().parse_args(argv)

        if args.version:
            print(__version__)
            return 0

        if not args.command:
            print("❌ No command specified. Use --help.")
            return 1

        try:
            settings = self._load_settings(args)
            configure_from_settings(settings, verbose=args.verbose)
            manager = IntegrationManager.from_settings(settings)
        except (ConfigurationError, IntegrationError, OSError) as e:
            logger.error("Setup failed: %s", e)
            print(f"❌ {e}")
            return 1

        handlers: dict[str, Callable[[IntegrationManager, Path], None]] = {
            "register": self._register,
            "unregister": self._unregister,
            "status": self._status,
            "thumbnail": self._thumbnail,
        }
        handler = handlers[args.command]

        failed = 0
        for path in args.paths:
            try:
                handler(manager, path)
            except (IntegrationError, OSError) as e:
                failed += 1
                logger.error("%s %s failed: %s", args.command, path, e)
                print(f"❌ {path}: {e}")

        return 1 if failed else 0

    def _load_settings(self, args: Namespace) -> Settings:
        """Load settings and apply command-line overrides."""
        settings = self.settings_manager.load_settings()
        if args.data_home:
            settings["directory"]["data_home"] = args.data_home.expanduser()
        if args.cache_home:
            settings["directory"]["cache_home"] = args.cache_home.expanduser()
        if args.no_thumbnails:
            settings["thumbnails"]["enabled"] = False
        return settings

    def _register(self, manager: IntegrationManager, path: Path) -> None:
        with open_package(path) as package:
            if not manager.should_register(package):
                print(f"⏭️  {path}: skipped, integration not requested")
                return
            manager.register(package)
            if manager.thumbnailer is not None:
                manager.generate_thumbnails(package)
        print(f"✅ {path}: registered")

    def _unregister(self, manager: IntegrationManager, path: Path) -> None:
        manager.unregister(path)
        print(f"✅ {path}: unregistered")

    def _status(self, manager: IntegrationManager, path: Path) -> None:
        state = "registered" if manager.is_registered(path) else "not registered"
        print(f"{path}: {state}")

    def _thumbnail(self, manager: IntegrationManager, path: Path) -> None:
        with open_package(path) as package:
            written = manager.generate_thumbnails(package)
        print(f"✅ {path}: {len(written)} thumbnails")
