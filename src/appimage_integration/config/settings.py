"""Settings manager for the INI configuration file."""

import configparser
from pathlib import Path

from appimage_integration.config.paths import Paths, xdg_cache_home, xdg_data_home
from appimage_integration.config.types import (
    DirectorySettings,
    Settings,
    ThumbnailSettings,
)
from appimage_integration.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    KEY_CACHE_HOME,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_DATA_HOME,
    KEY_LOG_LEVEL,
    KEY_THUMBNAILS_ENABLED,
    KEY_VENDOR_PREFIX,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_THUMBNAILS,
    VENDOR_PREFIX,
)
from appimage_integration.logger import get_logger

logger = get_logger(__name__)

# Type alias for raw INI config dictionary
RawConfigDict = dict[str, str | dict[str, str]]

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_FILE_HEADER = """\
# appimage-integration settings
#
# [DEFAULT]   log levels and the vendor prefix used to namespace every
#             deployed desktop entry and icon file
# [directory] XDG base directories receiving the deployed artifacts
# [thumbnails] FreeDesktop thumbnail generation
"""


class SettingsManager:
    """Manages the global INI settings file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize settings manager.

        Args:
            config_dir: Configuration directory path
                (defaults to Paths.CONFIG_DIR)

        """
        self.config_dir = config_dir or Paths.CONFIG_DIR
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def get_default_settings(self) -> RawConfigDict:
        """Get default settings values.

        Returns:
            Default configuration dictionary

        """
        return {
            KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
            KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            KEY_VENDOR_PREFIX: VENDOR_PREFIX,
            SECTION_DIRECTORY: {
                KEY_DATA_HOME: str(xdg_data_home()),
                KEY_CACHE_HOME: str(xdg_cache_home()),
            },
            SECTION_THUMBNAILS: {KEY_THUMBNAILS_ENABLED: "true"},
        }

    def _create_parser(self, defaults: RawConfigDict) -> configparser.ConfigParser:
        """Create ConfigParser populated with defaults.

        Args:
            defaults: Default configuration values

        Returns:
            ConfigParser populated with defaults

        """
        config = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )

        flat_defaults = {
            key: str(value)
            for key, value in defaults.items()
            if not isinstance(value, dict)
        }
        config.read_dict({SECTION_DEFAULT: flat_defaults})

        for key, value in defaults.items():
            if isinstance(value, dict):
                config.add_section(key)
                for subkey, subvalue in value.items():
                    config.set(key, subkey, str(subvalue))

        return config

    def load_settings(self) -> Settings:
        """Load settings from the INI file, writing defaults if missing.

        Returns:
            Loaded settings

        """
        defaults = self.get_default_settings()
        config = self._create_parser(defaults)

        if self.settings_file.exists():
            try:
                config.read(self.settings_file, encoding="utf-8")
            except configparser.Error as e:
                logger.warning(
                    "Ignoring unreadable settings file %s: %s",
                    self.settings_file,
                    e,
                )
                config = self._create_parser(defaults)
        else:
            settings = self._convert_to_settings(config)
            self.save_settings(settings)
            return settings

        return self._convert_to_settings(config)

    def save_settings(self, settings: Settings) -> None:
        """Save settings to the INI file.

        Args:
            settings: Settings to save

        """
        self.config_dir.mkdir(parents=True, exist_ok=True)

        config = configparser.ConfigParser(interpolation=None)
        config.read_dict(
            {
                SECTION_DEFAULT: {
                    KEY_LOG_LEVEL: settings["log_level"],
                    KEY_CONSOLE_LOG_LEVEL: settings["console_log_level"],
                    KEY_VENDOR_PREFIX: settings["vendor_prefix"],
                },
                SECTION_DIRECTORY: {
                    KEY_DATA_HOME: str(settings["directory"]["data_home"]),
                    KEY_CACHE_HOME: str(settings["directory"]["cache_home"]),
                },
                SECTION_THUMBNAILS: {
                    KEY_THUMBNAILS_ENABLED: str(
                        settings["thumbnails"]["enabled"]
                    ).lower(),
                },
            }
        )

        with self.settings_file.open("w", encoding="utf-8") as f:
            f.write(_FILE_HEADER)
            f.write("\n")
            config.write(f)

        logger.debug("Settings saved to %s", self.settings_file)

    def _convert_to_settings(self, config: configparser.ConfigParser) -> Settings:
        """Convert ConfigParser to typed settings.

        Args:
            config: ConfigParser instance

        Returns:
            Typed settings

        """
        defaults = config.defaults()
        directory = config[SECTION_DIRECTORY]

        try:
            thumbnails_enabled = config.getboolean(
                SECTION_THUMBNAILS, KEY_THUMBNAILS_ENABLED
            )
        except ValueError:
            logger.warning(
                "Invalid [%s] %s value, thumbnails stay enabled",
                SECTION_THUMBNAILS,
                KEY_THUMBNAILS_ENABLED,
            )
            thumbnails_enabled = True

        return Settings(
            log_level=self._log_level(defaults[KEY_LOG_LEVEL], DEFAULT_LOG_LEVEL),
            console_log_level=self._log_level(
                defaults[KEY_CONSOLE_LOG_LEVEL], DEFAULT_CONSOLE_LOG_LEVEL
            ),
            vendor_prefix=defaults[KEY_VENDOR_PREFIX].strip() or VENDOR_PREFIX,
            directory=DirectorySettings(
                data_home=Paths.expand_path(directory[KEY_DATA_HOME]),
                cache_home=Paths.expand_path(directory[KEY_CACHE_HOME]),
            ),
            thumbnails=ThumbnailSettings(enabled=thumbnails_enabled),
        )

    @staticmethod
    def _log_level(value: str, default: str) -> str:
        level = value.strip().upper()
        if level in _VALID_LOG_LEVELS:
            return level
        logger.warning("Invalid log level %r, using %s", value, default)
        return default
