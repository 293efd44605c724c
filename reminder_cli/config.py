"""Configuration parser for the reminder CLI."""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class GeneralConfig:
    """General settings for the reminder CLI."""
    storage_file: str = "storeReminders.json"
    welcome_delay: float = 2.0  # seconds
    log_level: str = "WARNING"
    check_interval: float = 0.25  # seconds

    def __post_init__(self):
        if not isinstance(self.storage_file, str):
            raise ValueError("'storage_file' must be a string")
        if not self.storage_file.strip():
            raise ValueError("'storage_file' must not be empty")
        if self.welcome_delay < 0:
            raise ValueError("'welcome_delay' must not be negative")
        if self.check_interval <= 0:
            raise ValueError("'check_interval' must be positive")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, settings: dict) -> "GeneralConfig":
        """Create a GeneralConfig from a dictionary."""
        return cls(
            storage_file=settings.get("storage_file", "storeReminders.json"),
            welcome_delay=float(settings.get("welcome_delay", 2.0)),
            log_level=settings.get("log_level", "WARNING"),
            check_interval=float(settings.get("check_interval", 0.25)),
        )

    def storage_path(self, cwd: Optional[Path] = None) -> Path:
        """Resolve the storage file against the working directory."""
        base = Path(cwd) if cwd else Path.cwd()
        return (base / self.storage_file).resolve()


@dataclass
class SoundConfig:
    """Notification sound settings."""
    enabled: bool = True
    file: Optional[Path] = None  # None means the bundled sound

    def __post_init__(self):
        if not isinstance(self.enabled, bool):
            raise ValueError("'enabled' must be true or false")
        if isinstance(self.file, str):
            self.file = Path(self.file)

    @classmethod
    def from_dict(cls, settings: dict, config_dir: Path) -> "SoundConfig":
        """Create a SoundConfig, resolving the sound file against config_dir."""
        sound_file = settings.get("file")
        sound_path = None
        if sound_file:
            sound_path = Path(sound_file).expanduser()
            if not sound_path.is_absolute():
                sound_path = config_dir / sound_path
        return cls(enabled=settings.get("enabled", True), file=sound_path)


@dataclass
class CliConfig:
    """Everything the command interface needs, passed in at construction."""
    general: GeneralConfig = field(default_factory=GeneralConfig)
    sound: SoundConfig = field(default_factory=SoundConfig)
    config_dir: Optional[Path] = None


def parse_config_data(config_data: dict, config_dir: Path) -> CliConfig:
    """
    Parse configuration data into a CliConfig.

    Args:
        config_data: Raw parsed TOML data
        config_dir: Directory relative paths are resolved against

    Returns:
        The parsed CliConfig

    Raises:
        ValueError: If a section holds an invalid value
    """
    config = CliConfig(config_dir=config_dir)

    for name, settings in config_data.items():
        if not isinstance(settings, dict):
            logger.warning(f"Ignoring non-table config entry: {name}")
            continue

        if name == "general":
            config.general = GeneralConfig.from_dict(settings)
        elif name == "sound":
            config.sound = SoundConfig.from_dict(settings, config_dir)
        else:
            logger.warning(f"Ignoring unknown config section: [{name}]")

    if config.sound.file and not config.sound.file.exists():
        logger.warning(f"Sound file not found: {config.sound.file}")

    return config


def load_config_file(config_file: Path) -> dict:
    """Load and parse a TOML configuration file."""
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    with open(config_file, "rb") as f:
        return tomllib.load(f)


class ConfigManager:
    """Manages loading and parsing of the optional CLI configuration."""

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "reminder-cli"
    CONFIG_FILE = "config.toml"

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else self.DEFAULT_CONFIG_DIR
        self.config_file = self.config_dir / self.CONFIG_FILE
        self.config: CliConfig = CliConfig(config_dir=self.config_dir)

    def load_config(self) -> CliConfig:
        """
        Load the configuration file.

        A missing file means defaults. An unreadable or invalid file is
        logged and defaults are used as well.
        """
        try:
            config_data = load_config_file(self.config_file)
            self.config = parse_config_data(config_data, self.config_dir)
        except FileNotFoundError:
            logger.debug(f"No config file at {self.config_file}, using defaults")
            self.config = CliConfig(config_dir=self.config_dir)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Invalid config file {self.config_file}: {e}")
            self.config = CliConfig(config_dir=self.config_dir)
        return self.config

    def load_from_data(self, config_data: dict) -> CliConfig:
        """Load configuration from already-parsed data."""
        self.config = parse_config_data(config_data, self.config_dir)
        return self.config
