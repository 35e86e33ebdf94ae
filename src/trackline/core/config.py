"""
Configuration management for trackline
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class DisplayConfig:
    """Display templates used to render songs."""

    song_format: str = "{%a - }%t"
    playlist_format: str = "{%a - }%t {(%l)|}"
    library_format: str = "%A"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # default: ~/.local/share/trackline/trackline.log
    rotation: str = "10 MB"
    retention: int = 5
    console_output: bool = False

    def validate(self) -> None:
        """Validate logging configuration values.

        Raises:
            ValueError: If the log level is not a loguru level name
        """
        if self.level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.level}. "
                f"Valid levels are: {sorted(VALID_LOG_LEVELS)}"
            )


@dataclass
class Config:
    """Main configuration object."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "trackline"
    return Path.home() / ".config" / "trackline"


def get_config_path() -> Path:
    """Get the main configuration file path.

    A config.toml in the current working directory wins over the one in
    XDG_CONFIG_HOME/trackline (or ~/.config/trackline).
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config
    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "trackline"
    return Path.home() / ".local" / "share" / "trackline"


def get_log_file_path(config: Config) -> Path:
    """Get the log file path, honouring a custom logging.log_file."""
    if config.logging.log_file:
        return Path(config.logging.log_file).expanduser()
    return get_data_dir() / "trackline.log"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# trackline configuration

[display]
# Templates: %a artist, %A artist sorted ("Beatles, The"), %b album,
# %B album sorted, %t title, %n track, %l duration, %f file, %% percent.
# {...} renders only if every field inside it is known; | switches to
# the fallback branch; \\ escapes the next character.
song_format = "{%a - }%t"
playlist_format = "{%a - }%t {(%l)|}"
library_format = "%A"

[logging]
# Log level (TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/trackline/trackline.log)
# log_file = "/path/to/custom/trackline.log"

# Rotate the log file at this size
rotation = "10 MB"

# Number of rotated log files to keep
retention = 5

# Also output logs to stderr (useful for debugging)
console_output = false
""".strip()


def _apply_env_overrides(config: Config) -> Config:
    song_format = os.environ.get("TRACKLINE_SONG_FORMAT")
    log_level = os.environ.get("TRACKLINE_LOG_LEVEL")

    if song_format:
        config.display.song_format = song_format
    if log_level:
        config.logging.level = log_level.upper()
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - TRACKLINE_SONG_FORMAT
    - TRACKLINE_LOG_LEVEL
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        logger.info(f"Created default configuration at: {config_path}")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        logger.warning("Using default configuration.")
        return _apply_env_overrides(Config())

    config = Config()

    if "display" in toml_data:
        display_data = toml_data["display"]
        config.display = DisplayConfig(
            song_format=display_data.get("song_format", config.display.song_format),
            playlist_format=display_data.get(
                "playlist_format", config.display.playlist_format
            ),
            library_format=display_data.get(
                "library_format", config.display.library_format
            ),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=str(logging_data.get("level", config.logging.level)).upper(),
            log_file=log_file,
            rotation=logging_data.get("rotation", config.logging.rotation),
            retention=logging_data.get("retention", config.logging.retention),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )
        try:
            config.logging.validate()
        except ValueError as e:
            logger.warning(f"Invalid logging configuration: {e}")
            logger.warning("Using default logging configuration.")
            config.logging = LoggingConfig()

    return _apply_env_overrides(config)


def save_config(config: Config, config_path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    config_path = config_path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        toml_content = f"""# trackline configuration

[display]
song_format = {_toml_string(config.display.song_format)}
playlist_format = {_toml_string(config.display.playlist_format)}
library_format = {_toml_string(config.display.library_format)}

[logging]
level = "{config.logging.level}"
rotation = "{config.logging.rotation}"
retention = {config.logging.retention}
console_output = {str(config.logging.console_output).lower()}"""

        if config.logging.log_file:
            toml_content += f"\nlog_file = {_toml_string(config.logging.log_file)}"

        toml_content += "\n"

        with open(config_path, "w", encoding="utf-8") as f:
            f.write(toml_content)

        return True

    except OSError as e:
        logger.error(f"Error saving configuration to {config_path}: {e}")
        return False


def _toml_string(value: str) -> str:
    # Literal strings keep backslash escapes in templates intact
    if "'" not in value and "\n" not in value:
        return f"'{value}'"
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
