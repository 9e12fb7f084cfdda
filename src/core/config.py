"""Configuration management for Tether.

Loads configuration from environment variables and .env file.
Provides validation and sensible defaults.

Usage:
    from src.core.config import get_config, validate_config

    config = get_config()
    issues = validate_config(config)
    if issues:
        for issue in issues:
            print(f"Config issue: {issue}")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from src.core.exceptions import ConfigurationError

# Default paths (defined once, used by both Config and load_config)
DEFAULT_DATA_PATH = Path.home() / ".tether" / "contacts.json"
DEFAULT_LOG_PATH = Path.home() / ".tether" / "logs"
DEFAULT_SNOOZE_DAYS = 7


@dataclass
class Config:
    """Application configuration.

    Attributes:
        data_path: JSON file holding contacts, events and OOO periods
        log_path: Directory for log files
        default_snooze_days: Snooze length used when none is given
        debug: Enable debug logging on the console
    """

    data_path: Path = field(default_factory=lambda: DEFAULT_DATA_PATH)
    log_path: Path = field(default_factory=lambda: DEFAULT_LOG_PATH)
    default_snooze_days: int = DEFAULT_SNOOZE_DAYS
    debug: bool = False


def load_env_file(path: Path) -> dict[str, str]:
    """Parse .env file.

    Handles:
        - KEY=VALUE format
        - Comments (lines starting with #)
        - Blank lines
        - Quoted values

    Args:
        path: Path to .env file

    Returns:
        Dictionary of environment variables
    """
    env_vars: dict[str, str] = {}

    if not path.exists():
        return env_vars

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()

                if value and value[0] in ('"', "'") and value[-1] == value[0]:
                    value = value[1:-1]

                if key:
                    env_vars[key] = value

    return env_vars


def _get_path(key: str, default: Path, env_vars: dict[str, str]) -> Path:
    """Get path from environment, expanding ~ and resolving."""
    value = os.environ.get(key) or env_vars.get(key)
    if value:
        return Path(value).expanduser().resolve()
    return default


def _get_int(key: str, default: int, env_vars: dict[str, str]) -> int:
    """Get integer from environment."""
    value = os.environ.get(key) or env_vars.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


def _get_bool(key: str, default: bool, env_vars: dict[str, str]) -> bool:
    """Get boolean from environment."""
    value = os.environ.get(key) or env_vars.get(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def load_config(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment and .env file.

    Priority:
        1. Environment variables (highest)
        2. .env file
        3. Default values (lowest)

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If a numeric setting is not an integer
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    env_vars = load_env_file(env_file)

    return Config(
        data_path=_get_path("TETHER_DATA_PATH", DEFAULT_DATA_PATH, env_vars),
        log_path=_get_path("TETHER_LOG_PATH", DEFAULT_LOG_PATH, env_vars),
        default_snooze_days=_get_int(
            "TETHER_DEFAULT_SNOOZE_DAYS", DEFAULT_SNOOZE_DAYS, env_vars
        ),
        debug=_get_bool("TETHER_DEBUG", False, env_vars),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration.

    Checks:
        - Log directory exists or can be created, and is writable
        - Data file exists
        - Default snooze length is positive

    Args:
        config: Configuration to validate

    Returns:
        List of issues (empty if valid)
    """
    issues: list[str] = []

    try:
        config.log_path.mkdir(parents=True, exist_ok=True)
        if not os.access(config.log_path, os.W_OK):
            issues.append(f"Log directory not writable: {config.log_path}")
    except OSError as e:
        issues.append(f"Cannot create log directory {config.log_path}: {e}")

    if not config.data_path.exists():
        issues.append(f"Data file does not exist: {config.data_path}")

    if config.default_snooze_days <= 0:
        issues.append(
            f"CRITICAL: TETHER_DEFAULT_SNOOZE_DAYS must be positive, "
            f"got {config.default_snooze_days}"
        )

    return issues


# Singleton config
_config: Optional[Config] = None


def get_config() -> Config:
    """Return cached configuration singleton.

    Loads configuration on first call, returns cached version thereafter.

    Returns:
        Application configuration
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration.

    Used primarily for testing.
    """
    global _config
    _config = None
