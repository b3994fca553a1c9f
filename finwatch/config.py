"""Configuration file management for finwatch."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_MIN_YEAR = 2020
DEFAULT_MAX_YEAR = 2100


@dataclass(frozen=True)
class Settings:
    """Resolved settings with defaults applied."""

    user_id: int = 1
    min_year: int = DEFAULT_MIN_YEAR
    max_year: int = DEFAULT_MAX_YEAR
    currency_symbol: str = "£"
    log_level: str = "WARNING"
    log_json: bool = False


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "finwatch" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "user_id": 1,
        "min_year": DEFAULT_MIN_YEAR,
        "max_year": DEFAULT_MAX_YEAR,
        "currency_symbol": "£",
        "logging": {"level": "WARNING", "json": False},
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def settings_from_dict(config: dict[str, Any]) -> Settings:
    """Build Settings from a raw config dictionary.

    Raises:
        ValueError: If the configured year bounds are inverted.
    """
    logging_config = config.get("logging", {})
    settings = Settings(
        user_id=int(config.get("user_id", 1)),
        min_year=int(config.get("min_year", DEFAULT_MIN_YEAR)),
        max_year=int(config.get("max_year", DEFAULT_MAX_YEAR)),
        currency_symbol=str(config.get("currency_symbol", "£")),
        log_level=str(logging_config.get("level", "WARNING")),
        log_json=bool(logging_config.get("json", False)),
    )
    if settings.min_year > settings.max_year:
        raise ValueError(f"min_year {settings.min_year} is after max_year {settings.max_year}")
    return settings


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no config file exists."""
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return settings_from_dict(config)
