"""Configuration file management for fintrack."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_SETTINGS: dict[str, Any] = {
    "currency_symbol": "₹",
    "default_window_days": 30,
    "log_level": "WARNING",
}


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
    return get_xdg_config_home() / "fintrack" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_SETTINGS), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
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

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    A missing config file is not an error; the defaults apply.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings dictionary containing every default key.
    """
    settings = dict(DEFAULT_SETTINGS)
    try:
        settings.update(load_config(config_path))
    except FileNotFoundError:
        pass
    return settings


def set_setting(key: str, value: Any, config_path: Path | None = None) -> None:
    """Set a single configuration key, creating the file if needed.

    Args:
        key: Setting name.
        value: New value.
        config_path: Path to config file. If None, uses default location.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = dict(DEFAULT_SETTINGS)
    config[key] = value
    save_config(config, config_path)


def parse_setting(key: str, value: str) -> Any:
    """Convert a command-line value to the type of a known setting.

    Args:
        key: Setting name, one of DEFAULT_SETTINGS.
        value: Raw value as typed.

    Returns:
        The converted value.

    Raises:
        ValueError: If the key is unknown or the value is invalid for it.
    """
    if key not in DEFAULT_SETTINGS:
        raise ValueError(f"Unknown setting '{key}'. Choose from: {', '.join(DEFAULT_SETTINGS)}")
    if key == "default_window_days":
        days = int(value)
        if days < 1:
            raise ValueError("default_window_days must be at least 1")
        return days
    if key == "log_level":
        return value.upper()
    return value
