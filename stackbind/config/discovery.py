"""Configuration file discovery utilities."""

import os
from pathlib import Path


CONFIG_FILE_ENV = "STACKBIND_CONFIG_FILE"


def get_stackbind_config_dir() -> Path:
    """Get the stackbind configuration directory under XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "stackbind"


def find_toml_config_file() -> Path | None:
    """Find the TOML configuration file for stackbind.

    Searches in the following order:
    1. .stackbind.toml in current directory
    2. config.toml in XDG_CONFIG_HOME/stackbind/

    Returns:
        Path to the first found configuration file, or None if not found.
    """
    current_dir_config = Path.cwd() / ".stackbind.toml"
    if current_dir_config.exists():
        return current_dir_config

    xdg_config = get_stackbind_config_dir() / "config.toml"
    if xdg_config.exists():
        return xdg_config

    return None
