import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from stackbind.core.log_categories import CONFIG
from stackbind.core.logging import get_logger
from stackbind.exceptions import ConfigurationError

from .compute import ComputeSettings
from .discovery import CONFIG_FILE_ENV, find_toml_config_file
from .http import HTTPSettings
from .logging import LoggingSettings


__all__ = ["Settings", "get_settings"]


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Settings(BaseSettings):
    """
    Configuration settings for stackbind.

    Settings are loaded from environment variables (prefixed ``STACKBIND_``,
    nested sections separated by ``__``), .env files and an optional TOML
    configuration file. Precedence, highest first:
    1. keyword overrides passed to ``from_config``
    2. environment variables and .env
    3. TOML configuration file
    4. defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="STACKBIND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    http: HTTPSettings = Field(
        default_factory=HTTPSettings,
        description="HTTP client configuration settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    compute: ComputeSettings = Field(
        default_factory=ComputeSettings,
        description="Compute service endpoint and credentials",
    )

    @classmethod
    def load_toml_config(cls, toml_path: Path) -> dict[str, Any]:
        """Load configuration from a TOML file."""
        try:
            with toml_path.open("rb") as f:
                return tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read TOML config file {toml_path}: {e}"
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {toml_path}: {e}") from e

    @classmethod
    def from_config(
        cls,
        config_path: Path | str | None = None,
        **kwargs: Any,
    ) -> "Settings":
        """Create Settings instance from a configuration file.

        Args:
            config_path: TOML file to load. Falls back to the
                ``STACKBIND_CONFIG_FILE`` variable and the discovery locations.
            **kwargs: Section overrides, e.g. ``logging={"level": "DEBUG"}``

        Raises:
            ConfigurationError: If the file is unreadable or values are invalid
        """
        if config_path is None:
            config_path_env = os.environ.get(CONFIG_FILE_ENV)
            if config_path_env:
                config_path = Path(config_path_env)

        if isinstance(config_path, str):
            config_path = Path(config_path)

        if config_path is None:
            config_path = find_toml_config_file()

        config_data: dict[str, Any] = {}
        if config_path and config_path.exists():
            config_data = cls.load_toml_config(config_path)
            get_logger(__name__).info(
                "config_file_loaded",
                path=str(config_path),
                category=CONFIG,
            )

        try:
            env_data = cls().model_dump(exclude_unset=True)
            merged = _deep_merge(_deep_merge(config_data, env_data), kwargs)
            return cls.model_validate(merged)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}", details={"errors": e.errors()}
            ) from e


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    return Settings.from_config()
