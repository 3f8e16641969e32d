"""Configuration module for stackbind."""

from .compute import ComputeSettings
from .http import HTTPSettings
from .logging import LoggingSettings
from .settings import Settings, get_settings


__all__ = [
    "ComputeSettings",
    "HTTPSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
