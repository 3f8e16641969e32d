"""Shared test configuration for stackbind tests.

Environment variables that would leak host configuration into the settings
(``STACKBIND_*``, proxies, XDG paths) are cleared for every test.
"""

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from stackbind.config import settings as settings_module
from stackbind.core.logging import setup_logging


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom settings."""
    config.option.asyncio_mode = "auto"

    # Reuse the application logging pipeline so processors behave as in use.
    setup_logging(json_logs=False, log_level_name="DEBUG")


_ISOLATED_PREFIXES = ("STACKBIND_",)
_ISOLATED_NAMES = (
    "HTTPS_PROXY",
    "https_proxy",
    "HTTP_PROXY",
    "http_proxy",
    "ALL_PROXY",
    "REQUESTS_CA_BUNDLE",
    "SSL_CERT_FILE",
)


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Iterator[None]:
    """Run every test without host configuration and with a clean cache."""
    for name in list(os.environ):
        if name.startswith(_ISOLATED_PREFIXES) or name in _ISOLATED_NAMES:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()
