"""
Centralized settings for the purchase tool.

Values come from environment variables prefixed with ``PURCHASE_TOOL_``
and are handed explicitly to the catalog gateway.
"""
import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "PURCHASE_TOOL_"

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Base URL of the catalog API, e.g. https://emerald.example.com/emerald_api
    catalog_url: Optional[str] = None

    # Timeouts (seconds)
    connect_timeout: float = 10.0
    # Overall limit for one request, body included
    request_timeout: float = 10.0

    # Warn when a package is looked up without a state
    require_state: bool = False

    # Package used by Purchase.upgrade_for
    upgrade_package_code: str = "base_package"

    log_level: str = "INFO"

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from the environment."""
        return cls(
            catalog_url=_env("CATALOG_URL"),
            connect_timeout=float(_env("CONNECT_TIMEOUT", "10")),
            request_timeout=float(_env("REQUEST_TIMEOUT", "10")),
            require_state=_env("REQUIRE_STATE", "false").lower() in TRUE_VALUES,
            upgrade_package_code=_env("UPGRADE_PACKAGE", "base_package"),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
