"""
Configuration for the Google Analytics MCP Server.

Settings are read from the environment once at startup and handed to the
components that need them. Nothing reads the environment after that.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Primary and fallback names for the default GA4 property ID.
PROPERTY_ID_VARS = ("GA4_PROPERTY_ID", "GA_PROPERTY_ID")


def _get(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _log_level(value: Optional[str]) -> str:
    # Unknown level names fall back to INFO
    level = (value or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


@dataclass(frozen=True)
class Settings:
    """Process-wide, read-only server configuration."""

    property_id: Optional[str] = None
    client_email: Optional[str] = None
    private_key: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``

        Returns:
            A populated Settings instance
        """
        if environ is None:
            environ = os.environ

        property_id = None
        for name in PROPERTY_ID_VARS:
            property_id = _get(environ, name)
            if property_id:
                break

        return cls(
            property_id=property_id,
            client_email=_get(environ, "GOOGLE_CLIENT_EMAIL"),
            private_key=_get(environ, "GOOGLE_PRIVATE_KEY"),
            log_level=_log_level(_get(environ, "LOG_LEVEL")),
        )

    @property
    def has_service_account(self) -> bool:
        return bool(self.client_email and self.private_key)
