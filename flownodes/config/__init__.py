"""
Configuration for flownodes.

Settings come from the environment; credentials come from the host.
"""

from .schemas import (
    GOOGLE_PEOPLE_URL,
    SENTRY_CLOUD_URL,
    CredentialsError,
    NodeSettings,
    OAuth2Credentials,
    SentryApiCredentials,
    parse_credentials,
)
from .service import get_settings

__all__ = [
    "GOOGLE_PEOPLE_URL",
    "SENTRY_CLOUD_URL",
    "CredentialsError",
    "NodeSettings",
    "OAuth2Credentials",
    "SentryApiCredentials",
    "get_settings",
    "parse_credentials",
]
