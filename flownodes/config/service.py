"""
Settings loader for flownodes.

Reads FLOWNODES_* environment variables once per process.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from .schemas import GOOGLE_PEOPLE_URL, SENTRY_CLOUD_URL, NodeSettings

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


@lru_cache()
def get_settings() -> NodeSettings:
    """
    Get node settings from environment.

    Uses lru_cache for singleton pattern; call get_settings.cache_clear()
    after changing the environment.
    """
    settings = NodeSettings(
        timeout=float(os.getenv("FLOWNODES_TIMEOUT", "30")),
        max_retries=int(os.getenv("FLOWNODES_MAX_RETRIES", "0")),
        retry_delay=float(os.getenv("FLOWNODES_RETRY_DELAY", "1.0")),
        log_requests=_env_flag("FLOWNODES_LOG_REQUESTS"),
        log_responses=_env_flag("FLOWNODES_LOG_RESPONSES"),
        sentry_base_url=os.getenv("FLOWNODES_SENTRY_BASE_URL", SENTRY_CLOUD_URL),
        google_contacts_base_url=os.getenv(
            "FLOWNODES_GOOGLE_CONTACTS_BASE_URL", GOOGLE_PEOPLE_URL
        ),
    )
    logger.debug(f"Loaded settings: timeout={settings.timeout} max_retries={settings.max_retries}")
    return settings
