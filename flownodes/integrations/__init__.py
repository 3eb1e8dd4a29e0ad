"""
flownodes Integrations Layer.

Clients for the external services the nodes talk to. Each integration
follows the same pattern:

1. Client: authentication and API communication (IntegrationClient)
2. Schemas: Pydantic models for outgoing requests

Directory Structure:
    integrations/
    ├── base.py              # IntegrationClient, errors
    ├── sentry/              # Sentry.io issue tracking
    │   ├── client.py
    │   └── schemas.py
    └── google_contacts/     # Google People API
        ├── client.py
        └── schemas.py

Usage:
    from flownodes.integrations.sentry import SentryClient, SentryConfig

    async with SentryClient(SentryConfig(access_token="...")) as client:
        issue = await client.get_issue("1234")
"""

from flownodes.integrations.base import (
    AuthenticationError,
    IntegrationClient,
    IntegrationConfig,
    IntegrationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
    parse_retry_after,
)

__all__ = [
    "AuthenticationError",
    "IntegrationClient",
    "IntegrationConfig",
    "IntegrationError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
    "parse_retry_after",
]
