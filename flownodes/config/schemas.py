"""
Configuration Schemas for flownodes.

Pydantic models for runtime settings and for the credential objects
the host hands to a node at execution time.

Security:
    Tokens use SecretStr to prevent accidental logging of credentials.
    Access the value with `.get_secret_value()`.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic import ValidationError as PydanticValidationError

SENTRY_CLOUD_URL = "https://sentry.io"
GOOGLE_PEOPLE_URL = "https://people.googleapis.com/v1"


class CredentialsError(Exception):
    """Raised when host-provided credentials are missing or malformed."""

    def __init__(self, message: str, credential: str):
        super().__init__(message)
        self.credential = credential

    def __str__(self) -> str:
        return f"[{self.credential}] {self.args[0]}"


class NodeSettings(BaseModel):
    """
    Runtime settings shared by every node.

    Loaded from FLOWNODES_* environment variables by get_settings().
    """

    timeout: float = Field(30.0, gt=0, description="HTTP timeout in seconds")
    max_retries: int = Field(0, ge=0, description="Retries for retryable failures")
    retry_delay: float = Field(1.0, ge=0, description="Base backoff delay in seconds")
    log_requests: bool = False
    log_responses: bool = False

    sentry_base_url: str = SENTRY_CLOUD_URL
    google_contacts_base_url: str = GOOGLE_PEOPLE_URL

    model_config = ConfigDict(frozen=True)


class SentryApiCredentials(BaseModel):
    """Sentry auth token credential (`sentryioApi`)."""

    token: SecretStr
    url: str | None = Field(None, description="Self-hosted Sentry server URL")

    model_config = ConfigDict(extra="ignore")


class OAuth2Credentials(BaseModel):
    """OAuth2 credential already resolved by the host's token store."""

    access_token: SecretStr
    token_type: str = "Bearer"

    model_config = ConfigDict(extra="ignore")


CredentialsT = TypeVar("CredentialsT", bound=BaseModel)


def parse_credentials(
    model: type[CredentialsT],
    raw: dict[str, Any] | None,
    *,
    credential: str,
) -> CredentialsT:
    """
    Validate a raw credential mapping.

    Args:
        model: Credential schema to validate against
        raw: Mapping returned by the host
        credential: Credential type name (for error messages)

    Raises:
        CredentialsError: If the mapping is absent or invalid
    """
    if not raw:
        raise CredentialsError("No credentials returned", credential)
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise CredentialsError(f"Invalid credentials (fields: {fields})", credential) from e
