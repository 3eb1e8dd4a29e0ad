"""
Base classes for flownodes integrations.

Every external service a node talks to gets a client built on
IntegrationClient, so request plumbing is shared:

1. Async-first: all I/O goes through httpx.AsyncClient
2. Typed errors: HTTP failures are mapped onto IntegrationError subtypes
   and raised to the caller unchanged
3. Observable: optional request/response logging
4. Testable: the transport can be injected (httpx.MockTransport)

Retry Strategy:
    - Retryable errors: timeouts, network errors, 429, 5xx
    - Non-retryable: 4xx (except 429), auth errors
    - Backoff: exponential with jitter
    - max_retries defaults to 0, so a failed call surfaces immediately
"""

from __future__ import annotations

import asyncio
import email.utils
import logging
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import httpx

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class IntegrationError(Exception):
    """Base exception for integration errors."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.integration = integration
        self.status_code = status_code
        self.response_body = response_body
        self.retryable = retryable

    def __str__(self) -> str:
        parts = [f"[{self.integration}] {self.args[0]}"]
        if self.status_code:
            parts.append(f"(status={self.status_code})")
        return " ".join(parts)


class AuthenticationError(IntegrationError):
    """Raised when authentication fails (401/403)."""

    def __init__(self, message: str, integration: str, **kwargs):
        super().__init__(message, integration, retryable=False, **kwargs)


class RateLimitError(IntegrationError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, integration, retryable=True, **kwargs)
        self.retry_after = retry_after


class NotFoundError(IntegrationError):
    """Raised when a resource is not found (404)."""

    def __init__(self, message: str, integration: str, **kwargs):
        super().__init__(message, integration, retryable=False, **kwargs)


class ValidationError(IntegrationError):
    """Raised when request validation fails (400/422)."""

    def __init__(self, message: str, integration: str, **kwargs):
        super().__init__(message, integration, retryable=False, **kwargs)


def parse_retry_after(value: str | None) -> float | None:
    """
    Seconds to wait from a Retry-After header.

    The header is either a number of seconds or an HTTP-date; dates in the
    past give 0. Anything unparseable gives None.
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(seconds, 0.0) if math.isfinite(seconds) else None
    try:
        retry_at = email.utils.parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=UTC)
    return max((retry_at - datetime.now(UTC)).total_seconds(), 0.0)


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class IntegrationConfig:
    """Configuration for an integration client."""

    # Authentication
    access_token: str = ""
    token_type: str = "Bearer"

    # Connection
    base_url: str = ""
    timeout: float = 30.0

    # Retries (0 = fail on first error)
    max_retries: int = 0
    retry_delay: float = 1.0

    # Observability
    log_requests: bool = False
    log_responses: bool = False


# =============================================================================
# Base Client
# =============================================================================


class IntegrationClient(ABC):
    """
    Abstract base class for integration clients.

    Provides common functionality:
    - HTTP client management
    - Authentication header injection
    - Error handling and mapping
    - Request/response logging

    Subclasses must implement:
    - name: Integration identifier
    """

    def __init__(
        self,
        config: IntegrationConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the integration client.

        Args:
            config: Integration configuration
            transport: Optional httpx transport (mocking, proxies)
        """
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this integration."""
        ...

    def _get_auth_headers(self) -> dict[str, str]:
        """Return authentication headers for requests."""
        return {"Authorization": f"{self.config.token_type} {self.config.access_token}"}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    **self._get_auth_headers(),
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Make an HTTP request, retrying retryable failures with backoff.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: URL path relative to base_url, or an absolute URL
            params: Query parameters
            json: JSON body
            headers: Additional headers

        Returns:
            httpx.Response

        Raises:
            IntegrationError: On any non-retryable error or after max retries
        """
        attempt = 0
        while True:
            try:
                return await self._do_request(
                    method, path, params=params, json=json, headers=headers
                )
            except IntegrationError as e:
                if not e.retryable:
                    raise

                if attempt >= self.config.max_retries:
                    if self.config.max_retries:
                        logger.warning(
                            f"[{self.name}] Max retries ({self.config.max_retries}) "
                            f"reached for {method} {path}"
                        )
                    raise

                backoff = self._calculate_backoff(attempt, e)
                logger.info(
                    f"[{self.name}] Retry {attempt + 1}/{self.config.max_retries} "
                    f"for {method} {path} after {backoff:.2f}s"
                )
                await asyncio.sleep(backoff)
                attempt += 1

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Make a request and decode its JSON body.

        Returns:
            Decoded body, or None when the response has no content
        """
        response = await self.request(method, path, params=params, json=json)
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _calculate_backoff(
        self,
        attempt: int,
        error: IntegrationError,
    ) -> float:
        """
        Calculate backoff delay with exponential growth and jitter.

        Args:
            attempt: Current attempt number (0-indexed)
            error: The error that triggered the retry

        Returns:
            Delay in seconds
        """
        if isinstance(error, RateLimitError) and error.retry_after:
            return error.retry_after

        base_delay = self.config.retry_delay * (2 ** attempt)

        # ±25% jitter
        jitter = base_delay * 0.25 * (2 * random.random() - 1)

        return min(base_delay + jitter, 60.0)

    async def _do_request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute a single HTTP request."""
        client = await self._get_client()

        if self.config.log_requests:
            logger.debug(f"[{self.name}] {method} {path} params={params} body={json}")

        try:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise IntegrationError(
                f"Request timeout: {e}",
                self.name,
                retryable=True,
            ) from e
        except httpx.NetworkError as e:
            raise IntegrationError(
                f"Network error: {e}",
                self.name,
                retryable=True,
            ) from e

        if self.config.log_responses:
            logger.debug(
                f"[{self.name}] Response: status={response.status_code} "
                f"body={response.text[:500] if response.text else 'empty'}"
            )

        self._check_response(response)
        return response

    def _check_response(self, response: httpx.Response) -> None:
        """
        Check response for errors and raise appropriate exceptions.

        Raises:
            AuthenticationError: For 401/403
            RateLimitError: For 429
            NotFoundError: For 404
            ValidationError: For 400/422
            IntegrationError: For other errors
        """
        if response.is_success:
            return

        status = response.status_code
        body = response.text

        if status == 401 or status == 403:
            raise AuthenticationError(
                f"Authentication failed: {body}",
                self.name,
                status_code=status,
                response_body=body,
            )

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                "Rate limit exceeded",
                self.name,
                status_code=status,
                response_body=body,
                retry_after=parse_retry_after(retry_after),
            )

        if status == 404:
            raise NotFoundError(
                f"Resource not found: {body}",
                self.name,
                status_code=status,
                response_body=body,
            )

        if status == 400 or status == 422:
            raise ValidationError(
                f"Validation error: {body}",
                self.name,
                status_code=status,
                response_body=body,
            )

        raise IntegrationError(
            f"Request failed: {body}",
            self.name,
            status_code=status,
            response_body=body,
            retryable=status >= 500,
        )

    async def health_check(self) -> bool:
        """Check if the integration is reachable. Subclasses override."""
        return True

    async def __aenter__(self) -> IntegrationClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
