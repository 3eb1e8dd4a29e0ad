"""
Google Contacts (People API) Client for flownodes.

Async access to the signed-in user's contacts and contact groups through
the People API v1. Authentication is an OAuth2 access token that the host
has already obtained and refreshed.

Usage:
    config = GoogleContactsConfig(access_token="ya29...")
    async with GoogleContactsClient(config) as client:
        person = await client.get_contact("c123", ["names", "emailAddresses"])

        everyone = await client.list_all_contacts(["*"])

API Reference:
    https://developers.google.com/people/api/rest
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from flownodes.config.schemas import GOOGLE_PEOPLE_URL
from flownodes.integrations.base import IntegrationClient, IntegrationConfig
from flownodes.integrations.google_contacts.schemas import (
    ContactCreate,
    SortOrder,
    person_fields_mask,
)

logger = logging.getLogger(__name__)

# Page size used while walking every page of a listing
PAGE_SIZE = 100


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class GoogleContactsConfig(IntegrationConfig):
    """Configuration for Google Contacts client."""

    base_url: str = GOOGLE_PEOPLE_URL

    def __post_init__(self):
        if not self.access_token:
            raise ValueError("Google OAuth2 access token is required")


# =============================================================================
# Client
# =============================================================================


class GoogleContactsClient(IntegrationClient):
    """
    Async client for the Google People API.

    Provides methods for:
    - Contact create, get, delete
    - Connection listings (single page or all pages)
    - Contact group listing
    """

    def __init__(self, config: GoogleContactsConfig, **kwargs):
        super().__init__(config, **kwargs)
        self._config: GoogleContactsConfig = config

    @property
    def name(self) -> str:
        return "google_contacts"

    # =========================================================================
    # Pagination
    # =========================================================================

    async def request_all_items(
        self,
        property_name: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> list[Any]:
        """
        Fetch every page of a listing endpoint.

        Google wraps page contents in a named property ("connections",
        "contactGroups") and hands out a nextPageToken until the last page.

        Args:
            property_name: Response property holding the page's items
            method: HTTP method
            path: Endpoint path
            params: Query parameters (pageSize is overridden)
            json: Optional JSON body

        Returns:
            Items of all pages, in API order
        """
        query = {**(params or {}), "pageSize": PAGE_SIZE}
        items: list[Any] = []

        while True:
            data = await self.request_json(method, path, params=query, json=json) or {}
            items.extend(data.get(property_name) or [])

            next_token = data.get("nextPageToken")
            if not next_token:
                break
            query = {**query, "pageToken": next_token}

        logger.debug(f"[google_contacts] {method} {path}: {len(items)} {property_name}")
        return items

    # =========================================================================
    # Contacts
    # =========================================================================

    async def create_contact(self, contact: ContactCreate) -> dict[str, Any]:
        """
        Create a contact.

        Args:
            contact: Contact fields

        Returns:
            The created person resource
        """
        logger.info(
            f"[google_contacts] Creating contact: {contact.given_name} {contact.family_name}"
        )

        person = await self.request_json(
            "POST",
            "/people:createContact",
            json=contact.to_api_dict(),
        )

        logger.info(f"[google_contacts] Created contact: {(person or {}).get('resourceName')}")
        return person

    async def delete_contact(self, contact_id: str) -> bool:
        """
        Delete a contact.

        Args:
            contact_id: Person ID (the part after "people/")

        Returns:
            True if deleted successfully
        """
        logger.info(f"[google_contacts] Deleting contact: {contact_id}")

        await self.request("DELETE", f"/people/{contact_id}:deleteContact")

        logger.info(f"[google_contacts] Deleted contact: {contact_id}")
        return True

    async def get_contact(
        self,
        contact_id: str,
        fields: list[str] | tuple[str, ...] | str,
    ) -> dict[str, Any]:
        """
        Get a contact.

        Args:
            contact_id: Person ID
            fields: personFields to return ("*" for all)

        Returns:
            The person resource
        """
        return await self.request_json(
            "GET",
            f"/people/{contact_id}",
            params={"personFields": person_fields_mask(fields)},
        )

    def _connections_query(
        self,
        fields: list[str] | tuple[str, ...] | str,
        sort_order: str | SortOrder | None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"personFields": person_fields_mask(fields)}
        if sort_order:
            params["sortOrder"] = sort_order.value if isinstance(sort_order, SortOrder) else sort_order
        return params

    async def list_contacts(
        self,
        fields: list[str] | tuple[str, ...] | str,
        *,
        page_size: int,
        sort_order: str | SortOrder | None = None,
    ) -> dict[str, Any]:
        """
        Fetch one page of the user's connections.

        Args:
            fields: personFields to return ("*" for all)
            page_size: Number of connections requested
            sort_order: Optional SortOrder

        Returns:
            Raw response ({"connections": [...], "nextPageToken": ...});
            "connections" is absent when the user has none
        """
        params = self._connections_query(fields, sort_order)
        params["pageSize"] = page_size
        return await self.request_json("GET", "/people/me/connections", params=params) or {}

    async def list_all_contacts(
        self,
        fields: list[str] | tuple[str, ...] | str,
        *,
        sort_order: str | SortOrder | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch all of the user's connections."""
        return await self.request_all_items(
            "connections",
            "GET",
            "/people/me/connections",
            params=self._connections_query(fields, sort_order),
        )

    # =========================================================================
    # Contact Groups
    # =========================================================================

    async def list_contact_groups(self) -> list[dict[str, Any]]:
        """Fetch all contact groups of the user."""
        return await self.request_all_items("contactGroups", "GET", "/contactGroups")

    # =========================================================================
    # Health Check
    # =========================================================================

    async def health_check(self) -> bool:
        """
        Check if the People API is reachable with the current token.

        Returns:
            True if healthy
        """
        try:
            await self.request("GET", "/contactGroups", params={"pageSize": 1})
            return True
        except Exception as e:
            logger.warning(f"[google_contacts] Health check failed: {e}")
            return False
