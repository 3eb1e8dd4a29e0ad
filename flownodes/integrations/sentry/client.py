"""
Sentry API Client for flownodes.

Async access to Sentry's REST API (/api/0/) for events, issues,
organizations, projects, releases and teams. Handles bearer
authentication, Link-header cursor pagination and error mapping.

Usage:
    async with SentryClient(SentryConfig(access_token="...")) as client:
        issue = await client.get_issue("1234")

        issues = await client.list_issues(
            "my-org",
            "backend",
            query="is:unresolved",
            limit=25,
        )

        await client.update_issue("1234", status="resolved")

API Reference:
    https://docs.sentry.io/api/
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from flownodes.config.schemas import SENTRY_CLOUD_URL
from flownodes.integrations.base import IntegrationClient, IntegrationConfig
from flownodes.integrations.sentry.schemas import (
    EventQuery,
    IssueQuery,
    IssueStatus,
    IssueUpdate,
    OrganizationCreate,
    OrganizationQuery,
    PageQuery,
    ReleaseQuery,
    StatsPeriod,
    TeamCreate,
)

logger = logging.getLogger(__name__)

_LINK_RE = re.compile(r"<(?P<url>[^>]*)>(?P<attrs>[^<]*)")
_ATTR_RE = re.compile(r'(\w+)="([^"]*)"')


def parse_link_header(value: str | None) -> dict[str, dict[str, str]]:
    """
    Parse Sentry's pagination Link header.

    Example header:
        <https://sentry.io/api/0/projects/acme/web/issues/?&cursor=0:0:1>;
        rel="previous"; results="false"; cursor="0:0:1",
        <https://sentry.io/api/0/projects/acme/web/issues/?&cursor=0:100:0>;
        rel="next"; results="true"; cursor="0:100:0"

    Returns:
        {"previous": {"url": ..., "results": "false", "cursor": ...},
         "next": {"url": ..., "results": "true", "cursor": ...}}
    """
    links: dict[str, dict[str, str]] = {}
    for match in _LINK_RE.finditer(value or ""):
        attrs = dict(_ATTR_RE.findall(match.group("attrs")))
        rel = attrs.pop("rel", None)
        if rel:
            links[rel] = {"url": match.group("url"), **attrs}
    return links


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class SentryConfig(IntegrationConfig):
    """Configuration for Sentry client."""

    # Sentry Cloud unless a self-hosted server is configured
    base_url: str = SENTRY_CLOUD_URL

    def __post_init__(self):
        if not self.access_token:
            raise ValueError("Sentry access token is required")


# =============================================================================
# Client
# =============================================================================


class SentryClient(IntegrationClient):
    """
    Async client for the Sentry API.

    The same bearer header serves both auth-token and OAuth2 credentials.
    Listing methods follow pagination cursors and return a flat list; when
    a limit is given, paging stops once at least that many items arrived
    (the last page is not trimmed).
    """

    def __init__(self, config: SentryConfig, **kwargs):
        super().__init__(config, **kwargs)
        self._config: SentryConfig = config

    @property
    def name(self) -> str:
        return "sentry"

    # =========================================================================
    # Pagination
    # =========================================================================

    async def request_all_items(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> list[Any]:
        """
        Fetch every page of a listing endpoint.

        Args:
            method: HTTP method
            path: Endpoint path
            params: Query parameters; "limit" also bounds the page walk
            json: Optional JSON body

        Returns:
            Items of all fetched pages, in API order
        """
        query = dict(params or {})
        limit = query.get("limit")
        items: list[Any] = []
        pages = 0

        while True:
            response = await self.request(method, path, params=query, json=json)
            pages += 1

            body = self._decode(response)
            if isinstance(body, list):
                items.extend(body)
            elif body is not None:
                items.append(body)

            if limit and len(items) >= limit:
                break

            next_link = parse_link_header(response.headers.get("link")).get("next")
            if not next_link or next_link.get("results") != "true":
                break

            query = {**query, "cursor": next_link["cursor"]}

        logger.debug(f"[sentry] {method} {path}: {len(items)} items in {pages} page(s)")
        return items

    # =========================================================================
    # Events
    # =========================================================================

    async def list_events(
        self,
        organization_slug: str,
        project_slug: str,
        *,
        full: bool | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """List a project's events."""
        query = EventQuery(full=full, limit=limit)
        return await self.request_all_items(
            "GET",
            f"/api/0/projects/{organization_slug}/{project_slug}/events/",
            params=query.to_params(),
        )

    async def get_event(
        self,
        organization_slug: str,
        project_slug: str,
        event_id: str,
    ) -> dict[str, Any]:
        """Get a single project event."""
        return await self.request_json(
            "GET",
            f"/api/0/projects/{organization_slug}/{project_slug}/events/{event_id}/",
        )

    # =========================================================================
    # Issues
    # =========================================================================

    async def list_issues(
        self,
        organization_slug: str,
        project_slug: str,
        *,
        stats_period: str | StatsPeriod | None = None,
        short_id_lookup: bool | None = None,
        query: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        List a project's issues.

        Args:
            organization_slug: Organization slug
            project_slug: Project slug
            stats_period: "24h" or "14d"
            short_id_lookup: Resolve short IDs (PROJ-1A) in the query
            query: Sentry search query (defaults server-side to is:unresolved)
            limit: Stop paging after this many issues

        Returns:
            Issue objects as returned by Sentry
        """
        issue_query = IssueQuery(
            stats_period=stats_period,
            short_id_lookup=short_id_lookup,
            query=query,
            limit=limit,
        )
        return await self.request_all_items(
            "GET",
            f"/api/0/projects/{organization_slug}/{project_slug}/issues/",
            params=issue_query.to_params(),
        )

    async def get_issue(self, issue_id: str) -> dict[str, Any]:
        """Get an issue by ID."""
        return await self.request_json("GET", f"/api/0/issues/{issue_id}/")

    async def update_issue(
        self,
        issue_id: str,
        *,
        status: str | IssueStatus | None = None,
        assigned_to: str | None = None,
        has_seen: bool | None = None,
        is_bookmarked: bool | None = None,
        is_subscribed: bool | None = None,
        is_public: bool | None = None,
    ) -> dict[str, Any]:
        """
        Update an issue. Only provided fields are sent.

        Returns:
            Sentry's response body for the update
        """
        update_data = IssueUpdate(
            status=status,
            assigned_to=assigned_to,
            has_seen=has_seen,
            is_bookmarked=is_bookmarked,
            is_subscribed=is_subscribed,
            is_public=is_public,
        )

        logger.info(f"[sentry] Updating issue: {issue_id}")

        return await self.request_json(
            "PUT",
            f"/api/0/issues/{issue_id}/",
            json=update_data.to_api_dict(),
        )

    async def delete_issue(self, issue_id: str) -> bool:
        """
        Delete an issue.

        Returns:
            True once Sentry accepted the deletion
        """
        logger.info(f"[sentry] Deleting issue: {issue_id}")

        await self.request("DELETE", f"/api/0/issues/{issue_id}/")

        logger.info(f"[sentry] Deleted issue: {issue_id}")
        return True

    # =========================================================================
    # Organizations
    # =========================================================================

    async def get_organization(self, organization_slug: str) -> dict[str, Any]:
        """Get an organization by slug."""
        return await self.request_json("GET", f"/api/0/organizations/{organization_slug}/")

    async def list_organizations(
        self,
        *,
        member: bool | None = None,
        owner: bool | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """List organizations available to the token."""
        query = OrganizationQuery(member=member, owner=owner, limit=limit)
        return await self.request_all_items(
            "GET",
            "/api/0/organizations/",
            params=query.to_params(),
        )

    async def create_organization(
        self,
        name: str,
        *,
        agree_terms: bool,
        slug: str | None = None,
    ) -> dict[str, Any]:
        """Create an organization."""
        create_data = OrganizationCreate(name=name, agree_terms=agree_terms, slug=slug)

        logger.info(f"[sentry] Creating organization: {name}")

        organization = await self.request_json(
            "POST",
            "/api/0/organizations/",
            json=create_data.to_api_dict(),
        )
        logger.info(f"[sentry] Created organization: {(organization or {}).get('slug')}")
        return organization

    # =========================================================================
    # Projects
    # =========================================================================

    async def get_project(self, organization_slug: str, project_slug: str) -> dict[str, Any]:
        """Get a project."""
        return await self.request_json(
            "GET",
            f"/api/0/projects/{organization_slug}/{project_slug}/",
        )

    async def list_projects(self, *, limit: int | None = None) -> list[dict[str, Any]]:
        """List every project available to the token."""
        return await self.request_all_items(
            "GET",
            "/api/0/projects/",
            params=PageQuery(limit=limit).to_params(),
        )

    # =========================================================================
    # Releases
    # =========================================================================

    async def get_release(self, organization_slug: str, version: str) -> dict[str, Any]:
        """Get an organization release by version."""
        return await self.request_json(
            "GET",
            f"/api/0/organizations/{organization_slug}/releases/{version}/",
        )

    async def list_releases(
        self,
        organization_slug: str,
        *,
        query: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """List an organization's releases."""
        release_query = ReleaseQuery(query=query, limit=limit)
        return await self.request_all_items(
            "GET",
            f"/api/0/organizations/{organization_slug}/releases/",
            params=release_query.to_params(),
        )

    # =========================================================================
    # Teams
    # =========================================================================

    async def get_team(self, organization_slug: str, team_slug: str) -> dict[str, Any]:
        """Get a team."""
        return await self.request_json("GET", f"/api/0/teams/{organization_slug}/{team_slug}/")

    async def list_teams(
        self,
        organization_slug: str,
        *,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """List an organization's teams."""
        return await self.request_all_items(
            "GET",
            f"/api/0/organizations/{organization_slug}/teams/",
            params=PageQuery(limit=limit).to_params(),
        )

    async def create_team(
        self,
        organization_slug: str,
        *,
        name: str | None = None,
        slug: str | None = None,
    ) -> dict[str, Any]:
        """Create a team in an organization."""
        create_data = TeamCreate(name=name, slug=slug)

        logger.info(f"[sentry] Creating team in organization {organization_slug}")

        return await self.request_json(
            "POST",
            f"/api/0/organizations/{organization_slug}/teams/",
            json=create_data.to_api_dict(),
        )

    # =========================================================================
    # Health Check
    # =========================================================================

    async def health_check(self) -> bool:
        """
        Check if the Sentry API is reachable.

        Returns:
            True if healthy
        """
        try:
            await self.request("GET", "/api/0/")
            return True
        except Exception as e:
            logger.warning(f"[sentry] Health check failed: {e}")
            return False
