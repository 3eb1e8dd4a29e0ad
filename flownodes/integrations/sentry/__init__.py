"""
Sentry integration for flownodes.

Usage:
    from flownodes.integrations.sentry import SentryClient, SentryConfig

    async with SentryClient(SentryConfig(access_token="...")) as client:
        teams = await client.list_teams("my-org")
"""

from flownodes.integrations.sentry.client import (
    SentryClient,
    SentryConfig,
    parse_link_header,
)
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

__all__ = [
    "EventQuery",
    "IssueQuery",
    "IssueStatus",
    "IssueUpdate",
    "OrganizationCreate",
    "OrganizationQuery",
    "PageQuery",
    "ReleaseQuery",
    "SentryClient",
    "SentryConfig",
    "StatsPeriod",
    "TeamCreate",
    "parse_link_header",
]
