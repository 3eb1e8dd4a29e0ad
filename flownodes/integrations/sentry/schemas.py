"""
Pydantic schemas for Sentry API requests.

Responses are passed through as plain dicts; only outgoing query strings
and bodies are modelled here. Every schema serializes with Sentry's
camelCase names and leaves out fields that were not provided.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class IssueStatus(str, Enum):
    """Issue resolution states accepted by PUT /issues/{id}/."""

    RESOLVED = "resolved"
    RESOLVED_IN_NEXT_RELEASE = "resolvedInNextRelease"
    UNRESOLVED = "unresolved"
    IGNORED = "ignored"


class StatsPeriod(str, Enum):
    """Stats periods for issue listings."""

    DAY = "24h"
    TWO_WEEKS = "14d"


# =============================================================================
# Base
# =============================================================================


class SentryPayload(BaseModel):
    """Base for request payloads."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    def to_api_dict(self) -> dict[str, Any]:
        """Serialize with API names, dropping None and empty strings."""
        return {
            key: value
            for key, value in self.model_dump(by_alias=True, exclude_none=True).items()
            if value != ""
        }

    def to_params(self) -> dict[str, Any]:
        """Alias of to_api_dict() for query-string payloads."""
        return self.to_api_dict()


# =============================================================================
# Query Schemas
# =============================================================================


class PageQuery(SentryPayload):
    """Query for plain paginated listings (projects, teams)."""

    limit: int | None = Field(None, ge=1, description="Maximum items to return")


class EventQuery(PageQuery):
    """Query parameters for listing project events."""

    full: bool | None = Field(None, description="Include the full event body")


class IssueQuery(PageQuery):
    """Query parameters for listing project issues."""

    stats_period: StatsPeriod | str | None = Field(None, alias="statsPeriod")
    short_id_lookup: bool | None = Field(None, alias="shortIdLookup")
    query: str | None = Field(None, description="Sentry search query")


class OrganizationQuery(PageQuery):
    """Query parameters for listing organizations."""

    member: bool | None = Field(None, description="Only organizations the user is a member of")
    owner: bool | None = Field(None, description="Only organizations the user owns")


class ReleaseQuery(PageQuery):
    """Query parameters for listing releases."""

    query: str | None = Field(None, description="Version prefix filter")


# =============================================================================
# Body Schemas
# =============================================================================


class IssueUpdate(SentryPayload):
    """Body for updating an issue. Only provided fields are sent."""

    status: IssueStatus | str | None = None
    assigned_to: str | None = Field(None, alias="assignedTo")
    has_seen: bool | None = Field(None, alias="hasSeen")
    is_bookmarked: bool | None = Field(None, alias="isBookmarked")
    is_subscribed: bool | None = Field(None, alias="isSubscribed")
    is_public: bool | None = Field(None, alias="isPublic")


class OrganizationCreate(SentryPayload):
    """Body for creating an organization."""

    name: str = Field(..., min_length=1)
    agree_terms: bool = Field(..., alias="agreeTerms")
    slug: str | None = None


class TeamCreate(SentryPayload):
    """Body for creating a team."""

    name: str | None = None
    slug: str | None = None
