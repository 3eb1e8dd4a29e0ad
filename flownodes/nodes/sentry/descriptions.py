"""
Field declarations for the Sentry node, grouped per resource.
"""

from __future__ import annotations

from flownodes.nodes.base import NodeProperty, PropertyOption, PropertyType

DEFAULT_LIMIT = 50
MAX_LIMIT = 500


def _show(resource: str, *operations: str) -> dict[str, tuple[str, ...]]:
    return {"resource": (resource,), "operation": operations}


def _operation(resource: str, default: str, *options: PropertyOption) -> NodeProperty:
    return NodeProperty(
        display_name="Operation",
        name="operation",
        type=PropertyType.OPTIONS,
        default=default,
        description="The operation to perform.",
        options=options,
        show={"resource": (resource,)},
    )


def _organization_slug(resource: str, *operations: str) -> NodeProperty:
    return NodeProperty(
        display_name="Organization Slug",
        name="organizationSlug",
        type=PropertyType.STRING,
        default="",
        required=True,
        description="The slug of the organization the resource belongs to.",
        show=_show(resource, *operations),
    )


def _project_slug(resource: str, *operations: str) -> NodeProperty:
    return NodeProperty(
        display_name="Project Slug",
        name="projectSlug",
        type=PropertyType.STRING,
        default="",
        required=True,
        description="The slug of the project.",
        show=_show(resource, *operations),
    )


def _pagination(resource: str) -> tuple[NodeProperty, NodeProperty]:
    return (
        NodeProperty(
            display_name="Return All",
            name="returnAll",
            type=PropertyType.BOOLEAN,
            default=False,
            description="Whether to return all results or only up to a given limit.",
            show=_show(resource, "getAll"),
        ),
        NodeProperty(
            display_name="Limit",
            name="limit",
            type=PropertyType.NUMBER,
            default=DEFAULT_LIMIT,
            description="How many results to return.",
            type_options={"minValue": 1, "maxValue": MAX_LIMIT},
            show={"resource": (resource,), "operation": ("getAll",), "returnAll": (False,)},
        ),
    )


# =============================================================================
# Event
# =============================================================================

EVENT_PROPERTIES: tuple[NodeProperty, ...] = (
    _operation(
        "event",
        "get",
        PropertyOption("Get", "get", "Get event by ID"),
        PropertyOption("Get All", "getAll", "Get all events of a project"),
    ),
    _organization_slug("event", "get", "getAll"),
    _project_slug("event", "get", "getAll"),
    NodeProperty(
        display_name="Event ID",
        name="eventId",
        type=PropertyType.STRING,
        default="",
        required=True,
        description="The ID of the event to retrieve (either the numeric primary-key or the hexadecimal ID).",
        show=_show("event", "get"),
    ),
    NodeProperty(
        display_name="Full",
        name="full",
        type=PropertyType.BOOLEAN,
        default=True,
        description="If this is set to true then the event payload will include the full event body, including the stack trace.",
        show=_show("event", "getAll"),
    ),
    *_pagination("event"),
)

# =============================================================================
# Issue
# =============================================================================

ISSUE_STATUS_OPTIONS = (
    PropertyOption("Resolved", "resolved"),
    PropertyOption("Resolved Next Release", "resolvedInNextRelease"),
    PropertyOption("Unresolved", "unresolved"),
    PropertyOption("Ignored", "ignored"),
)

ISSUE_PROPERTIES: tuple[NodeProperty, ...] = (
    _operation(
        "issue",
        "get",
        PropertyOption("Delete", "delete", "Delete an issue"),
        PropertyOption("Get", "get", "Get issue by ID"),
        PropertyOption("Get All", "getAll", "Get all issues of a project"),
        PropertyOption("Update", "update", "Update an issue"),
    ),
    NodeProperty(
        display_name="Issue ID",
        name="issueId",
        type=PropertyType.STRING,
        default="",
        required=True,
        description="ID of the issue.",
        show=_show("issue", "get", "delete", "update"),
    ),
    _organization_slug("issue", "getAll"),
    _project_slug("issue", "getAll"),
    *_pagination("issue"),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type=PropertyType.COLLECTION,
        default={},
        placeholder="Add Field",
        show=_show("issue", "getAll"),
        options=(
            NodeProperty(
                display_name="Query",
                name="query",
                type=PropertyType.STRING,
                default="",
                description='An optional Sentry structured search query. If not provided, an implied "is:unresolved" is assumed.',
            ),
            NodeProperty(
                display_name="Short ID Lookup",
                name="shortIdLookup",
                type=PropertyType.BOOLEAN,
                default=True,
                description="If this is set to true then short IDs are looked up by this function as well.",
            ),
            NodeProperty(
                display_name="Stats Period",
                name="statsPeriod",
                type=PropertyType.OPTIONS,
                default="",
                description="Time period of stats.",
                options=(
                    PropertyOption("14 Days", "14d"),
                    PropertyOption("24 Hours", "24h"),
                ),
            ),
        ),
    ),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type=PropertyType.COLLECTION,
        default={},
        placeholder="Add Field",
        show=_show("issue", "update"),
        options=(
            NodeProperty(
                display_name="Assigned To",
                name="assignedTo",
                type=PropertyType.STRING,
                default="",
                description="The actor ID (or username) of the user or team that should be assigned to this issue.",
            ),
            NodeProperty(
                display_name="Has Seen",
                name="hasSeen",
                type=PropertyType.BOOLEAN,
                default=False,
                description="In case this API call is invoked with a user context this allows changing of the flag that indicates if the user has seen the event.",
            ),
            NodeProperty(
                display_name="Is Bookmarked",
                name="isBookmarked",
                type=PropertyType.BOOLEAN,
                default=False,
                description="In case this API call is invoked with a user context this allows changing of the bookmark flag.",
            ),
            NodeProperty(
                display_name="Is Public",
                name="isPublic",
                type=PropertyType.BOOLEAN,
                default=False,
                description="Sets the issue to public or private.",
            ),
            NodeProperty(
                display_name="Is Subscribed",
                name="isSubscribed",
                type=PropertyType.BOOLEAN,
                default=False,
            ),
            NodeProperty(
                display_name="Status",
                name="status",
                type=PropertyType.OPTIONS,
                default="",
                description="The new status for the issue.",
                options=ISSUE_STATUS_OPTIONS,
            ),
        ),
    ),
)

# =============================================================================
# Organization
# =============================================================================

ORGANIZATION_PROPERTIES: tuple[NodeProperty, ...] = (
    _operation(
        "organization",
        "get",
        PropertyOption("Create", "create", "Create an organization"),
        PropertyOption("Get", "get", "Get organization by slug"),
        PropertyOption("Get All", "getAll", "Get all organizations"),
    ),
    _organization_slug("organization", "get"),
    NodeProperty(
        display_name="Name",
        name="name",
        type=PropertyType.STRING,
        default="",
        required=True,
        description="The name of the organization.",
        show=_show("organization", "create"),
    ),
    NodeProperty(
        display_name="Agree to Terms",
        name="agreeTerms",
        type=PropertyType.BOOLEAN,
        default=False,
        description="Signaling you agree to the applicable terms of service and privacy policy of Sentry.io.",
        show=_show("organization", "create"),
    ),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type=PropertyType.COLLECTION,
        default={},
        placeholder="Add Field",
        show=_show("organization", "create"),
        options=(
            NodeProperty(
                display_name="Slug",
                name="slug",
                type=PropertyType.STRING,
                default="",
                description="The unique URL slug for this organization. If this is not provided a slug is automatically generated based on the name.",
            ),
        ),
    ),
    *_pagination("organization"),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type=PropertyType.COLLECTION,
        default={},
        placeholder="Add Field",
        show=_show("organization", "getAll"),
        options=(
            NodeProperty(
                display_name="Member",
                name="member",
                type=PropertyType.BOOLEAN,
                default=True,
                description="Restrict results to organizations which you have membership.",
            ),
            NodeProperty(
                display_name="Owner",
                name="owner",
                type=PropertyType.BOOLEAN,
                default=True,
                description="Restrict results to organizations which you are the owner.",
            ),
        ),
    ),
)

# =============================================================================
# Project
# =============================================================================

PROJECT_PROPERTIES: tuple[NodeProperty, ...] = (
    _operation(
        "project",
        "get",
        PropertyOption("Get", "get", "Get project by slug"),
        PropertyOption("Get All", "getAll", "Get all projects"),
    ),
    _organization_slug("project", "get"),
    _project_slug("project", "get"),
    *_pagination("project"),
)

# =============================================================================
# Release
# =============================================================================

RELEASE_PROPERTIES: tuple[NodeProperty, ...] = (
    _operation(
        "release",
        "get",
        PropertyOption("Get", "get", "Get release by version identifier"),
        PropertyOption("Get All", "getAll", "Get all releases of an organization"),
    ),
    _organization_slug("release", "get", "getAll"),
    NodeProperty(
        display_name="Version",
        name="version",
        type=PropertyType.STRING,
        default="",
        required=True,
        description="The version identifier of the release.",
        show=_show("release", "get"),
    ),
    *_pagination("release"),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type=PropertyType.COLLECTION,
        default={},
        placeholder="Add Field",
        show=_show("release", "getAll"),
        options=(
            NodeProperty(
                display_name="Query",
                name="query",
                type=PropertyType.STRING,
                default="",
                description="This parameter can be used to create a 'starts with' filter for the version.",
            ),
        ),
    ),
)

# =============================================================================
# Team
# =============================================================================

TEAM_PROPERTIES: tuple[NodeProperty, ...] = (
    _operation(
        "team",
        "get",
        PropertyOption("Create", "create", "Create a new team"),
        PropertyOption("Get", "get", "Get team by slug"),
        PropertyOption("Get All", "getAll", "Get all teams of an organization"),
    ),
    _organization_slug("team", "get", "getAll", "create"),
    NodeProperty(
        display_name="Team Slug",
        name="teamSlug",
        type=PropertyType.STRING,
        default="",
        required=True,
        description="The slug of the team to get.",
        show=_show("team", "get"),
    ),
    *_pagination("team"),
    NodeProperty(
        display_name="Additional Fields",
        name="additionalFields",
        type=PropertyType.COLLECTION,
        default={},
        placeholder="Add Field",
        show=_show("team", "create"),
        options=(
            NodeProperty(
                display_name="Name",
                name="name",
                type=PropertyType.STRING,
                default="",
                description="The name of the team.",
            ),
            NodeProperty(
                display_name="Slug",
                name="slug",
                type=PropertyType.STRING,
                default="",
                description="The optional slug for this team. If not provided it will be auto generated from the name.",
            ),
        ),
    ),
)
