"""
Sentry.io Node.

Maps the user's resource/operation selection onto SentryClient calls:

    event         get, getAll
    issue         delete, get, getAll, update
    organization  create, get, getAll
    project       get, getAll
    release       get, getAll
    team          create, get, getAll

Listing Behaviour:
    With "Return All" off, the limit goes out as the `limit` query
    parameter (which also stops the page walk) and the collected list is
    cut to the limit once more on our side, because the last fetched page
    can overshoot.

Usage:
    node = SentryNode()
    context = StaticExecutionContext(
        parameters={"resource": "issue", "operation": "get", "issueId": "42"},
        credentials={"sentryioApi": {"token": "..."}},
    )
    [items] = await node.execute(context)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from flownodes.config import (
    NodeSettings,
    OAuth2Credentials,
    SentryApiCredentials,
    get_settings,
    parse_credentials,
)
from flownodes.integrations.sentry import SentryClient, SentryConfig
from flownodes.nodes.base import (
    ExecutionContext,
    Handler,
    Node,
    NodeCredential,
    NodeDescription,
    NodeOperationError,
    NodeProperty,
    PropertyOption,
    PropertyType,
    apply_limit,
    delete_success,
)
from flownodes.nodes.sentry.descriptions import (
    DEFAULT_LIMIT,
    EVENT_PROPERTIES,
    ISSUE_PROPERTIES,
    ORGANIZATION_PROPERTIES,
    PROJECT_PROPERTIES,
    RELEASE_PROPERTIES,
    TEAM_PROPERTIES,
)

logger = logging.getLogger(__name__)

API_CREDENTIAL = "sentryioApi"
OAUTH2_CREDENTIAL = "sentryioOAuth2Api"

DESCRIPTION = NodeDescription(
    display_name="Sentry.io",
    name="sentryio",
    description="Consume Sentry.io API",
    group=("output",),
    subtitle='={{$parameter["operation"] + ": " + $parameter["resource"]}}',
    defaults={"name": "Sentry.io", "color": "#000000"},
    credentials=(
        NodeCredential(OAUTH2_CREDENTIAL, show={"authentication": ("oAuth2",)}),
        NodeCredential(API_CREDENTIAL, show={"authentication": ("accessToken",)}),
    ),
    properties=(
        NodeProperty(
            display_name="Authentication",
            name="authentication",
            type=PropertyType.OPTIONS,
            default="accessToken",
            description="The authentication method to use.",
            options=(
                PropertyOption("Access Token", "accessToken"),
                PropertyOption("OAuth2", "oAuth2"),
            ),
        ),
        NodeProperty(
            display_name="Resource",
            name="resource",
            type=PropertyType.OPTIONS,
            default="event",
            description="Resource to consume.",
            options=(
                PropertyOption("Event", "event"),
                PropertyOption("Issue", "issue"),
                PropertyOption("Project", "project"),
                PropertyOption("Release", "release"),
                PropertyOption("Organization", "organization"),
                PropertyOption("Team", "team"),
            ),
        ),
        *EVENT_PROPERTIES,
        *ISSUE_PROPERTIES,
        *ORGANIZATION_PROPERTIES,
        *PROJECT_PROPERTIES,
        *RELEASE_PROPERTIES,
        *TEAM_PROPERTIES,
    ),
)


class SentryNode(Node[SentryClient]):
    """Node for the Sentry.io API."""

    def __init__(
        self,
        settings: NodeSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            settings: Runtime settings (defaults to get_settings())
            transport: Optional httpx transport for the client
        """
        self._settings = settings or get_settings()
        self._transport = transport

    @property
    def description(self) -> NodeDescription:
        return DESCRIPTION

    def handlers(self) -> dict[tuple[str, str], Handler]:
        return {
            ("event", "getAll"): self._event_get_all,
            ("event", "get"): self._event_get,
            ("issue", "getAll"): self._issue_get_all,
            ("issue", "get"): self._issue_get,
            ("issue", "delete"): self._issue_delete,
            ("issue", "update"): self._issue_update,
            ("organization", "get"): self._organization_get,
            ("organization", "getAll"): self._organization_get_all,
            ("organization", "create"): self._organization_create,
            ("project", "get"): self._project_get,
            ("project", "getAll"): self._project_get_all,
            ("release", "get"): self._release_get,
            ("release", "getAll"): self._release_get_all,
            ("team", "get"): self._team_get,
            ("team", "getAll"): self._team_get_all,
            ("team", "create"): self._team_create,
        }

    def create_client(self, context: ExecutionContext) -> SentryClient:
        """
        Build a client from the credential matching the authentication mode.

        Raises:
            CredentialsError: If the credential is missing or invalid
            NodeOperationError: For an unknown authentication mode
        """
        authentication = context.get_node_parameter("authentication", 0, "accessToken")
        base_url = self._settings.sentry_base_url

        if authentication == "accessToken":
            api = parse_credentials(
                SentryApiCredentials,
                context.get_credentials(API_CREDENTIAL),
                credential=API_CREDENTIAL,
            )
            token, token_type = api.token.get_secret_value(), "Bearer"
            base_url = api.url or base_url
        elif authentication == "oAuth2":
            oauth = parse_credentials(
                OAuth2Credentials,
                context.get_credentials(OAUTH2_CREDENTIAL),
                credential=OAUTH2_CREDENTIAL,
            )
            token, token_type = oauth.access_token.get_secret_value(), oauth.token_type
        else:
            raise NodeOperationError(f"Unknown authentication '{authentication}'", self.name)

        config = SentryConfig(
            access_token=token,
            token_type=token_type,
            base_url=base_url.rstrip("/"),
            timeout=self._settings.timeout,
            max_retries=self._settings.max_retries,
            retry_delay=self._settings.retry_delay,
            log_requests=self._settings.log_requests,
            log_responses=self._settings.log_responses,
        )
        return SentryClient(config, transport=self._transport)

    # =========================================================================
    # Parameter helpers
    # =========================================================================

    @staticmethod
    def _page_limit(context: ExecutionContext, index: int) -> tuple[bool, int | None]:
        return_all = context.get_node_parameter("returnAll", index, False)
        if return_all:
            return True, None
        return False, int(context.get_node_parameter("limit", index, DEFAULT_LIMIT))

    @staticmethod
    def _additional_fields(context: ExecutionContext, index: int) -> dict[str, Any]:
        return dict(context.get_node_parameter("additionalFields", index, {}) or {})

    # =========================================================================
    # Event
    # =========================================================================

    async def _event_get_all(self, client: SentryClient, context: ExecutionContext, index: int):
        return_all, limit = self._page_limit(context, index)
        events = await client.list_events(
            context.get_node_parameter("organizationSlug", index),
            context.get_node_parameter("projectSlug", index),
            full=context.get_node_parameter("full", index, True),
            limit=limit,
        )
        return apply_limit(events, return_all, limit)

    async def _event_get(self, client: SentryClient, context: ExecutionContext, index: int):
        return await client.get_event(
            context.get_node_parameter("organizationSlug", index),
            context.get_node_parameter("projectSlug", index),
            context.get_node_parameter("eventId", index),
        )

    # =========================================================================
    # Issue
    # =========================================================================

    async def _issue_get_all(self, client: SentryClient, context: ExecutionContext, index: int):
        fields = self._additional_fields(context, index)
        return_all, limit = self._page_limit(context, index)
        issues = await client.list_issues(
            context.get_node_parameter("organizationSlug", index),
            context.get_node_parameter("projectSlug", index),
            stats_period=fields.get("statsPeriod"),
            short_id_lookup=fields.get("shortIdLookup"),
            query=fields.get("query"),
            limit=limit,
        )
        return apply_limit(issues, return_all, limit)

    async def _issue_get(self, client: SentryClient, context: ExecutionContext, index: int):
        return await client.get_issue(context.get_node_parameter("issueId", index))

    async def _issue_delete(self, client: SentryClient, context: ExecutionContext, index: int):
        await client.delete_issue(context.get_node_parameter("issueId", index))
        return delete_success()

    async def _issue_update(self, client: SentryClient, context: ExecutionContext, index: int):
        fields = self._additional_fields(context, index)
        return await client.update_issue(
            context.get_node_parameter("issueId", index),
            status=fields.get("status"),
            assigned_to=fields.get("assignedTo"),
            has_seen=fields.get("hasSeen"),
            is_bookmarked=fields.get("isBookmarked"),
            is_subscribed=fields.get("isSubscribed"),
            is_public=fields.get("isPublic"),
        )

    # =========================================================================
    # Organization
    # =========================================================================

    async def _organization_get(self, client: SentryClient, context: ExecutionContext, index: int):
        return await client.get_organization(context.get_node_parameter("organizationSlug", index))

    async def _organization_get_all(
        self, client: SentryClient, context: ExecutionContext, index: int
    ):
        fields = self._additional_fields(context, index)
        return_all, limit = self._page_limit(context, index)
        organizations = await client.list_organizations(
            member=fields.get("member"),
            owner=fields.get("owner"),
            limit=limit,
        )
        return apply_limit(organizations, return_all, limit)

    async def _organization_create(
        self, client: SentryClient, context: ExecutionContext, index: int
    ):
        fields = self._additional_fields(context, index)
        return await client.create_organization(
            context.get_node_parameter("name", index),
            agree_terms=context.get_node_parameter("agreeTerms", index, False),
            slug=fields.get("slug"),
        )

    # =========================================================================
    # Project
    # =========================================================================

    async def _project_get(self, client: SentryClient, context: ExecutionContext, index: int):
        return await client.get_project(
            context.get_node_parameter("organizationSlug", index),
            context.get_node_parameter("projectSlug", index),
        )

    async def _project_get_all(self, client: SentryClient, context: ExecutionContext, index: int):
        return_all, limit = self._page_limit(context, index)
        projects = await client.list_projects(limit=limit)
        return apply_limit(projects, return_all, limit)

    # =========================================================================
    # Release
    # =========================================================================

    async def _release_get(self, client: SentryClient, context: ExecutionContext, index: int):
        return await client.get_release(
            context.get_node_parameter("organizationSlug", index),
            context.get_node_parameter("version", index),
        )

    async def _release_get_all(self, client: SentryClient, context: ExecutionContext, index: int):
        fields = self._additional_fields(context, index)
        return_all, limit = self._page_limit(context, index)
        releases = await client.list_releases(
            context.get_node_parameter("organizationSlug", index),
            query=fields.get("query"),
            limit=limit,
        )
        return apply_limit(releases, return_all, limit)

    # =========================================================================
    # Team
    # =========================================================================

    async def _team_get(self, client: SentryClient, context: ExecutionContext, index: int):
        return await client.get_team(
            context.get_node_parameter("organizationSlug", index),
            context.get_node_parameter("teamSlug", index),
        )

    async def _team_get_all(self, client: SentryClient, context: ExecutionContext, index: int):
        return_all, limit = self._page_limit(context, index)
        teams = await client.list_teams(
            context.get_node_parameter("organizationSlug", index),
            limit=limit,
        )
        return apply_limit(teams, return_all, limit)

    async def _team_create(self, client: SentryClient, context: ExecutionContext, index: int):
        fields = self._additional_fields(context, index)
        return await client.create_team(
            context.get_node_parameter("organizationSlug", index),
            name=fields.get("name"),
            slug=fields.get("slug"),
        )
