"""
Google Contacts Node.

Operations on the `contact` resource:

    create   POST   /people:createContact
    delete   DELETE /people/{id}:deleteContact   -> {"success": true}
    get      GET    /people/{id}
    getAll   GET    /people/me/connections       (all pages, or one page of `limit`)

Dynamic Options:
    getGroups lists the user's contact groups for the "Group" field.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from flownodes.config import NodeSettings, OAuth2Credentials, get_settings, parse_credentials
from flownodes.integrations.google_contacts import (
    ContactCreate,
    ContactEvent,
    GoogleContactsClient,
    GoogleContactsConfig,
)
from flownodes.nodes.base import (
    ExecutionContext,
    Handler,
    Node,
    NodeCredential,
    NodeDescription,
    NodeProperty,
    PropertyOption,
    PropertyType,
    apply_limit,
    delete_success,
)
from flownodes.nodes.google_contacts.descriptions import CONTACT_PROPERTIES, DEFAULT_LIMIT

logger = logging.getLogger(__name__)

OAUTH2_CREDENTIAL = "googleContactsOAuth2Api"

DESCRIPTION = NodeDescription(
    display_name="Google Contacts",
    name="googleContacts",
    description="Consume Google Contacts API.",
    group=("input",),
    subtitle='={{$parameter["operation"] + ": " + $parameter["resource"]}}',
    defaults={"name": "Google Contacts", "color": "#1a73e8"},
    credentials=(NodeCredential(OAUTH2_CREDENTIAL),),
    properties=(
        NodeProperty(
            display_name="Resource",
            name="resource",
            type=PropertyType.OPTIONS,
            default="contact",
            description="The resource to operate on.",
            options=(PropertyOption("Contact", "contact"),),
        ),
        *CONTACT_PROPERTIES,
    ),
)


def _collection_values(fields: dict[str, Any], ui_key: str, values_key: str) -> list[Any] | None:
    """Entries of a fixedCollection field, e.g. fields["phoneUi"]["phoneValues"]."""
    group = fields.get(ui_key) or {}
    values = group.get(values_key)
    return list(values) if values else None


class GoogleContactsNode(Node[GoogleContactsClient]):
    """Node for the Google People API."""

    def __init__(
        self,
        settings: NodeSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or get_settings()
        self._transport = transport

    @property
    def description(self) -> NodeDescription:
        return DESCRIPTION

    def handlers(self) -> dict[tuple[str, str], Handler]:
        return {
            ("contact", "create"): self._contact_create,
            ("contact", "delete"): self._contact_delete,
            ("contact", "get"): self._contact_get,
            ("contact", "getAll"): self._contact_get_all,
        }

    def create_client(self, context: ExecutionContext) -> GoogleContactsClient:
        oauth = parse_credentials(
            OAuth2Credentials,
            context.get_credentials(OAUTH2_CREDENTIAL),
            credential=OAUTH2_CREDENTIAL,
        )
        config = GoogleContactsConfig(
            access_token=oauth.access_token.get_secret_value(),
            token_type=oauth.token_type,
            base_url=self._settings.google_contacts_base_url.rstrip("/"),
            timeout=self._settings.timeout,
            max_retries=self._settings.max_retries,
            retry_delay=self._settings.retry_delay,
            log_requests=self._settings.log_requests,
            log_responses=self._settings.log_responses,
        )
        return GoogleContactsClient(config, transport=self._transport)

    async def load_options(self, method: str, context: ExecutionContext) -> list[PropertyOption]:
        """
        Dynamic option lists.

        Supported methods:
            getGroups: contact groups as (name, resourceName) options
        """
        if method != "getGroups":
            return await super().load_options(method, context)

        async with self.create_client(context) as client:
            groups = await client.list_contact_groups()

        logger.debug(f"[google_contacts] Loaded {len(groups)} contact group option(s)")

        return [
            PropertyOption(
                group.get("name") or group.get("formattedName") or group.get("resourceName"),
                group.get("resourceName"),
            )
            for group in groups
        ]

    # =========================================================================
    # Contact
    # =========================================================================

    async def _contact_create(
        self, client: GoogleContactsClient, context: ExecutionContext, index: int
    ):
        fields = dict(context.get_node_parameter("additionalFields", index, {}) or {})

        events = _collection_values(fields, "eventsUi", "eventsValues")

        contact = ContactCreate(
            family_name=context.get_node_parameter("familyName", index),
            given_name=context.get_node_parameter("givenName", index),
            middle_name=fields.get("middleName"),
            organizations=_collection_values(fields, "companyUi", "companyValues"),
            phone_numbers=_collection_values(fields, "phoneUi", "phoneValues"),
            addresses=_collection_values(fields, "addressesUi", "addressesValues"),
            relations=_collection_values(fields, "relationsUi", "relationsValues"),
            events=[ContactEvent(**event) for event in events] if events else None,
            birthday=fields.get("birthday") or None,
            email_addresses=_collection_values(fields, "emailsUi", "emailsValues"),
            biography=fields.get("biographies"),
            user_defined=_collection_values(fields, "customFieldsUi", "customFieldsValues"),
            groups=fields.get("group") or None,
        )
        return await client.create_contact(contact)

    async def _contact_delete(
        self, client: GoogleContactsClient, context: ExecutionContext, index: int
    ):
        await client.delete_contact(context.get_node_parameter("contactId", index))
        return delete_success()

    async def _contact_get(
        self, client: GoogleContactsClient, context: ExecutionContext, index: int
    ):
        return await client.get_contact(
            context.get_node_parameter("contactId", index),
            context.get_node_parameter("fields", index),
        )

    async def _contact_get_all(
        self, client: GoogleContactsClient, context: ExecutionContext, index: int
    ):
        fields = context.get_node_parameter("fields", index)
        options = dict(context.get_node_parameter("options", index, {}) or {})
        sort_order = options.get("sortOrder") or None

        if context.get_node_parameter("returnAll", index, False):
            return await client.list_all_contacts(fields, sort_order=sort_order)

        limit = int(context.get_node_parameter("limit", index, DEFAULT_LIMIT))
        page = await client.list_contacts(fields, page_size=limit, sort_order=sort_order)
        return apply_limit(page.get("connections"), False, limit)
