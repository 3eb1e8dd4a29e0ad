"""
Google Contacts integration for flownodes.

Usage:
    from flownodes.integrations.google_contacts import (
        GoogleContactsClient,
        GoogleContactsConfig,
    )
"""

from flownodes.integrations.google_contacts.client import (
    PAGE_SIZE,
    GoogleContactsClient,
    GoogleContactsConfig,
)
from flownodes.integrations.google_contacts.schemas import (
    ALL_PERSON_FIELDS,
    ContactCreate,
    ContactEvent,
    SortOrder,
    person_fields_mask,
)

__all__ = [
    "ALL_PERSON_FIELDS",
    "PAGE_SIZE",
    "ContactCreate",
    "ContactEvent",
    "GoogleContactsClient",
    "GoogleContactsConfig",
    "SortOrder",
    "person_fields_mask",
]
