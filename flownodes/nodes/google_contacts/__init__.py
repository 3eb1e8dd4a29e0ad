"""Google Contacts node."""

from flownodes.nodes.google_contacts.node import (
    DESCRIPTION,
    OAUTH2_CREDENTIAL,
    GoogleContactsNode,
)

__all__ = [
    "DESCRIPTION",
    "OAUTH2_CREDENTIAL",
    "GoogleContactsNode",
]
