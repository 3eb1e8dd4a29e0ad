"""Sentry.io node."""

from flownodes.nodes.sentry.node import (
    API_CREDENTIAL,
    DESCRIPTION,
    OAUTH2_CREDENTIAL,
    SentryNode,
)

__all__ = [
    "API_CREDENTIAL",
    "DESCRIPTION",
    "OAUTH2_CREDENTIAL",
    "SentryNode",
]
