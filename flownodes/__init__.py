"""
flownodes - Integration nodes for workflow automation hosts.

Each node declares the fields a workflow user configures (resource,
operation, credentials, filters) and, when run, turns them into calls
against an external REST API:

- **Sentry.io**: events, issues, organizations, projects, releases, teams
- **Google Contacts**: create, get, list and delete contacts

Quick Start:
    >>> from flownodes import StaticExecutionContext, create_default_registry
    >>>
    >>> node = create_default_registry().get_required("sentryio")
    >>> context = StaticExecutionContext(
    ...     parameters={"resource": "issue", "operation": "get", "issueId": "42"},
    ...     credentials={"sentryioApi": {"token": "..."}},
    ... )
    >>> [items] = await node.execute(context)
"""

__version__ = "0.1.0"
__license__ = "MIT"

from flownodes.nodes import (
    Node,
    NodeItem,
    NodeRegistry,
    StaticExecutionContext,
    create_default_registry,
)

__all__ = [
    "__version__",
    "__license__",
    "Node",
    "NodeItem",
    "NodeRegistry",
    "StaticExecutionContext",
    "create_default_registry",
]
