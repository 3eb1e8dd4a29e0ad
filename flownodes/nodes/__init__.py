"""
flownodes Nodes Layer.

Host-facing adapters: each node declares its fields and turns the user's
parameters into integration client calls.

Directory Structure:
    nodes/
    ├── base.py              # Node, descriptions, execution context
    ├── registry.py          # NodeRegistry
    ├── sentry/              # Sentry.io node
    └── google_contacts/     # Google Contacts node
"""

from .base import (
    ExecutionContext,
    Node,
    NodeCredential,
    NodeDescription,
    NodeError,
    NodeItem,
    NodeOperationError,
    NodeParameterError,
    NodeProperty,
    PropertyGroup,
    PropertyOption,
    PropertyType,
    ResultCollector,
    StaticExecutionContext,
    apply_limit,
    delete_success,
    return_json_array,
)
from .registry import NodeRegistry, NodeRegistryError, create_default_registry

__all__ = [
    "ExecutionContext",
    "Node",
    "NodeCredential",
    "NodeDescription",
    "NodeError",
    "NodeItem",
    "NodeOperationError",
    "NodeParameterError",
    "NodeProperty",
    "NodeRegistry",
    "NodeRegistryError",
    "PropertyGroup",
    "PropertyOption",
    "PropertyType",
    "ResultCollector",
    "StaticExecutionContext",
    "apply_limit",
    "create_default_registry",
    "delete_success",
    "return_json_array",
]
