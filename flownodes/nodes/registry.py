"""
Node Registry.

The registry is what a host loads nodes from:
- Registration with validation
- Lookup by name
- Description export

Usage:
    registry = create_default_registry()

    node = registry.get_required("sentryio")
    [items] = await node.execute(context)

    descriptions = registry.to_descriptions()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from flownodes.config import NodeSettings

    from .base import Node

logger = logging.getLogger(__name__)


class NodeRegistryError(Exception):
    """Error in node registry operations."""

    pass


class NodeRegistry:
    """
    Registry of available nodes, keyed by description name.

    Example:
        registry = NodeRegistry()
        registry.register(SentryNode())

        node = registry.get("sentryio")
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}

    def register(self, node: Node) -> None:
        """
        Register a node.

        Raises:
            NodeRegistryError: If the name is taken or the node is invalid
        """
        if node.name in self._nodes:
            raise NodeRegistryError(
                f"Node '{node.name}' already registered. Use a unique name or unregister first."
            )

        self._validate_node(node)

        self._nodes[node.name] = node
        logger.info(f"[node_registry] Registered node: {node.name}")

    def unregister(self, name: str) -> bool:
        """
        Unregister a node by name.

        Returns:
            True if the node was unregistered, False if not found
        """
        if name in self._nodes:
            del self._nodes[name]
            logger.info(f"[node_registry] Unregistered node: {name}")
            return True
        return False

    def get(self, name: str) -> Node | None:
        return self._nodes.get(name)

    def get_required(self, name: str) -> Node:
        """
        Get a node by name, raising if not found.

        Raises:
            NodeRegistryError: If node not found
        """
        node = self._nodes.get(name)
        if node is None:
            available = list(self._nodes.keys())
            raise NodeRegistryError(f"Node '{name}' not found. Available nodes: {available}")
        return node

    def list_names(self) -> list[str]:
        return list(self._nodes.keys())

    def to_descriptions(self) -> list[dict[str, Any]]:
        """Descriptions of every registered node, for the host's node catalogue."""
        return [node.description.to_dict() for node in self._nodes.values()]

    def _validate_node(self, node: Node) -> None:
        """
        Every node needs a display name, a resource selector, and an
        operation selector whose values all have a handler.
        """
        description = node.description
        if not description.display_name:
            raise NodeRegistryError(f"Node '{node.name}' must have a display name")

        resource = description.get_property("resource")
        if resource is None or not resource.options:
            raise NodeRegistryError(f"Node '{node.name}' must declare a 'resource' property")

        handlers = node.handlers()
        for option in resource.options:
            for operation in description.operations_for(option.value):
                if (option.value, operation) not in handlers:
                    raise NodeRegistryError(
                        f"Node '{node.name}' declares {option.value}:{operation} without a handler"
                    )

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: str) -> bool:
        return name in self._nodes

    def __repr__(self) -> str:
        return f"<NodeRegistry nodes={list(self._nodes.keys())}>"


def create_default_registry(settings: NodeSettings | None = None) -> NodeRegistry:
    """
    Create a registry holding every built-in node.

    Args:
        settings: Runtime settings passed to each node (defaults to env)
    """
    from flownodes.nodes.google_contacts import GoogleContactsNode
    from flownodes.nodes.sentry import SentryNode

    registry = NodeRegistry()
    registry.register(SentryNode(settings))
    registry.register(GoogleContactsNode(settings))
    return registry
