"""
Node Base Classes.

A node is the unit a workflow host loads and runs. This module defines:
- NodeDescription / NodeProperty: the declared, user-configurable fields
- ExecutionContext: what the host provides at run time (input items,
  parameter accessor, credentials)
- NodeItem / ResultCollector: the output envelope and its assembly
- Node: the base class with the shared execution loop

Execution Model:
    The selected (resource, operation) pair is read once, from item 0,
    and resolved through the node's command table. The handler then runs
    once per input item, strictly in input order, awaiting each HTTP call
    before starting the next. Every handler builds its own query/body so
    nothing leaks from one item to the next.

Error Handling:
    Nodes do not recover from errors. Integration errors, missing
    parameters and unsupported operations propagate to the host, which
    decides whether the workflow halts.

Usage:
    class EchoNode(Node[EchoClient]):
        @property
        def description(self) -> NodeDescription:
            return NodeDescription(display_name="Echo", name="echo", ...)

        def handlers(self):
            return {("message", "get"): self._message_get}

        def create_client(self, context):
            return EchoClient()

        async def _message_get(self, client, context, index):
            return await client.get(context.get_node_parameter("id", index))

    items = await EchoNode().execute(context)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from flownodes.integrations.base import IntegrationClient

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class NodeError(Exception):
    """Base exception for node execution errors."""

    def __init__(self, message: str, node: str):
        super().__init__(message)
        self.node = node

    def __str__(self) -> str:
        return f"[{self.node}] {self.args[0]}"


class NodeOperationError(NodeError):
    """Raised when a resource/operation pair is not supported."""

    pass


class NodeParameterError(NodeError):
    """Raised when a required parameter is missing."""

    def __init__(self, message: str, node: str, *, parameter: str):
        super().__init__(message, node)
        self.parameter = parameter


# =============================================================================
# Description Schema
# =============================================================================


class PropertyType(Enum):
    """Type of a user-configurable property."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OPTIONS = "options"
    MULTI_OPTIONS = "multiOptions"
    DATE_TIME = "dateTime"
    COLLECTION = "collection"
    FIXED_COLLECTION = "fixedCollection"


@dataclass(frozen=True, slots=True)
class PropertyOption:
    """One choice of an options/multiOptions property."""

    name: str
    value: Any
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "value": self.value}
        if self.description is not None:
            result["description"] = self.description
        return result


@dataclass(frozen=True, slots=True)
class PropertyGroup:
    """A named group of fields inside a fixedCollection property."""

    name: str
    display_name: str
    values: tuple[NodeProperty, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "values": [value.to_dict() for value in self.values],
        }


@dataclass(frozen=True, slots=True)
class NodeProperty:
    """
    A user-configurable field.

    `options` holds PropertyOption choices for options/multiOptions, nested
    NodeProperty fields for a collection, and PropertyGroup entries for a
    fixedCollection.

    `show` restricts visibility, e.g. {"resource": ("issue",),
    "operation": ("update",)}.

    Example:
        NodeProperty(
            display_name="Issue ID",
            name="issueId",
            type=PropertyType.STRING,
            required=True,
            show={"resource": ("issue",), "operation": ("get",)},
        )
    """

    display_name: str
    name: str
    type: PropertyType
    default: Any = None
    description: str | None = None
    required: bool = False
    placeholder: str | None = None
    options: tuple[PropertyOption | NodeProperty | PropertyGroup, ...] = ()
    show: Mapping[str, tuple[Any, ...]] | None = None
    type_options: Mapping[str, Any] | None = None

    def is_visible(self, parameters: Mapping[str, Any]) -> bool:
        """Whether the property is shown for the given parameter values."""
        if not self.show:
            return True
        return all(parameters.get(name) in values for name, values in self.show.items())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type.value,
            "default": self.default,
        }

        if self.description is not None:
            result["description"] = self.description
        if self.required:
            result["required"] = True
        if self.placeholder is not None:
            result["placeholder"] = self.placeholder
        if self.options:
            result["options"] = [option.to_dict() for option in self.options]
        if self.show:
            result["displayOptions"] = {
                "show": {name: list(values) for name, values in self.show.items()}
            }
        if self.type_options:
            result["typeOptions"] = dict(self.type_options)

        return result


@dataclass(frozen=True, slots=True)
class NodeCredential:
    """A credential type the node can use."""

    name: str
    required: bool = True
    show: Mapping[str, tuple[Any, ...]] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "required": self.required}
        if self.show:
            result["displayOptions"] = {
                "show": {name: list(values) for name, values in self.show.items()}
            }
        return result


@dataclass(frozen=True, slots=True)
class NodeDescription:
    """Static description of a node, as presented to the host."""

    display_name: str
    name: str
    description: str
    version: int = 1
    group: tuple[str, ...] = ()
    subtitle: str | None = None
    defaults: Mapping[str, Any] = field(default_factory=dict)
    credentials: tuple[NodeCredential, ...] = ()
    properties: tuple[NodeProperty, ...] = ()

    def get_property(self, name: str) -> NodeProperty | None:
        """First top-level property with the given name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def operations_for(self, resource: str) -> list[str]:
        """Operation values declared for a resource."""
        for prop in self.properties:
            if prop.name == "operation" and prop.is_visible({"resource": resource}):
                return [option.value for option in prop.options]
        return []

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "group": list(self.group),
            "defaults": dict(self.defaults),
            "inputs": ["main"],
            "outputs": ["main"],
            "credentials": [credential.to_dict() for credential in self.credentials],
            "properties": [prop.to_dict() for prop in self.properties],
        }
        if self.subtitle is not None:
            result["subtitle"] = self.subtitle
        return result


# =============================================================================
# Execution Data
# =============================================================================


@dataclass(frozen=True, slots=True)
class NodeItem:
    """One item flowing between nodes."""

    json: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"json": self.json}


def return_json_array(data: Sequence[dict[str, Any]]) -> list[NodeItem]:
    """Wrap plain JSON objects as output items."""
    return [NodeItem(json=entry) for entry in data]


class ResultCollector:
    """
    Accumulates per-item results into one flat, ordered list.

    - list results are spliced in, element by element
    - single objects are appended
    - None (nothing returned) is skipped

    Results are never deduplicated or reordered.
    """

    def __init__(self) -> None:
        self._results: list[dict[str, Any]] = []

    def add(self, result: Any) -> None:
        if result is None:
            return
        if isinstance(result, list):
            self._results.extend(result)
        else:
            self._results.append(result)

    def to_items(self) -> list[NodeItem]:
        return return_json_array(self._results)

    def __len__(self) -> int:
        return len(self._results)


def delete_success() -> dict[str, Any]:
    """Marker returned for delete operations, whatever the API answered."""
    return {"success": True}


def apply_limit(items: list[Any] | None, return_all: bool, limit: int | None) -> list[Any]:
    """
    Client-side truncation of a listing.

    A None listing is treated as empty. When return_all is off the list is
    cut to `limit` items, even if the request already carried the limit.
    """
    items = items if items is not None else []
    if return_all or limit is None:
        return items
    return items[:limit]


# =============================================================================
# Execution Context
# =============================================================================

_MISSING: Any = object()


@runtime_checkable
class ExecutionContext(Protocol):
    """
    What the host provides to a running node.

    Implementations:
        - StaticExecutionContext: in-memory values (embedding, tests)
        - host adapters wrapping the platform's own execute functions
    """

    def get_input_data(self) -> list[NodeItem]:
        """Input items of this execution."""
        ...

    def get_node_parameter(self, name: str, item_index: int, default: Any = _MISSING) -> Any:
        """Value of a parameter for an item; default when unset."""
        ...

    def get_credentials(self, name: str) -> dict[str, Any] | None:
        """Resolved credential mapping for a credential type."""
        ...


@dataclass
class StaticExecutionContext:
    """
    ExecutionContext over in-memory values.

    `parameters` is either one mapping shared by every item or a list with
    one mapping per input item.

    Example:
        context = StaticExecutionContext(
            items=[NodeItem(json={})],
            parameters={"resource": "issue", "operation": "get", "issueId": "42"},
            credentials={"sentryioApi": {"token": "..."}},
            node="sentryio",
        )
    """

    items: list[NodeItem] = field(default_factory=lambda: [NodeItem(json={})])
    parameters: Mapping[str, Any] | Sequence[Mapping[str, Any]] = field(default_factory=dict)
    credentials: Mapping[str, dict[str, Any]] = field(default_factory=dict)
    node: str = "node"

    def get_input_data(self) -> list[NodeItem]:
        return list(self.items)

    def _parameters_for(self, item_index: int) -> Mapping[str, Any]:
        if isinstance(self.parameters, Mapping):
            return self.parameters
        if item_index >= len(self.parameters):
            return {}
        return self.parameters[item_index]

    def get_node_parameter(self, name: str, item_index: int, default: Any = _MISSING) -> Any:
        parameters = self._parameters_for(item_index)
        if name in parameters:
            return parameters[name]
        if default is not _MISSING:
            return default
        raise NodeParameterError(
            f"Could not get parameter '{name}' for item {item_index}",
            self.node,
            parameter=name,
        )

    def get_credentials(self, name: str) -> dict[str, Any] | None:
        return self.credentials.get(name)


# =============================================================================
# Node
# =============================================================================

ClientT = TypeVar("ClientT", bound=IntegrationClient)

Handler = Callable[[ClientT, ExecutionContext, int], Awaitable[Any]]


class Node(ABC, Generic[ClientT]):
    """
    Base class for integration nodes.

    Contract:
        - description: declared fields and credentials
        - handlers: the (resource, operation) -> handler command table
        - create_client: an IntegrationClient built from the context's
          credentials
        - load_options: optional dynamic option lists for the UI
    """

    @property
    @abstractmethod
    def description(self) -> NodeDescription:
        ...

    @abstractmethod
    def handlers(self) -> dict[tuple[str, str], Handler]:
        ...

    @abstractmethod
    def create_client(self, context: ExecutionContext) -> ClientT:
        ...

    @property
    def name(self) -> str:
        return self.description.name

    def get_handler(self, resource: str, operation: str) -> Handler:
        """
        Resolve the handler for a resource/operation pair.

        Raises:
            NodeOperationError: If the pair is not supported
        """
        handler = self.handlers().get((resource, operation))
        if handler is None:
            raise NodeOperationError(
                f"The operation '{operation}' is not supported for resource '{resource}'",
                self.name,
            )
        return handler

    async def load_options(self, method: str, context: ExecutionContext) -> list[PropertyOption]:
        """Dynamic options for a property. Nodes without any raise."""
        raise NodeOperationError(f"Unknown options method '{method}'", self.name)

    async def execute(self, context: ExecutionContext) -> list[list[NodeItem]]:
        """
        Run the node over every input item.

        Returns:
            One output branch holding every produced item, in order
        """
        items = context.get_input_data()
        resource = context.get_node_parameter("resource", 0)
        operation = context.get_node_parameter("operation", 0)
        handler = self.get_handler(resource, operation)

        logger.info(f"[{self.name}] {resource}:{operation} for {len(items)} item(s)")

        collector = ResultCollector()
        async with self.create_client(context) as client:
            for index in range(len(items)):
                collector.add(await handler(client, context, index))

        logger.debug(f"[{self.name}] {resource}:{operation} produced {len(collector)} item(s)")
        return [collector.to_items()]

    def __repr__(self) -> str:
        return f"<Node {self.name}>"
