"""
Node Handlers for Workflow Engine.

Each node type maps to a handler registered with ``@node_handler``. A
handler receives the node, the shared environment and the execution
context, mutates the environment, and returns the step output (or None).
Handlers signal failure by raising a ``NodeExecutionError``.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
import asyncio
import operator

from alertflow.engine.errors import (
    DataLookupError,
    LocationNotFoundError,
    MissingVariableError,
    UnknownNodeTypeError,
)
from alertflow.engine.graph import CONDITION_MET, Node
from alertflow.engine.state import (
    Environment,
    is_number,
    require_records,
    require_string_list,
)


class NodeType(str, Enum):
    """Node types the engine knows how to execute."""
    START = "start"
    FORM = "form"
    INTEGRATION = "integration"
    CONDITION = "condition"
    EMAIL = "email"
    END = "end"


# (latitude, longitude, cancellation) -> temperature
TemperatureLookup = Callable[[float, float, Optional[asyncio.Event]], Awaitable[float]]

NodeOutput = Optional[Dict[str, Any]]


@dataclass
class NodeContext:
    """
    Collaborators and settings shared by the handlers of one execution.

    Attributes:
        lookup: Temperature lookup used by integration nodes
        cancellation: Set by the caller to abandon a pending lookup
        alert_sender: Sender address of alert drafts
        alert_subject: Subject line of alert drafts
    """
    lookup: Optional[TemperatureLookup] = None
    cancellation: Optional[asyncio.Event] = None
    alert_sender: str = "weather-alerts@example.com"
    alert_subject: str = "Weather Alert"


NodeHandler = Callable[[Node, Environment, NodeContext], Awaitable[NodeOutput]]

# Registry of handlers by node type
_handler_registry: Dict[str, NodeHandler] = {}


def node_handler(node_type: NodeType) -> Callable[[NodeHandler], NodeHandler]:
    """
    Decorator to register a function as the handler of a node type.

    Usage:
        @node_handler(NodeType.FORM)
        async def process_form(node, env, context):
            ...
    """
    def decorator(func: NodeHandler) -> NodeHandler:
        _handler_registry[node_type.value] = func
        return func

    return decorator


def get_handler(node_type: str) -> Optional[NodeHandler]:
    """Get the handler registered for a node type."""
    return _handler_registry.get(node_type)


def list_node_types() -> List[str]:
    """List all node types that have a handler."""
    return list(_handler_registry.keys())


async def dispatch(node: Node, env: Environment, context: NodeContext) -> NodeOutput:
    """
    Run the handler for a node.

    Raises:
        UnknownNodeTypeError: if no handler is registered for the type
        NodeExecutionError: if the handler fails
    """
    handler = get_handler(node.type)
    if handler is None:
        raise UnknownNodeTypeError(node.type)
    return await handler(node, env, context)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def rfc3339(moment: datetime) -> str:
    return moment.isoformat(timespec="seconds").replace("+00:00", "Z")


# ============================================================
# Start / End
# ============================================================

@node_handler(NodeType.START)
async def process_start(node: Node, env: Environment, context: NodeContext) -> NodeOutput:
    return None


@node_handler(NodeType.END)
async def process_end(node: Node, env: Environment, context: NodeContext) -> NodeOutput:
    return None


# ============================================================
# Form
# ============================================================

@node_handler(NodeType.FORM)
async def process_form(node: Node, env: Environment, context: NodeContext) -> NodeOutput:
    """Copy the fields listed in ``inputFields`` from the environment."""
    fields = require_string_list(node.metadata, "inputFields")

    output = {}
    for field_name in fields:
        if field_name not in env:
            raise MissingVariableError(
                field_name, f"missing required input field: {field_name}"
            )
        output[field_name] = env.get(field_name)

    return output


# ============================================================
# Integration
# ============================================================

@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


def resolve_coordinates(node: Node, location: str) -> Optional[Coordinates]:
    """
    Find the coordinates of a location in the node's ``options``.

    Matching on the ``city`` key is exact and case-sensitive. Options
    without numeric ``lat``/``lon`` are skipped.

    Returns:
        The coordinates, or None if no option matches
    """
    for option in require_records(node.metadata, "options"):
        if option.get("city") != location:
            continue
        lat, lon = option.get("lat"), option.get("lon")
        if is_number(lat) and is_number(lon):
            return Coordinates(latitude=float(lat), longitude=float(lon))
    return None


@node_handler(NodeType.INTEGRATION)
async def process_integration(node: Node, env: Environment, context: NodeContext) -> NodeOutput:
    """Look up the current temperature for ``city`` and store it."""
    city = env.require_string("city")

    coordinates = resolve_coordinates(node, city)
    if coordinates is None:
        raise LocationNotFoundError(city)

    if context.lookup is None:
        raise DataLookupError("failed to fetch weather data: no lookup configured")

    try:
        temperature = await context.lookup(
            coordinates.latitude, coordinates.longitude, context.cancellation
        )
    except Exception as e:
        raise DataLookupError(f"failed to fetch weather data: {e}") from e

    env.set("temperature", temperature)

    return {
        "temperature": temperature,
        "location": city,
    }


# ============================================================
# Condition
# ============================================================

DEFAULT_OPERATOR = "greater_than"

OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    "greater_than": operator.gt,
    "less_than": operator.lt,
    "equals": operator.eq,
    "greater_than_or_equal": operator.ge,
    "less_than_or_equal": operator.le,
}


@node_handler(NodeType.CONDITION)
async def process_condition(node: Node, env: Environment, context: NodeContext) -> NodeOutput:
    """Compare ``temperature`` with ``threshold`` and store ``conditionMet``."""
    temperature = env.require_number("temperature")
    threshold = env.require_number("threshold")

    # Unrecognised operators compare as the default but are echoed as given
    op_name = env.get_string("operator") or DEFAULT_OPERATOR
    compare = OPERATORS.get(op_name, OPERATORS[DEFAULT_OPERATOR])

    condition_met = compare(temperature, threshold)
    env.set(CONDITION_MET, condition_met)

    outcome = "met" if condition_met else "not met"
    return {
        "conditionMet": condition_met,
        "threshold": threshold,
        "operator": op_name,
        "actualValue": temperature,
        "message": (
            f"Temperature {temperature:.1f}°C {op_name} {threshold:.1f}°C "
            f"- condition {outcome}"
        ),
    }


# ============================================================
# Email
# ============================================================

@node_handler(NodeType.EMAIL)
async def process_email(node: Node, env: Environment, context: NodeContext) -> NodeOutput:
    """
    Draft a weather alert if the preceding condition was met.

    Nothing is delivered; the draft is recorded in the step output.
    """
    if env.get_bool(CONDITION_MET) is not True:
        return {
            "emailSent": False,
            "message": "Condition not met, no email sent",
        }

    city = env.require_string("city")
    temperature = env.require_number("temperature")
    recipient = env.require_string("email")

    now = utc_now()
    draft = {
        "to": recipient,
        "from": context.alert_sender,
        "subject": context.alert_subject,
        "body": f"Weather alert for {city}! Temperature is {temperature:.1f}°C!",
        "timestamp": rfc3339(now),
    }

    return {
        "emailDraft": draft,
        "deliveryStatus": "sent",
        "messageId": f"msg_{now:%Y%m%d%H%M%S}",
        "emailSent": True,
    }
