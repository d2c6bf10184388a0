"""Decode i3 IPC payloads into typed models.

Two stages, each with its own error:
- payload text -> JSON value (JsonParseError)
- JSON value -> model (UnexpectedContentsError)
"""

import json
import logging
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, StrictStr, TypeAdapter, ValidationError

from ..models.event import (
    BarConfigEventInfo,
    BindingEventInfo,
    EventInfo,
    ModeEventInfo,
    OutputEventInfo,
    ShutdownEventInfo,
    WindowEventInfo,
    WorkspaceEventInfo,
)
from ..models.reply import (
    BarConfig,
    CommandOutcome,
    Config,
    Node,
    Output,
    Rect,
    SubscribeReply,
    Version,
    Workspace,
)
from .errors import EventCategoryError, JsonParseError, UnexpectedContentsError
from .framing import EventType


logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_COMMAND_OUTCOMES = TypeAdapter(List[CommandOutcome])
_WORKSPACES = TypeAdapter(List[Workspace])
_OUTPUTS = TypeAdapter(List[Output])
_STRINGS = TypeAdapter(List[StrictStr])

_EVENT_MODELS: Dict[EventType, Type[BaseModel]] = {
    EventType.WORKSPACE: WorkspaceEventInfo,
    EventType.OUTPUT: OutputEventInfo,
    EventType.MODE: ModeEventInfo,
    EventType.WINDOW: WindowEventInfo,
    EventType.BINDING: BindingEventInfo,
    EventType.SHUTDOWN: ShutdownEventInfo,
}


def decode_json(payload: str) -> Any:
    """Parse a payload as JSON.

    Raises:
        JsonParseError: If the payload is not valid JSON
    """
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise JsonParseError(f"Got a response from i3 but couldn't parse the JSON: {e}") from e


def _validate(model: Type[M], value: Any) -> M:
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise UnexpectedContentsError(f"Unexpected {model.__name__} contents: {e}") from e


def _validate_list(adapter: TypeAdapter, value: Any, what: str) -> list:
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        raise UnexpectedContentsError(f"Unexpected {what} contents: {e}") from e


def decode_rect(value: Any) -> Rect:
    return _validate(Rect, value)


def decode_node(value: Any) -> Node:
    """Build the container tree rooted at ``value``.

    Args:
        value: JSON object of one container, children included

    Returns:
        Root Node with all children decoded recursively

    Raises:
        UnexpectedContentsError: If a required field is missing or mistyped anywhere in the tree
    """
    return _validate(Node, value)


def decode_bar_config(value: Any) -> BarConfig:
    return _validate(BarConfig, value)


def decode_command_outcomes(value: Any) -> List[CommandOutcome]:
    """Decode a RUN_COMMAND reply; one outcome per command, in order."""
    return _validate_list(_COMMAND_OUTCOMES, value, "command reply")


def decode_workspaces(value: Any) -> List[Workspace]:
    return _validate_list(_WORKSPACES, value, "workspace list")


def decode_outputs(value: Any) -> List[Output]:
    return _validate_list(_OUTPUTS, value, "output list")


def decode_string_list(value: Any) -> List[str]:
    """Decode GET_MARKS, GET_BAR_CONFIG (ids) and GET_BINDING_MODES replies."""
    return _validate_list(_STRINGS, value, "string list")


def decode_version(value: Any) -> Version:
    return _validate(Version, value)


def decode_config(value: Any) -> Config:
    return _validate(Config, value)


def decode_subscribe(value: Any) -> SubscribeReply:
    return _validate(SubscribeReply, value)


def decode_event(category: int, payload: str) -> EventInfo:
    """Decode the payload of an event.

    Args:
        category: Event message type with the event bit already stripped
        payload: JSON payload text

    Returns:
        The event variant for ``category``

    Raises:
        EventCategoryError: If ``category`` is not a known event category
        JsonParseError: If the payload is not valid JSON
        UnexpectedContentsError: If the payload does not match the event schema
    """
    try:
        event_type = EventType(category)
    except ValueError:
        raise EventCategoryError(category) from None

    value = decode_json(payload)
    logger.debug(f"Decoding {event_type.name} event")

    if event_type == EventType.BARCONFIG_UPDATE:
        return BarConfigEventInfo(bar_config=decode_bar_config(value))
    return _validate(_EVENT_MODELS[event_type], value)
