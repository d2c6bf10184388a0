"""
Data models for the events i3 pushes after a successful SUBSCRIBE.

Each ``*EventInfo`` class is one event variant and records the event
category it belongs to in ``event_type``.
"""

from enum import Enum
from typing import Any, ClassVar, List, Optional, Union

from pydantic import Field, StrictBool, StrictInt, StrictStr, field_validator

from ..core.framing import EventType
from .reply import BarConfig, Node, _Reply, coerce_enum


class Subscription(str, Enum):
    """Event names accepted by SUBSCRIBE."""

    WORKSPACE = "workspace"
    OUTPUT = "output"
    MODE = "mode"
    WINDOW = "window"
    BARCONFIG_UPDATE = "barconfig_update"
    BINDING = "binding"
    SHUTDOWN = "shutdown"


class WorkspaceChange(str, Enum):
    FOCUS = "focus"
    INIT = "init"
    EMPTY = "empty"
    URGENT = "urgent"
    RENAME = "rename"
    RELOAD = "reload"
    RESTORED = "restored"
    MOVE = "move"
    UNKNOWN = "unknown"


class OutputChange(str, Enum):
    UNSPECIFIED = "unspecified"
    UNKNOWN = "unknown"


class WindowChange(str, Enum):
    """Type of a window change."""

    NEW = "new"                          # window became managed by i3
    CLOSE = "close"
    FOCUS = "focus"
    TITLE = "title"
    FULLSCREEN_MODE = "fullscreen_mode"
    MOVE = "move"                        # changed position in the tree
    FLOATING = "floating"
    URGENT = "urgent"
    MARK = "mark"
    UNKNOWN = "unknown"


class BindingChange(str, Enum):
    RUN = "run"
    UNKNOWN = "unknown"


class InputType(str, Enum):
    KEYBOARD = "keyboard"
    MOUSE = "mouse"
    UNKNOWN = "unknown"


class ShutdownChange(str, Enum):
    RESTART = "restart"
    EXIT = "exit"
    UNKNOWN = "unknown"


class WorkspaceEventInfo(_Reply):
    """Workspace focus/init/empty/... event.

    ``old`` is only set for focus changes that had a previous workspace. If
    that workspace was empty it is destroyed by the switch but still appears
    here.
    """

    event_type: ClassVar[EventType] = EventType.WORKSPACE

    change: WorkspaceChange
    current: Optional[Node] = None
    old: Optional[Node] = None

    @field_validator("change", mode="before")
    @classmethod
    def validate_change(cls, v: Any) -> Any:
        return coerce_enum(WorkspaceChange, v)


class OutputEventInfo(_Reply):
    event_type: ClassVar[EventType] = EventType.OUTPUT

    change: OutputChange

    @field_validator("change", mode="before")
    @classmethod
    def validate_change(cls, v: Any) -> Any:
        return coerce_enum(OutputChange, v)


class ModeEventInfo(_Reply):
    """Binding mode change. ``change`` is the mode name ("default" for the default mode)."""

    event_type: ClassVar[EventType] = EventType.MODE

    change: StrictStr
    pango_markup: Optional[StrictBool] = None


class WindowEventInfo(_Reply):
    event_type: ClassVar[EventType] = EventType.WINDOW

    change: WindowChange
    container: Node = Field(..., description="The container the change applies to")

    @field_validator("change", mode="before")
    @classmethod
    def validate_change(cls, v: Any) -> Any:
        return coerce_enum(WindowChange, v)


class BarConfigEventInfo(_Reply):
    """barconfig_update event; the payload is the new bar configuration."""

    event_type: ClassVar[EventType] = EventType.BARCONFIG_UPDATE

    bar_config: BarConfig


class BindingInfo(_Reply):
    """Details about the binding that ran a command."""

    command: StrictStr = Field(..., description="Command configured for the binding")
    event_state_mask: List[StrictStr] = Field(..., description="Modifier keys of the binding")
    input_code: StrictInt = Field(
        ..., description="Key code for bindcode bindings, click count for mouse bindings, else 0"
    )
    symbol: Optional[StrictStr] = Field(default=None, description="Symbol for bindsym bindings")
    input_type: InputType

    @field_validator("input_type", mode="before")
    @classmethod
    def validate_input_type(cls, v: Any) -> Any:
        return coerce_enum(InputType, v)


class BindingEventInfo(_Reply):
    event_type: ClassVar[EventType] = EventType.BINDING

    change: BindingChange
    binding: BindingInfo

    @field_validator("change", mode="before")
    @classmethod
    def validate_change(cls, v: Any) -> Any:
        return coerce_enum(BindingChange, v)


class ShutdownEventInfo(_Reply):
    """i3 is about to restart or exit."""

    event_type: ClassVar[EventType] = EventType.SHUTDOWN

    change: ShutdownChange

    @field_validator("change", mode="before")
    @classmethod
    def validate_change(cls, v: Any) -> Any:
        return coerce_enum(ShutdownChange, v)


EventInfo = Union[
    WorkspaceEventInfo,
    OutputEventInfo,
    ModeEventInfo,
    WindowEventInfo,
    BarConfigEventInfo,
    BindingEventInfo,
    ShutdownEventInfo,
]
