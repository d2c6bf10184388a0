"""Typed replies and events of the i3 IPC protocol."""

from .reply import (
    BarConfig,
    ColorableBarPart,
    CommandOutcome,
    Config,
    Node,
    NodeBorder,
    NodeLayout,
    NodeType,
    Output,
    OutputMode,
    Rect,
    SubscribeReply,
    Version,
    WindowProperty,
    Workspace,
)
from .event import (
    BarConfigEventInfo,
    BindingChange,
    BindingEventInfo,
    BindingInfo,
    EventInfo,
    InputType,
    ModeEventInfo,
    OutputChange,
    OutputEventInfo,
    ShutdownChange,
    ShutdownEventInfo,
    Subscription,
    WindowChange,
    WindowEventInfo,
    WorkspaceChange,
    WorkspaceEventInfo,
)

__all__ = [
    "BarConfig",
    "BarConfigEventInfo",
    "BindingChange",
    "BindingEventInfo",
    "BindingInfo",
    "ColorableBarPart",
    "CommandOutcome",
    "Config",
    "EventInfo",
    "InputType",
    "ModeEventInfo",
    "Node",
    "NodeBorder",
    "NodeLayout",
    "NodeType",
    "Output",
    "OutputChange",
    "OutputEventInfo",
    "OutputMode",
    "Rect",
    "ShutdownChange",
    "ShutdownEventInfo",
    "SubscribeReply",
    "Subscription",
    "Version",
    "WindowChange",
    "WindowEventInfo",
    "WindowProperty",
    "Workspace",
    "WorkspaceChange",
    "WorkspaceEventInfo",
]
