"""
Data models for the replies i3 sends back to requests.

These models use Pydantic for validation and mirror the i3 IPC JSON schema
(https://i3wm.org/docs/ipc.html). Enumerated string fields fall back to an
UNKNOWN member for values newer window manager versions may introduce.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Any) -> Any:
    """Map a wire string onto ``enum_cls``, using UNKNOWN for unrecognized strings.

    Non-string values are passed through so that validation rejects them.
    """
    if isinstance(value, enum_cls) or not isinstance(value, str):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(f"Unknown {enum_cls.__name__} {value}")
        return enum_cls["UNKNOWN"]


class _Reply(BaseModel):
    """Replies are read-only snapshots of window manager state."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# =============================================================================
# Enumerations
# =============================================================================

class NodeType(str, Enum):
    """Container type."""

    ROOT = "root"
    OUTPUT = "output"
    CON = "con"
    FLOATING_CON = "floating_con"
    WORKSPACE = "workspace"
    DOCKAREA = "dockarea"
    UNKNOWN = "unknown"


class NodeBorder(str, Enum):
    """Container border style."""

    NORMAL = "normal"
    NONE = "none"
    PIXEL = "pixel"
    UNKNOWN = "unknown"


class NodeLayout(str, Enum):
    """Container layout."""

    SPLITH = "splith"
    SPLITV = "splitv"
    STACKED = "stacked"
    TABBED = "tabbed"
    DOCKAREA = "dockarea"
    OUTPUT = "output"
    UNKNOWN = "unknown"


class WindowProperty(str, Enum):
    """X11 window properties reported in ``window_properties``."""

    TITLE = "title"
    INSTANCE = "instance"
    CLASS = "class"
    WINDOW_ROLE = "window_role"
    TRANSIENT_FOR = "transient_for"
    MACHINE = "machine"


class ColorableBarPart(str, Enum):
    """Keys of the ``colors`` map in a bar configuration.

    The FOCUSED_BACKGROUND/STATUSLINE/SEPARATOR parts exist since i3 4.12.
    """

    BACKGROUND = "background"
    STATUSLINE = "statusline"
    SEPARATOR = "separator"
    FOCUSED_BACKGROUND = "focused_background"
    FOCUSED_STATUSLINE = "focused_statusline"
    FOCUSED_SEPARATOR = "focused_separator"
    FOCUSED_WORKSPACE_TEXT = "focused_workspace_text"
    FOCUSED_WORKSPACE_BG = "focused_workspace_bg"
    FOCUSED_WORKSPACE_BORDER = "focused_workspace_border"
    ACTIVE_WORKSPACE_TEXT = "active_workspace_text"
    ACTIVE_WORKSPACE_BG = "active_workspace_bg"
    ACTIVE_WORKSPACE_BORDER = "active_workspace_border"
    INACTIVE_WORKSPACE_TEXT = "inactive_workspace_text"
    INACTIVE_WORKSPACE_BG = "inactive_workspace_bg"
    INACTIVE_WORKSPACE_BORDER = "inactive_workspace_border"
    URGENT_WORKSPACE_TEXT = "urgent_workspace_text"
    URGENT_WORKSPACE_BG = "urgent_workspace_bg"
    URGENT_WORKSPACE_BORDER = "urgent_workspace_border"
    BINDING_MODE_TEXT = "binding_mode_text"
    BINDING_MODE_BG = "binding_mode_bg"
    BINDING_MODE_BORDER = "binding_mode_border"


# =============================================================================
# Geometry
# =============================================================================

class Rect(_Reply):
    """Rectangle in display coordinates."""

    x: StrictInt
    y: StrictInt
    width: StrictInt
    height: StrictInt

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)


# =============================================================================
# Container tree
# =============================================================================

class Node(_Reply):
    """One container of the layout tree (reply to GET_TREE).

    The tree is strict: every node owns its ``nodes`` and ``floating_nodes``.
    Traversing the tree by following the first entry of ``focus`` eventually
    reaches the one node with ``focused`` set.
    """

    id: StrictInt = Field(..., description="Internal container ID (opaque)")
    name: Optional[StrictStr] = Field(default=None, description="Title or human-readable name")
    nodetype: NodeType = Field(..., alias="type")
    border: NodeBorder
    current_border_width: StrictInt
    layout: NodeLayout
    percent: Optional[Union[StrictInt, StrictFloat]] = Field(default=None, description="Share of the parent, None if meaningless")
    rect: Rect = Field(..., description="Absolute display coordinates")
    window_rect: Rect = Field(..., description="Client window inside the container")
    deco_rect: Rect = Field(..., description="Window decoration inside the container")
    geometry: Rect = Field(..., description="Geometry the window requested when mapped")
    window: Optional[StrictInt] = Field(default=None, description="X11 window ID")
    window_properties: Optional[Dict[WindowProperty, str]] = None
    urgent: StrictBool
    focused: StrictBool
    focus: List[StrictInt] = Field(default_factory=list, description="Child IDs in focus order")
    nodes: List["Node"] = Field(default_factory=list)
    floating_nodes: List["Node"] = Field(default_factory=list)

    @field_validator("nodetype", mode="before")
    @classmethod
    def validate_nodetype(cls, v: Any) -> Any:
        return coerce_enum(NodeType, v)

    @field_validator("border", mode="before")
    @classmethod
    def validate_border(cls, v: Any) -> Any:
        return coerce_enum(NodeBorder, v)

    @field_validator("layout", mode="before")
    @classmethod
    def validate_layout(cls, v: Any) -> Any:
        return coerce_enum(NodeLayout, v)

    @field_validator("window_properties", mode="before")
    @classmethod
    def validate_window_properties(cls, v: Any) -> Any:
        """Keep recognized properties only; unknown keys are dropped."""
        if not isinstance(v, dict):
            return v

        properties = {}
        for key, value in v.items():
            try:
                prop = WindowProperty(key)
            except ValueError:
                logger.warning(f"Unknown WindowProperty {key}")
                continue
            # transient_for is a window ID (or null), the rest are strings
            if value is None:
                value = ""
            elif not isinstance(value, str):
                value = str(value)
            properties[prop] = value
        return properties

    def children(self) -> List["Node"]:
        """Tiling and floating children, in that order."""
        return self.nodes + self.floating_nodes

    def descendants(self) -> Iterator["Node"]:
        """Walk the subtree below this node in pre-order."""
        for child in self.children():
            yield child
            yield from child.descendants()

    def leaves(self) -> List["Node"]:
        """Nodes below this one that hold a window."""
        return [n for n in self.descendants() if n.window is not None and not n.nodes]

    def find_by_id(self, con_id: int) -> Optional["Node"]:
        if self.id == con_id:
            return self
        return next((n for n in self.descendants() if n.id == con_id), None)

    def find_focused(self) -> Optional["Node"]:
        """Follow the focus stack down from this node to the focused node.

        Returns:
            The focused node, or None if the focus chain ends before reaching it
        """
        node = self
        while not node.focused:
            if not node.focus:
                return None
            next_id = node.focus[0]
            node = next((c for c in node.children() if c.id == next_id), None)
            if node is None:
                return None
        return node


# =============================================================================
# Flat replies
# =============================================================================

class CommandOutcome(_Reply):
    """Outcome of one command of a RUN_COMMAND request."""

    success: StrictBool
    error: Optional[StrictStr] = Field(default=None, description="Human-readable error")
    parse_error: Optional[StrictBool] = None


class Workspace(_Reply):
    """A single workspace (reply to GET_WORKSPACES)."""

    id: Optional[StrictInt] = None
    num: StrictInt = Field(..., description="Workspace number, -1 for named workspaces")
    name: StrictStr
    visible: StrictBool
    focused: StrictBool
    urgent: StrictBool
    rect: Rect
    output: StrictStr = Field(..., description="Video output (LVDS1, VGA1, ...)")


class OutputMode(_Reply):
    """Display mode of an output (sway only)."""

    width: StrictInt
    height: StrictInt
    refresh: StrictInt


class Output(_Reply):
    """A single output (reply to GET_OUTPUTS).

    ``make`` through ``current_mode`` are only sent by sway.
    """

    name: StrictStr
    active: StrictBool
    primary: StrictBool
    current_workspace: Optional[StrictStr] = None
    rect: Rect
    make: Optional[StrictStr] = None
    model: Optional[StrictStr] = None
    serial: Optional[StrictStr] = None
    dpms: Optional[StrictBool] = None
    scale: Optional[Union[StrictInt, StrictFloat]] = None
    subpixel_hinting: Optional[StrictStr] = None
    transform: Optional[StrictStr] = None
    modes: List[OutputMode] = Field(default_factory=list)
    current_mode: Optional[OutputMode] = None


class BarConfig(_Reply):
    """Configuration of one bar block (reply to GET_BAR_CONFIG).

    ``colors`` holds the documented colour keys. Keys i3 sends that are not
    documented are kept, under their wire name, in ``undocumented_colors``.
    """

    id: StrictStr
    mode: StrictStr
    position: StrictStr
    status_command: Optional[StrictStr] = None
    font: Optional[StrictStr] = None
    workspace_buttons: StrictBool
    binding_mode_indicator: StrictBool
    verbose: StrictBool
    colors: Dict[ColorableBarPart, StrictStr]
    undocumented_colors: Dict[str, StrictStr] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def split_colors(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not isinstance(data.get("colors"), dict):
            return data

        known: Dict[ColorableBarPart, Any] = {}
        undocumented: Dict[str, Any] = dict(data.get("undocumented_colors") or {})
        for key, value in data["colors"].items():
            try:
                known[ColorableBarPart(key)] = value
            except ValueError:
                logger.warning(f"Unknown ColorableBarPart {key}")
                undocumented[key] = value

        return {**data, "colors": known, "undocumented_colors": undocumented}

    def color(self, part: str) -> Optional[str]:
        """Look up a colour by wire name, documented or not."""
        try:
            return self.colors.get(ColorableBarPart(part))
        except ValueError:
            return self.undocumented_colors.get(part)


class Version(_Reply):
    """Window manager version (reply to GET_VERSION)."""

    major: StrictInt
    minor: StrictInt
    patch: StrictInt
    human_readable: StrictStr
    loaded_config_file_name: Optional[StrictStr] = Field(
        default=None, description="Current config path (i3 >= 4.13)"
    )


class SubscribeReply(_Reply):
    """Reply to SUBSCRIBE."""

    success: StrictBool


class Config(_Reply):
    """Reply to GET_CONFIG (i3 >= 4.14)."""

    config: StrictStr = Field(..., description="Config file as most recently loaded")


Node.model_rebuild()
