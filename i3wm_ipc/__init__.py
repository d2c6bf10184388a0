"""i3wm_ipc - client library for the i3/sway IPC protocol.

This package provides:
- i3-ipc message framing over a connected Unix socket
- Request/reply client with one method per request type
- Event subscription and a blocking event iterator
- Typed, immutable models of replies and events
"""

from .core.connection import I3Connection, open_socket
from .core.errors import (
    ConnectError,
    EventCategoryError,
    I3IpcError,
    JsonParseError,
    MessageError,
    ProtocolError,
    ReceiveError,
    SendError,
    UnexpectedContentsError,
)
from .core.framing import EventType, MessageType
from .core.listener import EventIterator, I3EventListener
from .logging_config import setup_logging
from .models import *  # noqa: F401,F403
from .models import __all__ as _models_all

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "__version__",
    "ConnectError",
    "EventCategoryError",
    "EventIterator",
    "EventType",
    "I3Connection",
    "I3EventListener",
    "I3IpcError",
    "JsonParseError",
    "MessageError",
    "MessageType",
    "ProtocolError",
    "ReceiveError",
    "SendError",
    "UnexpectedContentsError",
    "open_socket",
    "setup_logging",
] + _models_all
