"""Exception hierarchy for i3 IPC communication.

Connection failures are kept apart from failures inside an established
conversation, so callers can tell "could not reach the window manager" from
"reached it, but the exchange went wrong".
"""


class I3IpcError(Exception):
    """Base class for all i3 IPC errors."""

    pass


class ConnectError(I3IpcError):
    """Found the socket path but failed to connect to it."""

    def __init__(self, socket_path: str, cause: OSError):
        super().__init__(f"Failed to connect to i3 IPC socket {socket_path}: {cause}")
        self.socket_path = socket_path


class MessageError(I3IpcError):
    """Base class for errors while exchanging messages with i3."""

    pass


class SendError(MessageError):
    """Network error while sending a message to i3."""

    pass


class ReceiveError(MessageError):
    """Network error while receiving a message from i3."""

    pass


class ProtocolError(ReceiveError):
    """Received bytes that do not follow the i3-ipc framing.

    Raised for a bad magic string and for a reply whose message type does not
    match the request. Either means the channel is out of sync.
    """

    pass


class JsonParseError(MessageError):
    """Got a response from i3 but couldn't parse the JSON."""

    pass


class UnexpectedContentsError(MessageError):
    """Parsed the JSON but it had unexpected contents.

    The envelope was consumed completely, so the connection is still usable.
    """

    pass


class EventCategoryError(RuntimeError):
    """An event arrived with a category this client does not know.

    The category space is fixed per protocol version, so this points to a
    client/window manager version mismatch rather than to bad data.
    """

    def __init__(self, category: int):
        super().__init__(f"Unknown i3 event category {category}")
        self.category = category
