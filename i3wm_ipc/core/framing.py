"""i3-ipc message framing.

Every message, in both directions, is:

    "i3-ipc" | payload length (u32 LE) | message type (u32 LE) | payload

Events pushed by i3 use the same envelope with the highest bit of the
message type set.
"""

import logging
from enum import IntEnum
from typing import Protocol, Tuple

from .errors import ProtocolError, ReceiveError, SendError


logger = logging.getLogger(__name__)

MAGIC = b"i3-ipc"
HEADER_SIZE = len(MAGIC) + 4 + 4
EVENT_MASK = 1 << 31


class MessageType(IntEnum):
    """Request message types (GET_BAR_CONFIG doubles as GET_BAR_IDS)."""

    RUN_COMMAND = 0
    GET_WORKSPACES = 1
    SUBSCRIBE = 2
    GET_OUTPUTS = 3
    GET_TREE = 4
    GET_MARKS = 5
    GET_BAR_CONFIG = 6
    GET_VERSION = 7
    GET_BINDING_MODES = 8
    GET_CONFIG = 9


class EventType(IntEnum):
    """Event categories, i.e. event message types with the event bit stripped."""

    WORKSPACE = 0
    OUTPUT = 1
    MODE = 2
    WINDOW = 3
    BARCONFIG_UPDATE = 4
    BINDING = 5
    SHUTDOWN = 6


class Channel(Protocol):
    """Connected, blocking byte stream (a stream socket)."""

    def sendall(self, data: bytes) -> None: ...

    def recv(self, bufsize: int) -> bytes: ...


def encode_message(message_type: int, payload: str = "") -> bytes:
    """Build one IPC envelope.

    Args:
        message_type: Message type tag
        payload: Payload text (command, bar id, subscription list, ...)

    Returns:
        Envelope bytes ready to be written to the socket
    """
    payload_bytes = payload.encode("utf-8")
    return (
        MAGIC
        + len(payload_bytes).to_bytes(4, "little")
        + int(message_type).to_bytes(4, "little")
        + payload_bytes
    )


def send_message(channel: Channel, message_type: int, payload: str = "") -> None:
    """Write one envelope to the channel.

    Raises:
        SendError: If writing to the channel fails
    """
    data = encode_message(message_type, payload)
    logger.debug(f"IPC send: type={message_type} payload_len={len(data) - HEADER_SIZE}")
    try:
        channel.sendall(data)
    except OSError as e:
        raise SendError(f"Failed to send i3 IPC message (type {message_type}): {e}") from e


def read_exact(channel: Channel, size: int) -> bytes:
    """Read exactly ``size`` bytes, looping over short reads.

    Raises:
        ReceiveError: If the channel fails or closes before ``size`` bytes arrive
    """
    data = bytearray()
    while len(data) < size:
        try:
            chunk = channel.recv(size - len(data))
        except InterruptedError:
            continue
        except OSError as e:
            raise ReceiveError(f"Failed to receive i3 IPC message: {e}") from e
        if not chunk:
            raise ReceiveError(
                f"Unexpected end of file: got {len(data)} of {size} bytes"
            )
        data.extend(chunk)
    return bytes(data)


def read_message(channel: Channel) -> Tuple[int, str]:
    """Read one envelope from the channel.

    Returns:
        Tuple of (message type, payload text). Invalid UTF-8 in the payload is
        replaced, never rejected.

    Raises:
        ProtocolError: If the magic string does not match
        ReceiveError: If the channel fails or closes mid-message
    """
    magic = read_exact(channel, len(MAGIC))
    if magic != MAGIC:
        raise ProtocolError(
            f"unexpected magic string: expected {MAGIC!r} but got {magic!r}"
        )

    payload_len = int.from_bytes(read_exact(channel, 4), "little")
    message_type = int.from_bytes(read_exact(channel, 4), "little")
    payload = read_exact(channel, payload_len).decode("utf-8", errors="replace")

    logger.debug(f"IPC recv: type={message_type:#x} payload_len={payload_len}")
    return message_type, payload


def is_event(message_type: int) -> bool:
    """Whether a received message type carries the event bit."""
    return bool(message_type & EVENT_MASK)


def event_category(message_type: int) -> int:
    """Strip the event bit, leaving the event category."""
    return message_type & ~EVENT_MASK
