"""i3 IPC request/reply client.

Correlation is purely positional: the next reply on the socket belongs to the
most recent request. A connection must therefore only be used by one caller
at a time, and a connection used for requests is never subscribed to events.
"""

import logging
import socket
from pathlib import Path
from typing import List, Optional, Union

from ..logging_config import log_ipc_message, log_timing
from ..models.reply import BarConfig, CommandOutcome, Config, Node, Output, Version, Workspace
from . import decoder
from .errors import ConnectError, ProtocolError
from .framing import Channel, MessageType, read_message, send_message


logger = logging.getLogger(__name__)


def open_socket(socket_path: Union[str, Path], timeout: Optional[float] = None) -> socket.socket:
    """Connect a Unix stream socket to the i3 IPC socket.

    Args:
        socket_path: Path of the i3 IPC socket
        timeout: Socket timeout in seconds (default: block forever)

    Returns:
        Connected socket

    Raises:
        ConnectError: If the socket cannot be opened
    """
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.settimeout(timeout)
        sock.connect(str(socket_path))
    except OSError as e:
        sock.close()
        logger.error(f"Failed to connect to i3 IPC socket {socket_path}: {e}")
        raise ConnectError(str(socket_path), e) from e

    logger.info(f"Connected to i3 IPC socket {socket_path}")
    return sock


class IpcSocket:
    """One exclusively owned channel to i3."""

    def __init__(self, channel: Channel):
        """
        Args:
            channel: Connected byte channel (socket); owned by this object from now on
        """
        self._channel = channel

    @classmethod
    def connect(cls, socket_path: Union[str, Path], timeout: Optional[float] = None):
        """Open a new connection to the i3 IPC socket at ``socket_path``.

        Raises:
            ConnectError: If the socket cannot be opened
        """
        return cls(open_socket(socket_path, timeout))

    def close(self) -> None:
        """Close the channel. No goodbye message is needed."""
        close = getattr(self._channel, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request(self, message_type: MessageType, payload: str = "") -> str:
        """Send one request and wait for its reply.

        Args:
            message_type: Request type
            payload: Request payload

        Returns:
            Raw reply payload

        Raises:
            SendError: If sending fails
            ReceiveError: If receiving fails
            ProtocolError: If the reply is not framed correctly or has another type
        """
        log_ipc_message(message_type.name, payload, logger)
        with log_timing(f"IPC {message_type.name}", logger):
            send_message(self._channel, message_type, payload)
            reply_type, reply = read_message(self._channel)

        if reply_type != message_type:
            raise ProtocolError(
                f"Reply type {reply_type:#x} does not match request type "
                f"{int(message_type)} ({message_type.name})"
            )
        return reply


class I3Connection(IpcSocket):
    """Request/reply connection to i3.

    Usage:
        with I3Connection.connect("/run/user/1000/i3/ipc-socket.1234") as conn:
            tree = conn.get_tree()
            outcomes = conn.run_command("workspace 2")
    """

    def run_command(self, command: str) -> List[CommandOutcome]:
        """Run i3 commands (as bound to keys in the config file).

        Args:
            command: One or more commands separated by ';'

        Returns:
            One outcome per command that was parsed, in order
        """
        reply = self.request(MessageType.RUN_COMMAND, command)
        outcomes = decoder.decode_command_outcomes(decoder.decode_json(reply))
        failed = [o for o in outcomes if not o.success]
        if failed:
            logger.debug(f"RUN_COMMAND: {len(failed)}/{len(outcomes)} command(s) failed")
        return outcomes

    def get_workspaces(self) -> List[Workspace]:
        reply = self.request(MessageType.GET_WORKSPACES)
        return decoder.decode_workspaces(decoder.decode_json(reply))

    def get_outputs(self) -> List[Output]:
        reply = self.request(MessageType.GET_OUTPUTS)
        return decoder.decode_outputs(decoder.decode_json(reply))

    def get_tree(self) -> Node:
        """Get the layout tree, which includes every container.

        Returns:
            Root container with full window hierarchy
        """
        reply = self.request(MessageType.GET_TREE)
        return decoder.decode_node(decoder.decode_json(reply))

    def get_marks(self) -> List[str]:
        """Get all container marks. The order is undefined."""
        reply = self.request(MessageType.GET_MARKS)
        return decoder.decode_string_list(decoder.decode_json(reply))

    def get_bar_ids(self) -> List[str]:
        """Get the IDs of all configured bars."""
        reply = self.request(MessageType.GET_BAR_CONFIG)
        return decoder.decode_string_list(decoder.decode_json(reply))

    def get_bar_config(self, bar_id: str) -> BarConfig:
        """Get the configuration of the bar with the given ID.

        Args:
            bar_id: Bar ID as returned by get_bar_ids()
        """
        if not bar_id:
            raise ValueError("bar_id must not be empty (an empty payload lists bar IDs)")
        reply = self.request(MessageType.GET_BAR_CONFIG, bar_id)
        return decoder.decode_bar_config(decoder.decode_json(reply))

    def get_version(self) -> Version:
        reply = self.request(MessageType.GET_VERSION)
        return decoder.decode_version(decoder.decode_json(reply))

    def get_binding_modes(self) -> List[str]:
        """Get all configured binding modes (i3 >= 4.13)."""
        reply = self.request(MessageType.GET_BINDING_MODES)
        return decoder.decode_string_list(decoder.decode_json(reply))

    def get_config(self) -> Config:
        """Get the config file as last loaded by i3 (i3 >= 4.14)."""
        reply = self.request(MessageType.GET_CONFIG)
        return decoder.decode_config(decoder.decode_json(reply))
