"""Logging helpers for i3wm_ipc.

Every module logs to a logger under the ``i3wm_ipc`` namespace and the
package installs no handlers of its own. Scripts that want to watch the IPC
traffic call ``setup_logging``.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Optional, TextIO


LOGGER_NAME = "i3wm_ipc"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_console_handler: Optional[logging.Handler] = None


def setup_logging(debug: bool = False, stream: Optional[TextIO] = None) -> logging.Handler:
    """Send i3wm_ipc log records to a stream.

    INFO shows connects and subscriptions; DEBUG adds every IPC message with
    its payload and round-trip time. Calling again replaces the handler
    installed by the previous call.

    Args:
        debug: Log at DEBUG instead of INFO
        stream: Output stream (default: stderr)

    Returns:
        The installed handler
    """
    global _console_handler

    logger = logging.getLogger(LOGGER_NAME)
    if _console_handler is not None:
        logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler(stream)
    _console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_console_handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    return _console_handler


def log_ipc_message(message_type: str, payload: Any, logger: logging.Logger) -> None:
    """Log an outgoing i3 IPC request.

    Args:
        message_type: IPC message type name
        payload: Message payload
        logger: Logger instance
    """
    logger.debug(f"i3 IPC message: {message_type}")
    if payload:
        logger.debug(f"  Payload: {str(payload)[:500]}")  # First 500 chars


@contextmanager
def log_timing(operation: str, logger: logging.Logger, level: int = logging.DEBUG):
    """Context manager for logging operation timing.

    Args:
        operation: Operation description
        logger: Logger instance
        level: Level of the timing record

    Examples:
        >>> with log_timing("GET_TREE", logger, logging.INFO):
        ...     conn.get_tree()
        INFO: GET_TREE completed in 1.32ms
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.log(level, f"{operation} completed in {elapsed_ms:.2f}ms")
