"""Pytest configuration and shared fixtures for i3wm_ipc tests."""

import socket
from typing import Generator, Tuple

import pytest

from i3wm_ipc import I3Connection, I3EventListener

from fixtures.mock_i3_ipc import FakeI3


@pytest.fixture
def socket_pair() -> Generator[Tuple[socket.socket, socket.socket], None, None]:
    """Connected (client, server) Unix socket pair.

    The client side times out instead of hanging a test forever.
    """
    client, server = socket.socketpair()
    client.settimeout(5.0)
    server.settimeout(5.0)

    yield client, server

    client.close()
    server.close()


@pytest.fixture
def fake_i3(socket_pair) -> FakeI3:
    return FakeI3(socket_pair[1])


@pytest.fixture
def connection(socket_pair) -> I3Connection:
    return I3Connection(socket_pair[0])


@pytest.fixture
def listener(socket_pair) -> I3EventListener:
    return I3EventListener(socket_pair[0])
