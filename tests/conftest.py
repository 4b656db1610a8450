"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the test suite.
"""

import logging
import socket
from typing import Generator, List, Tuple
from unittest.mock import Mock

import pytest

from chatroom.client.network.session import ChatRoom
from chatroom.shared.config import SessionConfig
from chatroom.shared.models import Message


CHAT_ENV_VARS = (
    "CHAT_HOST",
    "CHAT_PORT",
    "CHAT_MAX_READ_LENGTH",
    "CHAT_LOG_LEVEL",
    "CHAT_LOG_FILE",
    "CHAT_LOG_COLORS",
    "CHAT_LOG_JSON",
    "CHAT_LOG_MAX_SIZE",
    "CHAT_LOG_BACKUP_COUNT",
)


class RecordingListener:
    """Listener that keeps every message it receives."""

    def __init__(self) -> None:
        self.messages: List[Message] = []

    def received(self, message: Message) -> None:
        self.messages.append(message)


@pytest.fixture(autouse=True)
def clean_chat_env(monkeypatch) -> None:
    """Keep CHAT_* variables from the developer's shell out of the tests."""
    for name in CHAT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    root_logger = logging.getLogger()
    level = root_logger.level
    handlers = root_logger.handlers[:]

    yield

    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture
def session_config() -> SessionConfig:
    """Provide a test session configuration."""
    return SessionConfig(host="127.0.0.1", port=8080, max_read_length=4096)


@pytest.fixture
def listener() -> RecordingListener:
    """Provide a listener that records deliveries."""
    return RecordingListener()


@pytest.fixture
def mock_selector() -> Mock:
    """Provide a selector that never reports further readiness."""
    selector = Mock()
    selector.select.return_value = []
    return selector


@pytest.fixture
def mock_streams() -> Tuple[Mock, Mock]:
    """Provide mock input and output streams."""
    input_stream = Mock(spec=socket.socket)
    output_stream = Mock(spec=socket.socket)
    return input_stream, output_stream


@pytest.fixture
def mock_room(mock_streams, mock_selector, listener) -> ChatRoom:
    """Provide a session over mock streams."""
    input_stream, output_stream = mock_streams
    return ChatRoom(
        input_stream,
        output_stream,
        max_read_length=4096,
        selector=mock_selector,
        listener=listener,
        address="test:0"
    )


@pytest.fixture
def socket_pair() -> Generator[Tuple[socket.socket, socket.socket], None, None]:
    """Provide a connected (client side, server side) socket pair."""
    client_side, server_side = socket.socketpair()
    server_side.settimeout(2.0)
    yield client_side, server_side
    client_side.close()
    server_side.close()


@pytest.fixture
def paired_room(socket_pair, listener) -> Generator[Tuple[ChatRoom, socket.socket], None, None]:
    """Provide a session over a real socket pair and the peer's end of it."""
    client_side, server_side = socket_pair
    room = ChatRoom(client_side, client_side.dup(), max_read_length=4096, listener=listener)
    yield room, server_side
    room.stop()
