"""
Chat Room Connector

Resolves the configured endpoint into a connected pair of streams and wraps
them in a new session.
"""

import logging
import socket
from typing import Optional, Tuple

from chatroom.shared.config import SessionConfig
from chatroom.shared.exceptions import ConnectionSetupError
from chatroom.shared.protocols import ByteStream
from .session import ChatRoom


logger = logging.getLogger(__name__)


class ChatRoomBuilder:
    """
    Builds chat room sessions from a SessionConfig.

    Failing to obtain streams is fatal: build() raises ConnectionSetupError
    and never retries.
    """

    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        """
        Initialize the builder.

        Args:
            config: Session configuration. Defaults to SessionConfig().
        """
        self.config = config if config is not None else SessionConfig()
        self.config.validate()

    def build(self) -> ChatRoom:
        """
        Connect to the configured endpoint and return a session in CREATED state.

        Raises:
            ConnectionSetupError: If no usable stream pair can be created.
        """
        input_stream, output_stream = self._make_streams()
        return self.build_from_streams(input_stream, output_stream)

    def build_from_streams(self, input_stream: ByteStream, output_stream: ByteStream) -> ChatRoom:
        """
        Wrap an already connected stream pair in a new session.

        Args:
            input_stream: Stream to read inbound frames from.
            output_stream: Stream to write outbound frames to.
        """
        if input_stream is None or output_stream is None:
            raise ConnectionSetupError(
                "Unexpected None instead of a stream", address=self.config.address
            )
        return ChatRoom(
            input_stream,
            output_stream,
            max_read_length=self.config.max_read_length,
            address=self.config.address
        )

    def _make_streams(self) -> Tuple[socket.socket, socket.socket]:
        """Open the socket and split it into independent read and write handles."""
        address = self.config.address
        logger.info(f"Connecting to {address}")

        try:
            read_stream = socket.create_connection((self.config.host, self.config.port))
        except OSError as e:
            logger.critical(f"Could not create streams to {address}: {e}")
            raise ConnectionSetupError(
                f"Could not create streams to {address}: {e}", address=address
            ) from e

        try:
            write_stream = read_stream.dup()
        except OSError as e:
            read_stream.close()
            logger.critical(f"Could not create output stream to {address}: {e}")
            raise ConnectionSetupError(
                f"Could not create output stream to {address}: {e}", address=address
            ) from e

        return read_stream, write_stream
