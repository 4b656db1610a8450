"""
Type Protocols and Interfaces

Defines protocol interfaces for structural typing throughout the client.
"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from .models import Message


@runtime_checkable
class ChatRoomListener(Protocol):
    """Protocol for receiving messages decoded by a chat room session."""

    @abstractmethod
    def received(self, message: Message) -> None:
        """
        Handle a decoded inbound message.

        Called on the thread driving the session, in read order, never
        before start() and never after stop().

        Args:
            message: The decoded message.
        """
        ...


@runtime_checkable
class ByteStream(Protocol):
    """Protocol for the socket-like streams owned by a session."""

    @abstractmethod
    def fileno(self) -> int:
        """Return the underlying file descriptor."""
        ...

    @abstractmethod
    def recv(self, bufsize: int) -> bytes:
        """
        Receive data from the stream.

        Args:
            bufsize: Maximum number of bytes to receive.

        Returns:
            Received data, or b"" at end of stream.
        """
        ...

    @abstractmethod
    def sendall(self, data: bytes) -> None:
        """
        Write all of the data to the stream.

        Args:
            data: The data to send.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the stream."""
        ...
