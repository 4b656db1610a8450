"""
Chat Room Session

Owns the read and write streams of one chat connection, drives a
single-threaded selector loop over them and delivers decoded messages to a
listener.
"""

import logging
import selectors
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Optional

from chatroom.shared.constants import DEFAULT_MAX_READ_LENGTH
from chatroom.shared.exceptions import (
    InvalidStateError,
    NotConnectedError,
    TransportReadError,
    TransportWriteError,
)
from chatroom.shared.models import ConnectionState, Message, SessionStats, StreamEvent
from chatroom.shared.protocols import ByteStream, ChatRoomListener
from .codec import decode, encode_chat, encode_join


logger = logging.getLogger(__name__)


class ChatRoom:
    """
    A live chat session over a pair of byte streams.

    The session moves one way through CREATED -> OPEN -> CLOSED. All public
    methods and all listener callbacks run on the thread that drives
    poll(); nothing here is locked.

    Read errors are logged and leave the session open; end of stream closes
    it.
    """

    def __init__(self,
                 input_stream: ByteStream,
                 output_stream: ByteStream,
                 max_read_length: int = DEFAULT_MAX_READ_LENGTH,
                 selector: Optional[selectors.BaseSelector] = None,
                 listener: Optional[ChatRoomListener] = None,
                 address: Optional[str] = None) -> None:
        """
        Initialize the session.

        Args:
            input_stream: Stream inbound frames are read from.
            output_stream: Stream outbound frames are written to.
            max_read_length: Maximum bytes read per recv call.
            selector: Event source to register with. A DefaultSelector is
                created on start() and closed on stop() when omitted.
            listener: Receiver of decoded messages. Not owned by the session.
            address: Peer address used in log lines and errors.
        """
        if max_read_length < 1:
            raise ValueError("max_read_length must be a positive integer")

        self._input_stream = input_stream
        self._output_stream = output_stream
        self.max_read_length = max_read_length
        self._selector = selector
        self._owns_selector = selector is None
        self.address = address or "<unknown>"
        self.listener = listener

        self._state = ConnectionState.CREATED
        self._joined_username: Optional[str] = None
        self._opened_at: Optional[datetime] = None
        self._last_error: Optional[TransportReadError] = None
        self._stats = SessionStats()

    @property
    def state(self) -> ConnectionState:
        """Current lifecycle state."""
        return self._state

    @property
    def joined_username(self) -> Optional[str]:
        """Username announced by join_chat, if any."""
        return self._joined_username

    def is_open(self) -> bool:
        """Check whether the session is started and not yet stopped."""
        return self._state is ConnectionState.OPEN

    def start(self) -> None:
        """
        Open the session and register the input stream for read events.

        Raises:
            InvalidStateError: If the session was already started or stopped.
        """
        if self._state is not ConnectionState.CREATED:
            raise InvalidStateError(
                f"Cannot start a session in state {self._state.value}",
                state=self._state.value,
                operation="start"
            )

        if self._selector is None:
            self._selector = selectors.DefaultSelector()
        self._selector.register(self._input_stream, selectors.EVENT_READ)

        self._state = ConnectionState.OPEN
        self._opened_at = datetime.now()
        logger.info(f"Chat room session opened to {self.address}")
        self.handle_event(StreamEvent.OPEN_COMPLETED)

    def stop(self) -> None:
        """Close both streams. Safe to call repeatedly and before start()."""
        if self._state is ConnectionState.CLOSED:
            return

        was_open = self._state is ConnectionState.OPEN
        self._state = ConnectionState.CLOSED

        if self._selector is not None:
            if was_open:
                try:
                    self._selector.unregister(self._input_stream)
                except (KeyError, ValueError, OSError) as e:
                    logger.debug(f"Unregistering input stream failed: {e}")
            if self._owns_selector:
                self._selector.close()

        for stream in (self._input_stream, self._output_stream):
            try:
                stream.close()
            except OSError as e:
                logger.debug(f"Closing stream failed: {e}")

        logger.info(f"Chat room session to {self.address} closed")

    def join_chat(self, username: str) -> None:
        """
        Announce the username to the server.

        Args:
            username: The username to join as. Must not contain ':'.

        Raises:
            NotConnectedError: If the session is not open.
            InvalidStateError: If the session already joined.
            TransportWriteError: If the write fails.
        """
        self._require_open("join_chat")

        if self._joined_username is not None:
            raise InvalidStateError(
                f"Session already joined as {self._joined_username!r}",
                state=self._state.value,
                operation="join_chat"
            )

        self._joined_username = username
        self._write(encode_join(username))
        logger.info(f"Joined chat as {username!r}")

    def send(self, text: str) -> None:
        """
        Send a chat line.

        Args:
            text: The text to send.

        Raises:
            NotConnectedError: If the session is not open.
            TransportWriteError: If the write fails. Not retried.
        """
        self._require_open("send")
        self._write(encode_chat(text))

    def poll(self, timeout: Optional[float] = None) -> int:
        """
        Run one turn of the event loop.

        Args:
            timeout: Seconds to wait for events. None blocks until one arrives.

        Returns:
            Number of events dispatched.
        """
        if not self.is_open():
            return 0

        handled = 0
        for key, mask in self._selector.select(timeout):
            if not self.is_open():
                break
            if key.fileobj is self._input_stream and mask & selectors.EVENT_READ:
                self.handle_event(StreamEvent.HAS_BYTES_AVAILABLE)
                handled += 1
        return handled

    def run_forever(self, poll_interval: Optional[float] = None) -> None:
        """Dispatch events until the session is closed."""
        while self.is_open():
            self.poll(poll_interval)

    def handle_event(self, event: StreamEvent, error: Optional[BaseException] = None) -> None:
        """
        Dispatch a stream event.

        Args:
            event: The event reported by the event source.
            error: The underlying error for ERROR_OCCURRED.
        """
        if not self.is_open():
            logger.debug(f"Ignoring {event.value} on {self._state.value} session")
            return

        if event is StreamEvent.HAS_BYTES_AVAILABLE:
            self._read_available_bytes()
        elif event is StreamEvent.END_ENCOUNTERED:
            logger.info(f"{self.address} closed the connection")
            self.stop()
        elif event is StreamEvent.ERROR_OCCURRED:
            self._report_read_error(error)
        else:
            logger.debug(f"Stream event: {event.value}")

    def _read_available_bytes(self) -> None:
        """Read and deliver chunks while the input stream stays readable."""
        while self.is_open():
            try:
                chunk = self._input_stream.recv(self.max_read_length)
            except BlockingIOError:
                break
            except OSError as e:
                self.handle_event(StreamEvent.ERROR_OCCURRED, e)
                break

            if not chunk:
                self.handle_event(StreamEvent.END_ENCOUNTERED)
                break

            self._stats.chunks_received += 1
            self._stats.bytes_received += len(chunk)

            message = decode(chunk, self._joined_username)
            if message is None:
                self._stats.decode_failures += 1
                logger.debug(f"Dropped undecodable chunk of {len(chunk)} bytes")
            else:
                self._deliver(message)

            if not self._has_bytes_available():
                break

    def _has_bytes_available(self) -> bool:
        """Check without blocking whether the input stream is still readable."""
        if not self.is_open():
            return False
        ready = self._selector.select(0)
        return any(key.fileobj is self._input_stream for key, _ in ready)

    def _deliver(self, message: Message) -> None:
        """Hand a message to the listener unless the session has closed."""
        if not self.is_open():
            return

        listener = self.listener
        if listener is None:
            logger.debug("No listener registered, message dropped")
            return

        try:
            listener.received(message)
        except Exception:
            self._stats.listener_errors += 1
            logger.exception("Listener failed while handling a message")
            return

        self._stats.messages_delivered += 1
        self._stats.last_message_time = message.received_at

    def _report_read_error(self, error: Optional[BaseException]) -> None:
        """Record a read failure. The session stays open."""
        self._stats.read_errors += 1
        self._last_error = TransportReadError(
            f"Failed to read from {self.address}: {error}",
            address=self.address
        )
        logger.error(f"{self._last_error} (session left open)")

    def _write(self, data: bytes) -> None:
        """Write one frame synchronously."""
        try:
            self._output_stream.sendall(data)
        except OSError as e:
            logger.error(f"Write to {self.address} failed: {e}")
            raise TransportWriteError(
                f"Failed to send data: {e}", address=self.address
            ) from e

        self._stats.frames_sent += 1
        self._stats.bytes_sent += len(data)

    def _require_open(self, operation: str) -> None:
        if not self.is_open():
            raise NotConnectedError(
                f"Cannot {operation}: session is {self._state.value}",
                state=self._state.value,
                operation=operation
            )

    def get_stats(self) -> SessionStats:
        """
        Get session statistics.

        Returns:
            A copy of the current counters.
        """
        return replace(self._stats)

    def get_last_error(self) -> Optional[TransportReadError]:
        """Get the most recent read error, or None."""
        return self._last_error

    def get_session_info(self) -> Dict[str, Any]:
        """
        Get session information.

        Returns:
            Dictionary with session details.
        """
        return {
            "address": self.address,
            "state": self._state.value,
            "joined_username": self._joined_username,
            "max_read_length": self.max_read_length,
            "opened_at": self._opened_at,
            "last_error": str(self._last_error) if self._last_error else None
        }

    def __enter__(self) -> "ChatRoom":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
