"""
Data Models

Defines data classes and models used by the chat room client.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class MessageOrigin(Enum):
    """Who sent a message, relative to the locally joined user."""
    SELF = "self"
    OTHER = "other"


class ConnectionState(Enum):
    """Lifecycle states of a chat room session."""
    CREATED = "created"
    OPEN = "open"
    CLOSED = "closed"


class StreamEvent(Enum):
    """Events reported by the session's event source."""
    OPEN_COMPLETED = "open_completed"
    HAS_BYTES_AVAILABLE = "has_bytes_available"
    HAS_SPACE_AVAILABLE = "has_space_available"
    ERROR_OCCURRED = "error_occurred"
    END_ENCOUNTERED = "end_encountered"


@dataclass(frozen=True)
class Message:
    """A chat message decoded from the wire."""
    text: str
    sender: MessageOrigin
    username: str
    received_at: datetime = field(default_factory=datetime.now, compare=False)

    @property
    def is_own_message(self) -> bool:
        """True when the message was sent by the locally joined user."""
        return self.sender is MessageOrigin.SELF


@dataclass
class SessionStats:
    """Counters for a single chat room session."""
    frames_sent: int = 0
    bytes_sent: int = 0
    chunks_received: int = 0
    bytes_received: int = 0
    messages_delivered: int = 0
    decode_failures: int = 0
    read_errors: int = 0
    listener_errors: int = 0
    last_message_time: Optional[datetime] = None
