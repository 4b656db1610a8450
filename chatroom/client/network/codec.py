"""
Wire Protocol Codec

Encodes outgoing frames and decodes inbound chunks into messages.

Frames are UTF-8 text of the form ``<verb>:<payload>``. There is no length
prefix and no terminator, so each chunk read from the stream is treated as
one complete frame.
"""

import logging
from typing import Optional

from chatroom.shared.constants import (
    CHAT_VERB,
    FRAME_ENCODING,
    FRAME_SEPARATOR,
    JOIN_VERB,
)
from chatroom.shared.models import Message, MessageOrigin


logger = logging.getLogger(__name__)


def encode_frame(verb: str, payload: str) -> bytes:
    """Encode a ``verb:payload`` frame. The payload is not escaped."""
    return f"{verb}{FRAME_SEPARATOR}{payload}".encode(FRAME_ENCODING)


def encode_join(username: str) -> bytes:
    """
    Encode the announce frame sent when joining the chat.

    Args:
        username: The username to announce.

    Returns:
        ``iam:<username>`` as UTF-8 bytes.
    """
    if FRAME_SEPARATOR in username:
        logger.warning(
            f"Username {username!r} contains {FRAME_SEPARATOR!r}; peers will split it"
        )
    return encode_frame(JOIN_VERB, username)


def encode_chat(text: str) -> bytes:
    """
    Encode a chat frame.

    Args:
        text: The chat text. Colons are sent literally.

    Returns:
        ``msg:<text>`` as UTF-8 bytes.
    """
    return encode_frame(CHAT_VERB, text)


def decode(raw: bytes, own_username: Optional[str] = None) -> Optional[Message]:
    """
    Decode one inbound chunk into a message.

    The chunk is split on every separator. The first segment is the sender's
    username and the last segment is the text; interior segments are dropped,
    so ``bob:hello:world`` decodes to username ``bob`` and text ``world``.

    Args:
        raw: The bytes of one read.
        own_username: The locally joined username, used to tag the sender.

    Returns:
        The decoded message, or None for an empty or non-UTF-8 chunk.
    """
    if not raw:
        return None

    try:
        decoded = bytes(raw).decode(FRAME_ENCODING)
    except UnicodeDecodeError:
        return None

    segments = decoded.split(FRAME_SEPARATOR)
    username = segments[0]
    text = segments[-1]

    if own_username is not None and username == own_username:
        sender = MessageOrigin.SELF
    else:
        sender = MessageOrigin.OTHER

    return Message(text=text, sender=sender, username=username)
