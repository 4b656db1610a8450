"""
Client Network Layer

Provides the wire codec, the chat room session and its connector.
"""

from .codec import decode, encode_chat, encode_join
from .connector import ChatRoomBuilder
from .session import ChatRoom

__all__ = ["ChatRoom", "ChatRoomBuilder", "decode", "encode_chat", "encode_join"]
