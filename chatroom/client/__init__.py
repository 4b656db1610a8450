"""
Chat Room Client Package

Provides the chat room session and a terminal front-end.
"""

from .network import ChatRoom, ChatRoomBuilder

__all__ = ["ChatRoom", "ChatRoomBuilder"]
