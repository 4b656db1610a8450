"""
Chat Room Client

Minimal stream-based chat client: session, wire codec and connector.
"""

__version__ = "1.0.0"
