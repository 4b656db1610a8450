"""
Application Constants

Defines constants used throughout the chat room client.
"""

# Wire protocol constants
FRAME_SEPARATOR = ":"
FRAME_ENCODING = "utf-8"
JOIN_VERB = "iam"
CHAT_VERB = "msg"

# Default network settings
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 80
DEFAULT_MAX_READ_LENGTH = 4096

# Port range
MIN_PORT = 1
MAX_PORT = 65535

# Command constants
QUIT_COMMAND = "/quit"

# Log format constants
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
