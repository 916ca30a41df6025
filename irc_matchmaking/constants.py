"""
Configuration constants for the IRC matchmaking client

This module contains the protocol limits and the configurable defaults used
throughout the package. Each configurable default can be overridden by setting
an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is not None and value.strip():
        return value.strip()
    return default


# Server / channel defaults
IRC_SERVER = _get_env_str("IRC_SERVER", "localhost")
IRC_PORT = _get_env_int("IRC_PORT", 6667)
IRC_LOBBY_CHANNEL = _get_env_str("IRC_LOBBY_CHANNEL", "#cruce-lobby")
IRC_ROOM_PREFIX = _get_env_str(
    "IRC_ROOM_PREFIX", "#cruce-game"
)  # Room channel = prefix + zero-padded 3-digit id
IRC_NO_TOPIC_MARKER = _get_env_str(
    "IRC_NO_TOPIC_MARKER", "No topic is set"
)  # Text of RPL_NOTOPIC marking a free room

# Timeouts / limits of the default transport
IRC_CONNECT_TIMEOUT = _get_env_float(
    "IRC_CONNECT_TIMEOUT", 10.0
)  # Seconds allowed for one TCP connect attempt
IRC_READ_TIMEOUT = _get_env_float(
    "IRC_READ_TIMEOUT", 30.0
)  # Seconds to wait for one reply line
IRC_CONNECT_ATTEMPTS = _get_env_int(
    "IRC_CONNECT_ATTEMPTS", 3
)  # TCP connect attempts before giving up
IRC_MAX_UNSOLICITED_LINES = _get_env_int(
    "IRC_MAX_UNSOLICITED_LINES", 100
)  # Unrelated lines skipped while waiting for a reply
IRC_CONNECT_BACKOFF_MAX_SECONDS = _get_env_float(
    "IRC_CONNECT_BACKOFF_MAX_SECONDS", 8.0
)  # Upper bound of the wait between connect attempts

# Config file location
IRC_MATCHMAKING_CONF = "IRC_MATCHMAKING_CONF"
DEFAULT_CONFIG_FILE = "irc_matchmaking.json"

# Protocol limits (not configurable)
NICKNAME_MIN_LENGTH = 1
NICKNAME_MAX_LENGTH = 9
ROOM_ID_MIN = 0
ROOM_ID_MAX = 999
ROOM_ID_WIDTH = 3
LOBBY_MESSAGE_MAX_BYTES = 512
READ_LINE_MAX_BYTES = 512
USER_MODE = "8"

# Status markers stored in a room channel topic
STATUS_WAITING = "WAITING"
STATUS_PLAYING = "PLAYING"

# Numeric replies consumed by the client
RPL_NOTOPIC = "331"
RPL_TOPIC = "332"
RPL_NAMREPLY = "353"
RPL_ENDOFNAMES = "366"
ERR_NOSUCHCHANNEL = "403"
ERR_NOTONCHANNEL = "442"

# Channel membership prefixes a NAMES reply may put in front of a nickname
NAMES_MODE_PREFIXES = "~&@%+"
