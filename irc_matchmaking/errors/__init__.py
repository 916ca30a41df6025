"""Error hierarchy and error handling helpers."""

from .handling import guard_transport, log_error, retry_transport  # noqa: F401
from .internal import (  # noqa: F401
    AlreadyInRoomError,
    ConfigError,
    IRCConnectionError,
    MalformedMessageError,
    MatchmakingError,
    MessageTooLongError,
    NotInLobbyError,
    NotInRoomError,
    ParameterOutOfRangeError,
    PartialRoomCreationError,
    ProtocolError,
    RoomUnavailableError,
    ToggleStatusError,
)

__all__ = [
    "AlreadyInRoomError",
    "ConfigError",
    "IRCConnectionError",
    "MalformedMessageError",
    "MatchmakingError",
    "MessageTooLongError",
    "NotInLobbyError",
    "NotInRoomError",
    "ParameterOutOfRangeError",
    "PartialRoomCreationError",
    "ProtocolError",
    "RoomUnavailableError",
    "ToggleStatusError",
    "guard_transport",
    "log_error",
    "retry_transport",
]
