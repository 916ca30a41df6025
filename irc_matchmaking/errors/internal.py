"""Centralized matchmaking error hierarchy.

Every failure surfaced by the client derives from ``MatchmakingError`` so
callers can catch the whole family at once. Raw socket / asyncio errors never
reach callers directly; the transport wraps them in ``IRCConnectionError``.

Classes:
  MatchmakingError          – Base for all client errors.
  IRCConnectionError        – Transport open/close/send/read failure.
  ProtocolError             – Reply did not match any expected shape.
  MalformedMessageError     – Parser could not locate required delimiters.
  ParameterOutOfRangeError  – Nickname, room id or text outside protocol limits.
  MessageTooLongError       – Lobby message above the protocol byte limit.
  NotInRoomError            – Operation needs a joined room.
  AlreadyInRoomError        – Operation needs the session to be roomless.
  NotInLobbyError           – Invite target not present in the lobby.
  ToggleStatusError         – Room topic is neither a status nor "no topic".
  RoomUnavailableError      – No free room in the whole id range.
  PartialRoomCreationError  – Room joined but its WAITING marker was not set.
  ConfigError               – Configuration file or values are invalid.
"""

from __future__ import annotations

from collections.abc import Mapping


class MatchmakingError(Exception):
    """Base class for all matchmaking client errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class IRCConnectionError(MatchmakingError):
    """Raised when the transport cannot open, write, read or close.

    Timeouts configured on the transport surface through this error as well.
    """


class ProtocolError(MatchmakingError):
    """Raised when a server reply does not have the expected shape."""


class MalformedMessageError(ProtocolError):
    """Raised when a raw line is missing a required separator."""


class ParameterOutOfRangeError(MatchmakingError):
    """Raised for a nickname length, room id or text outside protocol limits."""


class MessageTooLongError(MatchmakingError):
    """Raised when a lobby message exceeds the protocol byte limit."""


class NotInRoomError(MatchmakingError):
    """Raised when an operation needs a joined room and there is none."""


class AlreadyInRoomError(MatchmakingError):
    """Raised when creating a room while already sitting in one."""


class NotInLobbyError(MatchmakingError):
    """Raised when an invite target is not a member of the lobby."""


class ToggleStatusError(MatchmakingError):
    """Raised when a room topic carries no recognizable status."""


class RoomUnavailableError(MatchmakingError):
    """Raised when every room id is already taken."""


class PartialRoomCreationError(MatchmakingError):
    """Raised when a room was joined but its WAITING topic could not be set.

    The session stays joined to the room; ``room_id`` tells the caller which
    one so it can retry the topic write or leave.

    Args:
        message: Descriptive error message.
        room_id: Id of the joined room.
    """

    def __init__(self, message: str, *, room_id: int) -> None:
        super().__init__(message, data={"room_id": room_id})
        self.room_id = room_id


class ConfigError(MatchmakingError):
    """Raised when the configuration file or its values are invalid."""


__all__ = [
    "MatchmakingError",
    "IRCConnectionError",
    "ProtocolError",
    "MalformedMessageError",
    "ParameterOutOfRangeError",
    "MessageTooLongError",
    "NotInRoomError",
    "AlreadyInRoomError",
    "NotInLobbyError",
    "ToggleStatusError",
    "RoomUnavailableError",
    "PartialRoomCreationError",
    "ConfigError",
]
