from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import constants

_CHANNEL_FORBIDDEN = (" ", ",", "\x07", "\r", "\n", "\0")


class MatchmakingConfig(BaseModel):
    """Connection and naming settings for one matchmaking client.

    Attributes:
        server: IRC server host name.
        port: IRC server port.
        lobby_channel: Channel every player joins on connect.
        room_prefix: Channel name prefix of game rooms; the zero-padded room
            id is appended to it.
        no_topic_marker: Text of the server reply meaning a room has no topic.
        connect_timeout: Seconds allowed for one TCP connect attempt.
        read_timeout: Seconds to wait for one reply line.
        connect_attempts: TCP connect attempts before giving up.
        max_unsolicited_lines: Unrelated lines skipped while waiting for a reply.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    server: str = Field(default=constants.IRC_SERVER, min_length=1)
    port: int = Field(default=constants.IRC_PORT, ge=1, le=65535)
    lobby_channel: str = constants.IRC_LOBBY_CHANNEL
    room_prefix: str = constants.IRC_ROOM_PREFIX
    no_topic_marker: str = Field(default=constants.IRC_NO_TOPIC_MARKER, min_length=1)
    connect_timeout: float = Field(default=constants.IRC_CONNECT_TIMEOUT, gt=0)
    read_timeout: float = Field(default=constants.IRC_READ_TIMEOUT, gt=0)
    connect_attempts: int = Field(default=constants.IRC_CONNECT_ATTEMPTS, ge=1)
    max_unsolicited_lines: int = Field(
        default=constants.IRC_MAX_UNSOLICITED_LINES, ge=0
    )

    @field_validator("server", mode="before")
    @classmethod
    def strip_server(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("lobby_channel", "room_prefix")
    @classmethod
    def validate_channel(cls, v: str) -> str:
        """Channel names start with '#' or '&' and hold no separators."""
        v = v.strip()
        if len(v) < 2 or v[0] not in "#&":
            raise ValueError("channel must start with '#' or '&'")
        if any(ch in v for ch in _CHANNEL_FORBIDDEN):
            raise ValueError("channel must not contain spaces, commas or control characters")
        return v
