"""Connection and identity state of one player."""

from __future__ import annotations

import logging

from ..config.model import MatchmakingConfig
from ..constants import (
    NICKNAME_MAX_LENGTH,
    NICKNAME_MIN_LENGTH,
    READ_LINE_MAX_BYTES,
    RPL_ENDOFNAMES,
)
from ..errors.internal import (
    IRCConnectionError,
    MalformedMessageError,
    ParameterOutOfRangeError,
    ProtocolError,
)
from ..irc import commands
from ..irc.parser import Message, parse_message
from ..irc.replies import ReplyExpectation
from ..irc.transport import Transport
from ..logs.logger import logger


def validate_nickname(nickname: str) -> str:
    """Check a nickname against the protocol limits.

    Raises:
        ParameterOutOfRangeError: If the length is outside 1..9 or the name
            holds characters that would break a command line.
    """
    if not NICKNAME_MIN_LENGTH <= len(nickname) <= NICKNAME_MAX_LENGTH:
        raise ParameterOutOfRangeError(
            f"Nickname must be {NICKNAME_MIN_LENGTH}-{NICKNAME_MAX_LENGTH} characters",
            data={"nickname": nickname, "length": len(nickname)},
        )
    if ":" in nickname or any(ch.isspace() or not ch.isprintable() for ch in nickname):
        raise ParameterOutOfRangeError(
            "Nickname contains forbidden characters", data={"nickname": nickname}
        )
    return nickname


class Session:
    """The only mutable state of a matchmaking client.

    A session wraps one transport connection. ``current_room`` is ``None``
    while the player sits only in the lobby.
    """

    def __init__(self, transport: Transport, config: MatchmakingConfig | None = None):
        self.transport = transport
        self.config = config or MatchmakingConfig()
        self.nickname: str | None = None
        self.connected = False
        self.current_room: int | None = None
        # Channels whose post-JOIN burst (topic, names) is still being read
        self._join_bursts: set[str] = set()

    @property
    def lobby_channel(self) -> str:
        return self.config.lobby_channel

    @property
    def in_room(self) -> bool:
        return self.current_room is not None

    async def connect(self, nickname: str) -> None:
        """Open the transport and register ``nickname``, joining the lobby.

        The whole handshake goes out in a single transport write.
        """
        validate_nickname(nickname)
        if self.connected:
            raise IRCConnectionError(
                "Session is already connected", data={"nickname": self.nickname}
            )
        logger.log_event(
            "session",
            "connect_start",
            user=nickname,
            server=self.config.server,
            port=self.config.port,
        )
        handshake = commands.encode_lines(
            commands.pass_placeholder(),
            commands.nick(nickname),
            commands.user(nickname),
            commands.join(self.lobby_channel),
        )
        await self.transport.connect(self.config.server, self.config.port)
        try:
            await self.transport.send(handshake)
        except IRCConnectionError:
            await self._close_after_failed_handshake(nickname)
            raise
        logger.log_event(
            "session", "handshake_sent", level=logging.DEBUG, user=nickname
        )
        self.nickname = nickname
        self.connected = True
        self.current_room = None
        self._join_bursts.clear()
        logger.log_event(
            "session", "connect_success", user=nickname, channel=self.lobby_channel
        )

    async def disconnect(self) -> None:
        """Send QUIT, then close the transport.

        When QUIT cannot be sent the transport stays open and the error
        propagates.
        """
        self._require_connected("disconnect")
        await self.transport.send(commands.encode_lines(commands.quit_()))
        nickname = self.nickname
        try:
            await self.transport.disconnect()
        finally:
            self.connected = False
            self.nickname = None
            self.current_room = None
            self._join_bursts.clear()
            logger.log_event("session", "disconnected", user=nickname)

    async def send_command(self, *lines: str) -> None:
        """Write one or more command lines in a single transport write."""
        self._require_connected("send")
        logger.log_event(
            "session",
            "send",
            level=logging.DEBUG,
            user=self.nickname,
            lines=" | ".join(lines),
        )
        await self.transport.send(commands.encode_lines(*lines))

    async def read_reply(self, expectation: ReplyExpectation) -> Message:
        """Read lines until one answers the last command.

        PING is answered on the way; any other unrelated line is skipped.
        After the server echoes our own JOIN it sends that channel's topic
        and names before anything else; those lines are skipped as a block
        up to the closing 366 so they are never taken for a later reply.

        Raises:
            ProtocolError: If more than ``max_unsolicited_lines`` unrelated
                lines arrive before the reply.
        """
        self._require_connected("read")
        skipped = 0
        while True:
            raw = await self.transport.read_line(READ_LINE_MAX_BYTES)
            try:
                message = parse_message(raw)
            except MalformedMessageError as e:
                logger.log_event(
                    "session",
                    "malformed_line",
                    level=logging.WARNING,
                    user=self.nickname,
                    error=str(e),
                )
                message = None
            if message is not None and message.command.upper() == "PING":
                await self._answer_ping(message)
                continue
            if message is not None and self._in_join_burst(message):
                message = None
            if message is not None and expectation.matches(message):
                return message
            skipped += 1
            if message is not None:
                logger.log_event(
                    "session",
                    "unsolicited_skipped",
                    level=logging.DEBUG,
                    user=self.nickname,
                    command=message.command,
                )
            if skipped > self.config.max_unsolicited_lines:
                raise ProtocolError(
                    f"No reply for {expectation.channel} after {skipped} unrelated lines",
                    data={"channel": expectation.channel, "skipped": skipped},
                )

    def _in_join_burst(self, message: Message) -> bool:
        if message.command.upper() == "JOIN" and self._is_own(message):
            channel = message.trailing or "".join(message.head().split()[2:3])
            if channel:
                self._join_bursts.add(channel.lower())
                logger.log_event(
                    "session",
                    "join_burst",
                    level=logging.DEBUG,
                    user=self.nickname,
                    channel=channel,
                )
            return True
        if not message.is_numeric:
            return False
        for channel in self._join_bursts:
            if message.mentions(channel):
                if message.command == RPL_ENDOFNAMES:
                    self._join_bursts.discard(channel)
                return True
        return False

    def _is_own(self, message: Message) -> bool:
        nick = message.nick
        return (
            nick is not None
            and self.nickname is not None
            and nick.lower() == self.nickname.lower()
        )

    async def _close_after_failed_handshake(self, nickname: str) -> None:
        try:
            await self.transport.disconnect()
        except IRCConnectionError as e:
            logger.log_event(
                "session",
                "close_after_handshake_failed",
                level=logging.WARNING,
                user=nickname,
                error=str(e),
            )

    async def _answer_ping(self, message: Message) -> None:
        token = message.trailing
        if token is None:
            token = message.raw.partition(" ")[2] or self.config.server
        await self.transport.send(commands.encode_lines(commands.pong(token)))
        logger.log_event(
            "session", "ping_answered", level=logging.DEBUG, user=self.nickname
        )

    def _require_connected(self, operation: str) -> None:
        if not self.connected:
            raise IRCConnectionError(
                f"Cannot {operation}: session is not connected",
                data={"operation": operation},
            )
