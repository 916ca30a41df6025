"""Lobby membership and lobby chat."""

from __future__ import annotations

import logging
from enum import Enum, auto

from ..constants import (
    ERR_NOSUCHCHANNEL,
    LOBBY_MESSAGE_MAX_BYTES,
    NAMES_MODE_PREFIXES,
    RPL_ENDOFNAMES,
)
from ..errors.internal import (
    MessageTooLongError,
    NotInRoomError,
    ProtocolError,
)
from ..irc import commands
from ..irc.parser import Message
from ..irc.replies import names_reply
from ..logs.logger import logger
from .rooms import room_channel
from .session import Session


class NamesScope(Enum):
    LOBBY = auto()
    CURRENT_ROOM = auto()


def parse_names(reply: Message) -> list[str]:
    """Member nicknames of a NAMES reply, in server order.

    Channel-membership mode prefixes (``@alice``, ``+bob``) are stripped.

    Raises:
        ProtocolError: If the reply carries no ``:``-introduced name list, or
            the server reports the channel does not exist.
    """
    if reply.command == RPL_ENDOFNAMES:
        return []
    if reply.command == ERR_NOSUCHCHANNEL:
        raise ProtocolError("No such channel", data={"raw": reply.raw})
    if reply.trailing is None:
        raise ProtocolError("Names reply has no member list", data={"raw": reply.raw})
    names = []
    for token in reply.trailing.split():
        name = token.lstrip(NAMES_MODE_PREFIXES)
        if name:
            names.append(name)
    return names


class LobbyDirectory:
    def __init__(self, session: Session):
        self.session = session

    async def get_names(self, scope: NamesScope = NamesScope.LOBBY) -> list[str]:
        if scope is NamesScope.CURRENT_ROOM:
            room_id = self.session.current_room
            if room_id is None:
                raise NotInRoomError("Not in a room")
            channel = room_channel(room_id, self.session.config.room_prefix)
        else:
            channel = self.session.lobby_channel
        await self.session.send_command(commands.names(channel))
        names = await self._read_names(channel)
        logger.log_event(
            "lobby",
            "names",
            level=logging.DEBUG,
            user=self.session.nickname,
            channel=channel,
            count=len(names),
        )
        return names

    async def _read_names(self, channel: str) -> list[str]:
        """Collect every 353 line for ``channel`` up to and including its 366.

        A 366 with no 353 before it means the channel has no visible members.
        """
        expectation = names_reply(channel)
        names: list[str] = []
        while True:
            reply = await self.session.read_reply(expectation)
            names.extend(parse_names(reply))
            if reply.command == RPL_ENDOFNAMES:
                return names

    async def send_lobby_message(self, text: str) -> None:
        """Broadcast ``text`` to everyone in the lobby.

        Raises:
            MessageTooLongError: If ``text`` exceeds 512 bytes encoded.
            ParameterOutOfRangeError: If ``text`` contains a line break.
        """
        size = len(text.encode("utf-8"))
        if size > LOBBY_MESSAGE_MAX_BYTES:
            raise MessageTooLongError(
                f"Lobby message is {size} bytes, limit is {LOBBY_MESSAGE_MAX_BYTES}",
                data={"size": size},
            )
        line = commands.privmsg(self.session.lobby_channel, text)
        await self.session.send_command(line)
        logger.log_event(
            "lobby",
            "message_sent",
            user=self.session.nickname,
            channel=self.session.lobby_channel,
            text=text,
        )
