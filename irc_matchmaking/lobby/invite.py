from __future__ import annotations

from ..errors.internal import NotInLobbyError, NotInRoomError
from ..irc import commands
from ..logs.logger import logger
from .directory import LobbyDirectory, NamesScope
from .rooms import room_channel
from .session import Session


class InviteFlow:
    """Invite a lobby member into the room the session sits in."""

    def __init__(self, session: Session, directory: LobbyDirectory):
        self.session = session
        self.directory = directory

    async def invite(self, nickname: str) -> None:
        room_id = self.session.current_room
        if room_id is None:
            raise NotInRoomError("Join or create a room before inviting")
        members = await self.directory.get_names(NamesScope.LOBBY)
        if nickname not in members:
            raise NotInLobbyError(
                f"{nickname} is not in the lobby", data={"nickname": nickname}
            )
        channel = room_channel(room_id, self.session.config.room_prefix)
        await self.session.send_command(commands.invite(channel, nickname))
        logger.log_event(
            "room",
            "invite_sent",
            user=self.session.nickname,
            channel=channel,
            target=nickname,
        )
