"""Game rooms and their topic-encoded status.

A room is a channel named ``<room_prefix><id:03d>``. Its status lives only in
the channel topic on the server and is read fresh on every query::

    UNSET --read--> UNSET | WAITING | PLAYING
    WAITING <--toggle--> PLAYING

Reading then writing a topic is two separate commands, so two players
toggling the same room at the same time can both see WAITING and both write
PLAYING. Nothing here prevents that.
"""

from __future__ import annotations

import logging
from enum import Enum

from ..constants import (
    ERR_NOSUCHCHANNEL,
    ROOM_ID_MAX,
    ROOM_ID_MIN,
    ROOM_ID_WIDTH,
    STATUS_PLAYING,
    STATUS_WAITING,
)
from ..errors.internal import (
    AlreadyInRoomError,
    IRCConnectionError,
    NotInRoomError,
    ParameterOutOfRangeError,
    PartialRoomCreationError,
    RoomUnavailableError,
    ToggleStatusError,
)
from ..irc import commands
from ..irc.parser import Message
from ..irc.replies import topic_reply
from ..logs.logger import logger
from .session import Session


class RoomStatus(Enum):
    UNSET = "UNSET"
    WAITING = STATUS_WAITING
    PLAYING = STATUS_PLAYING


_TOGGLED = {
    RoomStatus.WAITING: RoomStatus.PLAYING,
    RoomStatus.PLAYING: RoomStatus.WAITING,
}


def validate_room_id(room_id: int) -> int:
    if not ROOM_ID_MIN <= room_id <= ROOM_ID_MAX:
        raise ParameterOutOfRangeError(
            f"Room id must be between {ROOM_ID_MIN} and {ROOM_ID_MAX}",
            data={"room_id": room_id},
        )
    return room_id


def room_channel(room_id: int, prefix: str) -> str:
    """Channel name of a room, e.g. ``room_channel(5, "#cruce-game")`` -> ``#cruce-game005``."""
    validate_room_id(room_id)
    return f"{prefix}{room_id:0{ROOM_ID_WIDTH}d}"


def classify_topic(reply: Message, no_topic_marker: str) -> RoomStatus:
    """Map a topic reply to a room status.

    Raises:
        ToggleStatusError: If the reply carries no known status.
    """
    text = reply.trailing or ""
    if reply.command == ERR_NOSUCHCHANNEL or no_topic_marker in text:
        return RoomStatus.UNSET
    if STATUS_WAITING in text:
        return RoomStatus.WAITING
    if STATUS_PLAYING in text:
        return RoomStatus.PLAYING
    raise ToggleStatusError(
        "Room topic holds no status marker",
        data={"command": reply.command, "topic": text},
    )


class RoomStateMachine:
    def __init__(self, session: Session):
        self.session = session

    def channel(self, room_id: int) -> str:
        return room_channel(room_id, self.session.config.room_prefix)

    async def join_room(self, room_id: int) -> None:
        channel = self.channel(room_id)
        await self.session.send_command(commands.join(channel))
        self.session.current_room = room_id
        logger.log_event(
            "room", "joined", user=self.session.nickname, channel=channel, room=room_id
        )

    async def leave_room(self) -> None:
        room_id = self._require_room()
        channel = self.channel(room_id)
        await self.session.send_command(commands.part(channel))
        self.session.current_room = None
        logger.log_event("room", "left", user=self.session.nickname, channel=channel)

    async def fetch_status(self, room_id: int) -> RoomStatus:
        """Read the status of a room without changing it."""
        channel = self.channel(room_id)
        await self.session.send_command(commands.topic(channel))
        reply = await self.session.read_reply(topic_reply(channel))
        status = classify_topic(reply, self.session.config.no_topic_marker)
        logger.log_event(
            "room",
            "status",
            level=logging.DEBUG,
            user=self.session.nickname,
            channel=channel,
            status=status.value,
        )
        return status

    async def toggle_status(self, room_id: int) -> RoomStatus:
        """Flip WAITING/PLAYING and return the status observed before the flip.

        An UNSET room is returned as is, without any write.
        """
        status = await self.fetch_status(room_id)
        new_status = _TOGGLED.get(status)
        if new_status is None:
            return status
        channel = self.channel(room_id)
        await self.session.send_command(commands.topic(channel, new_status.value))
        logger.log_event(
            "room",
            "toggled",
            user=self.session.nickname,
            channel=channel,
            old=status.value,
            new=new_status.value,
        )
        return status

    async def get_available_room(self) -> int | None:
        """Return the lowest room id with no topic, or ``None`` if all are taken.

        Rooms are probed one at a time from the lowest id; a room whose topic
        cannot be classified counts as taken.
        """
        for room_id in range(ROOM_ID_MIN, ROOM_ID_MAX + 1):
            try:
                status = await self.fetch_status(room_id)
            except ToggleStatusError as e:
                logger.log_event(
                    "room",
                    "probe_unclassified",
                    level=logging.DEBUG,
                    user=self.session.nickname,
                    room=room_id,
                    error=str(e),
                )
                continue
            if status is RoomStatus.UNSET:
                logger.log_event(
                    "room", "available", user=self.session.nickname, room=room_id
                )
                return room_id
        logger.log_event(
            "room", "none_available", level=logging.WARNING, user=self.session.nickname
        )
        return None

    async def create_room(self) -> int:
        """Take the first free room: join it and mark it WAITING.

        Raises:
            AlreadyInRoomError: If the session already sits in a room.
            RoomUnavailableError: If no room is free.
            PartialRoomCreationError: If the room was joined but the WAITING
                topic could not be written. The session stays in the room.
        """
        if self.session.in_room:
            raise AlreadyInRoomError(
                "Leave the current room before creating one",
                data={"room_id": self.session.current_room},
            )
        room_id = await self.get_available_room()
        if room_id is None:
            raise RoomUnavailableError("All rooms are in use")

        channel = self.channel(room_id)
        await self.session.send_command(commands.join(channel))
        try:
            await self.session.send_command(commands.topic(channel, STATUS_WAITING))
        except IRCConnectionError as e:
            self.session.current_room = room_id
            logger.log_event(
                "room",
                "create_partial",
                level=logging.ERROR,
                user=self.session.nickname,
                channel=channel,
                error=str(e),
            )
            raise PartialRoomCreationError(
                f"Joined {channel} but could not mark it {STATUS_WAITING}",
                room_id=room_id,
            ) from e
        self.session.current_room = room_id
        logger.log_event(
            "room", "created", user=self.session.nickname, channel=channel, room=room_id
        )
        return room_id

    def _require_room(self) -> int:
        room_id = self.session.current_room
        if room_id is None:
            raise NotInRoomError("Not in a room")
        return room_id
