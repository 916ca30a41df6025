"""Matchmaking client: the public entry point of the package."""

from __future__ import annotations

import logging
from typing import Any

from ..config.model import MatchmakingConfig
from ..irc.transport import AsyncStreamTransport, Transport
from ..logs.logger import logger
from .directory import LobbyDirectory, NamesScope
from .invite import InviteFlow
from .rooms import RoomStateMachine, RoomStatus
from .session import Session


class MatchmakingClient:
    """One player's connection to the matchmaking lobby.

    Wires a ``Session`` to the room, lobby and invite components. Without an
    explicit transport an ``AsyncStreamTransport`` configured from ``config``
    is used.

    Usage::

        async with MatchmakingClient(config) as client:
            await client.connect("alice")
            room = await client.create_room()
    """

    def __init__(
        self,
        config: MatchmakingConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        self.config = config or MatchmakingConfig()
        if transport is None:
            transport = AsyncStreamTransport(
                connect_timeout=self.config.connect_timeout,
                read_timeout=self.config.read_timeout,
                connect_attempts=self.config.connect_attempts,
            )
        self.session = Session(transport, self.config)
        self.rooms = RoomStateMachine(self.session)
        self.directory = LobbyDirectory(self.session)
        self.invites = InviteFlow(self.session, self.directory)

    async def __aenter__(self) -> MatchmakingClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.session.connected:
            await self.disconnect()

    @property
    def current_room(self) -> int | None:
        return self.session.current_room

    @property
    def connected(self) -> bool:
        return self.session.connected

    async def connect(self, name: str) -> None:
        await self.session.connect(name)

    async def disconnect(self) -> None:
        await self.session.disconnect()

    async def join_room(self, room_id: int) -> None:
        await self.rooms.join_room(room_id)

    async def leave_room(self) -> None:
        await self.rooms.leave_room()

    async def send_lobby_message(self, text: str) -> None:
        await self.directory.send_lobby_message(text)

    async def toggle_room_status(self, room_id: int) -> RoomStatus:
        return await self.rooms.toggle_status(room_id)

    async def get_available_room(self) -> int | None:
        return await self.rooms.get_available_room()

    async def create_room(self) -> int:
        return await self.rooms.create_room()

    async def get_names(self, scope: NamesScope = NamesScope.LOBBY) -> list[str]:
        return await self.directory.get_names(scope)

    async def invite(self, nickname: str) -> None:
        await self.invites.invite(nickname)

    def snapshot(self) -> dict[str, Any]:
        """Session state for diagnostics."""
        snap = {
            "nickname": self.session.nickname,
            "connected": self.session.connected,
            "current_room": self.session.current_room,
            "server": self.config.server,
            "port": self.config.port,
            "lobby_channel": self.config.lobby_channel,
        }
        logger.log_event("client", "snapshot", level=logging.DEBUG, **snap)
        return snap
