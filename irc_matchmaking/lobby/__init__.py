"""Matchmaking components built on the IRC wire layer.

Contains the session, room state machine, lobby directory, invite flow and the
``MatchmakingClient`` facade combining them.
"""

from .client import MatchmakingClient  # noqa: F401
from .directory import LobbyDirectory, NamesScope, parse_names  # noqa: F401
from .invite import InviteFlow  # noqa: F401
from .rooms import RoomStateMachine, RoomStatus, classify_topic, room_channel  # noqa: F401
from .session import Session, validate_nickname  # noqa: F401

__all__ = [
    "InviteFlow",
    "LobbyDirectory",
    "MatchmakingClient",
    "NamesScope",
    "RoomStateMachine",
    "RoomStatus",
    "Session",
    "classify_topic",
    "parse_names",
    "room_channel",
    "validate_nickname",
]
