"""IRC-backed game matchmaking client."""

from .config import MatchmakingConfig, load_config  # noqa: F401
from .lobby import MatchmakingClient, NamesScope, RoomStatus  # noqa: F401

__all__ = [
    "MatchmakingClient",
    "MatchmakingConfig",
    "NamesScope",
    "RoomStatus",
    "load_config",
]
