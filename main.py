#!/usr/bin/env python3
"""
Main entry point for the IRC matchmaking client

Usage:
    python main.py <nickname> [--create]
    python main.py --health-check
"""

import asyncio
import logging
import sys

from irc_matchmaking.config import load_config
from irc_matchmaking.errors import MatchmakingError, log_error
from irc_matchmaking.lobby import MatchmakingClient, NamesScope
from irc_matchmaking.logging_config import LoggerConfigurator
from irc_matchmaking.logs import logger


async def main(nickname: str, create: bool) -> None:
    """Connect, show the lobby, optionally open a room, then leave."""
    config = load_config()
    logger.log_event("app", "start", server=config.server, port=config.port)
    async with MatchmakingClient(config) as client:
        await client.connect(nickname)
        members = await client.get_names(NamesScope.LOBBY)
        logger.log_event(
            "app", "lobby_members", user=nickname, members=", ".join(members)
        )
        if create:
            room = await client.create_room()
            logger.log_event("app", "room_created", user=nickname, room=room)
    logger.log_event("app", "shutdown")


def health_check() -> int:
    try:
        config = load_config()
    except MatchmakingError as e:
        logging.error(f"❌ Health check failed: {e}")
        return 1
    logger.log_event("app", "health_ok", server=config.server, port=config.port)
    return 0


if __name__ == "__main__":
    LoggerConfigurator().configure()

    args = sys.argv[1:]
    if args and args[0] == "--health-check":
        sys.exit(health_check())
    if not args or args[0].startswith("-"):
        print(__doc__.strip())
        sys.exit(2)

    try:
        asyncio.run(main(args[0], "--create" in args[1:]))
    except KeyboardInterrupt:
        logging.info("Client terminated by user")
        sys.exit(0)
    except MatchmakingError as e:
        log_error("Matchmaking failed", e)
        sys.exit(1)
