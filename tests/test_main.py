from __future__ import annotations

from unittest.mock import patch

import pytest

import main as entry
from irc_matchmaking.errors import ConfigError
from irc_matchmaking.lobby import MatchmakingClient
from tests.fixtures.fake_irc import FakeTransport


@pytest.mark.asyncio
async def test_main_connects_and_creates_room(config, server):
    transport = FakeTransport(server)
    with patch.object(entry, "load_config", return_value=config), \
         patch.object(entry, "MatchmakingClient", lambda cfg: MatchmakingClient(cfg, transport)):
        await entry.main("alice", create=True)

    sent = [line for nick, line in server.received if nick == "alice"]
    assert "NAMES #cruce-lobby" in sent
    assert "JOIN #cruce-game000" in sent
    assert "TOPIC #cruce-game000 WAITING" in sent
    assert sent[-1] == "QUIT"
    assert transport.closed


@pytest.mark.asyncio
async def test_main_without_create_only_lists_lobby(config, server):
    transport = FakeTransport(server)
    with patch.object(entry, "load_config", return_value=config), \
         patch.object(entry, "MatchmakingClient", lambda cfg: MatchmakingClient(cfg, transport)):
        await entry.main("alice", create=False)

    sent = [line for _, line in server.received]
    assert not any(line.startswith("TOPIC") for line in sent)


def test_health_check_ok(config):
    with patch.object(entry, "load_config", return_value=config):
        assert entry.health_check() == 0


def test_health_check_config_error():
    with patch.object(entry, "load_config", side_effect=ConfigError("bad port")):
        assert entry.health_check() == 1
