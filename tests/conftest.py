import pytest
import pytest_asyncio

from irc_matchmaking.config import MatchmakingConfig
from irc_matchmaking.lobby import MatchmakingClient, Session
from tests.fixtures.fake_irc import FakeIrcServer, FakeTransport


@pytest.fixture
def config() -> MatchmakingConfig:
    return MatchmakingConfig(
        server="irc.test",
        port=6667,
        lobby_channel="#cruce-lobby",
        room_prefix="#cruce-game",
        no_topic_marker="No topic is set",
        max_unsolicited_lines=20,
    )


@pytest.fixture
def server() -> FakeIrcServer:
    return FakeIrcServer()


@pytest.fixture
def transport(server: FakeIrcServer) -> FakeTransport:
    return FakeTransport(server)


@pytest.fixture
def session(transport: FakeTransport, config: MatchmakingConfig) -> Session:
    return Session(transport, config)


@pytest_asyncio.fixture
async def connected_session(session: Session) -> Session:
    await session.connect("alice")
    return session


@pytest_asyncio.fixture
async def client(transport: FakeTransport, config: MatchmakingConfig) -> MatchmakingClient:
    client = MatchmakingClient(config, transport=transport)
    await client.connect("alice")
    return client
