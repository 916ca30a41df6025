"""
Tests for AsyncStreamTransport against a local asyncio server
"""

import asyncio

import pytest
import pytest_asyncio

from irc_matchmaking.errors import IRCConnectionError
from irc_matchmaking.irc.transport import AsyncStreamTransport


class LineServer:
    """Records received bytes and replies with canned lines."""

    def __init__(self, replies: list[bytes]) -> None:
        self.replies = replies
        self.received = bytearray()
        self.server: asyncio.base_events.Server | None = None
        self.port = 0

    async def handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        for reply in self.replies:
            writer.write(reply)
        await writer.drain()
        while data := await reader.read(1024):
            self.received.extend(data)
        writer.close()

    async def start(self) -> None:
        self.server = await asyncio.start_server(self.handle, "127.0.0.1", 0)
        self.port = self.server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        assert self.server is not None
        self.server.close()
        await self.server.wait_closed()


@pytest_asyncio.fixture
async def line_server():
    server = LineServer(
        [
            b":irc.test 001 alice :Welcome\r\n",
            b":irc.test 331 alice #cruce-game000 :No topic is set\r\n",
        ]
    )
    await server.start()
    yield server
    await server.stop()


@pytest.mark.asyncio
async def test_round_trip(line_server):
    transport = AsyncStreamTransport(read_timeout=2.0, connect_attempts=1)
    await transport.connect("127.0.0.1", line_server.port)
    assert transport.is_open

    await transport.send(b"TOPIC #cruce-game000\r\n")
    assert await transport.read_line() == b":irc.test 001 alice :Welcome\r\n"
    assert await transport.read_line() == (
        b":irc.test 331 alice #cruce-game000 :No topic is set\r\n"
    )

    await transport.disconnect()
    assert not transport.is_open
    await asyncio.sleep(0.05)
    assert bytes(line_server.received) == b"TOPIC #cruce-game000\r\n"


@pytest.mark.asyncio
async def test_read_line_truncates(line_server):
    transport = AsyncStreamTransport(read_timeout=2.0, connect_attempts=1)
    await transport.connect("127.0.0.1", line_server.port)
    assert await transport.read_line(max_len=10) == b":irc.test "
    await transport.disconnect()


@pytest.mark.asyncio
async def test_eof_is_connection_error():
    server = LineServer([])

    async def close_immediately(reader, writer):
        writer.close()

    server.handle = close_immediately  # type: ignore[method-assign]
    await server.start()
    try:
        transport = AsyncStreamTransport(read_timeout=2.0, connect_attempts=1)
        await transport.connect("127.0.0.1", server.port)
        with pytest.raises(IRCConnectionError):
            await transport.read_line()
        await transport.disconnect()
    finally:
        await server.stop()


@pytest.mark.asyncio
async def test_read_timeout(line_server):
    line_server.replies = []
    transport = AsyncStreamTransport(read_timeout=0.05, connect_attempts=1)
    await transport.connect("127.0.0.1", line_server.port)
    with pytest.raises(IRCConnectionError, match="Timed out"):
        await transport.read_line()
    await transport.disconnect()


@pytest.mark.asyncio
async def test_operations_before_connect():
    transport = AsyncStreamTransport()
    with pytest.raises(IRCConnectionError):
        await transport.send(b"QUIT\r\n")
    with pytest.raises(IRCConnectionError):
        await transport.read_line()
    await transport.disconnect()  # no-op when never opened


@pytest.mark.asyncio
async def test_connect_retries_then_fails(monkeypatch):
    calls = 0

    async def refuse(host, port):
        nonlocal calls
        calls += 1
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(asyncio, "open_connection", refuse)
    transport = AsyncStreamTransport(connect_attempts=3, backoff_max=0)

    with pytest.raises(IRCConnectionError) as exc_info:
        await transport.connect("irc.invalid", 6667)

    assert calls == 3
    assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)
    assert not transport.is_open


@pytest.mark.asyncio
async def test_connect_succeeds_after_retry(monkeypatch, line_server):
    real_open = asyncio.open_connection
    calls = 0

    async def flaky(host, port):
        nonlocal calls
        calls += 1
        if calls == 1:
            raise OSError("network unreachable")
        return await real_open(host, port)

    monkeypatch.setattr(asyncio, "open_connection", flaky)
    transport = AsyncStreamTransport(connect_attempts=2, backoff_max=0)
    await transport.connect("127.0.0.1", line_server.port)

    assert calls == 2
    assert transport.is_open
    await transport.disconnect()


@pytest.mark.asyncio
async def test_operations_after_disconnect(line_server):
    transport = AsyncStreamTransport(read_timeout=2.0, connect_attempts=1)
    await transport.connect("127.0.0.1", line_server.port)
    await transport.disconnect()

    with pytest.raises(IRCConnectionError, match="not connected"):
        await transport.read_line()
    with pytest.raises(IRCConnectionError, match="not connected"):
        await transport.send(b"QUIT\r\n")
