"""Transport protocol consumed by the session, and its asyncio implementation.

The session never touches sockets directly; anything implementing
``Transport`` (a real stream, or an in-memory fake in tests) can carry it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from ..constants import (
    IRC_CONNECT_ATTEMPTS,
    IRC_CONNECT_BACKOFF_MAX_SECONDS,
    IRC_CONNECT_TIMEOUT,
    IRC_READ_TIMEOUT,
    READ_LINE_MAX_BYTES,
)
from ..errors.handling import guard_transport, retry_transport
from ..errors.internal import IRCConnectionError
from ..logs.logger import logger


class Transport(Protocol):
    """Protocol for the raw line transport."""

    async def connect(self, host: str, port: int) -> None:
        """Open the connection."""
        ...

    async def send(self, data: bytes) -> None:
        """Write ``data`` in one operation."""
        ...

    async def read_line(self, max_len: int = READ_LINE_MAX_BYTES) -> bytes:
        """Return exactly one line received from the server."""
        ...

    async def disconnect(self) -> None:
        """Close the connection."""
        ...


class AsyncStreamTransport:
    """``Transport`` over ``asyncio.open_connection``."""

    def __init__(
        self,
        connect_timeout: float = IRC_CONNECT_TIMEOUT,
        read_timeout: float = IRC_READ_TIMEOUT,
        connect_attempts: int = IRC_CONNECT_ATTEMPTS,
        backoff_max: float = IRC_CONNECT_BACKOFF_MAX_SECONDS,
    ) -> None:
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.connect_attempts = connect_attempts
        self.backoff_max = backoff_max
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None

    @property
    def is_open(self) -> bool:
        return self.writer is not None

    async def connect(self, host: str, port: int) -> None:
        async def attempt() -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
            return await guard_transport(
                lambda: asyncio.wait_for(
                    asyncio.open_connection(host, port), timeout=self.connect_timeout
                ),
                "connect",
            )

        logger.log_event(
            "transport",
            "open",
            level=logging.DEBUG,
            server=host,
            port=port,
            timeout=self.connect_timeout,
        )
        self.reader, self.writer = await retry_transport(
            attempt,
            "connect",
            max_attempts=self.connect_attempts,
            max_wait=self.backoff_max,
        )

    async def send(self, data: bytes) -> None:
        _, writer = self._require_streams("send")

        async def write() -> None:
            writer.write(data)
            await writer.drain()

        await guard_transport(write, "send")

    async def read_line(self, max_len: int = READ_LINE_MAX_BYTES) -> bytes:
        reader, _ = self._require_streams("read")
        line = await guard_transport(
            lambda: asyncio.wait_for(reader.readline(), timeout=self.read_timeout),
            "read",
        )
        if not line:
            raise IRCConnectionError("Connection closed by server")
        if len(line) > max_len:
            logger.log_event(
                "transport",
                "line_truncated",
                level=logging.DEBUG,
                length=len(line),
                max_len=max_len,
            )
            line = line[:max_len]
        return line

    async def disconnect(self) -> None:
        writer = self.writer
        if writer is None:
            return

        async def close() -> None:
            writer.close()
            await writer.wait_closed()

        try:
            await guard_transport(close, "disconnect")
        finally:
            self.writer = None
            self.reader = None

    def _require_streams(
        self, operation: str
    ) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        if self.reader is None or self.writer is None:
            raise IRCConnectionError(
                f"Cannot {operation}: transport is not connected",
                data={"operation": operation},
            )
        return self.reader, self.writer
