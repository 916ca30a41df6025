from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    IRCConnectionError,
    MatchmakingError,
    ProtocolError,
)

T = TypeVar("T")

# Raw stream-layer failures that are wrapped into IRCConnectionError.
TRANSPORT_EXCEPTIONS: tuple[type[BaseException], ...] = (
    OSError,
    TimeoutError,
    asyncio.IncompleteReadError,
    asyncio.LimitOverrunError,
)


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error is categorized from its type and routed through structured
    logging so repeated failures are aggregated per category.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = "unknown"
    if isinstance(error, IRCConnectionError | OSError | TimeoutError):
        error_type = "network"
    elif isinstance(error, ProtocolError):
        error_type = "protocol"
    elif isinstance(error, ConfigError):
        error_type = "config"
    elif isinstance(error, MatchmakingError):
        error_type = "matchmaking"

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


async def guard_transport(
    operation: Callable[[], Awaitable[T]], context: str
) -> T:
    """Run a stream operation and translate raw failures.

    Args:
        operation: The async stream operation to execute.
        context: Descriptive context for the operation (e.g., "send").

    Returns:
        The result of the operation if successful.

    Raises:
        IRCConnectionError: If the operation failed with a socket, timeout or
            stream error.
    """
    try:
        return await operation()
    except TRANSPORT_EXCEPTIONS as e:
        error_context = {"operation": context, "timestamp": time.time()}
        log_error(f"Transport operation failed in {context}", e, context=error_context)
        if isinstance(e, TimeoutError):
            raise IRCConnectionError(
                f"Timed out during {context}", data=error_context
            ) from e
        raise IRCConnectionError(
            f"Connection failure during {context}: {str(e)}", data=error_context
        ) from e


async def retry_transport(
    operation: Callable[[], Awaitable[T]],
    context: str,
    max_attempts: int = 3,
    max_wait: float = 8.0,
) -> T:
    """Retry a transport operation with Tenacity-based exponential backoff.

    Only ``IRCConnectionError`` triggers another attempt; the last failure is
    re-raised unchanged once attempts are exhausted.

    Args:
        operation: Async callable performing one attempt.
        context: Descriptive context for the operation.
        max_attempts: Maximum number of attempts.
        max_wait: Upper bound in seconds for the wait between attempts.

    Returns:
        The result of the first successful attempt.
    """

    def before_retry(retry_state):
        if retry_state.attempt_number > 1:
            logging.info(f"Retrying {context} (attempt {retry_state.attempt_number})")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=0.5, max=max_wait),
        retry=retry_if_exception_type(IRCConnectionError),
        before=before_retry,
        reraise=True,
    )
    return await retrying(operation)
