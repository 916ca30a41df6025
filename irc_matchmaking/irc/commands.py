"""Outbound command formatting.

Each helper returns one command line without its terminator; ``encode_lines``
joins any number of them into a single CRLF-terminated buffer so a batch goes
out in one transport write.
"""

from __future__ import annotations

from ..constants import USER_MODE
from ..errors.internal import ParameterOutOfRangeError

CRLF = "\r\n"
_FORBIDDEN = ("\r", "\n", "\0")


def _check_text(value: str, what: str) -> None:
    if any(ch in value for ch in _FORBIDDEN):
        raise ParameterOutOfRangeError(
            f"{what} must not contain line breaks", data={"value": value}
        )


def format_command(verb: str, *params: str, trailing: str | None = None) -> str:
    """Build ``VERB p1 p2 :trailing``.

    Middle parameters must be single non-empty words not starting with ``:``.

    Raises:
        ParameterOutOfRangeError: If a parameter would break the line grammar.
    """
    parts = [verb]
    for param in params:
        _check_text(param, "Parameter")
        if not param or " " in param or param.startswith(":"):
            raise ParameterOutOfRangeError(
                "Parameter must be a single word", data={"value": param}
            )
        parts.append(param)
    if trailing is not None:
        _check_text(trailing, "Trailing text")
        parts.append(f":{trailing}")
    return " ".join(parts)


def encode_lines(*lines: str) -> bytes:
    return "".join(f"{line}{CRLF}" for line in lines).encode("utf-8")


def pass_placeholder() -> str:
    # The lobby has no password; "*" keeps servers that expect PASS happy.
    return format_command("PASS", "*")


def nick(name: str) -> str:
    return format_command("NICK", name)


def user(name: str) -> str:
    return format_command("USER", name, USER_MODE, "*", trailing=name)


def join(channel: str) -> str:
    return format_command("JOIN", channel)


def part(channel: str) -> str:
    return format_command("PART", channel)


def quit_() -> str:
    return format_command("QUIT")


def privmsg(target: str, text: str) -> str:
    return format_command("PRIVMSG", target, trailing=text)


def topic(channel: str, status: str | None = None) -> str:
    """Fetch (no status) or set the topic of ``channel``."""
    if status is None:
        return format_command("TOPIC", channel)
    return format_command("TOPIC", channel, status)


def names(channel: str) -> str:
    return format_command("NAMES", channel)


def invite(channel: str, nickname: str) -> str:
    return format_command("INVITE", channel, nickname)


def pong(token: str) -> str:
    return format_command("PONG", trailing=token)
