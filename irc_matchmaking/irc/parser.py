"""IRC line parsing.

Only the shape the matchmaking client needs is recognised::

    [":" prefix SPACE] command [params] CRLF

Middle parameters are not split into a list; the final (trailing) parameter is
the only one extracted.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors.internal import MalformedMessageError


@dataclass(frozen=True)
class Message:
    prefix: str | None
    command: str
    trailing: str | None
    raw: str

    @property
    def nick(self) -> str | None:
        """Nickname part of a ``nick!user@host`` prefix."""
        if not self.prefix:
            return None
        return self.prefix.split("!", 1)[0]

    @property
    def is_numeric(self) -> bool:
        return len(self.command) == 3 and self.command.isdigit()

    def head(self) -> str:
        """The line without its trailing parameter."""
        line = self.raw
        start = 0
        if line.startswith(":"):
            start = line.find(" ") + 1
        idx = line.find(" :", start)
        return line if idx == -1 else line[:idx]

    def mentions(self, token: str) -> bool:
        """Whether ``token`` appears as a whole word before the trailing parameter."""
        wanted = token.lower()
        return any(part.lower() == wanted for part in self.head().split()[1:])


def parse_message(raw_line: str | bytes) -> Message:
    """Parse one protocol line.

    Args:
        raw_line: The line as received, with or without its terminator.

    Returns:
        The parsed ``Message``.

    Raises:
        MalformedMessageError: If a prefix is not followed by a command, or
            the line has no command at all.
    """
    if isinstance(raw_line, bytes):
        raw_line = raw_line.decode("utf-8", errors="replace")
    line = raw_line.rstrip("\r\n")

    prefix: str | None = None
    rest = line
    if line.startswith(":"):
        end = line.find(" ")
        if end == -1:
            raise MalformedMessageError(
                "Prefix is not followed by a command", data={"raw": line}
            )
        prefix = line[1:end]
        if not prefix:
            raise MalformedMessageError("Empty prefix", data={"raw": line})
        rest = line[end + 1 :].lstrip(" ")

    if not rest:
        raise MalformedMessageError("Missing command", data={"raw": line})

    space = rest.find(" ")
    if space == -1:
        command, params = rest, ""
    else:
        command, params = rest[:space], rest[space + 1 :]

    trailing: str | None = None
    if params.startswith(":"):
        trailing = params[1:]
    else:
        idx = params.find(" :")
        if idx != -1:
            trailing = params[idx + 2 :]

    return Message(prefix=prefix, command=command, trailing=trailing, raw=line)
