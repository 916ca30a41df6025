"""Reply correlation for request/response exchanges on one connection.

Servers interleave unsolicited traffic (PING, chat, topic echoes, the burst
that follows a JOIN) with command replies. A ``ReplyExpectation`` describes
which line answers the command just sent, so anything else can be skipped.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import (
    ERR_NOSUCHCHANNEL,
    ERR_NOTONCHANNEL,
    RPL_ENDOFNAMES,
    RPL_NAMREPLY,
    RPL_NOTOPIC,
    RPL_TOPIC,
)
from .parser import Message


@dataclass(frozen=True, slots=True)
class ReplyExpectation:
    codes: frozenset[str]
    channel: str

    def matches(self, message: Message) -> bool:
        return message.command in self.codes and message.mentions(self.channel)


def topic_reply(channel: str) -> ReplyExpectation:
    return ReplyExpectation(
        frozenset({RPL_NOTOPIC, RPL_TOPIC, ERR_NOSUCHCHANNEL, ERR_NOTONCHANNEL}),
        channel,
    )


def names_reply(channel: str) -> ReplyExpectation:
    return ReplyExpectation(
        frozenset({RPL_NAMREPLY, RPL_ENDOFNAMES, ERR_NOSUCHCHANNEL}), channel
    )
