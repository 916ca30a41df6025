"""IRC wire layer: parsing, command formatting, reply correlation, transport."""

from .parser import Message, parse_message  # noqa: F401
from .replies import ReplyExpectation, names_reply, topic_reply  # noqa: F401
from .transport import AsyncStreamTransport, Transport  # noqa: F401

__all__ = [
    "AsyncStreamTransport",
    "Message",
    "ReplyExpectation",
    "Transport",
    "names_reply",
    "parse_message",
    "topic_reply",
]
