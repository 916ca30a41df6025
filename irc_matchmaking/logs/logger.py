"""Event logger used by every matchmaking component."""

from __future__ import annotations

import logging

from ..logging_config import debug_enabled
from .event_catalog import render

# Events whose text is a chat line rather than a status message
_CHAT_EVENTS = {("lobby", "message_sent")}


class EventLogger:
    """Log named events as ``[nick@channel] text``.

    ``user`` and ``channel`` form the prefix. Any other keyword fills the
    event's template and, with ``DEBUG`` set, is appended as ``(key=value)``.
    """

    def __init__(self, name: str = "irc_matchmaking", log_file: str | None = None):
        self.logger = logging.getLogger(name)
        if log_file:
            handler = logging.FileHandler(log_file, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(message)s")
            )
            self.logger.addHandler(handler)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        user: str | None = None,
        channel: str | None = None,
        exc_info: bool = False,
        **fields: object,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        text = human or render(domain, action, fields) or f"{domain} {action}".replace("_", " ")
        if (domain, action) in _CHAT_EVENTS:
            text = f"💬 {text}"
        who = user or "client"
        prefix = f"[{who}@{channel}]" if channel else f"[{who}]"
        message = f"{prefix} {text}"
        if fields and debug_enabled():
            context = ", ".join(f"{k}={v}" for k, v in fields.items())
            message = f"{message} ({context})"
        self.logger.log(level, message, exc_info=exc_info)


logger = EventLogger()
