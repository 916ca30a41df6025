"""Event logging: the shared ``logger`` and its JSON template catalog."""

from .event_catalog import EVENT_TEMPLATES, load_templates, render  # noqa: F401
from .logger import EventLogger, logger  # noqa: F401

__all__ = ["EVENT_TEMPLATES", "EventLogger", "load_templates", "logger", "render"]
