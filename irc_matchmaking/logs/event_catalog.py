"""Human-readable text for logged events, kept in ``event_templates.json``.

The file maps ``domain -> action -> template``; templates use ``str.format``
fields named after the keyword arguments passed to ``log_event``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")


def load_templates(path: Path = TEMPLATES_PATH) -> dict[tuple[str, str], str]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    return {
        (domain, action): text
        for domain, actions in raw.items()
        for action, text in actions.items()
    }


EVENT_TEMPLATES = load_templates()


def render(domain: str, action: str, fields: Mapping[str, object]) -> str | None:
    """Fill the template of ``domain``/``action``; ``None`` when there is none.

    A template whose fields are not all supplied is returned unformatted.
    """
    template = EVENT_TEMPLATES.get((domain, action))
    if template is None:
        return None
    try:
        return template.format(**fields)
    except (KeyError, IndexError, ValueError):
        return template


__all__ = ["EVENT_TEMPLATES", "TEMPLATES_PATH", "load_templates", "render"]
