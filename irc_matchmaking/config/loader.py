"""Configuration loading: JSON file overlaid with environment variables."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import DEFAULT_CONFIG_FILE, IRC_MATCHMAKING_CONF
from ..errors.internal import ConfigError
from .model import MatchmakingConfig

# Field name -> environment variable overriding it
ENV_OVERRIDES: dict[str, str] = {
    "server": "IRC_SERVER",
    "port": "IRC_PORT",
    "lobby_channel": "IRC_LOBBY_CHANNEL",
    "room_prefix": "IRC_ROOM_PREFIX",
    "no_topic_marker": "IRC_NO_TOPIC_MARKER",
    "connect_timeout": "IRC_CONNECT_TIMEOUT",
    "read_timeout": "IRC_READ_TIMEOUT",
    "connect_attempts": "IRC_CONNECT_ATTEMPTS",
    "max_unsolicited_lines": "IRC_MAX_UNSOLICITED_LINES",
}


def _read_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in config file {path}: {e}", data={"path": str(path)}
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Cannot read config file {path}: {e}", data={"path": str(path)}
        ) from e
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Config file {path} must contain a JSON object", data={"path": str(path)}
        )
    return raw


def _env_values() -> dict[str, str]:
    values = {}
    for field, var in ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if value is not None and value.strip():
            values[field] = value.strip()
    return values


def load_config(path: str | os.PathLike[str] | None = None) -> MatchmakingConfig:
    """Build the client configuration.

    Values come from the built-in defaults, then the JSON config file, then
    environment variables (highest precedence). The file is ``path`` when
    given, else ``$IRC_MATCHMAKING_CONF``, else ``irc_matchmaking.json`` in the
    working directory; only the last one may be absent.

    Raises:
        ConfigError: If the file is unreadable or a value fails validation.
    """
    explicit = path or os.environ.get(IRC_MATCHMAKING_CONF)
    config_path = Path(explicit) if explicit else Path(DEFAULT_CONFIG_FILE)

    data: dict[str, Any] = {}
    if config_path.exists():
        data.update(_read_file(config_path))
        logging.debug(f"📁 Loaded matchmaking config from {config_path}")
    elif explicit:
        raise ConfigError(
            f"Config file not found: {config_path}", data={"path": str(config_path)}
        )
    data.update(_env_values())

    try:
        return MatchmakingConfig(**data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid matchmaking configuration: {e.error_count()} error(s)",
            data={"errors": e.errors(include_url=False)},
        ) from e
