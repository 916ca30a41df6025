"""Configuration package: validated settings model and loader."""

from .loader import load_config  # noqa: F401
from .model import MatchmakingConfig  # noqa: F401

__all__ = ["MatchmakingConfig", "load_config"]
