"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_choice, optional_positive_int, read_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .settings import GraphSettings, TypeNaming, get_graph_settings

__all__ = [
    "ConfigurationError",
    "GraphSettings",
    "TypeNaming",
    "configure_logging",
    "get_graph_settings",
    "optional_choice",
    "optional_positive_int",
    "read_env_var",
]
