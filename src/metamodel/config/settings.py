"""Graph construction and projection settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .env import optional_choice, optional_positive_int, read_env_var
from .errors import ConfigurationError

MAX_RESOURCES_ENV: Final[str] = "METAMODEL_MAX_RESOURCES"
MAX_INCLUDED_ENV: Final[str] = "METAMODEL_MAX_INCLUDED"
TYPE_NAMING_ENV: Final[str] = "METAMODEL_TYPE_NAMING"
LOG_LEVEL_ENV: Final[str] = "METAMODEL_LOG_LEVEL"


class TypeNaming(StrEnum):
    """How resource types are rendered in projected documents."""

    PLURAL = "plural"
    VERBATIM = "verbatim"


@dataclass(frozen=True, slots=True)
class GraphSettings:
    """Limits and naming applied to one build/projection round trip.

    ``max_resources`` bounds the number of distinct resources a single build may
    index; hosts feeding untrusted documents should set it. ``max_included``
    caps the ``included`` array of assembled documents.
    """

    max_resources: int | None = None
    max_included: int | None = None
    type_naming: TypeNaming = TypeNaming.PLURAL
    log_level: int = logging.INFO


def _log_level() -> int:
    raw = read_env_var(LOG_LEVEL_ENV)
    if raw is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(raw.upper())
    if level is None:
        raise ConfigurationError(f"{LOG_LEVEL_ENV} is not a logging level: {raw!r}")
    return level


def get_graph_settings() -> GraphSettings:
    naming = optional_choice(
        TYPE_NAMING_ENV,
        [member.value for member in TypeNaming],
        default=TypeNaming.PLURAL.value,
    )
    return GraphSettings(
        max_resources=optional_positive_int(MAX_RESOURCES_ENV),
        max_included=optional_positive_int(MAX_INCLUDED_ENV),
        type_naming=TypeNaming(naming),
        log_level=_log_level(),
    )
