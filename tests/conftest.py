from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeAlias

import pytest

from metamodel.config.settings import (
    LOG_LEVEL_ENV,
    MAX_INCLUDED_ENV,
    MAX_RESOURCES_ENV,
    TYPE_NAMING_ENV,
)

DATA_DIR = Path(__file__).resolve().parent / "data"

JsonDocument: TypeAlias = "dict[str, Any]"


def load_document(name: str) -> JsonDocument:
    return json.loads((DATA_DIR / name).read_text())


@pytest.fixture(autouse=True)
def _clean_metamodel_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (MAX_RESOURCES_ENV, MAX_INCLUDED_ENV, TYPE_NAMING_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def post_document() -> JsonDocument:
    return load_document("post_with_author.json")


@pytest.fixture
def blog_document() -> JsonDocument:
    return load_document("blog_post.json")


@pytest.fixture
def cycle_document() -> JsonDocument:
    return load_document("cycle.json")
