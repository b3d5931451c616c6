from __future__ import annotations

from typing import Any

import pytest

from metamodel.app import reproject_document
from metamodel.config import GraphSettings, TypeNaming
from metamodel.domain import GraphNode, MalformedLinkageError
from metamodel.domain.errors import ResourceLimitExceededError


def test_reproject_round_trip(post_document: dict[str, Any]) -> None:
    result = reproject_document(post_document, include="author")

    assert result == {
        "data": {
            "type": "posts",
            "id": "1",
            "attributes": {"title": "Hi"},
            "relationships": {"author": {"data": {"type": "users", "id": "9"}}},
        },
        "included": [{"type": "users", "id": "9", "attributes": {"name": "Ann"}}],
    }


def test_reproject_passes_document_meta_and_links(blog_document: dict[str, Any]) -> None:
    result = reproject_document(blog_document)

    assert result["meta"] == {"copyright": "2026"}
    assert result["links"] == {"self": "/posts/1?include=comments"}
    assert "included" not in result


def test_reproject_uses_settings(blog_document: dict[str, Any]) -> None:
    settings = GraphSettings(max_included=1, type_naming=TypeNaming.VERBATIM)

    result = reproject_document(blog_document, include="comments", settings=settings)

    assert result["data"]["type"] == "post"
    assert result["included"] == [
        {
            "type": "comment",
            "id": "c2",
            "attributes": {"text": "Second"},
            "relationships": {"author": {"data": {"type": "user", "id": "10"}}},
        }
    ]


def test_reproject_reads_settings_from_environment(
    monkeypatch: pytest.MonkeyPatch, blog_document: dict[str, Any]
) -> None:
    monkeypatch.setenv("METAMODEL_MAX_RESOURCES", "2")

    with pytest.raises(ResourceLimitExceededError):
        reproject_document(blog_document)


def test_reproject_applies_exclusion(post_document: dict[str, Any]) -> None:
    def excluded(key: str, node: GraphNode) -> bool:
        return node.type == "user" and key == "name"

    result = reproject_document(post_document, include="author", excluded=excluded)

    assert result["included"] == [{"type": "users", "id": "9"}]


def test_reproject_fails_wholesale_on_bad_linkage() -> None:
    document = {
        "data": {"type": "post", "id": "1", "relationships": {"author": {"data": {"id": "9"}}}}
    }

    with pytest.raises(MalformedLinkageError):
        reproject_document(document, settings=GraphSettings())
