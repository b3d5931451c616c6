from __future__ import annotations

import pytest

from metamodel.domain import GraphNode, ResourceIdentity, ResourceIndex
from metamodel.domain.errors import ResourceLimitExceededError


def test_lookup_miss_returns_none() -> None:
    index = ResourceIndex()

    assert index.get("user_9") is None
    assert "user_9" not in index


def test_first_insert_wins() -> None:
    index = ResourceIndex()
    first = GraphNode(ResourceIdentity("user", "9"))
    second = GraphNode(ResourceIdentity("user", "9"))

    assert index.insert(first) is first
    assert index.insert(second) is first
    assert index.get("user_9") is first
    assert len(index) == 1


def test_get_or_insert_builds_only_on_miss() -> None:
    index = ResourceIndex()
    calls: list[ResourceIdentity] = []

    def factory(identity: ResourceIdentity) -> GraphNode:
        calls.append(identity)
        return GraphNode(identity)

    identity = ResourceIdentity("user", "9")
    node = index.get_or_insert(identity, factory)

    assert index.get_or_insert(identity, factory) is node
    assert calls == [identity]


def test_iterates_in_insertion_order() -> None:
    index = ResourceIndex()
    nodes = [GraphNode(ResourceIdentity("user", str(number))) for number in range(3)]
    for node in nodes:
        index.insert(node)

    assert list(index) == nodes
    assert index.nodes() == tuple(nodes)


def test_limit_applies_to_new_keys_only() -> None:
    index = ResourceIndex(max_resources=1)
    node = index.insert(GraphNode(ResourceIdentity("user", "9")))

    assert index.insert(GraphNode(ResourceIdentity("user", "9"))) is node
    with pytest.raises(ResourceLimitExceededError, match="more than 1"):
        index.insert(GraphNode(ResourceIdentity("user", "10")))
