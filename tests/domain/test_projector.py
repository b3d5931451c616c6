from __future__ import annotations

from collections.abc import Iterator

from metamodel.domain import (
    GraphNode,
    GraphProjector,
    IncludedEntry,
    RelationshipSlot,
    ResourceIdentity,
)


def _node(
    type_: str,
    id_: str,
    attributes: dict[str, object] | None = None,
    relationships: dict[str, RelationshipSlot] | None = None,
) -> GraphNode:
    node = GraphNode(ResourceIdentity(type_, id_))
    node.populate(attributes=attributes, relationships=relationships)
    return node


def _abc_node() -> tuple[GraphNode, GraphNode, GraphNode, GraphNode]:
    a = _node("thing", "a")
    b = _node("thing", "b")
    c = _node("thing", "c")
    root = _node(
        "root",
        "1",
        relationships={
            "a": RelationshipSlot.single(a),
            "b": RelationshipSlot.single(b),
            "c": RelationshipSlot.single(c),
        },
    )
    return root, a, b, c


def test_project_attributes_all_and_requested() -> None:
    node = _node("post", "1", {"title": "Hi", "body": "Text", "rating": 4})
    projector = GraphProjector()

    assert projector.project_attributes(node) == {"title": "Hi", "body": "Text", "rating": 4}
    assert projector.project_attributes(node, ["rating", "title", "unknown"]) == {
        "title": "Hi",
        "rating": 4,
    }
    assert projector.project_attributes(node, []) == {}


def test_project_attributes_is_idempotent_and_fresh() -> None:
    node = _node("post", "1", {"title": "Hi", "tags": ["a"]})
    projector = GraphProjector()

    first = projector.project_attributes(node, {"title", "tags"})
    second = projector.project_attributes(node, {"title", "tags"})
    first["title"] = "changed"

    assert second == {"title": "Hi", "tags": ["a"]}
    assert node.get_attribute("title") == "Hi"


def test_exclusion_predicate_called_once_per_attribute() -> None:
    node = _node("user", "9", {"name": "Ann", "password": "secret", "email": "ann@example.com"})
    calls: list[tuple[str, GraphNode]] = []

    def excluded(key: str, context: GraphNode) -> bool:
        calls.append((key, context))
        return key == "password"

    projected = GraphProjector(excluded).project_attributes(node, ["name", "password"])

    assert projected == {"name": "Ann"}
    assert calls == [("name", node), ("password", node), ("email", node)]


def test_project_relationships_linkage() -> None:
    author = _node("user", "9")
    first = _node("comment", "c1")
    second = _node("comment", "c2")
    post = _node(
        "post",
        "1",
        relationships={
            "author": RelationshipSlot.single(author),
            "comments": RelationshipSlot.many([second, first]),
            "editor": RelationshipSlot.empty(),
        },
    )

    projected = GraphProjector().project_relationships(post)

    assert projected == {
        "author": ResourceIdentity("user", "9"),
        "comments": [ResourceIdentity("comment", "c2"), ResourceIdentity("comment", "c1")],
        "editor": None,
    }
    assert list(GraphProjector().project_relationships(post, ["editor"])) == ["editor"]


def test_project_included_filters_by_tree_in_declaration_order() -> None:
    root, a, _b, c = _abc_node()

    entries = list(GraphProjector().project_included(root, {"c": {}, "a": {}}))

    assert entries == [IncludedEntry("a", a, {}), IncludedEntry("c", c, {})]


def test_project_included_defaults_to_nothing() -> None:
    root, *_ = _abc_node()

    assert list(GraphProjector().project_included(root)) == []
    assert list(GraphProjector().project_included(root, {})) == []


def test_project_included_ignores_unknown_keys_and_empty_slots() -> None:
    target = _node("thing", "t")
    root = _node(
        "root",
        "1",
        relationships={"empty": RelationshipSlot.empty(), "full": RelationshipSlot.single(target)},
    )

    entries = list(
        GraphProjector().project_included(root, {"empty": {}, "full": {"x": {}}, "missing": {}})
    )

    assert entries == [IncludedEntry("full", target, {"x": {}})]


def test_project_included_many_keeps_stored_order() -> None:
    targets = [_node("comment", str(number)) for number in (3, 1, 2)]
    root = _node("post", "1", relationships={"comments": RelationshipSlot.many(targets)})

    entries = GraphProjector().project_included(root, {"comments": {}})

    assert [entry.node for entry in entries] == targets


def test_project_included_is_lazy() -> None:
    root, a, _b, _c = _abc_node()
    calls: list[str] = []

    def excluded(key: str, _context: GraphNode) -> bool:
        calls.append(key)
        return False

    entries = GraphProjector(excluded).project_included(root, {"a": {}, "b": {}, "c": {}})

    assert isinstance(entries, Iterator)
    assert calls == []
    assert next(entries).node is a
    assert calls == ["a"]


def test_project_included_skips_excluded_relationships() -> None:
    root, a, _b, c = _abc_node()

    entries = GraphProjector(lambda key, _context: key == "b").project_included(
        root, {"a": {}, "b": {}, "c": {}}
    )

    assert [entry.node for entry in entries] == [a, c]
