"""Inclusion trees: which relationship paths a projection expands.

A tree maps relationship keys to nested trees. ``{}`` includes nothing,
``{"author": {}}`` includes the author but nothing beneath it. Two wildcard
keys are understood: ``"*"`` selects every relationship at its level and
``"**"`` selects every relationship at every depth.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

InclusionTree: TypeAlias = "Mapping[str, InclusionTree]"

ANY_RELATIONSHIP: Final[str] = "*"
ANY_DEPTH: Final[str] = "**"


def parse_inclusion_tree(value: object) -> dict[str, dict]:
    """Normalise include arguments into a nested ``dict`` tree.

    Accepts ``None``, a JSON:API ``include`` parameter (``"author,comments.author"``),
    a sequence of paths and/or nested mappings, or a mapping whose values are any
    of these.
    """

    tree: dict[str, dict] = {}
    if value is None:
        return tree
    if isinstance(value, str):
        for path in value.split(","):
            if path.strip():
                _merge(tree, _parse_path(path))
        return tree
    if isinstance(value, Mapping):
        for key, nested in value.items():
            _merge(tree, {_segment(str(key), str(key)): parse_inclusion_tree(nested)})
        return tree
    if isinstance(value, Sequence):
        for item in value:
            _merge(tree, parse_inclusion_tree(item))
        return tree
    raise TypeError(f"Unsupported inclusion value: {type(value).__name__}")


def subtree_for(tree: InclusionTree, key: str) -> dict[str, dict] | None:
    """Return the nested tree selected for ``key`` or ``None`` if not selected."""

    selected: dict[str, dict] | None = None
    if ANY_DEPTH in tree:
        selected = {ANY_DEPTH: {}}
    if ANY_RELATIONSHIP in tree:
        selected = _merge(selected or {}, parse_inclusion_tree(tree[ANY_RELATIONSHIP]))
    if key in tree:
        selected = _merge(selected or {}, parse_inclusion_tree(tree[key]))
    return selected


def _parse_path(path: str) -> dict[str, dict]:
    tree: dict[str, dict] = {}
    for segment in reversed(path.strip().split(".")):
        tree = {_segment(segment, path): tree}
    return tree


def _segment(segment: str, path: str) -> str:
    name = segment.strip()
    if not name:
        raise ValueError(f"Blank relationship name in include path {path!r}")
    return name


def _merge(target: dict[str, dict], other: Mapping[str, Mapping]) -> dict[str, dict]:
    for key, nested in other.items():
        _merge(target.setdefault(key, {}), nested)
    return target
