"""Project graph nodes back into document-shaped data."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple, TypeAlias

from .inclusion import subtree_for
from .node import SlotKind

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator

    from .identity import ResourceIdentity
    from .inclusion import InclusionTree
    from .node import GraphNode

ExclusionPredicate: TypeAlias = "Callable[[str, GraphNode], bool]"
Linkage: TypeAlias = "ResourceIdentity | list[ResourceIdentity] | None"


def include_everything(_key: str, _node: GraphNode) -> bool:
    return False


class IncludedEntry(NamedTuple):
    """One related node reached through a selected relationship."""

    relationship: str
    node: GraphNode
    tree: InclusionTree


@dataclass(frozen=True, slots=True)
class GraphProjector:
    """Select attributes, linkage and included nodes from a graph.

    ``excluded`` is asked once per attribute or relationship key and node per
    projection; ``True`` omits the key. It is supplied by the serialization
    layer and defaults to excluding nothing.
    """

    excluded: ExclusionPredicate = include_everything

    def project_attributes(
        self,
        node: GraphNode,
        requested_keys: Collection[str] | None = None,
    ) -> dict[str, Any]:
        projected: dict[str, Any] = {}
        for key, value in node.attributes.items():
            if self.excluded(key, node):
                continue
            if requested_keys is not None and key not in requested_keys:
                continue
            projected[key] = value
        return projected

    def project_relationships(
        self,
        node: GraphNode,
        requested_keys: Collection[str] | None = None,
    ) -> dict[str, Linkage]:
        projected: dict[str, Linkage] = {}
        for key, slot in node.relationships.items():
            if self.excluded(key, node):
                continue
            if requested_keys is not None and key not in requested_keys:
                continue
            if slot.kind is SlotKind.EMPTY:
                projected[key] = None
            elif slot.kind is SlotKind.SINGLE:
                projected[key] = slot.targets[0].identity
            else:
                projected[key] = [target.identity for target in slot.targets]
        return projected

    def project_included(
        self,
        node: GraphNode,
        inclusion_tree: InclusionTree | None = None,
    ) -> Iterator[IncludedEntry]:
        """Lazily yield one entry per related node selected by ``inclusion_tree``.

        Relationships are walked in declaration order and targets in stored order.
        The iterator is single-pass; callers recurse with ``entry.tree`` to reach
        resources nested further down.
        """

        tree = inclusion_tree or {}
        for key, slot in node.relationships.items():
            nested = subtree_for(tree, key)
            if nested is None or self.excluded(key, node):
                continue
            for target in slot.targets:
                yield IncludedEntry(key, target, nested)
