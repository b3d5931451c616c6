"""Identity index threaded through one graph construction pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import ResourceLimitExceededError
from .node import GraphNode

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from .identity import ResourceIdentity


@dataclass(slots=True)
class ResourceIndex:
    """Mapping of identity key to node for one build pass.

    Insertion is idempotent: the first node stored under a key is kept for the
    lifetime of the index and later inserts for the same key return it. A lookup
    miss returns ``None``; it is never an error.
    """

    max_resources: int | None = None
    _nodes_by_key: dict[str, GraphNode] = field(default_factory=dict[str, GraphNode], repr=False)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes_by_key

    def __len__(self) -> int:
        return len(self._nodes_by_key)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes_by_key.values())

    def get(self, key: str) -> GraphNode | None:
        return self._nodes_by_key.get(key)

    def nodes(self) -> tuple[GraphNode, ...]:
        return tuple(self._nodes_by_key.values())

    def insert(self, node: GraphNode) -> GraphNode:
        existing = self._nodes_by_key.get(node.key)
        if existing is not None:
            return existing
        if self.max_resources is not None and len(self._nodes_by_key) >= self.max_resources:
            raise ResourceLimitExceededError(limit=self.max_resources)
        self._nodes_by_key[node.key] = node
        return node

    def get_or_insert(
        self,
        identity: ResourceIdentity,
        factory: Callable[[ResourceIdentity], GraphNode] = GraphNode,
    ) -> GraphNode:
        existing = self._nodes_by_key.get(identity.key)
        if existing is not None:
            return existing
        return self.insert(factory(identity))
