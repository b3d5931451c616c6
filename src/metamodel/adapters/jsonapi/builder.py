"""Translate JSON:API documents into a deduplicated resource graph.

Construction runs in two phases so relationship cycles never recurse:
1) register the primary resource and every ``included`` entry as an
   identity-only node, unless its key is already indexed (first writer wins)
2) populate each newly registered node: attributes verbatim, then relationship
   slots resolved through the index

A linkage whose target was never registered gets a minimal node (identity
only) inserted into the index, so later references to it share the instance.
When ``build`` returns every reachable node is fully populated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from metamodel.domain.index import ResourceIndex
from metamodel.domain.node import GraphNode, RelationshipSlot

from .schema import ResourceIdentifier, parse_document

if TYPE_CHECKING:
    from metamodel.domain.identity import ResourceIdentity

    from .schema import Relationship, ResourceObject

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceGraph:
    """Root node of a built document plus the index holding every node."""

    root: GraphNode
    index: ResourceIndex


@dataclass(slots=True, kw_only=True)
class GraphBuilder:
    """Build graphs from decoded JSON:API documents.

    ``max_resources`` bounds the number of distinct resources indexed by one
    build and only applies to indexes the builder creates itself.
    """

    max_resources: int | None = None

    def build(self, document: object, index: ResourceIndex | None = None) -> GraphNode:
        return self.build_graph(document, index).root

    def build_graph(self, document: object, index: ResourceIndex | None = None) -> ResourceGraph:
        parsed = parse_document(document)
        active_index = index
        if active_index is None:
            active_index = ResourceIndex(max_resources=self.max_resources)
        before = len(active_index)

        pending: list[tuple[GraphNode, ResourceObject]] = []
        root = self._register(parsed.data, active_index, pending)
        for resource in parsed.included:
            self._register(resource, active_index, pending)

        for node, resource in pending:
            self._populate(node, resource, active_index)

        log.debug(
            "Built graph for %s: %s new resources, %s indexed",
            root.key,
            len(active_index) - before,
            len(active_index),
        )
        return ResourceGraph(root=root, index=active_index)

    def _register(
        self,
        resource: ResourceObject,
        index: ResourceIndex,
        pending: list[tuple[GraphNode, ResourceObject]],
    ) -> GraphNode:
        identity = resource.identity()
        existing = index.get(identity.key)
        if existing is not None:
            return existing
        node = index.insert(GraphNode(identity))
        pending.append((node, resource))
        return node

    def _populate(self, node: GraphNode, resource: ResourceObject, index: ResourceIndex) -> None:
        relationships = {
            name: self._resolve_slot(relationship, index)
            for name, relationship in (resource.relationships or {}).items()
        }
        node.populate(
            attributes=resource.attributes,
            relationships=relationships,
            meta=resource.meta,
            links=resource.links,
        )

    def _resolve_slot(self, relationship: Relationship, index: ResourceIndex) -> RelationshipSlot:
        data = relationship.data
        if data is None:
            return RelationshipSlot.empty()
        if isinstance(data, ResourceIdentifier):
            return RelationshipSlot.single(self._resolve(data.identity(), index))
        return RelationshipSlot.many(self._resolve(linkage.identity(), index) for linkage in data)

    def _resolve(self, identity: ResourceIdentity, index: ResourceIndex) -> GraphNode:
        return index.get_or_insert(identity, _minimal_node)


def _minimal_node(identity: ResourceIdentity) -> GraphNode:
    node = GraphNode(identity)
    node.populate()
    return node
