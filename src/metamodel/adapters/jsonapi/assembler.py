"""Assemble JSON:API documents from a projected resource graph."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from itertools import islice
from typing import TYPE_CHECKING, Any, TypeAlias

from metamodel.domain.inclusion import parse_inclusion_tree
from metamodel.domain.projector import GraphProjector

from .naming import pluralize

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator, Mapping

    from metamodel.domain.identity import ResourceIdentity
    from metamodel.domain.inclusion import InclusionTree
    from metamodel.domain.node import GraphNode
    from metamodel.domain.projector import Linkage

    from .naming import TypeNamer

Fieldsets: TypeAlias = "Mapping[str, str | Collection[str]]"

log = logging.getLogger(__name__)


def parse_fieldsets(fields: Fieldsets | None) -> dict[str, frozenset[str]]:
    """Normalise sparse fieldsets; comma separated strings are split."""

    parsed: dict[str, frozenset[str]] = {}
    for type_name, keys in (fields or {}).items():
        names = keys.split(",") if isinstance(keys, str) else keys
        parsed[type_name] = frozenset(name.strip() for name in names if name.strip())
    return parsed


@dataclass(slots=True, kw_only=True)
class DocumentAssembler:
    """Turn a graph node into a JSON:API document.

    Types are written through ``type_namer`` (pluralized by default). Sparse
    fieldsets are looked up by the raw type first, then by the written type, and
    restrict both attributes and relationships of matching resources.
    ``max_included`` caps the ``included`` array; the lazy included sequence is
    not consumed past the cap.
    """

    projector: GraphProjector = field(default_factory=GraphProjector)
    type_namer: TypeNamer = pluralize
    max_included: int | None = None

    def assemble(
        self,
        node: GraphNode,
        *,
        include: object = None,
        fields: Fieldsets | None = None,
        meta: Mapping[str, Any] | None = None,
        links: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        fieldsets = parse_fieldsets(fields)
        document: dict[str, Any] = {"data": self.resource_object(node, fieldsets)}

        included_resources = self.iter_included(node, include, fieldsets)
        if self.max_included is None:
            included = list(included_resources)
        else:
            included = list(islice(included_resources, self.max_included + 1))
            if len(included) > self.max_included:
                log.warning(
                    "Included resources for %s truncated at %s", node.key, self.max_included
                )
                del included[self.max_included :]

        if included:
            document["included"] = included
        if links:
            document["links"] = dict(links)
        if meta:
            document["meta"] = dict(meta)
        return document

    def resource_object(
        self,
        node: GraphNode,
        fields: Fieldsets | None = None,
    ) -> dict[str, Any]:
        requested = self._fieldset_for(node, parse_fieldsets(fields))
        resource: dict[str, Any] = {"type": self.type_namer(node.type), "id": node.id}

        attributes = self.projector.project_attributes(node, requested)
        if attributes:
            resource["attributes"] = attributes
        relationships = self.projector.project_relationships(node, requested)
        if relationships:
            resource["relationships"] = {
                key: {"data": self._linkage(linkage)} for key, linkage in relationships.items()
            }
        if node.links:
            resource["links"] = dict(node.links)
        if node.meta:
            resource["meta"] = dict(node.meta)
        return resource

    def iter_included(
        self,
        node: GraphNode,
        inclusion_tree: object = None,
        fields: Fieldsets | None = None,
    ) -> Iterator[dict[str, Any]]:
        """Lazily yield included resource objects, depth first.

        ``inclusion_tree`` takes anything :func:`parse_inclusion_tree` accepts.

        Each identity is emitted once and the primary resource never is. A node
        reached again under a tree it was already expanded with is not walked
        twice, so cyclic graphs terminate even under ``**``.
        """

        fieldsets = parse_fieldsets(fields)
        seen = {node.key}
        expanded: set[tuple[str, str]] = set()
        tree = parse_inclusion_tree(inclusion_tree)
        yield from self._walk(node, tree, fieldsets, seen, expanded)

    def _walk(
        self,
        node: GraphNode,
        tree: InclusionTree,
        fieldsets: dict[str, frozenset[str]],
        seen: set[str],
        expanded: set[tuple[str, str]],
    ) -> Iterator[dict[str, Any]]:
        for entry in self.projector.project_included(node, tree):
            target = entry.node
            if target.key not in seen:
                seen.add(target.key)
                yield self.resource_object(target, fieldsets)
            if not entry.tree:
                continue
            signature = (target.key, json.dumps(entry.tree, sort_keys=True))
            if signature in expanded:
                continue
            expanded.add(signature)
            yield from self._walk(target, entry.tree, fieldsets, seen, expanded)

    def _fieldset_for(
        self,
        node: GraphNode,
        fieldsets: dict[str, frozenset[str]],
    ) -> frozenset[str] | None:
        for name in (node.type, self.type_namer(node.type)):
            if name in fieldsets:
                return fieldsets[name]
        return None

    def _linkage(self, linkage: Linkage) -> dict[str, str] | list[dict[str, str]] | None:
        if linkage is None:
            return None
        if isinstance(linkage, list):
            return [self._identifier(identity) for identity in linkage]
        return self._identifier(linkage)

    def _identifier(self, identity: ResourceIdentity) -> dict[str, str]:
        return {"type": self.type_namer(identity.type), "id": identity.id}
