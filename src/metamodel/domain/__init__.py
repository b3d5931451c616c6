"""Resource graph model: identities, nodes, the build index and projection."""

from __future__ import annotations

from .errors import (
    MalformedDocumentError,
    MalformedLinkageError,
    MetaModelError,
    ResourceLimitExceededError,
)
from .identity import ResourceIdentity
from .inclusion import InclusionTree, parse_inclusion_tree, subtree_for
from .index import ResourceIndex
from .node import GraphNode, RelationshipSlot, SlotKind
from .projector import ExclusionPredicate, GraphProjector, IncludedEntry, Linkage

__all__ = [
    "ExclusionPredicate",
    "GraphNode",
    "GraphProjector",
    "IncludedEntry",
    "InclusionTree",
    "Linkage",
    "MalformedDocumentError",
    "MalformedLinkageError",
    "MetaModelError",
    "RelationshipSlot",
    "ResourceIdentity",
    "ResourceIndex",
    "ResourceLimitExceededError",
    "SlotKind",
    "parse_inclusion_tree",
    "subtree_for",
]
