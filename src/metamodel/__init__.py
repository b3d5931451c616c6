from __future__ import annotations

from importlib import metadata

from metamodel.adapters.jsonapi import DocumentAssembler, GraphBuilder, ResourceGraph
from metamodel.app import reproject_document
from metamodel.domain import (
    GraphNode,
    GraphProjector,
    IncludedEntry,
    MalformedDocumentError,
    MalformedLinkageError,
    MetaModelError,
    RelationshipSlot,
    ResourceIdentity,
    ResourceIndex,
    ResourceLimitExceededError,
    SlotKind,
    parse_inclusion_tree,
)

try:
    __version__ = metadata.version("metamodel")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "DocumentAssembler",
    "GraphBuilder",
    "GraphNode",
    "GraphProjector",
    "IncludedEntry",
    "MalformedDocumentError",
    "MalformedLinkageError",
    "MetaModelError",
    "RelationshipSlot",
    "ResourceGraph",
    "ResourceIdentity",
    "ResourceIndex",
    "ResourceLimitExceededError",
    "SlotKind",
    "__version__",
    "parse_inclusion_tree",
    "reproject_document",
]
