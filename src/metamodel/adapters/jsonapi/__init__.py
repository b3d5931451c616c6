"""JSON:API adapter: document schema, graph builder and document assembler."""

from __future__ import annotations

from .assembler import DocumentAssembler, Fieldsets, parse_fieldsets
from .builder import GraphBuilder, ResourceGraph
from .naming import TypeNamer, pluralize, verbatim
from .schema import Document, Relationship, ResourceIdentifier, ResourceObject, parse_document

__all__ = [
    "Document",
    "DocumentAssembler",
    "Fieldsets",
    "GraphBuilder",
    "Relationship",
    "ResourceGraph",
    "ResourceIdentifier",
    "ResourceObject",
    "TypeNamer",
    "parse_document",
    "parse_fieldsets",
    "pluralize",
    "verbatim",
]
