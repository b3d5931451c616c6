"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from metamodel.adapters.jsonapi import (
    DocumentAssembler,
    GraphBuilder,
    parse_document,
    pluralize,
    verbatim,
)
from metamodel.config import GraphSettings, TypeNaming, get_graph_settings
from metamodel.domain import GraphProjector

if TYPE_CHECKING:
    from metamodel.adapters.jsonapi import Fieldsets
    from metamodel.domain import ExclusionPredicate


log = getLogger(__name__)


def reproject_document(
    document: object,
    *,
    include: object = None,
    fields: Fieldsets | None = None,
    settings: GraphSettings | None = None,
    excluded: ExclusionPredicate | None = None,
) -> dict[str, Any]:
    """Build the graph of ``document`` and assemble it back into a document.

    Top-level ``meta`` and ``links`` of the source document are passed through.
    """

    effective_settings = settings or get_graph_settings()
    parsed = parse_document(document)
    log.info(
        "Reprojecting %s/%s: included=%s, include=%r, max_resources=%s",
        parsed.data.type,
        parsed.data.id,
        len(parsed.included),
        include,
        effective_settings.max_resources,
    )

    graph = GraphBuilder(max_resources=effective_settings.max_resources).build_graph(parsed)
    projector = GraphProjector(excluded) if excluded is not None else GraphProjector()
    assembler = DocumentAssembler(
        projector=projector,
        type_namer=pluralize if effective_settings.type_naming is TypeNaming.PLURAL else verbatim,
        max_included=effective_settings.max_included,
    )
    result = assembler.assemble(
        graph.root,
        include=include,
        fields=fields,
        meta=parsed.meta,
        links=parsed.links,
    )

    log.info(
        "Finished reprojecting %s: indexed=%s, included=%s",
        graph.root.key,
        len(graph.index),
        len(result.get("included", ())),
    )
    return result
