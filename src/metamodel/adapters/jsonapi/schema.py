"""Minimal Pydantic models for incoming JSON:API documents.

Only the structure needed to build a graph is checked; these models do not
validate JSON:API compliance. Unknown keys are ignored, ``meta`` and ``links``
are carried through untouched.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from metamodel.domain.errors import MalformedDocumentError, MalformedLinkageError
from metamodel.domain.identity import ResourceIdentity

NonBlankStr = Annotated[str, Field(pattern=r"\S")]


class JsonApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class ResourceIdentifier(JsonApiBaseModel):
    type: NonBlankStr
    id: NonBlankStr
    meta: dict[str, Any] | None = None

    def identity(self) -> ResourceIdentity:
        return ResourceIdentity(type=self.type, id=self.id)


class Relationship(JsonApiBaseModel):
    data: ResourceIdentifier | list[ResourceIdentifier] | None = None
    links: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None


class ResourceObject(ResourceIdentifier):
    attributes: dict[str, Any] | None = None
    relationships: dict[str, Relationship] | None = None
    links: dict[str, Any] | None = None


class Document(JsonApiBaseModel):
    data: ResourceObject
    included: list[ResourceObject] = Field(default_factory=list["ResourceObject"])
    meta: dict[str, Any] | None = None
    links: dict[str, Any] | None = None
    jsonapi: dict[str, Any] | None = None


def parse_document(raw: object) -> Document:
    """Validate a decoded document, translating failures into domain errors."""

    if isinstance(raw, Document):
        return raw
    try:
        return Document.model_validate(raw)
    except ValidationError as exc:
        raise _document_error(exc) from exc


def _document_error(exc: ValidationError) -> MalformedDocumentError:
    first = exc.errors()[0]
    loc = tuple(first["loc"])
    path = ".".join(str(part) for part in loc) or "<document>"
    if "relationships" in loc:
        position = loc.index("relationships")
        name = loc[position + 1] if len(loc) > position + 1 else None
        return MalformedLinkageError(
            f"Invalid linkage at {path}: {first['msg']}",
            relationship=None if name is None else str(name),
        )
    return MalformedDocumentError(f"Invalid document at {path}: {first['msg']}")
