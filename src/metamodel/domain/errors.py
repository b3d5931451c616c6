"""Error hierarchy for graph construction and projection."""

from __future__ import annotations


class MetaModelError(Exception):
    """Base class for every error raised by metamodel."""


class MalformedDocumentError(MetaModelError, ValueError):
    """Raised when a document lacks the structure needed to build a graph."""


class MalformedLinkageError(MalformedDocumentError):
    """Raised when a relationship linkage entry lacks ``type`` or ``id``."""

    def __init__(self, message: str, *, relationship: str | None = None) -> None:
        self.relationship = relationship
        if relationship is not None:
            message = f"{message} (relationship {relationship!r})"
        super().__init__(message)


class ResourceLimitExceededError(MetaModelError):
    """Raised when a build pass indexes more resources than allowed."""

    def __init__(self, *, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Document references more than {limit} distinct resources")
