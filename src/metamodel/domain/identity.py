"""Resource identity: the deduplication key shared across one graph."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResourceIdentity:
    """``{type, id}`` pair identifying one resource."""

    type: str
    id: str

    @property
    def key(self) -> str:
        return f"{self.type}_{self.id}"

    def as_linkage(self) -> dict[str, str]:
        return {"type": self.type, "id": self.id}

    def __str__(self) -> str:
        return self.key
