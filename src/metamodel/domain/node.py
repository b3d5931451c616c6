"""Materialized resources and their relationship slots.

A node's shape (its attribute keys and relationship keys) is fixed when it is
populated from the source resource object. Values may be rewritten afterwards,
keys may not be added or removed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .identity import ResourceIdentity


class SlotKind(StrEnum):
    EMPTY = "empty"
    SINGLE = "single"
    MANY = "many"


@dataclass(frozen=True, slots=True)
class RelationshipSlot:
    """Resolved state of one relationship."""

    kind: SlotKind
    targets: tuple[GraphNode, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is SlotKind.EMPTY and self.targets:
            raise ValueError("Empty slot cannot hold targets")
        if self.kind is SlotKind.SINGLE and len(self.targets) != 1:
            raise ValueError("Single slot must hold exactly one target")

    @classmethod
    def empty(cls) -> RelationshipSlot:
        return cls(SlotKind.EMPTY)

    @classmethod
    def single(cls, node: GraphNode) -> RelationshipSlot:
        return cls(SlotKind.SINGLE, (node,))

    @classmethod
    def many(cls, nodes: Iterable[GraphNode]) -> RelationshipSlot:
        return cls(SlotKind.MANY, tuple(nodes))

    @property
    def is_empty(self) -> bool:
        return self.kind is SlotKind.EMPTY

    def value(self) -> GraphNode | tuple[GraphNode, ...] | None:
        """Return ``None``, the single target, or the ordered targets."""

        if self.kind is SlotKind.EMPTY:
            return None
        if self.kind is SlotKind.SINGLE:
            return self.targets[0]
        return self.targets


@dataclass(eq=False, slots=True)
class GraphNode:
    """One resource of the graph.

    Nodes compare by instance: two references to the same ``{type, id}`` within
    one build are the same object.
    """

    identity: ResourceIdentity
    _attributes: dict[str, Any] = field(default_factory=dict[str, Any], repr=False)
    _relationships: dict[str, RelationshipSlot] = field(
        default_factory=dict[str, RelationshipSlot], repr=False
    )
    meta: Mapping[str, Any] | None = field(default=None, repr=False)
    links: Mapping[str, Any] | None = field(default=None, repr=False)
    _populated: bool = field(default=False, repr=False)

    @property
    def type(self) -> str:
        return self.identity.type

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def key(self) -> str:
        return self.identity.key

    @property
    def populated(self) -> bool:
        return self._populated

    @property
    def attributes(self) -> Mapping[str, Any]:
        return MappingProxyType(self._attributes)

    @property
    def attribute_keys(self) -> frozenset[str]:
        return frozenset(self._attributes)

    @property
    def relationships(self) -> Mapping[str, RelationshipSlot]:
        return MappingProxyType(self._relationships)

    @property
    def relationship_keys(self) -> tuple[str, ...]:
        return tuple(self._relationships)

    def populate(
        self,
        *,
        attributes: Mapping[str, Any] | None = None,
        relationships: Mapping[str, RelationshipSlot] | None = None,
        meta: Mapping[str, Any] | None = None,
        links: Mapping[str, Any] | None = None,
    ) -> None:
        """Fix the node's shape. May only be called once."""

        if self._populated:
            raise RuntimeError(f"Node {self.key} is already populated")
        self._attributes = dict(attributes or {})
        self._relationships = dict(relationships or {})
        self.meta = meta
        self.links = links
        self._populated = True

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set_attribute(self, key: str, value: Any) -> None:
        if key not in self._attributes:
            raise KeyError(f"{self.key} has no attribute {key!r}")
        self._attributes[key] = value

    def slot(self, key: str) -> RelationshipSlot | None:
        return self._relationships.get(key)

    def related(self, key: str) -> GraphNode | tuple[GraphNode, ...] | None:
        slot = self._relationships.get(key)
        return None if slot is None else slot.value()
