"""Immutable equality index over one categorical shirt attribute."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Iterable, KeysView, List, Mapping, Tuple
from uuid import UUID

from models.shirt import Shirt
from models.taxonomy import AttributeValue

AttributeSelector = Callable[[Shirt], AttributeValue]


class AttributeIndex:
    """Maps each attribute value key to the shirts holding that value.

    Buckets keep the source collection order. Values without shirts have no
    bucket; looking them up yields an empty tuple.
    """

    def __init__(self, attribute: str, buckets: Mapping[UUID, Tuple[Shirt, ...]]) -> None:
        self.attribute = attribute
        self._buckets: Mapping[UUID, Tuple[Shirt, ...]] = MappingProxyType(dict(buckets))
        self.item_count = sum(len(bucket) for bucket in self._buckets.values())

    @classmethod
    def build(cls, items: Iterable[Shirt], selector: AttributeSelector, attribute: str = "") -> "AttributeIndex":
        grouped: Dict[UUID, List[Shirt]] = {}
        for item in items:
            grouped.setdefault(selector(item).key, []).append(item)
        return cls(attribute, {key: tuple(bucket) for key, bucket in grouped.items()})

    def lookup(self, value: AttributeValue) -> Tuple[Shirt, ...]:
        return self._buckets.get(value.key, ())

    def keys(self) -> KeysView[UUID]:
        return self._buckets.keys()

    def __contains__(self, value: object) -> bool:
        return isinstance(value, AttributeValue) and value.key in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)

    def __repr__(self) -> str:
        return f"AttributeIndex({self.attribute!r}, buckets={len(self)}, items={self.item_count})"


__all__ = ["AttributeIndex", "AttributeSelector"]
