"""Search option and result schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List

from models.shirt import Shirt
from models.taxonomy import AttributeValue


@dataclass(frozen=True)
class SearchOptions:
    """Selected sizes and colors for one query. Any iterable is accepted."""

    sizes: FrozenSet[AttributeValue] = frozenset()
    colors: FrozenSet[AttributeValue] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sizes", frozenset(self.sizes or ()))
        object.__setattr__(self, "colors", frozenset(self.colors or ()))

    @property
    def is_empty(self) -> bool:
        return not self.sizes and not self.colors


@dataclass(frozen=True)
class SizeCount:
    size: AttributeValue
    count: int


@dataclass(frozen=True)
class ColorCount:
    color: AttributeValue
    count: int


@dataclass
class SearchResults:
    """Match set plus one facet count per registry size and color."""

    shirts: List[Shirt] = field(default_factory=list)
    size_counts: List[SizeCount] = field(default_factory=list)
    color_counts: List[ColorCount] = field(default_factory=list)

    def size_count(self, size: AttributeValue) -> int:
        return next((entry.count for entry in self.size_counts if entry.size == size), 0)

    def color_count(self, color: AttributeValue) -> int:
        return next((entry.count for entry in self.color_counts if entry.color == color), 0)


__all__ = ["SearchOptions", "SizeCount", "ColorCount", "SearchResults"]
