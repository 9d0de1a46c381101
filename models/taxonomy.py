"""Canonical size and color registries for catalog shirts.

Each filterable attribute has a closed, ordered set of values known before any
query runs. Values are identified by a stable key; the display name is only
used for diagnostics and name based lookups. Registries are passed explicitly
to the search engine so tests and callers can supply their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple
from uuid import UUID


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a registry lookup key."""

    return value.strip().lower().replace(" ", "_")


@dataclass(frozen=True)
class AttributeValue:
    """A single size or color, compared and hashed by ``key`` only."""

    key: UUID
    name: str = field(compare=False)

    def __str__(self) -> str:
        return self.name


class AttributeRegistry:
    """Immutable, ordered set of every valid value for one attribute."""

    def __init__(self, attribute: str, values: Iterable[AttributeValue]) -> None:
        self.attribute = attribute
        self._values: Tuple[AttributeValue, ...] = tuple(values)
        self._by_key: Dict[UUID, AttributeValue] = {}
        self._by_name: Dict[str, AttributeValue] = {}
        for value in self._values:
            name_key = _normalize_key(value.name)
            if value.key in self._by_key:
                raise ValueError(f"Duplicate {attribute} key {value.key}")
            if name_key in self._by_name:
                raise ValueError(f"Duplicate {attribute} name '{value.name}'")
            self._by_key[value.key] = value
            self._by_name[name_key] = value

    def __iter__(self) -> Iterator[AttributeValue]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, AttributeValue) and value.key in self._by_key

    def __repr__(self) -> str:
        return f"AttributeRegistry({self.attribute!r}, {self.names()!r})"

    @property
    def values(self) -> Tuple[AttributeValue, ...]:
        return self._values

    def names(self) -> list[str]:
        return [value.name for value in self._values]

    def get(self, key: UUID) -> Optional[AttributeValue]:
        return self._by_key.get(key)

    def by_name(self, name: str) -> Optional[AttributeValue]:
        return self._by_name.get(_normalize_key(name))

    def resolve(self, raw: AttributeValue | UUID | str) -> AttributeValue:
        """Resolve a value, key, key string or display name to a registry member.

        Raises a :class:`ValueError` if nothing in the registry matches.
        """

        if isinstance(raw, AttributeValue):
            found = self._by_key.get(raw.key)
        elif isinstance(raw, UUID):
            found = self._by_key.get(raw)
        else:
            text = str(raw)
            found = self.by_name(text)
            if found is None:
                try:
                    found = self._by_key.get(UUID(text.strip()))
                except ValueError:
                    found = None
        if found is None:
            raise ValueError(f"Unsupported {self.attribute} '{raw}'. Allowed: {self.names()}")
        return found


SMALL = AttributeValue(UUID("d8b1f0a4-6a5e-4f3b-9a1c-2f1c7e0b5a01"), "Small")
MEDIUM = AttributeValue(UUID("3c7e9b52-1d4a-4e8f-b6a2-7c5d0e9f1a02"), "Medium")
LARGE = AttributeValue(UUID("9f2a6c3e-8b7d-4a1e-a5f4-0d3b2c1e6f03"), "Large")

RED = AttributeValue(UUID("1e5d7a2b-4c3f-4b9a-8e6d-5a0f2b7c9d11"), "Red")
BLUE = AttributeValue(UUID("6b4e2f9a-7d1c-4a8b-9c3e-0f5a1d2b8e12"), "Blue")
YELLOW = AttributeValue(UUID("a3c8d1f6-2e9b-4f7a-b0d4-8e1c6a5f3b13"), "Yellow")
WHITE = AttributeValue(UUID("f0b6e4d2-9a3c-4e1f-8d7b-2c5a9e0f4d14"), "White")
BLACK = AttributeValue(UUID("4d9a1c7e-3b6f-4d2a-a8e5-1f0b3c9d7e15"), "Black")

SIZES = AttributeRegistry("size", [SMALL, MEDIUM, LARGE])
COLORS = AttributeRegistry("color", [RED, BLUE, YELLOW, WHITE, BLACK])


__all__ = [
    "AttributeValue",
    "AttributeRegistry",
    "SIZES",
    "COLORS",
    "SMALL",
    "MEDIUM",
    "LARGE",
    "RED",
    "BLUE",
    "YELLOW",
    "WHITE",
    "BLACK",
]
