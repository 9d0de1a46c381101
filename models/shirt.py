"""Shirt catalog item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict
from uuid import UUID, uuid4

from models.taxonomy import COLORS, SIZES, AttributeRegistry, AttributeValue


@dataclass(frozen=True)
class Shirt:
    """A catalog shirt with exactly one size and one color."""

    id: UUID
    name: str
    size: AttributeValue
    color: AttributeValue


def _coerce_id(raw: Any) -> UUID:
    if raw is None or raw == "":
        return uuid4()
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError as exc:
        raise ValueError(f"Invalid shirt id '{raw}'") from exc


def from_raw_metadata(
    metadata: Dict[str, Any],
    sizes: AttributeRegistry = SIZES,
    colors: AttributeRegistry = COLORS,
) -> Shirt:
    """Factory to build a :class:`Shirt` from loose catalog metadata.

    ``size`` and ``color`` may be given as registry values, keys or display
    names. A missing ``id`` gets a fresh UUID and a missing ``name`` defaults to
    ``"<Color> - <Size>"``.
    """

    missing = [key for key in ("size", "color") if not metadata.get(key)]
    if missing:
        raise ValueError(f"Missing required fields for Shirt: {missing}")

    size = sizes.resolve(metadata["size"])
    color = colors.resolve(metadata["color"])
    name = metadata.get("name") or f"{color.name} - {size.name}"
    return Shirt(id=_coerce_id(metadata.get("id")), name=str(name), size=size, color=color)


__all__ = ["Shirt", "from_raw_metadata"]
