"""Pydantic schemas and helpers for validating search requests and responses."""

from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.search import SearchOptions, SearchResults
from models.taxonomy import COLORS, SIZES, AttributeRegistry


class SearchRequest(BaseModel):
    """Name or key based search request, as a UI would send it."""

    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)

    @field_validator("sizes", "colors", mode="before")
    @classmethod
    def _default_missing(cls, values: Any) -> Any:
        return [] if values is None else values

    @field_validator("sizes", "colors")
    @classmethod
    def _strip_values(cls, values: List[str]) -> List[str]:
        cleaned = [value.strip() for value in values]
        if any(not value for value in cleaned):
            raise ValueError("filter values must be non-empty strings")
        return cleaned


class ShirtPayload(BaseModel):
    id: str
    name: str
    size: str
    color: str


class SearchResponse(BaseModel):
    """Shape returned to callers of the app-level search entry point."""

    status: Literal["ok"] = "ok"
    shirts: List[ShirtPayload]
    size_counts: Dict[str, int]
    color_counts: Dict[str, int]


class ValidationResult(BaseModel):
    """Wrapper returned when a request cannot be served."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = [{"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]} for error in exc.errors()]
    return ValidationResult(message=message, details=details).model_dump()


def unknown_values_failure(unknown: Dict[str, List[str]]) -> Dict[str, Any]:
    details = [
        {"loc": [field], "msg": f"Unknown value '{value}'", "type": "unknown_value"}
        for field, values in unknown.items()
        for value in values
    ]
    return ValidationResult(message="Unknown filter values", details=details).model_dump()


class UnknownFilterValuesError(ValueError):
    """Raised when a request names sizes or colors outside the registries."""

    def __init__(self, unknown: Dict[str, List[str]]) -> None:
        self.unknown = unknown
        super().__init__(f"Unknown filter values: {unknown}")


def resolve_options(
    request: SearchRequest,
    sizes: AttributeRegistry = SIZES,
    colors: AttributeRegistry = COLORS,
) -> SearchOptions:
    """Resolve request names/keys against the registries.

    Raises :class:`ValueError` naming every unknown value.
    """

    unknown: Dict[str, List[str]] = {}
    resolved: Dict[str, list] = {"sizes": [], "colors": []}
    for field, registry in (("sizes", sizes), ("colors", colors)):
        for raw in getattr(request, field):
            try:
                resolved[field].append(registry.resolve(raw))
            except ValueError:
                unknown.setdefault(field, []).append(raw)
    if unknown:
        raise UnknownFilterValuesError(unknown)
    return SearchOptions(sizes=resolved["sizes"], colors=resolved["colors"])


def results_to_payload(results: SearchResults) -> Dict[str, Any]:
    response = SearchResponse(
        shirts=[
            ShirtPayload(id=str(shirt.id), name=shirt.name, size=shirt.size.name, color=shirt.color.name)
            for shirt in results.shirts
        ],
        size_counts={entry.size.name: entry.count for entry in results.size_counts},
        color_counts={entry.color.name: entry.count for entry in results.color_counts},
    )
    return response.model_dump()


__all__ = [
    "SearchRequest",
    "SearchResponse",
    "ShirtPayload",
    "ValidationResult",
    "UnknownFilterValuesError",
    "validation_failure",
    "unknown_values_failure",
    "resolve_options",
    "results_to_payload",
]
