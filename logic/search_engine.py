"""Faceted shirt search over immutable size and color indexes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from logic.attribute_index import AttributeIndex
from logic.facet_counts import collect_facet_counts, submit_facet_counts
from models.search import ColorCount, SearchOptions, SearchResults, SizeCount
from models.shirt import Shirt
from models.taxonomy import COLORS, SIZES, AttributeRegistry, AttributeValue
from search_app.config import DEFAULT_MAX_WORKERS, SearchConfig
from search_app.logging_config import get_logger, log_event
from tools.observability import instrument_operation

LOGGER = get_logger(__name__)


class CatalogConstructionError(ValueError):
    """Raised when the shirt collection cannot back a usable engine."""


class SearchExecutionError(RuntimeError):
    """Raised when any part of a search fails; never carries partial results.

    ``outcomes`` maps each path that ran (``size``, ``color`` or a facet name)
    to its exception, or ``None`` when that path succeeded. ``causes`` keeps
    only the failures.
    """

    def __init__(self, outcomes: Dict[str, Optional[BaseException]]) -> None:
        self.outcomes = dict(outcomes)
        self.causes = {path: exc for path, exc in self.outcomes.items() if exc is not None}
        detail = "; ".join(
            f"{path}: {'ok' if exc is None else f'{type(exc).__name__}: {exc}'}"
            for path, exc in self.outcomes.items()
        )
        super().__init__(f"Search failed ({detail})")


def _select_size(shirt: Shirt) -> AttributeValue:
    return shirt.size


def _select_color(shirt: Shirt) -> AttributeValue:
    return shirt.color


def _union(*groups: Sequence[Shirt]) -> Tuple[Shirt, ...]:
    merged: Dict[UUID, Shirt] = {}
    for group in groups:
        for shirt in group:
            merged.setdefault(shirt.id, shirt)
    return tuple(merged.values())


class SearchEngine:
    """Indexes a fixed shirt catalog by size and color and answers facet queries.

    Both indexes are built in the constructor and never change afterwards, so a
    single engine can serve concurrent ``search`` calls without locking. Lookup
    and counting tasks run on one worker pool owned by the engine; call
    ``close`` (or use the engine as a context manager) to release it.
    """

    def __init__(
        self,
        shirts: Iterable[Shirt],
        sizes: AttributeRegistry = SIZES,
        colors: AttributeRegistry = COLORS,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.sizes = sizes
        self.colors = colors
        self.max_workers = max_workers
        self._shirts = self._validate_catalog(shirts, sizes, colors)
        self._size_index = AttributeIndex.build(self._shirts, _select_size, attribute=sizes.attribute)
        self._color_index = AttributeIndex.build(self._shirts, _select_color, attribute=colors.attribute)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="shirt-search")
        self._closed = False
        log_event(
            LOGGER,
            logging.INFO,
            "search_engine_built",
            shirt_count=len(self._shirts),
            size_buckets=len(self._size_index),
            color_buckets=len(self._color_index),
        )

    @classmethod
    def from_config(
        cls,
        shirts: Iterable[Shirt],
        config: SearchConfig,
        sizes: AttributeRegistry = SIZES,
        colors: AttributeRegistry = COLORS,
    ) -> "SearchEngine":
        return cls(shirts, sizes=sizes, colors=colors, max_workers=config.max_workers)

    def __repr__(self) -> str:
        return f"SearchEngine(shirts={len(self._shirts)}, max_workers={self.max_workers})"

    def __enter__(self) -> "SearchEngine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker pool, waiting for in-flight tasks. Idempotent."""

        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=True)
        log_event(LOGGER, logging.DEBUG, "search_engine_closed", shirt_count=len(self._shirts))

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def shirts(self) -> Tuple[Shirt, ...]:
        return self._shirts

    @property
    def size_index(self) -> AttributeIndex:
        return self._size_index

    @property
    def color_index(self) -> AttributeIndex:
        return self._color_index

    @staticmethod
    def _validate_catalog(
        shirts: Iterable[Shirt], sizes: AttributeRegistry, colors: AttributeRegistry
    ) -> Tuple[Shirt, ...]:
        if shirts is None:
            raise CatalogConstructionError("shirt collection must not be None")
        if isinstance(shirts, (str, bytes)) or not isinstance(shirts, Iterable):
            raise CatalogConstructionError(
                f"shirt collection must be an iterable of Shirt, got {type(shirts).__name__}"
            )

        catalog = tuple(shirts)
        seen: set[UUID] = set()
        for position, shirt in enumerate(catalog):
            if not isinstance(shirt, Shirt):
                raise CatalogConstructionError(
                    f"item at position {position} is not a Shirt: {type(shirt).__name__}"
                )
            if shirt.size not in sizes:
                raise CatalogConstructionError(
                    f"shirt {shirt.id} has size '{shirt.size}' outside {sizes.names()}"
                )
            if shirt.color not in colors:
                raise CatalogConstructionError(
                    f"shirt {shirt.id} has color '{shirt.color}' outside {colors.names()}"
                )
            if shirt.id in seen:
                raise CatalogConstructionError(f"duplicate shirt id {shirt.id}")
            seen.add(shirt.id)
        return catalog

    @staticmethod
    def _lookup_all(index: AttributeIndex, selected: AbstractSet[AttributeValue]) -> List[Shirt]:
        matches: List[Shirt] = []
        for value in selected:
            matches.extend(index.lookup(value))
        return matches

    def _gather_lookups(self, by_size: Future, by_color: Future) -> Tuple[List[Shirt], List[Shirt]]:
        """Wait for both axis lookups and fail once, naming every failed path."""

        results: Dict[str, List[Shirt]] = {}
        outcomes: Dict[str, Optional[BaseException]] = {}
        for path, future in (("size", by_size), ("color", by_color)):
            try:
                results[path] = future.result()
                outcomes[path] = None
            except Exception as exc:
                outcomes[path] = exc

        if any(exc is not None for exc in outcomes.values()):
            error = SearchExecutionError(outcomes)
            log_event(LOGGER, logging.ERROR, "search_lookup_failed", detail=str(error))
            raise error from next(exc for exc in outcomes.values() if exc is not None)
        return results["size"], results["color"]

    @staticmethod
    def _collect(
        facet: str, registry: AttributeRegistry, futures: List[Future]
    ) -> List[Tuple[AttributeValue, int]]:
        try:
            return collect_facet_counts(registry, futures)
        except Exception as exc:
            log_event(LOGGER, logging.ERROR, "search_facet_failed", facet=facet, detail=str(exc))
            raise SearchExecutionError({facet: exc}) from exc

    @instrument_operation("search")
    def search(self, options: SearchOptions | None = None) -> SearchResults:
        """Return shirts matching any selected size or color, plus facet counts.

        Matching is a union across both axes. Facet counts cover every registry
        value; values that were not selected report 0.
        """

        if self._closed:
            raise RuntimeError("search engine is closed")
        if options is None:
            options = SearchOptions()

        executor = self._executor
        by_size, by_color = self._gather_lookups(
            executor.submit(self._lookup_all, self._size_index, options.sizes),
            executor.submit(self._lookup_all, self._color_index, options.colors),
        )
        matched = _union(by_size, by_color)

        size_futures = submit_facet_counts(executor, matched, self.sizes, options.sizes, _select_size)
        color_futures = submit_facet_counts(executor, matched, self.colors, options.colors, _select_color)
        size_counts = self._collect("size_counts", self.sizes, size_futures)
        color_counts = self._collect("color_counts", self.colors, color_futures)

        log_event(
            LOGGER,
            logging.DEBUG,
            "search_matched",
            selected_sizes=options.sizes,
            selected_colors=options.colors,
            matched_count=len(matched),
        )
        return SearchResults(
            shirts=list(matched),
            size_counts=[SizeCount(size=value, count=count) for value, count in size_counts],
            color_counts=[ColorCount(color=value, count=count) for value, count in color_counts],
        )


__all__ = ["SearchEngine", "CatalogConstructionError", "SearchExecutionError"]
