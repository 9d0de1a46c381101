"""Search app bootstrap."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from logic.search_engine import SearchEngine
from logic.validation import (
    SearchRequest,
    UnknownFilterValuesError,
    resolve_options,
    results_to_payload,
    unknown_values_failure,
    validation_failure,
)
from models.search import SearchOptions, SearchResults
from models.shirt import Shirt
from models.taxonomy import COLORS, SIZES, AttributeRegistry
from search_app.config import SearchConfig
from search_app.logging_config import configure_logging, get_logger, log_event
from tools.observability import instrument_operation

LOGGER = get_logger(__name__)


def _invalid_request(exc):
    return validation_failure("Invalid search request payload", exc)


class ShirtSearchApp:
    """Wires together config, logging and a search engine over one catalog."""

    def __init__(
        self,
        shirts: Iterable[Shirt],
        config: SearchConfig | None = None,
        sizes: AttributeRegistry = SIZES,
        colors: AttributeRegistry = COLORS,
    ) -> None:
        self.config = config or SearchConfig.from_env()
        configure_logging(self.config.log_level)
        self.engine = SearchEngine.from_config(shirts, self.config, sizes=sizes, colors=colors)

    def __enter__(self) -> "ShirtSearchApp":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.engine.close()

    def search(self, options: SearchOptions | None = None) -> SearchResults:
        return self.engine.search(options)

    @instrument_operation("search_by_names", input_model=SearchRequest, on_validation_error=_invalid_request)
    def search_by_names(
        self,
        *,
        sizes: List[str] | None = None,
        colors: List[str] | None = None,
    ) -> Dict[str, Any]:
        """Search with size/color names or keys and return a plain dict payload.

        Malformed requests and unknown values come back as a ``needs_review``
        payload instead of raising. Engine failures still propagate.
        """

        request = SearchRequest(sizes=sizes, colors=colors)
        try:
            options = resolve_options(request, sizes=self.engine.sizes, colors=self.engine.colors)
        except UnknownFilterValuesError as exc:
            log_event(
                LOGGER,
                logging.WARNING,
                "app_request_unknown_values",
                method="search_by_names",
                unknown=exc.unknown,
            )
            return unknown_values_failure(exc.unknown)

        payload = results_to_payload(self.engine.search(options))
        log_event(
            LOGGER,
            logging.INFO,
            "app_call_completed",
            method="search_by_names",
            matched_count=len(payload["shirts"]),
        )
        return payload


__all__ = ["ShirtSearchApp"]
