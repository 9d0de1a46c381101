"""Observability helpers for instrumenting search operations."""

from __future__ import annotations

import inspect
import logging
import time
from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from search_app.logging_config import (
    get_logger,
    log_event,
    operation_context,
    redact_for_log,
)

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _preview_kwargs(kwargs: dict, max_keys: int = 6) -> dict:
    preview: dict = {}
    for idx, (key, value) in enumerate(kwargs.items()):
        if idx >= max_keys:
            preview["truncated"] = True
            break
        preview[key] = value
    return redact_for_log(preview)


def _preview_args(args: tuple, bound: bool = False) -> list:
    values = list(args)
    # Methods log the owner type instead of the instance.
    if bound and values:
        values[0] = type(values[0]).__name__
    return redact_for_log(values)


def instrument_operation(
    operation: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap a callable to emit structured start/complete/failure logs.

    Each call runs in its own correlation scope; calls nested inside another
    instrumented operation share the outer id. When ``input_model`` is given,
    keyword arguments are validated and replaced by the model dump before the
    call.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        bound = next(iter(inspect.signature(func).parameters), None) == "self"

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with operation_context(operation) as correlation_id:
                start = time.perf_counter()

                if input_model:
                    try:
                        validated = input_model.model_validate(kwargs)
                        kwargs = validated.model_dump()
                    except ValidationError as exc:
                        log_event(
                            LOGGER,
                            logging.WARNING,
                            "operation_validation_failed",
                            operation=operation,
                            correlation_id=correlation_id,
                            errors=str(exc),
                        )
                        if on_validation_error:
                            return on_validation_error(exc)
                        raise

                log_event(
                    LOGGER,
                    logging.INFO,
                    "operation_started",
                    operation=operation,
                    correlation_id=correlation_id,
                    call_args=_preview_args(args, bound),
                    kwargs=_preview_kwargs(kwargs),
                )
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    duration_ms = round((time.perf_counter() - start) * 1000, 2)
                    log_event(
                        LOGGER,
                        logging.ERROR,
                        "operation_failed",
                        operation=operation,
                        correlation_id=correlation_id,
                        duration_ms=duration_ms,
                        exc_info=True,
                    )
                    raise
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                log_event(
                    LOGGER,
                    logging.INFO,
                    "operation_completed",
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=duration_ms,
                )
                return result

        return wrapper

    return decorator


__all__ = ["instrument_operation"]
