"""Per-value facet counting over a search match set.

Only values the caller selected are counted; every other value reports 0.
Each registry value is an independent task whose future sits at the value's
registry position, so collected counts always follow registry order.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import AbstractSet, List, Sequence, Tuple

from logic.attribute_index import AttributeSelector
from models.shirt import Shirt
from models.taxonomy import AttributeRegistry, AttributeValue


def count_value(
    matched: Sequence[Shirt],
    value: AttributeValue,
    selected: AbstractSet[AttributeValue],
    selector: AttributeSelector,
) -> int:
    """Count matched shirts holding ``value``, or 0 when it was not selected."""

    if value not in selected:
        return 0
    return sum(1 for shirt in matched if selector(shirt) == value)


def submit_facet_counts(
    executor: Executor,
    matched: Sequence[Shirt],
    registry: AttributeRegistry,
    selected: AbstractSet[AttributeValue],
    selector: AttributeSelector,
) -> List[Future]:
    return [executor.submit(count_value, matched, value, selected, selector) for value in registry]


def collect_facet_counts(
    registry: AttributeRegistry, futures: Sequence[Future]
) -> List[Tuple[AttributeValue, int]]:
    """Wait for every slot; the first failing slot's exception propagates."""

    if len(futures) != len(registry):
        raise ValueError(f"Expected {len(registry)} {registry.attribute} slots, got {len(futures)}")
    return [(value, future.result()) for value, future in zip(registry, futures)]


__all__ = ["count_value", "submit_facet_counts", "collect_facet_counts"]
