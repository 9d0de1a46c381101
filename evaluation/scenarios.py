"""Evaluation scenarios exercising union matching and facet counts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class EvaluationScenario:
    name: str
    description: str
    sizes: List[str]
    colors: List[str]
    expectations: Dict[str, object]
    catalog: List[Dict[str, object]] = field(default_factory=list)


def _catalog_fixtures() -> List[Dict[str, object]]:
    return [
        {"id": "dc1e8e26-2d52-471e-a7ca-2e2a33a5e074", "name": "Red - Small", "size": "Small", "color": "Red"},
        {"id": "5aa962ed-2d54-41d2-b0f7-316ca4ab8843", "name": "Red - Medium", "size": "Medium", "color": "Red"},
        {"id": "fe735fd2-096b-4310-9337-84f1ce835c0f", "name": "Black - Medium", "size": "Medium", "color": "Black"},
        {"id": "3d288aad-89ee-45fb-92d4-0c504beed567", "name": "Blue - Medium", "size": "Medium", "color": "Blue"},
        {"id": "c68c5789-8926-42f2-ad97-abecbccd4da9", "name": "Blue - Large", "size": "Large", "color": "Blue"},
    ]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="red_only",
        description="A single color returns its bucket and only that color is counted.",
        sizes=[],
        colors=["Red"],
        expectations={
            "matched_count": 2,
            "color_counts": {"Red": 2, "Blue": 0, "Yellow": 0, "White": 0, "Black": 0},
            "size_counts": {"Small": 0, "Medium": 0, "Large": 0},
        },
        catalog=_catalog_fixtures(),
    ),
    EvaluationScenario(
        name="medium_only",
        description="A single size returns its bucket and only that size is counted.",
        sizes=["Medium"],
        colors=[],
        expectations={
            "matched_count": 3,
            "size_counts": {"Small": 0, "Medium": 3, "Large": 0},
        },
        catalog=_catalog_fixtures(),
    ),
    EvaluationScenario(
        name="medium_or_red",
        description="Size and color together union across both axes.",
        sizes=["Medium"],
        colors=["Red"],
        expectations={
            "matched_count": 4,
            "matched_names": ["Red - Small", "Red - Medium", "Black - Medium", "Blue - Medium"],
            "size_counts": {"Medium": 3},
            "color_counts": {"Red": 2},
        },
        catalog=_catalog_fixtures(),
    ),
    EvaluationScenario(
        name="absent_colors",
        description="Selected colors with no stock report zero without failing.",
        sizes=[],
        colors=["Yellow", "White"],
        expectations={
            "matched_count": 0,
            "color_counts": {"Yellow": 0, "White": 0},
        },
        catalog=_catalog_fixtures(),
    ),
    EvaluationScenario(
        name="no_filters",
        description="An empty request matches nothing and every count is zero.",
        sizes=[],
        colors=[],
        expectations={"matched_count": 0, "all_counts_zero": True},
        catalog=_catalog_fixtures(),
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
