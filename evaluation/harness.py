"""Lightweight evaluation harness for deterministic search scenarios."""

from __future__ import annotations

from typing import Any, Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from models.shirt import from_raw_metadata
from search_app.app import ShirtSearchApp
from search_app.config import SearchConfig


def _evaluate_expectations(expectations: Dict[str, object], payload: Dict[str, Any]) -> Dict[str, object]:
    checks: Dict[str, bool] = {}
    shirts = payload.get("shirts", [])
    checks["matched_count"] = len(shirts) == int(expectations.get("matched_count", 0))
    if "matched_names" in expectations:
        checks["matched_names"] = {shirt["name"] for shirt in shirts} == set(expectations["matched_names"])
    for facet in ("size_counts", "color_counts"):
        expected = expectations.get(facet)
        if expected:
            actual = payload.get(facet, {})
            checks[facet] = all(actual.get(name) == count for name, count in expected.items())
    if expectations.get("all_counts_zero"):
        counts = list(payload.get("size_counts", {}).values()) + list(payload.get("color_counts", {}).values())
        checks["all_counts_zero"] = bool(counts) and all(count == 0 for count in counts)
    return {"passed": payload.get("status") == "ok" and all(checks.values()), "checks": checks}


def run_scenario(scenario: EvaluationScenario, config: SearchConfig | None = None) -> Dict[str, object]:
    shirts = [from_raw_metadata(item) for item in scenario.catalog]
    with ShirtSearchApp(shirts, config=config or SearchConfig()) as app:
        payload = app.search_by_names(sizes=scenario.sizes, colors=scenario.colors)
    evaluation = _evaluate_expectations(scenario.expectations, payload)
    return {
        "scenario": scenario.name,
        "passed": evaluation["passed"],
        "checks": evaluation["checks"],
        "matched_count": len(payload.get("shirts", [])),
        "response": payload,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
