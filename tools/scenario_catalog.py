"""Scenario repository resolving scenario ids to names."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from models.scenario import Scenario

logger = logging.getLogger(__name__)

DEFAULT_SCENARIOS = (
    Scenario(name="Office Work", scenario_id="office", frequency="weekly"),
    Scenario(name="Social Outings", scenario_id="social", frequency="weekly"),
    Scenario(name="Staying at Home", scenario_id="home", frequency="daily"),
)


class ScenarioCatalog:
    """Read interface for the scenarios a user dresses for."""

    def list_scenarios(self) -> List[Scenario]:
        raise NotImplementedError

    def get_scenarios(self, scenario_ids: Iterable[str]) -> List[Scenario]:
        raise NotImplementedError


class InMemoryScenarioCatalog(ScenarioCatalog):
    def __init__(self, scenarios: Iterable[Scenario] = DEFAULT_SCENARIOS) -> None:
        self._by_id: Dict[str, Scenario] = {}
        for scenario in scenarios:
            key = scenario.scenario_id or scenario.name
            self._by_id[key] = scenario

    def list_scenarios(self) -> List[Scenario]:
        return list(self._by_id.values())

    def get_scenarios(self, scenario_ids: Iterable[str]) -> List[Scenario]:
        """Resolve ids in request order; unknown ids are skipped with a warning."""

        resolved: List[Scenario] = []
        for scenario_id in scenario_ids:
            scenario = self._by_id.get(scenario_id)
            if scenario is None:
                logger.warning("Unknown scenario id %s - skipping", scenario_id)
                continue
            if scenario not in resolved:
                resolved.append(scenario)
        return resolved


__all__ = ["ScenarioCatalog", "InMemoryScenarioCatalog", "DEFAULT_SCENARIOS"]
