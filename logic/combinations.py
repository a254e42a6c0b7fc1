"""Season x scenario combination enumeration with completeness annotations."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Union

from logic.essentials import check_essential_categories
from models.scenario import Scenario, ScenarioCombination
from models.taxonomy import season_priority
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

ScenarioLike = Union[Scenario, str]


def resolve_scenarios(scenarios: Iterable[ScenarioLike]) -> List[Scenario]:
    """Coerce bare scenario names into :class:`Scenario` records, dropping blanks."""

    resolved: List[Scenario] = []
    for scenario in scenarios or []:
        if isinstance(scenario, Scenario):
            if scenario.name and scenario.name.strip():
                resolved.append(scenario)
        elif isinstance(scenario, str) and scenario.strip():
            resolved.append(Scenario(name=scenario.strip()))
        else:
            logger.warning("Skipping unusable scenario entry %r", scenario)
    return resolved


def flatten_items(items_by_category: Dict[str, List[WardrobeItem]] | None) -> List[WardrobeItem]:
    flattened: List[WardrobeItem] = []
    for items in (items_by_category or {}).values():
        flattened.extend(items or [])
    return flattened


def build_scenario_combinations(
    base_item: WardrobeItem,
    seasons: Sequence[str],
    scenarios: Iterable[ScenarioLike],
    items_by_category: Dict[str, List[WardrobeItem]] | None,
) -> List[ScenarioCombination]:
    """Annotate every season x scenario pair with essential-category coverage."""

    season_list = [season.strip() for season in seasons or [] if season and season.strip()]
    scenario_list = resolve_scenarios(scenarios)
    if not season_list or not scenario_list:
        logger.warning(
            "Cannot build combinations: %s seasons, %s scenarios", len(season_list), len(scenario_list)
        )
        return []

    pool = flatten_items(items_by_category)
    combinations: List[ScenarioCombination] = []
    for season in season_list:
        for scenario in scenario_list:
            check = check_essential_categories(
                base_item.category,
                pool,
                season,
                scenario_name=scenario.name,
                scenario_id=scenario.scenario_id,
            )
            combination = ScenarioCombination(
                season=season,
                scenario=scenario.name,
                is_complete=check.is_complete,
                missing_categories=check.missing_categories,
                available_categories=check.available_categories,
                required_categories=check.required_categories,
                scenario_id=scenario.scenario_id,
            )
            status = "COMPLETE" if check.is_complete else f"MISSING {', '.join(check.missing_categories).upper()}"
            logger.info("%s) %s %s", len(combinations) + 1, combination.label, status)
            combinations.append(combination)

    complete = sum(1 for combination in combinations if combination.is_complete)
    logger.info("Coverage: %s/%s combinations have complete outfits", complete, len(combinations))
    return combinations


def complete_combinations(combinations: Iterable[ScenarioCombination]) -> List[ScenarioCombination]:
    """Complete combinations ordered coldest season first; stable within a season."""

    complete = [combination for combination in combinations if combination.is_complete]
    return sorted(complete, key=lambda combination: season_priority(combination.season))


def incomplete_combinations(combinations: Iterable[ScenarioCombination]) -> List[ScenarioCombination]:
    return [combination for combination in combinations if not combination.is_complete]


def describe_incomplete(combination: ScenarioCombination) -> str:
    if combination.missing_categories:
        reason = f"don't have {' or '.join(combination.missing_categories)} to combine with"
    else:
        reason = "missing essential items"
    return f"{combination.label.upper()} - {reason}"


__all__ = [
    "build_scenario_combinations",
    "complete_combinations",
    "incomplete_combinations",
    "describe_incomplete",
    "resolve_scenarios",
    "flatten_items",
]
