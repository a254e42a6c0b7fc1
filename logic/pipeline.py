"""End-to-end outfit composition for one base item."""

from __future__ import annotations

import contextvars
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from agents.outfit_composer_agent import CompositionResult, OutfitComposer
from logic.combinations import (
    ScenarioLike,
    build_scenario_combinations,
    complete_combinations,
    describe_incomplete,
    incomplete_combinations,
)
from logic.distribution import DEFAULT_MAX_PER_GROUP, CombinationOutfits, distribute_outfits
from logic.presentation import describe_groups, group_outfits_by_versatility
from models.outfit import DisplayGroup, ScenarioGroup
from models.scenario import ScenarioCombination
from models.wardrobe_item import WardrobeItem
from tools.observability import instrument_stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutfitAnalysis:
    """Everything produced while composing outfits for one base item."""

    groups: List[ScenarioGroup] = field(default_factory=list)
    display_groups: List[DisplayGroup] = field(default_factory=list)
    combinations: List[ScenarioCombination] = field(default_factory=list)
    incomplete: List[ScenarioCombination] = field(default_factory=list)
    strategies: Dict[str, str] = field(default_factory=dict)

    @property
    def outfit_count(self) -> int:
        return sum(len(group.outfits) for group in self.groups)


def _compose_all(
    composer: OutfitComposer,
    base_item: WardrobeItem,
    items_by_category: Dict[str, List[WardrobeItem]],
    combinations: Sequence[ScenarioCombination],
    max_workers: int,
) -> List[CompositionResult]:
    def compose(combination: ScenarioCombination) -> CompositionResult:
        return composer.compose(
            base_item,
            items_by_category,
            combination.season,
            combination.scenario,
            scenario_id=combination.scenario_id,
        )

    if max_workers <= 1 or len(combinations) <= 1:
        return [compose(combination) for combination in combinations]

    # Results are collected by index so distribution order never depends on timing.
    with ThreadPoolExecutor(max_workers=min(max_workers, len(combinations))) as executor:
        futures = [
            executor.submit(contextvars.copy_context().run, compose, combination)
            for combination in combinations
        ]
        return [future.result() for future in futures]


@instrument_stage("analyze_item")
def analyze_item(
    base_item: WardrobeItem,
    compatible_items_by_category: Optional[Dict[str, List[WardrobeItem]]],
    seasons: Sequence[str],
    scenarios: Iterable[ScenarioLike],
    composer: Optional[OutfitComposer] = None,
    max_workers: int = 1,
    max_per_group: int = DEFAULT_MAX_PER_GROUP,
) -> OutfitAnalysis:
    """Run combination analysis, composition, distribution and presentation.

    Only complete combinations are composed, coldest season first. Incomplete
    ones are kept on the result for diagnostics.
    """

    items_by_category = compatible_items_by_category or {}
    combinations = build_scenario_combinations(base_item, seasons, scenarios, items_by_category)
    incomplete = incomplete_combinations(combinations)
    for combination in incomplete:
        logger.info("Skipping %s", describe_incomplete(combination))

    complete = complete_combinations(combinations)
    if not complete:
        logger.info("No complete combinations for %s", base_item.name)
        return OutfitAnalysis(combinations=combinations, incomplete=incomplete)

    composer = composer or OutfitComposer()
    results = _compose_all(composer, base_item, items_by_category, complete, max_workers)

    generated = [
        CombinationOutfits(combination.season, combination.scenario, result.outfits, result.strategy)
        for combination, result in zip(complete, results)
    ]
    groups = distribute_outfits(generated, max_per_group=max_per_group)
    display_groups = group_outfits_by_versatility(groups)
    describe_groups(display_groups)

    return OutfitAnalysis(
        groups=groups,
        display_groups=display_groups,
        combinations=combinations,
        incomplete=incomplete,
        strategies={item.label: item.strategy for item in generated},
    )


def compose_outfits_for_item(
    base_item: WardrobeItem,
    compatible_items_by_category: Optional[Dict[str, List[WardrobeItem]]],
    seasons: Sequence[str],
    scenarios: Iterable[ScenarioLike],
    composer: Optional[OutfitComposer] = None,
    max_workers: int = 1,
) -> List[ScenarioGroup]:
    """Return the distributed outfit groups for ``base_item``."""

    return analyze_item(
        base_item,
        compatible_items_by_category,
        seasons,
        scenarios,
        composer=composer,
        max_workers=max_workers,
    ).groups


__all__ = ["OutfitAnalysis", "analyze_item", "compose_outfits_for_item"]
