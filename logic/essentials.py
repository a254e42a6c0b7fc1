"""Essential-category checks deciding whether a season + scenario can be dressed."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from models.taxonomy import (
    ALL_SEASON,
    ESSENTIAL_CATEGORIES,
    HOME_SCENARIO_KEYWORDS,
    canonical_category,
    is_season_wildcard,
    normalize_category,
    season_tokens,
)
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EssentialCheck:
    is_complete: bool
    missing_categories: List[str] = field(default_factory=list)
    available_categories: List[str] = field(default_factory=list)
    required_categories: List[str] = field(default_factory=list)


def is_home_scenario(scenario_name: Optional[str]) -> bool:
    """Return True when the scenario is home-like and footwear is optional."""

    if not scenario_name:
        return False
    name = scenario_name.lower()
    return any(keyword in name for keyword in HOME_SCENARIO_KEYWORDS)


def matches_season(item: WardrobeItem, season: str) -> bool:
    """Return True when one of the item's season tags covers ``season``.

    Tags are compared as sets of ``/``-separated tokens, so ``spring`` matches
    ``spring/fall`` but ``summer`` does not match ``summertime``. Items without
    season tags never match a specific season.
    """

    target = season_tokens(season)
    if not target:
        return False
    for tag in item.seasons:
        if tag == ALL_SEASON or is_season_wildcard(tag):
            return True
        if season_tokens(tag) & target:
            return True
    return False


def matches_scenario(item: WardrobeItem, scenario_id: Optional[str]) -> bool:
    """Items without scenario tags, or checks without an id, always match."""

    if not scenario_id or not item.scenario_ids:
        return True
    return scenario_id in item.scenario_ids


def filter_for_combination(
    items: Iterable[WardrobeItem], season: str, scenario_id: Optional[str] = None
) -> List[WardrobeItem]:
    kept: List[WardrobeItem] = []
    for item in items:
        if not matches_season(item, season):
            continue
        if not matches_scenario(item, scenario_id):
            logger.debug("%s matches season but not scenario %s", item.item_id, scenario_id)
            continue
        kept.append(item)
    return kept


def required_categories_for(base_category: str, scenario_name: Optional[str] = None) -> List[str]:
    """Return the plural categories a complete outfit needs around the base item."""

    category = canonical_category(base_category)
    if category not in ESSENTIAL_CATEGORIES:
        logger.warning("Unknown base category '%s' - treating as no requirements", base_category)
        return []
    required = list(ESSENTIAL_CATEGORIES[category])
    if is_home_scenario(scenario_name) and "footwear" in required:
        required.remove("footwear")
        logger.debug("Home scenario '%s' - footwear requirement removed", scenario_name)
    return required


def check_essential_categories(
    base_category: str,
    candidates: Iterable[WardrobeItem],
    season: str,
    scenario_name: Optional[str] = None,
    scenario_id: Optional[str] = None,
) -> EssentialCheck:
    """Check whether the season/scenario pool covers every required category."""

    required = required_categories_for(base_category, scenario_name)
    pool = filter_for_combination(candidates, season, scenario_id)
    present = {normalize_category(item.category) for item in pool if item.category}

    available_required = [category for category in required if category in present]
    missing = [category for category in required if category not in present]

    logger.debug(
        "essentials for %s in %s + %s: required=%s missing=%s pool=%s",
        base_category,
        season,
        scenario_name,
        required,
        missing,
        len(pool),
    )
    return EssentialCheck(
        is_complete=not missing,
        missing_categories=missing,
        available_categories=sorted(present),
        required_categories=required,
    )


__all__ = [
    "EssentialCheck",
    "check_essential_categories",
    "filter_for_combination",
    "is_home_scenario",
    "matches_season",
    "matches_scenario",
    "required_categories_for",
]
