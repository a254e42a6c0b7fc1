"""Rule-based compatibility filtering between a base item and wardrobe candidates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List

from models.taxonomy import (
    ALL_SEASON,
    COLOR_HARMONY,
    NEUTRAL_COLORS,
    STYLE_COMPATIBILITY,
    is_season_wildcard,
)
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompatibilityResult:
    """Compatible items grouped by category, plus filter diagnostics."""

    items_by_category: Dict[str, List[WardrobeItem]]
    diagnostics: Dict[str, object]

    @property
    def total(self) -> int:
        return sum(len(items) for items in self.items_by_category.values())


def has_season_overlap(base_item: WardrobeItem, candidate: WardrobeItem) -> bool:
    """Return True when the items share a season or either lacks season data."""

    if not base_item.seasons or not candidate.seasons:
        return True
    for base_season in base_item.seasons:
        for candidate_season in candidate.seasons:
            if base_season == candidate_season:
                return True
            if base_season == ALL_SEASON or candidate_season == ALL_SEASON:
                return True
            if is_season_wildcard(base_season) or is_season_wildcard(candidate_season):
                return True
    return False


def color_rule(base_item: WardrobeItem, candidate: WardrobeItem) -> str:
    """Name the rule that makes two colors compatible.

    Every branch is compatible today; the final ``permissive`` fallback keeps
    unknown pairs in play until a stricter palette is agreed.
    """

    base_color, candidate_color = base_item.color, candidate.color
    if not base_color or not candidate_color:
        return "missing"
    if base_color == candidate_color:
        return "same"
    if base_color in NEUTRAL_COLORS or candidate_color in NEUTRAL_COLORS:
        return "neutral"
    if candidate_color in COLOR_HARMONY.get(base_color, []) or base_color in COLOR_HARMONY.get(candidate_color, []):
        return "harmony"
    return "permissive"


def has_color_compatibility(base_item: WardrobeItem, candidate: WardrobeItem) -> bool:
    rule = color_rule(base_item, candidate)
    logger.debug("color check (%s, %s) -> %s", base_item.color, candidate.color, rule)
    return rule in {"missing", "same", "neutral", "harmony", "permissive"}


def has_style_compatibility(base_item: WardrobeItem, candidate: WardrobeItem) -> bool:
    """Return True when styles are compatible; unknown pairs stay permissive."""

    base_style, candidate_style = base_item.style, candidate.style
    if not base_style or not candidate_style or base_style == candidate_style:
        return True
    if candidate_style in STYLE_COMPATIBILITY.get(base_style, []) or base_style in STYLE_COMPATIBILITY.get(
        candidate_style, []
    ):
        return True
    logger.debug("style pair (%s, %s) not in table, allowing", base_style, candidate_style)
    return True


def get_compatible_items(base_item: WardrobeItem, candidates: Iterable[WardrobeItem]) -> CompatibilityResult:
    """Group candidates that pass every compatibility predicate by category."""

    grouped: Dict[str, List[WardrobeItem]] = {}
    rejected = {"season": 0, "color": 0, "style": 0}
    color_rules: Dict[str, int] = {}
    candidate_count = 0

    for candidate in candidates:
        if candidate.item_id == base_item.item_id:
            continue
        candidate_count += 1
        if not has_season_overlap(base_item, candidate):
            rejected["season"] += 1
            continue
        if not has_color_compatibility(base_item, candidate):
            rejected["color"] += 1
            continue
        if not has_style_compatibility(base_item, candidate):
            rejected["style"] += 1
            continue
        rule = color_rule(base_item, candidate)
        color_rules[rule] = color_rules.get(rule, 0) + 1
        grouped.setdefault(candidate.category or "other", []).append(candidate)

    for items in grouped.values():
        items.sort(key=lambda item: item.name)

    diagnostics: Dict[str, object] = {
        "candidate_count": candidate_count,
        "compatible_count": sum(len(items) for items in grouped.values()),
        "rejected": rejected,
        "color_rules": color_rules,
        "categories": {category: len(items) for category, items in sorted(grouped.items())},
    }
    logger.info(
        "Found %s compatible items across %s categories for %s",
        diagnostics["compatible_count"],
        len(grouped),
        base_item.item_id,
    )
    return CompatibilityResult(items_by_category=grouped, diagnostics=diagnostics)


__all__ = [
    "CompatibilityResult",
    "get_compatible_items",
    "has_season_overlap",
    "has_color_compatibility",
    "has_style_compatibility",
    "color_rule",
]
