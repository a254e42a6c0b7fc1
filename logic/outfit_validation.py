"""Completeness and layering checks applied to every composed outfit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from logic.essentials import is_home_scenario, required_categories_for
from logic.layering import is_layering_only, is_outer_layer, is_suitable_base_layer
from models.outfit import Outfit
from models.wardrobe_item import WardrobeItem


@dataclass(frozen=True)
class OutfitCheck:
    is_valid: bool
    reason: Optional[str] = None


_VALID = OutfitCheck(is_valid=True)


def validate_outfit_completeness(outfit: Outfit, base_category: str, scenario: Optional[str]) -> OutfitCheck:
    """Check the base item, footwear and base-category requirements."""

    base_entries = outfit.base_items
    if len(base_entries) != 1:
        return OutfitCheck(False, f"expected exactly one base item, found {len(base_entries)}")
    if len(outfit.items) < 2:
        return OutfitCheck(False, "outfit needs at least one item besides the base item")

    if not is_home_scenario(scenario) and not outfit.has_category("footwear"):
        return OutfitCheck(False, f'missing required footwear for "{scenario}" scenario')

    for category in required_categories_for(base_category, scenario):
        if not outfit.has_category(category):
            return OutfitCheck(False, f"{base_category}-based outfit missing {category}")

    bottoms = outfit.items_in("bottoms")
    if len(bottoms) > 1:
        names = " + ".join(item.name for item in bottoms)
        return OutfitCheck(False, f"multiple bottoms: {names}")
    return _VALID


def _tops_under(outfit: Outfit, layering_item: WardrobeItem) -> List[WardrobeItem]:
    return [
        entry.item
        for entry in outfit.items
        if entry.item is not layering_item and entry.category == "top" and not is_layering_only(entry.item)
    ]


def validate_layering(outfit: Outfit) -> OutfitCheck:
    """Reject competing outer layers and layering-only pieces worn alone."""

    outer_layers = [entry.item for entry in outfit.items if is_outer_layer(entry.item)]
    if len(outer_layers) > 1:
        names = " + ".join(f"{item.name} ({item.subcategory})" for item in outer_layers)
        return OutfitCheck(False, f"double outer layers: {names}")

    for entry in outfit.items:
        if entry.category != "top" or not is_layering_only(entry.item):
            continue
        if not any(is_suitable_base_layer(under, entry.item) for under in _tops_under(outfit, entry.item)):
            return OutfitCheck(False, f"{entry.name} needs a base layer underneath")
    return _VALID


def validate_generated_outfit(outfit: Outfit, base_category: str, scenario: Optional[str]) -> OutfitCheck:
    """Full check for outfits reconciled from generated text."""

    check = validate_outfit_completeness(outfit, base_category, scenario)
    if not check.is_valid:
        return check
    return validate_layering(outfit)


__all__ = [
    "OutfitCheck",
    "validate_outfit_completeness",
    "validate_layering",
    "validate_generated_outfit",
]
