"""Deterministic outfit assembly keyed by the base item's category."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from logic.essentials import is_home_scenario
from logic.layering import is_good_base_layer, is_layering_only, is_suitable_base_layer
from logic.outfit_validation import validate_outfit_completeness
from models.outfit import (
    ROLE_BASE_ITEM,
    ROLE_COMPLEMENTING,
    ROLE_LAYERING,
    ROLE_OUTERWEAR,
    Outfit,
    OutfitItem,
)
from models.taxonomy import LAYERING_SEASON_KEYWORDS, canonical_category, normalize_category
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

DEFAULT_MAX_OUTFITS = 10
GENERAL_CATEGORY_PREFERENCE = ("tops", "bottoms", "footwear")
MAX_GENERAL_ITEMS = 3


def group_by_category(
    items_by_category: Dict[str, List[WardrobeItem]] | None, skip_ids: Sequence[str] = ()
) -> Dict[str, List[WardrobeItem]]:
    """Regroup items under their plural normalised category, keeping order."""

    grouped: Dict[str, List[WardrobeItem]] = {}
    seen: set[str] = set(skip_ids)
    for key, items in (items_by_category or {}).items():
        for item in items or []:
            if item.item_id in seen:
                continue
            seen.add(item.item_id)
            category = normalize_category(item.category or key)
            grouped.setdefault(category, []).append(item)
    return grouped


def _shoes_to_use(footwear: List[WardrobeItem], scenario: Optional[str]) -> List[Optional[WardrobeItem]]:
    """Footwear options; home scenarios without shoes build a single barefoot slot."""

    if footwear:
        return list(footwear)
    if is_home_scenario(scenario):
        return [None]
    return []


def _type_name(prefix: str, layered: bool, barefoot: bool) -> str:
    name = prefix
    if layered:
        name = f"{name}-layered"
    if barefoot:
        name = f"{name}-home"
    return name


def _base_entry(base_item: WardrobeItem) -> OutfitItem:
    return OutfitItem(item=base_item, role=ROLE_BASE_ITEM)


def _standalone_tops(tops: Sequence[WardrobeItem]) -> List[WardrobeItem]:
    return [top for top in tops if not is_layering_only(top)]


def build_top_outfits(
    base_item: WardrobeItem, grouped: Dict[str, List[WardrobeItem]], season: str, scenario: Optional[str]
) -> List[Outfit]:
    bottoms = grouped.get("bottoms", [])
    outerwear = grouped.get("outerwear", [])
    shoes_options = _shoes_to_use(grouped.get("footwear", []), scenario)
    if not bottoms or not shoes_options:
        return []

    under_layers: List[WardrobeItem] = []
    if is_layering_only(base_item):
        under_layers = [
            top
            for top in _standalone_tops(grouped.get("tops", []))
            if is_suitable_base_layer(top, base_item)
        ]
        if not under_layers:
            logger.info("%s needs a base layer and none is available", base_item.name)
            return []
        # thin base layers first
        under_layers.sort(key=lambda top: not is_good_base_layer(top))

    outfits: List[Outfit] = []
    for bottom_index, bottom in enumerate(bottoms):
        for shoe_index, shoes in enumerate(shoes_options):
            product_index = bottom_index + shoe_index
            items = [_base_entry(base_item)]
            if under_layers:
                items.append(OutfitItem(under_layers[product_index % len(under_layers)], ROLE_COMPLEMENTING))
            items.append(OutfitItem(bottom, ROLE_COMPLEMENTING))
            if shoes is not None:
                items.append(OutfitItem(shoes, ROLE_COMPLEMENTING))
            if outerwear:
                items.append(OutfitItem(outerwear[product_index % len(outerwear)], ROLE_LAYERING))
            outfit_type = _type_name("top-based", bool(outerwear), shoes is None)
            outfits.append(Outfit(outfit_type=outfit_type, items=items))
    return outfits


def build_bottom_outfits(
    base_item: WardrobeItem, grouped: Dict[str, List[WardrobeItem]], season: str, scenario: Optional[str]
) -> List[Outfit]:
    tops = _standalone_tops(grouped.get("tops", []))
    outerwear = grouped.get("outerwear", [])
    shoes_options = _shoes_to_use(grouped.get("footwear", []), scenario)
    if not tops or not shoes_options:
        return []

    outfits: List[Outfit] = []
    for top_index, top in enumerate(tops):
        for shoe_index, shoes in enumerate(shoes_options):
            items = [_base_entry(base_item), OutfitItem(top, ROLE_COMPLEMENTING)]
            if shoes is not None:
                items.append(OutfitItem(shoes, ROLE_COMPLEMENTING))
            if outerwear:
                items.append(OutfitItem(outerwear[(top_index + shoe_index) % len(outerwear)], ROLE_LAYERING))
            outfit_type = _type_name("bottom-based", bool(outerwear), shoes is None)
            outfits.append(Outfit(outfit_type=outfit_type, items=items))
    return outfits


def build_footwear_outfits(
    base_item: WardrobeItem, grouped: Dict[str, List[WardrobeItem]], season: str, scenario: Optional[str]
) -> List[Outfit]:
    outfits: List[Outfit] = []
    for top in _standalone_tops(grouped.get("tops", [])):
        for bottom in grouped.get("bottoms", []):
            outfits.append(
                Outfit(
                    outfit_type="footwear-based",
                    items=[
                        _base_entry(base_item),
                        OutfitItem(top, ROLE_COMPLEMENTING),
                        OutfitItem(bottom, ROLE_COMPLEMENTING),
                    ],
                )
            )
    return outfits


def _needs_layer(season: str) -> bool:
    season_text = (season or "").lower()
    return any(keyword in season_text for keyword in LAYERING_SEASON_KEYWORDS)


def build_dress_outfits(
    base_item: WardrobeItem, grouped: Dict[str, List[WardrobeItem]], season: str, scenario: Optional[str]
) -> List[Outfit]:
    outerwear = grouped.get("outerwear", [])
    accessories = grouped.get("accessories", [])
    shoes_options = _shoes_to_use(grouped.get("footwear", []), scenario)

    outfits: List[Outfit] = []
    for index, shoes in enumerate(shoes_options):
        items = [_base_entry(base_item)]
        if shoes is not None:
            items.append(OutfitItem(shoes, ROLE_COMPLEMENTING))
        outfit_type = "dress-based"
        if outerwear and _needs_layer(season):
            items.append(OutfitItem(outerwear[index % len(outerwear)], ROLE_OUTERWEAR))
            outfit_type = "dress-based-layered"
        elif accessories:
            items.append(OutfitItem(accessories[index % len(accessories)], ROLE_COMPLEMENTING))
            outfit_type = "dress-based-accessorized"
        if shoes is None:
            outfit_type = f"{outfit_type}-home"
        outfits.append(Outfit(outfit_type=outfit_type, items=items))
    return outfits


def build_general_outfits(
    base_item: WardrobeItem, grouped: Dict[str, List[WardrobeItem]], season: str, scenario: Optional[str]
) -> List[Outfit]:
    """Best-effort single outfit: the first item of up to three categories."""

    ordered = [category for category in GENERAL_CATEGORY_PREFERENCE if grouped.get(category)]
    ordered += [category for category in grouped if category not in ordered and grouped[category]]
    chosen = [grouped[category][0] for category in ordered[:MAX_GENERAL_ITEMS]]
    if not chosen:
        return []
    items = [_base_entry(base_item)] + [OutfitItem(item, ROLE_COMPLEMENTING) for item in chosen]
    return [Outfit(outfit_type="general", items=items)]


_BUILDERS = {
    "top": build_top_outfits,
    "bottom": build_bottom_outfits,
    "footwear": build_footwear_outfits,
    "dress": build_dress_outfits,
    "one_piece": build_dress_outfits,
}


def build_outfit_recommendations(
    base_item: WardrobeItem,
    items_by_category: Dict[str, List[WardrobeItem]] | None,
    season: str,
    scenario: Optional[str],
    max_outfits: int = DEFAULT_MAX_OUTFITS,
) -> List[Outfit]:
    """Build complete outfits around ``base_item`` without any text generation.

    Outfits are assembled as Cartesian products of the essential categories,
    with outerwear rotated across products. Every outfit is re-checked for
    completeness and the list is capped at ``max_outfits``.
    """

    category = canonical_category(base_item.category)
    grouped = group_by_category(items_by_category, skip_ids=[base_item.item_id])
    builder = _BUILDERS.get(category, build_general_outfits)
    candidates = builder(base_item, grouped, season, scenario)

    outfits: List[Outfit] = []
    for outfit in candidates:
        check = validate_outfit_completeness(outfit, category, scenario)
        if not check.is_valid:
            logger.debug("Dropping %s outfit %s: %s", outfit.outfit_type, outfit.signature, check.reason)
            continue
        outfits.append(outfit)
        if len(outfits) >= max_outfits:
            break
    logger.info(
        "Built %s deterministic outfits for %s (%s + %s)", len(outfits), base_item.name, season, scenario
    )
    return outfits


__all__ = [
    "build_outfit_recommendations",
    "build_top_outfits",
    "build_bottom_outfits",
    "build_footwear_outfits",
    "build_dress_outfits",
    "build_general_outfits",
    "group_by_category",
]
