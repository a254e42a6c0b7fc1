"""Prompt construction for the AI-assisted outfit composer."""
from __future__ import annotations

from typing import Dict, List, Optional

from logic.essentials import is_home_scenario, required_categories_for
from models.wardrobe_item import WardrobeItem

MAX_PROMPT_OUTFITS = 10

LAYERING_RULES = """LAYERING RULES:
- Outer layers (hoodies, sweatshirts, sweaters, cardigans, blazers, jackets, coats) never combine with each other.
- A cardigan, kimono, wrap, shawl or vest without buttons or a zip needs a base layer underneath (t-shirt, tank, camisole, blouse, shirt).
- Bulky knits (sweaters, hoodies, pullovers, sweatshirts) are never worn under a cardigan.
- Only ONE bottom per outfit."""

RESPONSE_FORMAT = """FORMAT your response as:
OUTFIT 1: [item name [id] + item name [id] + ...]
Explanation: [brief styling reasoning]

OUTFIT 2: [item name [id] + item name [id] + ...]
Explanation: [brief styling reasoning]"""


def describe_item(item: WardrobeItem, include_id: bool = True) -> str:
    """One-line description of an item; attributes that are missing are left out."""

    attributes = [
        f"{label}: {value}"
        for label, value in (
            ("type", item.subcategory),
            ("color", item.color),
            ("material", item.material),
            ("style", item.style),
            ("details", item.details),
        )
        if value
    ]
    text = item.name
    if include_id:
        text = f"{text} [{item.item_id}]"
    if attributes:
        text = f"{text} ({', '.join(attributes)})"
    return text


def _requirements_line(base_item: WardrobeItem, scenario: Optional[str]) -> str:
    required = required_categories_for(base_item.category, scenario)
    if is_home_scenario(scenario):
        footwear = "footwear is optional at home"
    else:
        footwear = "footwear is REQUIRED"
    needed = ", ".join(required) if required else "no extra categories"
    return f"- A complete outfit needs the base item plus {needed}; {footwear}."


def build_outfit_prompt(
    base_item: WardrobeItem,
    items_by_category: Dict[str, List[WardrobeItem]],
    season: str,
    scenario: Optional[str],
    max_outfits: int = MAX_PROMPT_OUTFITS,
) -> str:
    """Build the outfit creation prompt for one season + scenario combination.

    Every candidate is listed with its ``[id]`` so the response can be matched
    back to wardrobe items without relying on fuzzy name matching.
    """

    lines: List[str] = [
        f"Create practical outfit combinations for {season} season and {scenario} scenario.",
        "",
        "BASE ITEM (must be included in all outfits):",
        f"- {describe_item(base_item)}",
        "",
        "AVAILABLE COMPATIBLE ITEMS:",
    ]
    for category, items in items_by_category.items():
        candidates = [item for item in items or [] if item.item_id != base_item.item_id]
        if not candidates:
            continue
        lines.append("")
        lines.append(f"{category.upper()}:")
        lines.extend(f"{index}. {describe_item(item)}" for index, item in enumerate(candidates, start=1))

    lines.extend(
        [
            "",
            LAYERING_RULES,
            "",
            "INSTRUCTIONS:",
            f"- Create up to {max_outfits} COMPLETE outfits that include the base item.",
            _requirements_line(base_item, scenario),
            "- Each outfit should be a distinct styling approach; do not repeat an outfit with one accessory added.",
            f'- Consider weather for {season} and the occasion "{scenario}".',
            "",
            RESPONSE_FORMAT,
        ]
    )
    return "\n".join(lines)


__all__ = ["build_outfit_prompt", "describe_item", "MAX_PROMPT_OUTFITS"]
