"""Canonical taxonomy definitions for wardrobe items and scenarios.

This module centralises category names, the plural forms used when matching
essential categories, and the color and style tables consulted by the
compatibility filter. Helper functions keep normalisation consistent across
the pipeline.
"""

from typing import Dict, List, Optional, Tuple


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_")


# Base item categories and the other categories a complete outfit needs.
ESSENTIAL_CATEGORIES: Dict[str, List[str]] = {
    "top": ["bottoms", "footwear"],
    "bottom": ["tops", "footwear"],
    "footwear": ["tops", "bottoms"],
    "dress": ["footwear"],
    "one_piece": ["footwear"],
    "outerwear": [],
    "accessory": [],
}

CATEGORY_ALIASES: Dict[str, str] = {
    "tops": "top",
    "bottoms": "bottom",
    "shoes": "footwear",
    "accessories": "accessory",
    "one-piece": "one_piece",
    "dresses": "dress",
}

PLURAL_CATEGORIES: Dict[str, str] = {
    "top": "tops",
    "tops": "tops",
    "bottom": "bottoms",
    "bottoms": "bottoms",
    "footwear": "footwear",
    "shoes": "footwear",
    "accessory": "accessories",
    "accessories": "accessories",
    "outerwear": "outerwear",
}

ALL_SEASON = "ALL_SEASON"
SEASON_WILDCARDS = {"all_season", "all", "all_seasons", "all_year"}

# Composition order, coldest first so layered looks are built before light ones.
SEASON_PRIORITY: Dict[str, int] = {
    "winter": 1,
    "spring/fall": 2,
    "spring": 2,
    "fall": 2,
    "autumn": 2,
    "summer": 3,
}

LAYERING_SEASON_KEYWORDS: Tuple[str, ...] = ("spring", "fall", "autumn", "winter")

HOME_SCENARIO_KEYWORDS: Tuple[str, ...] = ("home", "house", "remote work")

NEUTRAL_COLORS = {"black", "white", "gray", "grey", "beige", "cream", "nude", "brown"}

COLOR_HARMONY: Dict[str, List[str]] = {
    "blue": ["white", "black", "gray", "beige", "brown"],
    "red": ["white", "black", "gray", "beige"],
    "green": ["white", "black", "gray", "beige", "brown"],
    "yellow": ["white", "black", "gray", "blue"],
    "purple": ["white", "black", "gray"],
    "pink": ["white", "black", "gray"],
    "orange": ["white", "black", "gray", "brown"],
}

STYLE_COMPATIBILITY: Dict[str, List[str]] = {
    "casual": ["casual", "smart casual", "relaxed"],
    "formal": ["formal", "business", "professional", "elegant"],
    "smart casual": ["smart casual", "casual", "business casual"],
    "business": ["business", "formal", "professional"],
    "elegant": ["elegant", "formal", "sophisticated"],
    "sporty": ["sporty", "athletic", "casual"],
}

COLOR_MAP = {
    "grey": "gray",
    "off white": "white",
    "off-white": "white",
    "navy blue": "navy",
}


def canonical_category(value: Optional[str]) -> str:
    """Return the singular canonical category for an item.

    Unknown categories are kept (lower-cased) so that unmapped base items can
    still flow through the general outfit builder.
    """

    if not value:
        return ""
    key = _normalize_key(value)
    return CATEGORY_ALIASES.get(key, key)


def normalize_category(value: Optional[str]) -> str:
    """Map a category to the plural form used for essential-category matching."""

    if not value:
        return ""
    key = _normalize_key(value)
    return PLURAL_CATEGORIES.get(key, key)


def normalize_color_name(raw_string: Optional[str]) -> Optional[str]:
    """Map a raw color string to a canonical lower-case color name."""

    if raw_string is None:
        return None
    key = raw_string.strip().lower()
    if not key:
        return None
    return COLOR_MAP.get(key, key)


def season_tokens(value: Optional[str]) -> set[str]:
    """Split a season tag such as ``spring/fall`` into its member seasons."""

    if not value:
        return set()
    return {part.strip().lower() for part in value.split("/") if part.strip()}


def is_season_wildcard(value: Optional[str]) -> bool:
    return bool(value) and _normalize_key(value) in SEASON_WILDCARDS


def season_priority(season: Optional[str]) -> int:
    return SEASON_PRIORITY.get((season or "").strip().lower(), 999)


__all__ = [
    "ESSENTIAL_CATEGORIES",
    "CATEGORY_ALIASES",
    "PLURAL_CATEGORIES",
    "ALL_SEASON",
    "SEASON_PRIORITY",
    "LAYERING_SEASON_KEYWORDS",
    "HOME_SCENARIO_KEYWORDS",
    "NEUTRAL_COLORS",
    "COLOR_HARMONY",
    "STYLE_COMPATIBILITY",
    "canonical_category",
    "normalize_category",
    "normalize_color_name",
    "season_tokens",
    "is_season_wildcard",
    "season_priority",
]
