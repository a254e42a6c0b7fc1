"""Layering rules: base-layer suitability and layering-only garment detection."""

from __future__ import annotations

import logging
from typing import Optional

from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

GOOD_BASE_LAYERS = ("t-shirt", "tank", "camisole", "blouse", "shirt")
BAD_BASE_LAYERS = ("sweater", "hoodie", "pullover", "knit", "sweatshirt")
LAYERING_TYPES = ("cardigan", "kimono", "wrap", "shawl", "vest")
OUTER_LAYER_SUBCATEGORIES = ("hoodie", "sweatshirt", "sweater", "cardigan", "blazer", "jacket", "coat")

NEGATIVE_CLOSURE_PHRASES = (
    "no button",
    "no zip",
    "no closure",
    "open front",
    "no snap",
    "open cardigan",
)
POSITIVE_CLOSURE_PHRASES = (
    "button-front",
    "zip-up",
    "snap-front",
    "tie-front",
    "belt",
    "wrap-front",
)


def _matches_any(item: WardrobeItem, keywords: tuple) -> bool:
    subcategory = (item.subcategory or "").lower()
    name = item.name.lower()
    return any(keyword in subcategory or keyword in name for keyword in keywords)


def is_good_base_layer(item: WardrobeItem) -> bool:
    return _matches_any(item, GOOD_BASE_LAYERS)


def is_bad_base_layer(item: WardrobeItem) -> bool:
    return _matches_any(item, BAD_BASE_LAYERS)


def is_outer_layer(item: WardrobeItem) -> bool:
    return (item.subcategory or "") in OUTER_LAYER_SUBCATEGORIES


def is_suitable_base_layer(base_item: Optional[WardrobeItem], layering_item: Optional[WardrobeItem]) -> bool:
    """Return True when ``base_item`` can be worn under ``layering_item``.

    Bulky knits never go under a cardigan; other layering pieces accept any
    item that is not explicitly bulky.
    """

    if base_item is None or layering_item is None:
        return False
    if is_bad_base_layer(base_item):
        if "cardigan" in (layering_item.subcategory or ""):
            logger.debug("%s too thick to wear under %s", base_item.name, layering_item.name)
        return False
    return True


def has_negative_closure_phrases(details: str) -> bool:
    return any(phrase in details for phrase in NEGATIVE_CLOSURE_PHRASES)


def has_positive_closure_indicators(details: str) -> bool:
    explicit = any(phrase in details for phrase in POSITIVE_CLOSURE_PHRASES)
    general_button = "button" in details and "no button" not in details
    general_zip = "zip" in details and "no zip" not in details
    return explicit or general_button or general_zip


def is_layering_type(item: Optional[WardrobeItem]) -> bool:
    if item is None:
        return False
    return _matches_any(item, LAYERING_TYPES)


def is_layering_only(item: Optional[WardrobeItem]) -> bool:
    """Return True when the item cannot stand alone as a top.

    A layering type (cardigan, kimono, ...) stands alone only when its details
    show a closure and no negative closure phrase. Negative phrases win.
    """

    if not is_layering_type(item):
        return False
    details = (item.details or "").lower()
    has_closures = not has_negative_closure_phrases(details) and has_positive_closure_indicators(details)
    if not has_closures:
        logger.debug("%s is layering-only (no closures)", item.name)
    return not has_closures


__all__ = [
    "GOOD_BASE_LAYERS",
    "BAD_BASE_LAYERS",
    "LAYERING_TYPES",
    "OUTER_LAYER_SUBCATEGORIES",
    "NEGATIVE_CLOSURE_PHRASES",
    "POSITIVE_CLOSURE_PHRASES",
    "is_good_base_layer",
    "is_bad_base_layer",
    "is_outer_layer",
    "is_suitable_base_layer",
    "has_negative_closure_phrases",
    "has_positive_closure_indicators",
    "is_layering_type",
    "is_layering_only",
]
