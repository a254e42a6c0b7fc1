"""Parse generated outfit text back into validated :class:`Outfit` objects."""
from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

from logic.layering import is_layering_type, is_outer_layer
from logic.outfit_validation import validate_generated_outfit
from models.outfit import ROLE_BASE_ITEM, ROLE_COMPLEMENTING, ROLE_LAYERING, ROLE_OUTERWEAR, Outfit, OutfitItem
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

MAX_PARSED_OUTFITS = 10
_OUTFIT_MARKER = re.compile(r"OUTFIT\s*\d+\s*:", re.IGNORECASE)
_ID_SUFFIX = re.compile(r"\[([^\[\]]+)\]\s*$")
_EXPLANATION_PREFIX = re.compile(r"^explanation\s*:\s*", re.IGNORECASE)


class UnparseableResponseError(ValueError):
    """Raised when generated text contains no ``OUTFIT n:`` blocks."""


def normalize_name(value: str) -> str:
    return " ".join(value.lower().split())


def _clean_line(line: str) -> str:
    return line.strip().strip("*").strip()


class ItemMatcher:
    """Resolve item tokens from generated text to candidate wardrobe items.

    A token matches by its echoed ``[id]`` first, then by exact normalised
    name, then by containment in either direction. Among containment matches
    the longest name wins. A token that resolves to more than one item, by a
    shared exact name or equally long names, is ambiguous and dropped.
    """

    def __init__(self, candidates: Iterable[WardrobeItem]) -> None:
        self.by_id: Dict[str, WardrobeItem] = {}
        self.by_name: Dict[str, List[WardrobeItem]] = {}
        for item in candidates:
            if item.item_id in self.by_id:
                continue
            self.by_id[item.item_id] = item
            self.by_name.setdefault(normalize_name(item.name), []).append(item)

    def match(self, token: str) -> Optional[WardrobeItem]:
        name = token
        id_match = _ID_SUFFIX.search(token)
        if id_match:
            item = self.by_id.get(id_match.group(1).strip())
            if item is not None:
                return item
            name = token[: id_match.start()]
        wanted = normalize_name(name)
        if not wanted:
            return None
        if wanted in self.by_name:
            return self._single(self.by_name[wanted], token)
        return self._match_by_containment(wanted, token)

    def _single(self, items: List[WardrobeItem], token: str) -> Optional[WardrobeItem]:
        if len(items) > 1:
            logger.debug("Ambiguous item token %r matches %s", token, [item.item_id for item in items])
            return None
        return items[0]

    def _match_by_containment(self, wanted: str, token: str) -> Optional[WardrobeItem]:
        matches = [
            item for key, items in self.by_name.items() if key in wanted or wanted in key for item in items
        ]
        if not matches:
            logger.debug("No wardrobe item matches %r", token)
            return None
        longest = max(len(item.name) for item in matches)
        return self._single([item for item in matches if len(item.name) == longest], token)


def role_for(item: WardrobeItem) -> str:
    if item.category == "outerwear":
        return ROLE_OUTERWEAR
    if item.category == "top" and (is_layering_type(item) or is_outer_layer(item)):
        return ROLE_LAYERING
    return ROLE_COMPLEMENTING


def split_outfit_blocks(text: Optional[str]) -> List[str]:
    """Return the raw text of each ``OUTFIT n:`` block, at most ten."""

    sections = _OUTFIT_MARKER.split(text or "")
    if len(sections) < 2:
        raise UnparseableResponseError("Generated text contains no OUTFIT blocks")
    return sections[1 : MAX_PARSED_OUTFITS + 1]


def _parse_block(block: str) -> tuple[List[str], Optional[str]]:
    lines = [_clean_line(line) for line in block.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return [], None
    tokens = [token.strip() for token in lines[0].split("+")]
    explanation = next(
        (_EXPLANATION_PREFIX.sub("", line).strip() for line in lines[1:] if _EXPLANATION_PREFIX.match(line)),
        None,
    )
    return [token for token in tokens if token], explanation or None


def parse_outfit_response(
    text: Optional[str],
    base_item: WardrobeItem,
    items_by_category: Dict[str, List[WardrobeItem]],
    scenario: Optional[str],
) -> List[Outfit]:
    """Reconcile generated outfit text against the candidate items.

    Raises :class:`UnparseableResponseError` when the text has no outfit
    markers. Blocks that reconcile to an incomplete or badly layered outfit
    are dropped.
    """

    blocks = split_outfit_blocks(text)
    candidates = [item for items in items_by_category.values() for item in items or []]
    matcher = ItemMatcher(item for item in candidates if item.item_id != base_item.item_id)
    base_name = normalize_name(base_item.name)

    outfits: List[Outfit] = []
    for index, block in enumerate(blocks, start=1):
        tokens, explanation = _parse_block(block)
        entries = [OutfitItem(base_item, ROLE_BASE_ITEM)]
        seen = {base_item.item_id}
        for token in tokens:
            stripped = _ID_SUFFIX.sub("", token).strip()
            if normalize_name(stripped) == base_name or token.endswith(f"[{base_item.item_id}]"):
                continue
            item = matcher.match(token)
            if item is None or item.item_id in seen:
                continue
            seen.add(item.item_id)
            entries.append(OutfitItem(item, role_for(item)))

        outfit = Outfit(outfit_type=f"ai-generated-{index}", items=entries, explanation=explanation)
        check = validate_generated_outfit(outfit, base_item.category, scenario)
        if not check.is_valid:
            logger.debug("Skipping generated outfit %s: %s", index, check.reason)
            continue
        outfits.append(outfit)

    logger.info("Parsed %s valid outfits from %s generated blocks", len(outfits), len(blocks))
    return outfits


__all__ = [
    "ItemMatcher",
    "UnparseableResponseError",
    "parse_outfit_response",
    "split_outfit_blocks",
    "normalize_name",
    "role_for",
    "MAX_PARSED_OUTFITS",
]
