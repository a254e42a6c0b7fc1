"""Wardrobe item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from models.taxonomy import canonical_category, normalize_color_name


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalise_tags(values: Iterable[Any]) -> List[str]:
    """Strip and deduplicate tags while keeping their original order."""

    normalised = []
    seen = set()
    for value in values:
        text = _clean_text(value)
        if text and text not in seen:
            normalised.append(text)
            seen.add(text)
    return normalised


@dataclass
class WardrobeItem:
    """Represents an item in the user's wardrobe.

    Construction is the single validation point for items entering the
    pipeline: ``name`` and ``category`` must be present, optional attributes
    collapse to ``None`` and tag lists are cleaned.
    """

    item_id: str
    name: str
    category: str
    subcategory: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    style: Optional[str] = None
    seasons: List[str] = field(default_factory=list)
    details: Optional[str] = None
    scenario_ids: List[str] = field(default_factory=list)
    user_id: Optional[str] = None

    def __post_init__(self) -> None:
        self.item_id = str(self.item_id).strip() if self.item_id is not None else ""
        if not self.item_id:
            raise ValueError("WardrobeItem requires an item_id")
        name = _clean_text(self.name)
        if not name:
            raise ValueError(f"WardrobeItem '{self.item_id}' is missing a name")
        self.name = name
        category = canonical_category(_clean_text(self.category))
        if not category:
            raise ValueError(f"WardrobeItem '{self.item_id}' is missing a category")
        self.category = category
        subcategory = _clean_text(self.subcategory)
        self.subcategory = subcategory.lower() if subcategory else None
        self.color = normalize_color_name(_clean_text(self.color))
        self.material = _clean_text(self.material)
        style = _clean_text(self.style)
        self.style = style.lower() if style else None
        self.seasons = _normalise_tags(_ensure_list(self.seasons))
        self.details = _clean_text(self.details)
        self.scenario_ids = [str(value) for value in _normalise_tags(_ensure_list(self.scenario_ids))]

    def __hash__(self) -> int:
        return hash(self.item_id)


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from a loose persistence record.

    Accepts the common field spellings used by wardrobe records (``id`` or
    ``item_id``, ``season`` or ``seasons``, ``scenarios`` or ``scenario_ids``).
    """

    item_id = metadata.get("item_id", metadata.get("id"))
    missing = [key for key, value in (("item_id", item_id), ("name", metadata.get("name")), ("category", metadata.get("category"))) if not value]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    seasons = metadata.get("seasons", metadata.get("season"))
    scenario_ids = metadata.get("scenario_ids", metadata.get("scenarios"))

    return WardrobeItem(
        item_id=str(item_id),
        name=str(metadata["name"]),
        category=str(metadata["category"]),
        subcategory=metadata.get("subcategory"),
        color=metadata.get("color"),
        material=metadata.get("material"),
        style=metadata.get("style"),
        seasons=_ensure_list(seasons),
        details=metadata.get("details"),
        scenario_ids=_ensure_list(scenario_ids),
        user_id=metadata.get("user_id"),
    )


__all__ = ["WardrobeItem", "from_raw_metadata"]
