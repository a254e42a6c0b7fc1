"""Outfit, scenario group and display group schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from models.taxonomy import normalize_category
from models.wardrobe_item import WardrobeItem

ROLE_BASE_ITEM = "base-item"
ROLE_COMPLEMENTING = "complementing"
ROLE_LAYERING = "layering"
ROLE_OUTERWEAR = "outerwear"
OUTFIT_ROLES = (ROLE_BASE_ITEM, ROLE_COMPLEMENTING, ROLE_LAYERING, ROLE_OUTERWEAR)


@dataclass(frozen=True)
class OutfitItem:
    item: WardrobeItem
    role: str = ROLE_COMPLEMENTING

    def __post_init__(self) -> None:
        if self.role not in OUTFIT_ROLES:
            raise ValueError(f"Unsupported outfit role '{self.role}'. Allowed: {list(OUTFIT_ROLES)}")

    @property
    def name(self) -> str:
        return self.item.name

    @property
    def category(self) -> str:
        return self.item.category


def outfit_signature(names: List[str]) -> str:
    """Canonical outfit identity: item names sorted and joined by a space."""

    return " ".join(sorted(names))


@dataclass
class Outfit:
    """A wearable combination built around one base item."""

    outfit_type: str
    items: List[OutfitItem] = field(default_factory=list)
    explanation: Optional[str] = None

    @property
    def signature(self) -> str:
        return outfit_signature([entry.name for entry in self.items])

    @property
    def base_items(self) -> List[OutfitItem]:
        return [entry for entry in self.items if entry.role == ROLE_BASE_ITEM]

    @property
    def base_item(self) -> Optional[WardrobeItem]:
        base = self.base_items
        return base[0].item if base else None

    @property
    def categories(self) -> List[str]:
        """Distinct normalised categories in item order."""

        seen: List[str] = []
        for entry in self.items:
            category = normalize_category(entry.category)
            if category not in seen:
                seen.append(category)
        return seen

    def items_in(self, category: str) -> List[WardrobeItem]:
        """Return outfit items whose normalised category matches ``category``."""

        wanted = normalize_category(category)
        return [entry.item for entry in self.items if normalize_category(entry.category) == wanted]

    def has_category(self, category: str) -> bool:
        return bool(self.items_in(category))

    def to_dict(self) -> dict:
        return {
            "type": self.outfit_type,
            "signature": self.signature,
            "explanation": self.explanation,
            "items": [
                {
                    "item_id": entry.item.item_id,
                    "name": entry.name,
                    "category": entry.category,
                    "role": entry.role,
                }
                for entry in self.items
            ],
        }


@dataclass
class ScenarioGroup:
    """Outfits assigned to one (possibly merged) season x scenario label."""

    label: str
    season: str
    scenario: str
    outfits: List[Outfit] = field(default_factory=list)
    source_labels: List[str] = field(default_factory=list)

    @property
    def signatures(self) -> List[str]:
        return [outfit.signature for outfit in self.outfits]

    def to_dict(self) -> dict:
        return {
            "combination": self.label,
            "season": self.season,
            "scenario": self.scenario,
            "source_combinations": list(self.source_labels),
            "outfits": [outfit.to_dict() for outfit in self.outfits],
        }


@dataclass(frozen=True)
class DisplayGroup:
    label: str
    season: str
    scenario: str
    outfit_signatures: List[str] = field(default_factory=list)

    @property
    def outfit_count(self) -> int:
        return len(self.outfit_signatures)

    def to_dict(self) -> dict:
        return {
            "combination": self.label,
            "season": self.season,
            "scenario": self.scenario,
            "outfits": list(self.outfit_signatures),
            "outfit_count": self.outfit_count,
        }


__all__ = [
    "ROLE_BASE_ITEM",
    "ROLE_COMPLEMENTING",
    "ROLE_LAYERING",
    "ROLE_OUTERWEAR",
    "OUTFIT_ROLES",
    "OutfitItem",
    "Outfit",
    "outfit_signature",
    "ScenarioGroup",
    "DisplayGroup",
]
