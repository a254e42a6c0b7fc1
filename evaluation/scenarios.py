"""Evaluation scenarios exercising layering, home outfits and generator fallback."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tools.text_generation import GenerationTimeoutError


@dataclass
class EvaluationScenario:
    name: str
    description: str
    base_item_id: str
    seasons: List[str]
    scenario_ids: List[str]
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]
    generator_responses: Optional[List[object]] = None
    notes: List[str] = field(default_factory=list)


def _office_wardrobe() -> List[Dict[str, object]]:
    return [
        {
            "item_id": "shirt",
            "name": "White Oxford Shirt",
            "category": "top",
            "subcategory": "shirt",
            "color": "white",
            "style": "smart casual",
            "seasons": ["ALL_SEASON"],
        },
        {
            "item_id": "jeans",
            "name": "Dark Jeans",
            "category": "bottom",
            "subcategory": "jeans",
            "color": "navy",
            "seasons": ["ALL_SEASON"],
        },
        {
            "item_id": "trousers",
            "name": "Grey Trousers",
            "category": "bottoms",
            "subcategory": "trousers",
            "color": "grey",
            "seasons": ["ALL_SEASON"],
        },
        {
            "item_id": "loafers",
            "name": "Brown Loafers",
            "category": "footwear",
            "color": "brown",
            "seasons": ["ALL_SEASON"],
        },
        {
            "item_id": "sneakers",
            "name": "White Sneakers",
            "category": "shoes",
            "color": "white",
            "seasons": ["ALL_SEASON"],
        },
        {
            "item_id": "coat",
            "name": "Camel Wool Coat",
            "category": "outerwear",
            "subcategory": "coat",
            "color": "beige",
            "seasons": ["winter"],
        },
        # Missing a name: skipped by the store without hiding the rest.
        {"item_id": "broken", "category": "top"},
    ]


def _home_wardrobe() -> List[Dict[str, object]]:
    return [
        {
            "item_id": "sundress",
            "name": "Floral Sundress",
            "category": "dress",
            "color": "yellow",
            "seasons": ["summer"],
        },
        {
            "item_id": "tote",
            "name": "Straw Tote",
            "category": "accessory",
            "color": "beige",
            "seasons": ["summer"],
        },
    ]


GENERATED_OFFICE_TEXT = """OUTFIT 1: White Oxford Shirt [shirt] + Dark Jeans [jeans] + Brown Loafers [loafers]
Explanation: Crisp shirt with dark denim keeps it office friendly.

OUTFIT 2: White Oxford Shirt [shirt] + Grey Trousers [trousers] + White Sneakers [sneakers]
Explanation: Relaxed tailoring for a lighter day.
"""


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="layered_winter_office",
        description="Shirt styled for winter and summer; winter looks pick up the coat.",
        base_item_id="shirt",
        seasons=["winter", "summer"],
        scenario_ids=["office", "social"],
        wardrobe_items=_office_wardrobe(),
        expectations={
            "min_outfits": 8,
            "requires_outerwear_in": "winter",
            "expected_strategy": "deterministic",
            "merged_groups": 2,
        },
    ),
    EvaluationScenario(
        name="barefoot_home_dress",
        description="Dress worn at home with no footwear in the wardrobe.",
        base_item_id="sundress",
        seasons=["summer", "spring/fall"],
        scenario_ids=["home"],
        wardrobe_items=_home_wardrobe(),
        expectations={"min_outfits": 1, "allows_barefoot": True, "expected_strategy": "deterministic"},
    ),
    EvaluationScenario(
        name="generated_office_outfits",
        description="Generator answers in the expected format with item ids.",
        base_item_id="shirt",
        seasons=["summer"],
        scenario_ids=["office"],
        wardrobe_items=_office_wardrobe(),
        generator_responses=[GENERATED_OFFICE_TEXT],
        expectations={"min_outfits": 2, "expected_strategy": "ai-assisted"},
    ),
    EvaluationScenario(
        name="generator_timeout_fallback",
        description="Generator times out; deterministic outfits are served instead.",
        base_item_id="shirt",
        seasons=["summer"],
        scenario_ids=["office"],
        wardrobe_items=_office_wardrobe(),
        generator_responses=[GenerationTimeoutError("generation timed out")],
        expectations={"min_outfits": 4, "expected_strategy": "deterministic"},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS", "GENERATED_OFFICE_TEXT"]
