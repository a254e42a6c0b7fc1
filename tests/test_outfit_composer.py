"""AI-assisted composer and deterministic fallback tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

sys.path.append(str(Path(__file__).resolve().parents[1]))

from agents.outfit_composer_agent import (
    STRATEGY_AI,
    STRATEGY_DETERMINISTIC,
    AIOutfitComposer,
    OutfitComposer,
)
from models.wardrobe_item import WardrobeItem
from tools.text_generation import (
    GenerationResponseError,
    GenerationTimeoutError,
    StaticTextGenerator,
    TextGenerator,
)


def _item(item_id: str, name: str, category: str, **kwargs) -> WardrobeItem:
    kwargs.setdefault("seasons", ["ALL_SEASON"])
    return WardrobeItem(item_id=item_id, name=name, category=category, **kwargs)


BASE = _item("t1", "White Tee", "top")
JEANS = _item("b1", "Blue Jeans", "bottom")
BOOTS = _item("f1", "Black Boots", "footwear")
SANDALS = _item("f2", "Leather Sandals", "footwear", seasons=["summer"])
OFFICE_ONLY_LOAFERS = _item("f3", "Brown Loafers", "footwear", scenario_ids=["office"])
POOL = {"bottoms": [JEANS], "footwear": [BOOTS, SANDALS, OFFICE_ONLY_LOAFERS]}

VALID_TEXT = "OUTFIT 1: White Tee [t1] + Blue Jeans [b1] + Black Boots [f1]\nExplanation: Classic."


class RecordingGenerator(TextGenerator):
    def __init__(self, text: str) -> None:
        self.text = text
        self.calls: List[tuple[str, Optional[str]]] = []

    def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        self.calls.append((prompt, system_instruction))
        return self.text


def test_ai_composer_returns_parsed_outfits():
    generator = RecordingGenerator(VALID_TEXT)
    outfits = AIOutfitComposer(generator).compose(BASE, POOL, "winter", "Office Work")

    assert outfits is not None
    assert len(outfits) == 1
    prompt, system = generator.calls[0]
    assert "Blue Jeans [b1]" in prompt
    assert system and "wardrobe outfit stylist" in system


def test_ai_composer_reports_unavailable_on_generation_errors():
    for failure in (GenerationTimeoutError("slow"), GenerationResponseError("status 500")):
        composer = AIOutfitComposer(StaticTextGenerator(failure))
        assert composer.compose(BASE, POOL, "winter", "Office Work") is None


def test_ai_composer_reports_unavailable_on_unparseable_or_empty_results():
    assert AIOutfitComposer(StaticTextGenerator("No idea, sorry.")).compose(BASE, POOL, "winter", "Office Work") is None
    # Parses, but the only outfit lacks footwear.
    no_shoes = "OUTFIT 1: White Tee + Blue Jeans"
    assert AIOutfitComposer(StaticTextGenerator(no_shoes)).compose(BASE, POOL, "winter", "Office Work") is None


def test_composer_without_generator_is_deterministic():
    result = OutfitComposer().compose(BASE, POOL, "winter", "Office Work", scenario_id="office")

    assert result.strategy == STRATEGY_DETERMINISTIC
    assert [outfit.outfit_type for outfit in result.outfits] == ["top-based", "top-based"]


def test_composer_filters_candidates_by_season_and_scenario():
    composer = OutfitComposer()

    winter_social = composer.compose(BASE, POOL, "winter", "Social Outings", scenario_id="social")
    summer_office = composer.compose(BASE, POOL, "summer", "Office Work", scenario_id="office")

    winter_shoes = {entry.name for outfit in winter_social.outfits for entry in outfit.items if entry.category == "footwear"}
    summer_shoes = {entry.name for outfit in summer_office.outfits for entry in outfit.items if entry.category == "footwear"}
    assert winter_shoes == {"Black Boots"}
    assert summer_shoes == {"Black Boots", "Leather Sandals", "Brown Loafers"}


def test_composer_prefers_ai_and_falls_back_when_unavailable():
    ai_result = OutfitComposer(RecordingGenerator(VALID_TEXT)).compose(BASE, POOL, "winter", "Office Work")
    fallback = OutfitComposer(StaticTextGenerator(GenerationTimeoutError("slow"))).compose(
        BASE, POOL, "winter", "Office Work"
    )

    assert ai_result.strategy == STRATEGY_AI
    assert ai_result.outfits[0].outfit_type == "ai-generated-1"
    assert fallback.strategy == STRATEGY_DETERMINISTIC
    assert fallback.outfits


class SocketResetGenerator(TextGenerator):
    def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        raise ConnectionError("socket reset")


def test_ai_composer_reports_unavailable_on_unexpected_transport_errors(caplog):
    with caplog.at_level("WARNING"):
        outfits = AIOutfitComposer(SocketResetGenerator()).compose(BASE, POOL, "winter", "Office Work")

    assert outfits is None
    records = [record for record in caplog.records if record.getMessage() == "outfit_generation_unavailable"]
    assert records and records[0].error_type == "ConnectionError"


def test_composer_falls_back_when_generator_raises_unexpected_errors():
    result = OutfitComposer(SocketResetGenerator()).compose(BASE, POOL, "winter", "Office Work", scenario_id="office")

    assert result.strategy == STRATEGY_DETERMINISTIC
    assert [outfit.outfit_type for outfit in result.outfits] == ["top-based", "top-based"]
