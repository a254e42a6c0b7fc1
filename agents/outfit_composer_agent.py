"""Outfit composer agent: AI-assisted composition with a deterministic fallback."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from agents.outfit_prompt import build_outfit_prompt
from agents.outfit_response_parser import UnparseableResponseError, parse_outfit_response
from logic.essentials import filter_for_combination
from logic.outfit_builder import DEFAULT_MAX_OUTFITS, build_outfit_recommendations, group_by_category
from logic.safety import system_instruction
from models.outfit import Outfit
from models.wardrobe_item import WardrobeItem
from stylist_app.logging_config import get_logger, log_event
from tools.text_generation import TextGenerationError, TextGenerator

logger = get_logger(__name__)

STRATEGY_AI = "ai-assisted"
STRATEGY_DETERMINISTIC = "deterministic"


class AIOutfitComposer:
    """Composes outfits by prompting a text generator and reconciling its answer.

    ``compose`` returns ``None`` when the generator is unavailable: a
    failed generation call of any kind, an unparseable response, or no valid
    outfit at all.
    There is no retry; the caller decides how to fall back.
    """

    def __init__(self, generator: TextGenerator, max_outfits: int = DEFAULT_MAX_OUTFITS) -> None:
        self.generator = generator
        self.max_outfits = max_outfits
        self.system_instruction = system_instruction(
            "outfit stylist. Build complete outfits from the listed items and answer in the fixed format only."
        )

    def compose(
        self,
        base_item: WardrobeItem,
        items_by_category: Dict[str, List[WardrobeItem]],
        season: str,
        scenario: Optional[str],
    ) -> Optional[List[Outfit]]:
        prompt = build_outfit_prompt(base_item, items_by_category, season, scenario, self.max_outfits)
        try:
            text = self.generator.generate(prompt, system_instruction=self.system_instruction)
            outfits = parse_outfit_response(text, base_item, items_by_category, scenario)
        except (TextGenerationError, UnparseableResponseError) as exc:
            self._log_unavailable(season, scenario, exc)
            return None
        except Exception as exc:  # noqa: BLE001
            self._log_unavailable(season, scenario, exc, exc_info=True)
            return None

        if not outfits:
            log_event(logger, logging.WARNING, "outfit_generation_empty", season=season, scenario=scenario)
            return None
        return outfits[: self.max_outfits]

    def _log_unavailable(
        self, season: str, scenario: Optional[str], exc: Exception, exc_info: bool = False
    ) -> None:
        log_event(
            logger,
            logging.WARNING,
            "outfit_generation_unavailable",
            season=season,
            scenario=scenario,
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=exc_info,
        )


@dataclass(frozen=True)
class CompositionResult:
    outfits: List[Outfit] = field(default_factory=list)
    strategy: str = STRATEGY_DETERMINISTIC


class OutfitComposer:
    """Composes outfits for one season + scenario combination.

    Candidates are narrowed to the combination's season and scenario first.
    The AI-assisted strategy runs when a generator is configured; the
    deterministic builder covers every other case.
    """

    def __init__(self, generator: Optional[TextGenerator] = None, max_outfits: int = DEFAULT_MAX_OUTFITS) -> None:
        self.max_outfits = max_outfits
        self.ai_composer = AIOutfitComposer(generator, max_outfits) if generator is not None else None

    def candidates_for(
        self,
        base_item: WardrobeItem,
        items_by_category: Dict[str, List[WardrobeItem]],
        season: str,
        scenario_id: Optional[str] = None,
    ) -> Dict[str, List[WardrobeItem]]:
        pool = [item for items in items_by_category.values() for item in items or []]
        kept = filter_for_combination(pool, season, scenario_id)
        return group_by_category({"": kept}, skip_ids=[base_item.item_id])

    def compose(
        self,
        base_item: WardrobeItem,
        items_by_category: Dict[str, List[WardrobeItem]],
        season: str,
        scenario: Optional[str],
        scenario_id: Optional[str] = None,
    ) -> CompositionResult:
        candidates = self.candidates_for(base_item, items_by_category, season, scenario_id)

        if self.ai_composer is not None:
            outfits = self.ai_composer.compose(base_item, candidates, season, scenario)
            if outfits is not None:
                log_event(
                    logger,
                    logging.INFO,
                    "outfits_composed",
                    strategy=STRATEGY_AI,
                    season=season,
                    scenario=scenario,
                    outfit_count=len(outfits),
                )
                return CompositionResult(outfits=outfits, strategy=STRATEGY_AI)
            logger.info("Falling back to deterministic outfits for %s + %s", season, scenario)

        outfits = build_outfit_recommendations(base_item, candidates, season, scenario, self.max_outfits)
        log_event(
            logger,
            logging.INFO,
            "outfits_composed",
            strategy=STRATEGY_DETERMINISTIC,
            season=season,
            scenario=scenario,
            outfit_count=len(outfits),
        )
        return CompositionResult(outfits=outfits, strategy=STRATEGY_DETERMINISTIC)


__all__ = [
    "AIOutfitComposer",
    "OutfitComposer",
    "CompositionResult",
    "STRATEGY_AI",
    "STRATEGY_DETERMINISTIC",
]
