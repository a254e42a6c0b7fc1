"""Outfit suggestion app bootstrap."""

import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError

from agents.outfit_composer_agent import OutfitComposer
from logic.combinations import describe_incomplete
from logic.compatibility import get_compatible_items
from logic.pipeline import OutfitAnalysis, analyze_item
from logic.presentation import group_outfits_by_versatility
from logic.validation import SuggestionRequest, SuggestionResponse, validation_failure
from models.scenario import Scenario
from models.taxonomy import is_season_wildcard
from models.wardrobe_item import WardrobeItem
from stylist_app.config import StylistConfig
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.scenario_catalog import InMemoryScenarioCatalog, ScenarioCatalog
from tools.text_generation import TextGenerator, build_text_generator
from tools.wardrobe_store import InMemoryWardrobeStore, WardrobeStore

LOGGER = get_logger(__name__)

DEFAULT_SEASONS = ("summer", "spring/fall", "winter")


class OutfitSuggestionApp:
    """Wires the wardrobe store, scenario catalog, generator and pipeline together."""

    def __init__(
        self,
        config: StylistConfig | None = None,
        wardrobe_store: WardrobeStore | None = None,
        scenario_catalog: ScenarioCatalog | None = None,
        generator: TextGenerator | None = None,
    ) -> None:
        self.config = config or StylistConfig.from_env()
        self.wardrobe_store = wardrobe_store or InMemoryWardrobeStore()
        self.scenario_catalog = scenario_catalog or InMemoryScenarioCatalog()
        self.generator = generator if generator is not None else build_text_generator(self.config)
        self.composer = OutfitComposer(
            generator=self.generator, max_outfits=self.config.max_outfits_per_combination
        )

    group_outfits_by_versatility = staticmethod(group_outfits_by_versatility)

    def _resolve_scenarios(self, base_item: WardrobeItem, scenario_ids: Optional[Sequence[str]]) -> List[Scenario]:
        if scenario_ids:
            return self.scenario_catalog.get_scenarios(scenario_ids)
        if base_item.scenario_ids:
            return self.scenario_catalog.get_scenarios(base_item.scenario_ids)
        return self.scenario_catalog.list_scenarios()

    @staticmethod
    def _resolve_seasons(base_item: WardrobeItem, seasons: Optional[Sequence[str]]) -> List[str]:
        if seasons:
            return list(seasons)
        specific = [tag for tag in base_item.seasons if not is_season_wildcard(tag)]
        return specific or list(DEFAULT_SEASONS)

    def analyze(
        self,
        base_item: WardrobeItem,
        wardrobe: Sequence[WardrobeItem],
        seasons: Sequence[str],
        scenarios: Sequence[Scenario],
    ) -> OutfitAnalysis:
        compatibility = get_compatible_items(base_item, wardrobe)
        log_event(
            LOGGER,
            logging.INFO,
            "compatibility_filtered",
            base_item_id=base_item.item_id,
            **compatibility.diagnostics,
        )
        return analyze_item(
            base_item,
            compatibility.items_by_category,
            seasons,
            scenarios,
            composer=self.composer,
            max_workers=self.config.max_workers,
            max_per_group=self.config.max_outfits_per_group,
        )

    def suggest_outfits(
        self,
        user_id: str,
        item_id: str,
        scenario_ids: Optional[Sequence[str]] = None,
        seasons: Optional[Sequence[str]] = None,
    ) -> dict:
        """Return distributed outfit suggestions for one wardrobe item."""

        with operation_context("app:suggest_outfits") as correlation_id:
            try:
                request = SuggestionRequest(
                    user_id=user_id,
                    item_id=item_id,
                    scenario_ids=list(scenario_ids) if scenario_ids is not None else None,
                    seasons=list(seasons) if seasons is not None else None,
                )
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "app_request_invalid",
                    method="suggest_outfits",
                    details=str(exc),
                    correlation_id=correlation_id,
                )
                return validation_failure("Invalid suggestion request", exc)

            log_event(
                LOGGER,
                logging.INFO,
                "app_call_started",
                method="suggest_outfits",
                user_id=user_id,
                item_id=item_id,
                correlation_id=correlation_id,
            )

            base_item = self.wardrobe_store.get_item(user_id, item_id)
            if base_item is None:
                log_event(LOGGER, logging.INFO, "base_item_not_found", item_id=item_id)
                return {"status": "not_found", "request": request.model_dump()}

            wardrobe = self.wardrobe_store.list_items_for_user(user_id)
            scenarios = self._resolve_scenarios(base_item, request.scenario_ids)
            season_list = self._resolve_seasons(base_item, request.seasons)
            analysis = self.analyze(base_item, wardrobe, season_list, scenarios)

            response = {
                "status": "ok",
                "request": request.model_dump(),
                "base_item": {
                    "item_id": base_item.item_id,
                    "name": base_item.name,
                    "category": base_item.category,
                },
                "groups": [group.to_dict() for group in analysis.groups],
                "display_groups": [group.to_dict() for group in analysis.display_groups],
                "incomplete_combinations": [describe_incomplete(c) for c in analysis.incomplete],
                "strategies": dict(analysis.strategies),
                "user_facing_summary": (
                    f"{analysis.outfit_count} outfits across {len(analysis.groups)} combinations "
                    f"for {base_item.name}."
                ),
            }

            try:
                SuggestionResponse.model_validate(response)
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "app_response_invalid",
                    method="suggest_outfits",
                    details=str(exc),
                    correlation_id=correlation_id,
                )
                return validation_failure("Suggestion response failed schema checks", exc)

            log_event(
                LOGGER,
                logging.INFO,
                "app_call_completed",
                method="suggest_outfits",
                correlation_id=correlation_id,
                outfit_count=analysis.outfit_count,
            )
            return response


__all__ = ["OutfitSuggestionApp", "DEFAULT_SEASONS"]
