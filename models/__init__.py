"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.outfit import DisplayGroup, Outfit, OutfitItem, ScenarioGroup, outfit_signature
from models.scenario import Scenario, ScenarioCombination
from models.wardrobe_item import WardrobeItem, from_raw_metadata

__all__ = [
    "WardrobeItem",
    "from_raw_metadata",
    "Scenario",
    "ScenarioCombination",
    "Outfit",
    "OutfitItem",
    "ScenarioGroup",
    "DisplayGroup",
    "outfit_signature",
]
