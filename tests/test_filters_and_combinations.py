"""Compatibility, essential-category, layering and combination tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.combinations import (
    build_scenario_combinations,
    complete_combinations,
    describe_incomplete,
    incomplete_combinations,
)
from logic.compatibility import color_rule, get_compatible_items, has_season_overlap
from logic.essentials import (
    check_essential_categories,
    is_home_scenario,
    matches_season,
    required_categories_for,
)
from logic.layering import is_layering_only, is_suitable_base_layer
from logic.outfit_validation import validate_layering, validate_outfit_completeness
from models.outfit import ROLE_BASE_ITEM, Outfit, OutfitItem
from models.scenario import Scenario
from models.wardrobe_item import WardrobeItem, from_raw_metadata


def _item(item_id: str, name: str, category: str, **kwargs) -> WardrobeItem:
    return WardrobeItem(item_id=item_id, name=name, category=category, **kwargs)


def test_wardrobe_item_normalises_fields_and_rejects_missing_name():
    item = _item(" s1 ", "  Sneakers ", "Shoes", color="Off-White", style="Casual", seasons=["summer", "summer", " "])

    assert item.item_id == "s1"
    assert item.name == "Sneakers"
    assert item.category == "footwear"
    assert item.color == "white"
    assert item.style == "casual"
    assert item.seasons == ["summer"]
    assert item.subcategory is None

    with pytest.raises(ValueError):
        _item("x", "  ", "top")
    with pytest.raises(ValueError):
        from_raw_metadata({"id": "x", "name": "Shirt"})


def test_from_raw_metadata_accepts_alternate_spellings():
    item = from_raw_metadata({"id": 7, "name": "Tee", "category": "tops", "season": "summer", "scenarios": ["office"]})

    assert item.item_id == "7"
    assert item.category == "top"
    assert item.seasons == ["summer"]
    assert item.scenario_ids == ["office"]


def test_compatibility_filter_groups_sorted_items_and_records_diagnostics():
    base = _item("base", "Red Top", "top", color="red", seasons=["summer"])
    candidates = [
        base,
        _item("b2", "Skirt", "bottom", color="black", seasons=["summer"]),
        _item("b1", "Chinos", "bottom", color="purple", seasons=["ALL_SEASON"]),
        _item("w1", "Wool Pants", "bottom", seasons=["winter"]),
        _item("f1", "Sandals", "footwear", color="red"),
    ]

    result = get_compatible_items(base, candidates)

    assert [item.name for item in result.items_by_category["bottom"]] == ["Chinos", "Skirt"]
    assert result.diagnostics["candidate_count"] == 4
    assert result.diagnostics["rejected"]["season"] == 1
    assert result.diagnostics["color_rules"] == {"neutral": 1, "permissive": 1, "same": 1}
    assert result.total == 3


def test_season_overlap_and_color_rules():
    summer = _item("a", "A", "top", seasons=["summer"])
    winter = _item("b", "B", "top", seasons=["winter"], color="blue")
    untagged = _item("c", "C", "top", color="white")

    assert not has_season_overlap(summer, winter)
    assert has_season_overlap(summer, untagged)
    assert color_rule(summer, winter) == "missing"
    assert color_rule(winter, untagged) == "neutral"


def test_season_matching_uses_tokens_not_substrings():
    transitional = _item("a", "Trench", "outerwear", seasons=["spring/fall"])
    summery = _item("b", "Linen", "top", seasons=["summertime"])
    anytime = _item("c", "Tee", "top", seasons=["ALL_SEASON"])
    untagged = _item("d", "Scarf", "accessory")

    assert matches_season(transitional, "spring")
    assert matches_season(transitional, "fall")
    assert not matches_season(summery, "summer")
    assert matches_season(anytime, "winter")
    assert not matches_season(untagged, "winter")


def test_home_scenarios_drop_footwear_requirement():
    assert is_home_scenario("Staying at Home")
    assert is_home_scenario("Remote Work days")
    assert not is_home_scenario("Office Work")
    assert required_categories_for("top", "Office Work") == ["bottoms", "footwear"]
    assert required_categories_for("dress", "Lazy house day") == []
    assert required_categories_for("cape") == []


def test_essential_check_reports_missing_and_available_categories():
    candidates = [
        _item("b1", "Jeans", "bottom", seasons=["ALL_SEASON"]),
        _item("a1", "Belt", "accessory", seasons=["summer"]),
        _item("f1", "Boots", "footwear", seasons=["winter"]),
        _item("f2", "Office Pumps", "footwear", seasons=["summer"], scenario_ids=["office"]),
    ]

    summer_social = check_essential_categories("top", candidates, "summer", "Social Outings", scenario_id="social")
    summer_office = check_essential_categories("top", candidates, "summer", "Office Work", scenario_id="office")

    assert not summer_social.is_complete
    assert summer_social.missing_categories == ["footwear"]
    assert summer_social.available_categories == ["accessories", "bottoms"]
    assert summer_office.is_complete


def test_layering_rules():
    open_cardigan = _item("c1", "Cardigan", "top", subcategory="cardigan", details="Open front")
    button_cardigan = _item("c2", "Cardigan", "top", subcategory="cardigan", details="Button-front")
    negated = _item("c3", "Vest", "top", subcategory="vest", details="no zip, no buttons")
    tee = _item("t1", "Tee", "top", subcategory="t-shirt")
    hoodie = _item("h1", "Hoodie", "top", subcategory="hoodie")

    assert is_layering_only(open_cardigan)
    assert not is_layering_only(button_cardigan)
    assert is_layering_only(negated)
    assert not is_layering_only(tee)
    assert is_suitable_base_layer(tee, open_cardigan)
    assert not is_suitable_base_layer(hoodie, open_cardigan)
    assert not is_suitable_base_layer(None, open_cardigan)


def test_completeness_and_layering_validation():
    base = _item("t1", "Tee", "top", subcategory="t-shirt")
    jeans = _item("b1", "Jeans", "bottom")
    shorts = _item("b2", "Shorts", "bottom")
    boots = _item("f1", "Boots", "footwear")
    hoodie = _item("h1", "Hoodie", "top", subcategory="hoodie")
    blazer = _item("z1", "Blazer", "top", subcategory="blazer")

    def outfit(*items: WardrobeItem) -> Outfit:
        return Outfit("test", [OutfitItem(base, ROLE_BASE_ITEM)] + [OutfitItem(item) for item in items])

    assert validate_outfit_completeness(outfit(jeans, boots), "top", "Office Work").is_valid
    assert not validate_outfit_completeness(outfit(jeans), "top", "Office Work").is_valid
    assert validate_outfit_completeness(outfit(jeans), "top", "Staying at Home").is_valid
    assert "multiple bottoms" in validate_outfit_completeness(outfit(jeans, shorts, boots), "top", "Office Work").reason
    assert not validate_outfit_completeness(outfit(), "top", "Staying at Home").is_valid
    assert "double outer layers" in validate_layering(outfit(hoodie, blazer, jeans, boots)).reason


def test_combinations_are_annotated_and_sorted_by_season_priority():
    base = _item("t1", "Tee", "top", seasons=["ALL_SEASON"])
    pool = {
        "bottom": [_item("b1", "Jeans", "bottom", seasons=["ALL_SEASON"])],
        "footwear": [_item("f1", "Sandals", "footwear", seasons=["summer"]), _item("f2", "Boots", "footwear", seasons=["winter"])],
    }

    combinations = build_scenario_combinations(
        base, ["summer", "spring/fall", "winter"], [Scenario("Office Work", "office"), "Staying at Home"], pool
    )

    assert len(combinations) == 6
    assert [c.label for c in combinations[:2]] == ["summer + Office Work", "summer + Staying at Home"]
    complete = complete_combinations(combinations)
    assert [c.label for c in complete] == [
        "winter + Office Work",
        "winter + Staying at Home",
        "spring/fall + Staying at Home",
        "summer + Office Work",
        "summer + Staying at Home",
    ]
    incomplete = incomplete_combinations(combinations)
    assert [c.label for c in incomplete] == ["spring/fall + Office Work"]
    assert describe_incomplete(incomplete[0]) == "SPRING/FALL + OFFICE WORK - don't have footwear to combine with"


def test_empty_inputs_build_no_combinations():
    base = _item("t1", "Tee", "top")

    assert build_scenario_combinations(base, [], ["Office Work"], {}) == []
    assert build_scenario_combinations(base, ["summer"], [], {}) == []
