"""Outfit deduplication, merging, distribution and presentation tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.distribution import (
    CombinationOutfits,
    canonicalize_outfits,
    distribute_outfits,
    merge_compatible_scenarios,
    should_merge_scenarios,
)
from logic.presentation import describe_groups, group_outfits_by_versatility
from models.outfit import ROLE_BASE_ITEM, Outfit, OutfitItem, ScenarioGroup, outfit_signature
from models.wardrobe_item import WardrobeItem

BASE = WardrobeItem(item_id="base", name="Base Tee", category="top")


def _outfit(*names: str) -> Outfit:
    items = [OutfitItem(BASE, ROLE_BASE_ITEM)]
    for name in names:
        items.append(OutfitItem(WardrobeItem(item_id=name.lower(), name=name, category="bottom")))
    return Outfit(outfit_type="top-based", items=items)


def _outfits(prefix: str, count: int) -> List[Outfit]:
    return [_outfit(f"{prefix}{index:02d}") for index in range(count)]


def test_signature_sorts_names():
    assert outfit_signature(["Jeans", "Boots", "Base Tee"]) == "Base Tee Boots Jeans"
    assert _outfit("Jeans").signature == "Base Tee Jeans"


def test_canonicalize_keeps_first_instance_and_all_labels():
    first = _outfit("Jeans")
    copy = _outfit("Jeans")
    canonical = canonicalize_outfits(
        [CombinationOutfits("winter", "Office Work", [first]), CombinationOutfits("summer", "Office Work", [copy])]
    )

    entry = canonical["Base Tee Jeans"]
    assert entry.outfit is first
    assert entry.labels == ["winter + Office Work", "summer + Office Work"]


def test_should_merge_only_on_set_equality():
    assert should_merge_scenarios(["a", "b"], ["b", "a"])
    assert not should_merge_scenarios(["a", "b"], ["a"])
    assert not should_merge_scenarios(["a"], ["b"])


def test_set_equal_combinations_merge_into_one_group():
    shared = _outfits("Shared", 3)
    generated = [
        CombinationOutfits("winter", "Social Outings", list(shared)),
        CombinationOutfits("spring/fall", "Office Work", list(reversed(shared))),
    ]

    merged = merge_compatible_scenarios(generated)
    groups = distribute_outfits(generated)

    assert len(merged) == 1
    assert merged[0].source_labels == ["winter + Social Outings", "spring/fall + Office Work"]
    assert len(groups) == 1
    assert groups[0].label == "spring/fall/winter + Office Work/Social Outings"
    assert groups[0].season == "spring/fall/winter"
    assert groups[0].scenario == "Office Work/Social Outings"
    assert len(groups[0].outfits) == 3


def test_distribution_is_globally_exclusive_and_prefers_exclusive_outfits():
    shared = _outfit("Shared")
    winter_only = _outfit("Coat Look")
    summer_only = _outfit("Shorts Look")
    generated = [
        CombinationOutfits("winter", "Office Work", [shared, winter_only]),
        CombinationOutfits("summer", "Office Work", [shared, summer_only]),
    ]

    groups = distribute_outfits(generated, max_per_group=1)

    assert [group.signatures for group in groups] == [[winter_only.signature], [summer_only.signature]]

    groups = distribute_outfits(generated)
    all_signatures = [signature for group in groups for signature in group.signatures]
    assert len(all_signatures) == len(set(all_signatures)) == 3
    assert groups[0].signatures == [winter_only.signature, shared.signature]
    assert groups[1].signatures == [summer_only.signature]


def test_groups_respect_quota_and_empty_groups_are_omitted():
    generated = [
        CombinationOutfits("winter", "Office Work", _outfits("Look", 14)),
        CombinationOutfits("summer", "Office Work", _outfits("Look", 12)),
        CombinationOutfits("summer", "Staying at Home", []),
    ]

    groups = distribute_outfits(generated)

    assert all(len(group.outfits) <= 10 for group in groups)
    # Winter takes its two exclusive looks first, then eight shared ones.
    assert [len(group.outfits) for group in groups] == [10, 4]
    assert groups[0].signatures[:2] == ["Base Tee Look12", "Base Tee Look13"]
    assert all(group.label != "summer + Staying at Home" for group in groups)


def test_single_group_round_trip_is_unmodified():
    outfits = _outfits("Solo", 4)
    groups = distribute_outfits([CombinationOutfits("summer", "Social Outings", list(outfits))])

    assert len(groups) == 1
    assert groups[0].label == "summer + Social Outings"
    assert groups[0].outfits == outfits


def test_empty_input_distributes_nothing():
    assert distribute_outfits([]) == []
    with pytest.raises(ValueError):
        distribute_outfits([], max_per_group=0)


def test_display_groups_sorted_by_count_and_folded_by_label():
    groups = [
        ScenarioGroup("summer + Office Work", "summer", "Office Work", _outfits("A", 1)),
        ScenarioGroup("winter + Office Work", "winter", "Office Work", _outfits("B", 3)),
        ScenarioGroup("summer + Office Work", "summer", "Office Work", _outfits("C", 1)),
        ScenarioGroup("spring + Office Work", "spring", "Office Work", _outfits("D", 2)),
    ]

    display = group_outfits_by_versatility(groups)

    assert [row.label for row in display] == [
        "winter + Office Work",
        "summer + Office Work",
        "spring + Office Work",
    ]
    assert [row.outfit_count for row in display] == [3, 2, 2]
    assert describe_groups(display)[0] == "1) WINTER + OFFICE WORK: 3 outfits"
