"""Cross-combination outfit deduplication, merging and exclusive distribution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from models.outfit import Outfit, ScenarioGroup
from models.scenario import combination_label

logger = logging.getLogger(__name__)

DEFAULT_MAX_PER_GROUP = 10


@dataclass
class CombinationOutfits:
    """Outfits composed for one season x scenario combination."""

    season: str
    scenario: str
    outfits: List[Outfit] = field(default_factory=list)
    strategy: str | None = None

    @property
    def label(self) -> str:
        return combination_label(self.season, self.scenario)

    @property
    def signatures(self) -> set[str]:
        return {outfit.signature for outfit in self.outfits}


@dataclass
class CanonicalOutfit:
    """One distinct outfit and every combination label it was generated for."""

    outfit: Outfit
    labels: List[str] = field(default_factory=list)
    assigned: bool = False


@dataclass
class MergedCombination:
    label: str
    season: str
    scenario: str
    source_labels: List[str]
    signatures: set[str]


def canonicalize_outfits(generated: Iterable[CombinationOutfits]) -> Dict[str, CanonicalOutfit]:
    """Map each signature to its first outfit instance and all labels it appears under."""

    canonical: Dict[str, CanonicalOutfit] = {}
    for combination in generated:
        for outfit in combination.outfits:
            entry = canonical.get(outfit.signature)
            if entry is None:
                entry = canonical[outfit.signature] = CanonicalOutfit(outfit=outfit)
            if combination.label not in entry.labels:
                entry.labels.append(combination.label)
    return canonical


def should_merge_scenarios(first: Iterable[str], second: Iterable[str]) -> bool:
    """Two combinations merge only when their signature sets are equal."""

    return set(first) == set(second)


def _joined(values: Iterable[str]) -> str:
    return "/".join(sorted(set(values)))


def merge_compatible_scenarios(generated: Sequence[CombinationOutfits]) -> List[MergedCombination]:
    """Collapse combinations with set-equal outfit signatures into one group.

    Groups keep the order in which their first combination appears. Repeated
    labels are folded together before comparison; combinations without
    outfits are left out.
    """

    by_label: Dict[str, CombinationOutfits] = {}
    for combination in generated:
        if combination.label in by_label:
            by_label[combination.label].outfits.extend(combination.outfits)
        else:
            by_label[combination.label] = CombinationOutfits(
                combination.season, combination.scenario, list(combination.outfits), combination.strategy
            )

    buckets: List[List[CombinationOutfits]] = []
    for combination in by_label.values():
        if not combination.outfits:
            continue
        for bucket in buckets:
            if should_merge_scenarios(bucket[0].signatures, combination.signatures):
                bucket.append(combination)
                break
        else:
            buckets.append([combination])

    merged: List[MergedCombination] = []
    for bucket in buckets:
        season = _joined(combination.season for combination in bucket)
        scenario = _joined(combination.scenario for combination in bucket)
        source_labels = [combination.label for combination in bucket]
        if len(bucket) > 1:
            logger.info("Merging %s into %s", source_labels, combination_label(season, scenario))
        merged.append(
            MergedCombination(
                label=combination_label(season, scenario),
                season=season,
                scenario=scenario,
                source_labels=source_labels,
                signatures=set(bucket[0].signatures),
            )
        )
    return merged


def distribute_outfits(
    generated: Sequence[CombinationOutfits], max_per_group: int = DEFAULT_MAX_PER_GROUP
) -> List[ScenarioGroup]:
    """Assign every distinct outfit to at most one group.

    Groups are processed in order. Each takes the unassigned outfits valid
    for any of its source combinations, most exclusive first (fewest valid
    combinations), up to ``max_per_group``. Groups left empty are omitted.
    This greedy pass is an approximation; it does not search for an optimal
    assignment.
    """

    if max_per_group < 1:
        raise ValueError("max_per_group must be positive")

    canonical = canonicalize_outfits(generated)
    groups: List[ScenarioGroup] = []
    for merged in merge_compatible_scenarios(generated):
        sources = set(merged.source_labels)
        candidates = [
            entry
            for entry in canonical.values()
            if not entry.assigned and sources.intersection(entry.labels)
        ]
        candidates.sort(key=lambda entry: len(entry.labels))
        chosen = candidates[:max_per_group]
        for entry in chosen:
            entry.assigned = True

        logger.debug(
            "%s: %s candidates, %s assigned", merged.label, len(candidates), len(chosen)
        )
        if not chosen:
            continue
        groups.append(
            ScenarioGroup(
                label=merged.label,
                season=merged.season,
                scenario=merged.scenario,
                outfits=[entry.outfit for entry in chosen],
                source_labels=list(merged.source_labels),
            )
        )

    logger.info(
        "Distributed %s of %s distinct outfits across %s groups",
        sum(len(group.outfits) for group in groups),
        len(canonical),
        len(groups),
    )
    return groups


__all__ = [
    "CombinationOutfits",
    "CanonicalOutfit",
    "MergedCombination",
    "canonicalize_outfits",
    "should_merge_scenarios",
    "merge_compatible_scenarios",
    "distribute_outfits",
    "DEFAULT_MAX_PER_GROUP",
]
