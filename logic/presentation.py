"""Display grouping of distributed outfits, most versatile combination first."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from models.outfit import DisplayGroup, ScenarioGroup

logger = logging.getLogger(__name__)


def group_outfits_by_versatility(groups: Iterable[ScenarioGroup]) -> List[DisplayGroup]:
    """Flatten groups into display rows ordered by outfit count, descending.

    Groups sharing a label are folded into one row; ties keep input order.
    """

    rows: Dict[str, DisplayGroup] = {}
    for group in groups:
        existing = rows.get(group.label)
        signatures = list(existing.outfit_signatures) if existing else []
        signatures.extend(group.signatures)
        rows[group.label] = DisplayGroup(
            label=group.label,
            season=group.season,
            scenario=group.scenario,
            outfit_signatures=signatures,
        )
    return sorted(rows.values(), key=lambda row: row.outfit_count, reverse=True)


def describe_groups(display_groups: Iterable[DisplayGroup]) -> List[str]:
    lines: List[str] = []
    for index, group in enumerate(display_groups, start=1):
        noun = "outfit" if group.outfit_count == 1 else "outfits"
        line = f"{index}) {group.label.upper()}: {group.outfit_count} {noun}"
        logger.info(line)
        lines.append(line)
    return lines


__all__ = ["group_outfits_by_versatility", "describe_groups"]
