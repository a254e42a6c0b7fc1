"""Scenario and season x scenario combination schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Scenario:
    """An occasion the user dresses for, e.g. ``Office Work``."""

    name: str
    scenario_id: Optional[str] = None
    frequency: Optional[str] = None


def combination_label(season: str, scenario: str) -> str:
    return f"{season} + {scenario}"


@dataclass(frozen=True)
class ScenarioCombination:
    """One season x scenario pair annotated with outfit completeness."""

    season: str
    scenario: str
    is_complete: bool
    missing_categories: List[str] = field(default_factory=list)
    available_categories: List[str] = field(default_factory=list)
    required_categories: List[str] = field(default_factory=list)
    scenario_id: Optional[str] = None

    @property
    def label(self) -> str:
        return combination_label(self.season, self.scenario)


__all__ = ["Scenario", "ScenarioCombination", "combination_label"]
