"""Centralised system instruction and guardrails passed to the text generator."""

from __future__ import annotations

from typing import List

GUARDRAIL_BULLETS: List[str] = [
    "Only use wardrobe items listed in the prompt; never invent garments.",
    "Include the base item in every outfit exactly once.",
    "Echo each item's [id] tag after its name so it can be matched back.",
    "Never combine two outer layers or two bottoms in one outfit.",
    "Answer strictly in the requested OUTFIT / Explanation format without extra commentary.",
]


def system_instruction(role_hint: str) -> str:
    """Compose a consistent system prompt with boundary reminders."""

    boundary_text = "\n".join(f"- {bullet}" for bullet in GUARDRAIL_BULLETS)
    return (
        f"You are the wardrobe {role_hint}.\n"
        "Follow these guardrails before responding:\n"
        f"{boundary_text}\n"
        "If no complete outfit can be built from the listed items, answer with no outfits."
    )


__all__ = ["system_instruction", "GUARDRAIL_BULLETS"]
