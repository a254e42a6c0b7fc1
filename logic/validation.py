"""Pydantic schemas and helpers for validating raw item payloads and responses."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from models.wardrobe_item import WardrobeItem


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


class WardrobeItemPayload(BaseModel):
    """Input contract for a raw wardrobe record entering the pipeline."""

    item_id: str = Field(min_length=1, validation_alias=AliasChoices("item_id", "id"))
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    subcategory: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    style: Optional[str] = None
    seasons: List[str] = Field(default_factory=list, validation_alias=AliasChoices("seasons", "season"))
    details: Optional[str] = None
    scenario_ids: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("scenario_ids", "scenarios")
    )
    user_id: Optional[str] = None

    @field_validator("item_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("name", "category")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("seasons", "scenario_ids", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> List[str]:
        return [str(tag) for tag in _as_list(value)]

    def to_item(self) -> WardrobeItem:
        return WardrobeItem(**self.model_dump())


class SuggestionRequest(BaseModel):
    """Request envelope for one outfit suggestion run."""

    user_id: str = Field(min_length=1)
    item_id: str = Field(min_length=1)
    scenario_ids: Optional[List[str]] = None
    seasons: Optional[List[str]] = None


class OutfitItemPayload(BaseModel):
    item_id: str
    name: str
    category: str
    role: Literal["base-item", "complementing", "layering", "outerwear"]


class OutfitPayload(BaseModel):
    type: str
    signature: str
    explanation: Optional[str] = None
    items: List[OutfitItemPayload] = Field(min_length=2)


class ScenarioGroupPayload(BaseModel):
    combination: str
    season: str
    scenario: str
    source_combinations: List[str] = []
    outfits: List[OutfitPayload]


class DisplayGroupPayload(BaseModel):
    combination: str
    season: str
    scenario: str
    outfits: List[str]
    outfit_count: int = Field(ge=0)


class SuggestionResponse(BaseModel):
    """Structure returned by :class:`stylist_app.app.OutfitSuggestionApp`."""

    status: Literal["ok", "not_found", "needs_review"]
    request: SuggestionRequest
    base_item: Optional[Dict[str, Any]] = None
    groups: List[ScenarioGroupPayload] = []
    display_groups: List[DisplayGroupPayload] = []
    incomplete_combinations: List[str] = []
    strategies: Dict[str, str] = {}
    user_facing_summary: Optional[str] = None


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_url=False)).model_dump()


__all__ = [
    "WardrobeItemPayload",
    "SuggestionRequest",
    "OutfitItemPayload",
    "OutfitPayload",
    "ScenarioGroupPayload",
    "DisplayGroupPayload",
    "SuggestionResponse",
    "ValidationResult",
    "validation_failure",
]
