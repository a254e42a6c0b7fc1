"""Wardrobe read repository abstractions and an in-memory implementation."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from logic.validation import WardrobeItemPayload
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)


class WardrobeStore:
    """Read interface for wardrobe items injected into the suggestion app."""

    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        raise NotImplementedError

    def list_items_for_user(self, user_id: str) -> List[WardrobeItem]:
        raise NotImplementedError


def parse_item_record(record: Dict[str, Any], user_id: str | None = None) -> Optional[WardrobeItem]:
    """Validate a raw record; invalid records are logged and return ``None``."""

    payload = dict(record)
    if user_id and not payload.get("user_id"):
        payload["user_id"] = user_id
    try:
        return WardrobeItemPayload.model_validate(payload).to_item()
    except (ValidationError, ValueError) as exc:
        logger.warning(
            "Skipping invalid wardrobe record %s: %s",
            record.get("item_id", record.get("id")),
            exc,
        )
        return None


class InMemoryWardrobeStore(WardrobeStore):
    """Dictionary-backed store holding raw records per user.

    Records are validated on read so one malformed entry never hides the rest
    of the wardrobe.
    """

    def __init__(self, records_by_user: Dict[str, Iterable[Dict[str, Any]]] | None = None) -> None:
        self._records: Dict[str, List[Dict[str, Any]]] = {
            user_id: [dict(record) for record in records]
            for user_id, records in (records_by_user or {}).items()
        }

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryWardrobeStore":
        """Load ``{"user_id": [record, ...]}`` from a JSON file."""

        data = json.loads(Path(path).read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Wardrobe file {path} must contain an object keyed by user id")
        return cls(data)

    def list_items_for_user(self, user_id: str) -> List[WardrobeItem]:
        items: List[WardrobeItem] = []
        for record in self._records.get(user_id, []):
            item = parse_item_record(record, user_id)
            if item is not None:
                items.append(item)
        return items

    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        for record in self._records.get(user_id, []):
            if str(record.get("item_id", record.get("id"))) == str(item_id):
                return parse_item_record(record, user_id)
        return None


__all__ = ["WardrobeStore", "InMemoryWardrobeStore", "parse_item_record"]
