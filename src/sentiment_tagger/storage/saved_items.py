"""JSON-file bookmark store for saved items (posts, results), keyed by id."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from sentiment_tagger.config import storage_config

logger = logging.getLogger(__name__)


class SavedItemStore:
    """Persist bookmarked items, newest first.

    Each item is a JSON object with an ``id`` key. The whole list is
    rewritten on every change.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else storage_config.saved_items_path
        self._items: list[dict[str, Any]] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Error loading saved items from %s: %s", self._path, exc)
            return []
        if not isinstance(data, list):
            logger.error("Ignoring saved items file %s: expected a JSON array", self._path)
            return []
        return [item for item in data if isinstance(item, dict) and "id" in item]

    def _persist(self, items: list[dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        self._items = items

    def items(self) -> list[dict[str, Any]]:
        return list(self._items)

    def is_saved(self, item_id: str) -> bool:
        return any(item["id"] == item_id for item in self._items)

    def save(self, item: dict[str, Any]) -> bool:
        """Prepend *item*; returns False if an item with its id is already saved."""
        if "id" not in item:
            raise ValueError("saved items need an 'id'")
        if self.is_saved(item["id"]):
            return False
        self._persist([item, *self._items])
        return True

    def unsave(self, item_id: str) -> None:
        self._persist([item for item in self._items if item["id"] != item_id])

    def toggle(self, item: dict[str, Any]) -> bool:
        """Flip the saved state of *item*; returns True if it is now saved."""
        if self.is_saved(item["id"]):
            self.unsave(item["id"])
            return False
        self.save(item)
        return True
