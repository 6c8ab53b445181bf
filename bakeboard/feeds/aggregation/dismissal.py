"""Dismissed card filtering.

The dashboard lets the user hide feed cards. Dismissed ids are kept per
category by a storage collaborator; the feeds only read them once per
request and drop the matching items.
"""

import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=BaseModel)


class DismissedStore(Protocol):
    """Read access to dismissed ids per category."""

    async def dismissed_ids(self, category: str) -> set[str]:
        """Return the dismissed ids of a category."""
        ...


def filter_dismissed(items: Iterable[ItemT], dismissed: set[str]) -> list[ItemT]:
    """Drop items whose id (compared as a string) is dismissed.

    Order is preserved and the operation is idempotent.

    Args:
        items: Ordered feed items carrying an `id`.
        dismissed: Dismissed ids.

    Returns:
        Remaining items.
    """
    if not dismissed:
        return list(items)
    return [item for item in items if str(item.id) not in dismissed]  # type: ignore[attr-defined]


async def apply_dismissals(
    items: list[ItemT],
    category: str,
    store: DismissedStore,
) -> list[ItemT]:
    """Filter a feed with the store's dismissed ids (one store call)."""
    dismissed = await store.dismissed_ids(category)
    remaining = filter_dismissed(items, dismissed)
    if len(remaining) != len(items):
        logger.debug(f"Dismissed {len(items) - len(remaining)} {category} items")
    return remaining


# =============================================================================
# JSON FILE STORE
# =============================================================================


class JsonDismissedStore:
    """Dismissed ids persisted in a JSON file ({category: [ids]}).

    Attributes:
        path: JSON file location.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = asyncio.Lock()

    def _load(self) -> dict[str, list[str]]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Dismissed cards file unreadable: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): [str(i) for i in v] for k, v in data.items() if isinstance(v, list)}

    def _save(self, data: dict[str, list[str]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    async def dismissed_ids(self, category: str) -> set[str]:
        """Return the dismissed ids of a category."""
        return set(self._load().get(category, []))

    async def dismiss(self, category: str, item_id: str | int) -> bool:
        """Mark an item as dismissed.

        Returns:
            True if newly dismissed, False if it already was.
        """
        async with self._lock:
            data = self._load()
            ids = data.setdefault(category, [])
            if str(item_id) in ids:
                return False
            ids.append(str(item_id))
            self._save(data)
            return True

    async def restore(self, category: str, item_id: str | int) -> bool:
        """Undo a dismissal.

        Returns:
            True if the item was dismissed, False otherwise.
        """
        async with self._lock:
            data = self._load()
            ids = data.get(category, [])
            if str(item_id) not in ids:
                return False
            ids.remove(str(item_id))
            self._save(data)
            return True
