"""Ordered pick list forming the sentence."""

from __future__ import annotations

import logging
from typing import List, Optional

from .models import Entry

logger = logging.getLogger(__name__)


class Selection:
    """Ordered, duplicate-permitting list of picked entries.

    The same :class:`Entry` may appear several times. The selection holds
    data only; summaries are derived on demand by the aggregator.
    """

    def __init__(self) -> None:
        self._items: List[Entry] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> List[Entry]:
        return list(self._items)

    def append(self, entry: Entry) -> None:
        self._items.append(entry)

    def remove_at(self, index: int) -> Optional[Entry]:
        """Remove and return the entry at ``index``.

        Out-of-range indices (including negative ones) are ignored and
        return ``None``; they occur when the UI acts on a stale rendering.
        """
        if not 0 <= index < len(self._items):
            logger.debug("Ignoring removal at stale index %s (size %d)", index, len(self._items))
            return None
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def contains(self, entry: Entry) -> bool:
        """Return ``True`` if this exact entry object has been picked."""
        return any(item is entry for item in self._items)
