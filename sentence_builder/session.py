"""Session state consumed by the presentation layer.

A :class:`SentenceBuilder` owns one catalog and one selection. The
presentation layer forwards user gestures to the mutation methods and then
re-reads ``filtered``, ``items`` and ``summary``; derived views are
recomputed on every read, so they always reflect the last mutation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from . import storage
from .aggregator import summarize
from .catalog import Catalog
from .models import Entry, Summary
from .selection import Selection

logger = logging.getLogger(__name__)

EMPTY_PLACEHOLDER = "—"


def _join_or_placeholder(words: Iterable[str]) -> str:
    return ", ".join(words) or EMPTY_PLACEHOLDER


def detail_card(entry: Entry) -> Dict[str, Any]:
    """Return the data shown on the detail card for ``entry``."""
    softer = _join_or_placeholder(entry.alternatives.softer)
    stronger = _join_or_placeholder(entry.alternatives.stronger)
    return {
        "word": entry.word,
        "pos": entry.part_of_speech,
        "denotation": entry.denotation,
        "connotation": list(entry.connotation),
        "formality": entry.formality,
        "intensity": entry.intensity,
        "alternatives": {
            "softer": list(entry.alternatives.softer),
            "stronger": list(entry.alternatives.stronger),
        },
        "alternatives_line": f"Softer: {softer} • Stronger: {stronger}",
    }


class SentenceBuilder:
    """Catalog, selection and load status of one UI session."""

    def __init__(self, entries: Iterable[Entry] | None = None) -> None:
        self.catalog = Catalog(entries)
        self.selection = Selection()
        self.error: Optional[str] = None

    # --- loading -----------------------------------------------------------

    def set_entries(self, entries: Iterable[Entry]) -> None:
        self.catalog.set_entries(entries)

    def load(self, source: str | Path, timeout: float | None = None) -> bool:
        """Populate the catalog from ``source``.

        A failed load leaves the catalog as it was (empty on startup) and
        records a human-readable message in :attr:`error`. There is no retry.
        """
        try:
            entries = storage.load_dictionary(source, timeout=timeout)
        except storage.DictionaryLoadError as exc:
            logger.error("Dictionary could not be loaded from %s: %s", source, exc)
            self.error = f"Error: {exc}"
            return False
        self.set_entries(entries)
        self.error = None
        return True

    # --- read accessors ----------------------------------------------------

    @property
    def query(self) -> str:
        return self.catalog.query

    @property
    def total(self) -> int:
        return len(self.catalog)

    @property
    def filtered(self) -> List[Entry]:
        return self.catalog.filtered

    @property
    def items(self) -> List[Entry]:
        return self.selection.items

    @property
    def summary(self) -> Summary:
        return summarize(self.selection.items)

    # --- mutations ---------------------------------------------------------

    def set_query(self, text: str) -> Summary:
        self.catalog.set_query(text)
        return self.summary

    def pick(self, entry: Entry) -> Summary:
        self.selection.append(entry)
        return self.summary

    def pick_filtered(self, index: int) -> Summary:
        """Pick the entry shown at ``index`` of the filtered list.

        Raises:
            IndexError: if ``index`` does not address a visible word.
        """
        filtered = self.filtered
        if not 0 <= index < len(filtered):
            raise IndexError(f"no word at position {index}")
        return self.pick(filtered[index])

    def remove_at(self, index: int) -> Summary:
        self.selection.remove_at(index)
        return self.summary

    def clear_selection(self) -> Summary:
        self.selection.clear()
        return self.summary

    # --- views -------------------------------------------------------------

    def status_line(self) -> str:
        if self.error:
            return self.error
        return f"{len(self.filtered)} word(s) shown • {self.total} total"

    def word_list(self) -> List[Dict[str, Any]]:
        return [
            {
                "word": entry.word,
                "title": f"{entry.word} • {entry.part_of_speech or 'word'}",
                "selected": self.selection.contains(entry),
            }
            for entry in self.filtered
        ]

    def detail_cards(self) -> List[Dict[str, Any]]:
        return [detail_card(entry) for entry in self.selection.items]

    def snapshot(self) -> Dict[str, Any]:
        summary = self.summary
        return {
            "query": self.query,
            "status": self.status_line(),
            "error": self.error,
            "total": self.total,
            "words": self.word_list(),
            "sentence": list(summary.sentence),
            "details": self.detail_cards(),
            "summary": summary.to_dict(),
        }
