"""Catalog of dictionary entries with a search-filtered view."""

from __future__ import annotations

import unicodedata
from typing import Iterable, List, Tuple

from .models import Entry
from .normalizer import normalize_term


def _fold_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(word: str) -> Tuple[str, str, str]:
    """Return a sort key approximating locale-aware word ordering.

    Accents and case are ignored first, so ``"Éclair"`` sorts next to
    ``"eclair"``; the later components make the order total.
    """
    folded = word.casefold()
    return (_fold_accents(folded), folded, word)


class Catalog:
    """Full entry set plus the entries matching the current query.

    ``filtered`` is recomputed eagerly on every change and is always sorted
    by :func:`collation_key`. Entries with equal words keep their relative
    order.
    """

    def __init__(self, entries: Iterable[Entry] | None = None) -> None:
        self._entries: List[Entry] = list(entries or [])
        self._query = ""
        self._filtered: List[Entry] = []
        self._refresh()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[Entry]:
        return list(self._entries)

    @property
    def query(self) -> str:
        return self._query

    @property
    def filtered(self) -> List[Entry]:
        return list(self._filtered)

    def set_entries(self, entries: Iterable[Entry]) -> None:
        """Replace the entry set, keeping the current query."""
        self._entries = list(entries)
        self._refresh()

    def set_query(self, query: str) -> None:
        self._query = normalize_term(query)
        self._refresh()

    def _refresh(self) -> None:
        query = self._query
        if query:
            matches = [e for e in self._entries if query in normalize_term(e.word)]
        else:
            matches = list(self._entries)
        self._filtered = sorted(matches, key=lambda e: collation_key(e.word))
