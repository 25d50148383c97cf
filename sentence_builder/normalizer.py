"""Helpers to coerce raw dictionary records into canonical entries."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Mapping, Tuple

from .models import Alternatives, Entry

logger = logging.getLogger(__name__)

SCORE_DEFAULT = 0


def normalize_term(term: Any) -> str:
    """Return a standardized representation of ``term`` for matching."""

    if not isinstance(term, str):
        return ""

    # Lowercase and strip whitespace.  Words, queries and connotation tags all
    # go through here so that searching and tag counting agree.
    return term.lower().strip()


def coerce_text(value: Any) -> str:
    """Return ``value`` as text; falsy values become the empty string."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def coerce_score(value: Any, default: float = SCORE_DEFAULT) -> float:
    """Return ``value`` if it is a finite number, otherwise ``default``.

    Booleans and numeric strings are not numbers here.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints beyond float range behave like an infinite score
        return default
    if not finite:
        return default
    return value


def coerce_strings(value: Any) -> Tuple[str, ...]:
    """Return a tuple of strings for list-shaped ``value``, else ``()``."""
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple("" if item is None else str(item) for item in value)


def _coerce_alternatives(value: Any) -> Alternatives:
    if not isinstance(value, Mapping):
        return Alternatives()
    return Alternatives(
        softer=coerce_strings(value.get("softer")),
        stronger=coerce_strings(value.get("stronger")),
    )


def normalize_entry(raw: Any) -> Entry:
    """Return the canonical :class:`Entry` for ``raw``.

    Never raises: anything that is not a mapping is treated as an empty
    record, and every field falls back to a safe default. The result may
    have an empty ``word``; :func:`load_all` drops those.
    """
    record: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    return Entry(
        word=coerce_text(record.get("word")).strip(),
        part_of_speech=coerce_text(record.get("pos")),
        denotation=coerce_text(record.get("denotation")),
        connotation=coerce_strings(record.get("connotation")),
        formality=coerce_score(record.get("formality")),
        intensity=coerce_score(record.get("intensity")),
        alternatives=_coerce_alternatives(record.get("alternatives")),
    )


def load_all(raw_list: Iterable[Any] | None) -> List[Entry]:
    """Normalize every record and drop entries without a word.

    Input order is preserved; sorting is left to the catalog.
    """
    if not isinstance(raw_list, (list, tuple)):
        return []
    entries = [normalize_entry(raw) for raw in raw_list]
    kept = [entry for entry in entries if entry.word]
    dropped = len(entries) - len(kept)
    if dropped:
        logger.debug("Dropped %d dictionary record(s) without a word", dropped)
    return kept
