"""Tone snapshot over the selected entries."""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

from .models import Entry, Summary, TagCount
from .normalizer import normalize_term

TOP_TAG_LIMIT = 8


def round_average(value: float) -> float:
    """Round ``value`` to one decimal place.

    Uses the built-in ``round``: half-to-even on the exact binary value, so
    ``0.25`` becomes ``0.2`` and ``0.75`` becomes ``0.8``.
    """
    return round(value, 1)


def _mean(values: Sequence[float]) -> float:
    """Return the mean of ``values``, staying finite for scores near the float limit."""
    count = len(values)
    try:
        total = math.fsum(values)
    except OverflowError:
        return math.fsum(value / count for value in values)
    return total / count


def summarize(items: Sequence[Entry]) -> Summary:
    """Return the :class:`Summary` for ``items``.

    An empty sequence yields a summary with ``word_count == 0`` and neither
    averages, tags nor sentence.
    """
    word_count = len(items)
    if word_count == 0:
        return Summary()

    # Counter keeps insertion order, so most_common() breaks ties by
    # first occurrence.
    tag_counts: Counter[str] = Counter()
    for item in items:
        for tag in item.connotation:
            tag_counts[normalize_term(tag)] += 1

    return Summary(
        word_count=word_count,
        avg_formality=round_average(_mean([item.formality for item in items])),
        avg_intensity=round_average(_mean([item.intensity for item in items])),
        top_tags=tuple(
            TagCount(tag, count) for tag, count in tag_counts.most_common(TOP_TAG_LIMIT)
        ),
        sentence=tuple(item.word for item in items),
    )
