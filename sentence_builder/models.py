"""Dataclasses representing dictionary entries and derived summaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Alternatives:
    """Softer and stronger replacements for a word."""

    softer: Tuple[str, ...] = ()
    stronger: Tuple[str, ...] = ()


@dataclass(frozen=True, eq=False)
class Entry:
    """Single normalized dictionary entry.

    Entries compare and hash by identity: two records with the same word are
    distinct entries, and the selection refers to the exact object picked.

    Attributes:
        word: Trimmed, non-empty headword.
        part_of_speech: Free-text part of speech (``pos`` in the raw data).
        denotation: Literal meaning of the word.
        connotation: Connotation tags in source order, repeats allowed.
        formality: Formality score, ``0`` when missing.
        intensity: Intensity score, ``0`` when missing.
        alternatives: Softer and stronger replacement words.
    """

    word: str
    part_of_speech: str = ""
    denotation: str = ""
    connotation: Tuple[str, ...] = ()
    formality: float = 0
    intensity: float = 0
    alternatives: Alternatives = field(default_factory=Alternatives)


@dataclass(frozen=True)
class TagCount:
    tag: str
    count: int


@dataclass(frozen=True)
class Summary:
    """Tone snapshot of the current selection.

    ``avg_formality`` and ``avg_intensity`` are ``None`` for an empty
    selection; ``top_tags`` holds at most eight tags ordered by count.
    """

    word_count: int = 0
    avg_formality: Optional[float] = None
    avg_intensity: Optional[float] = None
    top_tags: Tuple[TagCount, ...] = ()
    sentence: Tuple[str, ...] = ()

    @property
    def sentence_text(self) -> str:
        return " ".join(self.sentence)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "word_count": self.word_count,
            "top_tags": [{"tag": t.tag, "count": t.count} for t in self.top_tags],
            "sentence": list(self.sentence),
        }
        if self.word_count:
            data["avg_formality"] = self.avg_formality
            data["avg_intensity"] = self.avg_intensity
        return data
