"""Retrieval of raw dictionary records.

Dictionaries come either from a local JSON file or from an HTTP(S) URL.
File loading tolerates the encodings and stray control characters that
show up in hand-edited exports. Any failure is reported as a single
:class:`DictionaryLoadError`; a partially read dictionary is never
returned.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any, List
from urllib.parse import urlparse

import requests

from .models import Entry
from .normalizer import load_all

logger = logging.getLogger(__name__)


class DictionaryLoadError(Exception):
    """The dictionary could not be retrieved or parsed."""


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def source_name(source: str | Path) -> str:
    """Return the file name part of ``source`` for user-facing messages."""
    if is_url(source):
        name = PurePosixPath(urlparse(str(source)).path).name
        return name or str(source)
    return Path(source).name or str(source)


def _decode(raw: bytes) -> str:
    for enc in ("utf-8-sig", "utf-16"):
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    return raw.decode("utf-8", errors="replace")


def _parse_text(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        cleaned = "".join(ch for ch in text if ch >= " " or ch in "\n\t\r")
        return json.loads(cleaned)


def _read_file(path: Path) -> Any:
    if not path.is_file():
        raise DictionaryLoadError(f"Failed to load {source_name(path)}: file not found")
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise DictionaryLoadError(f"Failed to load {source_name(path)}") from exc
    text = _decode(raw)
    if not text.strip():
        raise DictionaryLoadError(f"Failed to load {source_name(path)}: file is empty")
    try:
        return _parse_text(text)
    except (ValueError, RecursionError) as exc:
        raise DictionaryLoadError(f"Failed to load {source_name(path)}: invalid JSON") from exc


def _read_url(url: str, timeout: float | None) -> Any:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as exc:
        # Covers connection errors, non-success status codes and, with
        # current requests releases, JSON decoding errors.
        raise DictionaryLoadError(f"Failed to load {source_name(url)}") from exc
    except (ValueError, RecursionError) as exc:
        raise DictionaryLoadError(f"Failed to load {source_name(url)}: invalid JSON") from exc


def fetch_records(source: str | Path, *, timeout: float | None = None) -> List[Any]:
    """Return the raw record list stored at ``source``.

    Raises:
        DictionaryLoadError: when the source is unreachable, unreadable,
            not JSON, or does not hold a JSON array.
    """
    if is_url(source):
        logger.info("Fetching dictionary from %s", source)
        data = _read_url(str(source), timeout)
    else:
        path = Path(source)
        logger.info("Reading dictionary from %s", path)
        data = _read_file(path)

    if not isinstance(data, list):
        logger.error("Unexpected dictionary format: %s", type(data).__name__)
        raise DictionaryLoadError(
            f"Failed to load {source_name(source)}: expected a list of records"
        )
    return data


def load_dictionary(source: str | Path, *, timeout: float | None = None) -> List[Entry]:
    """Return the normalized entries stored at ``source``."""
    records = fetch_records(source, timeout=timeout)
    entries = load_all(records)
    logger.info("Loaded %d dictionary entries (%d records)", len(entries), len(records))
    return entries
