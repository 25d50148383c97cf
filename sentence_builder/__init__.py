"""In-memory engine behind the sentence builder: dictionary, search and tone snapshot."""

# Package exports should be side-effect free.

from . import (
    models,
    normalizer,
    catalog,
    selection,
    aggregator,
    storage,
    session,
)

__all__ = [
    "models",
    "normalizer",
    "catalog",
    "selection",
    "aggregator",
    "storage",
    "session",
]
