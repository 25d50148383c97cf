import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

if __package__ in {None, ""}:
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
    __package__ = "sentence_builder"

from . import storage
from .catalog import Catalog
from .normalizer import normalize_term
from .session import SentenceBuilder


def _load(source: str):
    try:
        return storage.load_dictionary(source)
    except storage.DictionaryLoadError as e:
        raise SystemExit(f"Error: {e}")


def validate(args: argparse.Namespace) -> None:
    """Check that a dictionary can be loaded."""

    entries = _load(args.source)
    print(f"Dictionary '{args.source}' OK ({len(entries)} entries)")


def stats(args: argparse.Namespace) -> None:
    """Show statistics about a dictionary."""

    entries = _load(args.source)
    words = {entry.word for entry in entries}
    tags = {normalize_term(tag) for entry in entries for tag in entry.connotation}

    print(f"Entries: {len(entries)}")
    print(f"Distinct words: {len(words)}")
    print(f"Distinct tags: {len(tags)}")


def search(args: argparse.Namespace) -> None:
    """Print the words matching a query in catalog order."""

    catalog = Catalog(_load(args.source))
    catalog.set_query(args.query)
    for entry in catalog.filtered:
        print(entry.word)


def summarize(args: argparse.Namespace) -> None:
    """Pick words by name and print the tone snapshot."""

    session = SentenceBuilder(_load(args.source))
    by_word = {}
    for entry in session.catalog.entries:
        by_word.setdefault(entry.word, entry)

    for word in args.words:
        entry = by_word.get(word)
        if entry is None:
            print(f"unknown word: {word}", file=sys.stderr)
            continue
        session.pick(entry)

    summary = session.summary
    if args.json:
        print(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))
        return

    print(f"Overall tone snapshot: {summary.word_count} word(s)")
    if summary.word_count:
        print(f"Avg formality: {summary.avg_formality:.1f} • Avg intensity: {summary.avg_intensity:.1f}")
        if summary.top_tags:
            print("Tags: " + ", ".join(f"{t.tag} ({t.count})" for t in summary.top_tags))
    print(f"Sentence: {summary.sentence_text}")


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Sentence builder dictionary utility")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("validate", help="check that a dictionary loads")
    p.add_argument("source", help="dictionary file or URL")
    p.set_defaults(func=validate)

    p = sub.add_parser("stats", help="show statistics")
    p.add_argument("source", help="dictionary file or URL")
    p.set_defaults(func=stats)

    p = sub.add_parser("search", help="list words matching a query")
    p.add_argument("source", help="dictionary file or URL")
    p.add_argument("query")
    p.set_defaults(func=search)

    p = sub.add_parser("summarize", help="summarize the tone of picked words")
    p.add_argument("source", help="dictionary file or URL")
    p.add_argument("words", nargs="*", help="words to pick, in sentence order")
    p.add_argument("--json", action="store_true", help="print the summary as JSON")
    p.set_defaults(func=summarize)

    parser.add_argument("-v", "--verbose", action="count", default=0, help="increase verbosity")
    parser.add_argument("--log-file", type=Path, default=None, help="write logs to this file")

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if args.log_file:
        handlers.append(logging.FileHandler(args.log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", handlers=handlers)

    args.func(args)


if __name__ == "__main__":
    main()
