"""
Pytest configuration: ensure project root is on sys.path for imports.

Tests import the local ``sentence_builder`` package as well as the
root-level ``server`` and ``runtime_config`` modules. When running tests
from certain IDEs or subdirectories, the repository root might not be on
the Python module search path. This hook prepends the repo root so imports
work consistently.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest


def _add_repo_root_to_sys_path() -> None:
    # tests/ -> repo root
    root = Path(__file__).resolve().parents[1]
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


_add_repo_root_to_sys_path()

HAPPY = {
    "word": "happy",
    "pos": "adjective",
    "connotation": ["positive", "casual"],
    "formality": 2,
    "intensity": 5,
    "alternatives": {"softer": ["content"], "stronger": ["ecstatic"]},
}
ECSTATIC = {
    "word": "ecstatic",
    "pos": "adjective",
    "connotation": ["positive", "intense"],
    "formality": 3,
    "intensity": 9,
}


@pytest.fixture
def raw_records():
    return [dict(HAPPY), dict(ECSTATIC)]


@pytest.fixture
def dictionary_file(tmp_path, raw_records):
    path = tmp_path / "dictionary.json"
    path.write_text(json.dumps(raw_records), encoding="utf-8")
    return path
