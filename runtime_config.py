"""Helpers to keep static and dynamic configuration apart.

The application reads ``config.ini`` as its base. Local overrides such as a
different dictionary source or port go into ``config.runtime.ini``, which
is layered on top so the commented main file stays untouched.
"""

from __future__ import annotations

import configparser
from pathlib import Path

CONFIG_MAIN_PATH = Path(__file__).resolve().parent / "config.ini"
CONFIG_RUNTIME_PATH = Path(__file__).resolve().parent / "config.runtime.ini"


def load_base_config(path: Path = CONFIG_MAIN_PATH) -> configparser.ConfigParser:
    """Load only the static base configuration."""
    cfg = configparser.ConfigParser()
    cfg.read(path, encoding="utf-8-sig")
    return cfg


def load_runtime_config(path: Path = CONFIG_RUNTIME_PATH) -> configparser.ConfigParser:
    """Load only the local runtime overrides."""
    cfg = configparser.ConfigParser()
    if path.exists():
        cfg.read(path, encoding="utf-8-sig")
    return cfg


def load_merged_config(
    main_path: Path = CONFIG_MAIN_PATH,
    runtime_path: Path = CONFIG_RUNTIME_PATH,
) -> configparser.ConfigParser:
    """Combine static and runtime configuration; runtime values win."""
    base = load_base_config(main_path)
    runtime = load_runtime_config(runtime_path)
    for section in runtime.sections():
        if not base.has_section(section):
            base.add_section(section)
        for key, value in runtime.items(section):
            base.set(section, key, value)
    return base
