"""Flask application hosting the sentence builder.

The server loads the dictionary once at startup, keeps a single
``SentenceBuilder`` session and exposes it through the blueprint in
``sentence_builder.api``. Configuration comes from ``config.ini`` (plus
``config.runtime.ini`` and ``.env``); logging is set up here for the whole
process. A dictionary that fails to load does not stop the server: the
session reports the error and serves an empty catalog.
"""

from __future__ import annotations

import configparser
import logging
import os
import shutil
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_compress import Compress

from runtime_config import load_merged_config
from sentence_builder.api import EXTENSION_KEY, bp as builder_bp
from sentence_builder.session import SentenceBuilder

BASE_DIR = Path(__file__).resolve().parent
DICTIONARY_ENV = "SENTENCE_BUILDER_DICTIONARY"
DEFAULT_DICTIONARY = "dictionary.json"

logger = logging.getLogger(__name__)


class SafeEncodingStreamHandler(logging.StreamHandler):
    """Console handler that escapes characters the stream cannot encode."""

    def emit(self, record):
        try:
            msg = self.format(record) + self.terminator
            encoding = getattr(self.stream, "encoding", None) or "utf-8"
            self.stream.write(msg.encode(encoding, errors="backslashreplace").decode(encoding))
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


class SafeRotatingFileHandler(RotatingFileHandler):
    """Rotating handler that copies and truncates when the log file is locked.

    Renaming fails on Windows while a sync client or virus scanner holds the
    file open.
    """

    def rotate(self, source: str, dest: str) -> None:
        try:
            super().rotate(source, dest)
        except PermissionError:
            self._copy_and_truncate(source, dest)

    def _copy_and_truncate(self, source: str, dest: str) -> None:
        src = Path(source)
        try:
            if src.exists():
                shutil.copyfile(src, dest)
            src.write_text("", encoding=self.encoding or "utf-8")
        except OSError:
            # Keep logging without rotation rather than failing every emit
            return


def _level(name: str, default: int) -> int:
    return logging._nameToLevel.get(name.strip().upper(), default)


def configure_logging(config: configparser.ConfigParser) -> None:
    """Install console and optional file handlers on the root logger."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        try:
            handler.close()
        except OSError:
            pass

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    console_level = _level(config.get('LOGGING', 'console_level', fallback='INFO'), logging.INFO)
    safe_handler = SafeEncodingStreamHandler(sys.stdout)
    safe_handler.setFormatter(formatter)
    safe_handler.setLevel(console_level)
    root_logger.addHandler(safe_handler)
    root_logger.setLevel(console_level)

    try:
        file_enabled = config.getint('LOGGING', 'file_enabled', fallback=0) == 1
    except ValueError:
        file_enabled = False
    file_path = config.get('LOGGING', 'file_path', fallback='')
    if not (file_enabled and file_path):
        return

    try:
        max_bytes = max(0, config.getint('LOGGING', 'file_max_bytes', fallback=1048576))
    except ValueError:
        max_bytes = 1048576
    try:
        backup_count = max(0, config.getint('LOGGING', 'file_backup_count', fallback=5))
    except ValueError:
        backup_count = 5
    file_level = _level(config.get('LOGGING', 'file_level', fallback=''), console_level)

    log_path = Path(file_path)
    if not log_path.is_absolute():
        log_path = BASE_DIR / log_path
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = SafeRotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8',
            delay=True,
        )
    except OSError as exc:
        logger.warning("File logging could not be initialised: %s", exc)
        return
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    # The root logger must let through what the file handler wants to see
    root_logger.setLevel(min(console_level, file_level))


def resolve_dictionary_source(config: configparser.ConfigParser) -> str:
    """Return the dictionary URL or absolute file path to load."""
    source = os.getenv(DICTIONARY_ENV) or config.get('DICTIONARY', 'source', fallback=DEFAULT_DICTIONARY)
    source = source.strip() or DEFAULT_DICTIONARY
    if source.lower().startswith(("http://", "https://")):
        return source
    path = Path(source)
    if not path.is_absolute():
        path = BASE_DIR / path
    return str(path)


def resolve_timeout(config: configparser.ConfigParser) -> Optional[float]:
    raw = config.get('DICTIONARY', 'timeout', fallback='').strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid dictionary timeout %r", raw)
        return None


def create_app(
    config: Optional[configparser.ConfigParser] = None,
    session: Optional[SentenceBuilder] = None,
) -> Flask:
    """Create the Flask app with one loaded session.

    Passing ``session`` skips loading, which tests use to provide their own
    entries.
    """
    load_dotenv()
    if config is None:
        config = load_merged_config()
    configure_logging(config)

    app = Flask(__name__)
    # Keep umlauts and the bullet in status lines readable in JSON output
    app.json.ensure_ascii = False

    if session is None:
        session = SentenceBuilder()
        source = resolve_dictionary_source(config)
        logger.info("Initial dictionary load from %s …", source)
        if session.load(source, timeout=resolve_timeout(config)):
            logger.info("✓ %d dictionary entries available", session.total)
        else:
            logger.warning("Starting with an empty catalog: %s", session.error)

    app.extensions[EXTENSION_KEY] = session
    app.register_blueprint(builder_bp)
    Compress(app)

    @app.after_request
    def _ensure_utf8_charset(response):
        """Make text responses declare UTF-8 explicitly."""
        content_type = response.headers.get("Content-Type")
        if content_type:
            lowered = content_type.lower()
            needs_charset = "charset=" not in lowered and (
                lowered.startswith("text/")
                or lowered.startswith("application/json")
            )
            if needs_charset:
                response.headers["Content-Type"] = f"{content_type}; charset=utf-8"
        return response

    return app


if __name__ == "__main__":
    _config = load_merged_config()
    app = create_app(_config)
    app.run(
        host=_config.get('SERVER', 'host', fallback='127.0.0.1'),
        port=_config.getint('SERVER', 'port', fallback=8000),
    )
