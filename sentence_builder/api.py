"""Flask blueprint exposing the sentence builder session.

The browser sends its gestures (search input, picking a word, removing a
chip, clearing) to these endpoints and re-renders from the returned
snapshot. The session lives in ``app.extensions["sentence_builder"]`` and
is installed by ``server.create_app``.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from .session import SentenceBuilder

EXTENSION_KEY = "sentence_builder"

bp = Blueprint("sentence_builder", __name__, url_prefix="/api/builder")


def get_session() -> SentenceBuilder:
    return current_app.extensions[EXTENSION_KEY]


def _error(message: str, status: int) -> Any:
    return jsonify({"error": message}), status


@bp.route("/", methods=["GET"])
def root() -> Any:
    """Readiness endpoint."""
    session = get_session()
    return jsonify({"status": "ok", "loaded": session.error is None and session.total > 0})


@bp.route("/state", methods=["GET"])
def state() -> Any:
    return jsonify(get_session().snapshot())


@bp.route("/words", methods=["GET"])
def words() -> Any:
    """Word list for the current query; ``POST /query`` changes it."""
    session = get_session()
    return jsonify({"status": session.status_line(), "words": session.word_list()})


@bp.route("/query", methods=["POST"])
def set_query() -> Any:
    data = request.get_json(silent=True) or {}
    query = data.get("q", "")
    if not isinstance(query, str):
        return _error("'q' must be a string", 400)
    session = get_session()
    session.set_query(query)
    return jsonify(session.snapshot())


@bp.route("/pick", methods=["POST"])
def pick() -> Any:
    data = request.get_json(silent=True) or {}
    index = data.get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        return _error("'index' must be an integer", 400)
    session = get_session()
    try:
        session.pick_filtered(index)
    except IndexError as exc:
        return _error(str(exc), 404)
    return jsonify(session.snapshot())


@bp.route("/selection/<int(signed=True):index>", methods=["DELETE"])
def remove(index: int) -> Any:
    """Remove one chip; stale indices are ignored."""
    session = get_session()
    session.remove_at(index)
    return jsonify(session.snapshot())


@bp.route("/selection", methods=["DELETE"])
def clear() -> Any:
    session = get_session()
    session.clear_selection()
    return jsonify(session.snapshot())


@bp.route("/summary", methods=["GET"])
def summary() -> Any:
    return jsonify(get_session().summary.to_dict())
