import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from sentence_builder.storage import (
    DictionaryLoadError,
    fetch_records,
    load_dictionary,
    source_name,
)


def test_load_file(dictionary_file):
    entries = load_dictionary(dictionary_file)
    assert [e.word for e in entries] == ["happy", "ecstatic"]


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(DictionaryLoadError, match="Failed to load missing.json"):
        load_dictionary(tmp_path / "missing.json")


def test_load_invalid_json_raises(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(DictionaryLoadError):
        load_dictionary(path)


def test_load_empty_file_raises(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text("  ", encoding="utf-8")
    with pytest.raises(DictionaryLoadError):
        load_dictionary(path)


def test_non_list_payload_raises(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text(json.dumps({"word": "happy"}), encoding="utf-8")
    with pytest.raises(DictionaryLoadError, match="expected a list"):
        fetch_records(path)


def test_load_utf16_file(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text(json.dumps([{"word": "schön"}], ensure_ascii=False), encoding="utf-16")
    assert [e.word for e in load_dictionary(path)] == ["schön"]


def test_load_utf8_bom(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_bytes(b"\xef\xbb\xbf" + json.dumps([{"word": "calm"}]).encode("utf-8"))
    assert [e.word for e in load_dictionary(path)] == ["calm"]


def test_load_with_control_chars(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_bytes(b'[{"word": "calm"}]\x00')
    assert [e.word for e in load_dictionary(path)] == ["calm"]


def test_load_drops_blank_words(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text(json.dumps([{"word": "  "}, {"word": "calm"}]), encoding="utf-8")
    assert [e.word for e in load_dictionary(path)] == ["calm"]


def _response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def test_load_url(raw_records):
    url = "https://example.org/data/dictionary.json"
    with patch("sentence_builder.storage.requests.get", return_value=_response(raw_records)) as get:
        entries = load_dictionary(url, timeout=5)
    get.assert_called_once_with(url, timeout=5)
    assert [e.word for e in entries] == ["happy", "ecstatic"]


def test_load_url_http_error():
    error = requests.exceptions.HTTPError("404 Client Error")
    with patch("sentence_builder.storage.requests.get", return_value=_response(status_error=error)):
        with pytest.raises(DictionaryLoadError, match="Failed to load dictionary.json"):
            load_dictionary("http://example.org/dictionary.json")


def test_load_url_connection_error():
    with patch(
        "sentence_builder.storage.requests.get",
        side_effect=requests.exceptions.ConnectionError("refused"),
    ):
        with pytest.raises(DictionaryLoadError) as excinfo:
            load_dictionary("http://example.org/dictionary.json")
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)


def test_load_url_invalid_json():
    with patch(
        "sentence_builder.storage.requests.get",
        return_value=_response(json_error=ValueError("Expecting value")),
    ):
        with pytest.raises(DictionaryLoadError, match="invalid JSON"):
            load_dictionary("http://example.org/dictionary.json")


def test_source_name():
    assert source_name("https://example.org/a/words.json?x=1") == "words.json"
    assert source_name("https://example.org") == "https://example.org"


def test_load_huge_integer_score(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text('[{"word": "x", "intensity": 1' + "0" * 400 + "}]", encoding="utf-8")
    (entry,) = load_dictionary(path)
    assert entry.intensity == 0


def test_load_deeply_nested_json_raises(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text("[" * 200000, encoding="utf-8")
    with pytest.raises(DictionaryLoadError, match="invalid JSON"):
        load_dictionary(path)


def test_load_url_deeply_nested_json():
    with patch(
        "sentence_builder.storage.requests.get",
        return_value=_response(json_error=RecursionError("maximum recursion depth exceeded")),
    ):
        with pytest.raises(DictionaryLoadError, match="invalid JSON"):
            load_dictionary("http://example.org/dictionary.json")
