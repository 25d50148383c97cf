import pytest

from sentence_builder.normalizer import load_all
from sentence_builder.session import SentenceBuilder, detail_card


@pytest.fixture
def session(raw_records):
    return SentenceBuilder(load_all(raw_records))


def test_accessors_reflect_mutations(session):
    assert [e.word for e in session.filtered] == ["ecstatic", "happy"]
    ecstatic, happy = session.filtered
    session.pick(happy)
    summary = session.pick(ecstatic)
    assert summary.sentence == ("happy", "ecstatic")
    assert session.summary == summary
    assert [e.word for e in session.items] == ["happy", "ecstatic"]

    summary = session.remove_at(0)
    assert summary.sentence == ("ecstatic",)
    summary = session.clear_selection()
    assert summary.word_count == 0
    assert session.items == []


def test_set_query_updates_filtered(session):
    session.set_query("HA")
    assert [e.word for e in session.filtered] == ["happy"]
    assert session.query == "ha"


def test_pick_filtered(session):
    session.set_query("ha")
    session.pick_filtered(0)
    assert [e.word for e in session.items] == ["happy"]
    with pytest.raises(IndexError):
        session.pick_filtered(1)
    with pytest.raises(IndexError):
        session.pick_filtered(-1)


def test_stale_remove_is_ignored(session):
    session.pick_filtered(0)
    summary = session.remove_at(5)
    assert summary.word_count == 1


def test_status_line(session):
    assert session.status_line() == "2 word(s) shown • 2 total"
    session.set_query("ecs")
    assert session.status_line() == "1 word(s) shown • 2 total"


def test_word_list_marks_selected(session):
    session.pick_filtered(1)
    words = session.word_list()
    assert words == [
        {"word": "ecstatic", "title": "ecstatic • adjective", "selected": False},
        {"word": "happy", "title": "happy • adjective", "selected": True},
    ]


def test_word_list_title_without_pos():
    session = SentenceBuilder(load_all([{"word": "hm"}]))
    assert session.word_list()[0]["title"] == "hm • word"


def test_detail_cards_follow_selection(session):
    ecstatic, happy = session.filtered
    session.pick(happy)
    session.pick(happy)
    cards = session.detail_cards()
    assert [c["word"] for c in cards] == ["happy", "happy"]
    assert cards[0]["alternatives_line"] == "Softer: content • Stronger: ecstatic"
    assert detail_card(ecstatic)["alternatives_line"] == "Softer: — • Stronger: —"
    assert detail_card(ecstatic)["connotation"] == ["positive", "intense"]


def test_load_success(dictionary_file):
    session = SentenceBuilder()
    assert session.load(dictionary_file) is True
    assert session.error is None
    assert session.total == 2


def test_load_failure_sets_error(tmp_path):
    session = SentenceBuilder()
    assert session.load(tmp_path / "dictionary.json") is False
    assert session.total == 0
    assert session.filtered == []
    assert session.error.startswith("Error: Failed to load dictionary.json")
    assert session.status_line() == session.error


def test_load_success_clears_previous_error(tmp_path, dictionary_file):
    session = SentenceBuilder()
    session.load(tmp_path / "missing.json")
    assert session.error
    session.load(dictionary_file)
    assert session.error is None


def test_snapshot(session):
    session.pick_filtered(1)
    snap = session.snapshot()
    assert snap["query"] == ""
    assert snap["total"] == 2
    assert snap["sentence"] == ["happy"]
    assert snap["summary"]["word_count"] == 1
    assert snap["summary"]["avg_intensity"] == 5.0
    assert len(snap["details"]) == 1


def test_load_deeply_nested_json_sets_error(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text("[" * 200000, encoding="utf-8")
    session = SentenceBuilder()
    assert session.load(path) is False
    assert session.total == 0
    assert session.error.startswith("Error: Failed to load dictionary.json")


def test_load_huge_integer_score_succeeds(tmp_path):
    path = tmp_path / "dictionary.json"
    path.write_text('[{"word": "x", "formality": 1' + "0" * 400 + "}]", encoding="utf-8")
    session = SentenceBuilder()
    assert session.load(path) is True
    assert session.filtered[0].formality == 0
