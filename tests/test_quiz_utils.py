from __future__ import annotations

from vokabel_trainer.quiz.utils import (
    answers_match,
    append_jsonl,
    capitalize_first,
    normalize_answer,
    read_jsonl,
    write_jsonl,
)


def test_normalize_answer_trims_and_lowercases():
    assert normalize_answer("  Der Hund ") == "der hund"
    assert normalize_answer(None) == ""
    # decomposed "ü" compares equal to the composed form
    assert normalize_answer("Bu\u0308cher") == normalize_answer("B\u00fccher")


def test_answers_match_ignores_case_and_outer_whitespace():
    assert answers_match(" der ", "Der")
    assert answers_match("ZU HAUSE", "Zu Hause")
    assert not answers_match("zu  Hause", "Zu Hause")
    assert not answers_match("", "Der")


def test_capitalize_first_leaves_rest_alone():
    assert capitalize_first("zu Hause") == "Zu Hause"
    assert capitalize_first("über") == "Über"
    assert capitalize_first("") == ""


def test_jsonl_helpers(tmp_path):
    path = tmp_path / "nested" / "rows.jsonl"

    write_jsonl(path, [{"german": "Bücher"}])
    append_jsonl(path, {"german": "Äpfel"})
    path.write_text(path.read_text("utf-8") + "\n\n", encoding="utf-8")

    assert read_jsonl(path) == [{"german": "Bücher"}, {"german": "Äpfel"}]
    assert "Bücher" in path.read_text("utf-8")
