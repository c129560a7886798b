from __future__ import annotations

import logging

import pytest

from vokabel_trainer.quiz.errors import RecordingError
from vokabel_trainer.quiz.models import TestMode, TestResult, TestSource, TestType
from vokabel_trainer.quiz.recorder import (
    JsonlResultRecorder,
    MemoryResultRecorder,
    aggregate_results,
    record_session_result,
)


def _result(mode=TestMode.ARTIKEL, correct=3, total=4, score=75):
    return TestResult(
        mode=mode,
        test_type=TestType.MULTIPLE,
        source=TestSource.WORDLIST,
        question_count=total,
        correct_answers=correct,
        total_questions=total,
        score=score,
    )


class _FailingRecorder:
    def record_test_result(self, result: TestResult) -> None:
        raise RecordingError("disk full")

    def list_test_results(self) -> list[TestResult]:
        return []


def test_memory_recorder_keeps_order() -> None:
    recorder = MemoryResultRecorder()
    first, second = _result(), _result(mode=TestMode.WO)

    assert record_session_result(recorder, first)
    assert record_session_result(recorder, second)

    assert recorder.list_test_results() == [first, second]


def test_jsonl_recorder_appends_rows(tmp_path) -> None:
    path = tmp_path / "data" / "results.jsonl"
    recorder = JsonlResultRecorder(path)

    recorder.record_test_result(_result())
    recorder.record_test_result(_result(mode=TestMode.PLURAL, score=50))

    results = JsonlResultRecorder(path).list_test_results()
    assert [r.mode for r in results] == [TestMode.ARTIKEL, TestMode.PLURAL]
    assert results[1].score == 50
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_jsonl_recorder_missing_file_is_empty(tmp_path) -> None:
    assert JsonlResultRecorder(tmp_path / "none.jsonl").list_test_results() == []


def test_jsonl_recorder_skips_malformed_rows(tmp_path, caplog) -> None:
    path = tmp_path / "results.jsonl"
    path.write_text(
        '{"mode": "nope"}\n'
        '{"mode": "wo", "test_type": "fill", "source": "favorites", '
        '"question_count": 2, "correct_answers": 2, "total_questions": 2, '
        '"score": 100}\n',
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING):
        results = JsonlResultRecorder(path).list_test_results()

    assert [r.mode for r in results] == [TestMode.WO]
    assert "Skipping malformed result row" in caplog.text


def test_jsonl_recorder_wraps_write_errors(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    recorder = JsonlResultRecorder(blocker / "results.jsonl")

    with pytest.raises(RecordingError, match="Unable to write"):
        recorder.record_test_result(_result())


def test_record_session_result_reports_failure(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        ok = record_session_result(_FailingRecorder(), _result())

    assert ok is False
    assert "disk full" in caplog.text


def test_aggregate_results_per_mode() -> None:
    results = [
        _result(TestMode.ARTIKEL, correct=3, total=4, score=75),
        _result(TestMode.ARTIKEL, correct=4, total=4, score=100),
        _result(TestMode.WO, correct=0, total=2, score=0),
    ]

    summary = aggregate_results(results)

    assert summary["artikel"] == {
        "sessions": 2,
        "correct": 7,
        "asked": 8,
        "average_score": 87.5,
    }
    assert summary["wo"]["sessions"] == 1
    assert aggregate_results([]) == {}
