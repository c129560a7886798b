"""Persistence of finished quiz results."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Protocol, Sequence

from .errors import RecordingError
from .models import TestResult
from .utils import append_jsonl, read_jsonl

logger = logging.getLogger(__name__)


class ResultRecorder(Protocol):
    def record_test_result(self, result: TestResult) -> None:
        ...

    def list_test_results(self) -> list[TestResult]:
        ...


class MemoryResultRecorder:
    def __init__(self) -> None:
        self.results: list[TestResult] = []

    def record_test_result(self, result: TestResult) -> None:
        self.results.append(result)

    def list_test_results(self) -> list[TestResult]:
        return list(self.results)


class JsonlResultRecorder:
    """Append each result as one JSON line to ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def record_test_result(self, result: TestResult) -> None:
        try:
            append_jsonl(self.path, result.to_dict())
        except OSError as exc:
            raise RecordingError(
                f"Unable to write result to {self.path}: {exc}"
            ) from exc

    def list_test_results(self) -> list[TestResult]:
        if not self.path.exists():
            return []
        try:
            rows = read_jsonl(self.path)
        except (OSError, json.JSONDecodeError) as exc:
            raise RecordingError(
                f"Unable to read results from {self.path}: {exc}"
            ) from exc
        results: list[TestResult] = []
        for row in rows:
            try:
                results.append(TestResult.from_dict(row))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed result row: %r", row)
        return results


def record_session_result(
    recorder: ResultRecorder,
    result: TestResult,
    *,
    log: logging.Logger | None = None,
) -> bool:
    """Hand ``result`` to ``recorder``; report failure instead of raising.

    The in-memory score stays valid whatever happens here, so a failed write
    is logged and signalled through the return value only.
    """

    log = log or logger
    try:
        recorder.record_test_result(result)
    except (RecordingError, OSError) as exc:
        log.warning(
            "Failed to record quiz result: %s",
            exc,
            extra={"mode": result.mode, "score": result.score},
        )
        return False
    log.info(
        "Recorded quiz result",
        extra={"mode": result.mode, "score": result.score},
    )
    return True


def aggregate_results(
    results: Sequence[TestResult],
) -> Dict[str, Dict[str, float]]:
    """Per-mode session count, answer totals and average score."""

    per_mode: Dict[str, List[TestResult]] = defaultdict(list)
    for result in results:
        per_mode[result.mode.value].append(result)
    summary: Dict[str, Dict[str, float]] = {}
    for mode, items in per_mode.items():
        correct = sum(item.correct_answers for item in items)
        asked = sum(item.total_questions for item in items)
        summary[mode] = {
            "sessions": len(items),
            "correct": correct,
            "asked": asked,
            "average_score": sum(item.score for item in items) / len(items),
        }
    return summary
