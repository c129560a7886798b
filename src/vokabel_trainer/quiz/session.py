"""Quiz session controller.

:class:`QuizSession` owns one quiz run: it samples words from a pool,
generates the questions, stores the user's answers and scores them. The
console loop in :mod:`.view` only renders the session and forwards commands.

State flow::

    EMPTY --start(pool)--> READY --answer()--> IN_PROGRESS
    READY / IN_PROGRESS --finish()--> COMPLETED --restart()--> READY

``start`` leaves the session ``EMPTY`` when no word in the pool is eligible
for the mode; that is the caller's "nothing to quiz" state, not an error.
"""

from __future__ import annotations

import logging
import random
from typing import Mapping, Sequence

from .errors import SessionStateError
from .generator import eligible_words, generate_question, resolve_question_type
from .models import (
    Question,
    SessionState,
    SessionSummary,
    TestMode,
    TestResult,
    TestSource,
    TestType,
    Word,
)
from .utils import answers_match

__all__ = ["QuizSession", "score_percentage"]


def score_percentage(correct: int, total: int) -> int:
    """Percentage of ``correct`` out of ``total``, halves rounded up."""

    if total <= 0:
        raise ValueError("total must be positive")
    return (200 * correct + total) // (2 * total)


class QuizSession:
    def __init__(
        self,
        mode: TestMode | str,
        test_type: TestType | str,
        requested_count: int,
        *,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if int(requested_count) < 1:
            raise ValueError("requested_count must be at least 1")
        self.mode = TestMode.from_value(mode)
        self.test_type = TestType.from_value(test_type)
        self.requested_count = int(requested_count)
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger(__name__)

        self._pool: list[Word] = []
        self._questions: tuple[Question, ...] = ()
        self._answers: dict[int, str] = {}
        self._summary: SessionSummary | None = None
        self._state = SessionState.EMPTY

    # -- read-only views -------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def answers(self) -> Mapping[int, str]:
        return dict(self._answers)

    @property
    def summary(self) -> SessionSummary | None:
        return self._summary

    @property
    def completed(self) -> bool:
        return self._state is SessionState.COMPLETED

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    @property
    def answered_count(self) -> int:
        return sum(1 for text in self._answers.values() if text.strip())

    def answer_for(self, index: int) -> str | None:
        return self._answers.get(index)

    def is_correct(self, index: int) -> bool:
        question = self._question_at(index)
        return answers_match(self._answers.get(index, ""), question.correct_answer)

    # -- transitions -----------------------------------------------------

    def start(self, pool: Sequence[Word]) -> bool:
        """Sample and generate a fresh question set from ``pool``.

        Returns ``False`` (state stays ``EMPTY``) when no word in ``pool``
        carries the fields the mode needs.
        """

        if self._state in (SessionState.READY, SessionState.IN_PROGRESS):
            raise SessionStateError(
                "Session already running; finish it before starting again."
            )

        eligible = eligible_words(pool, self.mode)
        self._pool = list(pool)
        self._answers = {}
        self._summary = None

        if not eligible:
            self._questions = ()
            self._state = SessionState.EMPTY
            self._logger.info(
                "No eligible words for quiz",
                extra={"mode": self.mode, "pool_size": len(self._pool)},
            )
            return False

        count = min(self.requested_count, len(eligible))
        chosen = self._rng.sample(eligible, count)
        self._questions = tuple(
            generate_question(
                word,
                eligible,
                self.mode,
                resolve_question_type(self.test_type, self._rng),
                index,
                rng=self._rng,
            )
            for index, word in enumerate(chosen)
        )
        self._state = SessionState.READY
        self._logger.info(
            "Quiz session started",
            extra={
                "mode": self.mode,
                "test_type": self.test_type,
                "pool_size": len(eligible),
                "question_count": count,
            },
        )
        return True

    def answer(self, index: int, text: str) -> None:
        """Store or overwrite the answer for question ``index``."""

        if self._state is SessionState.COMPLETED:
            raise SessionStateError("Session is completed; answers are final.")
        if self._state is SessionState.EMPTY:
            raise SessionStateError("Session has no questions to answer.")
        self._question_at(index)
        self._answers[index] = "" if text is None else str(text)
        self._state = SessionState.IN_PROGRESS

    def finish(self) -> SessionSummary:
        """Score the session. Calling it again returns the same summary."""

        if self._state is SessionState.COMPLETED and self._summary is not None:
            return self._summary
        if self._state is SessionState.EMPTY or not self._questions:
            raise SessionStateError("Cannot finish a session without questions.")

        total = len(self._questions)
        correct = sum(1 for index in range(total) if self.is_correct(index))
        self._summary = SessionSummary(
            correct_count=correct,
            total_questions=total,
            score=score_percentage(correct, total),
            answered_count=self.answered_count,
        )
        self._state = SessionState.COMPLETED
        self._logger.info(
            "Quiz session finished",
            extra={
                "mode": self.mode,
                "correct": correct,
                "total": total,
                "score": self._summary.score,
            },
        )
        return self._summary

    def restart(self) -> bool:
        """Start over with a new sample from the same pool and settings."""

        if self._state is not SessionState.COMPLETED:
            raise SessionStateError("Only a completed session can be restarted.")
        return self.start(self._pool)

    def to_result(self, source: TestSource | str) -> TestResult:
        """Summary record for the result recorder."""

        if self._summary is None:
            raise SessionStateError("Session has not been finished yet.")
        return TestResult(
            mode=self.mode,
            test_type=self.test_type,
            source=TestSource.from_value(source),
            question_count=self.requested_count,
            correct_answers=self._summary.correct_count,
            total_questions=self._summary.total_questions,
            score=self._summary.score,
        )

    def _question_at(self, index: int) -> Question:
        if not 0 <= index < len(self._questions):
            raise IndexError(f"No question at index {index}")
        return self._questions[index]
