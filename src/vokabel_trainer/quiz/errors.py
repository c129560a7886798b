"""Exception types raised by the quiz package."""

from __future__ import annotations

__all__ = [
    "QuizError",
    "SessionStateError",
    "RecordingError",
    "RepositoryError",
    "QuizConfigError",
]


class QuizError(RuntimeError):
    """Base class for quiz failures."""


class SessionStateError(QuizError):
    """Raised when a session operation is not valid in the current state."""


class RecordingError(QuizError):
    """Raised when a finished session result cannot be stored."""


class RepositoryError(QuizError):
    """Raised when words or favorite lists cannot be loaded."""


class QuizConfigError(QuizError):
    """Raised when configuration parsing or validation fails."""
