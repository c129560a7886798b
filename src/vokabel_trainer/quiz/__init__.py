from ._main import build_arg_parser
from .errors import (
    QuizConfigError,
    QuizError,
    RecordingError,
    RepositoryError,
    SessionStateError,
)
from .generator import (
    MODE_RULES,
    eligible_words,
    fisher_yates_shuffle,
    generate_question,
    is_eligible,
    sample_distractors,
)
from .models import (
    Article,
    FavoriteList,
    Question,
    QuestionType,
    SessionState,
    SessionSummary,
    TestMode,
    TestResult,
    TestSource,
    TestType,
    Word,
)
from .recorder import (
    JsonlResultRecorder,
    MemoryResultRecorder,
    record_session_result,
)
from .repository import JsonlWordRepository, MemoryWordRepository, WordFilter
from .session import QuizSession
from .sources import SourceSelection, select_source_words
from .view import QuizRunResult, run_quiz_session

__all__ = [
    "build_arg_parser",
    "QuizError",
    "QuizConfigError",
    "RecordingError",
    "RepositoryError",
    "SessionStateError",
    "MODE_RULES",
    "eligible_words",
    "fisher_yates_shuffle",
    "generate_question",
    "is_eligible",
    "sample_distractors",
    "Article",
    "FavoriteList",
    "Question",
    "QuestionType",
    "SessionState",
    "SessionSummary",
    "TestMode",
    "TestResult",
    "TestSource",
    "TestType",
    "Word",
    "JsonlResultRecorder",
    "MemoryResultRecorder",
    "record_session_result",
    "JsonlWordRepository",
    "MemoryWordRepository",
    "WordFilter",
    "QuizSession",
    "SourceSelection",
    "select_source_words",
    "QuizRunResult",
    "run_quiz_session",
]
