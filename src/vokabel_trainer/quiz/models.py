"""Vocabulary records and quiz value types."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Mapping


class _ValueEnum(str, Enum):
    @classmethod
    def from_value(cls, value: object):
        normalized = str(getattr(value, "value", value)).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise ValueError(
            f"Unknown {cls.__name__} '{value}'. Expected one of: {expected}."
        )

    def __str__(self) -> str:
        return self.value


class Article(_ValueEnum):
    DER = "der"
    DIE = "die"
    DAS = "das"


class TestMode(_ValueEnum):
    """Question category; decides the prompt and which field is the answer."""

    __test__ = False

    ARTIKEL = "artikel"
    PLURAL = "plural"
    TR_DE = "tr-de"
    DE_TR = "de-tr"
    SENTENCE = "sentence"
    WO = "wo"
    WOHIN = "wohin"
    WOHER = "woher"


class TestType(_ValueEnum):
    __test__ = False

    MULTIPLE = "multiple"
    FILL = "fill"
    MIXED = "mixed"


class QuestionType(_ValueEnum):
    MULTIPLE = "multiple"
    FILL = "fill"


class TestSource(_ValueEnum):
    __test__ = False

    WORDLIST = "wordlist"
    CATEGORY = "category"
    FAVORITES = "favorites"


class SessionState(_ValueEnum):
    EMPTY = "empty"
    READY = "ready"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# camelCase keys as written by the web frontend export.
_WORD_ALIASES = {
    "pluralSuffix": "plural_suffix",
    "isFavorite": "is_favorite",
    "exampleSentence": "example_sentence",
    "exampleTranslation": "example_translation",
}

_OPTIONAL_TEXT = (
    "plural",
    "plural_suffix",
    "wo",
    "wohin",
    "woher",
    "description",
    "notes",
    "example_sentence",
    "example_translation",
)


@dataclass(frozen=True)
class Word:
    """A single vocabulary entry."""

    id: int
    german: str
    turkish: str
    category: str
    article: Article | None = None
    plural: str | None = None
    plural_suffix: str | None = None
    is_favorite: bool = False
    wo: str | None = None
    wohin: str | None = None
    woher: str | None = None
    description: str | None = None
    notes: str | None = None
    example_sentence: str | None = None
    example_translation: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Word":
        """Build a word from a JSON record, accepting camelCase keys."""

        raw = {_WORD_ALIASES.get(key, key): value for key, value in data.items()}
        missing = [
            key
            for key in ("id", "german", "turkish", "category")
            if raw.get(key) in (None, "")
        ]
        if missing:
            raise ValueError(f"Word record missing: {', '.join(missing)}")
        try:
            word_id = int(raw["id"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Word id must be an integer: {raw['id']!r}") from exc

        article = raw.get("article")
        return cls(
            id=word_id,
            german=str(raw["german"]),
            turkish=str(raw["turkish"]),
            category=str(raw["category"]),
            article=Article.from_value(article) if article else None,
            is_favorite=bool(raw.get("is_favorite", False)),
            **{
                key: str(raw[key]) if raw.get(key) is not None else None
                for key in _OPTIONAL_TEXT
            },
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["article"] = self.article.value if self.article else None
        return data

    @property
    def article_german(self) -> str:
        """``"der Hund"`` style label; just the noun when no article is set."""

        if self.article is None:
            return self.german
        return f"{self.article.value} {self.german}"


@dataclass(frozen=True)
class FavoriteList:
    """A named, user-curated selection of word ids."""

    id: str
    name: str
    word_ids: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FavoriteList":
        if data.get("id") in (None, "") or not data.get("name"):
            raise ValueError("Favorite list record needs 'id' and 'name'.")
        raw_ids = data.get("word_ids", data.get("wordIds")) or []
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            word_ids=tuple(str(item) for item in raw_ids),
        )

    def contains(self, word_id: object) -> bool:
        return str(word_id) in self.word_ids


@dataclass(frozen=True)
class Question:
    """One generated quiz question; ``options`` is set only for multiple choice."""

    id: int
    question: str
    correct_answer: str
    type: QuestionType
    word_id: int
    options: tuple[str, ...] | None = None


@dataclass(frozen=True)
class SessionSummary:
    correct_count: int
    total_questions: int
    score: int
    answered_count: int


@dataclass(frozen=True)
class TestResult:
    """Persisted outcome of a completed quiz session."""

    __test__ = False

    mode: TestMode
    test_type: TestType
    source: TestSource
    question_count: int
    correct_answers: int
    total_questions: int
    score: int
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "test_type": self.test_type.value,
            "source": self.source.value,
            "question_count": self.question_count,
            "correct_answers": self.correct_answers,
            "total_questions": self.total_questions,
            "score": self.score,
            **self.extra,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TestResult":
        known = {
            "mode",
            "test_type",
            "source",
            "question_count",
            "correct_answers",
            "total_questions",
            "score",
        }
        return cls(
            mode=TestMode.from_value(data["mode"]),
            test_type=TestType.from_value(data["test_type"]),
            source=TestSource.from_value(data["source"]),
            question_count=int(data["question_count"]),
            correct_answers=int(data["correct_answers"]),
            total_questions=int(data["total_questions"]),
            score=int(data["score"]),
            extra={k: v for k, v in data.items() if k not in known},
        )
