"""Question generation for the eight quiz modes.

Every mode is described by a :class:`ModeRule` in :data:`MODE_RULES`: how to
phrase the prompt, which word field is the answer, which peer field supplies
distractors and which words are eligible at all. Prompts are Turkish, answers
German (except ``de-tr``).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Sequence, TypeVar

from .models import Question, QuestionType, TestMode, TestType, Word
from .utils import capitalize_first, normalize_answer

T = TypeVar("T")

MAX_DISTRACTORS = 3
ARTICLE_OPTIONS = ("Der", "Die", "Das")


def _filled(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def _cap(value: str | None) -> str | None:
    filled = _filled(value)
    return capitalize_first(filled) if filled is not None else None


def _german_with_article(word: Word) -> str:
    german = capitalize_first(word.german)
    if word.article is None:
        return german
    return f"{capitalize_first(word.article.value)} {german}"


def _locative_prompt(label: str, hint: str) -> Callable[[Word], str]:
    def prompt(word: Word) -> str:
        return (
            f'"{word.article_german}" için {label}? ({hint}?) cevabı nedir?'
        )

    return prompt


def _field(name: str) -> Callable[[Word], str | None]:
    def getter(word: Word) -> str | None:
        return _cap(getattr(word, name))

    return getter


def _has(*names: str) -> Callable[[Word], bool]:
    def check(word: Word) -> bool:
        return all(_filled(getattr(word, name)) for name in names)

    return check


@dataclass(frozen=True)
class ModeRule:
    """How one :class:`TestMode` turns a word into a question.

    ``answer`` and ``distractor`` return display-ready strings (first letter
    capitalized) or ``None`` when the word lacks the field. When
    ``fixed_options`` is set the distractors come from it instead of peers.
    """

    prompt: Callable[[Word], str]
    answer: Callable[[Word], str | None]
    distractor: Callable[[Word], str | None]
    requires: Callable[[Word], bool]
    fixed_options: tuple[str, ...] = ()


MODE_RULES: Mapping[TestMode, ModeRule] = MappingProxyType(
    {
        TestMode.ARTIKEL: ModeRule(
            prompt=lambda w: f'"{w.german}" kelimesinin artikeli nedir?',
            answer=lambda w: _cap(w.article.value) if w.article else None,
            distractor=lambda w: _cap(w.article.value) if w.article else None,
            requires=lambda w: w.article is not None,
            fixed_options=ARTICLE_OPTIONS,
        ),
        TestMode.PLURAL: ModeRule(
            prompt=lambda w: f'"{w.article_german}" kelimesinin çoğulu nedir?',
            answer=_field("plural"),
            distractor=_field("plural"),
            requires=_has("plural"),
        ),
        TestMode.TR_DE: ModeRule(
            prompt=lambda w: f'"{w.turkish}" kelimesinin Almancası nedir?',
            answer=_german_with_article,
            distractor=_german_with_article,
            requires=_has("german"),
        ),
        TestMode.DE_TR: ModeRule(
            prompt=lambda w: f'"{w.article_german}" kelimesinin Türkçesi nedir?',
            answer=_field("turkish"),
            distractor=_field("turkish"),
            requires=_has("turkish"),
        ),
        TestMode.SENTENCE: ModeRule(
            prompt=lambda w: (
                "Bu cümleyi Almancaya çevirin: "
                f'"{_filled(w.example_translation) or w.turkish}"'
            ),
            answer=lambda w: _cap(w.example_sentence) or _cap(w.german),
            distractor=_field("example_sentence"),
            requires=_has("example_sentence", "example_translation"),
        ),
        TestMode.WO: ModeRule(
            prompt=_locative_prompt("WO", "Nerede"),
            answer=_field("wo"),
            distractor=_field("wo"),
            requires=_has("wo"),
        ),
        TestMode.WOHIN: ModeRule(
            prompt=_locative_prompt("WOHIN", "Nereye"),
            answer=_field("wohin"),
            distractor=_field("wohin"),
            requires=_has("wohin"),
        ),
        TestMode.WOHER: ModeRule(
            prompt=_locative_prompt("WOHER", "Nereden"),
            answer=_field("woher"),
            distractor=_field("woher"),
            requires=_has("woher"),
        ),
    }
)


def is_eligible(word: Word, mode: TestMode) -> bool:
    """Whether ``word`` has the fields ``mode`` needs for its answer."""

    return MODE_RULES[mode].requires(word)


def eligible_words(pool: Iterable[Word], mode: TestMode) -> list[Word]:
    rule = MODE_RULES[mode]
    return [word for word in pool if rule.requires(word)]


def fisher_yates_shuffle(
    items: Iterable[T], rng: random.Random | None = None
) -> list[T]:
    """Return a uniformly shuffled copy of ``items``."""

    rng = rng or random.Random()
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def resolve_question_type(
    test_type: TestType, rng: random.Random | None = None
) -> QuestionType:
    if test_type is TestType.MULTIPLE:
        return QuestionType.MULTIPLE
    if test_type is TestType.FILL:
        return QuestionType.FILL
    rng = rng or random.Random()
    return QuestionType.MULTIPLE if rng.random() < 0.5 else QuestionType.FILL


def sample_distractors(
    word: Word,
    peers: Sequence[Word],
    mode: TestMode,
    *,
    correct_answer: str,
    rng: random.Random | None = None,
    limit: int = MAX_DISTRACTORS,
) -> list[str]:
    """Pick up to ``limit`` distinct wrong answers for ``word``.

    Candidates equal to the correct answer (after trimming and lowercasing),
    blanks and repeats are dropped before sampling, so the result may be
    shorter than ``limit``.
    """

    rule = MODE_RULES[mode]
    if rule.fixed_options:
        candidates: Iterable[str | None] = rule.fixed_options
    else:
        candidates = (
            rule.distractor(peer) for peer in peers if peer.id != word.id
        )

    seen = {normalize_answer(correct_answer)}
    unique: list[str] = []
    for candidate in candidates:
        key = normalize_answer(candidate)
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(candidate)  # type: ignore[arg-type]

    if len(unique) <= limit:
        return unique
    rng = rng or random.Random()
    return rng.sample(unique, limit)


def generate_question(
    word: Word,
    peers: Sequence[Word],
    mode: TestMode,
    question_type: QuestionType,
    index: int,
    *,
    rng: random.Random | None = None,
) -> Question:
    """Build the question for ``word``; ``peers`` supply distractors."""

    rule = MODE_RULES[mode]
    correct = rule.answer(word) or ""

    options: tuple[str, ...] | None = None
    if question_type is QuestionType.MULTIPLE:
        distractors = sample_distractors(
            word, peers, mode, correct_answer=correct, rng=rng
        )
        options = tuple(fisher_yates_shuffle([*distractors, correct], rng))

    return Question(
        id=index,
        question=rule.prompt(word),
        correct_answer=correct,
        type=question_type,
        word_id=word.id,
        options=options,
    )
