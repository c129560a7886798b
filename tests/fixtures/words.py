"""Word builders shared by the quiz tests."""

from __future__ import annotations

from typing import Any, Iterable

from vokabel_trainer.quiz.models import Article, FavoriteList, Word
from vokabel_trainer.quiz.repository import MemoryWordRepository

_NOUNS = (
    ("der", "Tisch", "Tische", "masa", "Home"),
    ("die", "Lampe", "Lampen", "lamba", "Home"),
    ("das", "Buch", "Bücher", "kitap", "School"),
    ("der", "Stuhl", "Stühle", "sandalye", "Home"),
    ("die", "Schule", "Schulen", "okul", "School"),
    ("das", "Fenster", "Fenster", "pencere", "Home"),
    ("der", "Apfel", "Äpfel", "elma", "Food"),
    ("die", "Milch", "Milch", "süt", "Food"),
)


def make_word(word_id: int = 1, **overrides: Any) -> Word:
    """Return a fully populated word; ``overrides`` replace single fields."""

    article, german, plural, turkish, category = _NOUNS[
        (word_id - 1) % len(_NOUNS)
    ]
    fields: dict[str, Any] = {
        "id": word_id,
        "german": german,
        "turkish": turkish,
        "category": category,
        "article": Article(article),
        "plural": plural,
        "wo": f"am {german} {word_id}",
        "wohin": f"an den {german} {word_id}",
        "woher": f"vom {german} {word_id}",
        "example_sentence": f"Das ist {german} Nummer {word_id}.",
        "example_translation": f"Bu {turkish} numara {word_id}.",
    }
    fields.update(overrides)
    return Word(**fields)


def make_words(count: int, **overrides: Any) -> list[Word]:
    return [make_word(index, **overrides) for index in range(1, count + 1)]


def make_repository(
    words: Iterable[Word] | None = None,
    favorite_lists: Iterable[FavoriteList] = (),
) -> MemoryWordRepository:
    return MemoryWordRepository(
        make_words(8) if words is None else words, favorite_lists
    )
