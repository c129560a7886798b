"""Read access to the word store.

The quiz engine only needs to read words, categories and favorite lists, and
to append finished results (see :mod:`.recorder`). Two stores are provided:
an in-memory one seeded with the sample vocabulary, and a JSONL-backed one
living in the workspace ``data`` directory.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from .errors import RepositoryError
from .models import FavoriteList, Word
from .utils import read_jsonl, write_jsonl

logger = logging.getLogger(__name__)


SAMPLE_WORDS: tuple[dict[str, object], ...] = (
    {
        "id": 1,
        "article": "der",
        "german": "Hund",
        "plural": "Hunde",
        "plural_suffix": "-e",
        "turkish": "köpek",
        "category": "Animals",
        "is_favorite": True,
        "wo": "zu Hause",
        "wohin": "nach Hause",
        "woher": "von zu Hause",
    },
    {
        "id": 2,
        "article": "die",
        "german": "Katze",
        "plural": "Katzen",
        "plural_suffix": "-n",
        "turkish": "kedi",
        "category": "Animals",
        "is_favorite": True,
        "wo": "auf dem Sofa",
        "wohin": "auf das Sofa",
        "woher": "vom Sofa",
    },
    {
        "id": 3,
        "article": "das",
        "german": "Haus",
        "plural": "Häuser",
        "plural_suffix": "-er",
        "turkish": "ev",
        "category": "Home",
        "is_favorite": False,
        "wo": "in der Stadt",
        "wohin": "in die Stadt",
        "woher": "aus der Stadt",
    },
    {
        "id": 4,
        "article": "das",
        "german": "Brot",
        "plural": "Brote",
        "plural_suffix": "-e",
        "turkish": "ekmek",
        "category": "Food",
        "is_favorite": True,
        "wo": "auf dem Tisch",
        "wohin": "auf den Tisch",
        "woher": "vom Tisch",
    },
    {
        "id": 5,
        "article": "die",
        "german": "Farbe",
        "plural": "Farben",
        "plural_suffix": "-n",
        "turkish": "renk",
        "category": "Colors",
        "is_favorite": False,
        "wo": "im Bild",
        "wohin": "ins Bild",
        "woher": "aus dem Bild",
    },
)


@dataclass(frozen=True)
class WordFilter:
    """Optional constraints for :meth:`WordRepository.list_words`.

    ``search`` matches case-insensitively against german, turkish and
    category. ``ids`` compares string forms of word ids.
    """

    category: str | None = None
    favorites_only: bool = False
    search: str | None = None
    ids: frozenset[str] | None = None

    def matches(self, word: Word) -> bool:
        if self.category is not None and word.category != self.category:
            return False
        if self.favorites_only and not word.is_favorite:
            return False
        if self.ids is not None and str(word.id) not in self.ids:
            return False
        if self.search:
            needle = self.search.lower()
            haystack = (word.german, word.turkish, word.category)
            if not any(needle in value.lower() for value in haystack):
                return False
        return True


class WordRepository(Protocol):
    def list_words(self, word_filter: WordFilter | None = None) -> list[Word]:
        ...

    def list_favorite_words(self) -> list[Word]:
        ...

    def list_favorite_lists(self) -> list[FavoriteList]:
        ...

    def list_categories(self) -> list[str]:
        ...


class MemoryWordRepository:
    """Word store held in memory, in insertion order."""

    def __init__(
        self,
        words: Iterable[Word] = (),
        favorite_lists: Iterable[FavoriteList] = (),
    ) -> None:
        self._words = list(words)
        self._favorite_lists = list(favorite_lists)

    @classmethod
    def with_samples(cls) -> "MemoryWordRepository":
        return cls(Word.from_dict(record) for record in SAMPLE_WORDS)

    def list_words(self, word_filter: WordFilter | None = None) -> list[Word]:
        if word_filter is None:
            return list(self._words)
        return [word for word in self._words if word_filter.matches(word)]

    def list_favorite_words(self) -> list[Word]:
        return self.list_words(WordFilter(favorites_only=True))

    def list_favorite_lists(self) -> list[FavoriteList]:
        return list(self._favorite_lists)

    def list_categories(self) -> list[str]:
        return list(dict.fromkeys(word.category for word in self._words))


class JsonlWordRepository(MemoryWordRepository):
    """Word store loaded from ``words.jsonl`` and ``favorite_lists.jsonl``.

    A missing file is treated as an empty store. Malformed lines raise
    :class:`RepositoryError` naming the file and line.
    """

    def __init__(
        self, words_path: Path, favorite_lists_path: Path | None = None
    ) -> None:
        self.words_path = Path(words_path)
        self.favorite_lists_path = (
            Path(favorite_lists_path) if favorite_lists_path else None
        )
        words = _load_records(self.words_path, Word.from_dict)
        lists = (
            _load_records(self.favorite_lists_path, FavoriteList.from_dict)
            if self.favorite_lists_path
            else []
        )
        super().__init__(words, lists)
        logger.debug(
            "Loaded word store",
            extra={
                "path": self.words_path,
                "words": len(words),
                "favorite_lists": len(lists),
            },
        )


def _load_records(path: Path, build) -> list:
    if not path.exists():
        return []
    try:
        raw = read_jsonl(path)
    except json.JSONDecodeError as exc:
        raise RepositoryError(f"{path}: invalid JSON ({exc.msg})") from exc
    except OSError as exc:
        raise RepositoryError(f"Unable to read {path}: {exc}") from exc

    records = []
    for index, item in enumerate(raw, start=1):
        if not isinstance(item, dict):
            raise RepositoryError(f"{path}: record {index} is not an object")
        try:
            records.append(build(item))
        except (KeyError, ValueError) as exc:
            raise RepositoryError(f"{path}: record {index}: {exc}") from exc
    return records


def write_sample_words(path: Path, *, overwrite: bool = False) -> int:
    """Write :data:`SAMPLE_WORDS` to ``path`` and return the word count."""

    if path.exists() and not overwrite:
        raise RepositoryError(f"Word file already exists: {path}")
    write_jsonl(path, [dict(record) for record in SAMPLE_WORDS])
    return len(SAMPLE_WORDS)


def words_by_ids(words: Sequence[Word], ids: Iterable[object]) -> list[Word]:
    """Return ``words`` whose id is in ``ids``, keeping repository order."""

    wanted = {str(item) for item in ids}
    return [word for word in words if str(word.id) in wanted]
