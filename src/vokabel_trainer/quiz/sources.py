"""Resolve a quiz source selection to the candidate word pool."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .models import TestSource, Word
from .repository import WordFilter, WordRepository, words_by_ids

logger = logging.getLogger(__name__)

ALL_FAVORITES = "all"


@dataclass(frozen=True)
class SourceSelection:
    """Where quiz words come from.

    ``category`` is needed for :attr:`TestSource.CATEGORY`; ``favorite_list``
    (``"all"`` or a list id) for :attr:`TestSource.FAVORITES`.
    """

    source: TestSource = TestSource.WORDLIST
    category: str | None = None
    favorite_list: str | None = None

    @property
    def is_complete(self) -> bool:
        if self.source is TestSource.CATEGORY:
            return bool(self.category)
        if self.source is TestSource.FAVORITES:
            return bool(self.favorite_list)
        return True

    def describe(self) -> str:
        if self.source is TestSource.CATEGORY:
            return f"category '{self.category or '?'}'"
        if self.source is TestSource.FAVORITES:
            if self.favorite_list == ALL_FAVORITES:
                return "all favorites"
            return f"favorite list '{self.favorite_list or '?'}'"
        return "word list"


def select_source_words(
    repository: WordRepository, selection: SourceSelection
) -> list[Word]:
    """Return the words a session may sample from.

    An incomplete selection or an unknown favorite list gives an empty pool;
    callers treat that as "not ready" rather than an error.
    """

    if not selection.is_complete:
        logger.debug("Source selection incomplete: %s", selection.describe())
        return []

    if selection.source is TestSource.WORDLIST:
        words = repository.list_words()
    elif selection.source is TestSource.CATEGORY:
        words = repository.list_words(WordFilter(category=selection.category))
    elif selection.favorite_list == ALL_FAVORITES:
        words = repository.list_favorite_words()
    else:
        words = _favorite_list_words(repository, str(selection.favorite_list))

    logger.debug(
        "Resolved %s to %d word(s)", selection.describe(), len(words)
    )
    return words


def _favorite_list_words(
    repository: WordRepository, list_id: str
) -> list[Word]:
    for favorite_list in repository.list_favorite_lists():
        if favorite_list.id == list_id:
            return words_by_ids(repository.list_words(), favorite_list.word_ids)
    logger.debug("Favorite list %s not found", list_id)
    return []
