from __future__ import annotations

from fixtures import make_repository, make_word
from vokabel_trainer.quiz.models import FavoriteList, TestSource
from vokabel_trainer.quiz.sources import (
    ALL_FAVORITES,
    SourceSelection,
    select_source_words,
)


def _repo():
    words = [
        make_word(1, is_favorite=True),
        make_word(2),
        make_word(3, is_favorite=True),
        make_word(5),
    ]
    lists = [
        FavoriteList("10", "Okul", ("3", "5")),
        FavoriteList("11", "Boş", ()),
    ]
    return make_repository(words, lists)


def test_wordlist_returns_everything() -> None:
    pool = select_source_words(_repo(), SourceSelection())

    assert [w.id for w in pool] == [1, 2, 3, 5]


def test_category_filters_by_exact_name() -> None:
    selection = SourceSelection(TestSource.CATEGORY, category="School")

    pool = select_source_words(_repo(), selection)

    assert [w.id for w in pool] == [3, 5]


def test_all_favorites_uses_favorite_flag() -> None:
    selection = SourceSelection(
        TestSource.FAVORITES, favorite_list=ALL_FAVORITES
    )

    pool = select_source_words(_repo(), selection)

    assert [w.id for w in pool] == [1, 3]


def test_favorite_list_resolves_string_ids() -> None:
    selection = SourceSelection(TestSource.FAVORITES, favorite_list="10")

    pool = select_source_words(_repo(), selection)

    assert [w.id for w in pool] == [3, 5]


def test_unknown_or_empty_list_gives_empty_pool() -> None:
    repo = _repo()

    unknown = SourceSelection(TestSource.FAVORITES, favorite_list="404")
    empty = SourceSelection(TestSource.FAVORITES, favorite_list="11")

    assert select_source_words(repo, unknown) == []
    assert select_source_words(repo, empty) == []


def test_incomplete_selection_is_not_ready() -> None:
    category = SourceSelection(TestSource.CATEGORY)
    favorites = SourceSelection(TestSource.FAVORITES)

    assert not category.is_complete
    assert not favorites.is_complete
    assert SourceSelection().is_complete
    assert select_source_words(_repo(), category) == []
    assert select_source_words(_repo(), favorites) == []


def test_describe_selection() -> None:
    assert SourceSelection().describe() == "word list"
    assert (
        SourceSelection(TestSource.CATEGORY, category="Food").describe()
        == "category 'Food'"
    )
    assert (
        SourceSelection(TestSource.FAVORITES, favorite_list="all").describe()
        == "all favorites"
    )
    assert (
        SourceSelection(TestSource.FAVORITES, favorite_list="7").describe()
        == "favorite list '7'"
    )
