import argparse
import random
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core import configure_logger
from .config import LoadResult, QuizOverrides, load_config
from .errors import QuizConfigError, RecordingError, RepositoryError
from .models import TestMode, TestSource, TestType
from .recorder import (
    JsonlResultRecorder,
    aggregate_results,
    record_session_result,
)
from .repository import JsonlWordRepository, WordFilter
from .session import QuizSession
from .sources import SourceSelection, select_source_words
from .view import run_quiz_session

InputProvider = Callable[[], str]


def _load(
    args: argparse.Namespace, overrides: Optional[QuizOverrides] = None
) -> LoadResult:
    return load_config(
        config_path=getattr(args, "config", None),
        workspace_path=getattr(args, "workspace", None),
        overrides=overrides,
    )


def _open_repository(loaded: LoadResult) -> JsonlWordRepository:
    storage = loaded.config.storage
    return JsonlWordRepository(storage.words_file, storage.favorite_lists_file)


def _configure_logging(loaded: LoadResult) -> None:
    settings = loaded.config.logging
    configure_logger(
        "vokabel_trainer",
        log_dir=loaded.layout.path_for("logs"),
        level=settings.level,
        verbose=settings.verbose,
        filename="quiz.log",
    )


def _cmd_start(
    args: argparse.Namespace,
    console: Console,
    input_provider: Optional[InputProvider],
) -> int:
    overrides = QuizOverrides(
        mode=args.mode,
        test_type=args.type,
        question_count=args.count,
        source=args.source,
        category=args.category,
        favorite_list=args.favorite_list,
        verbose=True if args.verbose else None,
    )
    loaded = _load(args, overrides)
    _configure_logging(loaded)
    quiz = loaded.config.quiz

    words_file = loaded.config.storage.words_file
    if not words_file.exists():
        console.print(
            f"No words found at {words_file}. Run 'vokabel init --seed' "
            "or add words first."
        )
        return 1
    repository = _open_repository(loaded)

    selection = SourceSelection(
        source=quiz.source,
        category=quiz.category,
        favorite_list=quiz.favorite_list,
    )
    if not selection.is_complete:
        needed = (
            "--category" if quiz.source is TestSource.CATEGORY
            else "--favorite-list"
        )
        console.print(f"Error: source '{quiz.source}' requires {needed}.")
        return 2

    pool = select_source_words(repository, selection)
    rng = random.Random(args.seed) if args.seed is not None else None
    session = QuizSession(
        quiz.mode, quiz.test_type, quiz.question_count, rng=rng
    )
    if not session.start(pool):
        console.print(
            f"No words in {selection.describe()} can be used for "
            f"'{quiz.mode}' questions."
        )
        return 1

    recorder = JsonlResultRecorder(loaded.config.storage.results_file)

    def _record(finished: QuizSession) -> None:
        result = finished.to_result(selection.source)
        if not record_session_result(recorder, result):
            console.print(
                "[yellow]Your score could not be saved; it is still shown "
                "above.[/yellow]"
            )

    provider = input_provider or (lambda: console.input("> "))
    run = run_quiz_session(session, console, provider, on_finish=_record)
    return 0 if run.exit_action != "empty" else 1


def _cmd_words(args: argparse.Namespace, console: Console) -> int:
    loaded = _load(args)
    repository = _open_repository(loaded)
    word_filter = WordFilter(
        category=args.category or None,
        favorites_only=bool(args.favorites),
        search=args.search or None,
    )
    words = repository.list_words(word_filter)
    if not words:
        console.print("No words match the given filters.")
        return 1
    table = Table(box=box.SIMPLE, expand=False)
    for column in ("#", "Artikel", "Deutsch", "Plural", "Türkçe", "Kategori"):
        table.add_column(column)
    table.add_column("★", justify="center")
    for word in words:
        table.add_row(
            str(word.id),
            word.article.value if word.article else "",
            Text(word.german),
            Text(word.plural or ""),
            Text(word.turkish),
            Text(word.category),
            "★" if word.is_favorite else "",
        )
    console.print(table)
    return 0


def _cmd_categories(args: argparse.Namespace, console: Console) -> int:
    loaded = _load(args)
    categories = _open_repository(loaded).list_categories()
    if not categories:
        console.print("No categories yet.")
        return 1
    for name in categories:
        console.print(Text(f"- {name}"))
    return 0


def _cmd_lists(args: argparse.Namespace, console: Console) -> int:
    loaded = _load(args)
    favorite_lists = _open_repository(loaded).list_favorite_lists()
    if not favorite_lists:
        console.print("No favorite lists yet.")
        return 1
    table = Table(box=box.SIMPLE, expand=False)
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Words", justify="right")
    for favorite_list in favorite_lists:
        table.add_row(
            Text(favorite_list.id),
            Text(favorite_list.name),
            str(len(favorite_list.word_ids)),
        )
    console.print(table)
    return 0


def _cmd_results(args: argparse.Namespace, console: Console) -> int:
    loaded = _load(args)
    recorder = JsonlResultRecorder(loaded.config.storage.results_file)
    results = recorder.list_test_results()
    if not results:
        console.print("No quiz results recorded yet.")
        return 1

    history = Table(title="Results", box=box.SIMPLE)
    for column in ("Mode", "Type", "Source", "Correct", "Score"):
        history.add_column(column)
    for result in results:
        history.add_row(
            result.mode.value,
            result.test_type.value,
            result.source.value,
            f"{result.correct_answers}/{result.total_questions}",
            f"%{result.score}",
        )
    console.print(history)

    per_mode = Table(title="Per mode", box=box.SIMPLE)
    for column in ("Mode", "Sessions", "Correct", "Average"):
        per_mode.add_column(column)
    for mode, stats in aggregate_results(results).items():
        per_mode.add_row(
            mode,
            str(int(stats["sessions"])),
            f"{int(stats['correct'])}/{int(stats['asked'])}",
            f"%{stats['average_score']:.1f}",
        )
    console.print(per_mode)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vokabel quiz",
        description="German/Turkish vocabulary quizzes",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--config", type=Path, help="Path to vokabel.toml")
    p.add_argument("--workspace", type=Path, help="Workspace root override")
    sub = p.add_subparsers(dest="command", required=True)

    sp_start = sub.add_parser("start", help="Start an interactive quiz")
    sp_start.add_argument("--mode", choices=[m.value for m in TestMode])
    sp_start.add_argument("--type", choices=[t.value for t in TestType])
    sp_start.add_argument("--count", type=int)
    sp_start.add_argument("--source", choices=[s.value for s in TestSource])
    sp_start.add_argument("--category")
    sp_start.add_argument(
        "--favorite-list",
        help="'all' for every favorite word, or a favorite list id",
    )
    sp_start.add_argument(
        "--seed", type=int, help="Seed the random source (repeatable quizzes)"
    )
    sp_start.add_argument("--verbose", action="store_true")

    sp_words = sub.add_parser("words", help="List words")
    sp_words.add_argument("--category")
    sp_words.add_argument("--favorites", action="store_true")
    sp_words.add_argument("--search")

    sub.add_parser("categories", help="List categories")
    sub.add_parser(
        "lists", help="List favorite lists (ids for --favorite-list)"
    )
    sub.add_parser("results", help="Show recorded quiz results")
    return p


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
    input_provider: Optional[InputProvider] = None,
) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    console = console or Console()
    try:
        if args.command == "start":
            return _cmd_start(args, console, input_provider)
        if args.command == "words":
            return _cmd_words(args, console)
        if args.command == "categories":
            return _cmd_categories(args, console)
        if args.command == "lists":
            return _cmd_lists(args, console)
        if args.command == "results":
            return _cmd_results(args, console)
    except (QuizConfigError, RepositoryError, RecordingError) as exc:
        console.print(Text(f"Error: {exc}", style="red"))
        return 2
    parser.print_help()  # pragma: no cover - argparse enforces a command
    return 2
