"""Configuration loader for quiz commands.

Precedence is CLI overrides > TOML file > built-in defaults. The file is
looked up at the explicit path, then ``VOKABEL_TRAINER_CONFIG``, then
``<workspace>/config/vokabel.toml``; a missing default file simply means
defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from vokabel_trainer.core import config as core_config
from vokabel_trainer.core import workspace as workspace_mod

from .errors import QuizConfigError
from .models import TestMode, TestSource, TestType

CONFIG_FILENAME = "vokabel.toml"
CONFIG_ENV = "VOKABEL_TRAINER_CONFIG"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

_DEFAULTS: Dict[str, Any] = {
    "quiz": {
        "mode": "artikel",
        "test_type": "multiple",
        "question_count": 10,
        "source": "wordlist",
        "category": "",
        "favorite_list": "all",
    },
    "storage": {
        "words_file": "",
        "favorite_lists_file": "",
        "results_file": "",
    },
    "logging": {
        "level": "INFO",
        "verbose": False,
    },
}


@dataclass(frozen=True)
class QuizDefaults:
    mode: TestMode
    test_type: TestType
    question_count: int
    source: TestSource
    category: Optional[str]
    favorite_list: Optional[str]


@dataclass(frozen=True)
class StorageConfig:
    words_file: Path
    favorite_lists_file: Path
    results_file: Path


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    verbose: bool


@dataclass(frozen=True)
class TrainerConfig:
    quiz: QuizDefaults
    storage: StorageConfig
    logging: LoggingConfig


@dataclass(frozen=True)
class QuizOverrides:
    """Values from CLI flags; ``None`` keeps the configured value."""

    mode: Optional[str] = None
    test_type: Optional[str] = None
    question_count: Optional[int] = None
    source: Optional[str] = None
    category: Optional[str] = None
    favorite_list: Optional[str] = None
    verbose: Optional[bool] = None


@dataclass(frozen=True)
class LoadResult:
    config: TrainerConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[QuizOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    env_map = os.environ if env is None else env
    try:
        layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    except workspace_mod.WorkspaceError as exc:
        raise QuizConfigError(str(exc)) from exc

    requested, explicit = _resolve_config_path(
        config_path, env_map, layout.path_for("config") / CONFIG_FILENAME
    )
    loaded_path: Optional[Path] = None
    if requested.exists():
        loaded_path = requested
    elif explicit:
        raise QuizConfigError(f"Config file not found: {requested}")
    try:
        tree = core_config.layer_config(_DEFAULTS, loaded_path)
    except core_config.TomlConfigError as exc:
        raise QuizConfigError(str(exc)) from exc

    config = build_config(tree, data_dir=layout.path_for("data"))
    if overrides is not None:
        config = apply_overrides(config, overrides)
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def default_config_path(layout: workspace_mod.WorkspaceLayout) -> Path:
    return layout.path_for("config") / CONFIG_FILENAME


def build_config(tree: Mapping[str, Any], *, data_dir: Path) -> TrainerConfig:
    quiz = tree.get("quiz", {})
    storage = tree.get("storage", {})
    log = tree.get("logging", {})
    return TrainerConfig(
        quiz=QuizDefaults(
            mode=_enum(TestMode, quiz.get("mode"), "quiz.mode"),
            test_type=_enum(TestType, quiz.get("test_type"), "quiz.test_type"),
            question_count=_positive_int(
                quiz.get("question_count"), "quiz.question_count"
            ),
            source=_enum(TestSource, quiz.get("source"), "quiz.source"),
            category=_optional_str(quiz.get("category"), "quiz.category"),
            favorite_list=_optional_str(
                quiz.get("favorite_list"), "quiz.favorite_list"
            ),
        ),
        storage=StorageConfig(
            words_file=_path_or(
                storage.get("words_file"), data_dir / "words.jsonl"
            ),
            favorite_lists_file=_path_or(
                storage.get("favorite_lists_file"),
                data_dir / "favorite_lists.jsonl",
            ),
            results_file=_path_or(
                storage.get("results_file"), data_dir / "results.jsonl"
            ),
        ),
        logging=_build_logging(log),
    )


def apply_overrides(
    config: TrainerConfig, overrides: QuizOverrides
) -> TrainerConfig:
    quiz = config.quiz
    if overrides.mode is not None:
        quiz = replace(quiz, mode=_enum(TestMode, overrides.mode, "--mode"))
    if overrides.test_type is not None:
        quiz = replace(
            quiz, test_type=_enum(TestType, overrides.test_type, "--type")
        )
    if overrides.question_count is not None:
        quiz = replace(
            quiz,
            question_count=_positive_int(overrides.question_count, "--count"),
        )
    if overrides.source is not None:
        quiz = replace(
            quiz, source=_enum(TestSource, overrides.source, "--source")
        )
    if overrides.category is not None:
        quiz = replace(
            quiz, category=_optional_str(overrides.category, "--category")
        )
    if overrides.favorite_list is not None:
        quiz = replace(
            quiz,
            favorite_list=_optional_str(
                overrides.favorite_list, "--favorite-list"
            ),
        )

    log = config.logging
    if overrides.verbose is not None:
        log = replace(log, verbose=overrides.verbose)
    return replace(config, quiz=quiz, logging=log)


def _resolve_config_path(
    config_path: Optional[Path],
    env: Mapping[str, str],
    default_path: Path,
) -> tuple[Path, bool]:
    if config_path is not None:
        return Path(config_path).expanduser(), True
    from_env = (env.get(CONFIG_ENV) or "").strip()
    if from_env:
        return Path(from_env).expanduser(), True
    return default_path, False


def _build_logging(section: Mapping[str, Any]) -> LoggingConfig:
    level = section.get("level")
    if not isinstance(level, str) or level.strip().upper() not in _LOG_LEVELS:
        raise QuizConfigError(
            "logging.level must be one of "
            "DEBUG, INFO, WARNING, ERROR, CRITICAL."
        )
    verbose = section.get("verbose")
    if not isinstance(verbose, bool):
        raise QuizConfigError("'logging.verbose' must be a boolean.")
    return LoggingConfig(level=level.strip().upper(), verbose=verbose)


def _enum(enum_cls, value: Any, field: str):
    try:
        return enum_cls.from_value(value)
    except ValueError as exc:
        raise QuizConfigError(f"'{field}': {exc}") from exc


def _positive_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise QuizConfigError(f"'{field}' must be a positive integer.")
    return value


def _optional_str(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise QuizConfigError(f"'{field}' must be a string.")
    return value.strip() or None


def _path_or(value: Any, default: Path) -> Path:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if not isinstance(value, str):
        raise QuizConfigError("Storage paths must be strings.")
    return Path(value).expanduser()
