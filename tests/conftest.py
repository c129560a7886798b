from __future__ import annotations

import logging
import random
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Ensure src/ is importable when the package is not installed
ROOT = TESTS_DIR.parent
for extra in (ROOT, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import WorkspaceBuilder  # noqa: E402


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source for sampling and shuffling."""

    return random.Random(1234)


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch) -> WorkspaceBuilder:
    """Point the workspace env at pytest's tmp directory."""

    root = tmp_path / "home"
    monkeypatch.setenv("VOKABEL_TRAINER_DATA_HOME", str(root))
    monkeypatch.delenv("VOKABEL_TRAINER_CONFIG", raising=False)
    return WorkspaceBuilder(root)


@pytest.fixture(autouse=True)
def _reset_app_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("vokabel_trainer")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
