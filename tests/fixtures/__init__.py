"""Shared testing fixtures for the vokabel_trainer test suite."""

from .words import make_repository, make_word, make_words  # noqa: F401
from .workspace import WorkspaceBuilder  # noqa: F401

__all__ = [
    "WorkspaceBuilder",
    "make_repository",
    "make_word",
    "make_words",
]
