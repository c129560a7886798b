"""Filesystem helpers shared by tests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

from vokabel_trainer.quiz.models import Word


@dataclass
class WorkspaceBuilder:
    """Helper bound to a tmp directory that mimics a vokabel workspace."""

    root: Path

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def config_path(self) -> Path:
        return self.root / "config" / "vokabel.toml"

    def write(
        self, relative: Union[str, Path], content: Union[str, bytes]
    ) -> Path:
        path = self.root / Path(relative)
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    def write_jsonl(
        self, relative: Union[str, Path], records: Iterable[Mapping[str, Any]]
    ) -> Path:
        lines = [json.dumps(dict(record), ensure_ascii=False) for record in records]
        return self.write(relative, "\n".join(lines) + "\n")

    def write_words(self, words: Iterable[Word]) -> Path:
        return self.write_jsonl(
            "data/words.jsonl", (word.to_dict() for word in words)
        )

    def write_config(self, content: str) -> Path:
        return self.write("config/vokabel.toml", content)

    def read_jsonl(self, relative: Union[str, Path]) -> list[dict]:
        path = self.root / Path(relative)
        return [
            json.loads(line)
            for line in path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]
