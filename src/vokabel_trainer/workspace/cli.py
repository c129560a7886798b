"""``vokabel init``: prepare the workspace, config template and sample words."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Mapping, Sequence

from vokabel_trainer.core import config_templates
from vokabel_trainer.core import workspace as workspace_mod
from vokabel_trainer.quiz.config import default_config_path
from vokabel_trainer.quiz.errors import RepositoryError
from vokabel_trainer.quiz.repository import write_sample_words


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vokabel init",
        description=(
            "Create the vokabel-trainer workspace and write a default "
            "vokabel.toml."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to "
            "VOKABEL_TRAINER_DATA_HOME or ~/.vokabel-trainer)."
        ),
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Also write the sample vocabulary to data/words.jsonl.",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file and sample words.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def _status(created: Mapping[str, bool], key: str) -> str:
    return "created" if created.get(key, False) else "exists"


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        layout = workspace_mod.ensure_workspace(path=args.path)
    except workspace_mod.WorkspaceError as exc:
        sys.stderr.write(f"{exc}\n")
        return 2

    home_status = _status(layout.created, "home")
    lines = [f"Workspace ready at {layout.home} ({home_status})"]
    for name, directory in layout.directories.items():
        lines.append(
            f"  {name.ljust(6)}  {directory} ({_status(layout.created, name)})"
        )

    config_path = default_config_path(layout)
    template = config_templates.get_template("quiz")
    if config_path.exists() and not args.force:
        lines.append(f"Config kept at {config_path}")
    else:
        try:
            template.write(config_path, overwrite=True)
        except config_templates.ConfigTemplateError as exc:
            sys.stderr.write(f"{exc}\n")
            return 2
        lines.append(f"Config written to {config_path}")

    if args.seed:
        words_path = layout.path_for("data") / "words.jsonl"
        try:
            count = write_sample_words(words_path, overwrite=args.force)
        except RepositoryError as exc:
            lines.append(f"{exc} (use --force to replace it)")
        else:
            lines.append(f"Wrote {count} sample word(s) -> {words_path}")

    if not args.quiet:
        sys.stdout.write("\n".join(lines) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
