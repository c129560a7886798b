"""Layered TOML configuration: built-in defaults overlaid by one file.

Every config tree in vokabel-trainer is a dict of tables whose shape is
fixed by its defaults. A file may only set keys the defaults already
know, and tables stay tables, so a typo in ``vokabel.toml`` surfaces as
an error naming the dotted key instead of being silently ignored.
"""

from __future__ import annotations

import copy
import os
import tempfile
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional

__all__ = [
    "TomlConfigError",
    "layer_config",
    "overlay",
    "read_config",
    "write_config_template",
]


class TomlConfigError(RuntimeError):
    """A config file could not be read, layered or written.

    ``path`` is the file involved and ``key`` the dotted key that failed,
    when either is known.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Path] = None,
        key: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.key = key


def read_config(path: Path | str) -> dict[str, Any]:
    target = Path(path)
    try:
        with target.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise TomlConfigError(
            f"Config file not found: {target}", path=target
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise TomlConfigError(
            f"Invalid TOML in {target}: {exc}", path=target
        ) from exc


def overlay(
    defaults: Mapping[str, Any],
    values: Mapping[str, Any],
    *,
    prefix: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Return a copy of ``defaults`` with ``values`` laid over it.

    Neither argument is modified.
    """

    merged = copy.deepcopy(dict(defaults))
    for key, value in values.items():
        dotted = ".".join((*prefix, key))
        if key not in merged:
            raise TomlConfigError(
                f"Unknown configuration key '{dotted}'.", key=dotted
            )
        current = merged[key]
        if isinstance(current, Mapping):
            if not isinstance(value, Mapping):
                raise TomlConfigError(
                    f"Expected a table for '{dotted}', "
                    f"got {type(value).__name__}.",
                    key=dotted,
                )
            merged[key] = overlay(current, value, prefix=(*prefix, key))
        elif isinstance(value, Mapping):
            raise TomlConfigError(
                f"'{dotted}' is a single value, not a table.", key=dotted
            )
        else:
            merged[key] = value
    return merged


def layer_config(
    defaults: Mapping[str, Any], path: Optional[Path]
) -> dict[str, Any]:
    """Read ``path`` (when given) and lay it over ``defaults``."""

    if path is None:
        return copy.deepcopy(dict(defaults))
    values = read_config(path)
    try:
        return overlay(defaults, values)
    except TomlConfigError as exc:
        raise TomlConfigError(
            f"{path}: {exc}", path=Path(path), key=exc.key
        ) from exc


def write_config_template(
    path: Path,
    text: str,
    *,
    overwrite: bool = False,
    mode: int = 0o600,
) -> Path:
    """Write ``text`` to ``path`` through a sibling temp file.

    A half-written config is never left behind; the existing file is only
    replaced when ``overwrite`` is set.
    """

    if path.exists() and not overwrite:
        raise TomlConfigError(f"Config already exists: {path}", path=path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise TomlConfigError(
            f"Could not write config {path}: {exc}", path=path
        ) from exc
    try:
        path.chmod(mode)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
    return path
