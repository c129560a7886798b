from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from vokabel_trainer.core import config_templates
from vokabel_trainer.core.config_templates import (
    ConfigTemplate,
    ConfigTemplateError,
)


def test_get_template_returns_quiz_template(tmp_path: Path) -> None:
    template = config_templates.get_template("quiz")
    assert isinstance(template, ConfigTemplate)

    contents = template.read_text()
    parsed = tomllib.loads(contents)
    assert set(parsed) == {"quiz", "storage", "logging"}
    assert parsed["quiz"]["mode"] == "artikel"

    target = tmp_path / "config" / "vokabel.toml"
    written = template.write(target)
    assert written == target
    assert target.read_text(encoding="utf-8") == contents

    with pytest.raises(ConfigTemplateError):
        template.write(target)

    updated = template.write(target, overwrite=True)
    assert updated == target


def test_iter_templates_returns_registered_templates() -> None:
    names = {template.name for template in config_templates.iter_templates()}
    assert names == {"quiz"}


def test_missing_template_file_raises() -> None:
    template = ConfigTemplate(
        name="ghost",
        filename="ghost.toml",
        description="",
        package="vokabel_trainer.quiz",
    )

    with pytest.raises(ConfigTemplateError):
        template.read_text()


@pytest.mark.parametrize("unknown", ["missing", "", "convert_markdown"])
def test_get_template_unknown_raises(unknown: str) -> None:
    with pytest.raises(ConfigTemplateError):
        config_templates.get_template(unknown)
