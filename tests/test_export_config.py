"""Unit tests for loading export configuration YAML."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from pagecraft.config import ExportConfig, ExportConfigError, load_export_config


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "pagecraft.yaml"
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    """Without a config file every default applies."""
    config = load_export_config(tmp_path / "absent.yaml")
    assert config == ExportConfig()
    assert config.archive_filename("shadcn") == "shadcn-project-export.zip"


def test_values_are_parsed(tmp_path: Path) -> None:
    """Configured values override the defaults."""
    path = _write(
        tmp_path,
        """
        default_target: bootstrap
        output_dir: build/exports
        archive_name: "{target}-site.zip"
        timeout: 30
        """,
    )
    config = load_export_config(path)
    assert config.default_target == "bootstrap"
    assert config.output_dir == Path("build/exports")
    assert config.archive_filename("bootstrap") == "bootstrap-site.zip"
    assert config.timeout == 30.0


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    """An empty document is treated like a missing one."""
    path = tmp_path / "pagecraft.yaml"
    path.write_text("", encoding="utf-8")
    assert load_export_config(path) == ExportConfig()


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("- just\n- a list", "must be a mapping"),
        ("colour: blue", "Unknown configuration keys"),
        ("default_target: ''", "default_target"),
        ("archive_name: '{name}.zip'", "archive_name"),
        ("archive_name: '{target.zip'", "archive_name"),
        ("timeout: 0", "timeout"),
        ("timeout: soon", "timeout"),
        ("timeout: true", "timeout"),
    ],
)
def test_invalid_values_raise(tmp_path: Path, body: str, message: str) -> None:
    """Invalid configuration is reported with the offending key."""
    with pytest.raises(ExportConfigError, match=message):
        load_export_config(_write(tmp_path, body))
