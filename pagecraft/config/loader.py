"""Load export configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import ExportConfig, ExportConfigError

_KNOWN_KEYS = frozenset({"default_target", "output_dir", "archive_name", "timeout"})


def load_export_config(path: Path) -> ExportConfig:
    """Load the YAML file describing export defaults.

    A missing file is not an error: the built-in defaults apply.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file (for example,
        ``config/pagecraft.yaml``).

    Returns
    -------
    ExportConfig
        Parsed configuration with defaults filled in.

    Raises
    ------
    ExportConfigError
        If the top-level structure is not a mapping, a key is unknown, or a
        value has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_export_config(Path("does-not-exist.yaml"))
    >>> config.default_target
    'shadcn'
    """
    if not path.exists():
        return ExportConfig()

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ExportConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration keys in '{path}': {', '.join(unknown)}"
        raise ExportConfigError(msg)

    base = ExportConfig()
    return ExportConfig(
        default_target=_parse_target(raw.get("default_target", base.default_target)),
        output_dir=Path(raw.get("output_dir", base.output_dir)),
        archive_name=_parse_archive_name(raw.get("archive_name", base.archive_name)),
        timeout=_parse_timeout(raw.get("timeout")),
    )


def _parse_target(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        msg = "'default_target' must be a non-empty string."
        raise ExportConfigError(msg)
    return value.strip()


def _parse_archive_name(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        msg = "'archive_name' must be a non-empty string."
        raise ExportConfigError(msg)
    try:
        value.format(target="probe")
    except (KeyError, IndexError, ValueError) as exc:
        msg = f"'archive_name' may only reference {{target}}: {exc}"
        raise ExportConfigError(msg) from exc
    return value


def _parse_timeout(value: object) -> float | None:
    match value:
        case None:
            return None
        case bool():
            pass
        case int() | float() if value > 0:
            return float(value)
    msg = "'timeout' must be a positive number of seconds."
    raise ExportConfigError(msg)


__all__ = ["load_export_config"]
