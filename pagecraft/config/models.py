"""Typed dataclasses describing export configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from pagecraft._constants import ARCHIVE_NAME_TEMPLATE


class ExportConfigError(ValueError):
    """Raised when the export configuration is invalid."""


@dc.dataclass(slots=True)
class ExportConfig:
    """Defaults applied when exporting from the command line."""

    default_target: str = "shadcn"
    output_dir: Path = Path("dist")
    archive_name: str = ARCHIVE_NAME_TEMPLATE
    timeout: float | None = None

    def archive_filename(self, target: str) -> str:
        """Return the archive filename for ``target``."""
        return self.archive_name.format(target=target)


__all__ = ["ExportConfig", "ExportConfigError"]
