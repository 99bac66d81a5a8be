"""Load and validate export configuration YAML.

The optional ``config/pagecraft.yaml`` file sets the defaults the CLI uses
when exporting: the target profile, output directory, archive filename
template, and packaging timeout. The primary entry point is
:func:`load_export_config`.

Examples
--------
>>> from pathlib import Path
>>> from pagecraft.config import load_export_config
>>> config = load_export_config(Path("config/pagecraft.yaml"))  # doctest: +SKIP
>>> config.archive_filename("bootstrap")  # doctest: +SKIP
'bootstrap-project-export.zip'
"""

from .loader import load_export_config
from .models import ExportConfig, ExportConfigError

__all__ = ["ExportConfig", "ExportConfigError", "load_export_config"]
