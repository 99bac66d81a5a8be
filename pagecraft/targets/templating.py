"""Jinja environment shared by every target profile.

Generated pages are TSX, where ``{{ ... }}`` is ordinary JSX (style
objects), so the environment swaps Jinja's delimiters for ``[[ ... ]]``
and ``[% ... %]``. HTML autoescaping is off: it neither covers JSX
expression braces nor suits JavaScript literals. Templates call the
filters from :mod:`pagecraft.targets.escaping` for every prop instead.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .escaping import FILTERS

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def build_environment(templates_dir: Path | None = None) -> Environment:
    """Return a Jinja environment configured for TSX and Markdown output.

    Parameters
    ----------
    templates_dir : Path, optional
        Directory holding one sub-directory of templates per target plus the
        shared manifest template. Defaults to ``pagecraft/templates``.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
        block_start_string="[%",
        block_end_string="%]",
        variable_start_string="[[",
        variable_end_string="]]",
        comment_start_string="[#",
        comment_end_string="#]",
    )
    env.filters.update(FILTERS)
    return env


__all__ = ["TEMPLATES_DIR", "build_environment"]
