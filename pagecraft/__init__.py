"""Compile visual-editor page documents into framework source files.

This package turns the node trees produced by a drag-and-drop page editor
into React page files for a chosen output framework and bundles them into a
ZIP archive with install instructions.

Exports
-------
- ``app``: Cyclopts application exposing the ``pagecraft`` subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pagecraft import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
