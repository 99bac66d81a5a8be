"""Cyclopts CLI entrypoint for compiling page documents into project archives.

The ``pagecraft`` console script defined here loads a document exported by
the visual editor (YAML or JSON), compiles every page for a target profile,
and writes the resulting ZIP archive. ``preview`` prints one compiled page,
``targets`` lists the available profiles, and ``check`` reports problems the
compiler would silently skip.

Examples
--------
Export a document with the configured defaults:

>>> from pagecraft.cli import app
>>> app.run(["export", "site.yaml"])  # doctest: +SKIP

Preview the about page as Bootstrap markup:

>>> app.run(
...     ["preview", "site.yaml", "--page", "about", "--target", "bootstrap"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .compiler import PageCompiler, compile_document
from .config import load_export_config
from .document import load_document
from .exporter import export as export_document
from .packaging import write_archive
from .schema import default_registry
from .targets import TARGETS, get_target

DEFAULT_CONFIG = Path("config/pagecraft.yaml")

logger = logging.getLogger(__name__)

app = App(name="pagecraft", config=cyclopts.config.Env("PAGECRAFT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Compile every page of a document and write the archive.")
def export(
    document: typ.Annotated[Path, Parameter(help="Path to the page document")],
    *,
    target: typ.Annotated[
        str | None, Parameter(help="Target profile name", env_var="PAGECRAFT_TARGET")
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="PAGECRAFT_OUTPUT_DIR"),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to export config", env_var="PAGECRAFT_CONFIG")
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Export a document as a ZIP archive of generated source files.

    Parameters
    ----------
    document : Path
        YAML or JSON document in the editor's export shape.
    target : str or None, optional
        Target profile; defaults to ``default_target`` from the config file.
    output_dir : Path or None, optional
        Directory receiving the archive; defaults to ``output_dir`` from the
        config file.
    config : Path, optional
        Path to ``pagecraft.yaml`` (overridable via ``PAGECRAFT_CONFIG``).
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the archive and prints its path.

    Raises
    ------
    TargetNotFoundError
        If the requested target is unknown.
    ExportError
        If packaging fails or exceeds the configured timeout.
    """
    _configure_logging(verbose=verbose)
    export_config = load_export_config(config)
    loaded = load_document(document)
    result = asyncio.run(
        export_document(
            loaded,
            target or export_config.default_target,
            timeout=export_config.timeout,
            archive_name_template=export_config.archive_name,
        )
    )
    destination = (output_dir or export_config.output_dir) / result.archive_name
    written = write_archive(result.archive, destination)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print the compiled source of one page.")
def preview(
    document: typ.Annotated[Path, Parameter(help="Path to the page document")],
    *,
    page: typ.Annotated[
        str | None, Parameter(help="Page identifier (defaults to the first page)")
    ] = None,
    target: typ.Annotated[
        str, Parameter(help="Target profile name", env_var="PAGECRAFT_TARGET")
    ] = "shadcn",
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Compile a single page and print the generated file to stdout."""
    _configure_logging(verbose=verbose)
    loaded = load_document(document)
    selected = loaded.get_page(page) if page else loaded.pages[0]
    compiler = PageCompiler(get_target(target), default_registry())
    print(compiler.compile(selected, loaded).file_text, end="")


@app.command(help="List the available target profiles.")
def targets() -> None:
    """Print each target profile with its label and the types it supports."""
    for name, profile in sorted(TARGETS.items()):
        print(f"{name}: {profile.label} ({', '.join(sorted(profile.rules))})")


@app.command(help="Report orphaned zones and unknown node types in a document.")
def check(
    document: typ.Annotated[Path, Parameter(help="Path to the page document")],
    *,
    target: typ.Annotated[
        str | None,
        Parameter(help="Also report types this target cannot emit"),
    ] = None,
) -> None:
    """Inspect a document for content the compiler would leave out.

    Orphaned zones are reported for information only; they are kept in the
    document and never emitted. Unknown node types, or types the selected
    target does not support, make the command exit with status 1.

    Raises
    ------
    SystemExit
        With status 1 when at least one node would be dropped.
    """
    registry = default_registry()
    loaded = load_document(document, registry=registry)
    profile = get_target(target) if target else None
    problems = 0
    for page in loaded.pages:
        for key in page.orphaned_zones(registry):
            print(f"{page.id}: orphaned zone {key}")
        for node in page.walk(registry):
            if node.type not in registry:
                logger.warning("Unknown node type %r on page %s", node.type, page.id)
                print(f"{page.id}: unknown type {node.type} ({node.id})")
                problems += 1
            elif profile is not None and not profile.supports(node.type):
                print(f"{page.id}: {profile.name} cannot emit {node.type} ({node.id})")
                problems += 1
    if problems:
        raise SystemExit(1)
    compiled = compile_document(loaded, profile or get_target("shadcn"), registry)
    print(f"ok: {len(compiled)} page(s)")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pagecraft` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
