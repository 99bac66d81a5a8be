"""Export a whole document for one target as a downloadable archive.

:func:`export` is the single operation the editor calls on publish: it
compiles every page, packages the results, and resolves to an
:class:`ExportResult` or raises :class:`ExportError`. Per-node problems never
reach this level; they degrade to empty output inside the compiler.

Example
-------
>>> import asyncio
>>> from pagecraft.document import Document
>>> result = asyncio.run(export(Document.new(), "bootstrap"))  # doctest: +SKIP
>>> result.archive_name  # doctest: +SKIP
'bootstrap-project-export.zip'
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from pagecraft._constants import ARCHIVE_NAME_TEMPLATE
from pagecraft.compiler import CompiledPage, compile_document
from pagecraft.packaging import BundlePackager, PackagingError
from pagecraft.schema import default_registry
from pagecraft.targets import get_target

if typ.TYPE_CHECKING:
    from pagecraft.document import Document
    from pagecraft.schema import SchemaRegistry
    from pagecraft.targets import TargetProfile

logger = logging.getLogger(__name__)


class ExportError(RuntimeError):
    """Raised when an export cannot produce a complete archive."""


@dc.dataclass(frozen=True, slots=True)
class ExportResult:
    """A finished export: the archive bytes plus what went into them."""

    target: str
    archive: bytes
    archive_name: str
    pages: tuple[CompiledPage, ...]


async def export(
    document: Document,
    target_name: str,
    *,
    registry: SchemaRegistry | None = None,
    targets: cabc.Mapping[str, TargetProfile] | None = None,
    timeout: float | None = None,
    archive_name_template: str = ARCHIVE_NAME_TEMPLATE,
) -> ExportResult:
    """Compile and package every page of ``document`` for ``target_name``.

    Parameters
    ----------
    document : Document
        Read snapshot of the document; it must not change during the call.
    target_name : str
        Name of the target profile, e.g. ``"shadcn"`` or ``"bootstrap"``.
    registry : SchemaRegistry, optional
        Component schemas; defaults to the bundled catalogue.
    targets : Mapping[str, TargetProfile], optional
        Profile table to resolve ``target_name`` against.
    timeout : float, optional
        Seconds allowed for packaging; exceeding it fails the whole export.
    archive_name_template : str, optional
        Format string for the archive filename, given ``target``.

    Returns
    -------
    ExportResult
        Archive bytes, suggested filename, and the compiled pages.

    Raises
    ------
    TargetNotFoundError
        If ``target_name`` is not a known profile.
    ExportError
        If packaging fails or times out.
    """
    profile = get_target(target_name, targets)
    compiled = compile_document(document, profile, registry or default_registry())
    packager = BundlePackager(profile)
    try:
        archive = await asyncio.wait_for(packager.package(compiled), timeout)
    except TimeoutError as exc:
        msg = f"Export for target '{profile.name}' timed out after {timeout}s."
        raise ExportError(msg) from exc
    except PackagingError as exc:
        raise ExportError(str(exc)) from exc

    archive_name = archive_name_template.format(target=profile.name)
    logger.info("Exported %d page(s) to %s", len(compiled), archive_name)
    return ExportResult(
        target=profile.name,
        archive=archive,
        archive_name=archive_name,
        pages=tuple(compiled),
    )


__all__ = ["ExportError", "ExportResult", "export"]
