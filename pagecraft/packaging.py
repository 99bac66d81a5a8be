"""Bundle compiled pages and an install manifest into a ZIP archive.

The archive layout is fixed: ``README.md`` at the root describes how to
install what the generated pages import, and ``src/pages/`` holds one source
file per page. Archives are byte-for-byte reproducible: entries carry a
fixed timestamp and mode and are written in a stable order (manifest first,
then pages in document order).

Building happens in memory. Any failure raises :class:`PackagingError` and
no bytes are returned, so callers never see a partial archive.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import io
import logging
import os
import tempfile
import typing as typ
import zipfile
from pathlib import Path

from jinja2 import TemplateError

from pagecraft._constants import ARCHIVE_TIMESTAMP, MANIFEST_NAME, PAGES_DIR
from pagecraft.targets import build_environment

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from pagecraft.compiler import CompiledPage
    from pagecraft.targets import Dependency, TargetProfile

logger = logging.getLogger(__name__)

INSTALL_COMMANDS = {
    "shadcn": "npx shadcn@latest add",
    "npm": "npm install",
}
_FILE_MODE = 0o644


class PackagingError(RuntimeError):
    """Raised when the archive cannot be built or written."""


@dc.dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One file placed in the archive."""

    path: str
    text: str


def install_commands(dependencies: cabc.Iterable[Dependency]) -> list[str]:
    """Group dependencies by kind into one shell command per kind.

    Kinds appear in order of first encounter; unknown kinds are skipped with
    a warning.

    >>> from pagecraft.targets import Dependency
    >>> install_commands([Dependency("shadcn", "card"), Dependency("shadcn", "button")])
    ['npx shadcn@latest add card button']
    """
    grouped: dict[str, list[str]] = {}
    for dependency in dependencies:
        if dependency.kind not in INSTALL_COMMANDS:
            logger.warning("Ignoring dependency %s of unknown kind %r", dependency.name, dependency.kind)
            continue
        names = grouped.setdefault(dependency.kind, [])
        if dependency.name not in names:
            names.append(dependency.name)
    return [f"{INSTALL_COMMANDS[kind]} {' '.join(names)}" for kind, names in grouped.items()]


class BundlePackager:
    """Assemble compiled pages for one target into a downloadable archive."""

    def __init__(
        self, profile: TargetProfile, *, environment: Environment | None = None
    ) -> None:
        self.profile = profile
        self.env = environment or build_environment()
        self.manifest_template = self.env.get_template("manifest.md.jinja")

    @staticmethod
    def page_path(page: CompiledPage) -> str:
        """Return the archive path of a compiled page."""
        return f"{PAGES_DIR}/{page.file_name}"

    def used_types(self, pages: cabc.Sequence[CompiledPage]) -> list[str]:
        """Return the union of node types across ``pages`` in first-seen order."""
        union: list[str] = []
        for page in pages:
            for node_type in page.used_types:
                if node_type not in union:
                    union.append(node_type)
        return union

    def render_manifest(self, pages: cabc.Sequence[CompiledPage]) -> str:
        """Render the install instructions covering every page."""
        dependencies = self.profile.resolve_dependencies(self.used_types(pages))
        text = self.manifest_template.render(
            profile=self.profile,
            commands=install_commands(dependencies),
            pages=[
                {"title": page.title, "route": page.route, "path": self.page_path(page)}
                for page in pages
            ],
        )
        return text if text.endswith("\n") else f"{text}\n"

    def entries(self, pages: cabc.Sequence[CompiledPage]) -> list[ArchiveEntry]:
        """Return the manifest entry followed by one entry per page.

        Raises
        ------
        PackagingError
            If two pages would be written to the same path.
        """
        entries = [ArchiveEntry(MANIFEST_NAME, self.render_manifest(pages))]
        seen: set[str] = {MANIFEST_NAME}
        for page in pages:
            path = self.page_path(page)
            if path in seen:
                msg = f"Duplicate archive path '{path}'."
                raise PackagingError(msg)
            seen.add(path)
            entries.append(ArchiveEntry(path, page.file_text))
        return entries

    def build(self, pages: cabc.Sequence[CompiledPage]) -> bytes:
        """Return the archive bytes for ``pages``.

        Raises
        ------
        PackagingError
            If rendering the manifest or writing any entry fails.
        """
        buffer = io.BytesIO()
        try:
            entries = self.entries(pages)
            with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                for entry in entries:
                    info = zipfile.ZipInfo(entry.path, date_time=ARCHIVE_TIMESTAMP)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    info.external_attr = (_FILE_MODE & 0xFFFF) << 16
                    archive.writestr(info, entry.text.encode("utf-8"))
        except PackagingError:
            raise
        except (OSError, ValueError, TemplateError, zipfile.BadZipFile) as exc:
            msg = f"Failed to build {self.profile.name} archive: {exc}"
            raise PackagingError(msg) from exc
        logger.info(
            "Packaged %d page(s) for target %s (%d bytes)",
            len(pages),
            self.profile.name,
            buffer.tell(),
        )
        return buffer.getvalue()

    async def package(self, pages: cabc.Sequence[CompiledPage]) -> bytes:
        """Build the archive in a worker thread and return its bytes."""
        return await asyncio.to_thread(self.build, pages)


def write_archive(data: bytes, destination: Path) -> Path:
    """Atomically write archive ``data`` to ``destination``.

    The bytes go to a temporary file in the destination directory first and
    are moved into place only once fully written.

    Raises
    ------
    PackagingError
        If the directory cannot be created or the file cannot be written.
    """
    tmp_name: str | None = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "wb", dir=destination.parent, prefix=f".{destination.name}.", delete=False
        ) as handle:
            tmp_name = handle.name
            handle.write(data)
        os.replace(tmp_name, destination)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        msg = f"Failed to write archive '{destination}': {exc}"
        raise PackagingError(msg) from exc
    return destination


__all__ = [
    "INSTALL_COMMANDS",
    "ArchiveEntry",
    "BundlePackager",
    "PackagingError",
    "install_commands",
    "write_archive",
]
