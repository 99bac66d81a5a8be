"""Unit tests for archive packaging.

These tests build archives in memory from compiled pages and inspect them
with :mod:`zipfile`. They cover archive completeness, reproducible bytes,
the install manifest, and the failure paths that must never leave partial
output behind.
"""

from __future__ import annotations

import io
import typing as typ
import zipfile

import pytest

from pagecraft._constants import ARCHIVE_TIMESTAMP
from pagecraft.compiler import CompiledPage, compile_document
from pagecraft.document import Document
from pagecraft.packaging import (
    BundlePackager,
    PackagingError,
    install_commands,
    write_archive,
)
from pagecraft.targets import BOOTSTRAP, SHADCN, Dependency

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

    from pagecraft.schema import SchemaRegistry


def _open(data: bytes) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(data))


def test_archive_holds_pages_and_manifest(
    two_page_document: Document, registry: SchemaRegistry
) -> None:
    """K pages produce K source files plus one manifest."""
    pages = compile_document(two_page_document, SHADCN, registry)
    data = BundlePackager(SHADCN).build(pages)
    with _open(data) as archive:
        assert archive.namelist() == [
            "README.md",
            "src/pages/home.tsx",
            "src/pages/about_us.tsx",
        ]
        assert archive.read("src/pages/home.tsx").decode("utf-8") == pages[0].file_text
        info = archive.getinfo("README.md")
        assert info.date_time == ARCHIVE_TIMESTAMP
        assert info.external_attr >> 16 == 0o644


def test_archive_bytes_are_reproducible(
    two_page_document: Document, registry: SchemaRegistry
) -> None:
    """Packaging the same document twice yields identical bytes."""
    first = BundlePackager(SHADCN).build(compile_document(two_page_document, SHADCN, registry))
    second = BundlePackager(SHADCN).build(compile_document(two_page_document, SHADCN, registry))
    assert first == second


def test_manifest_lists_install_commands(
    two_page_document: Document, registry: SchemaRegistry
) -> None:
    """The manifest installs the union of what every page imports."""
    pages = compile_document(two_page_document, SHADCN, registry)
    manifest = BundlePackager(SHADCN).render_manifest(pages)
    assert "# Generated Site (Shadcn UI (React))" in manifest
    assert "npx shadcn@latest add button progress label alert input" in manifest
    assert "npm install lucide-react" in manifest
    assert "| About Us | /about | src/pages/about_us.tsx |" in manifest


def test_bootstrap_manifest_installs_bootstrap(
    two_page_document: Document, registry: SchemaRegistry
) -> None:
    """Bootstrap archives always install the bootstrap package."""
    pages = compile_document(two_page_document, BOOTSTRAP, registry)
    manifest = BundlePackager(BOOTSTRAP).render_manifest(pages)
    assert "npm install bootstrap" in manifest
    assert "npx shadcn" not in manifest


def test_manifest_without_dependencies(registry: SchemaRegistry) -> None:
    """Pages without components need nothing installed."""
    pages = compile_document(Document.new(), SHADCN, registry)
    manifest = BundlePackager(SHADCN).render_manifest(pages)
    assert "No additional dependencies are required." in manifest
    assert "```bash" not in manifest


def test_install_commands_group_by_kind() -> None:
    """Dependencies of one kind share a command; unknown kinds are dropped."""
    commands = install_commands(
        [
            Dependency("shadcn", "card"),
            Dependency("npm", "lucide-react"),
            Dependency("shadcn", "button"),
            Dependency("shadcn", "card"),
            Dependency("pip", "requests"),
        ]
    )
    assert commands == ["npx shadcn@latest add card button", "npm install lucide-react"]


def test_duplicate_paths_are_rejected() -> None:
    """Two pages writing the same file abort packaging."""
    page = CompiledPage(
        identifier="home",
        component_name="Home",
        file_name="home.tsx",
        file_text="export default function Home() {}\n",
        title="Home",
        route="/",
        used_types=(),
    )
    with pytest.raises(PackagingError, match="Duplicate archive path"):
        BundlePackager(SHADCN).build([page, page])


def test_write_failures_become_packaging_errors(
    two_page_document: Document, registry: SchemaRegistry, mocker: MockerFixture
) -> None:
    """Low-level archive errors are reported as ``PackagingError``."""
    pages = compile_document(two_page_document, SHADCN, registry)
    mocker.patch.object(zipfile.ZipFile, "writestr", side_effect=OSError("disk full"))
    with pytest.raises(PackagingError, match="disk full"):
        BundlePackager(SHADCN).build(pages)


@pytest.mark.asyncio
async def test_package_runs_build_off_loop(
    two_page_document: Document, registry: SchemaRegistry
) -> None:
    """The async entry point returns the same bytes as ``build``."""
    pages = compile_document(two_page_document, SHADCN, registry)
    packager = BundlePackager(SHADCN)
    assert await packager.package(pages) == packager.build(pages)


def test_write_archive_creates_parents(tmp_path: Path) -> None:
    """Archives are written to fresh directories in one step."""
    destination = tmp_path / "dist" / "nested" / "site.zip"
    assert write_archive(b"PK", destination) == destination
    assert destination.read_bytes() == b"PK"
    assert sorted(path.name for path in destination.parent.iterdir()) == ["site.zip"]


def test_write_archive_failure_leaves_no_temp_file(tmp_path: Path) -> None:
    """A failed write raises and cleans up its temporary file."""
    destination = tmp_path / "site.zip"
    destination.mkdir()
    with pytest.raises(PackagingError, match="Failed to write archive"):
        write_archive(b"PK", destination)
    assert sorted(path.name for path in tmp_path.iterdir()) == ["site.zip"]
