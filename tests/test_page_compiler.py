"""Unit tests for compiling pages into target source files.

These tests cover identifier derivation, import collection across nested
zones, graceful handling of unsupported types, and deterministic output.
"""

from __future__ import annotations

import pytest

from pagecraft.compiler import (
    PageCompiler,
    collect_types,
    compile_document,
    component_name,
    derive_identifier,
    page_component_name,
    unique_identifier,
)
from pagecraft.document import Document, Node, Page, RootProps, parse_document
from pagecraft.schema import SchemaRegistry
from pagecraft.targets import BOOTSTRAP, SHADCN, TARGETS, ImportSpec, TargetProfile


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("About Us!", "about_us"),
        ("Café Menu", "cafe_menu"),
        ("2024 Roadmap", "page_2024_roadmap"),
        ("  ***  ", "untitled"),
        ("", "untitled"),
        (None, "untitled"),
        ("日本語", "untitled"),
    ],
)
def test_derive_identifier(title: str | None, expected: str) -> None:
    """Titles map to safe identifiers with a placeholder fallback."""
    assert derive_identifier(title) == expected


def test_component_name_is_pascal_case() -> None:
    """Component names join identifier parts in PascalCase."""
    assert component_name("page_2024_roadmap") == "Page2024Roadmap"
    assert component_name("untitled") == "Untitled"


def test_unique_identifier_appends_suffixes() -> None:
    """Clashing identifiers gain numeric suffixes."""
    used: set[str] = set()
    assert [unique_identifier("home", used) for _ in range(3)] == [
        "home",
        "home_2",
        "home_3",
    ]


def test_imports_appear_exactly_once(registry: SchemaRegistry) -> None:
    """A type used many times, at any depth, is imported once."""
    section = Node.create("Section", registry, {"columns": 2}, node_id="s")
    page = Page(
        id="home",
        content=[Node.create("Card", registry, node_id="top"), section],
        zones={
            "s:col-0": [Node.create("Card", registry, node_id="left")],
            "s:col-1": [Node.create("Card", registry, node_id="right")],
        },
    )
    document = Document(pages=[page])
    text = PageCompiler(SHADCN, registry).compile(page, document).file_text
    assert text.count('from "@/components/ui/card";') == 1
    assert text.count('import React from "react";') == 1
    assert text.count("<Card>") == 3


def test_companion_and_auxiliary_imports(
    two_page_document: Document, registry: SchemaRegistry
) -> None:
    """Inputs pull in Label; alerts pull in their icon module."""
    about = two_page_document.get_page("about")
    compiled = PageCompiler(SHADCN, registry).compile(about, two_page_document)
    assert 'import { Label } from "@/components/ui/label";' in compiled.file_text
    assert (
        'import { Alert, AlertDescription, AlertTitle } from "@/components/ui/alert";'
        in compiled.file_text
    )
    assert 'import { AlertCircle } from "lucide-react";' in compiled.file_text
    assert compiled.used_types == ("Alert", "Input", "Label")


def test_unsupported_types_are_skipped(registry: SchemaRegistry) -> None:
    """Unknown types contribute neither markup nor imports."""
    carousel = Node(id="c", type="Carousel", props={})
    page = Page(id="home", content=[carousel, Node.create("Badge", registry, node_id="b")])
    compiled = PageCompiler(SHADCN, registry).compile(page, Document(pages=[page]))
    assert "Carousel" not in compiled.file_text
    assert "<Badge" in compiled.file_text
    assert compiled.used_types == ("Badge",)


def test_orphaned_zones_are_not_compiled(registry: SchemaRegistry) -> None:
    """Children of zones beyond the column count are neither emitted nor imported."""
    section = Node.create("Section", registry, {"columns": 1}, node_id="s")
    page = Page(
        id="home",
        content=[section],
        zones={"s:col-1": [Node.create("Alert", registry, node_id="stale")]},
    )
    compiled = PageCompiler(SHADCN, registry).compile(page, Document(pages=[page]))
    assert "Alert" not in compiled.file_text
    assert collect_types(page, registry) == ["Section"]


def test_page_shell_uses_root_props(registry: SchemaRegistry) -> None:
    """The page wrapper carries the route, canvas color and width."""
    page = Page(
        id="about",
        root=RootProps(title="About", route="/about", canvas_color="#f0f0f0"),
    )
    compiled = PageCompiler(SHADCN, registry).compile(page, Document(pages=[page]))
    assert compiled.file_name == "about.tsx"
    assert 'export const route = "/about";' in compiled.file_text
    assert "export default function About() {" in compiled.file_text
    assert 'backgroundColor: "#f0f0f0"' in compiled.file_text
    assert 'className="mx-auto max-w-6xl"' in compiled.file_text
    assert compiled.file_text.endswith("\n")


def test_bootstrap_page_imports_stylesheet_once(
    three_column_document: Document, registry: SchemaRegistry
) -> None:
    """Bootstrap pages import only the stylesheet and bundle, once each."""
    page = three_column_document.pages[0]
    text = PageCompiler(BOOTSTRAP, registry).compile(page, three_column_document).file_text
    assert text.count('import "bootstrap/dist/css/bootstrap.min.css";') == 1
    assert text.count('import "bootstrap/dist/js/bootstrap.bundle.min.js";') == 1
    assert 'className="container"' in text


@pytest.mark.parametrize("profile", TARGETS.values(), ids=list(TARGETS))
def test_compilation_is_deterministic(
    two_page_document: Document, registry: SchemaRegistry, profile: TargetProfile
) -> None:
    """Compiling every page twice yields identical text on each target."""
    first = compile_document(two_page_document, profile, registry)
    second = compile_document(two_page_document, profile, registry)
    assert first == second
    compiler = PageCompiler(profile, registry)
    for page in two_page_document.pages:
        assert compiler.compile(page, two_page_document) == compiler.compile(
            page, two_page_document
        )


@pytest.mark.parametrize(
    ("title", "node_type", "expected"),
    [
        ("Card", "Card", "CardPage"),
        ("Alert", "Alert", "AlertPage"),
        ("Alert Circle", "Alert", "AlertCirclePage"),
        ("Label", "Input", "LabelPage"),
        ("React", "Badge", "ReactPage"),
        ("Card", "Badge", "Card"),
    ],
)
def test_page_name_never_shadows_an_import(
    registry: SchemaRegistry, title: str, node_type: str, expected: str
) -> None:
    """A page named after an imported symbol gets a distinct component name."""
    page = Page(
        id="p",
        root=RootProps(title=title),
        content=[Node.create(node_type, registry, node_id="n")],
    )
    compiled = PageCompiler(SHADCN, registry).compile(page, Document(pages=[page]))
    assert compiled.component_name == expected
    assert f"export default function {expected}() {{" in compiled.file_text
    bound = {
        binding
        for spec in SHADCN.resolve_imports(compiled.used_types)
        for binding in spec.bindings
    }
    assert expected not in bound


def test_page_component_name_keeps_free_names() -> None:
    """Names no import binds are left unchanged."""
    imports = [ImportSpec("react", default="React")]
    assert page_component_name("about_us", imports) == "AboutUs"
    assert page_component_name("react", imports) == "ReactPage"


def test_non_finite_numbers_do_not_abort_compilation(registry: SchemaRegistry) -> None:
    """Sections with unusable numeric props still compile with defaults."""
    document = parse_document(
        {
            "pages": [
                {
                    "id": "home",
                    "content": [
                        {"type": "Section", "props": {"id": "a", "columns": "Infinity"}},
                        {"type": "Section", "props": {"id": "b", "columns": "nan"}},
                        {"type": "Section", "props": {"id": "c", "columns": "1e400"}},
                        {"type": "Section", "props": {"id": "d", "gap": 10**400}},
                        {"type": "Progress", "props": {"id": "p", "value": "-Infinity"}},
                    ],
                }
            ]
        },
        registry=registry,
    )
    for profile in TARGETS.values():
        (compiled,) = compile_document(document, profile, registry)
        assert compiled.used_types[0] == "Section"
        assert "Infinity" not in compiled.file_text


def test_compile_document_deduplicates_identifiers(registry: SchemaRegistry) -> None:
    """Pages with clashing titles still get one file each."""
    document = parse_document(
        {
            "pages": [
                {"id": "a", "root": {"pageTitle": "Home"}},
                {"id": "b", "root": {"pageTitle": "home!"}},
                {"id": "c", "root": {"pageTitle": "???"}},
            ]
        },
        registry=registry,
    )
    compiled = compile_document(document, SHADCN, registry)
    assert [page.file_name for page in compiled] == ["home.tsx", "home_2.tsx", "untitled.tsx"]
    assert [page.component_name for page in compiled] == ["Home", "Home2", "Untitled"]
