"""High-level orchestration for compiling pages into target source files.

This module turns one :class:`~pagecraft.document.Page` into a complete
source file for a :class:`~pagecraft.targets.TargetProfile`: it derives a
file-safe identifier from the page title, collects every node type the page
reaches (following all zones of every container), resolves the imports those
types need, emits the root zone through :class:`TreeEmitter`, and wraps the
result in the target's page template.

Example
-------
>>> from pagecraft.document import Document
>>> from pagecraft.schema import default_registry
>>> from pagecraft.targets import SHADCN
>>> compiler = PageCompiler(SHADCN, default_registry())
>>> document = Document.new()
>>> compiled = compiler.compile(document.pages[0], document)
>>> compiled.file_name
'home.tsx'
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import re
import typing as typ
import unicodedata

from pagecraft._constants import PLACEHOLDER_IDENTIFIER
from pagecraft.targets import build_environment

from .emitter import TreeEmitter
from .models import CompiledPage

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from pagecraft.document import Document, Node, Page
    from pagecraft.schema import SchemaRegistry
    from pagecraft.targets import ImportSpec, TargetProfile

logger = logging.getLogger(__name__)

_IDENTIFIER_UNSAFE = re.compile(r"[^a-z0-9]+")
PAGE_SUFFIX = "Page"


def derive_identifier(title: str | None) -> str:
    """Return a lowercase, underscore-separated identifier for ``title``.

    Accents are folded to ASCII, every run of other characters becomes one
    underscore, and a leading digit gains a ``page_`` prefix so the value
    also works as a code identifier. Titles without any letters or digits
    fall back to ``PLACEHOLDER_IDENTIFIER``.

    >>> derive_identifier("About Us!")
    'about_us'
    >>> derive_identifier("  ***  ")
    'untitled'
    """
    folded = unicodedata.normalize("NFKD", title or "")
    ascii_title = folded.encode("ascii", "ignore").decode("ascii").casefold()
    identifier = _IDENTIFIER_UNSAFE.sub("_", ascii_title).strip("_")
    if not identifier:
        return PLACEHOLDER_IDENTIFIER
    if identifier[0].isdigit():
        return f"page_{identifier}"
    return identifier


def component_name(identifier: str) -> str:
    """Return the PascalCase component name for ``identifier``.

    >>> component_name("about_us")
    'AboutUs'
    """
    return "".join(part[:1].upper() + part[1:] for part in identifier.split("_") if part)


def page_component_name(identifier: str, imports: cabc.Iterable[ImportSpec]) -> str:
    """Return the component name for ``identifier`` that no import binds.

    A page titled after a component it uses, such as ``Card``, would declare
    the same name twice; such names gain a ``Page`` suffix.

    >>> from pagecraft.targets import ImportSpec
    >>> page_component_name("card", [ImportSpec("ui/card", names=("Card",))])
    'CardPage'
    """
    name = component_name(identifier)
    bound = {binding for spec in imports for binding in spec.bindings}
    while name in bound:
        name += PAGE_SUFFIX
    return name


def unique_identifier(base: str, used: set[str]) -> str:
    """Return ``base`` or ``base_N`` not yet in ``used``, recording the result."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}_{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def collect_types(
    page: Page,
    registry: SchemaRegistry,
    *,
    supports: cabc.Callable[[str], bool] | None = None,
) -> list[str]:
    """Return the distinct node types reachable from the page root zone.

    Every declared zone of every container is followed, using the same
    resolution as the emitter. Companion types follow the type that needs
    them. When ``supports`` is given, unsupported nodes are skipped together
    with their subtrees, mirroring what the emitter leaves out.
    """
    found: list[str] = []
    seen_nodes: set[str] = set()

    def _add(node_type: str) -> None:
        if node_type not in found:
            found.append(node_type)

    def _visit(nodes: cabc.Iterable[Node]) -> None:
        for node in nodes:
            if node.id in seen_nodes:
                continue
            if supports is not None and not supports(node.type):
                continue
            seen_nodes.add(node.id)
            _add(node.type)
            for companion in registry.companions(node.type):
                _add(companion)
            for _name, children in page.child_zones(node, registry):
                _visit(children)

    _visit(page.content)
    return found


class PageCompiler:
    """Compile pages of a document for one target profile."""

    def __init__(
        self,
        profile: TargetProfile,
        registry: SchemaRegistry,
        *,
        environment: Environment | None = None,
    ) -> None:
        """Initialize the compiler with its target and schema registry.

        Parameters
        ----------
        profile : TargetProfile
            Target whose import table, rules, and page template are used.
        registry : SchemaRegistry
            Component schemas supplying defaults, zones, and companions.
        environment : Environment, optional
            Jinja environment shared with the emitter; defaults to one built
            from the bundled templates.
        """
        self.profile = profile
        self.registry = registry
        self.env = environment or build_environment()
        self.emitter = TreeEmitter(profile, registry, environment=self.env)
        self.template = self.env.get_template(profile.template_path(profile.page_template))

    def compile(
        self, page: Page, document: Document, *, identifier: str | None = None
    ) -> CompiledPage:
        """Return the generated source file for ``page``.

        Parameters
        ----------
        page : Page
            Page to compile; it is read, never modified.
        document : Document
            Document the page belongs to.
        identifier : str, optional
            Identifier to use instead of the one derived from the title;
            :func:`compile_document` passes de-duplicated identifiers here.
        """
        del document
        identifier = identifier or derive_identifier(page.root.title)
        used_types = collect_types(page, self.registry, supports=self.profile.supports)
        imports = self.profile.resolve_imports(used_types)
        name = page_component_name(identifier, imports)
        body = self.emitter.emit_zone(page.content, page)
        text = self.template.render(
            imports=imports,
            root=page.root,
            body=body,
            component_name=name,
            **self.profile.build_root_context(page.root),
        )
        if not text.endswith("\n"):
            text += "\n"
        logger.debug(
            "Compiled page %s as %s (%d types)", page.id, identifier, len(used_types)
        )
        return CompiledPage(
            identifier=identifier,
            component_name=name,
            file_name=f"{identifier}{self.profile.file_extension}",
            file_text=text,
            title=page.root.title,
            route=page.root.route,
            used_types=tuple(used_types),
        )


def compile_document(
    document: Document, profile: TargetProfile, registry: SchemaRegistry
) -> list[CompiledPage]:
    """Compile every page of ``document`` in order with unique identifiers.

    Pages whose titles derive the same identifier get ``_2``, ``_3``, ...
    suffixes so each page maps to its own file.
    """
    compiler = PageCompiler(profile, registry)
    used: set[str] = set()
    compiled: list[CompiledPage] = []
    for page in document.pages:
        identifier = unique_identifier(derive_identifier(page.root.title), used)
        compiled.append(compiler.compile(page, document, identifier=identifier))
    return compiled


__all__ = [
    "PageCompiler",
    "collect_types",
    "compile_document",
    "component_name",
    "derive_identifier",
    "page_component_name",
    "unique_identifier",
]
