"""In-memory page documents: nodes, zones, pages, and the document itself."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
import uuid

from pagecraft._constants import ZONE_KEY_TEMPLATE

if typ.TYPE_CHECKING:
    from pagecraft.schema import SchemaRegistry


class DocumentError(ValueError):
    """Raised when a document operation would break a document invariant."""


def zone_key(owner_id: str, zone_name: str) -> str:
    """Return the zone-map key addressing ``zone_name`` owned by ``owner_id``."""
    return ZONE_KEY_TEMPLATE.format(owner=owner_id, zone=zone_name)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


@dc.dataclass(slots=True)
class Node:
    """A typed, prop-bearing unit of page content.

    Attributes
    ----------
    id : str
        Opaque identifier, stable for the node's lifetime; it addresses the
        zones a container node owns.
    type : str
        Component kind, normally one registered in the schema registry.
    props : dict[str, Any]
        Prop values as edited. Absent fields fall back to the schema defaults
        when the node is resolved.
    """

    id: str
    type: str
    props: dict[str, typ.Any] = dc.field(default_factory=dict)

    @classmethod
    def create(
        cls,
        node_type: str,
        registry: SchemaRegistry,
        props: cabc.Mapping[str, typ.Any] | None = None,
        *,
        node_id: str | None = None,
    ) -> Node:
        """Build a node of ``node_type`` seeded with the schema defaults."""
        return cls(
            id=node_id or _new_id(node_type.lower()),
            type=node_type,
            props=registry.resolve_props(node_type, props),
        )


@dc.dataclass(slots=True)
class RootProps:
    """Page-level metadata edited through the page settings panel."""

    title: str = "Home"
    route: str = "/"
    canvas_color: str = "#ffffff"
    max_width: str = "max-w-6xl"

    @classmethod
    def from_mapping(
        cls, payload: cabc.Mapping[str, typ.Any] | None, *, registry: SchemaRegistry
    ) -> RootProps:
        """Build root props from editor-shaped keys, filling schema defaults."""
        resolved = registry.resolve_root_props(payload)
        return cls(
            title=resolved["pageTitle"],
            route=resolved["pageRoute"],
            canvas_color=resolved["canvasColor"],
            max_width=resolved["maxWidth"],
        )


@dc.dataclass(slots=True)
class Page:
    """One page: root metadata, the root zone, and the zone map.

    ``content`` is the implicit root zone. ``zones`` maps ``"owner:zone"``
    keys (see :func:`zone_key`) to child sequences. A key that is absent is
    an empty zone.
    """

    id: str
    root: RootProps = dc.field(default_factory=RootProps)
    content: list[Node] = dc.field(default_factory=list)
    zones: dict[str, list[Node]] = dc.field(default_factory=dict)

    def zone(self, owner_id: str, zone_name: str) -> list[Node]:
        """Return the nodes stored in a zone, or an empty list when absent."""
        return self.zones.get(zone_key(owner_id, zone_name), [])

    def child_zones(
        self, node: Node, registry: SchemaRegistry
    ) -> list[tuple[str, list[Node]]]:
        """Return ``(zone_name, nodes)`` for every zone ``node`` declares."""
        return [
            (name, self.zone(node.id, name))
            for name in registry.zone_names(node.type, node.props)
        ]

    def walk(self, registry: SchemaRegistry) -> cabc.Iterator[Node]:
        """Yield every node reachable from the root zone, depth first.

        Every declared zone of every container is followed. A node id seen
        twice is yielded once, which also stops cycles in malformed zone maps.
        """
        seen: set[str] = set()

        def _visit(nodes: cabc.Iterable[Node]) -> cabc.Iterator[Node]:
            for node in nodes:
                if node.id in seen:
                    continue
                seen.add(node.id)
                yield node
                for _name, children in self.child_zones(node, registry):
                    yield from _visit(children)

        yield from _visit(self.content)

    def reachable_zone_keys(self, registry: SchemaRegistry) -> set[str]:
        """Return the zone keys declared by reachable containers."""
        return {
            zone_key(node.id, name)
            for node in self.walk(registry)
            for name in registry.zone_names(node.type, node.props)
        }

    def orphaned_zones(self, registry: SchemaRegistry) -> list[str]:
        """Return stored zone keys that no reachable container declares.

        Orphaned zones appear when a section's column count shrinks or its
        owner is deleted. They are kept as-is and never emitted.
        """
        reachable = self.reachable_zone_keys(registry)
        return [key for key in self.zones if key not in reachable]


@dc.dataclass(slots=True)
class Document:
    """Ordered collection of pages; at least one page always exists."""

    pages: list[Page]

    def __post_init__(self) -> None:
        if not self.pages:
            msg = "A document must contain at least one page."
            raise DocumentError(msg)

    @classmethod
    def new(cls) -> Document:
        """Return a document holding the default home page."""
        return cls(pages=[Page(id="home")])

    def get_page(self, page_id: str) -> Page:
        """Return the page with ``page_id``."""
        for page in self.pages:
            if page.id == page_id:
                return page
        available = ", ".join(page.id for page in self.pages)
        msg = f"Unknown page '{page_id}'. Known pages: {available}"
        raise KeyError(msg)

    def add_page(self, *, title: str = "New Page", route: str = "/new-page") -> Page:
        """Append a page with default root props and an empty root zone."""
        page = Page(id=_new_id("page"), root=RootProps(title=title, route=route))
        self.pages.append(page)
        return page

    def remove_page(self, page_id: str) -> Page:
        """Remove and return the page with ``page_id``.

        Raises
        ------
        DocumentError
            If the page is unknown or is the only remaining page.
        """
        try:
            page = self.get_page(page_id)
        except KeyError as exc:
            raise DocumentError(str(exc.args[0])) from exc
        if len(self.pages) <= 1:
            msg = "Cannot delete the last page."
            raise DocumentError(msg)
        index = next(idx for idx, item in enumerate(self.pages) if item is page)
        return self.pages.pop(index)


__all__ = ["Document", "DocumentError", "Node", "Page", "RootProps", "zone_key"]
