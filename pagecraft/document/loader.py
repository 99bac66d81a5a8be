"""Read editor exports (YAML or JSON) into :class:`Document` values.

The loader accepts the shape the visual editor produces, where each page
wraps its tree in a ``data`` block::

    pages:
      - id: home
        data:
          root: {props: {pageTitle: Home, pageRoute: /}}
          content:
            - type: Section
              props: {id: section-1, columns: 2}
          zones:
            "section-1:col-0":
              - type: Card
                props: {id: card-1, title: Hello}

A flattened page (``id``, ``root``, ``content``, ``zones`` at the top level)
and a bare top-level list of pages are accepted too. Node ids are read from
``props.id``, then ``id``, then ``readOnly.puckId``; nodes without any id get
a stable positional id so their zones stay addressable.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
from ruamel.yaml import YAML

from pagecraft.schema import default_registry

from .models import Document, DocumentError, Node, Page, RootProps

if typ.TYPE_CHECKING:
    from pagecraft.schema import SchemaRegistry

JSON_SUFFIXES = frozenset({".json"})


def load_document(path: Path, *, registry: SchemaRegistry | None = None) -> Document:
    """Load a document export from ``path``.

    Parameters
    ----------
    path : Path
        YAML (``.yaml``/``.yml``) or JSON (``.json``) file.
    registry : SchemaRegistry, optional
        Registry used to fill prop defaults; defaults to the bundled one.

    Returns
    -------
    Document
        Parsed document with props conformed to their schemas.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    DocumentError
        If the payload does not describe at least one page.
    """
    if not path.exists():
        msg = f"Document file '{path}' not found."
        raise FileNotFoundError(msg)
    raw_bytes = path.read_bytes()
    if path.suffix.lower() in JSON_SUFFIXES:
        loaded = msgspec_json.decode(raw_bytes) if raw_bytes.strip() else {}
    else:
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        loaded = loader.load(raw_bytes.decode("utf-8")) or {}
    return parse_document(loaded, registry=registry)


def parse_document(
    payload: object, *, registry: SchemaRegistry | None = None
) -> Document:
    """Build a :class:`Document` from an already decoded payload."""
    registry = registry or default_registry()
    match payload:
        case list():
            pages_raw: object = payload
        case cabc.Mapping():
            pages_raw = payload.get("pages")
        case _:
            msg = "Top-level document structure must be a mapping or a list."
            raise DocumentError(msg)
    if not isinstance(pages_raw, list) or not pages_raw:
        msg = "No pages defined in document."
        raise DocumentError(msg)

    pages: list[Page] = []
    for index, entry in enumerate(pages_raw):
        if not isinstance(entry, cabc.Mapping):
            msg = f"Page #{index} must be a mapping."
            raise DocumentError(msg)
        pages.append(_build_page(entry, index=index, registry=registry))
    return Document(pages=pages)


def _build_page(
    entry: cabc.Mapping[str, typ.Any], *, index: int, registry: SchemaRegistry
) -> Page:
    page_id = str(entry.get("id") or f"page-{index}")
    data = entry.get("data")
    body: cabc.Mapping[str, typ.Any] = data if isinstance(data, cabc.Mapping) else entry

    root_raw = body.get("root") or {}
    if isinstance(root_raw, cabc.Mapping) and isinstance(
        root_raw.get("props"), cabc.Mapping
    ):
        root_raw = root_raw["props"]
    if not isinstance(root_raw, cabc.Mapping):
        msg = f"Page '{page_id}' root props must be a mapping."
        raise DocumentError(msg)

    content = _build_nodes(
        body.get("content"), where=f"{page_id}:content", registry=registry
    )
    zones: dict[str, list[Node]] = {}
    zones_raw = body.get("zones") or {}
    if not isinstance(zones_raw, cabc.Mapping):
        msg = f"Page '{page_id}' zones must be a mapping."
        raise DocumentError(msg)
    for key, nodes_raw in zones_raw.items():
        zones[str(key)] = _build_nodes(nodes_raw, where=str(key), registry=registry)

    return Page(
        id=page_id,
        root=RootProps.from_mapping(root_raw, registry=registry),
        content=content,
        zones=zones,
    )


def _build_nodes(
    value: object, *, where: str, registry: SchemaRegistry
) -> list[Node]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"Zone '{where}' must be a list of nodes."
        raise DocumentError(msg)
    nodes: list[Node] = []
    for index, item in enumerate(value):
        if not isinstance(item, cabc.Mapping):
            msg = f"Node #{index} in zone '{where}' must be a mapping."
            raise DocumentError(msg)
        nodes.append(_build_node(item, where=f"{where}/{index}", registry=registry))
    return nodes


def _build_node(
    item: cabc.Mapping[str, typ.Any], *, where: str, registry: SchemaRegistry
) -> Node:
    node_type = item.get("type")
    if not isinstance(node_type, str) or not node_type:
        msg = f"Node at '{where}' is missing a 'type'."
        raise DocumentError(msg)
    props_raw = item.get("props") or {}
    if not isinstance(props_raw, cabc.Mapping):
        msg = f"Node at '{where}' props must be a mapping."
        raise DocumentError(msg)
    props = {key: value for key, value in props_raw.items() if key != "id"}
    return Node(
        id=_resolve_node_id(item, props_raw, where=where),
        type=node_type,
        props=registry.resolve_props(node_type, props),
    )


def _resolve_node_id(
    item: cabc.Mapping[str, typ.Any],
    props: cabc.Mapping[str, typ.Any],
    *,
    where: str,
) -> str:
    read_only = item.get("readOnly")
    candidates = (
        props.get("id"),
        item.get("id"),
        read_only.get("puckId") if isinstance(read_only, cabc.Mapping) else None,
    )
    for candidate in candidates:
        if candidate not in (None, ""):
            return str(candidate)
    return f"node@{where}"


__all__ = ["load_document", "parse_document"]
