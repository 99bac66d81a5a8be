"""The component catalogue and the registry that answers questions about it.

The catalogue mirrors what the visual editor offers: one layout container
(``Section``) whose column count decides how many zones it owns, plus a set
of leaf widgets. The compiler only relies on three things from here: default
prop values, container zone names, and implicit companion types.

Examples
--------
>>> from pagecraft.schema import default_registry
>>> registry = default_registry()
>>> registry.zone_names("Section", {"columns": 3})
('col-0', 'col-1', 'col-2')
>>> registry.resolve_props("Badge", {})["text"]
'Badge'
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import functools
import math
import typing as typ
from types import MappingProxyType

from pagecraft._constants import COLUMN_ZONE_TEMPLATE, MAX_COLUMNS

from .models import ComponentSchema, FieldDescriptor, FieldOption, SchemaError

ROOT_TYPE = "root"
SECTION_TYPE = "Section"
LABEL_TYPE = "Label"


def column_count(props: cabc.Mapping[str, typ.Any]) -> int:
    """Return the section column count clamped to ``1..MAX_COLUMNS``."""
    value = _coerce_number(props.get("columns"), 1)
    return max(1, min(MAX_COLUMNS, int(value)))


def _section_zones(props: cabc.Mapping[str, typ.Any]) -> tuple[str, ...]:
    return tuple(
        COLUMN_ZONE_TEMPLATE.format(index=index) for index in range(column_count(props))
    )


def _options(*pairs: tuple[str, str]) -> tuple[FieldOption, ...]:
    return tuple(FieldOption(label=label, value=value) for label, value in pairs)


def _is_finite(number: float | int) -> bool:
    try:
        return math.isfinite(number)
    except OverflowError:
        return False


def _coerce_number(value: object, fallback: float | int) -> float | int:
    """Coerce ``value`` to a finite int or float, else return ``fallback``.

    Infinities, NaN, and integers too large for a float all count as failures.
    """
    match value:
        case bool():
            return fallback
        case int() | float():
            return value if _is_finite(value) else fallback
        case str() as text:
            try:
                number = float(text.strip())
            except ValueError:
                return fallback
            if not _is_finite(number):
                return fallback
            return int(number) if number.is_integer() else number
        case _:
            return fallback


class SchemaRegistry:
    """Read-only lookup over component schemas and the page root schema."""

    def __init__(
        self, schemas: cabc.Iterable[ComponentSchema], *, root: ComponentSchema
    ) -> None:
        table: dict[str, ComponentSchema] = {}
        for schema in schemas:
            if schema.type in table:
                msg = f"Duplicate component schema for type '{schema.type}'."
                raise SchemaError(msg)
            table[schema.type] = schema
        self._schemas = MappingProxyType(table)
        self.root = root

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._schemas

    @property
    def types(self) -> tuple[str, ...]:
        """Return every registered component type in catalogue order."""
        return tuple(self._schemas)

    def get(self, node_type: str) -> ComponentSchema | None:
        """Return the schema for ``node_type`` or ``None`` when unregistered."""
        return self._schemas.get(node_type)

    def categories(self) -> dict[str, list[str]]:
        """Group component types by their editor palette category."""
        grouped: dict[str, list[str]] = {}
        for schema in self._schemas.values():
            grouped.setdefault(schema.category, []).append(schema.type)
        return grouped

    def defaults_for(self, node_type: str) -> dict[str, typ.Any]:
        """Return a fresh copy of the default props for ``node_type``."""
        schema = self.get(node_type)
        if schema is None:
            return {}
        return copy.deepcopy(dict(schema.default_props))

    def resolve_props(
        self, node_type: str, props: cabc.Mapping[str, typ.Any] | None
    ) -> dict[str, typ.Any]:
        """Merge ``props`` over the type defaults and coerce declared fields.

        Unregistered types keep their props untouched; the compiler decides
        separately whether a target can emit them.
        """
        schema = self.get(node_type)
        if schema is None:
            return dict(props or {})
        return _conform(schema, props)

    def resolve_root_props(
        self, props: cabc.Mapping[str, typ.Any] | None
    ) -> dict[str, typ.Any]:
        """Merge page-level props over the root defaults."""
        return _conform(self.root, props)

    def zone_names(
        self, node_type: str, props: cabc.Mapping[str, typ.Any] | None
    ) -> tuple[str, ...]:
        """Return the zones a node of ``node_type`` owns given its props."""
        schema = self.get(node_type)
        if schema is None or not schema.is_container:
            return ()
        return schema.zone_names(self.resolve_props(node_type, props))

    def companions(self, node_type: str) -> tuple[str, ...]:
        """Return the types ``node_type`` implicitly requires."""
        schema = self.get(node_type)
        return schema.companions if schema else ()


def _conform(
    schema: ComponentSchema, props: cabc.Mapping[str, typ.Any] | None
) -> dict[str, typ.Any]:
    resolved = copy.deepcopy(dict(schema.default_props))
    for key, value in (props or {}).items():
        if value is None:
            continue
        resolved[key] = value
    for field in schema.fields:
        default = schema.default_props.get(field.name)
        current = resolved.get(field.name)
        match field.kind:
            case "number":
                resolved[field.name] = _coerce_number(current, default)
            case "select" | "radio" if field.options:
                if current not in field.allowed_values:
                    resolved[field.name] = default
            case "array":
                resolved[field.name] = _conform_items(field, current, default)
            case _:
                resolved[field.name] = "" if current is None else str(current)
    return resolved


def _conform_items(
    field: FieldDescriptor, value: object, default: object
) -> list[dict[str, str]]:
    if not isinstance(value, list | tuple):
        return [dict(entry) for entry in typ.cast("tuple[dict[str, str], ...]", default or ())]
    items: list[dict[str, str]] = []
    for entry in value:
        if not isinstance(entry, cabc.Mapping):
            continue
        items.append(
            {
                sub.name: "" if entry.get(sub.name) is None else str(entry[sub.name])
                for sub in field.array_fields
            }
        )
    return items


_VARIANTS = _options(
    ("Default", "default"),
    ("Destructive", "destructive"),
    ("Outline", "outline"),
    ("Secondary", "secondary"),
)

ROOT_SCHEMA = ComponentSchema(
    type=ROOT_TYPE,
    category="Pages",
    default_props=MappingProxyType(
        {
            "pageTitle": "Home",
            "pageRoute": "/",
            "canvasColor": "#ffffff",
            "maxWidth": "max-w-6xl",
        }
    ),
    fields=(
        FieldDescriptor("pageTitle", "text", "Page Title"),
        FieldDescriptor("pageRoute", "text", "Page Route (e.g. /about)"),
        FieldDescriptor("canvasColor", "text", "Canvas Background"),
        FieldDescriptor(
            "maxWidth",
            "select",
            "Max Width",
            _options(
                ("Standard (1200px)", "max-w-6xl"),
                ("Wide (1500px)", "max-w-7xl"),
                ("Full Width", "max-w-full"),
            ),
        ),
    ),
)

COMPONENT_SCHEMAS: tuple[ComponentSchema, ...] = (
    ComponentSchema(
        type=SECTION_TYPE,
        category="Structure",
        default_props=MappingProxyType(
            {
                "sectionTitle": "New Section",
                "columns": 1,
                "gap": 24,
                "paddingY": 64,
                "bgColor": "transparent",
            }
        ),
        fields=(
            FieldDescriptor("sectionTitle", "text", "Section Title"),
            FieldDescriptor("columns", "number", "Cols (1-6)"),
            FieldDescriptor("gap", "number", "Gap (px)"),
            FieldDescriptor("paddingY", "number", "Vertical Padding"),
            FieldDescriptor("bgColor", "text", "BG Color"),
        ),
        zones=_section_zones,
    ),
    ComponentSchema(
        type="Card",
        category="Layout",
        default_props=MappingProxyType(
            {
                "title": "Title",
                "description": "Subtitle",
                "content": "Main body text...",
                "footer": "",
            }
        ),
        fields=(
            FieldDescriptor("title", "text"),
            FieldDescriptor("description", "text"),
            FieldDescriptor("content", "textarea"),
            FieldDescriptor("footer", "text"),
        ),
    ),
    ComponentSchema(
        type="Separator",
        category="Layout",
        default_props=MappingProxyType({"orientation": "horizontal"}),
        fields=(
            FieldDescriptor(
                "orientation",
                "select",
                options=_options(("Horizontal", "horizontal"), ("Vertical", "vertical")),
            ),
        ),
    ),
    ComponentSchema(
        type="Accordion",
        category="Layout",
        default_props=MappingProxyType(
            {"items": ({"title": "Helpful Tip", "content": "Detailed info here."},)}
        ),
        fields=(
            FieldDescriptor(
                "items",
                "array",
                array_fields=(
                    FieldDescriptor("title", "text"),
                    FieldDescriptor("content", "textarea"),
                ),
            ),
        ),
    ),
    ComponentSchema(
        type="Button",
        category="Forms",
        default_props=MappingProxyType(
            {
                "text": "Action Button",
                "variant": "default",
                "size": "default",
                "actionType": "none",
                "actionTarget": "",
            }
        ),
        fields=(
            FieldDescriptor("text", "text"),
            FieldDescriptor("variant", "select", options=_VARIANTS),
            FieldDescriptor(
                "size",
                "select",
                options=_options(("Default", "default"), ("Small", "sm"), ("Large", "lg")),
            ),
            FieldDescriptor(
                "actionType",
                "radio",
                options=_options(("None", "none"), ("Link", "link"), ("Pop-up Alert", "alert")),
            ),
            FieldDescriptor("actionTarget", "text", "Target URL or Message"),
        ),
    ),
    ComponentSchema(
        type="Input",
        category="Forms",
        default_props=MappingProxyType(
            {"placeholder": "name@example.com", "label": "Email", "type": "email"}
        ),
        fields=(
            FieldDescriptor("label", "text"),
            FieldDescriptor("placeholder", "text"),
            FieldDescriptor(
                "type", "select", options=_options(("Text", "text"), ("Email", "email"))
            ),
        ),
        companions=(LABEL_TYPE,),
    ),
    ComponentSchema(
        type="Badge",
        category="Display",
        default_props=MappingProxyType({"text": "Badge", "variant": "default"}),
        fields=(
            FieldDescriptor("text", "text"),
            FieldDescriptor(
                "variant",
                "select",
                options=_options(
                    ("Default", "default"), ("Secondary", "secondary"), ("Outline", "outline")
                ),
            ),
        ),
    ),
    ComponentSchema(
        type="Progress",
        category="Display",
        default_props=MappingProxyType({"value": 50, "label": "Setup Progress"}),
        fields=(FieldDescriptor("value", "number"), FieldDescriptor("label", "text")),
        companions=(LABEL_TYPE,),
    ),
    ComponentSchema(
        type="Alert",
        category="Feedback",
        default_props=MappingProxyType(
            {"title": "Heads up!", "description": "Add a description.", "variant": "default"}
        ),
        fields=(
            FieldDescriptor("title", "text"),
            FieldDescriptor("description", "text"),
            FieldDescriptor(
                "variant",
                "select",
                options=_options(("Default", "default"), ("Destructive", "destructive")),
            ),
        ),
    ),
)


@functools.cache
def default_registry() -> SchemaRegistry:
    """Return the process-wide registry built from the bundled catalogue."""
    return SchemaRegistry(COMPONENT_SCHEMAS, root=ROOT_SCHEMA)


__all__ = [
    "COMPONENT_SCHEMAS",
    "LABEL_TYPE",
    "ROOT_SCHEMA",
    "ROOT_TYPE",
    "SECTION_TYPE",
    "SchemaRegistry",
    "column_count",
    "default_registry",
]
