"""React target rendering plain markup styled with Bootstrap classes.

Every node type maps to Bootstrap utility classes, so the only imports are
the Bootstrap stylesheet and JavaScript bundle, added once per page.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from pagecraft.schema import column_count

from .escaping import css_identifier
from .handlers import click_handler, percent
from .models import Dependency, EmitRule, ImportSpec, TargetProfile

if typ.TYPE_CHECKING:
    from pagecraft.document import Node, RootProps

Props = cabc.Mapping[str, typ.Any]

GRID_COLUMNS = 12
BUTTON_VARIANTS = {
    "default": "btn-primary",
    "destructive": "btn-danger",
    "outline": "btn-outline-dark",
    "secondary": "btn-secondary",
}
BUTTON_SIZES = {"lg": "btn-lg", "sm": "btn-sm"}
BADGE_VARIANTS = {"secondary": "bg-secondary", "outline": "border text-dark"}
ALERT_VARIANTS = {"destructive": "alert-danger"}
VERTICAL_RULE = "d-inline-block h-100 border-end border-0 align-middle mx-3"


def _section_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    span = max(1, GRID_COLUMNS // column_count(props))
    return {"column_class": f"col-md-{span} mb-3 d-flex flex-column gap-3"}


def _button_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    classes = [
        "btn",
        BUTTON_VARIANTS.get(props.get("variant"), "btn-primary"),
        BUTTON_SIZES.get(props.get("size"), ""),
        "w-100",
    ]
    return {
        "button_class": " ".join(part for part in classes if part),
        "on_click": click_handler(props),
    }


def _badge_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    return {"badge_class": f"badge {BADGE_VARIANTS.get(props.get('variant'), 'bg-primary')}"}


def _alert_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    return {"alert_class": f"alert {ALERT_VARIANTS.get(props.get('variant'), 'alert-primary')}"}


def _separator_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    vertical = props.get("orientation") == "vertical"
    return {"rule_class": VERTICAL_RULE if vertical else "my-3"}


def _progress_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    return {"value": percent(props.get("value"))}


def _accordion_context(_props: Props, node: Node) -> dict[str, typ.Any]:
    return {"accordion_id": f"accordion-{css_identifier(node.id)}"}


def _root_context(root: RootProps) -> dict[str, typ.Any]:
    fluid = root.max_width == "max-w-full"
    return {"container_class": "container-fluid" if fluid else "container"}


BOOTSTRAP = TargetProfile(
    name="bootstrap",
    label="Bootstrap (HTML/CSS)",
    file_extension=".tsx",
    base_imports=(
        ImportSpec(module="react", default="React"),
        ImportSpec(module="bootstrap/dist/css/bootstrap.min.css"),
        ImportSpec(module="bootstrap/dist/js/bootstrap.bundle.min.js"),
    ),
    imports={},
    rules={
        "Section": EmitRule("section.jinja", _section_context),
        "Card": EmitRule("card.jinja"),
        "Button": EmitRule("button.jinja", _button_context),
        "Badge": EmitRule("badge.jinja", _badge_context),
        "Separator": EmitRule("separator.jinja", _separator_context),
        "Alert": EmitRule("alert.jinja", _alert_context),
        "Progress": EmitRule("progress.jinja", _progress_context),
        "Input": EmitRule("input.jinja"),
        "Accordion": EmitRule("accordion.jinja", _accordion_context),
    },
    base_dependencies=(Dependency("npm", "bootstrap"),),
    root_context=_root_context,
)

__all__ = ["BOOTSTRAP", "BUTTON_VARIANTS"]
