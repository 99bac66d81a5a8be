"""React target built on shadcn/ui components and Tailwind utility classes."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from pagecraft.schema import LABEL_TYPE, column_count

from .handlers import click_handler, percent
from .models import Dependency, EmitRule, ImportSpec, TargetProfile

if typ.TYPE_CHECKING:
    from pagecraft.document import Node

Props = cabc.Mapping[str, typ.Any]

UI_MODULE = "@/components/ui/{name}"


def _ui(name: str, *symbols: str) -> ImportSpec:
    return ImportSpec(module=UI_MODULE.format(name=name), names=symbols)


def _section_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    return {"grid_columns": f"repeat({column_count(props)}, minmax(0, 1fr))"}


def _button_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    return {"on_click": click_handler(props)}


def _progress_context(props: Props, _node: Node) -> dict[str, typ.Any]:
    return {"value": percent(props.get("value"))}


SHADCN = TargetProfile(
    name="shadcn",
    label="Shadcn UI (React)",
    file_extension=".tsx",
    base_imports=(ImportSpec(module="react", default="React"),),
    imports={
        "Card": (
            _ui(
                "card",
                "Card",
                "CardHeader",
                "CardTitle",
                "CardDescription",
                "CardContent",
                "CardFooter",
            ),
        ),
        "Button": (_ui("button", "Button"),),
        "Input": (_ui("input", "Input"),),
        LABEL_TYPE: (_ui("label", "Label"),),
        "Accordion": (
            _ui(
                "accordion",
                "Accordion",
                "AccordionContent",
                "AccordionItem",
                "AccordionTrigger",
            ),
        ),
        "Separator": (_ui("separator", "Separator"),),
        "Badge": (_ui("badge", "Badge"),),
        "Alert": (
            _ui("alert", "Alert", "AlertDescription", "AlertTitle"),
            ImportSpec(module="lucide-react", names=("AlertCircle",)),
        ),
        "Progress": (_ui("progress", "Progress"),),
    },
    rules={
        "Section": EmitRule("section.jinja", _section_context),
        "Card": EmitRule("card.jinja"),
        "Button": EmitRule("button.jinja", _button_context),
        "Badge": EmitRule("badge.jinja"),
        "Separator": EmitRule("separator.jinja"),
        "Alert": EmitRule("alert.jinja"),
        "Progress": EmitRule("progress.jinja", _progress_context),
        "Input": EmitRule("input.jinja"),
        "Accordion": EmitRule("accordion.jinja"),
    },
    dependencies={
        "Card": (Dependency("shadcn", "card"),),
        "Button": (Dependency("shadcn", "button"),),
        "Input": (Dependency("shadcn", "input"),),
        LABEL_TYPE: (Dependency("shadcn", "label"),),
        "Accordion": (Dependency("shadcn", "accordion"),),
        "Separator": (Dependency("shadcn", "separator"),),
        "Badge": (Dependency("shadcn", "badge"),),
        "Alert": (Dependency("shadcn", "alert"), Dependency("npm", "lucide-react")),
        "Progress": (Dependency("shadcn", "progress"),),
    },
)

__all__ = ["SHADCN"]
