"""Typed dataclasses describing output-framework target profiles."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from types import MappingProxyType

from .escaping import js_string

if typ.TYPE_CHECKING:
    from pagecraft.document import Node, RootProps

PropContext = cabc.Callable[[cabc.Mapping[str, typ.Any], "Node"], cabc.Mapping[str, typ.Any]]
RootContext = cabc.Callable[["RootProps"], cabc.Mapping[str, typ.Any]]


class TargetNotFoundError(LookupError):
    """Raised when an export names a target profile that does not exist."""


@dc.dataclass(frozen=True, slots=True)
class ImportSpec:
    """One module import required by generated code.

    An import with neither ``default`` nor ``names`` is a side-effect import
    such as a stylesheet.
    """

    module: str
    names: tuple[str, ...] = ()
    default: str | None = None

    @property
    def bindings(self) -> tuple[str, ...]:
        """Return the local names this import introduces."""
        return (self.default, *self.names) if self.default else self.names

    @property
    def statement(self) -> str:
        """Return the ES module import statement for this spec."""
        source = js_string(self.module)
        bindings: list[str] = []
        if self.default:
            bindings.append(self.default)
        if self.names:
            bindings.append("{ " + ", ".join(self.names) + " }")
        if not bindings:
            return f"import {source};"
        return f"import {', '.join(bindings)} from {source};"


@dc.dataclass(frozen=True, slots=True)
class Dependency:
    """Install-time requirement: an ``npm`` package or a ``shadcn`` component."""

    kind: str
    name: str


@dc.dataclass(frozen=True, slots=True)
class EmitRule:
    """Markup rule for one node type.

    Attributes
    ----------
    template : str
        Template filename within the target's template directory.
    context : PropContext | None
        Optional hook deriving extra template variables (pre-escaped class
        names, event handlers) from the resolved props and the node.
    """

    template: str
    context: PropContext | None = None

    def build_context(
        self, props: cabc.Mapping[str, typ.Any], node: Node
    ) -> dict[str, typ.Any]:
        """Return the extra template variables for ``node``."""
        if self.context is None:
            return {}
        return dict(self.context(props, node))


def _freeze(mapping: cabc.Mapping[str, typ.Any]) -> cabc.Mapping[str, typ.Any]:
    return MappingProxyType(dict(mapping))


@dc.dataclass(frozen=True, slots=True)
class TargetProfile:
    """Everything needed to compile documents for one output framework.

    Profiles are process-wide constants; the mapping fields are frozen on
    construction so compiler calls cannot mutate them.
    """

    name: str
    label: str
    file_extension: str
    rules: cabc.Mapping[str, EmitRule]
    imports: cabc.Mapping[str, tuple[ImportSpec, ...]]
    base_imports: tuple[ImportSpec, ...] = ()
    dependencies: cabc.Mapping[str, tuple[Dependency, ...]] = dc.field(
        default_factory=dict
    )
    base_dependencies: tuple[Dependency, ...] = ()
    page_template: str = "page.jinja"
    root_context: RootContext | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", _freeze(self.rules))
        object.__setattr__(self, "imports", _freeze(self.imports))
        object.__setattr__(self, "dependencies", _freeze(self.dependencies))

    def supports(self, node_type: str) -> bool:
        """Return ``True`` when this target can emit ``node_type``."""
        return node_type in self.rules

    def template_path(self, filename: str) -> str:
        """Return the loader path of a template owned by this target."""
        return f"{self.name}/{filename}"

    def resolve_imports(self, node_types: cabc.Iterable[str]) -> list[ImportSpec]:
        """Merge the imports needed by ``node_types`` into one list per module.

        Base imports come first, then modules in order of first encounter.
        Named bindings are deduplicated while keeping their first position.
        """
        order: list[str] = []
        defaults: dict[str, str | None] = {}
        names: dict[str, list[str]] = {}
        specs = list(self.base_imports)
        for node_type in node_types:
            specs.extend(self.imports.get(node_type, ()))
        for spec in specs:
            if spec.module not in names:
                order.append(spec.module)
                names[spec.module] = []
                defaults[spec.module] = None
            defaults[spec.module] = defaults[spec.module] or spec.default
            for name in spec.names:
                if name not in names[spec.module]:
                    names[spec.module].append(name)
        return [
            ImportSpec(module=module, names=tuple(names[module]), default=defaults[module])
            for module in order
        ]

    def resolve_dependencies(self, node_types: cabc.Iterable[str]) -> list[Dependency]:
        """Return the deduplicated install requirements for ``node_types``."""
        resolved: list[Dependency] = []
        candidates = list(self.base_dependencies)
        for node_type in node_types:
            candidates.extend(self.dependencies.get(node_type, ()))
        for dependency in candidates:
            if dependency not in resolved:
                resolved.append(dependency)
        return resolved

    def build_root_context(self, root: RootProps) -> dict[str, typ.Any]:
        """Return extra page-template variables derived from ``root``."""
        if self.root_context is None:
            return {}
        return dict(self.root_context(root))


__all__ = [
    "Dependency",
    "EmitRule",
    "ImportSpec",
    "PropContext",
    "RootContext",
    "TargetNotFoundError",
    "TargetProfile",
]
