"""Typed dataclasses describing the component catalogue."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

ZoneResolver = cabc.Callable[[cabc.Mapping[str, typ.Any]], tuple[str, ...]]


class SchemaError(ValueError):
    """Raised when the component catalogue is inconsistent."""


@dc.dataclass(frozen=True, slots=True)
class FieldOption:
    """Selectable choice offered by ``select`` and ``radio`` fields."""

    label: str
    value: str


@dc.dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Editor form field bound to one prop of a component.

    Attributes
    ----------
    name : str
        Prop name the field edits.
    kind : str
        Widget kind: ``text``, ``textarea``, ``number``, ``select``,
        ``radio``, or ``array``.
    label : str | None
        Optional human label; editors fall back to ``name``.
    options : tuple[FieldOption, ...]
        Allowed values for ``select`` and ``radio`` fields.
    array_fields : tuple[FieldDescriptor, ...]
        Sub-fields describing each entry of an ``array`` field.
    """

    name: str
    kind: str
    label: str | None = None
    options: tuple[FieldOption, ...] = ()
    array_fields: tuple[FieldDescriptor, ...] = ()

    @property
    def allowed_values(self) -> tuple[str, ...]:
        """Return the option values, empty when the field is free-form."""
        return tuple(option.value for option in self.options)


@dc.dataclass(frozen=True, slots=True)
class ComponentSchema:
    """Static description of one component kind.

    ``zones`` is set only for container kinds; it maps resolved props to the
    ordered zone names the component owns.
    """

    type: str
    category: str
    default_props: cabc.Mapping[str, typ.Any]
    fields: tuple[FieldDescriptor, ...]
    companions: tuple[str, ...] = ()
    zones: ZoneResolver | None = None

    @property
    def is_container(self) -> bool:
        """Return ``True`` when the component owns child zones."""
        return self.zones is not None

    def zone_names(self, props: cabc.Mapping[str, typ.Any]) -> tuple[str, ...]:
        """Return the zone names implied by ``props`` (empty for leaves)."""
        if self.zones is None:
            return ()
        return self.zones(props)

    def field(self, name: str) -> FieldDescriptor | None:
        """Return the descriptor editing ``name``, if any."""
        return next((field for field in self.fields if field.name == name), None)


__all__ = [
    "ComponentSchema",
    "FieldDescriptor",
    "FieldOption",
    "SchemaError",
    "ZoneResolver",
]
