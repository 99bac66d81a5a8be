"""Shared dataclasses produced by the page compiler."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class CompiledPage:
    """Generated source for one page.

    Attributes
    ----------
    identifier : str
        File-safe identifier derived from the page title.
    component_name : str
        Name of the exported page component.
    file_name : str
        ``identifier`` plus the target's source extension.
    file_text : str
        Complete generated source, newline terminated.
    title : str
        Page title as edited.
    route : str
        Page route as edited.
    used_types : tuple[str, ...]
        Node types (and companions) the page needs, in first-seen order.
    """

    identifier: str
    component_name: str
    file_name: str
    file_text: str
    title: str
    route: str
    used_types: tuple[str, ...]


__all__ = ["CompiledPage"]
