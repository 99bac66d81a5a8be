"""Output-framework target profiles and the escaping rules they share.

Two profiles ship with pagecraft: ``shadcn`` (React pages composed from
shadcn/ui components) and ``bootstrap`` (React pages of plain markup styled
with Bootstrap classes). Profiles are immutable and are passed explicitly
into the compiler.

Examples
--------
>>> from pagecraft.targets import get_target
>>> get_target("bootstrap").file_extension
'.tsx'
>>> sorted(TARGETS)
['bootstrap', 'shadcn']
"""

from __future__ import annotations

import collections.abc as cabc
from types import MappingProxyType

from .bootstrap import BOOTSTRAP
from .models import (
    Dependency,
    EmitRule,
    ImportSpec,
    TargetNotFoundError,
    TargetProfile,
)
from .shadcn import SHADCN
from .templating import TEMPLATES_DIR, build_environment

TARGETS: cabc.Mapping[str, TargetProfile] = MappingProxyType(
    {profile.name: profile for profile in (SHADCN, BOOTSTRAP)}
)


def get_target(
    name: str, targets: cabc.Mapping[str, TargetProfile] | None = None
) -> TargetProfile:
    """Return the profile registered as ``name``.

    Raises
    ------
    TargetNotFoundError
        If no profile with that name exists.
    """
    table = TARGETS if targets is None else targets
    try:
        return table[name]
    except KeyError as exc:
        available = ", ".join(sorted(table))
        msg = f"Unknown target '{name}'. Known targets: {available}"
        raise TargetNotFoundError(msg) from exc


__all__ = [
    "BOOTSTRAP",
    "SHADCN",
    "TARGETS",
    "TEMPLATES_DIR",
    "Dependency",
    "EmitRule",
    "ImportSpec",
    "TargetNotFoundError",
    "TargetProfile",
    "build_environment",
    "get_target",
]
