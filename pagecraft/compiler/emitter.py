"""Recursive markup emission for node trees.

The emitter looks up the node's :class:`~pagecraft.targets.EmitRule`,
renders every declared zone of container nodes first, and hands one body per
zone to the rule's template. Types the target has no rule for produce no
output at all, which keeps documents that reference newer component kinds
exportable to older targets.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from pagecraft.schema import default_registry
from pagecraft.targets import build_environment

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from pagecraft.document import Document, Node, Page
    from pagecraft.schema import SchemaRegistry
    from pagecraft.targets import TargetProfile

logger = logging.getLogger(__name__)


class TreeEmitter:
    """Render nodes of a page into target markup."""

    def __init__(
        self,
        profile: TargetProfile,
        registry: SchemaRegistry,
        *,
        environment: Environment | None = None,
    ) -> None:
        """Bind the emitter to a target profile and schema registry.

        Parameters
        ----------
        profile : TargetProfile
            Target whose rules and templates produce the markup.
        registry : SchemaRegistry
            Source of prop defaults and container zone names.
        environment : Environment, optional
            Pre-built Jinja environment; one is created from the bundled
            templates when omitted.
        """
        self.profile = profile
        self.registry = registry
        self.env = environment or build_environment()

    def emit(self, node: Node, page: Page) -> str:
        """Return the markup for ``node`` and everything reachable below it."""
        return self._emit(node, page, frozenset())

    def emit_zone(self, nodes: cabc.Iterable[Node], page: Page) -> str:
        """Return the markup for a sequence of sibling nodes."""
        return self._emit_sequence(nodes, page, frozenset())

    def _emit_sequence(
        self, nodes: cabc.Iterable[Node], page: Page, ancestors: frozenset[str]
    ) -> str:
        rendered = (self._emit(node, page, ancestors) for node in nodes)
        return "\n".join(text for text in rendered if text)

    def _emit(self, node: Node, page: Page, ancestors: frozenset[str]) -> str:
        rule = self.profile.rules.get(node.type)
        if rule is None:
            logger.debug(
                "Skipping node %s: target %s has no rule for type %r",
                node.id,
                self.profile.name,
                node.type,
            )
            return ""
        if node.id in ancestors:
            logger.warning(
                "Skipping node %s on page %s: it contains itself", node.id, page.id
            )
            return ""

        props = self.registry.resolve_props(node.type, node.props)
        inside = ancestors | {node.id}
        zones = [
            self._emit_sequence(page.zone(node.id, name), page, inside)
            for name in self.registry.zone_names(node.type, props)
        ]
        template = self.env.get_template(self.profile.template_path(rule.template))
        return template.render(
            props=props,
            zones=zones,
            node_id=node.id,
            **rule.build_context(props, node),
        )


def emit(
    node: Node,
    document: Document,
    page: Page,
    profile: TargetProfile,
    *,
    registry: SchemaRegistry | None = None,
) -> str:
    """Render ``node`` from ``page`` of ``document`` with ``profile``.

    Functional wrapper around :class:`TreeEmitter` for one-off calls. Zones
    resolve against ``page``; no bundled rule reads the rest of ``document``.
    """
    del document
    emitter = TreeEmitter(profile, registry or default_registry())
    return emitter.emit(node, page)


__all__ = ["TreeEmitter", "emit"]
