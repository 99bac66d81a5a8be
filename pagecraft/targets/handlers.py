"""Prop-derived fragments shared by the target profiles."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .escaping import js_number, js_string


def click_handler(props: cabc.Mapping[str, typ.Any]) -> str:
    """Return the ``onClick`` attribute for a button's configured action.

    The result starts with a space so templates can append it directly after
    the other attributes; it is empty when no action is configured.
    """
    target = props.get("actionTarget")
    match props.get("actionType"):
        case "link" if target:
            return f" onClick={{() => {{ window.location.href = {js_string(target)}; }}}}"
        case "alert" if target:
            return f" onClick={{() => alert({js_string(target)})}}"
        case _:
            return ""


def percent(value: object) -> str:
    """Clamp ``value`` to ``0..100`` and render it as a number literal."""
    number = float(js_number(value))
    return js_number(max(0.0, min(100.0, number)))


__all__ = ["click_handler", "percent"]
