"""Escaping filters for interpolating prop values into generated TSX.

Every emission template routes user-supplied prop values through one of
these functions; nothing is interpolated raw. Each filter targets one
syntactic position:

* ``jsx_text``: JSX text children. Markup and expression delimiters become
  HTML character references, which JSX decodes back to the original text.
  Values spanning several lines become a ``{"..."}`` string expression.
* ``jsx_attr``: a complete, double-quoted JSX attribute literal. JSX string
  attributes have no backslash escapes, so quotes become ``&quot;``.
* ``js_string``: a JavaScript string literal placed inside ``{...}``
  expressions (style objects, event handlers, module specifiers).
* ``css_classes``: a whitespace-separated list of class tokens, with any
  token containing characters outside the class alphabet dropped.

Examples
--------
>>> jsx_text('Say "hi" <b>{now}</b>')
'Say "hi" &lt;b&gt;&#123;now&#125;&lt;/b&gt;'
>>> jsx_attr('a "quoted" value')
'"a &quot;quoted&quot; value"'
>>> js_string("it's </script>")
'"it\\'s </script>"'
"""

from __future__ import annotations

import json
import math
import re

_TEXT_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "{": "&#123;",
    "}": "&#125;",
}
_ATTR_ENTITIES = {**_TEXT_ENTITIES, '"': "&quot;"}
_TEXT_PATTERN = re.compile("[&<>{}]")
_ATTR_PATTERN = re.compile('[&<>{}"]')
_CLASS_TOKEN = re.compile(r"^[A-Za-z0-9_:/.%#\[\]-]+$")
_ID_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")
_LINE_BREAK = re.compile("[\r\n\u2028\u2029]")
# JSON leaves these two line terminators unescaped; older JS parsers reject them.
_LINE_TERMINATORS = {"\u2028": "\\u2028", "\u2029": "\\u2029"}


def _as_text(value: object) -> str:
    return "" if value is None else str(value)


def jsx_text(value: object) -> str:
    """Escape ``value`` for use as a JSX text child.

    JSX folds line breaks in text children into spaces, so multi-line values
    are emitted as a string expression instead.
    """
    text = _as_text(value)
    if _LINE_BREAK.search(text):
        return "{" + js_string(text) + "}"
    return _TEXT_PATTERN.sub(lambda match: _TEXT_ENTITIES[match.group(0)], text)


def jsx_attr(value: object) -> str:
    """Return ``value`` as a double-quoted JSX attribute literal."""
    escaped = _ATTR_PATTERN.sub(
        lambda match: _ATTR_ENTITIES[match.group(0)], _as_text(value)
    )
    return f'"{escaped}"'


def js_string(value: object) -> str:
    """Return ``value`` as a double-quoted JavaScript string literal."""
    literal = json.dumps(_as_text(value), ensure_ascii=False)
    for char, escape in _LINE_TERMINATORS.items():
        literal = literal.replace(char, escape)
    return literal


def js_number(value: object, fallback: int = 0) -> str:
    """Render ``value`` as a finite JavaScript number literal."""
    match value:
        case bool():
            number: float | int = fallback
        case int() | float():
            number = value
        case str() as text:
            try:
                number = float(text.strip())
            except ValueError:
                number = fallback
        case _:
            number = fallback
    try:
        finite = math.isfinite(number)
    except OverflowError:
        finite = False
    if not finite:
        number = fallback
    if float(number).is_integer():
        return str(int(number))
    return repr(float(number))


def px(value: object) -> str:
    """Return a CSS pixel length such as ``"24px"`` for numeric ``value``."""
    return f"{js_number(value)}px"


def css_classes(value: object) -> str:
    """Keep only well-formed class tokens from ``value``."""
    tokens = _as_text(value).split()
    return " ".join(token for token in tokens if _CLASS_TOKEN.match(token))


def css_identifier(value: object, fallback: str = "item") -> str:
    """Reduce ``value`` to characters safe inside an HTML id attribute."""
    cleaned = _ID_UNSAFE.sub("-", _as_text(value)).strip("-")
    return cleaned or fallback


def markdown_cell(value: object) -> str:
    """Escape ``value`` for a single-line Markdown table cell."""
    text = " ".join(_as_text(value).split())
    return text.replace("\\", "\\\\").replace("|", "\\|")


FILTERS = {
    "css_classes": css_classes,
    "css_identifier": css_identifier,
    "js_number": js_number,
    "js_string": js_string,
    "jsx_attr": jsx_attr,
    "jsx_text": jsx_text,
    "markdown_cell": markdown_cell,
    "px": px,
}

__all__ = [
    "FILTERS",
    "css_classes",
    "css_identifier",
    "js_number",
    "js_string",
    "jsx_attr",
    "jsx_text",
    "markdown_cell",
    "px",
]
