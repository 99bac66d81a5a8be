"""Shared fixtures for pagecraft tests."""

from __future__ import annotations

import typing as typ

import pytest

from pagecraft.document import Document, parse_document
from pagecraft.schema import default_registry

if typ.TYPE_CHECKING:
    from pagecraft.schema import SchemaRegistry


@pytest.fixture
def registry() -> SchemaRegistry:
    """Return the bundled component registry."""
    return default_registry()


@pytest.fixture
def three_column_document(registry: SchemaRegistry) -> Document:
    """Build a one-page document with a 3-column section holding three cards."""
    return parse_document(
        {
            "pages": [
                {
                    "id": "home",
                    "data": {
                        "root": {"props": {"pageTitle": "Home", "pageRoute": "/"}},
                        "content": [
                            {"type": "Section", "props": {"id": "hero", "columns": 3}}
                        ],
                        "zones": {
                            f"hero:col-{index}": [
                                {
                                    "type": "Card",
                                    "props": {"id": f"card-{index}", "title": f"Column {index}"},
                                }
                            ]
                            for index in range(3)
                        },
                    },
                }
            ]
        },
        registry=registry,
    )


@pytest.fixture
def two_page_document(registry: SchemaRegistry) -> Document:
    """Build a document with a home page and an about page using several types."""
    return parse_document(
        {
            "pages": [
                {
                    "id": "home",
                    "root": {"pageTitle": "Home", "pageRoute": "/"},
                    "content": [
                        {"type": "Button", "props": {"id": "cta", "text": "Start"}},
                        {"type": "Progress", "props": {"id": "bar", "value": 75}},
                    ],
                },
                {
                    "id": "about",
                    "root": {"pageTitle": "About Us", "pageRoute": "/about"},
                    "content": [
                        {"type": "Alert", "props": {"id": "note", "title": "Heads up"}},
                        {"type": "Input", "props": {"id": "email"}},
                    ],
                },
            ]
        },
        registry=registry,
    )
