"""Unit tests for reading editor exports into documents.

Both the nested ``data`` page shape and the flattened shape are exercised,
from YAML and from JSON, along with the structural errors the loader
reports.
"""

from __future__ import annotations

import json
from pathlib import Path
from textwrap import dedent

import pytest

from pagecraft.document import DocumentError, load_document, parse_document


def test_load_yaml_document(tmp_path: Path) -> None:
    """Nested editor exports load with ids taken from props."""
    path = tmp_path / "site.yaml"
    path.write_text(
        dedent(
            """
            pages:
              - id: home
                data:
                  root:
                    props:
                      pageTitle: Landing
                      pageRoute: /
                  content:
                    - type: Section
                      props: {id: hero, columns: 2}
                  zones:
                    "hero:col-1":
                      - type: Card
                        props: {id: card-1, title: Hello}
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    document = load_document(path)
    page = document.pages[0]
    assert page.root.title == "Landing"
    assert page.content[0].id == "hero"
    assert "id" not in page.content[0].props
    assert page.content[0].props["columns"] == 2
    card = page.zone("hero", "col-1")[0]
    assert card.props["title"] == "Hello"
    assert card.props["description"] == "Subtitle"


def test_load_json_document(tmp_path: Path) -> None:
    """Flattened JSON pages load and fall back to other id sources."""
    path = tmp_path / "site.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "about",
                    "root": {"pageTitle": "About", "pageRoute": "/about"},
                    "content": [
                        {"type": "Badge", "id": "badge-1"},
                        {"type": "Badge", "readOnly": {"puckId": "badge-2"}},
                        {"type": "Badge"},
                    ],
                }
            ]
        ),
        encoding="utf-8",
    )
    document = load_document(path)
    ids = [node.id for node in document.pages[0].content]
    assert ids == ["badge-1", "badge-2", "node@about:content/2"]
    assert document.pages[0].root.route == "/about"


def test_missing_file_is_reported(tmp_path: Path) -> None:
    """A missing document path raises ``FileNotFoundError``."""
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "nope.yaml")


def test_unknown_types_are_kept(tmp_path: Path) -> None:
    """Nodes of unregistered types survive loading untouched."""
    document = parse_document(
        {"pages": [{"id": "home", "content": [{"type": "Carousel", "props": {"speed": 2}}]}]}
    )
    node = document.pages[0].content[0]
    assert node.type == "Carousel"
    assert node.props == {"speed": 2}


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ("just text", "mapping or a list"),
        ({"pages": []}, "No pages"),
        ({"pages": ["home"]}, "must be a mapping"),
        ({"pages": [{"id": "home", "content": [{"props": {}}]}]}, "missing a 'type'"),
        ({"pages": [{"id": "home", "content": {"type": "Card"}}]}, "list of nodes"),
        ({"pages": [{"id": "home", "zones": ["x"]}]}, "zones must be a mapping"),
    ],
)
def test_malformed_payloads_raise(payload: object, message: str) -> None:
    """Structural problems surface as ``DocumentError`` with context."""
    with pytest.raises(DocumentError, match=message):
        parse_document(payload)
