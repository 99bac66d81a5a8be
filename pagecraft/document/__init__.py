"""Page documents as handed over by the visual editor.

A :class:`Document` holds ordered :class:`Page` values. Each page keeps its
root-level nodes in ``content`` and every other node sequence in a zone map
addressed by ``"owner:zone"`` keys. The compiler only reads documents.

Examples
--------
>>> from pagecraft.document import Document
>>> document = Document.new()
>>> page = document.add_page(title="About")
>>> [p.root.title for p in document.pages]
['Home', 'About']
"""

from .loader import load_document, parse_document
from .models import Document, DocumentError, Node, Page, RootProps, zone_key

__all__ = [
    "Document",
    "DocumentError",
    "Node",
    "Page",
    "RootProps",
    "load_document",
    "parse_document",
    "zone_key",
]
