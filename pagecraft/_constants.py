"""Common literal values used across pagecraft.

These constants keep archive paths, zone keys, and fallback identifiers
centralized so the compiler, packager, and tests import the same values
without drifting. Intended for internal use within the pagecraft package.

Examples
--------
>>> from pagecraft import _constants
>>> _constants.ZONE_KEY_TEMPLATE.format(owner="section-1", zone="col-0")
'section-1:col-0'
>>> _constants.ARCHIVE_NAME_TEMPLATE.format(target="bootstrap")
'bootstrap-project-export.zip'
"""

ZONE_KEY_TEMPLATE = "{owner}:{zone}"
COLUMN_ZONE_TEMPLATE = "col-{index}"
MAX_COLUMNS = 12

PLACEHOLDER_IDENTIFIER = "untitled"

PAGES_DIR = "src/pages"
MANIFEST_NAME = "README.md"
ARCHIVE_NAME_TEMPLATE = "{target}-project-export.zip"
# Earliest timestamp a ZIP entry can carry.
ARCHIVE_TIMESTAMP = (1980, 1, 1, 0, 0, 0)
