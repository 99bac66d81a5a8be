"""Component schema catalogue shared by the editor and the compiler.

The editor reads field descriptors and defaults from here to build and
validate nodes; the compiler only asks for default values, container zone
names, and implicit companion types.

Examples
--------
>>> from pagecraft.schema import default_registry
>>> default_registry().get("Section").is_container
True
"""

from .models import ComponentSchema, FieldDescriptor, FieldOption, SchemaError
from .registry import (
    COMPONENT_SCHEMAS,
    LABEL_TYPE,
    ROOT_SCHEMA,
    ROOT_TYPE,
    SECTION_TYPE,
    SchemaRegistry,
    column_count,
    default_registry,
)

__all__ = [
    "COMPONENT_SCHEMAS",
    "LABEL_TYPE",
    "ROOT_SCHEMA",
    "ROOT_TYPE",
    "SECTION_TYPE",
    "ComponentSchema",
    "FieldDescriptor",
    "FieldOption",
    "SchemaError",
    "SchemaRegistry",
    "column_count",
    "default_registry",
]
