"""Compile page documents into target source files."""

from .emitter import TreeEmitter, emit
from .models import CompiledPage
from .page_compiler import (
    PageCompiler,
    collect_types,
    compile_document,
    component_name,
    derive_identifier,
    page_component_name,
    unique_identifier,
)

__all__ = [
    "CompiledPage",
    "PageCompiler",
    "TreeEmitter",
    "collect_types",
    "compile_document",
    "component_name",
    "derive_identifier",
    "emit",
    "page_component_name",
    "unique_identifier",
]
