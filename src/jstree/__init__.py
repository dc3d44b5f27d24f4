"""Editable JavaScript syntax trees: lookup, node builders and in-place edits."""

from .document import Document, NodeLocation, TreeError
from .nodes import (
    Node,
    NodeKind,
    build_arrow_function,
    build_export_default,
    build_identifier,
    build_import_default,
    build_jsx_element,
    build_jsx_spread_attribute,
    build_object_expression,
    build_property,
    build_string_literal,
    build_variable_declarator,
    first_argument,
    is_module_load_call,
    iter_nodes,
    kind_of,
    member_path,
    template_text,
)

__all__ = [
    "Document",
    "Node",
    "NodeKind",
    "NodeLocation",
    "TreeError",
    "build_arrow_function",
    "build_export_default",
    "build_identifier",
    "build_import_default",
    "build_jsx_element",
    "build_jsx_spread_attribute",
    "build_object_expression",
    "build_property",
    "build_string_literal",
    "build_variable_declarator",
    "first_argument",
    "is_module_load_call",
    "iter_nodes",
    "kind_of",
    "member_path",
    "template_text",
]
