"""
Node kinds and builders for esprima-shaped JavaScript trees.

Nodes are plain dicts in the ESTree layout produced by `esprima`'s `toDict`.
Nodes parsed from text carry a `range`; nodes built here never do, which is how
the emitter tells original text apart from synthesized code. Every builder call
returns brand new dicts, so two calls never share a child.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

Node = Dict[str, Any]


class NodeKind(str, Enum):
    """The closed set of shapes the migrator dispatches on."""

    CALL_EXPRESSION = "CallExpression"
    MEMBER_EXPRESSION = "MemberExpression"
    STRING_LITERAL = "StringLiteral"
    TEMPLATE_LITERAL = "TemplateLiteral"
    IDENTIFIER = "Identifier"
    ASSIGNMENT = "AssignmentExpression"
    IMPORT = "ImportDeclaration"
    EXPORT_DECLARATION = "ExportDeclaration"
    OTHER = "Other"


_EXPORT_TYPES = {"ExportDefaultDeclaration", "ExportNamedDeclaration", "ExportAllDeclaration"}


def kind_of(node: Any) -> NodeKind:
    """Map a node onto `NodeKind`; anything unrecognised is `OTHER`."""
    if not isinstance(node, dict):
        return NodeKind.OTHER
    node_type = node.get("type")
    if node_type == "Literal":
        if isinstance(node.get("value"), str) and not node.get("regex"):
            return NodeKind.STRING_LITERAL
        return NodeKind.OTHER
    if node_type in _EXPORT_TYPES:
        return NodeKind.EXPORT_DECLARATION
    if node_type in {"StringLiteral", "ExportDeclaration", "Other"}:
        return NodeKind.OTHER
    try:
        return NodeKind(node_type)
    except ValueError:
        return NodeKind.OTHER


def is_module_load_call(node: Any, loader: str = "require") -> bool:
    """True for `loader(...)` call expressions."""
    if kind_of(node) is not NodeKind.CALL_EXPRESSION:
        return False
    callee = node.get("callee")
    return kind_of(callee) is NodeKind.IDENTIFIER and callee.get("name") == loader


def first_argument(call: Node) -> Optional[Node]:
    arguments = call.get("arguments") or []
    return arguments[0] if arguments else None


def template_text(node: Node) -> str:
    """Concatenate the raw text of a template literal, skipping `${...}` parts."""
    parts: List[str] = []
    for element in node.get("quasis", []):
        value = element.get("value") or {}
        parts.append(value.get("raw") or "")
    return "".join(parts)


def member_path(node: Any) -> Optional[str]:
    """Dotted path for non-computed member chains such as `module.exports`."""
    kind = kind_of(node)
    if kind is NodeKind.IDENTIFIER:
        return node.get("name")
    if kind is NodeKind.MEMBER_EXPRESSION and not node.get("computed"):
        prop = node.get("property")
        base = member_path(node.get("object"))
        if base is None or kind_of(prop) is not NodeKind.IDENTIFIER:
            return None
        return f"{base}.{prop.get('name')}"
    return None


# ---------------------------------------------------------------- builders


def build_identifier(name: str) -> Node:
    return {"type": "Identifier", "name": name}


def build_string_literal(value: str) -> Node:
    return {"type": "Literal", "value": value, "raw": None}


def build_property(key: str, value: Node) -> Node:
    return {
        "type": "Property",
        "key": build_identifier(key),
        "computed": False,
        "value": value,
        "kind": "init",
        "method": False,
        "shorthand": False,
    }


def build_object_expression(properties: Iterable[Node]) -> Node:
    return {"type": "ObjectExpression", "properties": list(properties)}


def build_arrow_function(params: Iterable[Node], body: Node) -> Node:
    return {
        "type": "ArrowFunctionExpression",
        "id": None,
        "params": list(params),
        "body": body,
        "generator": False,
        "expression": True,
        "async": False,
    }


def build_variable_declarator(binding: Node, init: Node) -> Node:
    return {"type": "VariableDeclarator", "id": binding, "init": init}


def build_jsx_spread_attribute(argument: Node) -> Node:
    return {"type": "JSXSpreadAttribute", "argument": argument}


def build_jsx_element(
    name: str,
    attributes: Iterable[Node] = (),
    children: Iterable[Node] = (),
    *,
    self_closing: bool = False,
) -> Node:
    """Build `<name ...attributes>children</name>` or `<name ... />`."""
    children = list(children)
    if self_closing and children:
        raise ValueError("A self-closing JSX element cannot have children.")
    opening = {
        "type": "JSXOpeningElement",
        "name": {"type": "JSXIdentifier", "name": name},
        "selfClosing": self_closing,
        "attributes": list(attributes),
    }
    closing = None
    if not self_closing:
        closing = {
            "type": "JSXClosingElement",
            "name": {"type": "JSXIdentifier", "name": name},
        }
    return {
        "type": "JSXElement",
        "openingElement": opening,
        "children": children,
        "closingElement": closing,
    }


def build_import_default(local: str, source: str) -> Node:
    return {
        "type": "ImportDeclaration",
        "specifiers": [
            {"type": "ImportDefaultSpecifier", "local": build_identifier(local)}
        ],
        "source": build_string_literal(source),
    }


def build_export_default(
    declaration: Node, comments: Optional[Iterable[Node]] = None
) -> Node:
    node: Node = {"type": "ExportDefaultDeclaration", "declaration": declaration}
    if comments:
        node["leadingComments"] = list(comments)
    return node


def is_node(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("type"), str)


_SKIPPED_KEYS = {"loc", "range", "comments", "leadingComments", "trailingComments"}


def child_keys(node: Node) -> List[str]:
    """Keys of `node` that hold a child node or a list of them, in field order."""
    keys = []
    for key, value in node.items():
        if key in _SKIPPED_KEYS:
            continue
        if is_node(value) or isinstance(value, list):
            keys.append(key)
    return keys


def iter_nodes(node: Any) -> Iterable[Node]:
    """Yield every node in a subtree, depth-first, parents first."""
    if isinstance(node, list):
        for element in node:
            yield from iter_nodes(element)
        return
    if not is_node(node):
        return
    yield node
    for key in child_keys(node):
        yield from iter_nodes(node[key])


__all__ = [
    "Node",
    "NodeKind",
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
    "child_keys",
    "first_argument",
    "is_module_load_call",
    "is_node",
    "iter_nodes",
    "kind_of",
    "member_path",
    "template_text",
]
