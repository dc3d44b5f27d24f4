"""
Render JavaScript trees back to source text.

Printing works like recast's reprinter: the original text is kept verbatim and
only the spans recorded as edits are replaced by freshly generated code. Any
subtree that still carries a `range` (i.e. was parsed from the original text)
is copied from the source instead of being regenerated, so reused bindings and
comments keep their exact formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


class EmitError(RuntimeError):
    """Raised when a tree cannot be printed."""

    def __init__(self, message: str, node: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.node = node


@dataclass(frozen=True)
class EmitOptions:
    indent: str = "  "
    quote: str = "'"
    arrow_parens: bool = True
    trailing_comma: bool = False


@dataclass(frozen=True)
class Edit:
    """Replace `source[start:end]` with `prefix` plus the printed `node`."""

    start: int
    end: int
    node: Dict[str, Any]
    indent: str = ""
    prefix: str = ""


_DECLARATION_TYPES = {"FunctionDeclaration", "ClassDeclaration"}


class NodeWriter:
    """Generate source text for synthesized nodes."""

    def __init__(self, source: str = "", options: Optional[EmitOptions] = None):
        self.source = source
        self.options = options or EmitOptions()

    def write(self, node: Dict[str, Any], indent: str = "") -> str:
        text = self._write_bare(node, indent)
        comments = node.get("leadingComments") or []
        if not comments:
            return text
        lines = [self._write_comment(comment) for comment in comments]
        return ("\n" + indent).join(lines + [text])

    def _write_bare(self, node: Dict[str, Any], indent: str) -> str:
        node_range = node.get("range")
        if node_range is not None:
            start, end = node_range
            return self.source[start:end]
        node_type = node.get("type")
        handler = getattr(self, f"_write_{node_type}", None)
        if handler is None:
            raise EmitError(f"Cannot print synthesized node of type {node_type}.", node)
        return handler(node, indent)

    def _write_comment(self, comment: Dict[str, Any]) -> str:
        value = comment.get("value", "")
        if str(comment.get("type", "")).startswith("Line"):
            return f"//{value}"
        return f"/*{value}*/"

    def _quote(self, value: str) -> str:
        quote = self.options.quote
        escaped = (
            value.replace("\\", "\\\\")
            .replace(quote, "\\" + quote)
            .replace("\n", "\\n")
            .replace("\r", "\\r")
        )
        return f"{quote}{escaped}{quote}"

    def _join(self, nodes: Iterable[Dict[str, Any]], indent: str, sep: str = ", ") -> str:
        return sep.join(self.write(node, indent) for node in nodes)

    # -------------------------------------------------------------- expressions

    def _write_Identifier(self, node: Dict[str, Any], indent: str) -> str:
        return node["name"]

    def _write_Literal(self, node: Dict[str, Any], indent: str) -> str:
        if node.get("raw"):
            return node["raw"]
        value = node.get("value")
        if isinstance(value, str):
            return self._quote(value)
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return "null"
        return repr(value)

    def _write_MemberExpression(self, node: Dict[str, Any], indent: str) -> str:
        obj = self.write(node["object"], indent)
        prop = self.write(node["property"], indent)
        if node.get("computed"):
            return f"{obj}[{prop}]"
        return f"{obj}.{prop}"

    def _write_CallExpression(self, node: Dict[str, Any], indent: str) -> str:
        callee = self.write(node["callee"], indent)
        return f"{callee}({self._join(node.get('arguments', []), indent)})"

    def _write_Property(self, node: Dict[str, Any], indent: str) -> str:
        value = self.write(node["value"], indent)
        if node.get("shorthand"):
            return value
        key = self.write(node["key"], indent)
        if node.get("computed"):
            key = f"[{key}]"
        return f"{key}: {value}"

    def _write_ObjectExpression(self, node: Dict[str, Any], indent: str) -> str:
        properties = node.get("properties", [])
        if not properties:
            return "{}"
        inner = indent + self.options.indent
        lines = [inner + self.write(prop, inner) for prop in properties]
        body = ",\n".join(lines)
        if self.options.trailing_comma:
            body += ","
        return "{\n" + body + "\n" + indent + "}"

    def _write_ArrowFunctionExpression(self, node: Dict[str, Any], indent: str) -> str:
        params = node.get("params", [])
        if (
            len(params) == 1
            and params[0].get("type") == "Identifier"
            and not self.options.arrow_parens
        ):
            head = self.write(params[0], indent)
        else:
            head = f"({self._join(params, indent)})"
        body = node["body"]
        if body.get("type") == "JSXElement" and self._is_multiline_jsx(body):
            inner = indent + self.options.indent
            text = "(\n" + inner + self.write(body, inner) + "\n" + indent + ")"
        elif body.get("type") == "ObjectExpression":
            text = f"({self.write(body, indent)})"
        else:
            text = self.write(body, indent)
        prefix = "async " if node.get("async") else ""
        return f"{prefix}{head} => {text}"

    # ------------------------------------------------------------------ JSX

    def _is_multiline_jsx(self, node: Dict[str, Any]) -> bool:
        children = node.get("children") or []
        return bool(children) and all(
            child.get("type") in {"JSXElement", "JSXExpressionContainer", "JSXFragment"}
            for child in children
        )

    def _write_JSXElement(self, node: Dict[str, Any], indent: str) -> str:
        opening = self.write(node["openingElement"], indent)
        closing_node = node.get("closingElement")
        closing = self.write(closing_node, indent) if closing_node else ""
        children = node.get("children") or []
        if not children:
            return opening + closing
        if not self._is_multiline_jsx(node):
            return opening + "".join(self.write(child, indent) for child in children) + closing
        inner = indent + self.options.indent
        lines = [inner + self.write(child, inner) for child in children]
        return opening + "\n" + "\n".join(lines) + "\n" + indent + closing

    def _write_JSXOpeningElement(self, node: Dict[str, Any], indent: str) -> str:
        parts = [self.write(node["name"], indent)]
        parts.extend(self.write(attribute, indent) for attribute in node.get("attributes", []))
        tail = " />" if node.get("selfClosing") else ">"
        return "<" + " ".join(parts) + tail

    def _write_JSXClosingElement(self, node: Dict[str, Any], indent: str) -> str:
        return f"</{self.write(node['name'], indent)}>"

    def _write_JSXIdentifier(self, node: Dict[str, Any], indent: str) -> str:
        return node["name"]

    def _write_JSXMemberExpression(self, node: Dict[str, Any], indent: str) -> str:
        return f"{self.write(node['object'], indent)}.{self.write(node['property'], indent)}"

    def _write_JSXSpreadAttribute(self, node: Dict[str, Any], indent: str) -> str:
        return "{..." + self.write(node["argument"], indent) + "}"

    def _write_JSXAttribute(self, node: Dict[str, Any], indent: str) -> str:
        name = self.write(node["name"], indent)
        value = node.get("value")
        if value is None:
            return name
        return f"{name}={self.write(value, indent)}"

    def _write_JSXExpressionContainer(self, node: Dict[str, Any], indent: str) -> str:
        return "{" + self.write(node["expression"], indent) + "}"

    # ------------------------------------------------------- declarations

    def _write_VariableDeclarator(self, node: Dict[str, Any], indent: str) -> str:
        binding = self.write(node["id"], indent)
        init = node.get("init")
        if init is None:
            return binding
        return f"{binding} = {self.write(init, indent)}"

    def _write_VariableDeclaration(self, node: Dict[str, Any], indent: str) -> str:
        declarations = self._join(node.get("declarations", []), indent)
        return f"{node.get('kind', 'var')} {declarations};"

    def _write_ExpressionStatement(self, node: Dict[str, Any], indent: str) -> str:
        return self.write(node["expression"], indent) + ";"

    def _write_ImportDeclaration(self, node: Dict[str, Any], indent: str) -> str:
        source = self.write(node["source"], indent)
        default: List[str] = []
        named: List[str] = []
        for specifier in node.get("specifiers", []):
            spec_type = specifier.get("type")
            local = self.write(specifier["local"], indent)
            if spec_type == "ImportDefaultSpecifier":
                default.append(local)
            elif spec_type == "ImportNamespaceSpecifier":
                default.append(f"* as {local}")
            else:
                imported = self.write(specifier.get("imported") or specifier["local"], indent)
                named.append(local if imported == local else f"{imported} as {local}")
        if named:
            default.append("{ " + ", ".join(named) + " }")
        if not default:
            return f"import {source};"
        return f"import {', '.join(default)} from {source};"

    def _write_ExportDefaultDeclaration(self, node: Dict[str, Any], indent: str) -> str:
        declaration = node["declaration"]
        text = f"export default {self.write(declaration, indent)}"
        if declaration.get("type") in _DECLARATION_TYPES:
            return text
        return text + ";"


def emit_node(
    node: Dict[str, Any],
    *,
    source: str = "",
    indent: str = "",
    options: Optional[EmitOptions] = None,
) -> str:
    """Render a single node; original subtrees are sliced out of `source`."""
    return NodeWriter(source, options).write(node, indent)


def emit_document(
    source: str, edits: Iterable[Edit], options: Optional[EmitOptions] = None
) -> str:
    """
    Apply `edits` to `source` and return the new text.

    Edits are applied in source order; zero-width edits are insertions. Two
    edits whose spans overlap cannot both be honoured and raise `EmitError`.
    """
    writer = NodeWriter(source, options)
    ordered = sorted(enumerate(edits), key=lambda item: (item[1].start, item[0]))
    pieces: List[str] = []
    cursor = 0
    for _, edit in ordered:
        if edit.start < cursor:
            raise EmitError(
                f"Edit at offset {edit.start} overlaps a previous edit ending at {cursor}.",
                edit.node,
            )
        pieces.append(source[cursor:edit.start])
        pieces.append(edit.prefix + writer.write(edit.node, edit.indent))
        cursor = edit.end
    pieces.append(source[cursor:])
    return "".join(pieces)


__all__ = ["Edit", "EmitError", "EmitOptions", "NodeWriter", "emit_document", "emit_node"]
