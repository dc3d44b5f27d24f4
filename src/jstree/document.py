"""
An owned, editable JavaScript syntax tree.

`Document` wraps one parse of one source text. Callers locate nodes with
`find`, which yields `NodeLocation` paths (node, the slot holding it, and the
parent path), and edit the tree through `replace` and `insert_after`. Each edit
both mutates the dict tree and records a text edit, so `print` can reproduce
every untouched byte of the original and only regenerate what changed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from emitter import Edit, EmitOptions, emit_document
from parser import parse_js

from .nodes import Node, child_keys, iter_nodes

_STATEMENT_LISTS = {
    ("Program", "body"),
    ("BlockStatement", "body"),
    ("SwitchCase", "consequent"),
}
_INDENT = re.compile(r"[ \t]*")


class TreeError(RuntimeError):
    """Raised when an edit would leave the tree inconsistent."""

    def __init__(self, message: str, node: Optional[Node] = None):
        loc = ""
        if node and isinstance(node, dict):
            start = (node.get("loc") or {}).get("start") or {}
            line = start.get("line")
            column = start.get("column")
            if line is not None and column is not None:
                loc = f" (line {line}, column {column})"
        super().__init__(f"{message}{loc}")
        self.node = node


@dataclass(frozen=True)
class NodeLocation:
    """Path to a node: the node, the slot that holds it, and the parent path."""

    node: Node
    container: Optional[Node] = None
    key: Optional[str] = None
    index: Optional[int] = None
    parent: Optional["NodeLocation"] = None

    @property
    def in_statement_list(self) -> bool:
        if self.container is None or self.index is None:
            return False
        return (self.container.get("type"), self.key) in _STATEMENT_LISTS

    @property
    def is_top_level_statement(self) -> bool:
        return (
            self.container is not None
            and self.container.get("type") == "Program"
            and self.key == "body"
        )

    def enclosing_statement(self) -> Optional["NodeLocation"]:
        """
        Nearest ancestor held directly by a statement list.

        `export const X = ...` resolves to the export statement, and a
        `for (var x = ...;;)` head resolves to the loop.
        """
        current: Optional[NodeLocation] = self.parent
        while current is not None:
            if current.in_statement_list:
                return current
            current = current.parent
        return None

    def describe(self) -> str:
        start = (self.node.get("loc") or {}).get("start") or {}
        line = start.get("line")
        column = start.get("column")
        if line is None or column is None:
            return ""
        return f" (line {line}, column {column})"


class Document:
    """A parsed JavaScript source plus the edits applied to it so far."""

    def __init__(self, ast: Node, source: str, comments: List[Node], source_name: str):
        self.ast = ast
        self.source = source
        self.comments = sorted(comments, key=lambda comment: comment["range"][0])
        self.source_name = source_name
        self._edits: List[Edit] = []

    @classmethod
    def parse(
        cls,
        source: str,
        *,
        source_name: str = "<input>",
        source_type: str = "module",
    ) -> "Document":
        result = parse_js(source, source_name=source_name, source_type=source_type)
        return cls(result.ast, result.source, result.comments, result.source_name)

    @property
    def root(self) -> NodeLocation:
        return NodeLocation(node=self.ast)

    # ------------------------------------------------------------------ lookup

    def find(self, predicate: Callable[[NodeLocation], bool]) -> List[NodeLocation]:
        """All locations whose node satisfies `predicate`, in document order."""
        matches: List[NodeLocation] = []
        self._walk(self.root, predicate, matches)
        return sorted(matches, key=_start_offset)

    def find_type(
        self, node_type: str, predicate: Optional[Callable[[NodeLocation], bool]] = None
    ) -> List[NodeLocation]:
        return self.find(
            lambda location: location.node.get("type") == node_type
            and (predicate is None or predicate(location))
        )

    def _walk(
        self,
        location: NodeLocation,
        predicate: Callable[[NodeLocation], bool],
        matches: List[NodeLocation],
    ) -> None:
        if predicate(location):
            matches.append(location)
        node = location.node
        for key in child_keys(node):
            value = node[key]
            if isinstance(value, list):
                for index, element in enumerate(value):
                    if isinstance(element, dict) and "type" in element:
                        child = NodeLocation(element, node, key, index, location)
                        self._walk(child, predicate, matches)
            else:
                self._walk(NodeLocation(value, node, key, None, location), predicate, matches)

    # -------------------------------------------------------------- comments

    def leading_comments(self, location: NodeLocation) -> List[Node]:
        """Comments between the previous sibling statement and this one."""
        if not location.in_statement_list:
            return []
        node = location.node
        if "range" not in node:
            return []
        siblings = location.container[location.key]
        position = self._position(location)
        lower = 0 if location.container.get("type") == "Program" else location.container["range"][0]
        previous_line: Optional[int] = None
        for sibling in reversed(siblings[:position]):
            if "range" in sibling:
                lower = sibling["range"][1]
                previous_line = _line(sibling, "end")
                break
        start = node["range"][0]
        return [
            comment
            for comment in self.comments
            if comment["range"][0] >= lower
            and comment["range"][1] <= start
            and (previous_line is None or _line(comment, "start") != previous_line)
        ]

    def _trailing_end(self, node: Node) -> int:
        """Offset just past `node` and any comments sharing its last line."""
        offset = node["range"][1]
        end_line = _line(node, "end")
        for comment in self.comments:
            if comment["range"][0] < offset:
                continue
            if _line(comment, "start") != end_line or self.source[offset:comment["range"][0]].strip():
                break
            offset = comment["range"][1]
        return offset

    def _indent_at(self, offset: int) -> str:
        line_start = self.source.rfind("\n", 0, offset) + 1
        return _INDENT.match(self.source, line_start).group(0)

    # ----------------------------------------------------------------- edits

    def replace(self, location: NodeLocation, new_node: Node) -> NodeLocation:
        """
        Put `new_node` into the slot held by `location`.

        For statements, the old node's leading comments go with it; carry them
        over via `leadingComments` on the new node to keep them.
        """
        self._require_attached(location)
        old = location.node
        if "range" not in old:
            raise TreeError("Only nodes parsed from the source can be replaced.", old)
        self._require_unshared(new_node, replacing=old)

        # Comments are looked up through the old node, so before the slot changes.
        start, end = old["range"]
        for comment in self.leading_comments(location):
            start = min(start, comment["range"][0])

        if location.index is None:
            location.container[location.key] = new_node
        else:
            location.container[location.key][self._position(location)] = new_node
        self._edits.append(
            Edit(start=start, end=end, node=new_node, indent=self._indent_at(old["range"][0]))
        )
        return NodeLocation(new_node, location.container, location.key, location.index, location.parent)

    def insert_after(self, location: NodeLocation, new_node: Node) -> NodeLocation:
        """Insert the statement `new_node` right after the statement at `location`."""
        if not location.in_statement_list:
            raise TreeError("Can only insert after a statement in a statement list.", location.node)
        self._require_attached(location)
        anchor = location.node
        if "range" not in anchor:
            raise TreeError("Can only insert after a statement parsed from the source.", anchor)
        self._require_unshared(new_node)

        siblings = location.container[location.key]
        position = self._position(location) + 1
        siblings.insert(position, new_node)

        offset = self._trailing_end(anchor)
        indent = self._indent_at(anchor["range"][0])
        self._edits.append(
            Edit(start=offset, end=offset, node=new_node, indent=indent, prefix="\n" + indent)
        )
        return NodeLocation(new_node, location.container, location.key, position, location.parent)

    def print(self, options: Optional[EmitOptions] = None) -> str:
        if not self._edits:
            return self.source
        return emit_document(self.source, self._edits, options)

    # ---------------------------------------------------------------- checks

    def _position(self, location: NodeLocation) -> int:
        siblings = location.container[location.key]
        for position, sibling in enumerate(siblings):
            if sibling is location.node:
                return position
        raise TreeError("Node is no longer attached to its parent.", location.node)

    def _require_attached(self, location: NodeLocation) -> None:
        current: Optional[NodeLocation] = location
        while current is not None and current.container is not None:
            slot = current.container.get(current.key)
            if isinstance(slot, list):
                if not any(element is current.node for element in slot):
                    raise TreeError("Node is no longer attached to its parent.", location.node)
            elif slot is not current.node:
                raise TreeError("Node is no longer attached to its parent.", location.node)
            if current.parent is not None and current.parent.node is not current.container:
                raise TreeError("Node path does not match the tree.", location.node)
            current = current.parent
        if current is None or current.node is not self.ast:
            raise TreeError("Node does not belong to this document.", location.node)

    def _require_unshared(self, new_node: Node, replacing: Optional[Node] = None) -> None:
        seen = set()
        for node in iter_nodes(new_node):
            if id(node) in seen:
                raise TreeError(f"Node of type {node.get('type')} is used twice in one subtree.", node)
            seen.add(id(node))
        released = {id(node) for node in iter_nodes(replacing)} if replacing else set()
        for node in iter_nodes(self.ast):
            if id(node) in seen and id(node) not in released:
                raise TreeError(f"Node of type {node.get('type')} is already in the tree.", node)


def _start_offset(location: NodeLocation) -> int:
    node_range = location.node.get("range")
    return node_range[0] if node_range else -1


def _line(node: Dict[str, Any], edge: str) -> Optional[int]:
    return ((node.get("loc") or {}).get(edge) or {}).get("line")


__all__ = ["Document", "NodeLocation", "TreeError"]
