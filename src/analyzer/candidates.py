"""
Locate the legacy constructs the migrator rewrites.

Two kinds of candidates are collected from a `Document`:

* binding candidates: `var x = require(...)` and `var x = require(...).y`
  declarators, at any depth, in document order;
* export assignments: `module.exports = Name;` statements sitting directly in
  the program body. The same assignment inside a block, branch or function is
  left alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from jstree import (
    Document,
    Node,
    NodeKind,
    NodeLocation,
    first_argument,
    is_module_load_call,
    kind_of,
    member_path,
)

from .rules import DEFAULT_RULES, MigrationRules


class InitializerShape(str, Enum):
    MODULE_LOAD_CALL = "module_load_call"
    MEMBER_OF_MODULE_LOAD = "member_of_module_load"


@dataclass(frozen=True)
class BindingCandidate:
    """A declarator initialised from a module-load call."""

    location: NodeLocation
    shape: InitializerShape
    call: Node
    argument: Optional[Node]
    order: int

    @property
    def binding(self) -> Node:
        return self.location.node["id"]

    @property
    def name(self) -> Optional[str]:
        binding = self.binding
        return binding.get("name") if kind_of(binding) is NodeKind.IDENTIFIER else None

    @property
    def statement(self) -> Optional[NodeLocation]:
        return self.location.enclosing_statement()


@dataclass(frozen=True)
class ExportAssignment:
    """A top-level `module.exports = Name;` statement."""

    location: NodeLocation
    exported_name: str


def _initializer_shape(init: Optional[Node], loader: str) -> Optional[InitializerShape]:
    if is_module_load_call(init, loader):
        return InitializerShape.MODULE_LOAD_CALL
    if kind_of(init) is NodeKind.MEMBER_EXPRESSION and is_module_load_call(
        init.get("object"), loader
    ):
        return InitializerShape.MEMBER_OF_MODULE_LOAD
    return None


def collect_binding_candidates(
    document: Document, rules: MigrationRules = DEFAULT_RULES
) -> List[BindingCandidate]:
    locations = document.find_type(
        "VariableDeclarator",
        lambda location: _initializer_shape(location.node.get("init"), rules.module_loader)
        is not None,
    )
    candidates: List[BindingCandidate] = []
    for order, location in enumerate(locations):
        init = location.node["init"]
        shape = _initializer_shape(init, rules.module_loader)
        call = init if shape is InitializerShape.MODULE_LOAD_CALL else init["object"]
        candidates.append(
            BindingCandidate(
                location=location,
                shape=shape,
                call=call,
                argument=first_argument(call),
                order=order,
            )
        )
    return candidates


def _is_export_assignment(location: NodeLocation, rules: MigrationRules) -> bool:
    if not location.is_top_level_statement:
        return False
    node = location.node
    if node.get("type") != "ExpressionStatement":
        return False
    expression = node.get("expression")
    if kind_of(expression) is not NodeKind.ASSIGNMENT or expression.get("operator") != "=":
        return False
    return (
        member_path(expression.get("left")) == rules.export_target
        and kind_of(expression.get("right")) is NodeKind.IDENTIFIER
    )


def collect_export_assignments(
    document: Document, rules: MigrationRules = DEFAULT_RULES
) -> List[ExportAssignment]:
    return [
        ExportAssignment(
            location=location,
            exported_name=location.node["expression"]["right"]["name"],
        )
        for location in document.find(lambda location: _is_export_assignment(location, rules))
    ]


__all__ = [
    "BindingCandidate",
    "ExportAssignment",
    "InitializerShape",
    "collect_binding_candidates",
    "collect_export_assignments",
]
