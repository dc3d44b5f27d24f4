"""
Decide how each legacy `require` binding gets rewritten.

The decision depends only on the candidate itself. Rules are tried in a fixed
order and the first match wins; the CompLibrary check always comes before the
generic `server` / `core` checks. Shapes without a rule fall through to
`NO_OP`, never to an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from jstree import Node, NodeKind, kind_of, template_text

from .candidates import BindingCandidate, InitializerShape
from .rules import DEFAULT_RULES, MigrationRules


class RewriteDecision(str, Enum):
    THREE_STUB_OBJECT = "three-stub-object"
    SINGLE_STUB_FUNCTION = "single-stub-function"
    NO_OP = "no-op"


@dataclass(frozen=True)
class Classification:
    candidate: BindingCandidate
    decision: RewriteDecision
    reason: str


_Verdict = Tuple[RewriteDecision, str]
_ArgumentRule = Callable[[Node, MigrationRules], _Verdict]


def _no_op(argument: Optional[Node], rules: MigrationRules) -> _Verdict:
    kind = kind_of(argument) if argument is not None else None
    if kind is None:
        return RewriteDecision.NO_OP, "require() has no argument"
    if kind is NodeKind.OTHER:
        return RewriteDecision.NO_OP, f"unsupported argument type {argument.get('type')}"
    return RewriteDecision.NO_OP, f"unsupported argument kind {kind.value}"


def _template_verdict(argument: Node, rules: MigrationRules) -> _Verdict:
    text = template_text(argument)
    if rules.core_regex.search(text):
        return RewriteDecision.SINGLE_STUB_FUNCTION, f"template path {text!r} is under core"
    return RewriteDecision.NO_OP, f"template path {text!r} is not a legacy module"


# require('...')


def _call_string(argument: Node, rules: MigrationRules) -> _Verdict:
    path = argument["value"]
    if rules.comp_library_fragment in path:
        return RewriteDecision.THREE_STUB_OBJECT, f"{path!r} is the shared component library"
    return RewriteDecision.NO_OP, f"{path!r} is not a legacy module"


_CALL_RULES: Dict[NodeKind, _ArgumentRule] = {
    NodeKind.STRING_LITERAL: _call_string,
    NodeKind.TEMPLATE_LITERAL: _template_verdict,
}


# require('...').member


def _member_string(argument: Node, rules: MigrationRules) -> _Verdict:
    path = argument["value"]
    if path == rules.comp_library_path:
        return RewriteDecision.THREE_STUB_OBJECT, f"{path!r} is the shared component library"
    if rules.server_regex.search(path):
        return RewriteDecision.SINGLE_STUB_FUNCTION, f"{path!r} is a server module"
    return RewriteDecision.NO_OP, f"{path!r} is not a legacy module"


_MEMBER_RULES: Dict[NodeKind, _ArgumentRule] = {
    NodeKind.STRING_LITERAL: _member_string,
    NodeKind.TEMPLATE_LITERAL: _template_verdict,
}


_RULES_BY_SHAPE: Dict[InitializerShape, Dict[NodeKind, _ArgumentRule]] = {
    InitializerShape.MODULE_LOAD_CALL: _CALL_RULES,
    InitializerShape.MEMBER_OF_MODULE_LOAD: _MEMBER_RULES,
}


def classify(
    candidate: BindingCandidate, rules: MigrationRules = DEFAULT_RULES
) -> Classification:
    """Return the rewrite decision for one binding candidate."""
    argument = candidate.argument
    rule = _no_op
    if argument is not None:
        rule = _RULES_BY_SHAPE[candidate.shape].get(kind_of(argument), _no_op)
    decision, reason = rule(argument, rules)
    return Classification(candidate=candidate, decision=decision, reason=reason)


__all__ = ["Classification", "RewriteDecision", "classify"]
