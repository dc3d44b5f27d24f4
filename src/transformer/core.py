"""
Rewrite Docusaurus v1 pages into their v2 form.

One pass over a parsed page does three things:

1. every `require(...)` binding of a removed v1 module (the `CompLibrary`
   components, `core/` helpers, `server` modules) is rebound to inert stub
   components so existing call sites keep compiling;
2. when any `require` binding was seen, `import Layout from '@theme/Layout'`
   is inserted after the statement holding the last one;
3. each top-level `module.exports = Page;` becomes
   `export default (props) => (<Layout><Page {...props} /></Layout>);`.

The transformer is pure: it takes text and returns text, parsing its own tree
for every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from analyzer import (
    DEFAULT_RULES,
    BindingCandidate,
    Classification,
    ExportAssignment,
    MigrationRules,
    RewriteDecision,
    classify,
    collect_binding_candidates,
    collect_export_assignments,
)
from emitter import EmitError, EmitOptions
from jstree import (
    Document,
    Node,
    TreeError,
    build_arrow_function,
    build_export_default,
    build_identifier,
    build_import_default,
    build_jsx_element,
    build_jsx_spread_attribute,
    build_object_expression,
    build_property,
    build_variable_declarator,
)


class TransformError(RuntimeError):
    """Raised when a rewrite cannot be applied to the tree."""

    def __init__(self, message: str, node: Optional[Dict[str, Any]] = None):
        loc = ""
        if node and isinstance(node, dict):
            loc_meta = node.get("loc", {})
            start = loc_meta.get("start") or {}
            line = start.get("line")
            column = start.get("column")
            if line is not None and column is not None:
                loc = f" (line {line}, column {column})"
        super().__init__(f"{message}{loc}")
        self.node = node


@dataclass(frozen=True)
class TransformContext:
    """Contextual information available during a transformation."""

    source_name: str
    rules: MigrationRules = DEFAULT_RULES
    emit_options: EmitOptions = field(default_factory=EmitOptions)


@dataclass(frozen=True)
class TransformResult:
    source: str
    classifications: List[Classification]
    exports_rewritten: int
    diagnostics: List[str]

    @property
    def changed(self) -> bool:
        return bool(self.classifications) or self.exports_rewritten > 0


class Transformer:
    """Applies the page migration to one `Document`."""

    def __init__(self, *, context: TransformContext):
        self.context = context
        self.rules = context.rules
        self.diagnostics: List[str] = []

    def _info(self, message: str, candidate: Optional[BindingCandidate] = None) -> None:
        loc = candidate.location.describe() if candidate is not None else ""
        self.diagnostics.append(f"{message}{loc}")

    # ----------------------------------------------------------------- stubs

    def _stub_function(self) -> Node:
        """`(props) => <div {...props}></div>`, freshly built on every call."""
        rules = self.rules
        return build_arrow_function(
            [build_identifier(rules.stub_param)],
            build_jsx_element(
                rules.stub_tag,
                [build_jsx_spread_attribute(build_identifier(rules.stub_param))],
            ),
        )

    def _stub_object(self) -> Node:
        return build_object_expression(
            build_property(name, self._stub_function()) for name in self.rules.stub_properties
        )

    def _layout_wrapper(self, exported_name: str) -> Node:
        rules = self.rules
        page = build_jsx_element(
            exported_name,
            [build_jsx_spread_attribute(build_identifier(rules.stub_param))],
            self_closing=True,
        )
        return build_arrow_function(
            [build_identifier(rules.stub_param)],
            build_jsx_element(rules.layout_name, children=[page]),
        )

    # ---------------------------------------------------------------- passes

    def rewrite_declarator(self, document: Document, classification: Classification) -> None:
        candidate = classification.candidate
        decision = classification.decision
        if decision is RewriteDecision.NO_OP:
            self._info(f"Left require() unchanged: {classification.reason}", candidate)
            return
        if decision is RewriteDecision.THREE_STUB_OBJECT:
            init = self._stub_object()
        else:
            init = self._stub_function()
        declarator = build_variable_declarator(candidate.binding, init)
        document.replace(candidate.location, declarator)

    def insert_companion_import(self, document: Document, last: BindingCandidate) -> None:
        statement = last.statement
        if statement is None:
            raise TransformError("require() binding is not inside a statement.", last.location.node)
        document.insert_after(
            statement,
            build_import_default(self.rules.layout_name, self.rules.layout_source),
        )

    def rewrite_export(self, document: Document, export: ExportAssignment) -> None:
        declaration = build_export_default(
            self._layout_wrapper(export.exported_name),
            comments=document.leading_comments(export.location),
        )
        document.replace(export.location, declaration)

    def transform_document(self, document: Document) -> TransformResult:
        candidates = collect_binding_candidates(document, self.rules)
        classifications = [classify(candidate, self.rules) for candidate in candidates]
        exports: List[ExportAssignment] = []
        try:
            for classification in classifications:
                self.rewrite_declarator(document, classification)
            if candidates:
                self.insert_companion_import(document, candidates[-1])

            exports = collect_export_assignments(document, self.rules)
            for export in exports:
                self.rewrite_export(document, export)

            source = document.print(self.context.emit_options)
        except (TreeError, EmitError) as exc:
            raise TransformError(f"{self.context.source_name}: {exc}") from exc

        return TransformResult(
            source=source,
            classifications=classifications,
            exports_rewritten=len(exports),
            diagnostics=self.diagnostics,
        )


def transform_source(
    source: str,
    *,
    source_name: str = "<input>",
    rules: MigrationRules = DEFAULT_RULES,
    emit_options: Optional[EmitOptions] = None,
) -> TransformResult:
    """
    Parse `source`, migrate it and return the new text with a report.

    Raises:
        parser.ParseError: If `source` is not valid JavaScript.
        TransformError: If an edit cannot be applied.
    """
    context = TransformContext(
        source_name=source_name,
        rules=rules,
        emit_options=emit_options or EmitOptions(),
    )
    document = Document.parse(source, source_name=source_name)
    return Transformer(context=context).transform_document(document)


def transform(source: str) -> str:
    """Migrate one page's source text with the default rules."""
    return transform_source(source).source


__all__ = [
    "Transformer",
    "TransformContext",
    "TransformError",
    "TransformResult",
    "transform",
    "transform_source",
]
