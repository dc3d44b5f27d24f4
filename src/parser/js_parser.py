"""
JavaScript parsing utilities built on top of the Python `esprima` port.

The module exposes `parse_js`, which returns the JSON-compatible AST along with
the comment list and the original text. Legacy pages are React components, so
JSX is always enabled. Parsing is strict: a syntax error raises `ParseError`
instead of producing a partially recovered tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import esprima


class ParseError(RuntimeError):
    """Raised when the input text is not valid JavaScript."""

    def __init__(
        self,
        description: str,
        *,
        source_name: str = "<input>",
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        loc = ""
        if line is not None:
            loc = f":{line}" if column is None else f":{line}:{column}"
        super().__init__(f"{source_name}{loc}: {description}")
        self.description = description
        self.source_name = source_name
        self.line = line
        self.column = column


@dataclass(frozen=True)
class ParseResult:
    """Aggregate of the output AST plus the text it was parsed from."""

    ast: Dict[str, Any]
    comments: List[Dict[str, Any]]
    source: str
    source_name: str


def parse_js(
    source: str,
    *,
    source_name: str = "<input>",
    source_type: str = "module",
    jsx: bool = True,
) -> ParseResult:
    """
    Parse JavaScript source text into an esprima AST.

    Args:
        source: Raw JavaScript source code.
        source_name: Optional label used for diagnostics (defaults to `<input>`).
        source_type: `"script"` or `"module"`; modules accept the import/export
            syntax the migrator produces, so re-running it on its own output works.
        jsx: Enable JSX syntax.

    Returns:
        ParseResult containing the AST (with `range` and `loc` on every node)
        and the collected comments.

    Raises:
        ParseError: If the source is not syntactically valid.
    """
    options = dict(loc=True, range=True, comment=True, jsx=jsx, tolerant=False)
    parser = esprima.parseModule if source_type == "module" else esprima.parseScript
    try:
        ast = parser(source, **options)
    except esprima.Error as exc:
        raise ParseError(
            getattr(exc, "description", None) or str(exc),
            source_name=source_name,
            line=getattr(exc, "lineNumber", None),
            column=getattr(exc, "column", None),
        ) from exc

    raw_ast = ast.toDict() if hasattr(ast, "toDict") else ast
    comments = list(raw_ast.get("comments") or [])
    return ParseResult(
        ast=raw_ast,
        comments=comments,
        source=source,
        source_name=source_name,
    )


__all__ = ["ParseError", "ParseResult", "parse_js"]
