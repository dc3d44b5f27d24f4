"""Detection and classification of legacy page constructs."""

from .candidates import (
    BindingCandidate,
    ExportAssignment,
    InitializerShape,
    collect_binding_candidates,
    collect_export_assignments,
)
from .classifier import Classification, RewriteDecision, classify
from .rules import DEFAULT_RULES, MigrationRules

__all__ = [
    "BindingCandidate",
    "Classification",
    "DEFAULT_RULES",
    "ExportAssignment",
    "InitializerShape",
    "MigrationRules",
    "RewriteDecision",
    "classify",
    "collect_binding_candidates",
    "collect_export_assignments",
]
