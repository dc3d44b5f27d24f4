"""Names, paths and patterns that define the legacy-page migration."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Pattern, Tuple


@dataclass(frozen=True)
class MigrationRules:
    """Configuration for recognising legacy imports and building replacements."""

    module_loader: str = "require"
    comp_library_fragment: str = "../../core/CompLibrary"
    comp_library_path: str = "../../core/CompLibrary.js"
    server_pattern: str = r"server"
    core_pattern: str = r"/core/"
    stub_tag: str = "div"
    stub_param: str = "props"
    stub_properties: Tuple[str, ...] = ("Container", "GridBlock", "MarkdownBlock")
    layout_name: str = "Layout"
    layout_source: str = "@theme/Layout"
    export_target: str = "module.exports"

    @cached_property
    def server_regex(self) -> Pattern[str]:
        return re.compile(self.server_pattern)

    @cached_property
    def core_regex(self) -> Pattern[str]:
        return re.compile(self.core_pattern)


DEFAULT_RULES = MigrationRules()


__all__ = ["DEFAULT_RULES", "MigrationRules"]
