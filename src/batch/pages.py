"""
Migrate a whole Docusaurus v1 pages directory.

Every `.js` file under the source directory is run through the transformer
and written to the same relative path under the destination directory; other
files (images, markdown, css) are copied unchanged. Files are processed one at
a time in sorted order. A file that fails to parse or transform is reported and
skipped unless `fail_fast` is set, in which case the error propagates.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

from analyzer import DEFAULT_RULES, MigrationRules, RewriteDecision
from emitter import EmitOptions
from parser import ParseError
from transformer import TransformError, transform_source

logger = logging.getLogger(__name__)


class FileStatus(str, Enum):
    TRANSFORMED = "transformed"
    COPIED = "copied"
    FAILED = "failed"


@dataclass(frozen=True)
class BatchOptions:
    suffixes: Tuple[str, ...] = (".js",)
    copy_assets: bool = True
    fail_fast: bool = False
    rules: MigrationRules = DEFAULT_RULES
    emit_options: EmitOptions = field(default_factory=EmitOptions)


@dataclass(frozen=True)
class FileOutcome:
    source: Path
    destination: Optional[Path]
    status: FileStatus
    decisions: Tuple[RewriteDecision, ...] = ()
    exports_rewritten: int = 0
    diagnostics: Tuple[str, ...] = ()
    error: Optional[str] = None


@dataclass
class BatchReport:
    outcomes: List[FileOutcome] = field(default_factory=list)

    def _with_status(self, status: FileStatus) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is status]

    @property
    def transformed(self) -> List[FileOutcome]:
        return self._with_status(FileStatus.TRANSFORMED)

    @property
    def copied(self) -> List[FileOutcome]:
        return self._with_status(FileStatus.COPIED)

    @property
    def failures(self) -> List[FileOutcome]:
        return self._with_status(FileStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failures


def migrate_file(
    source_path: Path, destination_path: Path, options: Optional[BatchOptions] = None
) -> FileOutcome:
    """Transform one page and write the result; parse/transform errors propagate."""
    options = options or BatchOptions()
    source = source_path.read_text(encoding="utf-8")
    result = transform_source(
        source,
        source_name=str(source_path),
        rules=options.rules,
        emit_options=options.emit_options,
    )
    destination_path.parent.mkdir(parents=True, exist_ok=True)
    destination_path.write_text(result.source, encoding="utf-8")
    logger.debug(
        "Transformed %s -> %s (%d require bindings, %d exports)",
        source_path,
        destination_path,
        len(result.classifications),
        result.exports_rewritten,
    )
    return FileOutcome(
        source=source_path,
        destination=destination_path,
        status=FileStatus.TRANSFORMED,
        decisions=tuple(item.decision for item in result.classifications),
        exports_rewritten=result.exports_rewritten,
        diagnostics=tuple(result.diagnostics),
    )


def migrate_pages(
    source_dir: Union[str, Path],
    dest_dir: Union[str, Path],
    *,
    options: Optional[BatchOptions] = None,
) -> BatchReport:
    """
    Migrate every file below `source_dir` into `dest_dir`.

    Args:
        source_dir: Legacy pages directory, e.g. `website/pages/en`.
        dest_dir: Output directory, e.g. `src/pages`.
        options: Suffixes to transform, asset copying and failure policy.

    Returns:
        BatchReport with one outcome per visited file.

    Raises:
        FileNotFoundError: If `source_dir` does not exist.
        ParseError / TransformError: On the first failing page when `fail_fast`.
    """
    options = options or BatchOptions()
    source_root = Path(source_dir)
    dest_root = Path(dest_dir)
    if not source_root.is_dir():
        raise FileNotFoundError(f"Pages directory not found: {source_root}")

    report = BatchReport()
    for path in sorted(p for p in source_root.rglob("*") if p.is_file()):
        target = dest_root / path.relative_to(source_root)
        if path.suffix not in options.suffixes:
            if not options.copy_assets:
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, target)
            logger.debug("Copied %s -> %s", path, target)
            report.outcomes.append(
                FileOutcome(source=path, destination=target, status=FileStatus.COPIED)
            )
            continue

        try:
            outcome = migrate_file(path, target, options)
        except (ParseError, TransformError, UnicodeDecodeError) as exc:
            if options.fail_fast:
                raise
            logger.error("Failed to migrate %s: %s", path, exc)
            outcome = FileOutcome(
                source=path, destination=None, status=FileStatus.FAILED, error=str(exc)
            )
        report.outcomes.append(outcome)

    logger.info(
        "Migrated %d pages, copied %d files, %d failures",
        len(report.transformed),
        len(report.copied),
        len(report.failures),
    )
    return report


__all__ = [
    "BatchOptions",
    "BatchReport",
    "FileOutcome",
    "FileStatus",
    "migrate_file",
    "migrate_pages",
]
