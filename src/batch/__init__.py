"""Directory-level migration of legacy pages."""

from .pages import (
    BatchOptions,
    BatchReport,
    FileOutcome,
    FileStatus,
    migrate_file,
    migrate_pages,
)

__all__ = [
    "BatchOptions",
    "BatchReport",
    "FileOutcome",
    "FileStatus",
    "migrate_file",
    "migrate_pages",
]
