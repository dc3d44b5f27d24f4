import shutil
from pathlib import Path

import pytest

from analyzer import RewriteDecision
from batch import BatchOptions, FileStatus, migrate_pages
from parser import ParseError

CASES = Path(__file__).parent / "cases"


def _legacy_site(root: Path) -> Path:
    pages = root / "website" / "pages" / "en"
    (pages / "img").mkdir(parents=True)
    shutil.copy(CASES / "index_page.js", pages / "index.js")
    shutil.copy(CASES / "help_page.js", pages / "help.js")
    (pages / "broken.js").write_text("const = require('x');\n", encoding="utf-8")
    (pages / "img" / "logo.svg").write_text("<svg/>\n", encoding="utf-8")
    return pages


def test_migrate_pages_transforms_copies_and_reports(tmp_path):
    pages = _legacy_site(tmp_path)
    dest = tmp_path / "src" / "pages"

    report = migrate_pages(pages, dest)

    assert not report.ok
    assert sorted(outcome.source.name for outcome in report.transformed) == ["help.js", "index.js"]
    assert [outcome.source.name for outcome in report.copied] == ["logo.svg"]
    assert [outcome.source.name for outcome in report.failures] == ["broken.js"]
    assert report.failures[0].destination is None
    assert report.failures[0].error

    expected = (CASES / "index_page.expected.js").read_text(encoding="utf-8")
    assert (dest / "index.js").read_text(encoding="utf-8") == expected
    assert (dest / "img" / "logo.svg").read_text(encoding="utf-8") == "<svg/>\n"
    assert not (dest / "broken.js").exists()

    help_outcome = next(o for o in report.transformed if o.source.name == "help.js")
    assert help_outcome.status is FileStatus.TRANSFORMED
    assert help_outcome.exports_rewritten == 1
    assert help_outcome.decisions == (
        RewriteDecision.THREE_STUB_OBJECT,
        RewriteDecision.SINGLE_STUB_FUNCTION,
        RewriteDecision.SINGLE_STUB_FUNCTION,
    )


def test_migrate_pages_fail_fast(tmp_path):
    pages = _legacy_site(tmp_path)
    with pytest.raises(ParseError):
        migrate_pages(pages, tmp_path / "out", options=BatchOptions(fail_fast=True))


def test_migrate_pages_without_assets(tmp_path):
    pages = _legacy_site(tmp_path)
    (pages / "broken.js").unlink()
    dest = tmp_path / "out"

    report = migrate_pages(pages, dest, options=BatchOptions(copy_assets=False))

    assert report.ok
    assert report.copied == []
    assert not (dest / "img").exists()


def test_migrate_pages_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        migrate_pages(tmp_path / "missing", tmp_path / "out")
