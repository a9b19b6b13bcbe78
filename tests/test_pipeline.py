import logging
from pathlib import Path

import pytest

from conftest import html_page
from seo_audit.config import CONTENT_WEIGHTS, AuditConfig, Rubric
from seo_audit.errors import DirectoryNotFoundError, NoFilesFoundError
from seo_audit.pipeline import audit_directory, run_audit
from seo_audit.report import load_report

LINKS = '<a href="/a">a</a><a href="/b">b</a><a href="/c">c</a>'


def links_only_rubric() -> Rubric:
    weights = {name: 0 for name in CONTENT_WEIGHTS}
    weights["internal_links"] = 10
    return Rubric("content", weights)


def test_broken_files_are_skipped_and_logged(tmp_path, write_page, caplog):
    good = write_page("good.html", html_page())
    (tmp_path / "latin1.html").write_bytes(b"<title>caf\xe9</title>")
    (tmp_path / "blank.html").write_text("   \n", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="seo_audit"):
        run = audit_directory(tmp_path)

    assert run.file_count == 1
    assert run.metadata_results[0].file_path == good.resolve()
    assert {item.file_path.name for item in run.skipped} == {"latin1.html", "blank.html"}
    assert any("document is empty" in item.reason for item in run.skipped)
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 2
    assert all(r.getMessage().startswith("Error processing") for r in errors)


def test_each_file_has_one_result_per_rubric(tmp_path, write_page):
    for name in ("index.html", "about.html", "blog/post.html"):
        write_page(name, html_page())
    run = audit_directory(tmp_path)

    assert run.file_count == 3
    assert [r.file_path for r in run.metadata_results] == [r.file_path for r in run.content_results]
    assert all(r.max_score == 80 for r in run.metadata_results)
    assert all(r.max_score == 100 for r in run.content_results)


def test_threaded_audit_keeps_scan_order(tmp_path, write_page):
    for idx in range(8):
        write_page(f"section{idx % 3}/page{idx}.html", html_page())

    serial = audit_directory(tmp_path)
    threaded = audit_directory(tmp_path, AuditConfig(workers=4))

    assert [r.file_path for r in threaded.metadata_results] == [r.file_path for r in serial.metadata_results]
    assert [r.score for r in threaded.content_results] == [r.score for r in serial.content_results]


def test_missing_directory_raises(tmp_path):
    with pytest.raises(DirectoryNotFoundError):
        audit_directory(tmp_path / "nope")


def test_run_audit_averages_and_writes_report(tmp_path, write_page):
    site = tmp_path / "site"
    write_page("linked.html", html_page(body=f"<h1>Linked</h1>{LINKS}"), root=site)
    write_page("orphan.html", html_page(body="<h1>Orphan</h1>"), root=site)
    config = AuditConfig(content_rubric=links_only_rubric(), output_dir=tmp_path / "out")

    report, artifacts = run_audit(site, config)

    assert sorted(r.normalized_score for r in report.content_results) == [0, 100]
    assert report.metadata_score == 100
    assert report.content_score == 50
    assert report.overall_score == 75
    assert report.rating == "Good"
    assert "Add more internal links between pages to improve site navigation." in report.recommendations

    data = load_report(artifacts["latest_json"])
    assert data["overallScore"] == 75
    assert data["siteUrl"] == config.base_url
    assert Path(artifacts["html_report"]).is_file()


def test_run_audit_with_only_broken_files_writes_nothing(tmp_path):
    site = tmp_path / "site"
    site.mkdir()
    (site / "empty.html").write_text("", encoding="utf-8")
    out = tmp_path / "out"

    with pytest.raises(NoFilesFoundError):
        run_audit(site, AuditConfig(output_dir=out))
    assert not out.exists()
