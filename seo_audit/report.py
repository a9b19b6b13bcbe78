"""
HTML and JSON report rendering for an aggregated audit.

Artifacts written per run:
    seo-report-<timestamp>.html / .json   (kept across runs)
    seo-report.html / seo-report.json     (latest copy)
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from html import escape
from pathlib import Path
from typing import Any

from .errors import ReportWriteError
from .models import AggregateReport, FileAuditResult

logger = logging.getLogger(__name__)

REPORT_STEM = "seo-report"
REQUIRED_KEYS = ("overallScore", "overallRating", "metadataScore", "contentScore", "metadata", "content", "recommendations")
RESULT_KEYS = ("filePath", "score", "maxScore", "normalizedScore", "checks", "issues")

STYLE = """
    :root {
      --bg: #f2f6fc;
      --panel: #ffffff;
      --line: #d8e2ef;
      --text: #0f172a;
      --muted: #4b6078;
      --accent: #2a5885;
      --good: #0f9d58;
      --warn: #d5881f;
      --danger: #b42318;
    }
    * { box-sizing: border-box; }
    body {
      margin: 0;
      font-family: "Inter", "Segoe UI", Arial, sans-serif;
      background: var(--bg);
      color: var(--text);
      line-height: 1.5;
    }
    .page { width: min(1200px, calc(100vw - 28px)); margin: 16px auto 32px; }
    h1, h2, h3 { color: var(--accent); }
    .muted { color: var(--muted); font-size: 14px; }
    .panel {
      background: var(--panel);
      border: 1px solid var(--line);
      border-left: 5px solid var(--accent);
      border-radius: 10px;
      padding: 18px;
      margin-top: 16px;
    }
    .summary { display: flex; flex-wrap: wrap; gap: 12px; }
    .summary-item {
      flex: 1;
      min-width: 200px;
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 10px;
      padding: 14px;
      text-align: center;
      box-shadow: 0 2px 6px rgba(15, 23, 42, 0.06);
    }
    .score { font-size: 2em; font-weight: 800; margin: 8px 0; }
    .good { color: var(--good); }
    .medium { color: var(--warn); }
    .poor { color: var(--danger); }
    .file { border: 1px solid var(--line); border-radius: 8px; padding: 12px; margin-bottom: 14px; }
    .file-header { display: flex; justify-content: space-between; align-items: center; border-bottom: 1px solid var(--line); }
    .file-header h3 { margin: 6px 0; font-size: 16px; word-break: break-all; }
    .badge { color: #fff; font-weight: 700; padding: 4px 10px; border-radius: 14px; }
    .badge.good { background: var(--good); color: #fff; }
    .badge.medium { background: var(--warn); color: #fff; }
    .badge.poor { background: var(--danger); color: #fff; }
    table { width: 100%; border-collapse: collapse; margin: 10px 0; font-size: 14px; }
    th, td { padding: 8px 10px; border-bottom: 1px solid var(--line); text-align: left; vertical-align: top; }
    th { background: #eef3fa; }
    td.value { word-break: break-word; }
    .passed { color: var(--good); font-weight: 600; }
    .failed { color: var(--danger); font-weight: 600; }
"""


def _score_class(value: int) -> str:
    if value >= 70:
        return "good"
    if value >= 50:
        return "medium"
    return "poor"


def report_timestamp(now: datetime | None = None) -> str:
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z").replace(":", "-")


def display_path(path: Path, directory: Path | None) -> str:
    if directory is not None:
        try:
            return path.relative_to(directory).as_posix()
        except ValueError:
            pass
    return path.name


def _summary_box(label: str, score: int, rating: str) -> str:
    return f"""
      <div class="summary-item">
        <h3>{escape(label)}</h3>
        <div class="score {_score_class(score)}">{score}/100</div>
        <p>{escape(rating)}</p>
      </div>"""


def _file_card(result: FileAuditResult, directory: Path | None) -> str:
    rows = "".join(
        f"<tr><td>{escape(check.name)}</td>"
        f"<td class='{check.status}'>{'Passed' if check.passed else 'Failed'}</td>"
        f"<td class='value'>{escape(check.observed_value)}</td></tr>"
        for check in result.checks
    )
    if result.issues:
        issues_html = "<h4>Issues:</h4><ul>" + "".join(f"<li>{escape(issue)}</li>" for issue in result.issues) + "</ul>"
    else:
        issues_html = "<p>No issues found!</p>"
    score = result.normalized_score
    return f"""
        <div class="file">
          <div class="file-header">
            <h3>{escape(display_path(result.file_path, directory))}</h3>
            <span class="badge {_score_class(score)}">{score}/100</span>
          </div>
          <table>
            <tr><th>Check</th><th>Status</th><th>Value</th></tr>
            {rows}
          </table>
          {issues_html}
        </div>"""


def _section(title: str, results: list[FileAuditResult], directory: Path | None) -> str:
    ordered = sorted(results, key=lambda r: r.normalized_score)
    cards = "".join(_file_card(result, directory) for result in ordered) or "<p>No files audited.</p>"
    return f"""
    <section class="panel">
      <h2>{escape(title)}</h2>
      {cards}
    </section>"""


def render_html(
    report: AggregateReport,
    site_url: str,
    directory: Path | None = None,
    generated_at: str | None = None,
) -> str:
    generated = generated_at or datetime.now(UTC).isoformat(timespec="seconds")
    recommendations = "".join(f"<li>{escape(item)}</li>" for item in report.recommendations)
    skipped_html = ""
    if report.skipped:
        skipped_rows = "".join(
            f"<li><code>{escape(display_path(item.file_path, directory))}</code>: {escape(item.reason)}</li>"
            for item in report.skipped
        )
        skipped_html = f"""
    <section class="panel">
      <h2>Skipped Files</h2>
      <ul>{skipped_rows}</ul>
    </section>"""

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>SEO Audit Report - {escape(site_url)}</title>
  <style>{STYLE}  </style>
</head>
<body>
  <div class="page">
    <header>
      <h1>SEO Audit Report</h1>
      <p class="muted">Generated on: {escape(generated)}</p>
      <p class="muted">Site URL: {escape(site_url)}</p>
      <p class="muted">Directory: {escape(str(directory) if directory else "n/a")}</p>
    </header>

    <div class="summary">
      {_summary_box("Metadata Score", report.metadata_score, report.metadata_rating)}
      {_summary_box("Content Score", report.content_score, report.content_rating)}
      {_summary_box("Overall Rating", report.overall_score, report.rating)}
    </div>
    {_section("Metadata Analysis", report.metadata_results, directory)}
    {_section("Content Analysis", report.content_results, directory)}

    <section class="panel">
      <h2>Readability</h2>
      <p>Average Flesch reading ease: <strong>{report.readability_score}/100</strong> ({escape(report.readability_rating)})</p>
      <p>Total content: {report.total_words} words</p>
    </section>
    {skipped_html}
    <section class="panel">
      <h2>Recommendations</h2>
      <ul>{recommendations}</ul>
    </section>
  </div>
</body>
</html>
"""


def report_payload(
    report: AggregateReport,
    site_url: str,
    directory: Path | None = None,
    generated_at: str | None = None,
) -> dict[str, Any]:
    return {
        "generatedAt": generated_at or datetime.now(UTC).isoformat(timespec="seconds"),
        "siteUrl": site_url,
        "directory": str(directory) if directory else None,
        "metadataScore": report.metadata_score,
        "metadataRating": report.metadata_rating,
        "contentScore": report.content_score,
        "contentRating": report.content_rating,
        "overallScore": report.overall_score,
        "overallRating": report.rating,
        "readability": {
            "score": report.readability_score,
            "rating": report.readability_rating,
            "totalWords": report.total_words,
        },
        "metadata": [result.to_dict() for result in report.metadata_results],
        "content": [result.to_dict() for result in report.content_results],
        "skipped": [item.to_dict() for item in report.skipped],
        "recommendations": list(report.recommendations),
    }


def _rollback(
    output_dir: Path,
    created: bool,
    staged: list[tuple[Path, Path]],
    published: list[Path],
    backups: dict[Path, Path],
) -> None:
    for tmp, _ in staged:
        tmp.unlink(missing_ok=True)
    for final in published:
        if final not in backups:
            final.unlink(missing_ok=True)
    for final, backup in backups.items():
        os.replace(backup, final)
    if created and output_dir.is_dir():
        output_dir.rmdir()


def _stage_and_publish(output_dir: Path, files: dict[Path, str]) -> None:
    # Existing files are moved aside and restored if any step fails.
    created = not output_dir.exists()
    staged: list[tuple[Path, Path]] = []
    published: list[Path] = []
    backups: dict[Path, Path] = {}
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for final, text in files.items():
            tmp = final.with_name(f".{final.name}.tmp")
            tmp.write_text(text, encoding="utf-8")
            staged.append((tmp, final))
        for tmp, final in staged:
            if final.exists():
                backup = final.with_name(f".{final.name}.bak")
                os.replace(final, backup)
                backups[final] = backup
            os.replace(tmp, final)
            published.append(final)
    except OSError as exc:
        try:
            _rollback(output_dir, created, staged, published, backups)
        except OSError as cleanup_exc:
            logger.error("Could not restore %s after failed write: %s", output_dir, cleanup_exc)
        raise ReportWriteError(output_dir, exc.strerror or str(exc)) from exc
    for backup in backups.values():
        backup.unlink(missing_ok=True)


def write_report(
    report: AggregateReport,
    output_dir: str | Path,
    site_url: str,
    directory: Path | None = None,
    now: datetime | None = None,
) -> dict[str, str]:
    """Write the timestamped HTML/JSON pair plus the ``seo-report.*`` latest aliases.

    Either every file is written or none is: content is staged to temporary
    files first and ``ReportWriteError`` is raised on any filesystem failure.
    """
    out = Path(output_dir).resolve()
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    stamp = report_timestamp(moment)
    generated_at = moment.isoformat(timespec="seconds")

    html_content = render_html(report, site_url, directory, generated_at)
    json_content = json.dumps(report_payload(report, site_url, directory, generated_at), indent=2)

    html_report = out / f"{REPORT_STEM}-{stamp}.html"
    json_report = out / f"{REPORT_STEM}-{stamp}.json"
    latest_html = out / f"{REPORT_STEM}.html"
    latest_json = out / f"{REPORT_STEM}.json"
    _stage_and_publish(
        out,
        {
            html_report: html_content,
            json_report: json_content,
            latest_html: html_content,
            latest_json: json_content,
        },
    )
    logger.info("Wrote report %s", html_report)
    return {
        "html_report": str(html_report),
        "json_report": str(json_report),
        "latest_html": str(latest_html),
        "latest_json": str(latest_json),
    }


def validate_report_payload(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError("Report JSON root must be an object")
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ValueError(f"Report JSON is missing keys: {', '.join(missing)}")
    for key in ("overallScore", "metadataScore", "contentScore"):
        value = data[key]
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
            raise ValueError(f"{key} must be an integer between 0 and 100")
    if not isinstance(data["overallRating"], str) or not data["overallRating"]:
        raise ValueError("overallRating must be a non-empty string")
    if not isinstance(data["recommendations"], list):
        raise ValueError("recommendations must be a list")
    for section in ("metadata", "content"):
        results = data[section]
        if not isinstance(results, list):
            raise ValueError(f"{section} must be a list")
        for idx, item in enumerate(results):
            if not isinstance(item, dict):
                raise ValueError(f"{section}[{idx}] must be an object")
            missing = [key for key in RESULT_KEYS if key not in item]
            if missing:
                raise ValueError(f"{section}[{idx}] is missing keys: {', '.join(missing)}")
            for check in item["checks"]:
                if not isinstance(check, dict) or check.get("status") not in ("passed", "failed"):
                    raise ValueError(f"{section}[{idx}] has an invalid check entry")
    return data


def load_report(path: str | Path) -> dict[str, Any]:
    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}: {exc}") from exc
    return validate_report_payload(data)
