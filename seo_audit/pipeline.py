"""
Scan -> audit -> aggregate -> report orchestration.
"""

from __future__ import annotations

import concurrent.futures
import logging
from pathlib import Path

from .config import AuditConfig
from .content import ContentAuditor
from .dom import HtmlParser, SoupParser, load_document
from .errors import FileReadError, HtmlParseError
from .metadata import MetadataAuditor
from .models import AggregateReport, AuditRun, FileAuditResult, SkippedFile
from .report import write_report
from .scanner import iter_html_files
from .scoring import aggregate

logger = logging.getLogger(__name__)


def audit_file(
    path: Path,
    metadata_auditor: MetadataAuditor,
    content_auditor: ContentAuditor,
    parser: HtmlParser,
) -> tuple[FileAuditResult, FileAuditResult]:
    soup = load_document(path, parser)
    return metadata_auditor.audit(soup, path), content_auditor.audit(soup, path)


def audit_directory(root: str | Path, config: AuditConfig | None = None, parser: HtmlParser | None = None) -> AuditRun:
    """Audit every HTML file under ``root``.

    Unreadable or unparseable files are logged and listed in ``AuditRun.skipped``;
    the remaining files are still audited. Results keep scan order even when
    ``config.workers > 1``.
    """
    config = config or AuditConfig()
    parser = parser or SoupParser()
    paths = iter_html_files(root)
    run = AuditRun(root=Path(root).expanduser().resolve())
    metadata_auditor = MetadataAuditor(config.metadata_rubric, config.base_url, site_root=run.root)
    content_auditor = ContentAuditor(config.content_rubric, config.keywords)

    def job(path: Path) -> tuple[Path, tuple[FileAuditResult, FileAuditResult] | None, str | None]:
        logger.debug("Processing file: %s", path)
        try:
            return path, audit_file(path, metadata_auditor, content_auditor, parser), None
        except (FileReadError, HtmlParseError) as exc:
            logger.error("Error processing %s: %s", path, exc)
            return path, None, str(exc)

    if config.workers > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=config.workers) as pool:
            outcomes = list(pool.map(job, list(paths)))
    else:
        outcomes = [job(path) for path in paths]

    for path, results, error in outcomes:
        if results is None:
            run.skipped.append(SkippedFile(path, error or "unknown error"))
            continue
        run.metadata_results.append(results[0])
        run.content_results.append(results[1])

    logger.info("Audited %d HTML files (%d skipped) in %s", run.file_count, len(run.skipped), run.root)
    return run


def run_audit(
    directory: str | Path,
    config: AuditConfig | None = None,
    parser: HtmlParser | None = None,
) -> tuple[AggregateReport, dict[str, str]]:
    config = config or AuditConfig()
    run = audit_directory(directory, config, parser)
    report = aggregate(run.metadata_results, run.content_results, config, skipped=run.skipped)
    artifacts = write_report(report, config.output_dir, config.base_url, directory=run.root)
    return report, artifacts
