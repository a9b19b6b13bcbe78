"""
Static-site SEO audit: metadata and content rubrics over a directory of HTML
files, aggregated into an HTML and JSON report.
"""

from .config import AuditConfig, Rubric
from .content import ContentAuditor, flesch_reading_ease
from .errors import (
    DirectoryNotFoundError,
    FileReadError,
    HtmlParseError,
    NoFilesFoundError,
    ReportWriteError,
    SeoAuditError,
)
from .metadata import MetadataAuditor
from .models import AggregateReport, AuditCheck, AuditRun, FileAuditResult
from .pipeline import audit_directory, run_audit
from .scanner import find_html_files, iter_html_files
from .scoring import aggregate, rating_label

__version__ = "1.0.0"

__all__ = [
    "AggregateReport",
    "AuditCheck",
    "AuditConfig",
    "AuditRun",
    "ContentAuditor",
    "DirectoryNotFoundError",
    "FileAuditResult",
    "FileReadError",
    "HtmlParseError",
    "MetadataAuditor",
    "NoFilesFoundError",
    "ReportWriteError",
    "Rubric",
    "SeoAuditError",
    "aggregate",
    "audit_directory",
    "find_html_files",
    "flesch_reading_ease",
    "iter_html_files",
    "rating_label",
    "run_audit",
]
