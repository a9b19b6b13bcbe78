"""
Exception types raised by the audit pipeline.
"""

from __future__ import annotations

from pathlib import Path


class SeoAuditError(Exception):
    pass


class DirectoryNotFoundError(SeoAuditError):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Directory not found: {self.path}")


class FileReadError(SeoAuditError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not read {self.path}: {reason}")


class HtmlParseError(SeoAuditError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not parse {self.path}: {reason}")


class NoFilesFoundError(SeoAuditError):
    pass


class ReportWriteError(SeoAuditError):
    def __init__(self, output_dir: str | Path, reason: str) -> None:
        self.output_dir = Path(output_dir)
        self.reason = reason
        super().__init__(f"Could not write report to {self.output_dir}: {reason}")
