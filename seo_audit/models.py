"""
Result types shared by the auditors, the aggregator and the report writer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping

CheckStatus = Literal["passed", "failed"]


def round_half_up(value: float) -> int:
    # Math.round semantics: 12.5 -> 13, where round() would give 12.
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class AuditCheck:
    name: str
    status: CheckStatus
    observed_value: str

    @property
    def passed(self) -> bool:
        return self.status == "passed"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "status": self.status, "observedValue": self.observed_value}


@dataclass
class FileAuditResult:
    file_path: Path
    score: int
    max_score: int
    checks: list[AuditCheck] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)

    @property
    def normalized_score(self) -> int:
        if self.max_score <= 0:
            return 0
        return int(clamp(round_half_up(self.score / self.max_score * 100), 0, 100))

    @property
    def file_name(self) -> str:
        return self.file_path.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": str(self.file_path),
            "score": self.score,
            "maxScore": self.max_score,
            "normalizedScore": self.normalized_score,
            "checks": [check.to_dict() for check in self.checks],
            "issues": list(self.issues),
            "metrics": dict(self.metrics),
        }


class RubricScorer:
    """Accumulates one file's checks against a rubric.

    A check weighted 0 is switched off: it is recorded as passed and raises no
    issue, so it never shows up in recommendations.
    """

    def __init__(self, file_path: Path, weights: Mapping[str, int]) -> None:
        self.weights = weights
        self.result = FileAuditResult(file_path=file_path, score=0, max_score=sum(weights.values()))

    def record(self, name: str, key: str, points: int, passed: bool, observed: Any, issue: str | None = None) -> None:
        if self.weights[key] == 0:
            passed, issue = True, None
        self.result.score += points
        self.result.checks.append(AuditCheck(name, "passed" if passed else "failed", str(observed)))
        if issue:
            self.result.issues.append(issue)


@dataclass(frozen=True)
class SkippedFile:
    file_path: Path
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"filePath": str(self.file_path), "reason": self.reason}


@dataclass
class AuditRun:
    root: Path
    metadata_results: list[FileAuditResult] = field(default_factory=list)
    content_results: list[FileAuditResult] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.metadata_results)


@dataclass
class AggregateReport:
    metadata_score: int
    content_score: int
    overall_score: int
    rating: str
    metadata_rating: str
    content_rating: str
    metadata_results: list[FileAuditResult]
    content_results: list[FileAuditResult]
    recommendations: list[str] = field(default_factory=list)
    readability_score: int = 0
    readability_rating: str = "Unknown"
    total_words: int = 0
    skipped: list[SkippedFile] = field(default_factory=list)

    @property
    def per_file_results(self) -> list[FileAuditResult]:
        return [*self.metadata_results, *self.content_results]
