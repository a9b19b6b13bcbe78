"""
Directory-wide aggregation of per-file rubric results.
"""

from __future__ import annotations

from statistics import mean
from typing import Iterable, Sequence

from .config import AuditConfig
from .content import readability_rating
from .errors import NoFilesFoundError
from .models import AggregateReport, FileAuditResult, SkippedFile, round_half_up

RATING_LABELS = [
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Fair"),
    (50, "Poor"),
]

METADATA_THRESHOLDS = {"low": 80, "mid": 90}
CONTENT_THRESHOLDS = {"low": 70, "mid": 80}

TIER_RECOMMENDATIONS = {
    "metadata": {
        "low": "Improve your HTML metadata by adding missing meta tags and optimizing existing ones.",
        "mid": "Add missing meta tags, particularly canonical links and descriptions.",
    },
    "content": {
        "low": "Improve content quality: expand thin pages, shorten sentences and add subheadings.",
        "mid": "Consider breaking up long paragraphs and adding more subheadings for better readability.",
    },
}

CHECK_RECOMMENDATIONS = {
    "Title": "Write unique page titles between 10 and 60 characters.",
    "Meta Description": "Add meta descriptions between 10 and 160 characters that summarise each page.",
    "Viewport": "Add <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\"> to every page.",
    "Charset": "Declare the document encoding with <meta charset=\"UTF-8\">.",
    "H1 Tag": "Use a consistent heading structure with a single H1 on each page.",
    "Canonical Link": "Ensure each page has a canonical link.",
    "Word Count": "Ensure content length is at least 300 words for important pages.",
    "Readability": "Improve content readability by using shorter sentences and simpler vocabulary.",
    "Heading Structure": "Implement proper heading structure (one H1, followed by H2s, H3s).",
    "Image Alt Text": "Ensure all images have descriptive alt text for better accessibility and SEO.",
    "Semantic Tags": "Use semantic HTML elements (header, main, footer, etc.).",
    "Internal Links": "Add more internal links between pages to improve site navigation.",
}

MAINTAIN_RECOMMENDATION = "Maintain current SEO quality and re-run the audit after content changes."


def rating_label(score: float) -> str:
    for threshold, label in RATING_LABELS:
        if score >= threshold:
            return label
    return "Very Poor"


def average_score(results: Sequence[FileAuditResult]) -> int:
    if not results:
        raise NoFilesFoundError("No audited HTML files to average")
    return round_half_up(mean(result.normalized_score for result in results))


def blend_overall(metadata_score: int, content_score: int, metadata_share: float = 0.5, content_share: float = 0.5) -> int:
    return round_half_up(metadata_score * metadata_share + content_score * content_share)


def tier_recommendation(kind: str, score: int, thresholds: dict[str, int]) -> str | None:
    if score < thresholds["low"]:
        return TIER_RECOMMENDATIONS[kind]["low"]
    if score < thresholds["mid"]:
        return TIER_RECOMMENDATIONS[kind]["mid"]
    return None


def build_recommendations(
    metadata_score: int,
    content_score: int,
    results: Iterable[FileAuditResult],
) -> list[str]:
    output: list[str] = []
    seen: set[str] = set()

    def add(text: str | None) -> None:
        if text and text not in seen:
            seen.add(text)
            output.append(text)

    add(tier_recommendation("metadata", metadata_score, METADATA_THRESHOLDS))
    add(tier_recommendation("content", content_score, CONTENT_THRESHOLDS))
    for result in results:
        for check in result.checks:
            if not check.passed:
                add(CHECK_RECOMMENDATIONS.get(check.name))
    if not output:
        output.append(MAINTAIN_RECOMMENDATION)
    return output


def aggregate(
    metadata_results: Sequence[FileAuditResult],
    content_results: Sequence[FileAuditResult],
    config: AuditConfig | None = None,
    skipped: Sequence[SkippedFile] = (),
) -> AggregateReport:
    """Average both rubrics over all files and blend them into the overall rating.

    Raises ``NoFilesFoundError`` when either side has no results, since an
    average over nothing has no meaning.
    """
    config = config or AuditConfig()
    metadata_score = average_score(metadata_results)
    content_score = average_score(content_results)
    overall = blend_overall(metadata_score, content_score, config.metadata_share, config.content_share)

    flesch_scores = [r.metrics["flesch_reading_ease"] for r in content_results if "flesch_reading_ease" in r.metrics]
    readability = round_half_up(mean(flesch_scores)) if flesch_scores else 0

    return AggregateReport(
        metadata_score=metadata_score,
        content_score=content_score,
        overall_score=overall,
        rating=rating_label(overall),
        metadata_rating=rating_label(metadata_score),
        content_rating=rating_label(content_score),
        metadata_results=list(metadata_results),
        content_results=list(content_results),
        recommendations=build_recommendations(metadata_score, content_score, [*metadata_results, *content_results]),
        readability_score=readability,
        readability_rating=readability_rating(readability) if flesch_scores else "Unknown",
        total_words=sum(int(r.metrics.get("word_count", 0)) for r in content_results),
        skipped=list(skipped),
    )
