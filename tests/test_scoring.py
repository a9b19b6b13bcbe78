from pathlib import Path

import pytest

from seo_audit.config import AuditConfig
from seo_audit.errors import NoFilesFoundError
from seo_audit.models import AuditCheck, FileAuditResult
from seo_audit.scoring import (
    MAINTAIN_RECOMMENDATION,
    aggregate,
    average_score,
    blend_overall,
    build_recommendations,
    rating_label,
)


def result(name: str, score: int, max_score: int, failed: tuple[str, ...] = ()) -> FileAuditResult:
    checks = [AuditCheck(check, "failed", "missing") for check in failed]
    return FileAuditResult(Path(name), score, max_score, checks=checks)


def test_average_of_two_files():
    results = [result("a.html", 64, 80), result("b.html", 32, 80)]
    assert [r.normalized_score for r in results] == [80, 40]
    assert average_score(results) == 60


def test_average_rounds_half_up():
    results = [result("a.html", 61, 100), result("b.html", 62, 100)]
    assert average_score(results) == 62


def test_average_of_nothing_raises():
    with pytest.raises(NoFilesFoundError):
        average_score([])


@pytest.mark.parametrize(
    "score,label",
    [(100, "Excellent"), (90, "Excellent"), (89, "Very Good"), (80, "Very Good"), (70, "Good"), (60, "Fair"), (50, "Poor"), (49, "Very Poor"), (0, "Very Poor")],
)
def test_rating_label_thresholds(score, label):
    assert rating_label(score) == label


def test_blend_defaults_to_simple_average():
    assert blend_overall(80, 41) == 61
    assert blend_overall(80, 40, 0.6, 0.4) == 64


def test_aggregate_uses_configured_blend():
    metadata = [result("a.html", 80, 100)]
    content = [result("a.html", 40, 100)]

    simple = aggregate(metadata, content)
    weighted = aggregate(metadata, content, AuditConfig(metadata_share=0.6, content_share=0.4))

    assert simple.overall_score == 60
    assert simple.rating == "Fair"
    assert weighted.overall_score == 64
    assert weighted.metadata_rating == "Very Good"
    assert weighted.content_rating == "Very Poor"
    assert len(weighted.per_file_results) == 2


def test_aggregate_requires_results_on_both_sides():
    with pytest.raises(NoFilesFoundError):
        aggregate([result("a.html", 80, 80)], [])


def test_aggregate_readability_and_word_totals():
    content = [result("a.html", 100, 100), result("b.html", 50, 100)]
    content[0].metrics = {"flesch_reading_ease": 70, "word_count": 400}
    content[1].metrics = {"flesch_reading_ease": 81, "word_count": 100}
    report = aggregate([result("a.html", 80, 80), result("b.html", 80, 80)], content)
    assert report.readability_score == 76
    assert report.readability_rating == "Fairly Easy"
    assert report.total_words == 500


def test_recommendations_follow_scores_and_failed_checks():
    results = [
        result("a.html", 0, 80, failed=("Canonical Link", "Title")),
        result("b.html", 0, 80, failed=("Canonical Link",)),
    ]
    recs = build_recommendations(75, 85, results)
    assert recs[0].startswith("Improve your HTML metadata")
    assert recs.count("Ensure each page has a canonical link.") == 1
    assert "Write unique page titles between 10 and 60 characters." in recs
    assert not any("content quality" in rec for rec in recs)


def test_recommendations_fall_back_to_maintenance():
    assert build_recommendations(100, 100, [result("a.html", 80, 80)]) == [MAINTAIN_RECOMMENDATION]
