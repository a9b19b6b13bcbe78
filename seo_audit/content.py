"""
Body-content rubric for a single page, plus the standalone readability and
keyword metrics reported alongside it.

Two different notions of readability live here. The rubric's "Readability"
check tiers average sentence length; ``flesch_reading_ease`` is a separate
metric that is reported but never feeds the rubric score.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

from .config import Rubric
from .dom import Document
from .models import FileAuditResult, RubricScorer, clamp, round_half_up

CONTENT_CHECKS = ("word_count", "readability", "heading_structure", "image_alt", "semantic_tags", "internal_links")

SEMANTIC_TAGS = ["header", "footer", "main", "article", "section", "nav", "aside"]
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]
# Elements that end a run of text; inline tags like <a> or <b> never split words.
BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "body", "br", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "table",
    "td", "th", "tr", "ul",
]

WORD_COUNT_RANGE = (300, 1000)
MAX_WORDS_PER_SENTENCE = 20
LONG_WORDS_PER_SENTENCE = 25
MIN_SEMANTIC_TAGS = 3
MIN_INTERNAL_LINKS = 3
PASS_RATIO = 0.7

READABILITY_LABELS = [
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
]

KEYWORD_LOW_DENSITY = 0.5
KEYWORD_HIGH_DENSITY = 2.5

SENTENCE_SPLIT = re.compile(r"[.!?]+")
VOWEL_GROUP = re.compile(r"[aeiouy]+")


def visible_text(region: Any) -> str:
    clone = BeautifulSoup(str(region), "html.parser")
    for node in clone(NON_CONTENT_TAGS):
        node.decompose()
    for node in clone(BLOCK_TAGS):
        node.insert_before(" ")
        node.insert_after(" ")
    return re.sub(r"\s+", " ", clone.get_text()).strip()


def body_text(soup: Document) -> str:
    return visible_text(soup.body or soup)


def main_text(soup: Document) -> str:
    return visible_text(soup.find("main") or soup.body or soup)


def split_words(text: str) -> list[str]:
    return text.split()


def split_sentences(text: str) -> list[str]:
    return [s for s in SENTENCE_SPLIT.split(text) if s.strip()]


def count_syllables(word: str) -> int:
    return max(1, len(VOWEL_GROUP.findall(word.lower())))


def flesch_reading_ease(text: str) -> int:
    words = split_words(text)
    sentences = split_sentences(text)
    if not words or not sentences:
        return 0
    syllables = sum(count_syllables(word) for word in words)
    score = 206.835 - 1.015 * (len(words) / len(sentences)) - 84.6 * (syllables / len(words))
    return int(clamp(round_half_up(score), 0, 100))


def readability_rating(score: float) -> str:
    for threshold, label in READABILITY_LABELS:
        if score >= threshold:
            return label
    return "Very Difficult"


def keyword_density(text: str, keywords: tuple[str, ...] | list[str]) -> dict[str, dict[str, Any]]:
    lowered = text.lower()
    word_count = len(split_words(text))
    results: dict[str, dict[str, Any]] = {}
    for keyword in keywords:
        count = len(re.findall(rf"\b{re.escape(keyword.lower())}\b", lowered))
        density = round_half_up(count / word_count * 100 * 100) / 100 if word_count else 0.0
        if density < KEYWORD_LOW_DENSITY:
            status = "Low"
        elif density > KEYWORD_HIGH_DENSITY:
            status = "High"
        else:
            status = "Good"
        results[keyword] = {"count": count, "density": density, "status": status}
    return results


def is_internal_href(href: str) -> bool:
    if href.startswith("#"):
        return True
    if href.startswith("/"):
        return not href.startswith("//")
    if href.startswith("."):
        return not href.startswith("..")
    return False


def count_internal_links(soup: Document) -> int:
    return sum(1 for a in soup.find_all("a", href=True) if is_internal_href(str(a.get("href") or "")))


def heading_counts(soup: Document) -> dict[str, int]:
    return {level: len(soup.find_all(level)) for level in ("h1", "h2", "h3", "h4")}


def image_alt_coverage(soup: Document) -> tuple[int, int, float]:
    images = soup.find_all("img")
    with_alt = sum(1 for img in images if str(img.get("alt") or "").strip())
    percentage = (with_alt / len(images) * 100) if images else 100.0
    return with_alt, len(images), percentage


def proportional(weight: int, count: int, target: int) -> int:
    if count >= target:
        return weight
    if count > 0:
        return round_half_up(weight * (count / target))
    return 0


class ContentAuditor:
    def __init__(self, rubric: Rubric, keywords: tuple[str, ...] = ()) -> None:
        rubric.require(CONTENT_CHECKS)
        self.rubric = rubric
        self.keywords = tuple(keywords)

    def passes(self, check: str, points: int) -> bool:
        return points > self.rubric.weight(check) * PASS_RATIO

    def audit(self, soup: Document, file_path: Path) -> FileAuditResult:
        weights = self.rubric
        scorer = RubricScorer(file_path, weights.weights)
        text = body_text(soup)
        words = split_words(text)
        word_count = len(words)

        weight = weights.weight("word_count")
        if WORD_COUNT_RANGE[0] <= word_count <= WORD_COUNT_RANGE[1]:
            points = weight
        elif word_count > 0:
            points = round_half_up(weight * 0.5)
        else:
            points = 0
        scorer.record(
            "Word Count",
            "word_count",
            points,
            points > 0,
            word_count,
            f"Content is too short (< {WORD_COUNT_RANGE[0]} words)" if word_count < WORD_COUNT_RANGE[0] else None,
        )

        sentences = split_sentences(text)
        avg_words = word_count / len(sentences) if sentences else 0.0
        weight = weights.weight("readability")
        if 0 < avg_words <= MAX_WORDS_PER_SENTENCE:
            points = weight
        elif MAX_WORDS_PER_SENTENCE < avg_words <= LONG_WORDS_PER_SENTENCE:
            points = round_half_up(weight * 0.75)
        elif avg_words > LONG_WORDS_PER_SENTENCE:
            points = round_half_up(weight * 0.5)
        else:
            points = 0
        scorer.record(
            "Readability",
            "readability",
            points,
            self.passes("readability", points),
            f"Avg {round_half_up(avg_words)} words per sentence",
            f"Sentences are too long (average > {MAX_WORDS_PER_SENTENCE} words)" if avg_words > MAX_WORDS_PER_SENTENCE else None,
        )

        headings = heading_counts(soup)
        subheadings = headings["h2"] + headings["h3"]
        weight = weights.weight("heading_structure")
        if headings["h1"] == 1 and subheadings > 0:
            points = weight
        elif headings["h1"] == 1:
            points = round_half_up(weight * 0.7)
        else:
            points = 0
        scorer.record(
            "Heading Structure",
            "heading_structure",
            points,
            self.passes("heading_structure", points),
            f"H1: {headings['h1']}, H2: {headings['h2']}, H3: {headings['h3']}, H4: {headings['h4']}",
            "Missing subheadings (H2, H3)" if subheadings == 0 else None,
        )

        with_alt, total_images, alt_pct = image_alt_coverage(soup)
        weight = weights.weight("image_alt")
        if alt_pct == 100:
            points = weight
        elif alt_pct >= 80:
            points = round_half_up(weight * 0.8)
        elif alt_pct >= 50:
            points = round_half_up(weight * 0.5)
        else:
            points = 0
        scorer.record(
            "Image Alt Text",
            "image_alt",
            points,
            self.passes("image_alt", points),
            f"{with_alt}/{total_images} images ({round_half_up(alt_pct)}%)",
            f"{total_images - with_alt} images missing alt text" if total_images and alt_pct < 100 else None,
        )

        semantic = len(soup.find_all(SEMANTIC_TAGS))
        points = proportional(weights.weight("semantic_tags"), semantic, MIN_SEMANTIC_TAGS)
        scorer.record(
            "Semantic Tags",
            "semantic_tags",
            points,
            self.passes("semantic_tags", points),
            f"{semantic} semantic elements",
            "Insufficient semantic HTML elements" if semantic < MIN_SEMANTIC_TAGS else None,
        )

        internal = count_internal_links(soup)
        points = proportional(weights.weight("internal_links"), internal, MIN_INTERNAL_LINKS)
        scorer.record(
            "Internal Links",
            "internal_links",
            points,
            self.passes("internal_links", points),
            f"{internal} internal links",
            f"Insufficient internal links (recommendation: at least {MIN_INTERNAL_LINKS})" if internal < MIN_INTERNAL_LINKS else None,
        )

        reading_text = main_text(soup)
        flesch = flesch_reading_ease(reading_text)
        scorer.result.metrics = {
            "word_count": word_count,
            "sentence_count": len(sentences),
            "avg_words_per_sentence": round(avg_words, 1),
            "flesch_reading_ease": flesch,
            "readability_rating": readability_rating(flesch),
            "headings": headings,
            "images": {"total": total_images, "with_alt": with_alt},
            "semantic_tags": semantic,
            "internal_links": internal,
        }
        if self.keywords:
            scorer.result.metrics["keywords"] = keyword_density(reading_text, self.keywords)
        return scorer.result
