"""
Head/metadata rubric for a single page: title, description, viewport,
charset, single H1 and canonical link.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import quote

from .config import Rubric
from .dom import Document
from .models import FileAuditResult, RubricScorer

METADATA_CHECKS = ("title", "meta_description", "viewport", "charset", "heading_structure", "canonical_link")

TITLE_RANGE = (10, 60)
DESCRIPTION_RANGE = (10, 160)


def meta_content(soup: Document, name: str) -> str | None:
    tag = soup.find("meta", attrs={"name": name})
    if tag and tag.get("content"):
        return str(tag.get("content")).strip()
    return None


def page_title(soup: Document) -> str | None:
    if soup.title is None:
        return None
    return soup.title.get_text(" ", strip=True) or None


def canonical_href(soup: Document) -> str | None:
    for link in soup.find_all("link", rel="canonical"):
        href = str(link.get("href") or "").strip()
        if href:
            return href
    return None


def suggest_canonical_url(base_url: str, file_path: Path, site_root: Path | None = None) -> str:
    try:
        relative = file_path.relative_to(site_root) if site_root else Path(file_path.name)
    except ValueError:
        relative = Path(file_path.name)
    parts = list(relative.parts)
    if parts and parts[-1] == "index.html":
        parts[-1] = ""
    path = "/".join(quote(part) for part in parts)
    return f"{base_url.rstrip('/')}/{path}"


def in_range(value: str | None, bounds: tuple[int, int]) -> bool:
    return value is not None and bounds[0] <= len(value) <= bounds[1]


class MetadataAuditor:
    def __init__(self, rubric: Rubric, base_url: str, site_root: Path | None = None) -> None:
        rubric.require(METADATA_CHECKS)
        self.rubric = rubric
        self.base_url = base_url
        self.site_root = site_root

    def audit(self, soup: Document, file_path: Path) -> FileAuditResult:
        weights = self.rubric
        scorer = RubricScorer(file_path, weights.weights)

        title = page_title(soup)
        ok = in_range(title, TITLE_RANGE)
        scorer.record(
            "Title",
            "title",
            weights.weight("title") if ok else 0,
            ok,
            title or "missing",
            None if ok else f"Title tag is missing or not optimal (should be between {TITLE_RANGE[0]}-{TITLE_RANGE[1]} chars)",
        )

        description = meta_content(soup, "description")
        ok = in_range(description, DESCRIPTION_RANGE)
        scorer.record(
            "Meta Description",
            "meta_description",
            weights.weight("meta_description") if ok else 0,
            ok,
            description or "missing",
            None
            if ok
            else f"Meta description is missing or not optimal (should be between {DESCRIPTION_RANGE[0]}-{DESCRIPTION_RANGE[1]} chars)",
        )

        viewport = meta_content(soup, "viewport")
        ok = bool(viewport and "width=device-width" in viewport)
        scorer.record(
            "Viewport",
            "viewport",
            weights.weight("viewport") if ok else 0,
            ok,
            viewport or "missing",
            None if ok else "Viewport meta tag is missing or doesn't include width=device-width",
        )

        charset_tag = soup.find("meta", attrs={"charset": True})
        ok = charset_tag is not None
        scorer.record(
            "Charset",
            "charset",
            weights.weight("charset") if ok else 0,
            ok,
            (str(charset_tag.get("charset") or "").strip() or "present") if ok else "missing",
            None if ok else "Charset meta tag is missing",
        )

        h1_tags = soup.find_all("h1")
        ok = len(h1_tags) == 1
        scorer.record(
            "H1 Tag",
            "heading_structure",
            weights.weight("heading_structure") if ok else 0,
            ok,
            h1_tags[0].get_text(" ", strip=True) if ok else f"{len(h1_tags)} H1 tags",
            None if ok else "Page should have exactly one H1 tag",
        )

        canonical = canonical_href(soup)
        ok = canonical is not None
        suggestion = suggest_canonical_url(self.base_url, file_path, self.site_root)
        scorer.record(
            "Canonical Link",
            "canonical_link",
            weights.weight("canonical_link") if ok else 0,
            ok,
            canonical or "missing",
            None if ok else f"Canonical link is missing (expected something like {suggestion})",
        )

        return scorer.result
