"""
Audit configuration: rubric weights, score blend and run options.

Rubrics are immutable values built once per run and handed to the auditors;
nothing in the pipeline mutates them after construction.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import urlparse

DEFAULT_BASE_URL = "https://designedforyou.dev"
DEFAULT_OUTPUT_DIR = "seo-report"
BASE_URL_ENV = "SEO_AUDIT_BASE_URL"

METADATA_WEIGHTS: Mapping[str, int] = MappingProxyType(
    {
        "title": 15,
        "meta_description": 20,
        "viewport": 10,
        "charset": 10,
        "heading_structure": 15,
        "canonical_link": 10,
    }
)

CONTENT_WEIGHTS: Mapping[str, int] = MappingProxyType(
    {
        "word_count": 15,
        "readability": 25,
        "heading_structure": 20,
        "image_alt": 20,
        "semantic_tags": 10,
        "internal_links": 10,
    }
)


@dataclass(frozen=True)
class Rubric:
    name: str
    weights: Mapping[str, int]

    def __post_init__(self) -> None:
        cleaned: dict[str, int] = {}
        for check, weight in dict(self.weights).items():
            if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
                raise ValueError(f"{self.name} weight for {check!r} must be a non-negative integer")
            cleaned[str(check)] = weight
        if sum(cleaned.values()) <= 0:
            raise ValueError(f"{self.name} rubric must have a positive total weight")
        object.__setattr__(self, "weights", MappingProxyType(cleaned))

    @property
    def max_score(self) -> int:
        return sum(self.weights.values())

    def weight(self, check: str) -> int:
        return self.weights[check]

    def require(self, checks: tuple[str, ...]) -> None:
        missing = [check for check in checks if check not in self.weights]
        if missing:
            raise ValueError(f"{self.name} rubric is missing weights for: {', '.join(missing)}")

    def with_overrides(self, overrides: Mapping[str, Any]) -> Rubric:
        unknown = sorted(set(overrides) - set(self.weights))
        if unknown:
            raise ValueError(f"Unknown {self.name} checks: {', '.join(unknown)}")
        return Rubric(self.name, {**self.weights, **overrides})


def default_metadata_rubric() -> Rubric:
    return Rubric("metadata", METADATA_WEIGHTS)


def default_content_rubric() -> Rubric:
    return Rubric("content", CONTENT_WEIGHTS)


def default_base_url() -> str:
    return os.getenv(BASE_URL_ENV, "").strip() or DEFAULT_BASE_URL


@dataclass(frozen=True)
class AuditConfig:
    metadata_rubric: Rubric = field(default_factory=default_metadata_rubric)
    content_rubric: Rubric = field(default_factory=default_content_rubric)
    metadata_share: float = 0.5
    content_share: float = 0.5
    base_url: str = field(default_factory=default_base_url)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    keywords: tuple[str, ...] = ()
    workers: int = 1

    def __post_init__(self) -> None:
        if self.metadata_share < 0 or self.content_share < 0:
            raise ValueError("overall score weights must be non-negative")
        if abs(self.metadata_share + self.content_share - 1.0) > 1e-9:
            raise ValueError("overall score weights must sum to 1")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        object.__setattr__(self, "base_url", ensure_base_url(self.base_url))
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        object.__setattr__(self, "keywords", tuple(self.keywords))


def ensure_base_url(raw: str) -> str:
    value = (raw or "").strip()
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"base URL must be a valid http/https URL: {raw!r}")
    return value.rstrip("/")


def parse_keywords(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = [str(item) for item in value]
    else:
        raise ValueError("keywords must be a list or comma-separated string")
    keywords: list[str] = []
    for item in items:
        keyword = item.strip().lower()
        if keyword and keyword not in keywords:
            keywords.append(keyword)
    return tuple(keywords)


def load_config_file(path: str | Path | None) -> dict[str, Any]:
    if not path:
        return {}
    file_path = Path(path).resolve()
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Could not read config file {file_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("Config JSON root must be an object")
    return data


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be an object")
    return value


def build_config(overrides: Mapping[str, Any] | None = None, base: AuditConfig | None = None) -> AuditConfig:
    """Apply config-file style overrides on top of ``base`` (defaults when omitted)."""
    config = base or AuditConfig()
    data = dict(overrides or {})
    changes: dict[str, Any] = {}

    weights = _section(data, "weights")
    if "metadata" in weights:
        changes["metadata_rubric"] = config.metadata_rubric.with_overrides(_section(weights, "metadata"))
    if "content" in weights:
        changes["content_rubric"] = config.content_rubric.with_overrides(_section(weights, "content"))

    blend = _section(data, "overall_weights")
    if blend:
        try:
            changes["metadata_share"] = float(blend.get("metadata", config.metadata_share))
            changes["content_share"] = float(blend.get("content", config.content_share))
        except (TypeError, ValueError) as exc:
            raise ValueError("overall_weights values must be numbers") from exc

    if data.get("base_url"):
        changes["base_url"] = str(data["base_url"])
    if data.get("output_dir"):
        changes["output_dir"] = Path(str(data["output_dir"]))
    if data.get("keywords") is not None:
        changes["keywords"] = parse_keywords(data["keywords"])
    if data.get("workers") is not None:
        try:
            changes["workers"] = int(data["workers"])
        except (TypeError, ValueError) as exc:
            raise ValueError("workers must be an integer") from exc

    return replace(config, **changes) if changes else config
