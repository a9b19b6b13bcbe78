"""Shared fixtures for building small static sites on disk."""

from pathlib import Path

import pytest

from seo_audit.dom import SoupParser

FULL_TITLE = "Designed For You Web Design Co"
FULL_DESCRIPTION = (
    "We design fast, accessible web sites for small businesses and creators who want to stand out online."
)

FULL_HEAD = f"""
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{FULL_TITLE}</title>
  <meta name="description" content="{FULL_DESCRIPTION}">
  <link rel="canonical" href="https://designedforyou.dev/">
"""


def html_page(head: str = FULL_HEAD, body: str = "<h1>Welcome</h1>") -> str:
    return f"<!doctype html>\n<html lang=\"en\">\n<head>{head}</head>\n<body>{body}</body>\n</html>\n"


def sentences(words_per_sentence: int, count: int, word: str = "word") -> str:
    sentence = " ".join([word] * words_per_sentence) + "."
    return " ".join([sentence] * count)


@pytest.fixture
def parser():
    return SoupParser()


@pytest.fixture
def parse(parser):
    return parser.parse


@pytest.fixture
def write_page(tmp_path):
    def _write(relative: str, html: str, root: Path | None = None) -> Path:
        target = (root or tmp_path) / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        return target

    return _write
