"""
HTML parsing seam. Auditors only see the parsed document, so the tree builder
can be swapped without touching any scoring code.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup, builder_registry

from .errors import FileReadError, HtmlParseError

logger = logging.getLogger(__name__)

Document = BeautifulSoup


class HtmlParser(Protocol):
    def parse(self, html: str) -> Document: ...

    def serialize(self, document: Document) -> str: ...


class SoupParser:
    def __init__(self, features: str = "lxml") -> None:
        if builder_registry.lookup(features) is None:
            logger.debug("Tree builder %r unavailable, using html.parser", features)
            features = "html.parser"
        self.features = features

    def parse(self, html: str) -> Document:
        return BeautifulSoup(html, self.features)

    def serialize(self, document: Document) -> str:
        return str(document)


def load_document(path: str | Path, parser: HtmlParser) -> Document:
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as exc:
        raise FileReadError(file_path, exc.strerror or str(exc)) from exc
    try:
        html = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HtmlParseError(file_path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    if not html.strip():
        raise HtmlParseError(file_path, "document is empty")
    try:
        return parser.parse(html)
    except ParserRejectedMarkup as exc:
        raise HtmlParseError(file_path, str(exc)) from exc
