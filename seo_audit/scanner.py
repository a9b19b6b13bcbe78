"""
Recursive discovery of HTML files under a site root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from .errors import DirectoryNotFoundError

logger = logging.getLogger(__name__)

HTML_SUFFIX = ".html"
SKIPPED_DIRS = {"node_modules"}


def is_skipped_dir(name: str) -> bool:
    return name.startswith(".") or name in SKIPPED_DIRS


def _walk(directory: Path) -> Iterator[Path]:
    try:
        with os.scandir(directory) as listing:
            entries = list(listing)
    except OSError as exc:
        logger.error("Could not list %s: %s", directory, exc)
        return
    # scandir order is filesystem-defined; callers sort if they need stability.
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if is_skipped_dir(entry.name):
                logger.debug("Skipping directory %s", entry.path)
                continue
            yield from _walk(Path(entry.path))
        elif entry.name.endswith(HTML_SUFFIX) and entry.is_file():
            yield Path(entry.path)


def iter_html_files(root: str | Path) -> Iterator[Path]:
    """Yield absolute paths of ``.html`` files below ``root`` in directory-listing order.

    Hidden directories and ``node_modules`` are not entered and directory
    symlinks are not followed. The root is validated before the iterator is
    returned, so a bad root fails at call time rather than on first ``next()``.
    """
    base = Path(root).expanduser().resolve()
    if not base.is_dir():
        raise DirectoryNotFoundError(base)
    return _walk(base)


def find_html_files(root: str | Path) -> list[Path]:
    return list(iter_html_files(root))
