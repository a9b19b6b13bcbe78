from collections.abc import Iterator

import pytest

from seo_audit.errors import DirectoryNotFoundError
from seo_audit.scanner import find_html_files, is_skipped_dir, iter_html_files


def test_skips_node_modules_and_hidden_dirs(tmp_path, write_page):
    keep_index = write_page("a/index.html", "<h1>x</h1>")
    keep_page = write_page("a/b/page.html", "<h1>y</h1>")
    write_page("node_modules/skip.html", "<h1>z</h1>")
    write_page(".cache/hidden.html", "<h1>z</h1>")
    write_page("a/notes.txt", "not html")
    write_page("a/legacy.htm", "<h1>old</h1>")

    found = find_html_files(tmp_path)

    # listing order is filesystem-defined, so compare as a set
    assert set(found) == {keep_index.resolve(), keep_page.resolve()}
    assert len(found) == 2
    assert all(path.is_absolute() for path in found)


def test_nested_node_modules_is_skipped(tmp_path, write_page):
    write_page("site/node_modules/pkg/readme.html", "<p>x</p>")
    page = write_page("site/about.html", "<p>x</p>")

    assert find_html_files(tmp_path) == [page.resolve()]


def test_iter_is_lazy_but_validates_root_eagerly(tmp_path):
    missing = tmp_path / "missing"
    with pytest.raises(DirectoryNotFoundError):
        iter_html_files(missing)

    result = iter_html_files(tmp_path)
    assert isinstance(result, Iterator)
    assert list(result) == []


def test_file_as_root_is_rejected(tmp_path, write_page):
    page = write_page("index.html", "<p>x</p>")
    with pytest.raises(DirectoryNotFoundError) as excinfo:
        find_html_files(page)
    assert excinfo.value.path == page.resolve()


def test_skipped_dir_names():
    assert is_skipped_dir("node_modules")
    assert is_skipped_dir(".git")
    assert not is_skipped_dir("blog")
