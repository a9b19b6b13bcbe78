from pathlib import Path

import pytest

from seo_audit.config import (
    BASE_URL_ENV,
    DEFAULT_BASE_URL,
    AuditConfig,
    Rubric,
    build_config,
    default_metadata_rubric,
    ensure_base_url,
    load_config_file,
    parse_keywords,
)


def test_default_rubric_totals():
    assert default_metadata_rubric().max_score == 80
    assert AuditConfig().content_rubric.max_score == 100


def test_rubric_weights_are_read_only():
    rubric = default_metadata_rubric()
    with pytest.raises(TypeError):
        rubric.weights["title"] = 99
    with pytest.raises(AttributeError):
        rubric.name = "other"


def test_overrides_return_a_new_rubric():
    rubric = default_metadata_rubric()
    changed = rubric.with_overrides({"title": 5})
    assert changed.weight("title") == 5
    assert rubric.weight("title") == 15


@pytest.mark.parametrize("overrides", [{"keywords": 5}, {"title": -1}, {"title": 1.5}, {"title": True}])
def test_bad_overrides_are_rejected(overrides):
    with pytest.raises(ValueError):
        default_metadata_rubric().with_overrides(overrides)


def test_all_zero_rubric_is_rejected():
    with pytest.raises(ValueError):
        Rubric("metadata", {"title": 0})


def test_build_config_blend_and_options():
    config = build_config(
        {
            "overall_weights": {"metadata": 0.6, "content": 0.4},
            "base_url": "https://example.com/",
            "output_dir": "reports",
            "keywords": "Web Design, SEO, seo",
            "workers": "3",
        }
    )
    assert (config.metadata_share, config.content_share) == (0.6, 0.4)
    assert config.base_url == "https://example.com"
    assert config.output_dir == Path("reports")
    assert config.keywords == ("web design", "seo")
    assert config.workers == 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"overall_weights": {"metadata": 0.7, "content": 0.7}},
        {"overall_weights": {"metadata": "lots"}},
        {"weights": {"content": {"word_count": -5}}},
        {"weights": "heavy"},
        {"workers": 0},
        {"base_url": "designedforyou.dev"},
        {"keywords": 12},
    ],
)
def test_build_config_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        build_config(overrides)


def test_base_url_environment_fallback(monkeypatch):
    monkeypatch.delenv(BASE_URL_ENV, raising=False)
    assert AuditConfig().base_url == DEFAULT_BASE_URL
    monkeypatch.setenv(BASE_URL_ENV, "http://localhost:8080/")
    assert AuditConfig().base_url == "http://localhost:8080"


def test_ensure_base_url():
    assert ensure_base_url(" https://designedforyou.dev/ ") == "https://designedforyou.dev"
    with pytest.raises(ValueError):
        ensure_base_url("mailto:someone@example.com")


def test_parse_keywords():
    assert parse_keywords(None) == ()
    assert parse_keywords(["SEO", " seo ", "", "Design"]) == ("seo", "design")


def test_load_config_file(tmp_path):
    assert load_config_file(None) == {}
    path = tmp_path / "config.json"
    path.write_text('{"workers": 2}', encoding="utf-8")
    assert load_config_file(path) == {"workers": 2}
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config_file(path)
    with pytest.raises(ValueError):
        load_config_file(tmp_path / "absent.json")
