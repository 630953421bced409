# File: tests/test_config.py
import pytest

from page_flattener.config import FlattenConfig, get_default_config
from page_flattener.utils.paths import resolve_output_path, url_to_filename


def test_defaults():
    config = FlattenConfig()
    assert config.resource_extensions == ("js", "css", "html", "xml", "xhtml")
    assert {"script/javascript", "script/js", "application/javascript"} <= set(config.script_types)
    assert config.stylesheet_rels == ("", "stylesheet", "css")
    assert config.max_concurrency >= 1
    assert config.annotate_source is True


def test_default_config_is_built_once():
    assert get_default_config() is get_default_config()


def test_config_is_immutable():
    config = FlattenConfig()
    with pytest.raises(AttributeError):
        config.timeout = 5


@pytest.mark.parametrize("kwargs", [
    {"timeout": 0},
    {"timeout": -1.5},
    {"max_concurrency": 0},
    {"resource_extensions": ()},
])
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        FlattenConfig(**kwargs)


def test_values_are_normalised():
    config = FlattenConfig(resource_extensions=(".JS", "Css"), script_types=(" Text/JavaScript ",))
    assert config.resource_extensions == ("js", "css")
    assert config.script_types == ("text/javascript",)
    assert config.patterns.bare_resource_name.match("app.js")
    assert not config.patterns.bare_resource_name.match("page.html")


def test_with_overrides_rebuilds_patterns():
    config = FlattenConfig().with_overrides(resource_extensions=("txt",), max_concurrency=3)
    assert config.max_concurrency == 3
    assert config.patterns.bare_resource_name.match("notes.txt")


def test_from_env():
    config = FlattenConfig.from_env({
        "FLATTENER_TIMEOUT": "2.5",
        "FLATTENER_CONCURRENCY": "3",
        "FLATTENER_USER_AGENT": "FlattenBot/1.0",
    })
    assert config.timeout == 2.5
    assert config.max_concurrency == 3
    assert config.user_agent == "FlattenBot/1.0"


def test_from_env_rejects_garbage():
    with pytest.raises(ValueError):
        FlattenConfig.from_env({"FLATTENER_CONCURRENCY": "many"})


@pytest.mark.parametrize("url, expected", [
    ("https://www.example.org", "example.org_index.html"),
    ("http://example.org/blog/post", "example.org_blog_post.html"),
    ("example.org/page.html", "example.org_page.html"),
    ("http://127.0.0.1:8000/", "127.0.0.1_8000_index.html"),
])
def test_url_to_filename(url, expected):
    assert url_to_filename(url) == expected


def test_resolve_output_path(tmp_path):
    assert resolve_output_path(str(tmp_path), "http://example.org") == str(tmp_path / "example.org_index.html")
    assert resolve_output_path(str(tmp_path / "out.html"), "http://example.org") == str(tmp_path / "out.html")
