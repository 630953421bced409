# File: tests/test_web.py
import pytest

from page_flattener.config import FlattenConfig
from page_flattener.flatten import NetworkError, ParseError
from page_flattener.web import app as web_app
from page_flattener.web.app import create_app


@pytest.fixture()
def calls(monkeypatch):
    """Replace the flattening call and record the URLs it receives."""
    received = []

    async def fake_render(url, config=None, fetcher=None):
        received.append(url)
        if "unreachable" in url:
            raise NetworkError(url, "Name or service not known")
        if "garbage" in url:
            raise ParseError("document is empty", url)
        return f"<html><body>{url}</body></html>"

    monkeypatch.setattr(web_app, "render_flattened", fake_render)
    return received


@pytest.fixture()
def client():
    app = create_app(FlattenConfig(timeout=1.0))
    app.config["TESTING"] = True
    return app.test_client()


def test_homepage(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Page Flattener" in resp.data


def test_site_route_returns_flattened_html(client, calls):
    resp = client.get("/site/http%3A%2F%2Fexample.org%2Fpage")
    assert resp.status_code == 200
    assert resp.mimetype == "text/html"
    assert calls == ["http://example.org/page"]
    assert b"http://example.org/page" in resp.data


def test_site_route_keeps_double_slash(client, calls):
    resp = client.get("/site/https://example.org/docs")
    assert resp.status_code == 200
    assert calls == ["https://example.org/docs"]


def test_site_route_repairs_collapsed_scheme(client, calls):
    client.get("/site/https:/example.org")
    assert calls == ["https://example.org"]


def test_site_route_reattaches_query(client, calls):
    client.get("/site/example.org/search?q=python&page=2")
    assert calls == ["example.org/search?q=python&page=2"]


def test_unreachable_page_is_bad_gateway(client, calls):
    resp = client.get("/site/http%3A%2F%2Funreachable.example")
    assert resp.status_code == 502
    assert "error" in resp.get_json()


def test_unparseable_page_is_bad_gateway(client, calls):
    resp = client.get("/site/garbage.example")
    assert resp.status_code == 502
    assert resp.get_json()["url"] == "garbage.example"


def test_blank_url_is_rejected(client, calls):
    resp = client.get("/site/%20")
    assert resp.status_code == 400
    assert calls == []


def test_site_route_decodes_the_url_only_once(client, calls):
    # encodeURIComponent("example.org/search?q=100%25")
    resp = client.get("/site/example.org%2Fsearch%3Fq%3D100%2525")
    assert resp.status_code == 200
    assert calls == ["example.org/search?q=100%25"]
