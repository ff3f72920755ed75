"""
Tests for the HTTP front-end: health checks and the REST mirror of the tools.

TestClient is used without its context manager so the lifespan (MCP session
manager and cache sweep) does not start. test_lifecycle.py covers it.
"""

import pytest
from fastapi.testclient import TestClient

from texttv_mcp.app import app
from texttv_mcp.errors import UpstreamError
from texttv_mcp.services.cache import cache

client = TestClient(app)


@pytest.mark.integration
class TestHealth:
    def test_ready(self):
        resp = client.get("/ready")

        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["service"] == "svt-texttv-mcp"

    def test_health_reports_cache_entries(self):
        cache.set("page:100:html", {"page": 100}, ttl_seconds=15)

        data = client.get("/health").json()

        assert data["version"] == "1.0.0"
        assert data["cache_entries"] == 1

    def test_security_headers(self):
        resp = client.get("/ready")

        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"


@pytest.mark.integration
class TestTextTVRoutes:
    def test_get_page(self, fake_client):
        resp = client.get("/pages/100")

        assert resp.status_code == 200
        assert resp.json()["page"] == 100
        assert resp.json()["_summary"].startswith("Text-TV page 100")

    def test_get_page_plain_text(self, fake_client):
        resp = client.get("/pages/100", params={"include_plain_text": "true"})

        assert resp.json()["content_plain"] == "Nyhet nummer 100"

    def test_out_of_range_page_is_400(self, fake_client):
        resp = client.get("/pages/99")

        assert resp.status_code == 400
        assert "page" in resp.json()["error"]
        assert fake_client.calls == []

    def test_non_numeric_page_is_422(self, fake_client):
        resp = client.get("/pages/abc")

        assert resp.status_code == 422
        assert fake_client.calls == []

    def test_upstream_failure_is_502(self, fake_client):
        fake_client.fail_with = UpstreamError("texttv.nu request for page(s) 100 failed")

        resp = client.get("/pages/100")

        assert resp.status_code == 502
        assert "texttv.nu" in resp.json()["error"]
        assert cache.size == 0

    def test_subpages(self, fake_client):
        fake_client.subpages[377] = 2

        resp = client.get("/pages/377/subpages")

        assert resp.json()["subpage_count"] == 2

    def test_news(self, fake_client):
        resp = client.get("/news", params={"category": "foreign"})

        assert [p["page"] for p in resp.json()["pages"]] == list(range(104, 110))

    def test_unknown_news_category_is_400(self, fake_client):
        resp = client.get("/news", params={"category": "gossip"})

        assert resp.status_code == 400

    def test_sports(self, fake_client):
        resp = client.get("/sports", params={"category": "hockey"})

        assert resp.json()["category_label"] == "Hockey"

    def test_weather(self, fake_client):
        resp = client.get("/weather", params={"region": "malmo"})

        assert resp.json()["page"] == 404
        assert resp.json()["region_label"] == "Malmö"

    def test_tv_schedule(self, fake_client):
        resp = client.get("/tv-schedule", params={"channel": "svt1"})

        assert resp.json()["page_count"] == 20

    def test_search(self, fake_client):
        fake_client.pages = {101: "Riksdagen röstar", 102: "Börsen"}

        resp = client.get("/search", params={"query": "riksdag", "max_results": 5})

        assert resp.status_code == 200
        assert [r["page"] for r in resp.json()["results"]] == [101]

    def test_search_max_results_out_of_range_is_400(self, fake_client):
        resp = client.get("/search", params={"query": "val", "max_results": 0})

        assert resp.status_code == 400

    def test_browse_category(self, fake_client):
        resp = client.get("/categories/other", params={"limit": 3})

        data = resp.json()
        assert data["category_label_en"] == "Other"
        assert [p["page"] for p in data["pages"]] == [700, 701, 702]
