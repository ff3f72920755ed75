"""
Tests for the texttv.nu client, against an httpx mock transport.
"""

import asyncio

import httpx
import pytest

from texttv_mcp.errors import UpstreamError
from texttv_mcp.services.texttv_api import TextTVClient, record_text


def run_async(coro):
    return asyncio.run(coro)


def raw_page(num, content=None, plain=None, **extra):
    page = {
        "num": str(num),
        "id": str(9000 + num),
        "title": f"Sida {num}",
        "content": content if content is not None else [f"<span>Sida {num}</span>"],
        "date_updated_unix": 1700000000,
        "next_page": str(num + 1),
        "prev_page": str(num - 1),
    }
    if plain is not None:
        page["content_plain"] = plain
    page.update(extra)
    return page


def with_client(handler, scenario):
    """Run ``scenario(client)`` against a client whose requests go to ``handler``."""
    requests = []

    def recording(request):
        requests.append(request)
        return handler(request)

    async def run():
        client = TextTVClient(
            app_id="test-app",
            base_url="https://api.texttv.nu/api",
            transport=httpx.MockTransport(recording),
        )
        try:
            return await scenario(client)
        finally:
            await client.aclose()

    return run_async(run()), requests


@pytest.mark.unit
class TestRequests:
    def test_single_page_request(self):
        result, requests = with_client(
            lambda req: httpx.Response(200, json=[raw_page(100)]),
            lambda client: client.get_page(100),
        )

        assert result["num"] == 100
        assert requests[0].url.path == "/api/get/100"
        assert requests[0].url.params["app"] == "test-app"
        assert "includePlainTextContent" not in requests[0].url.params

    def test_plain_text_flag(self):
        result, requests = with_client(
            lambda req: httpx.Response(200, json=[raw_page(100, plain=["Sida 100"])]),
            lambda client: client.get_page(100, include_plain_text=True),
        )

        assert requests[0].url.params["includePlainTextContent"] == "1"
        assert result["content_plain"] == "Sida 100"

    def test_range_request(self):
        pages = [raw_page(103), raw_page(101), raw_page(102)]
        result, requests = with_client(
            lambda req: httpx.Response(200, json=pages),
            lambda client: client.get_page_range(101, 103),
        )

        assert requests[0].url.path == "/api/get/101-103"
        assert list(result) == [103, 101, 102]


@pytest.mark.unit
class TestParsing:
    def test_record_fields(self):
        result, _ = with_client(
            lambda req: httpx.Response(200, json=[raw_page(377)]),
            lambda client: client.get_page(377),
        )

        assert result == {
            "num": 377,
            "id": "9377-1",
            "title": "Sida 377",
            "content": "<span>Sida 377</span>",
            "content_plain": None,
            "date_updated_unix": 1700000000,
            "next_page": 378,
            "prev_page": 376,
        }

    def test_missing_neighbours_are_none(self):
        result, _ = with_client(
            lambda req: httpx.Response(200, json=[raw_page(899, next_page="0", prev_page="")]),
            lambda client: client.get_page(899),
        )

        assert result["next_page"] is None
        assert result["prev_page"] is None

    def test_subpages_from_content_list(self):
        raw = raw_page(
            377,
            content=["<span>A</span>", "<span>B</span>", "<span>C</span>"],
            plain=["A", "B", "C"],
        )
        result, _ = with_client(
            lambda req: httpx.Response(200, json=[raw]),
            lambda client: client.get_all_subpages(377, include_plain_text=True),
        )

        assert [r["id"] for r in result] == ["9377-1", "9377-2", "9377-3"]
        assert [r["content_plain"] for r in result] == ["A", "B", "C"]

    def test_no_subpages(self):
        result, _ = with_client(
            lambda req: httpx.Response(200, json=[]),
            lambda client: client.get_all_subpages(250),
        )

        assert result == []

    def test_search_filters_case_insensitively(self):
        pages = [
            raw_page(101, content=["<b>VALET</b> i Sverige"]),
            raw_page(102, content=["Väder"]),
        ]
        result, _ = with_client(
            lambda req: httpx.Response(200, json=pages),
            lambda client: client.search("valet", 100, 199),
        )

        assert list(result) == [101]

    def test_search_ignores_markup(self):
        pages = [raw_page(101, content=['<span class="valet">Sport</span>'])]
        result, _ = with_client(
            lambda req: httpx.Response(200, json=pages),
            lambda client: client.search("valet", 100, 199),
        )

        assert result == {}

    def test_record_text_prefers_plain(self):
        assert record_text({"content": "<b>x</b>", "content_plain": "plain"}) == "plain"
        assert record_text({"content": "<b>x</b>", "content_plain": None}).strip() == "x"


@pytest.mark.unit
class TestFailures:
    def test_http_error_status(self):
        with pytest.raises(UpstreamError, match="100"):
            with_client(
                lambda req: httpx.Response(503),
                lambda client: client.get_page(100),
            )

    def test_connection_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamError):
            with_client(refuse, lambda client: client.get_page(100))

    def test_invalid_json(self):
        with pytest.raises(UpstreamError, match="invalid JSON"):
            with_client(
                lambda req: httpx.Response(200, content=b"<html>oops</html>"),
                lambda client: client.get_page(100),
            )

    def test_non_list_response(self):
        with pytest.raises(UpstreamError, match="Unexpected"):
            with_client(
                lambda req: httpx.Response(200, json={"error": "bad app id"}),
                lambda client: client.get_page(100),
            )

    def test_empty_page_not_found(self):
        with pytest.raises(UpstreamError, match="Page 100 not found"):
            with_client(
                lambda req: httpx.Response(200, json=[]),
                lambda client: client.get_page(100),
            )

    def test_malformed_record(self):
        with pytest.raises(UpstreamError, match="Malformed"):
            with_client(
                lambda req: httpx.Response(200, json=[{"num": "100"}]),
                lambda client: client.get_page(100),
            )
