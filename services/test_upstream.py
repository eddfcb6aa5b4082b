import httpx
import pytest

from core.exceptions import UpstreamConnectionError, UpstreamTimeoutError
from core.request_types import PreparedRequest
from services.upstream import UpstreamClient


def _client(handler):
    return UpstreamClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_forward_relays_status_body_and_route_content_type(recording_logger):
    def handler(request):
        return httpx.Response(
            404, content=b"<error/>", headers={"content-type": "text/html"}
        )

    prepared = PreparedRequest(
        "arxiv", "GET", "https://export.arxiv.org/api/query", {}, None, "application/xml"
    )
    response = await _client(handler).forward(prepared, recording_logger)

    assert response.status_code == 404
    assert response.body == b"<error/>"
    assert response.headers["content-type"] == "application/xml"
    assert recording_logger.forwards == [
        ("arxiv", "GET", "https://export.arxiv.org/api/query")
    ]
    assert recording_logger.errors == [("arxiv", 404, "<error/>")]


@pytest.mark.asyncio
async def test_forward_uses_upstream_content_type_for_proxy(recording_logger):
    def handler(request):
        return httpx.Response(200, content=b"{}", headers={"content-type": "application/vnd.api+json"})

    prepared = PreparedRequest("proxy", "GET", "https://api.crossref.org/works", {})
    response = await _client(handler).forward(prepared, recording_logger)

    assert response.headers["content-type"] == "application/vnd.api+json"
    assert recording_logger.responses == [("proxy", 200)]


@pytest.mark.asyncio
async def test_forward_defaults_to_text_plain(recording_logger):
    def handler(request):
        return httpx.Response(200, content=b"hello")

    prepared = PreparedRequest("proxy", "GET", "https://api.crossref.org/works", {})
    response = await _client(handler).forward(prepared, recording_logger)

    assert response.headers["content-type"] == "text/plain"


@pytest.mark.asyncio
async def test_forward_defaults_to_text_plain_on_empty_content_type(recording_logger):
    def handler(request):
        return httpx.Response(200, content=b"hello", headers={"content-type": ""})

    prepared = PreparedRequest("proxy", "GET", "https://api.crossref.org/works", {})
    response = await _client(handler).forward(prepared, recording_logger)

    assert response.headers["content-type"] == "text/plain"


@pytest.mark.asyncio
async def test_forward_keeps_text_content_type_without_charset(recording_logger):
    body = b'<?xml version="1.0" encoding="ISO-8859-1"?><r>\xe9</r>'

    def handler(request):
        return httpx.Response(200, content=body, headers={"content-type": "text/xml"})

    prepared = PreparedRequest("proxy", "GET", "https://api.crossref.org/x", {})
    response = await _client(handler).forward(prepared, recording_logger)

    assert response.headers["content-type"] == "text/xml"
    assert response.body == body


@pytest.mark.asyncio
async def test_forward_sends_method_headers_and_body(recording_logger):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"{}")

    prepared = PreparedRequest(
        "uspto-search",
        "POST",
        "https://search.patentsview.org/patents",
        {"Content-Type": "application/json"},
        '{"q":1}',
        "application/json",
    )
    await _client(handler).forward(prepared, recording_logger)

    assert seen[0].method == "POST"
    assert str(seen[0].url) == "https://search.patentsview.org/patents"
    assert seen[0].headers["content-type"] == "application/json"
    assert seen[0].content == b'{"q":1}'


@pytest.mark.asyncio
async def test_forward_wraps_connection_errors(recording_logger):
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    prepared = PreparedRequest("lens", "GET", "https://api.lens.org/patent", {})
    with pytest.raises(UpstreamConnectionError) as exc_info:
        await _client(handler).forward(prepared, recording_logger)

    assert str(exc_info.value) == "Name or service not known"
    assert exc_info.value.route == "lens"


@pytest.mark.asyncio
async def test_forward_wraps_timeouts(recording_logger):
    def handler(request):
        raise httpx.ReadTimeout("", request=request)

    prepared = PreparedRequest("scholar", "GET", "https://api.semanticscholar.org/x", {})
    with pytest.raises(UpstreamTimeoutError) as exc_info:
        await _client(handler).forward(prepared, recording_logger)

    assert str(exc_info.value) == "Upstream timeout"
