from core.headers import HeaderBuilder
from core.router import ROUTES

ROUTES_BY_NAME = {route.name: route for route in ROUTES}


def test_cors_headers_echo_origin():
    headers = HeaderBuilder().cors_headers("https://example.github.io")
    assert headers == {
        "Access-Control-Allow-Origin": "https://example.github.io",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Target-URL",
        "Access-Control-Max-Age": "86400",
    }


def test_cors_headers_default_to_wildcard():
    assert HeaderBuilder().cors_headers(None)["Access-Control-Allow-Origin"] == "*"


def test_cors_restricted_origins():
    builder = HeaderBuilder(["https://a.example", "https://b.example"])
    assert builder.cors_headers("https://b.example")["Access-Control-Allow-Origin"] == (
        "https://b.example"
    )
    assert builder.cors_headers("https://evil.example")["Access-Control-Allow-Origin"] == (
        "https://a.example"
    )


def test_lens_headers_forward_authorization():
    headers = HeaderBuilder().build_route_headers(
        ROUTES_BY_NAME["lens"], {"authorization": "Bearer X"}
    )
    assert headers == {"Content-Type": "application/json", "Authorization": "Bearer X"}


def test_lens_headers_omit_missing_authorization():
    headers = HeaderBuilder().build_route_headers(ROUTES_BY_NAME["lens"], {})
    assert headers == {"Content-Type": "application/json"}


def test_uspto_headers_ignore_authorization():
    headers = HeaderBuilder().build_route_headers(
        ROUTES_BY_NAME["uspto"], {"authorization": "Bearer X"}
    )
    assert headers == {"Content-Type": "application/json"}


def test_proxy_headers_use_inbound_content_type():
    builder = HeaderBuilder()
    assert builder.build_proxy_headers({"content-type": "text/xml"}) == {
        "Content-Type": "text/xml"
    }
    assert builder.build_proxy_headers({}) == {"Content-Type": "application/json"}
