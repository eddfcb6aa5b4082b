"""Header construction for CORS and upstream requests."""

from collections.abc import Mapping

from core.router import Route

ALLOW_METHODS = "GET, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization, X-Target-URL"
MAX_AGE = "86400"


class HeaderBuilder:
    """Build CORS response headers and upstream request headers."""

    def __init__(self, allowed_origins: list[str] | None = None):
        self.allowed_origins = allowed_origins or ["*"]

    def cors_headers(self, origin: str | None) -> dict[str, str]:
        """CORS headers attached to every response."""
        return {
            "Access-Control-Allow-Origin": self._allow_origin(origin),
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": ALLOW_HEADERS,
            "Access-Control-Max-Age": MAX_AGE,
        }

    def build_route_headers(self, route: Route, headers: Mapping[str, str]) -> dict[str, str]:
        """Build upstream headers for a named route."""
        upstream: dict[str, str] = {}
        if route.force_json:
            upstream["Content-Type"] = "application/json"
        if route.forward_auth:
            auth = headers.get("authorization")
            if auth:
                upstream["Authorization"] = auth
        return upstream

    def build_proxy_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        """Build upstream headers for the generic /proxy forwarder."""
        return {"Content-Type": headers.get("content-type") or "application/json"}

    def _allow_origin(self, origin: str | None) -> str:
        if "*" in self.allowed_origins:
            return origin or "*"
        if origin in self.allowed_origins:
            return origin
        return self.allowed_origins[0]
