"""Routing orchestration for proxy requests."""

from collections.abc import Mapping

from starlette.datastructures import QueryParams

from core.exceptions import MissingTargetError, TargetNotAllowedError
from core.headers import HeaderBuilder
from core.request_types import PreparedRequest
from core.router import Route, RouteDecision, is_allowed_target


class RoutingService:
    """Prepare outbound requests for named routes and the generic proxy."""

    def __init__(self, header_builder: HeaderBuilder) -> None:
        self._headers = header_builder

    def prepare_route(
        self,
        decision: RouteDecision,
        method: str,
        query: str,
        headers: Mapping[str, str],
        body: str | None,
    ) -> PreparedRequest:
        """Prepare a request for one of the named upstream routes."""
        route: Route = decision.route
        target_url = f"{route.upstream}/{decision.rest}"
        if route.keep_query and query:
            target_url += f"?{query}"

        if not route.forward_method:
            return PreparedRequest(
                route.name,
                "GET",
                target_url,
                {},
                None,
                route.relay_content_type,
            )

        return PreparedRequest(
            route.name,
            method,
            target_url,
            self._headers.build_route_headers(route, headers),
            _post_body(method, body),
            route.relay_content_type,
        )

    def resolve_proxy_target(self, query: str, headers: Mapping[str, str]) -> str:
        """Return the /proxy target URL, validated against the allowlist."""
        target_url = headers.get("x-target-url") or QueryParams(query).get("url")
        if not target_url:
            raise MissingTargetError()
        if not is_allowed_target(target_url):
            raise TargetNotAllowedError(target_url)
        return target_url

    def prepare_proxy(
        self,
        method: str,
        target_url: str,
        headers: Mapping[str, str],
        body: str | None,
    ) -> PreparedRequest:
        """Prepare a /proxy request for an already validated target."""
        return PreparedRequest(
            "proxy",
            method,
            target_url,
            self._headers.build_proxy_headers(headers),
            _post_body(method, body),
        )


def _post_body(method: str, body: str | None) -> str | None:
    """Only POST requests carry the inbound body upstream."""
    return body if method == "POST" else None
