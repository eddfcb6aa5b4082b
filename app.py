"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_request
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.router import RouteDecider
from services.routing_service import RoutingService
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.upstream.max_connections,
            max_keepalive_connections=config.upstream.max_keepalive_connections,
        )
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            limits=limits,
            follow_redirects=config.upstream.follow_redirects,
            transport=transport,
        )
        header_builder = HeaderBuilder(config.cors.allowed_origins)
        app.state.header_builder = header_builder
        app.state.route_decider = RouteDecider()
        app.state.routing_service = RoutingService(header_builder)
        app.state.upstream_client = UpstreamClient(client)
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="FTO Scout API Proxy",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # An ASGI endpoint keeps methods=None, so every verb reaches the handler
    app.router.add_route("/{path:path}", ProxyEndpoint(config, logger), methods=None)

    return app


class ProxyEndpoint:
    """ASGI endpoint dispatching every request to the proxy handler."""

    def __init__(self, config: Config, logger: RequestLogger) -> None:
        self._config = config
        self._logger = logger

    async def __call__(self, scope, receive, send) -> None:
        request = Request(scope, receive)
        response = await handle_request(request, self._config, self._logger)
        await response(scope, receive, send)
