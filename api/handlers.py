"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from core.config import Config
from core.exceptions import ProxyError, RequestTooLarge, UnknownEndpointError
from core.protocols import RequestLogger
from core.router import RouteDecision, available_endpoints
from ui.log_utils import write_incoming_log

SERVICE_NAME = "FTO Scout API Proxy"


async def handle_request(
    request: Request,
    config: Config,
    logger: RequestLogger,
) -> Response:
    """Handle any inbound request; every outcome carries CORS headers."""
    cors = request.app.state.header_builder.cors_headers(request.headers.get("origin"))

    if request.method == "OPTIONS":
        return Response(status_code=204, headers=cors)

    route_name = "-"
    try:
        path = _raw_path(request)
        decision = request.app.state.route_decider.decide(path)
        route_name = decision.name
        response = await _dispatch(request, decision, path, config, logger)
    except UnknownEndpointError as e:
        response = JSONResponse({"error": str(e), "available": e.available}, status_code=404)
    except ProxyError as e:
        if e.status_code >= 500:
            logger.log_error(route_name, e.status_code, str(e))
        response = JSONResponse({"error": str(e)}, status_code=e.status_code)
    except Exception as e:
        message = str(e) or type(e).__name__
        logger.log_error(route_name, 500, message)
        response = JSONResponse({"error": message}, status_code=500)

    response.headers.update(cors)
    return response


async def _dispatch(
    request: Request,
    decision: RouteDecision,
    path: str,
    config: Config,
    logger: RequestLogger,
) -> Response:
    if decision.kind == "health":
        return JSONResponse({"status": "ok", "service": SERVICE_NAME})
    if decision.kind == "unknown":
        raise UnknownEndpointError(path, available_endpoints())

    headers = request.headers
    query = request.scope.get("query_string", b"").decode("latin-1")
    routing_service = request.app.state.routing_service

    if decision.kind == "proxy":
        # 400/403 take precedence over anything about the body
        target_url = routing_service.resolve_proxy_target(query, headers)
        body = await _read_body(request, config)
        prepared = routing_service.prepare_proxy(request.method, target_url, headers, body)
    else:
        body = await _read_body(request, config)
        prepared = routing_service.prepare_route(decision, request.method, query, headers, body)

    return await request.app.state.upstream_client.forward(prepared, logger)


async def _read_body(request: Request, config: Config) -> str:
    """Read the inbound body as text, enforcing the size limit."""
    raw_body = await request.body()
    if len(raw_body) > config.limits.max_body_size:
        raise RequestTooLarge()

    text_body = raw_body.decode("utf-8", errors="replace")
    if config.proxy.debug:
        write_incoming_log(request.method, request.url.path, dict(request.headers), text_body)
    return text_body


def _raw_path(request: Request) -> str:
    """Percent-encoded request path, as sent by the client."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.split(b"?", 1)[0].decode("latin-1")
    return request.url.path
