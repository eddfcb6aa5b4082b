"""HTTP forwarding to upstream APIs."""

import httpx
from fastapi import Response

from core.exceptions import UpstreamConnectionError, UpstreamTimeoutError
from core.protocols import RequestLogger
from core.request_types import PreparedRequest


class UpstreamClient:
    """Forward prepared requests through a shared httpx client."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def forward(
        self,
        prepared: PreparedRequest,
        logger: RequestLogger,
    ) -> Response:
        """Issue the upstream call and relay status, body and content type."""
        logger.log_forward(prepared.route_name, prepared.method, prepared.target_url)
        try:
            response = await self._client.request(
                prepared.method,
                prepared.target_url,
                headers=prepared.headers,
                content=prepared.body,
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(
                str(e) or "Upstream timeout", route=prepared.route_name
            ) from e
        except httpx.RequestError as e:
            raise UpstreamConnectionError(
                str(e) or type(e).__name__, route=prepared.route_name
            ) from e

        if response.is_success:
            logger.log_response(prepared.route_name, response.status_code)
        else:
            logger.log_error(prepared.route_name, response.status_code, response.text)

        content_type = (
            prepared.relay_content_type
            or response.headers.get("content-type")
            or "text/plain"
        )
        # Set the header directly; media_type would append a charset to text/* types
        return Response(
            content=response.content,
            status_code=response.status_code,
            headers={"content-type": content_type},
        )
