"""Custom exception hierarchy for the FTO Scout API proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""

    status_code = 500


class MissingTargetError(ProxyError):
    """Raised when /proxy is called without a target URL."""

    status_code = 400

    def __init__(self, message: str = "Missing X-Target-URL header or url param") -> None:
        super().__init__(message)


class TargetNotAllowedError(ProxyError):
    """Raised when a /proxy target is outside the upstream allowlist.

    Attributes:
        target: The rejected target URL
    """

    status_code = 403

    def __init__(self, target: str, message: str = "Target URL not in allowlist") -> None:
        super().__init__(message)
        self.target = target


class UnknownEndpointError(ProxyError):
    """Raised when no route matches the request path."""

    status_code = 404

    def __init__(self, path: str, available: list[str]) -> None:
        super().__init__("Unknown endpoint")
        self.path = path
        self.available = available


class RequestTooLarge(ProxyError):
    """Request body exceeds size limit."""

    status_code = 413

    def __init__(self, message: str = "Request body too large") -> None:
        super().__init__(message)


class UpstreamError(ProxyError):
    """Raised when a call to an upstream API fails.

    Attributes:
        message: Error message
        route: Route name the call was made for (e.g., 'uspto', 'proxy')
    """

    def __init__(self, message: str, route: str | None = None) -> None:
        super().__init__(message)
        self.route = route


class UpstreamTimeoutError(UpstreamError):
    """Raised when an upstream API request times out."""


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to connect to an upstream API."""
