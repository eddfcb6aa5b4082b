"""Shared request data types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    route_name: str
    method: str
    target_url: str
    headers: dict[str, str]
    body: str | None = None
    # None relays the upstream's own content type
    relay_content_type: str | None = None
