"""Request routing logic - maps inbound paths to upstream APIs."""

from dataclasses import dataclass

HEALTH_PATHS = ("/", "/health")
PROXY_PATH = "/proxy"


@dataclass(frozen=True)
class Route:
    """A named path prefix forwarded to one upstream API."""

    name: str
    prefix: str
    upstream: str
    relay_content_type: str
    keep_query: bool = True
    forward_method: bool = True
    force_json: bool = True
    forward_auth: bool = False


ROUTES: tuple[Route, ...] = (
    Route("uspto", "/uspto/", "https://api.patentsview.org", "application/json"),
    Route("uspto-search", "/uspto-search/", "https://search.patentsview.org", "application/json"),
    Route(
        "arxiv",
        "/arxiv/",
        "https://export.arxiv.org",
        "application/xml",
        forward_method=False,
        force_json=False,
    ),
    # Lens.org takes its parameters in the body, the query string is not forwarded
    Route(
        "lens",
        "/lens/",
        "https://api.lens.org",
        "application/json",
        keep_query=False,
        forward_auth=True,
    ),
    Route(
        "scholar",
        "/scholar/",
        "https://api.semanticscholar.org",
        "application/json",
        forward_method=False,
        force_json=False,
    ),
)

ALLOWED_APIS: tuple[str, ...] = (
    "https://api.patentsview.org",
    "https://search.patentsview.org",
    "https://export.arxiv.org",
    "https://api.lens.org",
    "https://api.openalex.org",
    "https://api.semanticscholar.org",
    "https://api.crossref.org",
)


def available_endpoints() -> list[str]:
    """Route prefixes advertised in 404 responses."""
    return [route.prefix for route in ROUTES] + [PROXY_PATH]


def is_allowed_target(url: str) -> bool:
    """Check a generic proxy target against the upstream allowlist."""
    return any(url.startswith(api) for api in ALLOWED_APIS)


@dataclass(frozen=True)
class RouteDecision:
    """Routing decision for a request."""

    kind: str
    route: Route | None = None
    rest: str = ""

    @property
    def name(self) -> str:
        if self.route is not None:
            return self.route.name
        return self.kind


class RouteDecider:
    """Decide which upstream, if any, a request path targets."""

    def __init__(self, routes: tuple[Route, ...] = ROUTES):
        self.routes = routes

    def decide(self, path: str) -> RouteDecision:
        """Return the first matching decision for the path."""
        if path in HEALTH_PATHS:
            return RouteDecision(kind="health")
        for route in self.routes:
            if path.startswith(route.prefix):
                return RouteDecision(kind="forward", route=route, rest=path[len(route.prefix):])
        if path == PROXY_PATH:
            return RouteDecision(kind="proxy")
        return RouteDecision(kind="unknown")
