"""Route discovery and entrypoint scanning.

Public API::

    from pawprint.routes import EntrypointScanner, discover_routes

    definitions = discover_routes(Path("my-site/routes"))
    result = EntrypointScanner("https://example.com").scan(
        d.to_decl() for d in definitions
    )
"""

from pawprint.routes.decl import RouteDecl, route_options
from pawprint.routes.loader import RouteDefinition, discover_routes
from pawprint.routes.scanner import Entrypoint, EntrypointScanner, ScanResult

__all__ = [
    "Entrypoint",
    "EntrypointScanner",
    "RouteDecl",
    "RouteDefinition",
    "ScanResult",
    "discover_routes",
    "route_options",
]
