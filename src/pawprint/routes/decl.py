"""Route declarations — the build's read-only snapshot of the route table.

A ``RouteDecl`` carries exactly what the build needs to know about a
route: its URL template, which methods it answers, and whether it opted
out of the build or of the sitemap.

URL templates use the same placeholder syntax as chirp routes::

    /blog                 static
    /blog/{slug}          one parameter
    /users/{id:int}       typed parameter
    /files/{rest:path}    catch-all

"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pawprint._errors import RouteGenerationError

_PARAM_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)(?::[A-Za-z_]+)?\}")

# Attribute set on handlers by ``route_options``
OPTIONS_ATTR = "__pawprint_options__"

F = TypeVar("F", bound=Callable[..., Any])


def template_params(url_template: str) -> frozenset[str]:
    """Names of the placeholders in *url_template*.

    ``/users/{id:int}/posts/{slug}`` -> ``{"id", "slug"}``

    """
    return frozenset(_PARAM_RE.findall(url_template))


@dataclass(frozen=True, slots=True)
class RouteDecl:
    """A declared route as seen by the static build.

    Attributes:
        name: Route name, unique within the route table.
        url_template: Path template, e.g. ``/blog/{slug}``.
        methods: HTTP methods the route answers.  Empty means any.
        ignored: Never build this route from the route table.
        sitemap: Force the route in (``True``) or out (``False``) of the
            sitemap.  *None* follows ``not ignored``.
        required_params: Placeholder names found in ``url_template``.

    """

    name: str
    url_template: str
    methods: frozenset[str] = frozenset()
    ignored: bool = False
    sitemap: bool | None = None
    required_params: frozenset[str] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "methods", frozenset(m.upper() for m in self.methods))
        object.__setattr__(self, "required_params", template_params(self.url_template))

    @property
    def is_gettable(self) -> bool:
        """Whether the route accepts GET requests."""
        return not self.methods or "GET" in self.methods

    @property
    def is_ignored(self) -> bool:
        return self.ignored

    @property
    def is_mapped(self) -> bool:
        """Whether the route belongs in the generated sitemap."""
        if self.sitemap is not None:
            return self.sitemap
        return not self.ignored

    def materialize(self, base_url: str) -> str:
        """Generate the route's absolute URL without any parameters.

        Raises:
            RouteGenerationError: If the template has placeholders.

        """
        if self.required_params:
            raise RouteGenerationError(self.name, tuple(sorted(self.required_params)))

        path = self.url_template if self.url_template.startswith("/") else "/" + self.url_template
        return base_url.rstrip("/") + path


def route_options(*, ignore: bool = False, sitemap: bool | None = None) -> Callable[[F], F]:
    """Attach build options to a route handler.

    Usage::

        @app.route("/admin")
        @route_options(ignore=True)
        async def admin(request): ...

    """

    def decorator(func: F) -> F:
        setattr(func, OPTIONS_ATTR, {"ignore": ignore, "sitemap": sitemap})
        return func

    return decorator


def handler_options(handler: object) -> dict[str, Any]:
    """Build options previously attached with ``route_options``."""
    options = getattr(handler, OPTIONS_ATTR, None)
    if isinstance(options, dict):
        return options
    return {"ignore": False, "sitemap": None}
