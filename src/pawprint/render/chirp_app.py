"""Chirp integration — render pages through a chirp App's ASGI pipeline.

Requires the ``chirp`` extra (``pip install pawprint[chirp]``).  Chirp is
imported lazily so that the rest of pawprint works without it.

The engine keeps one event loop and one chirp ``TestClient`` open for the
whole build; each ``render`` call runs a single GET request to completion
on that loop before returning.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pawprint._errors import ConfigError, RenderError
from pawprint.render.engine import Rendered, link_sink, negotiate_format
from pawprint.render.links import extract_links
from pawprint.routes.decl import RouteDecl, handler_options

if TYPE_CHECKING:
    from chirp import App
    from chirp.testing import TestClient

    from pawprint.export.queue import LinkSink
    from pawprint.render.engine import RenderRequest
    from pawprint.routes.loader import RouteDefinition


def _require_chirp() -> None:
    try:
        import chirp  # noqa: F401
    except ImportError as exc:
        msg = (
            "Rendering routes requires chirp. "
            "Install with: pip install pawprint[chirp]"
        )
        raise ConfigError(msg) from exc


def create_app(root: Path, definitions: tuple[RouteDefinition, ...] = ()) -> App:
    """Create a chirp App serving the discovered route modules.

    htmx and SSE helper snippets are turned off: a static page has no
    server to talk back to.

    """
    _require_chirp()
    from chirp import App, AppConfig

    app = App(config=AppConfig(
        template_dir=root / "templates",
        static_dir=None,
        safe_target=False,
        sse_lifecycle=False,
    ))
    register_routes(app, definitions)
    return app


def register_routes(app: App, definitions: tuple[RouteDefinition, ...]) -> None:
    """Register every handler of every route definition on *app*."""
    for defn in definitions:
        many = len(defn.handlers) > 1
        for method, handler in defn.handlers:
            app.route(
                defn.path,
                methods=[method],
                name=f"{defn.name}:{method}" if many else defn.name,
            )(handler)  # type: ignore[arg-type]


def routes_from_app(app: App) -> tuple[RouteDecl, ...]:
    """Snapshot the routes declared on *app*, in declaration order.

    Build options come from ``route_options`` on each handler.

    """
    decls: list[RouteDecl] = []
    for pending in app._pending_routes:
        options = handler_options(pending.handler)
        decls.append(RouteDecl(
            name=pending.name or f"route:{pending.path}",
            url_template=pending.path,
            methods=frozenset(pending.methods or ["GET"]),
            ignored=options["ignore"],
            sitemap=options["sitemap"],
        ))
    return tuple(decls)


class ChirpRenderEngine:
    """Render engine backed by a chirp App.

    Usage::

        with ChirpRenderEngine(app) as engine:
            pipeline = BuildPipeline(engine, routes, config)
            count = pipeline.build()

    Args:
        app: The chirp application to render.
        crawl: Also queue same-site links found in rendered HTML.

    """

    __slots__ = ("_app", "_client", "_crawl", "_runner")

    def __init__(self, app: App, *, crawl: bool = False) -> None:
        _require_chirp()
        self._app = app
        self._crawl = crawl
        self._runner: asyncio.Runner | None = None
        self._client: TestClient | None = None

    def __enter__(self) -> ChirpRenderEngine:
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def open(self) -> None:
        """Start the event loop and run the app's startup hooks."""
        if self._runner is not None:
            return
        from chirp.testing import TestClient

        self._runner = asyncio.Runner()
        self._client = TestClient(self._app)
        self._runner.run(self._client.__aenter__())

    def close(self) -> None:
        """Run the app's shutdown hooks and close the event loop."""
        if self._runner is None:
            return
        try:
            if self._client is not None:
                self._runner.run(self._client.__aexit__(None, None, None))
        finally:
            self._runner.close()
            self._runner = None
            self._client = None

    def render(self, request: RenderRequest, links: LinkSink) -> Rendered:
        """Render one URL through the app."""
        self.open()
        assert self._runner is not None

        response = self._runner.run(self._fetch(request, links))
        if response.status >= 400:
            msg = f"The application responded with status {response.status}."
            raise RenderError(request.url, msg)

        fmt = negotiate_format(response.content_type)
        content = response.body_bytes

        if self._crawl and fmt == "html":
            html = content.decode("utf-8", errors="replace")
            for url in extract_links(html, request.url, request.base_url):
                links.add(url)

        return Rendered(content=content, format=fmt, status=response.status)

    async def _fetch(self, request: RenderRequest, links: LinkSink) -> Any:
        assert self._client is not None
        with link_sink(links):
            return await self._client.request(request.method, request.path)
