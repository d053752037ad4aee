"""Tests for pawprint.render.chirp_app — rendering through a chirp App."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

pytest.importorskip("chirp.testing")

from chirp import App, AppConfig, Response  # noqa: E402

import pawprint  # noqa: E402
from conftest import make_config  # noqa: E402
from pawprint._errors import RenderError  # noqa: E402
from pawprint.export.pipeline import BuildPipeline  # noqa: E402
from pawprint.export.queue import WorkQueue  # noqa: E402
from pawprint.render.chirp_app import (  # noqa: E402
    ChirpRenderEngine,
    create_app,
    routes_from_app,
)
from pawprint.render.engine import RenderRequest  # noqa: E402
from pawprint.routes.decl import route_options  # noqa: E402
from pawprint.routes.loader import discover_routes  # noqa: E402

BASE = "https://example.com"


def _app() -> App:
    return App(config=AppConfig(static_dir=None, safe_target=False, sse_lifecycle=False))


def _request(path: str) -> RenderRequest:
    return RenderRequest(url=BASE + path, base_url=BASE)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project with templates/, static/, and three route modules."""
    (tmp_path / "templates").mkdir()
    static = tmp_path / "static"
    static.mkdir()
    (static / "site.css").write_text("body {}\n")

    routes = tmp_path / "routes"
    routes.mkdir()
    (routes / "index.py").write_text(
        "import pawprint\n"
        "path = '/'\n"
        "async def get(request):\n"
        "    pawprint.discover('https://example.com/blog/hello')\n"
        "    return '<h1>Home</h1>'\n",
    )
    (routes / "post.py").write_text(
        "path = '/blog/{slug}'\n"
        "async def get(request, slug):\n"
        "    return f'<h1>{slug}</h1>'\n",
    )
    (routes / "contact.py").write_text(
        "async def post(request):\n"
        "    return 'sent'\n",
    )
    return tmp_path


# ---------------------------------------------------------------------------
# routes_from_app
# ---------------------------------------------------------------------------


class TestRoutesFromApp:
    def test_declaration_order_and_options(self) -> None:
        app = _app()

        @app.route("/", name="home")
        async def home():  # noqa: ANN202
            return "home"

        @app.route("/admin")
        @route_options(ignore=True)
        async def admin():  # noqa: ANN202
            return "admin"

        @app.route("/submit", methods=["POST"])
        async def submit():  # noqa: ANN202
            return "ok"

        decls = routes_from_app(app)
        assert [d.url_template for d in decls] == ["/", "/admin", "/submit"]
        assert decls[0].name == "home"
        assert decls[1].is_ignored
        assert not decls[2].is_gettable


# ---------------------------------------------------------------------------
# ChirpRenderEngine
# ---------------------------------------------------------------------------


class TestChirpRenderEngine:
    """ChirpRenderEngine.render — one GET through the app."""

    def test_html(self) -> None:
        app = _app()

        @app.route("/")
        async def home():  # noqa: ANN202
            return "<h1>Home</h1>"

        with ChirpRenderEngine(app) as engine:
            rendered = engine.render(_request("/"), WorkQueue().sink())
        assert rendered.format == "html"
        assert rendered.content == b"<h1>Home</h1>"
        assert rendered.status == 200

    def test_json_format(self) -> None:
        app = _app()

        @app.route("/api/posts.json")
        async def posts():  # noqa: ANN202
            return {"posts": []}

        with ChirpRenderEngine(app) as engine:
            rendered = engine.render(_request("/api/posts.json"), WorkQueue().sink())
        assert rendered.format == "json"

    def test_explicit_content_type(self) -> None:
        app = _app()

        @app.route("/feed.xml")
        async def feed():  # noqa: ANN202
            return Response(body="<rss/>", content_type="application/rss+xml")

        with ChirpRenderEngine(app) as engine:
            rendered = engine.render(_request("/feed.xml"), WorkQueue().sink())
        assert rendered.format == "rss"
        assert rendered.content == b"<rss/>"

    def test_not_found_raises(self) -> None:
        app = _app()

        @app.route("/")
        async def home():  # noqa: ANN202
            return "home"

        with ChirpRenderEngine(app) as engine, pytest.raises(RenderError) as exc_info:
            engine.render(_request("/missing"), WorkQueue().sink())
        assert exc_info.value.url == "https://example.com/missing"
        assert "404" in str(exc_info.value)

    def test_discover_from_handler(self) -> None:
        app = _app()

        @app.route("/")
        async def home():  # noqa: ANN202
            pawprint.discover("https://example.com/found")
            return "home"

        queue = WorkQueue()
        with ChirpRenderEngine(app) as engine:
            engine.render(_request("/"), queue.sink())
        assert queue.get_next() == "https://example.com/found"

    def test_crawl_queues_links(self) -> None:
        app = _app()

        @app.route("/")
        async def home():  # noqa: ANN202
            return '<a href="/about">About</a><a href="https://other.org/">x</a>'

        queue = WorkQueue()
        with ChirpRenderEngine(app, crawl=True) as engine:
            engine.render(_request("/"), queue.sink())
        assert queue.get_next() == "https://example.com/about"
        assert queue.get_next() is None

    def test_no_crawl_by_default(self) -> None:
        app = _app()

        @app.route("/")
        async def home():  # noqa: ANN202
            return '<a href="/about">About</a>'

        queue = WorkQueue()
        with ChirpRenderEngine(app) as engine:
            engine.render(_request("/"), queue.sink())
        assert queue.total_count() == 0

    def test_close_is_idempotent(self) -> None:
        engine = ChirpRenderEngine(_app())
        engine.close()
        engine.open()
        engine.close()
        engine.close()


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


class TestEndToEnd:
    def test_pipeline_over_route_modules(self, project: Path) -> None:
        definitions = discover_routes(project / "routes")
        app = create_app(project, definitions)
        config = make_config(project)
        with ChirpRenderEngine(app) as engine:
            pipeline = BuildPipeline(engine, [d.to_decl() for d in definitions], config)
            count = pipeline.build()

        assert count == 2
        out = config.output_path
        assert (out / "index.html").read_text() == "<h1>Home</h1>"
        assert (out / "blog" / "hello" / "index.html").read_text() == "<h1>hello</h1>"
        assert not (out / "contact").exists()

    def test_build_entry_point(self, project: Path) -> None:
        with patch.object(sys, "stderr", io.StringIO()):
            count = pawprint.build(project, base_url=BASE)
        out = project / "build"
        assert count == 2
        assert (out / "static" / "site.css").is_file()
        sitemap = (out / "sitemap.xml").read_text()
        assert "<loc>https://example.com/</loc>" in sitemap
        assert "blog/hello" not in sitemap

    def test_example_blog(self, tmp_path: Path) -> None:
        example = Path(__file__).parent.parent / "examples" / "blog"
        out = tmp_path / "blog-build"
        with patch.object(sys, "stderr", io.StringIO()):
            count = pawprint.build(example, output=out)

        assert count == 4
        assert (out / "index.html").is_file()
        assert (out / "feed.xml").read_text().startswith("<?xml")
        assert (out / "blog" / "static-builds" / "index.html").is_file()
        assert (out / "static" / "style.css").is_file()
        assert (out / "robots.txt").is_file()
        assert not (out / "admin").exists()
        sitemap = (out / "sitemap.xml").read_text()
        assert "<loc>https://blog.example.com/</loc>" in sitemap
        assert "feed.xml" not in sitemap
