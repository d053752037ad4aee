"""Shared test fixtures for pawprint."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pawprint.config import CopyEntry, PawprintConfig
from pawprint.export.queue import LinkSink
from pawprint.render.engine import Rendered, RenderRequest
from pawprint.routes.decl import RouteDecl

BASE_URL = "https://example.com"


class FakeEngine:
    """Render engine serving canned pages keyed by request path.

    Values may be a ``str`` (rendered as HTML), a ``Rendered``, or a
    callable taking ``(request, links)``.  ``links`` maps a path to URLs
    registered with the sink while that path renders.

    """

    def __init__(
        self,
        pages: dict[str, str | Rendered | Callable[..., Rendered]] | None = None,
        *,
        links: dict[str, list[str]] | None = None,
    ) -> None:
        self.pages = pages or {}
        self.links = links or {}
        self.requests: list[RenderRequest] = []

    def render(self, request: RenderRequest, links: LinkSink) -> Rendered:
        self.requests.append(request)
        for url in self.links.get(request.path, ()):
            links.add(url)

        page = self.pages.get(request.path)
        if page is None:
            msg = f"No page for {request.path}"
            raise LookupError(msg)
        if isinstance(page, Rendered):
            return page
        if callable(page):
            return page(request, links)
        return Rendered(content=page.encode("utf-8"), format="html")

    @property
    def paths(self) -> list[str]:
        return [r.path for r in self.requests]


def make_config(root: Path, **kwargs: object) -> PawprintConfig:
    """A config rooted at *root* that writes to ``root/build``."""
    kwargs.setdefault("base_url", BASE_URL)
    kwargs.setdefault("copy", ())
    return PawprintConfig(root=root, output=Path("build"), **kwargs)  # type: ignore[arg-type]


def route(
    name: str,
    path: str,
    *,
    methods: tuple[str, ...] = ("GET",),
    ignored: bool = False,
    sitemap: bool | None = None,
) -> RouteDecl:
    """Shorthand for creating RouteDecl test fixtures."""
    return RouteDecl(
        name=name,
        url_template=path,
        methods=frozenset(methods),
        ignored=ignored,
        sitemap=sitemap,
    )


@pytest.fixture
def config(tmp_path: Path) -> PawprintConfig:
    return make_config(tmp_path)


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """A static/ directory with nested files and a dotfile."""
    static = tmp_path / "static"
    static.mkdir()
    (static / "style.css").write_text("body { margin: 0; }\n")
    (static / "app.js").write_text("console.log('hi');\n")
    (static / "app.js.map").write_text("{}\n")
    (static / ".DS_Store").write_bytes(b"\x00")
    img = static / "img"
    img.mkdir()
    (img / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return static


@pytest.fixture
def copy_static() -> tuple[CopyEntry, ...]:
    return (CopyEntry(src=Path("static")),)
