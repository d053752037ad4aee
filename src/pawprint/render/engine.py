"""Render engine contract.

A render engine turns a simulated ``GET`` request into bytes plus the
format it negotiated.  The build calls ``render`` once per URL and treats
it as blocking.  Any exception it raises aborts the build.

Engines receive a ``LinkSink`` for the duration of each call.  Code running
inside the render (handlers, template helpers) reaches it through
``discover()``, which forwards to whichever sink is active.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from pawprint.export.queue import LinkSink

_active_sink: ContextVar[LinkSink | None] = ContextVar("pawprint_link_sink", default=None)

# MIME type -> format name
_MIME_FORMATS: dict[str, str] = {
    "text/html": "html",
    "application/xhtml+xml": "html",
    "text/plain": "txt",
    "application/json": "json",
    "application/x-json": "json",
    "application/ld+json": "jsonld",
    "text/xml": "xml",
    "application/xml": "xml",
    "application/x-xml": "xml",
    "application/rss+xml": "rss",
    "application/atom+xml": "atom",
    "text/css": "css",
    "text/javascript": "js",
    "application/javascript": "js",
    "text/csv": "csv",
    "application/pdf": "pdf",
}


@dataclass(frozen=True, slots=True)
class RenderRequest:
    """A simulated request for one URL.

    Attributes:
        url: Absolute URL being built.
        method: Always ``GET`` for static builds.
        base_url: The site's absolute base URL.

    """

    url: str
    method: str = "GET"
    base_url: str = ""

    @property
    def path(self) -> str:
        """Request path relative to ``base_url``, query string dropped."""
        path = urlsplit(self.url).path or "/"
        base_path = urlsplit(self.base_url).path.rstrip("/")
        if base_path and (path == base_path or path.startswith(base_path + "/")):
            path = path[len(base_path):] or "/"
        return path


@dataclass(frozen=True, slots=True)
class Rendered:
    """What a render engine produced for one URL.

    Attributes:
        content: Response body.
        format: Negotiated format name (``html``, ``json``, ``xml``...).
        status: HTTP status reported by the application.

    """

    content: bytes
    format: str = "html"
    status: int = 200


class RenderEngine(Protocol):
    """Anything that can render a URL for the build."""

    def render(self, request: RenderRequest, links: LinkSink) -> Rendered: ...


def negotiate_format(content_type: str | None) -> str:
    """Map a ``Content-Type`` header value to a format name.

    ``text/html; charset=utf-8`` -> ``html``.  Unlisted types fall back to
    the extension ``mimetypes`` knows for them, then to ``html`` when no
    content type was sent at all and ``txt`` otherwise.

    """
    if not content_type:
        return "html"
    mime = content_type.split(";", 1)[0].strip().lower()
    fmt = _MIME_FORMATS.get(mime)
    if fmt is not None:
        return fmt
    guessed = mimetypes.guess_extension(mime)
    if guessed:
        return guessed.lstrip(".")
    return "txt"


@contextmanager
def link_sink(sink: LinkSink) -> Iterator[LinkSink]:
    """Make *sink* the target of ``discover()`` inside the block."""
    token = _active_sink.set(sink)
    try:
        yield sink
    finally:
        _active_sink.reset(token)


def discover(url: str) -> bool:
    """Register *url* for building from inside a render.

    Returns False when called outside a build, where there is nothing to
    register with.

    """
    sink = _active_sink.get()
    if sink is None:
        return False
    sink.add(url)
    return True
