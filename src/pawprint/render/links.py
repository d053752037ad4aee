"""Same-site link extraction from rendered HTML."""

from __future__ import annotations

from html.parser import HTMLParser
from urllib.parse import urljoin, urlsplit, urlunsplit

# (tag, attribute) pairs that point at other pages
_LINK_ATTRS: frozenset[tuple[str, str]] = frozenset({
    ("a", "href"),
    ("link", "href"),
    ("area", "href"),
})


class _LinkCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.hrefs: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        for name, value in attrs:
            if value and (tag, name) in _LINK_ATTRS:
                self.hrefs.append(value)


def extract_links(html: str, page_url: str, base_url: str) -> list[str]:
    """Absolute same-site URLs linked from *html*, in document order.

    Relative links are resolved against *page_url*.  Fragments and query
    strings are dropped; links leaving *base_url* (other hosts, other
    schemes, paths outside the base path) are ignored.

    """
    collector = _LinkCollector()
    collector.feed(html)
    collector.close()

    base = urlsplit(base_url)
    base_path = base.path.rstrip("/")
    results: list[str] = []
    seen: set[str] = set()

    for href in collector.hrefs:
        absolute = urlsplit(urljoin(page_url, href.strip()))
        if (absolute.scheme, absolute.netloc) != (base.scheme, base.netloc):
            continue
        path = absolute.path or "/"
        if base_path and not (path == base_path or path.startswith(base_path + "/")):
            continue
        url = urlunsplit((absolute.scheme, absolute.netloc, path, "", ""))
        if url not in seen:
            seen.add(url)
            results.append(url)

    return results
