"""Sitemap generation — produce sitemap.xml from mapped entrypoints.

The document lists each URL once, in the order given.  No timestamps are
added unless an entry carries its own ``lastmod``, so identical inputs
always produce identical bytes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from xml.etree.ElementTree import Element, SubElement, tostring

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

_CHANGEFREQS = frozenset({
    "always", "hourly", "daily", "weekly", "monthly", "yearly", "never",
})


@dataclass(frozen=True, slots=True)
class SitemapEntry:
    """One ``<url>`` element.

    Attributes:
        loc: Absolute URL.
        lastmod: Last modification date, if known.
        changefreq: One of the sitemaps.org change frequencies.
        priority: Between 0.0 and 1.0.

    """

    loc: str
    lastmod: date | datetime | None = None
    changefreq: str | None = None
    priority: float | None = None

    def __post_init__(self) -> None:
        if self.changefreq is not None and self.changefreq not in _CHANGEFREQS:
            msg = f"Invalid changefreq {self.changefreq!r}"
            raise ValueError(msg)
        if self.priority is not None and not 0.0 <= self.priority <= 1.0:
            msg = f"priority must be between 0.0 and 1.0, got {self.priority}"
            raise ValueError(msg)


def generate_sitemap(entries: Iterable[SitemapEntry | str]) -> str:
    """Generate a sitemap.xml string.

    Plain strings are treated as ``SitemapEntry(loc=...)``.  Duplicate
    locations keep their first position.

    Returns:
        Complete XML string suitable for writing to ``sitemap.xml``.

    """
    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)

    seen: set[str] = set()
    for item in entries:
        entry = SitemapEntry(loc=item) if isinstance(item, str) else item
        if entry.loc in seen:
            continue
        seen.add(entry.loc)

        url_el = SubElement(urlset, "url")
        SubElement(url_el, "loc").text = entry.loc

        if entry.lastmod is not None:
            SubElement(url_el, "lastmod").text = entry.lastmod.isoformat()
        if entry.changefreq is not None:
            SubElement(url_el, "changefreq").text = entry.changefreq
        if entry.priority is not None:
            SubElement(url_el, "priority").text = f"{entry.priority:.1f}"

    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"
