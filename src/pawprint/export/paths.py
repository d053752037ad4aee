"""URL-to-file mapping.

Document formats (HTML) get clean URLs: ``/about`` is written to
``/about/index.html`` so directory-index serving finds it, while a sibling
``/about.html`` or ``/about.json`` keeps its own file name.  Everything
else is written exactly where its URL points.

"""

import posixpath

from pawprint._types import Format

# Format name -> conventional file extension
FORMAT_EXTENSIONS: dict[str, str] = {
    "html": "html",
    "txt": "txt",
    "json": "json",
    "jsonld": "jsonld",
    "xml": "xml",
    "rss": "rss",
    "atom": "atom",
    "css": "css",
    "js": "js",
    "csv": "csv",
    "pdf": "pdf",
}

# Formats served as documents (clean URL -> directory index)
DOCUMENT_FORMATS: frozenset[str] = frozenset({"html"})


def is_document(fmt: Format) -> bool:
    """Whether *fmt* is a document format."""
    return fmt in DOCUMENT_FORMATS


def resolve(path: str, fmt: Format) -> tuple[str, str]:
    """Map a URL path and negotiated format to ``(directory, filename)``.

    ``/about``      + html -> ``("/about", "index.html")``
    ``/about.html`` + html -> ``("/", "about.html")``
    ``/feed.xml``   + xml  -> ``("/", "feed.xml")``
    ``/``           + html -> ``("/", "index.html")``
    ``/api/``       + json -> ``("/api/", "index.json")``

    """
    dirname, basename = posixpath.split(path)
    _, dot, ext = basename.rpartition(".")
    extension = ext if dot else None

    if not basename:
        return path, f"index.{FORMAT_EXTENSIONS.get(fmt, fmt)}"

    if is_document(fmt):
        expected = FORMAT_EXTENSIONS.get(fmt, fmt)
        if extension != expected:
            return path, f"index.{expected}"

    return dirname or "/", basename
