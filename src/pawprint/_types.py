"""Shared type definitions for pawprint."""

from typing import Literal

# Absolute URL, compared by exact string match
type URL = str

# Format name negotiated by the render engine (e.g. "html", "json", "xml")
type Format = str

# Build phases in execution order
type Phase = Literal[
    "start",
    "clear",
    "scan",
    "copy",
    "build_pages",
    "build_sitemap",
    "end",
]

# What kind of file ended up in the output tree
type FileKind = Literal["page", "asset", "sitemap"]
