"""Render engines — turn a URL into bytes and a negotiated format.

``RenderEngine`` is the protocol the build pipeline calls.
``ChirpRenderEngine`` (in ``pawprint.render.chirp_app``) renders through a
chirp application and needs the ``chirp`` extra.
"""

from pawprint.render.engine import (
    RenderEngine,
    Rendered,
    RenderRequest,
    discover,
    link_sink,
    negotiate_format,
)
from pawprint.render.links import extract_links

__all__ = [
    "RenderEngine",
    "RenderRequest",
    "Rendered",
    "discover",
    "extract_links",
    "link_sink",
    "negotiate_format",
]
