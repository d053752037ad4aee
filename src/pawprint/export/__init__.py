"""Export layer — static output generation.

Renders every reachable URL of the application to files, copies assets,
and writes a sitemap.
"""

from pawprint.export.paths import resolve
from pawprint.export.pipeline import BuildPipeline
from pawprint.export.queue import LinkSink, WorkQueue

__all__ = ["BuildPipeline", "LinkSink", "WorkQueue", "resolve"]
