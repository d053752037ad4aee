"""Pawprint — render a dynamically routed application to static files.

Discovers every reachable GET route, renders each through the application's
request pipeline, writes the result to disk, and produces a sitemap.

Quick start::

    import pawprint

    pawprint.build("my-site/")

Progress, one event at a time::

    for event in pawprint.iterate("my-site/"):
        print(event.phase, event.message)

Inside a route handler, queue another URL for the build::

    pawprint.discover("https://example.com/blog/hello")

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "BuildPipeline",
    "PawprintConfig",
    "__version__",
    "build",
    "discover",
    "iterate",
    "route_options",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pawprint`` fast while providing a clean top-level API.
    """
    if name == "PawprintConfig":
        from pawprint.config import PawprintConfig

        return PawprintConfig

    if name == "BuildPipeline":
        from pawprint.export.pipeline import BuildPipeline

        return BuildPipeline

    if name == "build":
        from pawprint.app import build

        return build

    if name == "iterate":
        from pawprint.app import iterate

        return iterate

    if name == "discover":
        from pawprint.render.engine import discover

        return discover

    if name == "route_options":
        from pawprint.routes.decl import route_options

        return route_options

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
