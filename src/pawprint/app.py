"""Pawprint application — wire config, routes, and chirp into a build.

The two public functions (``build`` and ``iterate``) are the primary entry
points.  Both load the project at *root*: configuration from
``pawprint.yaml``/``pawprint.toml``, route modules from ``routes/``, and a
chirp App serving those routes.
"""

from __future__ import annotations

import time
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

from pawprint._errors import ConfigError
from pawprint.config import PawprintConfig
from pawprint.config_loader import load_config

if TYPE_CHECKING:
    from pawprint.export.pipeline import BuildPipeline
    from pawprint.observability.events import BuildEvent
    from pawprint.render.chirp_app import ChirpRenderEngine


def _load_project(
    config: PawprintConfig,
) -> tuple[ChirpRenderEngine, BuildPipeline, int]:
    """Discover routes and set up the chirp engine and pipeline.

    Returns the engine (not yet opened), the pipeline, and the number of
    declared routes.

    Raises:
        ConfigError: If no routes are found or chirp is not installed.

    """
    from pawprint.export.pipeline import BuildPipeline
    from pawprint.render.chirp_app import ChirpRenderEngine, create_app
    from pawprint.routes.loader import discover_routes

    definitions = discover_routes(config.routes_path)
    if not definitions:
        msg = f"No route modules found in {config.routes_path}"
        raise ConfigError(msg)

    app = create_app(config.root, definitions)
    engine = ChirpRenderEngine(app, crawl=config.crawl)
    pipeline = BuildPipeline(engine, [d.to_decl() for d in definitions], config)
    return engine, pipeline, len(definitions)


def iterate(root: str | Path = ".", **kwargs: object) -> Generator[BuildEvent, None, int]:
    """Build the project lazily, yielding progress events.

    The generator's return value is the number of pages built.  Nothing
    is loaded or written until the first event is pulled.

    Args:
        root: Path to the project root directory.
        **kwargs: Override PawprintConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    engine, pipeline, _count = _load_project(config)
    with engine:
        return (yield from pipeline.iterate(sitemap=config.sitemap, expose=config.expose))


def build(root: str | Path = ".", **kwargs: object) -> int:
    """Export the project as static files.

    Renders every reachable route to a file, copies assets, and writes a
    sitemap.  Output is deployable to any static hosting.

    Args:
        root: Path to the project root directory.
        **kwargs: Override PawprintConfig fields.

    Returns:
        Number of pages built.

    """
    from pawprint.banner import print_banner, print_summary

    config = load_config(Path(root), **kwargs)
    t0 = time.perf_counter()

    engine, pipeline, route_count = _load_project(config)

    load_ms = (time.perf_counter() - t0) * 1000
    print_banner(config, route_count, load_ms=load_ms)

    t0 = time.perf_counter()
    with engine:
        pages = pipeline.build(sitemap=config.sitemap, expose=config.expose)
    duration_ms = (time.perf_counter() - t0) * 1000

    scan = pipeline.scan_result
    print_summary(
        config,
        pipeline.collector,
        pages=pages,
        duration_ms=duration_ms,
        skipped=scan.skipped if scan is not None else 0,
    )
    return pages
