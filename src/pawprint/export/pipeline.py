"""Build pipeline — render every reachable page of an app to static files.

Phases run strictly in order::

    start -> clear -> scan -> copy? -> build_pages -> build_sitemap? -> end

``iterate()`` is a generator: it yields one ``BuildEvent`` before each
phase and one per page built, and returns the number of pages built.
Nothing happens until the caller pulls events.  ``build()`` drains the
generator and returns only the count.

Pages are built one at a time from a ``WorkQueue`` seeded by the route
scan.  Rendering a page may queue more URLs (through the engine's link
sink), so the number of pages is only known once the queue is drained.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Generator, Iterable
from typing import TYPE_CHECKING

from pawprint._errors import BuildCancelled, RenderError
from pawprint.export.assets import copy_entries
from pawprint.export.files import OutputTree
from pawprint.export.paths import resolve
from pawprint.export.queue import WorkQueue
from pawprint.export.sitemap import SitemapEntry, generate_sitemap
from pawprint.observability.collector import BuildCollector
from pawprint.observability.profiler import (
    BuildContext,
    format_memory,
    format_time,
    sample_memory,
)
from pawprint.render.engine import RenderRequest
from pawprint.routes.scanner import EntrypointScanner, ScanResult

if TYPE_CHECKING:
    from pawprint.config import PawprintConfig
    from pawprint.export.queue import LinkSink
    from pawprint.observability.events import BuildEvent
    from pawprint.render.engine import RenderEngine
    from pawprint.routes.decl import RouteDecl

logger = logging.getLogger("pawprint.build")


class BuildPipeline:
    """Builds a static copy of an application.

    A pipeline may run several builds in sequence, each with a fresh work
    queue.  Two builds must never target the same output directory at the
    same time.

    Args:
        engine: Renders one URL at a time.
        routes: Declared routes, scanned in this order.
        config: Output directory, base URL, and copy entries.
        collector: Receives progress, file, and timing events.  Without
            one, the pipeline keeps its own and resets it at the start of
            every build.

    """

    __slots__ = (
        "_cancel",
        "_collector",
        "_config",
        "_engine",
        "_owns_collector",
        "_queue",
        "_routes",
        "_scan",
    )

    def __init__(
        self,
        engine: RenderEngine,
        routes: Iterable[RouteDecl],
        config: PawprintConfig,
        *,
        collector: BuildCollector | None = None,
    ) -> None:
        self._engine = engine
        self._routes = tuple(routes)
        self._config = config
        self._owns_collector = collector is None
        self._collector = collector if collector is not None else BuildCollector()
        self._cancel = threading.Event()
        self._queue: WorkQueue | None = None
        self._scan: ScanResult | None = None

    @property
    def collector(self) -> BuildCollector:
        return self._collector

    @property
    def queue(self) -> WorkQueue | None:
        """Work queue of the current (or last) build."""
        return self._queue

    @property
    def scan_result(self) -> ScanResult | None:
        """Scan outcome of the current (or last) build."""
        return self._scan

    def cancel(self) -> None:
        """Stop the running build before its next page.

        Safe to call from another thread or a signal handler.  The build
        raises ``BuildCancelled``; pages already written stay on disk.

        """
        self._cancel.set()

    def build(self, *, sitemap: bool = True, expose: bool = True) -> int:
        """Run the whole build and return the number of pages built."""
        events = self.iterate(sitemap=sitemap, expose=expose)
        while True:
            try:
                next(events)
            except StopIteration as stop:
                return stop.value

    def iterate(
        self,
        *,
        sitemap: bool = True,
        expose: bool = True,
    ) -> Generator[BuildEvent, None, int]:
        """Run the build lazily, yielding progress events.

        Args:
            sitemap: Write ``sitemap.xml`` once all pages are built.
            expose: Copy the configured files and directories.

        Returns:
            Number of pages built (as the generator's return value).

        Raises:
            RenderError: A page failed to render.
            FileWriteError: The output tree could not be written.
            AssetMissingError: A required copy source does not exist.
            BuildCancelled: ``cancel()`` was called.

        """
        self._cancel.clear()
        if self._owns_collector:
            self._collector.reset()
        ctx = BuildContext(collector=self._collector)
        queue = WorkQueue()
        tree = OutputTree(self._config.output_path)
        self._queue = queue
        self._scan = None
        notify = ctx.collector.notify

        yield notify("start", "Start building")

        yield notify("clear", "Clearing previous build")
        self._clear(ctx, tree)

        yield notify("scan", "Scanning routes")
        scan = self._scan_routes(ctx, queue)
        self._scan = scan

        if expose:
            yield notify("copy", "Copying files")
            self._copy(ctx, tree)

        yield notify("build_pages", "Building pages...")
        yield from self._build_pages(ctx, queue, tree)

        if sitemap:
            yield notify("build_sitemap", "Building sitemap...")
            self._build_sitemap(ctx, tree, scan)

        count = queue.done_count()
        logger.info("Build finished: %d pages (%s)", count, format_time(ctx.elapsed_ms()))
        yield notify("end")
        return count

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _clear(self, ctx: BuildContext, tree: OutputTree) -> None:
        """Remove and recreate the output directory."""
        with ctx.phase("clear") as timer:
            logger.info("Clearing %s build directory...", tree.root)
            tree.clear(protect=self._config.root)
        logger.info(
            "Cleared %s build directory! (%s)", tree.root, format_time(timer.elapsed_ms),
        )

    def _scan_routes(self, ctx: BuildContext, queue: WorkQueue) -> ScanResult:
        """Add every entrypoint URL to the queue."""
        with ctx.phase("scan") as timer:
            logger.info("Scanning %d routes...", len(self._routes))
            scanner = EntrypointScanner(self._config.base_url)
            result = scanner.scan(self._routes, queue)
        logger.info(
            "Scanned %d routes (%d skipped), discovered %d entrypoint routes! (%s, %s)",
            result.scanned,
            result.skipped,
            queue.total_count(),
            format_time(timer.elapsed_ms),
            format_memory(sample_memory()),
        )
        return result

    def _copy(self, ctx: BuildContext, tree: OutputTree) -> None:
        """Copy configured files and directories into the output tree."""
        with ctx.phase("copy") as timer:
            count = copy_entries(
                self._config.copy,
                tree,
                root=self._config.root,
                collector=ctx.collector,
            )
        logger.info("Copied %d files! (%s)", count, format_time(timer.elapsed_ms))

    def _build_pages(
        self,
        ctx: BuildContext,
        queue: WorkQueue,
        tree: OutputTree,
    ) -> Generator[BuildEvent, None, None]:
        """Drain the queue, building one page per URL."""
        sink = queue.sink()
        with ctx.phase("build_pages") as timer:
            logger.info("Building pages... (%d entrypoints)", queue.pending_count())
            while True:
                if self._cancel.is_set():
                    msg = f"Build cancelled after {queue.done_count()} pages"
                    raise BuildCancelled(msg)

                url = queue.get_next()
                if url is None:
                    break

                self._build_url(url, sink, tree, ctx)
                queue.mark_as_done(url)

                yield ctx.collector.notify(
                    "build_pages",
                    f"Built {url}",
                    advance=queue.done_count(),
                    total=queue.total_count(),
                )

        logger.info(
            "Built %d pages! (%s, %s)",
            queue.done_count(),
            format_time(timer.elapsed_ms),
            format_memory(sample_memory()),
        )

    def _build_url(
        self,
        url: str,
        sink: LinkSink,
        tree: OutputTree,
        ctx: BuildContext,
    ) -> None:
        """Render *url* and write the result into the tree."""
        t0 = time.perf_counter()
        request = RenderRequest(url=url, method="GET", base_url=self._config.base_url)

        try:
            rendered = self._engine.render(request, sink)
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(url, str(exc)) from exc

        directory, filename = resolve(request.path, rendered.format)
        target = tree.write(directory, filename, rendered.content)
        elapsed = (time.perf_counter() - t0) * 1000

        ctx.collector.record_file(
            "page", url, target, size_bytes=len(rendered.content), duration_ms=elapsed,
        )
        logger.debug(
            'Page "%s" built (%s, %s)', url, format_time(elapsed), format_memory(sample_memory()),
        )

    def _build_sitemap(self, ctx: BuildContext, tree: OutputTree, scan: ScanResult) -> None:
        """Write sitemap.xml listing the mapped entrypoints."""
        with ctx.phase("build_sitemap") as timer:
            entries = [SitemapEntry(loc=e.url) for e in scan.mapped()]
            data = generate_sitemap(entries).encode("utf-8")
            target = tree.write("/", "sitemap.xml", data)
        ctx.collector.record_file(
            "sitemap", "/sitemap.xml", target,
            size_bytes=len(data), duration_ms=timer.elapsed_ms,
        )
        logger.info(
            "Built sitemap! (%d urls, %s)", len(entries), format_time(timer.elapsed_ms),
        )
