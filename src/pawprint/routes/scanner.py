"""Entrypoint scanner — turn declared routes into buildable URLs.

Only routes that are not ignored, answer GET, and can be generated without
parameters become entrypoints.  Parameterized routes are still built when
a rendered page links to one of their URLs.

"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pawprint._errors import RouteGenerationError

if TYPE_CHECKING:
    from pawprint.export.queue import WorkQueue
    from pawprint.routes.decl import RouteDecl

logger = logging.getLogger("pawprint.scan")


@dataclass(frozen=True, slots=True)
class Entrypoint:
    """A route that produced a URL during the scan."""

    url: str
    route: RouteDecl


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of scanning a route table.

    Attributes:
        entrypoints: URLs in scan order, first occurrence per URL.
        scanned: Number of routes looked at.
        skipped: Routes skipped because they require parameters.
        duration_ms: Time spent scanning.

    """

    entrypoints: tuple[Entrypoint, ...]
    scanned: int
    skipped: int
    duration_ms: float

    @property
    def urls(self) -> tuple[str, ...]:
        return tuple(e.url for e in self.entrypoints)

    def mapped(self) -> tuple[Entrypoint, ...]:
        """Entrypoints that belong in the sitemap, in scan order."""
        return tuple(e for e in self.entrypoints if e.route.is_mapped)


class EntrypointScanner:
    """Filters declared routes into absolute entrypoint URLs.

    Args:
        base_url: Absolute base URL prepended to every route path.

    """

    __slots__ = ("_base_url",)

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url

    def scan(
        self,
        routes: Iterable[RouteDecl],
        queue: WorkQueue | None = None,
    ) -> ScanResult:
        """Scan *routes* in order and add each entrypoint to *queue*."""
        t0 = time.perf_counter()
        entrypoints: list[Entrypoint] = []
        seen: set[str] = set()
        scanned = 0
        skipped = 0

        for route in routes:
            scanned += 1
            if route.is_ignored or not route.is_gettable:
                logger.debug('Route "%s" is hidden, skipping.', route.name)
                continue

            try:
                url = route.materialize(self._base_url)
            except RouteGenerationError:
                skipped += 1
                logger.debug('Route "%s" requires parameters, skipping.', route.name)
                continue

            if queue is not None:
                queue.add(url)
            if url not in seen:
                seen.add(url)
                entrypoints.append(Entrypoint(url=url, route=route))
            logger.debug('Route "%s" is successfully listed.', route.name)

        return ScanResult(
            entrypoints=tuple(entrypoints),
            scanned=scanned,
            skipped=skipped,
            duration_ms=(time.perf_counter() - t0) * 1000,
        )
