"""Build context — per-build timers and memory sampling.

A ``BuildContext`` is created at the start of each build and handed to
every phase.  Phases bracket their work with ``ctx.phase(name)``; when the
block exits, a ``PhaseTiming`` event is recorded and the figures are kept
for the summary.

Memory figures come from ``tracemalloc`` and are only available when the
caller has started tracing (``python -X tracemalloc`` or
``tracemalloc.start()``).

"""

from __future__ import annotations

import time
import tracemalloc
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pawprint.observability.collector import BuildCollector

if TYPE_CHECKING:
    from pawprint._types import Phase


@dataclass(slots=True)
class PhaseTimer:
    """Accumulates timing for a named build phase."""

    name: str
    _start: float = 0.0
    elapsed_ms: float = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        if self._start > 0:
            self.elapsed_ms = (time.perf_counter() - self._start) * 1000
            self._start = 0.0

    def lap(self) -> float:
        """Milliseconds since ``start()`` without stopping the timer."""
        if self._start <= 0:
            return self.elapsed_ms
        return (time.perf_counter() - self._start) * 1000


def sample_memory() -> int | None:
    """Current traced memory in bytes, or *None* when not tracing."""
    if not tracemalloc.is_tracing():
        return None
    current, _peak = tracemalloc.get_traced_memory()
    return current


def format_time(ms: float) -> str:
    """Render a duration the way build logs show it (``12.34 ms``, ``1.20 s``)."""
    if ms >= 1000:
        return f"{ms / 1000:.2f} s"
    return f"{ms:.2f} ms"


def format_memory(memory: int | None) -> str:
    """Render a byte count for logs, ``n/a`` when unknown."""
    if memory is None:
        return "n/a"
    size = float(memory)
    for unit in ("B", "KiB", "MiB"):
        if size < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} GiB"


@dataclass(slots=True)
class BuildContext:
    """Instrumentation state for a single build.

    Attributes:
        collector: Where timing and file events are recorded.
        timers: Phase timers, keyed by phase name.

    """

    collector: BuildCollector = field(default_factory=BuildCollector)
    timers: dict[str, PhaseTimer] = field(default_factory=dict)
    _t0: float = field(default_factory=time.perf_counter)

    @contextmanager
    def phase(self, name: Phase) -> Iterator[PhaseTimer]:
        """Time the enclosed block as phase *name*."""
        timer = self.timers.setdefault(name, PhaseTimer(name=name))
        timer.start()
        try:
            yield timer
        finally:
            timer.stop()
            self.collector.record_phase(
                name,
                duration_ms=timer.elapsed_ms,
                memory_bytes=sample_memory(),
            )

    def elapsed_ms(self) -> float:
        """Milliseconds since the context was created."""
        return (time.perf_counter() - self._t0) * 1000
