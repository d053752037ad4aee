"""Build event model.

Defines the events produced while a static build runs:

- ``BuildEvent``: progress notification, one per phase and one per page
- ``FileWritten``: a file landed in the output tree
- ``PhaseTiming``: wall-clock and memory figures for a finished phase

All events are frozen dataclasses with a ``timestamp_ns`` monotonic
nanosecond timestamp.

"""

import time
from dataclasses import dataclass

from pawprint._types import FileKind, Phase


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """Progress notification yielded by the build pipeline.

    Attributes:
        phase: The phase this event belongs to.
        message: Human-readable description, if any.
        advance: Pages done so far (``build_pages`` events only).
        total: Pages known so far, done + pending (``build_pages`` only).
            Grows as rendering discovers new URLs.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    phase: Phase
    message: str | None = None
    advance: int | None = None
    total: int | None = None
    timestamp_ns: int = 0


@dataclass(frozen=True, slots=True)
class FileWritten:
    """A file was written into the output tree.

    Attributes:
        kind: Category of the written file.
        source: URL for pages, source path for assets.
        target: Absolute filesystem path of the written file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to produce and write the file.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: FileKind
    source: str
    target: str
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class PhaseTiming:
    """Timing summary for one finished build phase.

    Attributes:
        phase: Phase name.
        duration_ms: Wall-clock time spent in the phase.
        memory_bytes: Traced memory at phase end, or *None* when
            ``tracemalloc`` is not tracing.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    phase: Phase
    duration_ms: float
    memory_bytes: int | None
    timestamp_ns: int


type StackEvent = BuildEvent | FileWritten | PhaseTiming


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
