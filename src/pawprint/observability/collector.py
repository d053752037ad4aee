"""Build collector — records pipeline events into an ``EventLog``.

The pipeline never touches the log directly: it goes through the
collector's ``record_*`` methods so that every event gets a timestamp and
the same shape regardless of which phase produced it.

The log is bounded, so the collector also keeps running totals for the
build summary.  They stay exact however many events the log has dropped.

"""

from __future__ import annotations

import threading
from collections import Counter
from typing import TYPE_CHECKING

from pawprint.observability.events import BuildEvent, FileWritten, PhaseTiming, now_ns
from pawprint.observability.log import EventLog

if TYPE_CHECKING:
    from pathlib import Path

    from pawprint._types import FileKind, Phase


class BuildCollector:
    """Unified event collector for a build.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_bytes", "_file_counts", "_lock", "_log", "_phase_ms")

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()
        self._lock = threading.Lock()
        self._file_counts: Counter[str] = Counter()
        self._bytes = 0
        self._phase_ms: dict[str, float] = {}

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record(self, event: BuildEvent) -> BuildEvent:
        """Record a progress event and return it."""
        self._log.append(event)
        return event

    def notify(
        self,
        phase: Phase,
        message: str | None = None,
        *,
        advance: int | None = None,
        total: int | None = None,
    ) -> BuildEvent:
        """Create, record, and return a progress event."""
        return self.record(
            BuildEvent(
                phase=phase,
                message=message,
                advance=advance,
                total=total,
                timestamp_ns=now_ns(),
            )
        )

    def record_file(
        self,
        kind: FileKind,
        source: str,
        target: Path,
        *,
        size_bytes: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a file written into the output tree."""
        self._log.append(
            FileWritten(
                kind=kind,
                source=source,
                target=str(target),
                size_bytes=size_bytes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
        with self._lock:
            self._file_counts[kind] += 1
            self._bytes += size_bytes

    def record_phase(
        self,
        phase: Phase,
        *,
        duration_ms: float,
        memory_bytes: int | None = None,
    ) -> None:
        """Record the timing of a finished phase."""
        self._log.append(
            PhaseTiming(
                phase=phase,
                duration_ms=duration_ms,
                memory_bytes=memory_bytes,
                timestamp_ns=now_ns(),
            )
        )
        with self._lock:
            self._phase_ms[phase] = self._phase_ms.get(phase, 0.0) + duration_ms

    def files(self, kind: FileKind | None = None) -> list[FileWritten]:
        """Return written-file records, oldest first, optionally by kind."""
        return [
            r for r in self._log.events(FileWritten)
            if isinstance(r, FileWritten) and (kind is None or r.kind == kind)
        ]

    def file_count(self, kind: FileKind | None = None) -> int:
        """Files recorded since the last reset, optionally by kind."""
        with self._lock:
            if kind is None:
                return sum(self._file_counts.values())
            return self._file_counts[kind]

    @property
    def bytes_written(self) -> int:
        with self._lock:
            return self._bytes

    def phase_durations(self) -> dict[str, float]:
        """Milliseconds per phase since the last reset, in first-seen order."""
        with self._lock:
            return dict(self._phase_ms)

    def reset(self) -> None:
        """Clear the log and the running totals."""
        self._log.clear()
        with self._lock:
            self._file_counts.clear()
            self._bytes = 0
            self._phase_ms.clear()
