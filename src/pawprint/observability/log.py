"""Event log — ordered record of one or more builds.

Events are kept oldest first, in the order the pipeline produced them, so
the log reads as a transcript of the build.  A ``max_events`` bound keeps
memory flat on very large sites by dropping the oldest entries.

The pipeline appends from the thread that pulls build events while a
caller may inspect the log from another (a progress UI, a signal handler
deciding whether to cancel), so every access takes the lock.

"""

import threading
from collections import Counter, deque
from collections.abc import Iterable, Iterator
from typing import Any

from pawprint._types import Phase
from pawprint.observability.events import FileWritten, PhaseTiming, StackEvent


class EventLog:
    """Append-only, bounded log of build events.

    Args:
        max_events: Oldest events are dropped beyond this many.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[StackEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: StackEvent) -> None:
        with self._lock:
            self._events.append(event)

    def extend(self, events: Iterable[StackEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def events(
        self,
        kind: type | None = None,
        *,
        phase: Phase | None = None,
        since_ns: int = 0,
    ) -> list[StackEvent]:
        """Events in the order they were recorded.

        Args:
            kind: Only events of this class (``BuildEvent``, ``FileWritten``...).
            phase: Only events carrying this ``phase``.
            since_ns: Only events stamped at or after this time.

        """
        with self._lock:
            snapshot = list(self._events)
        return [
            event for event in snapshot
            if (kind is None or isinstance(event, kind))
            and (phase is None or getattr(event, "phase", None) == phase)
            and event.timestamp_ns >= since_ns
        ]

    def latest(self, n: int = 20) -> list[StackEvent]:
        """The *n* most recent events, oldest first."""
        with self._lock:
            snapshot = list(self._events)
        return snapshot[-n:] if n > 0 else []

    def phase_durations(self) -> dict[str, float]:
        """Milliseconds spent per phase, summed over every recorded timing."""
        totals: dict[str, float] = {}
        for event in self.events(PhaseTiming):
            assert isinstance(event, PhaseTiming)
            totals[event.phase] = totals.get(event.phase, 0.0) + event.duration_ms
        return totals

    def summary(self) -> dict[str, Any]:
        """Counts by event class and by written-file kind, plus bytes written."""
        with self._lock:
            snapshot = list(self._events)

        files = [e for e in snapshot if isinstance(e, FileWritten)]
        return {
            "events": len(snapshot),
            "max_events": self._max_events,
            "by_type": dict(Counter(type(e).__name__ for e in snapshot)),
            "files": dict(Counter(f.kind for f in files)),
            "bytes_written": sum(f.size_bytes for f in files),
        }

    def clear(self) -> int:
        """Drop every event; return how many there were."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __iter__(self) -> Iterator[StackEvent]:
        with self._lock:
            return iter(list(self._events))
