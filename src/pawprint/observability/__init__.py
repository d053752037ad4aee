"""Build observability — progress events, file records, and phase timings.

All events are frozen dataclasses with nanosecond timestamps, collected in
a bounded ``EventLog``.

Quick Start:
    >>> from pawprint.observability import BuildCollector, EventLog
    >>> log = EventLog()
    >>> collector = BuildCollector(log)
    >>> event = collector.notify("scan", "Scanning routes")

"""

from pawprint.observability.collector import BuildCollector
from pawprint.observability.events import (
    BuildEvent,
    FileWritten,
    PhaseTiming,
    StackEvent,
    now_ns,
)
from pawprint.observability.log import EventLog
from pawprint.observability.profiler import BuildContext, PhaseTimer

__all__ = [
    "BuildCollector",
    "BuildContext",
    "BuildEvent",
    "EventLog",
    "FileWritten",
    "PhaseTimer",
    "PhaseTiming",
    "StackEvent",
    "now_ns",
]
