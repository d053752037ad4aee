"""Work queue — deduplicated, insertion-ordered list of URLs to build.

Every URL is in exactly one of three states: unknown, pending, or done.
``add`` moves unknown URLs to the tail of pending; ``get_next`` pops the
head; ``mark_as_done`` moves a URL to done for good.  A done URL can never
become pending again, which breaks link cycles between pages.

``add`` may be called while the queue is being drained: URLs added while a
page renders are returned by later ``get_next`` calls.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pawprint._types import URL


class LinkSink(Protocol):
    """Add-only view of a work queue, handed to render engines."""

    def add(self, url: URL) -> None: ...


class _QueueSink:
    """Exposes only ``WorkQueue.add``."""

    __slots__ = ("_add",)

    def __init__(self, queue: WorkQueue) -> None:
        self._add = queue.add

    def add(self, url: URL) -> None:
        self._add(url)


class WorkQueue:
    """FIFO worklist of URLs with set semantics.

    Not thread-safe: a queue belongs to a single build.

    """

    __slots__ = ("_done", "_pending")

    def __init__(self) -> None:
        self._pending: OrderedDict[str, None] = OrderedDict()
        self._done: set[str] = set()

    def add(self, url: URL) -> None:
        """Queue *url* unless it is already pending or done."""
        if url in self._done or url in self._pending:
            return
        self._pending[url] = None

    def get_next(self) -> URL | None:
        """Pop the oldest pending URL, or return *None* when drained."""
        if not self._pending:
            return None
        url, _ = self._pending.popitem(last=False)
        return url

    def mark_as_done(self, url: URL) -> None:
        """Record *url* as built.  Idempotent."""
        self._pending.pop(url, None)
        self._done.add(url)

    def is_done(self, url: URL) -> bool:
        return url in self._done

    def pending_count(self) -> int:
        return len(self._pending)

    def done_count(self) -> int:
        return len(self._done)

    def total_count(self) -> int:
        return len(self._pending) + len(self._done)

    def __len__(self) -> int:
        return self.total_count()

    def sink(self) -> LinkSink:
        """An add-only handle on this queue."""
        return _QueueSink(self)
