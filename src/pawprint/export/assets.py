"""Asset copying — mirror configured files and directories into the output.

Each ``CopyEntry`` names a source file or directory.  Directories are
mirrored (minus dotfiles and excluded globs), files are copied as-is.  A
missing source either aborts the build or is logged and skipped, depending
on ``fail_if_missing``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pawprint._errors import AssetMissingError

if TYPE_CHECKING:
    from pathlib import Path

    from pawprint.config import CopyEntry
    from pawprint.export.files import OutputTree
    from pawprint.observability.collector import BuildCollector

logger = logging.getLogger("pawprint.copy")


def copy_entries(
    entries: Iterable[CopyEntry],
    tree: OutputTree,
    *,
    root: Path,
    collector: BuildCollector | None = None,
) -> int:
    """Copy every entry into *tree* and return the number of files copied.

    Relative entry sources are resolved against *root*.

    Raises:
        AssetMissingError: If a source with ``fail_if_missing`` is neither a
            file nor a directory.

    """
    count = 0
    for entry in entries:
        src = entry.src if entry.src.is_absolute() else root / entry.src
        dest = entry.destination

        if src.is_dir():
            t0 = time.perf_counter()
            copied = tree.mirror(
                src,
                dest,
                ignore_dot_files=entry.ignore_dot_files,
                excludes=entry.excludes,
            )
            elapsed = (time.perf_counter() - t0) * 1000
            if collector is not None:
                per_file = elapsed / len(copied) if copied else 0.0
                for source, target in copied:
                    collector.record_file(
                        "asset",
                        str(source),
                        target,
                        size_bytes=target.stat().st_size,
                        duration_ms=per_file,
                    )
            logger.debug('Mirrored "%s" to "%s" (%d files)', src, dest, len(copied))
            count += len(copied)
            continue

        if not src.is_file():
            if entry.fail_if_missing:
                raise AssetMissingError(src)
            logger.warning(
                'Failed to copy "%s" because the path is neither a file or a directory.',
                src,
            )
            continue

        t0 = time.perf_counter()
        target = tree.copy_file(src, dest)
        if collector is not None:
            collector.record_file(
                "asset",
                str(src),
                target,
                size_bytes=target.stat().st_size,
                duration_ms=(time.perf_counter() - t0) * 1000,
            )
        logger.debug('Copied "%s" to "%s"', src, dest)
        count += 1

    return count
