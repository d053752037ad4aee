"""Build banner and summary — status output on stderr.

Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprint.config import PawprintConfig
    from pawprint.observability.collector import BuildCollector


# ---------------------------------------------------------------------------
# ANSI helpers: respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_ORANGE = "\033[38;5;214m" if _COLOR else ""


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: PawprintConfig,
    route_count: int,
    *,
    load_ms: float = 0.0,
) -> None:
    """Print the build banner to stderr.

    Args:
        config: Resolved PawprintConfig.
        route_count: Number of routes declared.
        load_ms: Time spent loading routes in milliseconds.

    """
    from pawprint import __version__

    paw = "\U0001F43E"  # paw prints
    header = (
        f"  {_ORANGE}{_BOLD}{paw}{_RESET}  pawprint {_DIM}v{__version__}{_RESET}"
        f"  {_YELLOW}[build]{_RESET}"
    )

    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
        f"  {_DIM}├─{_RESET} {_plural(route_count, 'route')} loaded{timing}",
        f"  {_DIM}├─{_RESET} base url: {_DIM}{config.base_url}{_RESET}",
    ]

    features = [
        name for name, on in (
            ("sitemap", config.sitemap),
            ("copy", config.expose),
            ("crawl", config.crawl),
        ) if on
    ]
    if features:
        lines.append(f"  {_DIM}├─{_RESET} {', '.join(features)}")

    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")
    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def print_summary(
    config: PawprintConfig,
    collector: BuildCollector,
    *,
    pages: int,
    duration_ms: float,
    skipped: int = 0,
) -> None:
    """Print the build completion summary to stderr.

    Counts come from the collector's running totals, not its bounded log.
    *skipped* is the number of parameterized routes the scan left out.

    """
    from pawprint.observability.profiler import format_memory, format_time

    assets = collector.file_count("asset")
    timings = collector.phase_durations()
    lines = [
        "",
        "─" * 41,
        f"  {_GREEN}Built {_plural(pages, 'page')}{_RESET}",
    ]
    if assets > 0:
        lines.append(f"  Copied {_plural(assets, 'asset')}")
    if collector.file_count("sitemap"):
        lines.append("  Wrote sitemap.xml")
    if skipped > 0:
        lines.append(
            f"  {_YELLOW}Skipped {_plural(skipped, 'route')} with URL parameters{_RESET}",
        )
    written = format_memory(collector.bytes_written)
    lines.append(f"  Output: {config.output_path} {_DIM}({written}){_RESET}")
    if timings:
        phases = ", ".join(f"{name} {format_time(ms)}" for name, ms in timings.items())
        lines.append(f"  {_DIM}{phases}{_RESET}")
    lines.append(f"  Done in {duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)
