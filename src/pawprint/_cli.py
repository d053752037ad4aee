"""Pawprint CLI — pawprint build.

Entry point for the ``pawprint`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pawprint CLI."""
    parser = argparse.ArgumentParser(
        prog="pawprint",
        description="Render a chirp application to a static site.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    build_parser = subparsers.add_parser(
        "build",
        help="Export the application as static files",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument(
        "--base-url", default=None, help="Absolute URL the site will be served from",
    )
    build_parser.add_argument(
        "--no-sitemap", dest="sitemap", action="store_false", default=None,
        help="Do not write sitemap.xml",
    )
    build_parser.add_argument(
        "--no-expose", dest="expose", action="store_false", default=None,
        help="Do not copy static files",
    )
    build_parser.add_argument(
        "--crawl", action="store_true", default=None,
        help="Follow same-site links found in rendered pages",
    )
    build_parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log build steps (-vv for every page)",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from pawprint import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """Config overrides for the options given on the command line."""
    names = ("output", "base_url", "sitemap", "expose", "crawl")
    return {name: getattr(args, name) for name in names if getattr(args, name) is not None}


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="  %(levelname)-7s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from pawprint._errors import PawprintError
    from pawprint.app import build

    _configure_logging(args.verbose)

    if args.command == "build":
        try:
            build(root=args.root, **_overrides(args))
        except PawprintError as exc:
            print(f"  Build failed: {exc}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
