"""Pawprint configuration.

PawprintConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit

from pawprint._errors import ConfigError


@dataclass(frozen=True, slots=True)
class CopyEntry:
    """One file or directory to copy into the output tree.

    Attributes:
        src: Source file or directory, relative to the project root unless
            absolute.
        dest: Destination relative to the output root.  Defaults to the
            base name of ``src``.
        fail_if_missing: Abort the build when ``src`` does not exist.
            Otherwise a warning is logged and the entry is skipped.
        ignore_dot_files: Skip files and directories whose name starts
            with ``.`` when mirroring a directory.
        excludes: Glob patterns matched against each file's path relative
            to ``src`` (``*`` also matches ``/``).

    """

    src: Path
    dest: str | None = None
    fail_if_missing: bool = True
    ignore_dot_files: bool = True
    excludes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.src, Path):
            object.__setattr__(self, "src", Path(self.src))
        if isinstance(self.excludes, str):
            # A single pattern, not a sequence of one-character patterns
            object.__setattr__(self, "excludes", (self.excludes,))
        elif not isinstance(self.excludes, tuple):
            object.__setattr__(self, "excludes", tuple(self.excludes))

    @property
    def destination(self) -> str:
        """Destination relative to the output root."""
        return self.dest if self.dest is not None else self.src.name


def _default_copy() -> tuple[CopyEntry, ...]:
    return (CopyEntry(src=Path("static"), fail_if_missing=False),)


@dataclass(frozen=True, slots=True)
class PawprintConfig:
    """Configuration for a pawprint build.

    Attributes:
        root: Path to the project root (contains routes/, static/, etc.).
              Always resolved to an absolute path on construction.
        output: Output directory for the static build.
        base_url: Absolute URL the site is served from, including an
            optional base path (``https://example.com/docs``).  Every
            entrypoint URL and sitemap location starts with it.
        routes_dir: Directory containing route modules.
        sitemap: Write ``sitemap.xml`` after all pages are built.
        expose: Copy the ``copy`` entries into the output tree.
        crawl: Follow same-site links found in rendered HTML.
        copy: Files and directories to copy into the output tree.

    """

    root: Path = field(default_factory=Path.cwd)
    output: Path = field(default_factory=lambda: Path("build"))
    base_url: str = "http://localhost"
    routes_dir: str = "routes"
    sitemap: bool = True
    expose: bool = True
    crawl: bool = False
    copy: tuple[CopyEntry, ...] = field(default_factory=_default_copy)

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

        parts = urlsplit(self.base_url)
        if not parts.scheme or not parts.netloc:
            msg = f"base_url must be an absolute URL, got {self.base_url!r}"
            raise ConfigError(msg)
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def routes_path(self) -> Path:
        """Absolute path to route modules directory."""
        return self.root / self.routes_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

