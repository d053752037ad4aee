"""Output tree — the file sink every build phase writes through.

All paths given to ``OutputTree`` are relative to the output root, with or
without a leading slash.  Writes create missing directories and overwrite
existing files.  ``OSError`` is reported as ``FileWriteError``, and so is
any path that would land outside the output root (``..`` segments in a
discovered URL, for one).
"""

from __future__ import annotations

import fnmatch
import shutil
from collections.abc import Iterator
from pathlib import Path

from pawprint._errors import FileWriteError


class OutputTree:
    """Filesystem operations scoped to one output directory.

    Args:
        root: Absolute path of the output directory.

    """

    __slots__ = ("root",)

    def __init__(self, root: Path) -> None:
        self.root = root

    def path(self, *parts: str) -> Path:
        """Absolute path of a location inside the tree.

        Raises:
            FileWriteError: The location resolves outside the tree.

        """
        target = self.root
        for part in parts:
            stripped = part.strip("/")
            if stripped:
                target = target / stripped
        return self._contain(target)

    def _contain(self, target: Path) -> Path:
        if not target.resolve().is_relative_to(self.root.resolve()):
            raise FileWriteError(target, f"outside the output directory {self.root}")
        return target

    def exists(self, *parts: str) -> bool:
        return self.path(*parts).exists()

    def clear(self, *, protect: Path | None = None) -> None:
        """Remove the tree if present and recreate it empty.

        Args:
            protect: A directory that must survive, typically the project
                root.  Clearing is refused when the tree is that directory
                or one of its ancestors.

        """
        if protect is not None and protect.resolve().is_relative_to(self.root.resolve()):
            msg = f"refusing to clear a directory that contains {protect}"
            raise FileWriteError(self.root, msg)
        try:
            if self.root.exists():
                shutil.rmtree(self.root)
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileWriteError(self.root, str(exc)) from exc

    def mkdir(self, *parts: str) -> Path:
        target = self.path(*parts)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileWriteError(target, str(exc)) from exc
        return target

    def write(self, directory: str, filename: str, data: bytes) -> Path:
        """Create or overwrite ``directory/filename`` with *data*."""
        target = self.path(directory, filename)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise FileWriteError(target, str(exc)) from exc
        return target

    def copy_file(self, src: Path, dest: str) -> Path:
        """Copy a single file to *dest* inside the tree."""
        target = self.path(dest)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, target)
        except OSError as exc:
            raise FileWriteError(target, str(exc)) from exc
        return target

    def mirror(
        self,
        src: Path,
        dest: str,
        *,
        ignore_dot_files: bool = True,
        excludes: tuple[str, ...] = (),
    ) -> list[tuple[Path, Path]]:
        """Copy every selected file under *src* into *dest*.

        Returns ``(source, target)`` pairs in sorted source order.

        """
        copied: list[tuple[Path, Path]] = []
        dest_root = self.mkdir(dest)
        for src_file in iter_files(src, ignore_dot_files=ignore_dot_files, excludes=excludes):
            relative = src_file.relative_to(src)
            target = self._contain(dest_root / relative)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src_file, target)
            except OSError as exc:
                raise FileWriteError(target, str(exc)) from exc
            copied.append((src_file, target))
        return copied


def iter_files(
    src: Path,
    *,
    ignore_dot_files: bool = True,
    excludes: tuple[str, ...] = (),
) -> Iterator[Path]:
    """Yield files under *src* in sorted order, honouring dotfile and glob filters.

    Exclude patterns match the POSIX path relative to *src*; ``*`` also
    matches ``/``.

    """
    for src_file in sorted(src.rglob("*")):
        if not src_file.is_file():
            continue
        relative = src_file.relative_to(src)
        if ignore_dot_files and any(part.startswith(".") for part in relative.parts):
            continue
        posix = relative.as_posix()
        if any(fnmatch.fnmatchcase(posix, pattern) for pattern in excludes):
            continue
        yield src_file
