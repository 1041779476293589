"""File system access used by the xcconfig parser.

The parser only needs to open a file for reading, probe whether a path
exists and join an include name onto a base path. :class:`FileSystem`
captures exactly that; :class:`LocalFileSystem` serves it from disk and
:class:`MemoryFileSystem` from a dict of path -> text.
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol, TextIO, Union

logger = logging.getLogger("xcconfparse.fs")

PathLike = Union[str, Path]


class InvalidPathError(ValueError):
    """Raised when a path cannot be formed from the given components."""

    pass


class FileSystem(Protocol):
    """Narrow read-only file system interface consumed by the parser."""

    def reader_if_exists(self, path: Path) -> Optional[TextIO]:
        """Open ``path`` for reading, or return None when it does not exist."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True when ``path`` names an existing file."""
        ...

    def resolve_sibling(self, base_path: Path, relative_path: str) -> Path:
        """Resolve ``relative_path`` against the directory containing ``base_path``.

        Raises:
            InvalidPathError: If the combination does not form a valid path.
        """
        ...

    def resolve(self, directory: Path, relative_path: str) -> Path:
        """Resolve ``relative_path`` against ``directory``.

        Raises:
            InvalidPathError: If the combination does not form a valid path.
        """
        ...


def _check_component(relative_path: str) -> None:
    if not relative_path:
        raise InvalidPathError("Empty path")
    if "\x00" in relative_path:
        raise InvalidPathError(f"Path contains NUL character: {relative_path!r}")


class LocalFileSystem:
    """FileSystem backed by the local disk.

    Relative paths are anchored at ``root`` (the current working directory
    by default) and all returned paths are normalized but not
    symlink-resolved.
    """

    def __init__(self, root: Optional[PathLike] = None, encoding: str = "utf-8") -> None:
        self.root = Path(root) if root is not None else Path.cwd()
        self.encoding = encoding

    def _absolute(self, path: PathLike) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = self.root / path
        return Path(os.path.normpath(path))

    def reader_if_exists(self, path: Path) -> Optional[TextIO]:
        target = self._absolute(path)
        if not target.is_file():
            return None
        logger.debug("Opening %s", target)
        return open(target, "r", encoding=self.encoding)

    def exists(self, path: Path) -> bool:
        return self._absolute(path).is_file()

    def resolve_sibling(self, base_path: Path, relative_path: str) -> Path:
        _check_component(relative_path)
        return self._absolute(self._absolute(base_path).parent / relative_path)

    def resolve(self, directory: Path, relative_path: str) -> Path:
        _check_component(relative_path)
        return self._absolute(self._absolute(directory) / relative_path)


class MemoryFileSystem:
    """FileSystem serving files from an in-memory mapping.

    Relative keys and lookups are anchored at the virtual root ``/``, so
    ``"configs/a.xcconfig"`` and ``"/configs/a.xcconfig"`` name the same file.
    """

    def __init__(self, files: Optional[Mapping[PathLike, str]] = None) -> None:
        self._files: Dict[Path, str] = {}
        for path, text in (files or {}).items():
            self.add_file(path, text)

    @staticmethod
    def _normalize(path: PathLike) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = Path("/") / path
        return Path(os.path.normpath(path))

    def add_file(self, path: PathLike, text: str) -> Path:
        """Register ``text`` as the contents of ``path`` and return its key."""
        key = self._normalize(path)
        self._files[key] = text
        return key

    def reader_if_exists(self, path: Path) -> Optional[TextIO]:
        text = self._files.get(self._normalize(path))
        if text is None:
            return None
        return io.StringIO(text)

    def exists(self, path: Path) -> bool:
        return self._normalize(path) in self._files

    def resolve_sibling(self, base_path: Path, relative_path: str) -> Path:
        _check_component(relative_path)
        return self._normalize(self._normalize(base_path).parent / relative_path)

    def resolve(self, directory: Path, relative_path: str) -> Path:
        _check_component(relative_path)
        return self._normalize(self._normalize(directory) / relative_path)


__all__ = [
    "FileSystem",
    "InvalidPathError",
    "LocalFileSystem",
    "MemoryFileSystem",
]
