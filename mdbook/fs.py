"""Filesystem helpers used while building a book."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Collection
from pathlib import Path, PurePath
from typing import BinaryIO

__all__ = [
    "normalize_path",
    "write_file",
    "path_to_root",
    "create_file",
    "remove_dir_content",
    "copy_files_except_ext",
    "get_404_output_file",
]

logger = logging.getLogger(__name__)

_SEPARATORS = {sep for sep in (os.sep, os.altsep) if sep}


def normalize_path(path: str) -> str:
    """Replace every path separator of this platform with a forward slash."""
    return "".join("/" if ch in _SEPARATORS else ch for ch in path)


def write_file(
    build_dir: str | os.PathLike[str],
    filename: str | os.PathLike[str],
    content: bytes | str,
) -> None:
    """Write ``content`` to ``build_dir/filename``, creating directories as needed."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    with create_file(Path(build_dir) / filename) as handle:
        handle.write(content)


def path_to_root(path: str | os.PathLike[str]) -> str:
    """Return just enough ``../`` to climb from ``path``'s directory back to its start.

    >>> path_to_root("some/relative/path")
    '../../'
    """
    pure = PurePath(path)
    if not os.fspath(path) or (pure.anchor and pure == PurePath(pure.anchor)):
        raise ValueError(f"path {os.fspath(path)!r} has no parent")
    parent = pure.parent
    climbs = []
    for part in parent.parts:
        if part in (parent.anchor, ".", ".."):
            logger.debug("Other path component... %r", part)
            continue
        climbs.append("../")
    return "".join(climbs)


def create_file(path: str | os.PathLike[str]) -> BinaryIO:
    """Create (or truncate) ``path`` for binary writing, making parent directories first."""
    target = Path(path)
    logger.debug("Creating %s", target)
    parent = target.parent
    logger.debug("Parent directory is: %s", parent)
    parent.mkdir(parents=True, exist_ok=True)
    return target.open("wb")


def remove_dir_content(directory: str | os.PathLike[str]) -> None:
    """Remove everything inside ``directory`` but keep the directory itself."""
    for item in Path(directory).iterdir():
        if item.is_dir() and not item.is_symlink():
            shutil.rmtree(item)
        else:
            item.unlink()


def copy_files_except_ext(
    source: str | os.PathLike[str],
    dest: str | os.PathLike[str],
    recursive: bool = True,
    avoid_dir: str | os.PathLike[str] | None = None,
    ext_blacklist: Collection[str] = (),
) -> None:
    """Copy the files of ``source`` into ``dest``, skipping blacklisted extensions.

    Directories are descended into when ``recursive`` is true, except ``dest``
    itself and ``avoid_dir``.
    """
    source_path = Path(source)
    dest_path = Path(dest)
    avoid = Path(avoid_dir) if avoid_dir is not None else None
    logger.debug(
        "Copying all files from %s to %s (blacklist: %r), avoiding %r",
        source_path,
        dest_path,
        list(ext_blacklist),
        avoid,
    )

    if source_path == dest_path:
        return

    for entry in source_path.iterdir():
        try:
            metadata = entry.stat()
        except OSError as exc:
            raise OSError(f"Failed to read {entry}") from exc

        target = dest_path / entry.name

        if _is_dir(metadata) and recursive:
            if entry == dest_path or (avoid is not None and entry == avoid):
                continue
            if not target.exists():
                target.mkdir()
            copy_files_except_ext(entry, target, True, avoid_dir, ext_blacklist)
        elif _is_file(metadata):
            extension = entry.suffix[1:]
            if extension and extension in ext_blacklist:
                continue
            logger.debug("Copying %s to %s", entry, target)
            _copy(entry, target)


def _is_dir(metadata: os.stat_result) -> bool:
    import stat

    return stat.S_ISDIR(metadata.st_mode)


def _is_file(metadata: os.stat_result) -> bool:
    import stat

    return stat.S_ISREG(metadata.st_mode)


def _copy(source: Path, target: Path) -> None:
    try:
        shutil.copy(source, target)
    except OSError as exc:
        raise OSError(f"failed to copy `{source}` to `{target}`") from exc


def get_404_output_file(input_404: str | None) -> str:
    """Return the name of the HTML file served for HTTP 404 "not found"."""
    name = input_404 if input_404 is not None else "404.md"
    return name.replace(".md", ".html")