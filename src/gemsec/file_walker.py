"""Resolve scan targets into (identifier, text) pairs."""

import logging
import os
from pathlib import Path
from typing import Generator

from .models import FileError

logger = logging.getLogger(__name__)

SKIP_DIRS: frozenset[str] = frozenset({
    "node_modules",
    "bower_components",
    "dist",
    "build",
    "out",
    "coverage",
    "vendor",
    "__pycache__",
    "venv",
})

SOURCE_EXTENSIONS: frozenset[str] = frozenset({
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs",
})

PROJECT_ROOT_MARKERS = ("package.json", "pnpm-workspace.yaml", "yarn.lock", ".git")

DEFAULT_MAX_FILE_BYTES = 500_000


def should_skip_dir(name: str) -> bool:
    """Hidden directories (.git, .next, ...) and dependency/build output are skipped."""
    return name.startswith(".") or name in SKIP_DIRS


def is_source_file(name: str) -> bool:
    """Check whether a file name has a JavaScript/TypeScript extension."""
    return Path(name).suffix.lower() in SOURCE_EXTENSIONS


def walk_source_files(path: str | Path) -> Generator[Path, None, None]:
    """Walk a project tree yielding JavaScript/TypeScript source files.

    Args:
        path: Root directory to walk.

    Yields:
        Path objects for matching source files, in sorted order.
    """
    path = Path(path)
    if not path.is_dir():
        return

    for root, dirs, files in os.walk(path):
        dirs[:] = sorted(d for d in dirs if not should_skip_dir(d))
        for fname in sorted(files):
            if is_source_file(fname):
                yield Path(root) / fname


def read_source(path: Path, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> str:
    """Read a source file.

    Raises:
        ValueError: If the file is larger than ``max_bytes``.
        OSError: If the file cannot be read.
    """
    size = path.stat().st_size
    if size > max_bytes:
        raise ValueError(f"File is {size} bytes, larger than the {max_bytes} byte limit")
    return path.read_text(encoding="utf-8", errors="ignore")


def collect_source_files(
    target: str | Path,
    max_bytes: int = DEFAULT_MAX_FILE_BYTES,
) -> tuple[list[tuple[str, str]], list[FileError]]:
    """
    Resolve a file or directory into ``(identifier, text)`` pairs.

    A file target is returned as-is, whatever its extension. A directory is
    walked with the extension and directory filters applied.

    Returns:
        The readable files, and a FileError for each file that was skipped
        because it was too large or unreadable.

    Raises:
        ValueError: If the target does not exist.
    """
    target = Path(target)
    if not target.exists():
        raise ValueError(f"Path does not exist: {target}")

    if target.is_file():
        paths = [target]
    else:
        paths = list(walk_source_files(target))

    files: list[tuple[str, str]] = []
    skipped: list[FileError] = []
    for path in paths:
        try:
            files.append((str(path), read_source(path, max_bytes)))
        except (ValueError, OSError) as e:
            logger.warning(f"Skipping {path}: {e}")
            skipped.append(FileError(file_path=str(path), error=f"Skipped: {e}"))

    logger.info(f"Collected {len(files)} source file(s) from {target}, skipped {len(skipped)}")
    return files, skipped


def resolve_project_root(target: str | Path) -> Path:
    """Find the nearest ancestor of ``target`` that looks like a project root.

    Falls back to the filesystem root reached while climbing, or to the
    parent directory when the target does not exist.
    """
    candidate = Path(target).resolve()
    if not candidate.exists():
        return candidate.parent
    if candidate.is_file():
        candidate = candidate.parent

    while True:
        if any((candidate / marker).exists() for marker in PROJECT_ROOT_MARKERS):
            return candidate
        if candidate.parent == candidate:
            return candidate
        candidate = candidate.parent
