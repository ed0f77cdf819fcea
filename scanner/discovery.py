"""Stylesheet discovery for whole-workspace scans."""

from pathlib import Path
from typing import Iterator, Set, Optional

from .parser import STYLE_EXTENSIONS


DEFAULT_EXTENSIONS = set(STYLE_EXTENSIONS)
DEFAULT_EXCLUDE_DIRS = {
    ".git", ".hg", ".svn",
    "node_modules", ".sass-cache",
    "venv", ".venv",
    ".idea", ".vscode",
    "build", "dist", "*.egg-info",
}


def iter_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over stylesheets in a directory tree, in sorted order.

    Args:
        root: Root directory to scan.
        include_ext: Set of file extensions to include. If None, uses DEFAULT_EXTENSIONS.
        exclude_dirs: Set of directory names to skip. Entries starting with
                     ``*`` match directory name suffixes. If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Maximum depth to descend. None means unlimited.

    Yields:
        Path objects for matching files.
    """
    if include_ext is None:
        include_ext = DEFAULT_EXTENSIONS
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    suffix_patterns = [pat.lstrip("*") for pat in exclude_dirs if pat.startswith("*")]

    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if max_depth is not None and depth > max_depth:
            return

        try:
            entries = sorted(current.iterdir())
        except PermissionError:
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name in exclude_dirs:
                    continue
                if any(entry.name.endswith(suffix) for suffix in suffix_patterns):
                    continue
                yield from _walk(entry, depth + 1)
            elif entry.is_file() and entry.suffix.lower() in include_ext:
                yield entry

    yield from _walk(root, 0)
