"""Read-through cache of file contents keyed by path."""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileCache:
    """
    Process-wide file content cache.

    Entries live until the owning editor session reports that the document
    changed or was deleted, or until the session ends and the cache is cleared.
    """

    def __init__(self):
        self._entries: Dict[Path, str] = {}

    def get(self, file_path: PathLike) -> Optional[str]:
        content = self._entries.get(Path(file_path))
        if content is None:
            logger.debug(f"Cache miss: {file_path}")
            return None
        logger.debug(f"Cache hit: {file_path}")
        return content

    def set(self, file_path: PathLike, content: str) -> None:
        self._entries[Path(file_path)] = content
        logger.debug(f"Cache set: {file_path}")

    def invalidate(self, file_path: PathLike) -> bool:
        """Drop one entry. Returns True if something was removed."""
        removed = self._entries.pop(Path(file_path), None) is not None
        if removed:
            logger.debug(f"Cache invalidated: {file_path}")
        return removed

    def on_document_changed(self, file_path: PathLike) -> None:
        self.invalidate(file_path)

    def on_files_deleted(self, file_paths: Iterable[PathLike]) -> None:
        for file_path in file_paths:
            self.invalidate(file_path)

    def clear(self) -> None:
        self._entries.clear()
        logger.info("Cache cleared")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, file_path: PathLike) -> bool:
        return Path(file_path) in self._entries


file_cache = FileCache()
