"""File system access used by the resolvers: cached reads, existence checks, manifests."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .cache import FileCache, file_cache


logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"

# Manifest fields naming a stylesheet entry point, in priority order
MANIFEST_ENTRY_FIELDS = ("sass", "style")


def read_file(file_path: Path, cache: Optional[FileCache] = None) -> str:
    """
    Read a text file through the content cache.

    Raises:
        OSError: If the file does not exist or cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    if cache is None:
        cache = file_cache

    cached = cache.get(file_path)
    if cached is not None:
        return cached

    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.error(f"Failed to read file: {file_path}")
        raise

    cache.set(file_path, content)
    return content


def file_exists(file_path: Path) -> bool:
    """Check that a regular file exists. Never raises."""
    try:
        return Path(file_path).is_file()
    except (OSError, ValueError):
        return False


def dir_exists(dir_path: Path) -> bool:
    """Check that a directory exists. Never raises."""
    try:
        return Path(dir_path).is_dir()
    except (OSError, ValueError):
        return False


def read_manifest(manifest_path: Path) -> Optional[Dict[str, Any]]:
    """
    Read a package manifest.

    Returns:
        The decoded JSON object, or None if the file is missing, unreadable,
        not valid JSON, or not a JSON object.
    """
    try:
        data = json.loads(read_file(manifest_path))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.debug(f"Failed to read package manifest: {manifest_path}")
        return None

    if not isinstance(data, dict):
        logger.debug(f"Package manifest is not an object: {manifest_path}")
        return None
    return data


def manifest_entry(manifest: Dict[str, Any]) -> Optional[str]:
    """Return the first non-empty stylesheet entry field of a manifest."""
    for field_name in MANIFEST_ENTRY_FIELDS:
        value = manifest.get(field_name)
        if isinstance(value, str) and value:
            return value
    return None
