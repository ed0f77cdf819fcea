"""Path resolution for ``@use`` / ``@forward`` module paths."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from utils.filesystem import (
    MANIFEST_NAME,
    dir_exists,
    file_exists,
    manifest_entry,
    read_manifest,
)
from .parser import BUILTIN_PREFIX, STYLE_EXTENSIONS, PARTIAL_MARKER


logger = logging.getLogger(__name__)

PACKAGE_DIR = "node_modules"
RELATIVE_MARKERS = ("./", "../")
INDEX_NAMES = ("_index", "index")


def resolve_module(
    module_path: str,
    current_file: Path,
    workspace_root: Path,
    include_paths: Sequence[Path] = (),
) -> Optional[Path]:
    """
    Resolve a module path to the stylesheet that backs it.

    Tries, depending on the shape of ``module_path``:
    1. Nothing for built-in modules (``sass:...``).
    2. Relative to the current file's directory (``./`` and ``../``).
    3. As a package in the nearest ``node_modules`` walking up to the
       workspace root, honouring the package manifest's entry field.
    4. Relative to each configured include path.

    Args:
        module_path: The string written in the declaration.
        current_file: The file containing the declaration.
        workspace_root: Upper bound of the ``node_modules`` walk.
        include_paths: Extra base directories for package-style paths.

    Returns:
        Path of the first existing candidate, or None.
    """
    logger.debug(f"Resolving module: {module_path} from {current_file}")

    if module_path.startswith(BUILTIN_PREFIX):
        logger.debug("Built-in module, skipping")
        return None

    if module_path.startswith(RELATIVE_MARKERS):
        return _resolve_relative(module_path, Path(current_file))

    resolved = _resolve_package(module_path, Path(current_file), Path(workspace_root))
    if resolved is not None:
        return resolved

    for include_path in include_paths:
        resolved = _first_existing(_package_candidates(_normalize(Path(include_path) / module_path)))
        if resolved is not None:
            logger.debug(f"Resolved via include path: {resolved}")
            return resolved

    logger.debug(f"Failed to resolve package: {module_path}")
    return None


def relative_candidates(base: Path) -> List[Path]:
    """
    Candidate files for a relative module path, in priority order.

    ``base`` is the module path joined onto the importing file's directory.
    """
    candidates = [_with_suffix(base, ext) for ext in STYLE_EXTENSIONS]
    for index_name in INDEX_NAMES:
        candidates.extend(base / f"{index_name}{ext}" for ext in STYLE_EXTENSIONS)
    candidates.extend(_partial_sibling(base, ext) for ext in STYLE_EXTENSIONS)
    return candidates


def _package_candidates(package_path: Path) -> List[Path]:
    """Candidate files inside (or next to) a package directory, in priority order."""
    candidates: List[Path] = []
    for ext in STYLE_EXTENSIONS:
        candidates.extend(package_path / f"{index_name}{ext}" for index_name in reversed(INDEX_NAMES))
    candidates.extend(_with_suffix(package_path, ext) for ext in STYLE_EXTENSIONS)
    candidates.extend(_partial_sibling(package_path, ext) for ext in STYLE_EXTENSIONS)
    return candidates


def _resolve_relative(module_path: str, current_file: Path) -> Optional[Path]:
    base = _normalize(current_file.parent / module_path)

    resolved = _first_existing(relative_candidates(base))
    if resolved is None:
        logger.debug(f"Failed to resolve relative path: {module_path}")
    return resolved


def _resolve_package(module_path: str, current_file: Path, workspace_root: Path) -> Optional[Path]:
    current_dir = _normalize(current_file.parent)
    workspace_root = _normalize(workspace_root)

    while True:
        package_dir = current_dir / PACKAGE_DIR
        if dir_exists(package_dir):
            resolved = _resolve_in_package_dir(module_path, package_dir)
            if resolved is not None:
                return resolved

        parent_dir = current_dir.parent
        # Stop at the workspace root or the file system root
        if parent_dir == current_dir or current_dir == workspace_root:
            break
        current_dir = parent_dir

    return None


def _resolve_in_package_dir(module_path: str, package_dir: Path) -> Optional[Path]:
    package_path = _normalize(package_dir / module_path)

    manifest_path = package_path / MANIFEST_NAME
    if file_exists(manifest_path):
        manifest = read_manifest(manifest_path)
        entry = manifest_entry(manifest) if manifest else None
        if entry:
            entry_path = _normalize(package_path / entry)
            if file_exists(entry_path):
                logger.debug(f"Resolved via {MANIFEST_NAME}: {entry_path}")
                return entry_path

    return _first_existing(_package_candidates(package_path))


def _first_existing(candidates: List[Path]) -> Optional[Path]:
    for candidate in candidates:
        if file_exists(candidate):
            logger.debug(f"Resolved to: {candidate}")
            return candidate
    return None


def _with_suffix(path: Path, extension: str) -> Path:
    # Path.with_suffix would replace dotted names such as "theme.dark"
    return path.parent / f"{path.name}{extension}"


def _partial_sibling(path: Path, extension: str) -> Path:
    return path.parent / f"{PARTIAL_MARKER}{path.name}{extension}"


def _normalize(path: Path) -> Path:
    """Collapse ``..`` segments without following symlinks."""
    return Path(os.path.normpath(str(path)))
