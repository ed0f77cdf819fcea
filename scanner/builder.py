"""Module graph builder that orchestrates scanning and resolution."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Set

from graph.model import ModuleGraph, USE, FORWARD
from utils.filesystem import read_file
from .discovery import iter_files
from .parser import scan_imports, scan_reexports, is_builtin_module
from .resolver import resolve_module


logger = logging.getLogger(__name__)


def build_graph(
    root: Path,
    entry: Optional[Path] = None,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
    include_paths: Sequence[Path] = (),
) -> ModuleGraph:
    """
    Build the ``@use`` / ``@forward`` graph of a workspace.

    Args:
        root: Workspace root directory (also bounds package resolution).
        entry: If given, only modules reachable from this stylesheet are scanned.
        include_ext: Stylesheet extensions to scan when walking the workspace.
        exclude_dirs: Directory names to skip when walking the workspace.
        max_depth: Maximum directory depth when walking the workspace.
        include_paths: Extra base directories for package resolution.

    Returns:
        ModuleGraph of every scanned module.
    """
    graph = ModuleGraph()
    root = Path(os.path.normpath(str(root.absolute())))

    if entry is not None:
        pending: List[Path] = [Path(os.path.normpath(str(entry.absolute())))]
        follow = True
    else:
        pending = list(iter_files(root, include_ext, exclude_dirs, max_depth))
        follow = False

    scanned: Set[Path] = set()
    while pending:
        file_path = pending.pop(0)
        if file_path in scanned:
            continue
        scanned.add(file_path)
        graph.add_node(file_path)

        try:
            content = read_file(file_path)
        except (OSError, UnicodeDecodeError):
            logger.warning(f"Skipping unreadable module: {file_path}")
            continue

        for target in _add_module_edges(graph, file_path, content, root, include_paths):
            if follow and target not in scanned:
                pending.append(target)

    logger.info(f"Built {graph!r}")
    return graph


def _add_module_edges(
    graph: ModuleGraph,
    file_path: Path,
    content: str,
    root: Path,
    include_paths: Sequence[Path],
) -> List[Path]:
    """Record the edges of one module and return the resolved targets."""
    targets: List[Path] = []
    declarations = [(USE, d.path, d.alias) for d in scan_imports(content)]
    declarations += [(FORWARD, d.path, d.prefix) for d in scan_reexports(content)]

    for kind, module_path, label in declarations:
        if is_builtin_module(module_path):
            graph.add_builtin(file_path, module_path)
            continue

        resolved = resolve_module(module_path, file_path, root, include_paths)
        if resolved is None:
            graph.add_missing(file_path, module_path)
        elif resolved != file_path:
            graph.add_edge(file_path, resolved, kind, label)
            targets.append(resolved)

    return targets
