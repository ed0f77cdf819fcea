"""JSON exporters for resolution results and module graphs (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from graph.model import ModuleGraph
from graph.records import Location
from providers.completion import CompletionCandidate


def location_to_json(
    location: Optional[Location],
    root: Path,
    base: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a definition lookup result to JSON.

    A missing definition is rendered as ``{"found": false}``.
    """
    if base is None:
        base = root

    if location is None:
        return json.dumps({"found": False}, indent=indent)

    data: Dict[str, Any] = {
        "found": True,
        "file": _get_path_str(location.file_path, base, root),
        "line": location.line,
        "column": location.column,
    }
    return json.dumps(data, indent=indent)


def candidates_to_json(candidates: Sequence[CompletionCandidate], indent: int = 2) -> str:
    """Convert completion candidates to a JSON array."""
    items: List[Dict[str, Any]] = []
    for candidate in candidates:
        item: Dict[str, Any] = {
            "label": candidate.label,
            "kind": candidate.kind.value,
            "insertText": candidate.insert_text,
            "detail": candidate.detail,
        }
        if candidate.replace_range is not None:
            item["range"] = {
                "start": {"line": candidate.replace_range.start.line,
                          "character": candidate.replace_range.start.character},
                "end": {"line": candidate.replace_range.end.line,
                        "character": candidate.replace_range.end.character},
            }
        if candidate.filter_text is not None:
            item["filterText"] = candidate.filter_text
        items.append(item)

    return json.dumps(items, indent=indent)


def to_json(
    graph: ModuleGraph,
    root: Path,
    base: Optional[Path] = None,
    indent: int = 2,
    include_missing: bool = True,
    include_builtins: bool = True,
) -> str:
    """
    Convert a module graph to JSON format.

    Args:
        graph: The module graph to export.
        root: Workspace root for relative paths.
        base: Optional base path for relative path display.
        indent: JSON indentation level.
        include_missing: If True, include unresolved module paths.
        include_builtins: If True, include built-in module references.

    Returns:
        JSON string representation of the graph.
    """
    if base is None:
        base = root

    nodes: List[str] = [_get_path_str(node, base, root) for node in sorted(graph.nodes)]

    edges: List[Dict[str, Any]] = []
    for source, edge in graph.iter_edges():
        entry: Dict[str, Any] = {
            "source": _get_path_str(source, base, root),
            "target": _get_path_str(edge.target, base, root),
            "kind": edge.kind,
        }
        if edge.label:
            entry["alias" if edge.kind == "use" else "prefix"] = edge.label
        edges.append(entry)

    if include_missing:
        for source, module_path in graph.iter_missing():
            edges.append({
                "source": _get_path_str(source, base, root),
                "target": module_path,
                "missing": True,
            })

    if include_builtins:
        for source, module_path in graph.iter_builtins():
            edges.append({
                "source": _get_path_str(source, base, root),
                "target": module_path,
                "builtin": True,
            })

    return json.dumps({"nodes": nodes, "edges": edges}, indent=indent)


def _get_path_str(path: Path, base: Path, root: Path) -> str:
    """Get the string representation of a path."""
    try:
        rel_path = path.resolve().relative_to(base.resolve())
        return str(rel_path).replace("\\", "/")
    except ValueError:
        try:
            rel_path = path.resolve().relative_to(root.resolve())
            return str(rel_path).replace("\\", "/")
        except ValueError:
            return str(path).replace("\\", "/")
