"""ASCII tree-style exporter for module graphs."""

from pathlib import Path
from typing import List, Optional, Set, Tuple

from graph.model import ModuleGraph


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_ascii(
    graph: ModuleGraph,
    root: Path,
    base: Optional[Path] = None,
    style: str = "tree",
    include_missing: bool = True,
    include_builtins: bool = False,
) -> str:
    """
    Convert a module graph to an ASCII tree, one tree per entry stylesheet.

    Each child line shows how the module was loaded (``@use as x`` or
    ``@forward as p-*``). Modules already open higher up the same branch are
    marked ``[*]`` and not expanded again.

    Args:
        graph: The module graph to export.
        root: Workspace root for relative paths.
        base: Optional base path for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        include_missing: If True, show unresolved module paths.
        include_builtins: If True, show built-in modules.

    Returns:
        ASCII tree string.
    """
    if base is None:
        base = root

    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    root_nodes = sorted(graph.get_roots())
    # Pure cycles have no entry point; start from every node with edges instead
    if not root_nodes:
        root_nodes = sorted(node for node in graph.nodes if graph.get_targets(node))
    if not root_nodes:
        root_nodes = sorted(graph.nodes)

    lines: List[str] = []
    for i, root_node in enumerate(root_nodes):
        _render_node(
            graph=graph,
            node=root_node,
            label="",
            base=base,
            root=root,
            prefix="",
            is_last=True,
            chars=chars,
            visiting=set(),
            lines=lines,
            is_root=True,
            include_missing=include_missing,
            include_builtins=include_builtins,
        )
        if i < len(root_nodes) - 1:
            lines.append("")

    return "\n".join(lines)


def _render_node(
    graph: ModuleGraph,
    node: Path,
    label: str,
    base: Path,
    root: Path,
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    visiting: Set[Path],
    lines: List[str],
    is_root: bool = False,
    include_missing: bool = True,
    include_builtins: bool = False,
) -> None:
    """Recursively render a module and the modules it loads."""
    branch, last, vertical, space = chars

    display_path = _get_display_path(node, base, root)
    is_cycle = node in visiting
    suffix = f"  ({label})" if label else ""
    cycle_marker = " [*]" if is_cycle else ""

    if is_root:
        lines.append(f"{display_path}{cycle_marker}")
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{display_path}{cycle_marker}{suffix}")

    if is_cycle:
        return

    visiting.add(node)

    child_prefix = "" if is_root else prefix + (space if is_last else vertical)
    edges = graph.get_edges(node)
    leaves: List[str] = []
    if include_missing:
        leaves.extend(f"{module_path} [MISSING]" for module_path in sorted(graph.get_missing(node)))
    if include_builtins:
        leaves.extend(f"{module_path} [BUILTIN]" for module_path in sorted(graph.get_builtins(node)))

    total_items = len(edges) + len(leaves)
    for index, edge in enumerate(edges, start=1):
        _render_node(
            graph=graph,
            node=edge.target,
            label=edge.describe(),
            base=base,
            root=root,
            prefix=child_prefix,
            is_last=(index == total_items),
            chars=chars,
            visiting=visiting,
            lines=lines,
            include_missing=include_missing,
            include_builtins=include_builtins,
        )

    for index, leaf in enumerate(leaves, start=len(edges) + 1):
        connector = last if index == total_items else branch
        lines.append(f"{child_prefix}{connector}{leaf}")

    # Leave the branch so the module can still appear under its siblings
    visiting.discard(node)


def _get_display_path(node: Path, base: Path, root: Path) -> str:
    """Get the display path for a node."""
    try:
        rel_path = node.resolve().relative_to(base.resolve())
        return str(rel_path).replace("\\", "/")
    except ValueError:
        try:
            rel_path = node.resolve().relative_to(root.resolve())
            return str(rel_path).replace("\\", "/")
        except ValueError:
            return str(node).replace("\\", "/")
