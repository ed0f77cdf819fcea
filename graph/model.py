"""Graph data model for stylesheet module relationships."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple


USE = "use"
FORWARD = "forward"


@dataclass(frozen=True)
class ModuleEdge:
    """
    A resolved ``@use`` or ``@forward`` edge.

    ``label`` is the alias for ``use`` edges and the prefix (or ``None``) for
    ``forward`` edges.
    """

    target: Path
    kind: str
    label: Optional[str] = None

    def describe(self) -> str:
        if self.kind == USE:
            return f"@use as {self.label}"
        if self.label:
            return f"@forward as {self.label}*"
        return "@forward"


def _edge_key(edge: ModuleEdge) -> Tuple[Path, str, str]:
    return edge.target, edge.kind, edge.label or ""


class ModuleGraph:
    """
    A directed graph of stylesheet modules.

    Nodes are file paths, and edges represent 'source -> loaded module'
    relationships. Unresolved module paths and built-in modules are tracked
    separately.
    """

    def __init__(self):
        self._nodes: Set[Path] = set()
        self._edges: Dict[Path, Set[ModuleEdge]] = {}
        self._missing: Dict[Path, Set[str]] = {}  # source -> unresolved module paths
        self._builtins: Dict[Path, Set[str]] = {}  # source -> "sass:..." modules

    @property
    def nodes(self) -> Set[Path]:
        """Return all nodes in the graph."""
        return self._nodes.copy()

    def add_node(self, node: Path) -> None:
        self._nodes.add(node)

    def add_edge(self, source: Path, target: Path, kind: str = USE, label: Optional[str] = None) -> None:
        """
        Add a directed edge from source to target.

        Automatically adds both nodes to the graph.
        """
        self._nodes.add(source)
        self._nodes.add(target)
        self._edges.setdefault(source, set()).add(ModuleEdge(target, kind, label))

    def add_missing(self, source: Path, module_path: str) -> None:
        """Record a module path that could not be resolved to a file."""
        self._nodes.add(source)
        self._missing.setdefault(source, set()).add(module_path)

    def get_missing(self, source: Path) -> Set[str]:
        return self._missing.get(source, set()).copy()

    def add_builtin(self, source: Path, module_path: str) -> None:
        """Record a built-in module (never backed by a file)."""
        self._nodes.add(source)
        self._builtins.setdefault(source, set()).add(module_path)

    def get_builtins(self, source: Path) -> Set[str]:
        return self._builtins.get(source, set()).copy()

    def get_edges(self, source: Path) -> List[ModuleEdge]:
        """Get the outgoing edges of a module, sorted by target."""
        return sorted(self._edges.get(source, set()), key=_edge_key)

    def get_targets(self, source: Path) -> Set[Path]:
        """Get all modules that the source module loads."""
        return {edge.target for edge in self._edges.get(source, set())}

    def get_roots(self) -> Set[Path]:
        """
        Get nodes that are never loaded by other nodes.

        These are entry stylesheets: they load others but nothing loads them.
        """
        all_targets: Set[Path] = set()
        for source in self._edges:
            all_targets.update(self.get_targets(source))
        return self._nodes - all_targets

    def iter_edges(self) -> Iterator[Tuple[Path, ModuleEdge]]:
        """Iterate over all edges as (source, edge) tuples."""
        for source in sorted(self._edges):
            for edge in self.get_edges(source):
                yield source, edge

    def iter_missing(self) -> Iterator[Tuple[Path, str]]:
        for source in sorted(self._missing):
            for module_path in sorted(self._missing[source]):
                yield source, module_path

    def iter_builtins(self) -> Iterator[Tuple[Path, str]]:
        for source in sorted(self._builtins):
            for module_path in sorted(self._builtins[source]):
                yield source, module_path

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node: Path) -> bool:
        return node in self._nodes

    def __repr__(self) -> str:
        edge_count = sum(len(e) for e in self._edges.values())
        missing_count = sum(len(m) for m in self._missing.values())
        builtin_count = sum(len(b) for b in self._builtins.values())
        return f"ModuleGraph(nodes={len(self._nodes)}, edges={edge_count}, missing={missing_count}, builtins={builtin_count})"
