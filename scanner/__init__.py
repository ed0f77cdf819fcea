"""Scanner module: declaration scanning, module resolution and @forward chains."""

from .parser import (
    scan_imports,
    scan_reexports,
    find_import,
    find_mixin_definition,
    find_all_mixin_definitions,
    find_all_mixin_definitions_with_params,
    find_variable_definition,
    find_all_variable_definitions,
)
from .resolver import resolve_module
from .forwarding import find_forwarded_member, find_all_forwarded_members
from .discovery import iter_files
from .builder import build_graph

__all__ = [
    "scan_imports",
    "scan_reexports",
    "find_import",
    "find_mixin_definition",
    "find_all_mixin_definitions",
    "find_all_mixin_definitions_with_params",
    "find_variable_definition",
    "find_all_variable_definitions",
    "resolve_module",
    "find_forwarded_member",
    "find_all_forwarded_members",
    "iter_files",
    "build_graph",
]
