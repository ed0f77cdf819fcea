"""Plain text exporters for resolution results (human-friendly format)."""

from pathlib import Path
from typing import List, Optional, Sequence

from graph.records import Location
from providers.completion import CompletionCandidate
from .json_exporter import _get_path_str


NOT_FOUND = "No definition found"
NO_COMPLETIONS = "No completions"


def location_to_text(location: Optional[Location], root: Path, base: Optional[Path] = None) -> str:
    """Render a definition as ``path:line:column`` (0-indexed)."""
    if location is None:
        return NOT_FOUND
    if base is None:
        base = root
    return f"{_get_path_str(location.file_path, base, root)}:{location.line}:{location.column}"


def candidates_to_text(candidates: Sequence[CompletionCandidate]) -> str:
    """Render candidates as aligned ``label  kind  detail`` rows."""
    if not candidates:
        return NO_COMPLETIONS

    label_width = max(len(candidate.label) for candidate in candidates)
    kind_width = max(len(candidate.kind.value) for candidate in candidates)

    lines: List[str] = []
    for candidate in candidates:
        row = f"{candidate.label.ljust(label_width)}  {candidate.kind.value.ljust(kind_width)}  {candidate.detail}"
        lines.append(row.rstrip())
    return "\n".join(lines)
