"""Minimal editor-side types: an open document and positions inside it."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class Position:
    """A cursor position, 0-indexed."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


@dataclass
class Document:
    """
    An open stylesheet.

    ``text`` is the editor buffer and may differ from what is on disk.
    ``workspace_root`` is None for files opened outside any workspace folder.
    """

    file_path: Path
    text: str
    workspace_root: Optional[Path] = None

    @classmethod
    def from_file(cls, file_path: Union[str, Path], workspace_root: Optional[Union[str, Path]] = None) -> "Document":
        path = Path(file_path)
        root = Path(workspace_root) if workspace_root is not None else None
        return cls(file_path=path, text=path.read_text(encoding="utf-8"), workspace_root=root)

    def line_at(self, line: int) -> str:
        lines = self.text.split("\n")
        if 0 <= line < len(lines):
            return lines[line].rstrip("\r")
        return ""

    def text_before(self, position: Position) -> str:
        return self.line_at(position.line)[: position.character]
