"""Records produced by scanning and resolving stylesheet modules.

All records are immutable. Renaming a member across a ``@forward`` hop builds a
new record instead of mutating the one that was scanned, so the same definition
can be reached through two re-export paths with two different prefixes.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


VARIABLE_SIGIL = "$"
PRIVATE_MARKER = "_"


class MemberKind(str, Enum):
    """Kind of member a module can expose."""

    MIXIN = "mixin"
    VARIABLE = "variable"


@dataclass(frozen=True)
class ImportDeclaration:
    """A ``@use "<path>" (as <alias>)?`` statement."""

    path: str
    alias: str
    line: int


@dataclass(frozen=True)
class ReexportDeclaration:
    """A ``@forward "<path>" (as <prefix>-*)?`` statement.

    ``prefix`` keeps its trailing hyphen (``"list-"``); ``None`` means the
    members pass through unrenamed.
    """

    path: str
    prefix: Optional[str]
    line: int


@dataclass(frozen=True)
class Parameter:
    """One declared mixin argument. ``name`` carries no sigil."""

    name: str
    default: Optional[str]
    line: int
    column: int

    @property
    def signature(self) -> str:
        if self.default:
            return f"${self.name}: {self.default}"
        return f"${self.name}"


@dataclass(frozen=True)
class MixinDefinition:
    """
    A ``@mixin`` block.

    ``line``/``column`` point at the ``@mixin`` keyword; ``name_column`` points
    at the first character of the name on the same line.
    """

    name: str
    file_path: Path
    line: int
    column: int
    name_column: int
    parameters: Tuple[Parameter, ...] = field(default=())

    kind = MemberKind.MIXIN

    def renamed(self, name: str) -> "MixinDefinition":
        return replace(self, name=name)

    def find_parameter(self, name: str) -> Optional[Parameter]:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    @property
    def signature(self) -> str:
        return ", ".join(parameter.signature for parameter in self.parameters)


@dataclass(frozen=True)
class VariableDefinition:
    """A ``$name: value`` binding. ``name`` keeps its sigil."""

    name: str
    file_path: Path
    line: int
    column: int
    value: Optional[str] = None

    kind = MemberKind.VARIABLE

    def renamed(self, name: str) -> "VariableDefinition":
        return replace(self, name=name)


@dataclass(frozen=True)
class ForwardedMember:
    """Result of following ``@forward`` hops for a single member."""

    original_name: str
    file_path: Path


@dataclass(frozen=True)
class Location:
    """A resolved definition site, 0-indexed."""

    file_path: Path
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}"


# --- Member name helpers ---

def split_sigil(name: str) -> Tuple[str, str]:
    """Split ``"$primary"`` into ``("$", "primary")`` and ``"reset"`` into ``("", "reset")``."""
    if name.startswith(VARIABLE_SIGIL):
        return VARIABLE_SIGIL, name[len(VARIABLE_SIGIL):]
    return "", name


def is_variable_name(name: str) -> bool:
    return name.startswith(VARIABLE_SIGIL)


def is_private(name: str) -> bool:
    """Names whose bare form starts with an underscore are hidden from listings."""
    return split_sigil(name)[1].startswith(PRIVATE_MARKER)


def add_prefix(name: str, prefix: Optional[str]) -> str:
    """Apply a re-export prefix, keeping the sigil in front."""
    if not prefix:
        return name
    sigil, bare = split_sigil(name)
    return f"{sigil}{prefix}{bare}"


def strip_prefix(name: str, prefix: Optional[str]) -> Optional[str]:
    """
    Remove a re-export prefix from a member name.

    Returns the name unchanged when ``prefix`` is empty, and ``None`` when the
    bare name does not start with the prefix.
    """
    if not prefix:
        return name
    sigil, bare = split_sigil(name)
    if not bare.startswith(prefix):
        return None
    return f"{sigil}{bare[len(prefix):]}"
