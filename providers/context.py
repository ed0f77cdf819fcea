"""Cursor context extraction: what the user is pointing at or typing."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


TOKEN_CHAR = re.compile(r"[\w$.-]")
ALIAS_PATTERN = re.compile(r"^[\w-]+$")
MEMBER_PATTERN = re.compile(r"^\$?[\w-]+$")

# @include alias.mixin(
INCLUDE_CALL_PATTERN = re.compile(r"@include\s+([\w-]+)\.([\w-]+)\s*\(")
# $name inside an argument list, but not the member of alias.$name
ARGUMENT_NAME_PATTERN = re.compile(r"(?<![\w.$-])\$([\w-]+)")

MIXIN_ARGUMENT_PATTERN = re.compile(r"@include\s+(?:([\w-]+)\.)?([\w-]+)\s*\([^)]*$")
MEMBER_ACCESS_PATTERN = re.compile(r"([\w-]+)\.(\$[\w-]*|[\w-]*)$")
SCOPE_VARIABLE_PATTERN = re.compile(r"(?:^|[\s:,(])(\$[\w-]*)$")
INCLUDE_KEYWORD_PATTERN = re.compile(r"@include\s+")
PROPERTY_PATTERN = re.compile(r"[\w-]+\s*:")


class CursorTarget(str, Enum):
    ALIAS = "alias"
    MEMBER = "member"


@dataclass(frozen=True)
class ReferenceToken:
    """An ``alias.member`` token under the cursor."""

    alias: str
    member: str
    target: CursorTarget
    start: int
    end: int

    @property
    def text(self) -> str:
        return f"{self.alias}.{self.member}"


@dataclass(frozen=True)
class ArgumentReference:
    """A ``$name`` inside the argument list of ``@include alias.mixin(...)``."""

    alias: str
    mixin_name: str
    argument_name: str


def extract_reference(line: str, character: int) -> Optional[ReferenceToken]:
    """
    Find the ``alias.member`` token touching ``character``.

    The cursor may sit on any character of the token or right after it.
    Returns None when the token is not namespaced.
    """
    if 0 <= character < len(line) and TOKEN_CHAR.match(line[character]):
        start = character
    elif 0 < character <= len(line) and TOKEN_CHAR.match(line[character - 1]):
        start = character - 1
    else:
        return None

    while start > 0 and TOKEN_CHAR.match(line[start - 1]):
        start -= 1
    end = max(start, character)
    while end < len(line) and TOKEN_CHAR.match(line[end]):
        end += 1

    token = line[start:end]
    dot_index = token.find(".")
    if dot_index == -1:
        return None

    alias = token[:dot_index]
    member = token[dot_index + 1:]
    if not ALIAS_PATTERN.match(alias) or not MEMBER_PATTERN.match(member):
        return None

    target = CursorTarget.ALIAS if character - start <= dot_index else CursorTarget.MEMBER
    return ReferenceToken(alias=alias, member=member, target=target, start=start, end=end)


def extract_argument_reference(line: str, character: int) -> Optional[ArgumentReference]:
    """Return the argument name under the cursor inside ``@include alias.mixin(...)``."""
    for match in INCLUDE_CALL_PATTERN.finditer(line):
        paren_start = match.end() - 1
        paren_end = find_matching_paren(line, paren_start)
        if paren_end == -1:
            continue
        if character <= paren_start or character >= paren_end:
            continue

        argument_name = _argument_name_at(line, character, paren_start, paren_end)
        if argument_name:
            return ArgumentReference(
                alias=match.group(1),
                mixin_name=match.group(2),
                argument_name=argument_name,
            )

    return None


def find_matching_paren(line: str, start: int) -> int:
    """Index of the ``)`` closing the ``(`` at ``start``, or -1."""
    depth = 0
    for index in range(start, len(line)):
        if line[index] == "(":
            depth += 1
        elif line[index] == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _argument_name_at(line: str, character: int, paren_start: int, paren_end: int) -> Optional[str]:
    arguments = line[paren_start + 1:paren_end]
    relative = character - paren_start - 1

    for match in ARGUMENT_NAME_PATTERN.finditer(arguments):
        if match.start() <= relative <= match.end():
            return match.group(1)
    return None


# --- Completion contexts ---

class MemberFilter(str, Enum):
    MIXIN = "mixin"
    VARIABLE = "variable"
    BOTH = "both"

    @property
    def includes_mixins(self) -> bool:
        return self in (MemberFilter.MIXIN, MemberFilter.BOTH)

    @property
    def includes_variables(self) -> bool:
        return self in (MemberFilter.VARIABLE, MemberFilter.BOTH)


@dataclass(frozen=True)
class MixinArgumentContext:
    """Typing inside ``@include (alias.)?mixin(``."""

    alias: Optional[str]
    mixin_name: str


@dataclass(frozen=True)
class MemberAccessContext:
    """Typing right after ``alias.``."""

    alias: str
    member_filter: MemberFilter
    typed_length: int


@dataclass(frozen=True)
class ScopeVariableContext:
    """Typing an un-namespaced ``$name``; ``typed_length`` counts the ``$`` too."""

    typed_length: int = 1


CompletionContext = Union[MixinArgumentContext, MemberAccessContext, ScopeVariableContext]


def classify_completion_context(text_before_cursor: str) -> Optional[CompletionContext]:
    """Classify the text left of the cursor; the first matching context wins."""
    match = MIXIN_ARGUMENT_PATTERN.search(text_before_cursor)
    if match:
        return MixinArgumentContext(alias=match.group(1) or None, mixin_name=match.group(2))

    match = MEMBER_ACCESS_PATTERN.search(text_before_cursor)
    if match:
        typed = match.group(2)
        return MemberAccessContext(
            alias=match.group(1),
            member_filter=determine_member_filter(text_before_cursor, typed),
            typed_length=len(typed),
        )

    match = SCOPE_VARIABLE_PATTERN.search(text_before_cursor)
    if match:
        return ScopeVariableContext(typed_length=len(match.group(1)))

    return None


def determine_member_filter(text_before_cursor: str, typed_after_dot: str) -> MemberFilter:
    """
    Decide which members an ``alias.`` completion should list.

    In order: ``$`` already typed, then ``@include`` on the line, then a
    property-value position.
    """
    if typed_after_dot.startswith("$"):
        return MemberFilter.VARIABLE
    if INCLUDE_KEYWORD_PATTERN.search(text_before_cursor):
        return MemberFilter.MIXIN
    if PROPERTY_PATTERN.search(text_before_cursor):
        return MemberFilter.VARIABLE
    return MemberFilter.BOTH
