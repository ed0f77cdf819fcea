"""Following ``@forward`` chains, one member at a time or exhaustively.

Both traversals guard against cycles with a set of the files currently being
expanded on the call stack. A file is added on entry and removed again on the
way out, so a file reached through two sibling branches is expanded in both.
The set is owned by the caller of the top-level call.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Set, Union

from graph.records import (
    ForwardedMember,
    MemberKind,
    MixinDefinition,
    VariableDefinition,
    add_prefix,
    is_private,
    strip_prefix,
)
from utils.filesystem import read_file
from .parser import (
    scan_reexports,
    find_all_mixin_definitions_with_params,
    find_all_variable_definitions,
)
from .resolver import resolve_module


logger = logging.getLogger(__name__)

MemberDefinition = Union[MixinDefinition, VariableDefinition]


def find_forwarded_member(
    content: str,
    member_name: str,
    current_file: Path,
    workspace_root: Path,
    visiting: Optional[Set[Path]] = None,
    include_paths: Sequence[Path] = (),
) -> Optional[ForwardedMember]:
    """
    Follow ``@forward`` declarations to find where a member comes from.

    The first declaration whose prefix matches ``member_name`` (or which has
    no prefix) and whose module resolves decides the result. When the chain
    ends there, the forwarded file itself is reported, since the member may be
    defined directly in it.

    Args:
        content: Content of ``current_file``.
        member_name: Member as seen from ``current_file`` (``"$list-gap"``, ``"list-reset"``).
        current_file: File whose ``@forward`` declarations are followed.
        workspace_root: Workspace root for package resolution.
        visiting: Files on the current traversal stack. A fresh set is used if omitted.
        include_paths: Extra base directories for package resolution.

    Returns:
        The de-prefixed name and the file it should be looked up in, or None
        if no declaration applies.
    """
    if visiting is None:
        visiting = set()

    if current_file in visiting:
        logger.debug(f"Circular reference detected: {current_file}")
        return None

    visiting.add(current_file)
    try:
        for declaration in scan_reexports(content):
            original_name = strip_prefix(member_name, declaration.prefix)
            if original_name is None:
                continue
            if declaration.prefix:
                logger.debug(
                    f'Prefix match: "{member_name}" -> "{original_name}" (prefix: "{declaration.prefix}")'
                )

            resolved_path = resolve_module(declaration.path, current_file, workspace_root, include_paths)
            if resolved_path is None:
                logger.debug(f"Failed to resolve forward path: {declaration.path}")
                continue

            logger.debug(f"Resolved forward to: {resolved_path}")
            nested = find_forwarded_member(
                read_file(resolved_path),
                original_name,
                resolved_path,
                workspace_root,
                visiting,
                include_paths,
            )
            if nested is not None:
                return nested

            return ForwardedMember(original_name=original_name, file_path=resolved_path)

        return None
    finally:
        visiting.discard(current_file)


def find_all_forwarded_members(
    content: str,
    current_file: Path,
    workspace_root: Path,
    kind: MemberKind,
    visiting: Optional[Set[Path]] = None,
    include_paths: Sequence[Path] = (),
) -> List[MemberDefinition]:
    """
    Enumerate every public member that ``@forward`` declarations make visible.

    Every declaration is followed. For each one, the forwarded file's own
    definitions come first, then whatever that file forwards in turn; the
    declaration's prefix is applied to both, on top of any prefix applied
    further down the chain.

    Args:
        content: Content of ``current_file``.
        current_file: File whose ``@forward`` declarations are followed.
        workspace_root: Workspace root for package resolution.
        kind: Which members to collect.
        visiting: Files on the current traversal stack. A fresh set is used if omitted.
        include_paths: Extra base directories for package resolution.

    Returns:
        Definitions renamed as seen from ``current_file``.
    """
    if visiting is None:
        visiting = set()

    if current_file in visiting:
        logger.debug(f"Circular reference detected in find_all_forwarded_members: {current_file}")
        return []

    visiting.add(current_file)
    results: List[MemberDefinition] = []
    try:
        for declaration in scan_reexports(content):
            resolved_path = resolve_module(declaration.path, current_file, workspace_root, include_paths)
            if resolved_path is None:
                logger.debug(f"Failed to resolve forward path: {declaration.path}")
                continue

            forwarded_content = read_file(resolved_path)

            for member in _direct_members(forwarded_content, resolved_path, kind):
                if is_private(member.name):
                    continue
                results.append(member.renamed(add_prefix(member.name, declaration.prefix)))

            nested = find_all_forwarded_members(
                forwarded_content,
                resolved_path,
                workspace_root,
                kind,
                visiting,
                include_paths,
            )
            for member in nested:
                results.append(member.renamed(add_prefix(member.name, declaration.prefix)))

        return results
    finally:
        visiting.discard(current_file)


def _direct_members(content: str, file_path: Path, kind: MemberKind) -> List[MemberDefinition]:
    if kind == MemberKind.MIXIN:
        return list(find_all_mixin_definitions_with_params(content, file_path))
    return list(find_all_variable_definitions(content, file_path))
