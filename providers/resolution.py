"""Resolution steps shared by the definition and completion providers."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from graph.records import (
    MemberKind,
    MixinDefinition,
    VariableDefinition,
    is_private,
    is_variable_name,
)
from scanner.forwarding import find_forwarded_member, find_all_forwarded_members
from scanner.parser import (
    find_import,
    is_builtin_module,
    find_mixin_definition,
    find_variable_definition,
    find_all_mixin_definitions_with_params,
    find_all_variable_definitions,
)
from scanner.resolver import resolve_module
from utils.filesystem import read_file


logger = logging.getLogger(__name__)

MemberDefinition = Union[MixinDefinition, VariableDefinition]


def resolve_alias(
    content: str,
    alias: str,
    current_file: Path,
    workspace_root: Path,
    include_paths: Sequence[Path] = (),
) -> Optional[Path]:
    """Resolve the module bound to ``alias`` by the ``@use`` declarations in ``content``."""
    declaration = find_import(content, alias)
    if declaration is None:
        logger.debug(f"No @use statement found for namespace: {alias}")
        return None

    logger.debug(f"Found @use: {declaration.path} as {declaration.alias}")
    if is_builtin_module(declaration.path):
        logger.debug(f"Namespace {alias} is a built-in module")
        return None

    module_path = resolve_module(declaration.path, current_file, workspace_root, include_paths)
    if module_path is None:
        logger.debug(f"Failed to resolve module: {declaration.path}")
        return None

    logger.debug(f"Resolved module to: {module_path}")
    return module_path


def resolve_member(
    module_path: Path,
    member: str,
    workspace_root: Path,
    include_paths: Sequence[Path] = (),
) -> Optional[MemberDefinition]:
    """
    Find the definition of ``member`` as exposed by ``module_path``.

    ``@forward`` chains are followed first; without a matching declaration the
    member is looked up directly in the module.
    """
    module_content = read_file(module_path)
    forwarded = find_forwarded_member(
        module_content,
        member,
        module_path,
        workspace_root,
        visiting=set(),
        include_paths=include_paths,
    )

    if forwarded is not None:
        target_file = forwarded.file_path
        target_name = forwarded.original_name
        target_content = read_file(target_file)
        logger.debug(f"Forwarded to: {target_file}, original name: {target_name}")
    else:
        target_file = module_path
        target_name = member
        target_content = module_content
        logger.debug(f"Direct definition in: {target_file}")

    if is_variable_name(target_name):
        return find_variable_definition(target_content, target_name, target_file)
    return find_mixin_definition(target_content, target_name, target_file)


def visible_members(
    module_path: Path,
    workspace_root: Path,
    kind: MemberKind,
    include_paths: Sequence[Path] = (),
) -> List[MemberDefinition]:
    """
    Public members a module exposes: its own definitions, then forwarded ones.

    Duplicate names keep their first occurrence.
    """
    content = read_file(module_path)
    if kind == MemberKind.MIXIN:
        direct: List[MemberDefinition] = list(find_all_mixin_definitions_with_params(content, module_path))
    else:
        direct = list(find_all_variable_definitions(content, module_path))

    forwarded = find_all_forwarded_members(
        content,
        module_path,
        workspace_root,
        kind,
        visiting=set(),
        include_paths=include_paths,
    )

    members: List[MemberDefinition] = []
    seen = set()
    for member in direct + forwarded:
        if is_private(member.name) or member.name in seen:
            continue
        seen.add(member.name)
        members.append(member)
    return members
