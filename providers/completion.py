"""Completion candidates for namespaced members, mixin arguments and scope variables."""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Set

from graph.records import MemberKind, MixinDefinition, split_sigil
from scanner.parser import (
    find_all_variable_definitions,
    find_mixin_definition,
    is_builtin_module,
    scan_imports,
)
from scanner.resolver import resolve_module
from .context import (
    MemberAccessContext,
    MixinArgumentContext,
    ScopeVariableContext,
    classify_completion_context,
)
from .document import Document, Position, Range
from .resolution import resolve_alias, resolve_member, visible_members


logger = logging.getLogger(__name__)

ENTERED_ARGUMENT_PATTERN = re.compile(r"\$([\w-]+)\s*:")


class CandidateKind(str, Enum):
    MIXIN = "mixin"
    VARIABLE = "variable"
    ARGUMENT = "argument"


@dataclass(frozen=True)
class CompletionCandidate:
    label: str
    kind: CandidateKind
    insert_text: str
    detail: str
    replace_range: Optional[Range] = None
    filter_text: Optional[str] = None


def provide_completions(
    document: Document,
    position: Position,
    include_paths: Sequence[Path] = (),
) -> List[CompletionCandidate]:
    """
    List completion candidates for the cursor position.

    Returns an empty list when the cursor is in no recognized context or
    when resolution fails; read errors are logged and reported the same way.
    """
    try:
        logger.debug(f"provide_completions called at {position.line}:{position.character}")

        text_before_cursor = document.text_before(position)
        context = classify_completion_context(text_before_cursor)
        if context is None:
            logger.debug(f'No completion context for: "{text_before_cursor}"')
            return []
        if document.workspace_root is None:
            return []

        logger.debug(f"Completion context: {context}")
        if isinstance(context, MixinArgumentContext):
            return _mixin_argument_candidates(document, position, context, include_paths)
        if isinstance(context, MemberAccessContext):
            return _member_candidates(document, position, context, include_paths)
        if isinstance(context, ScopeVariableContext):
            return _scope_variable_candidates(document, position, context, include_paths)
        return []
    except Exception:
        logger.exception("Error in provide_completions")
        return []


def _member_candidates(
    document: Document,
    position: Position,
    context: MemberAccessContext,
    include_paths: Sequence[Path],
) -> List[CompletionCandidate]:
    """``alias.`` / ``alias.$`` completion."""
    replace_range = Range(
        Position(position.line, position.character - context.typed_length),
        position,
    )

    module_path = resolve_alias(
        document.text, context.alias, document.file_path, document.workspace_root, include_paths
    )
    if module_path is None:
        return []

    candidates: List[CompletionCandidate] = []

    if context.member_filter.includes_variables:
        for variable in visible_members(module_path, document.workspace_root, MemberKind.VARIABLE, include_paths):
            label = "$" + split_sigil(variable.name)[1]
            candidates.append(CompletionCandidate(
                label=label,
                kind=CandidateKind.VARIABLE,
                insert_text=label,
                detail=_variable_detail(variable.name, variable.value),
                replace_range=replace_range,
            ))

    if context.member_filter.includes_mixins:
        for mixin in visible_members(module_path, document.workspace_root, MemberKind.MIXIN, include_paths):
            candidates.append(CompletionCandidate(
                label=mixin.name,
                kind=CandidateKind.MIXIN,
                insert_text=mixin.name,
                detail=f"({mixin.signature})",
                replace_range=replace_range,
            ))

    logger.debug(f"Returning {len(candidates)} completion items for namespace: {context.alias}")
    return candidates


def _mixin_argument_candidates(
    document: Document,
    position: Position,
    context: MixinArgumentContext,
    include_paths: Sequence[Path],
) -> List[CompletionCandidate]:
    """``@include alias.mixin(`` completion: parameters not written yet."""
    if context.alias:
        module_path = resolve_alias(
            document.text, context.alias, document.file_path, document.workspace_root, include_paths
        )
        if module_path is None:
            return []
        mixin = resolve_member(module_path, context.mixin_name, document.workspace_root, include_paths)
    else:
        mixin = find_mixin_definition(document.text, context.mixin_name, document.file_path)

    if not isinstance(mixin, MixinDefinition) or not mixin.parameters:
        return []

    entered = set(ENTERED_ARGUMENT_PATTERN.findall(document.text_before(position)))

    candidates: List[CompletionCandidate] = []
    for parameter in mixin.parameters:
        if parameter.name in entered:
            continue
        if parameter.default:
            detail = f"(optional) default: {parameter.default}"
        else:
            detail = "(required)"
        candidates.append(CompletionCandidate(
            label=f"${parameter.name}",
            kind=CandidateKind.ARGUMENT,
            insert_text=f"${parameter.name}: ",
            detail=detail,
        ))
    return candidates


def _scope_variable_candidates(
    document: Document,
    position: Position,
    context: ScopeVariableContext,
    include_paths: Sequence[Path],
) -> List[CompletionCandidate]:
    """Bare ``$`` completion: local variables, then variables of every ``@use`` module."""
    candidates: List[CompletionCandidate] = []
    seen: Set[str] = set()

    for variable in find_all_variable_definitions(document.text, document.file_path):
        bare = split_sigil(variable.name)[1]
        if bare.startswith("_") or variable.name in seen:
            continue
        seen.add(variable.name)
        candidates.append(CompletionCandidate(
            label=variable.name,
            kind=CandidateKind.VARIABLE,
            # The "$" is already typed
            insert_text=bare,
            detail=_variable_detail(variable.name, variable.value),
        ))

    dollar_range = Range(Position(position.line, position.character - context.typed_length), position)

    for declaration in scan_imports(document.text):
        if is_builtin_module(declaration.path):
            continue

        module_path = resolve_module(
            declaration.path, document.file_path, document.workspace_root, include_paths
        )
        if module_path is None:
            continue

        for variable in visible_members(module_path, document.workspace_root, MemberKind.VARIABLE, include_paths):
            label = f"{declaration.alias}.${split_sigil(variable.name)[1]}"
            if label in seen:
                continue
            seen.add(label)
            candidates.append(CompletionCandidate(
                label=label,
                kind=CandidateKind.VARIABLE,
                insert_text=label,
                detail=_variable_detail(variable.name, variable.value),
                replace_range=dollar_range,
                filter_text=f"${label}",
            ))

    return candidates


def _variable_detail(name: str, value: Optional[str]) -> str:
    return f"{name}: {value}" if value else name
