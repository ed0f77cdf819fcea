"""Go-to-definition for namespaced mixins, variables and mixin arguments."""

import logging
from pathlib import Path
from typing import Optional, Sequence

from graph.records import Location, MixinDefinition
from .context import CursorTarget, extract_argument_reference, extract_reference
from .document import Document, Position
from .resolution import resolve_alias, resolve_member


logger = logging.getLogger(__name__)


def find_definition(
    document: Document,
    position: Position,
    include_paths: Sequence[Path] = (),
) -> Optional[Location]:
    """
    Resolve the reference under the cursor to its definition site.

    Handles three shapes:
    - ``alias.member`` / ``alias.$member``: the member's definition, through
      any ``@forward`` chain.
    - ``alias`` part of such a token: the top of the module file.
    - ``$arg`` inside ``@include alias.mixin(...)``: the parameter's
      declaration in the mixin's definition.

    Args:
        document: The document the cursor is in.
        position: Cursor position, 0-indexed.
        include_paths: Extra base directories for package resolution.

    Returns:
        The definition location, or None when nothing could be resolved.
        Read errors are logged and reported as None.
    """
    try:
        logger.debug(
            f"find_definition called at {document.file_path}:{position.line}:{position.character}"
        )

        if document.workspace_root is None:
            logger.error("No workspace folder found")
            return None

        line = document.line_at(position.line)

        argument = extract_argument_reference(line, position.character)
        if argument is not None:
            logger.info(
                f"Resolving argument: {argument.argument_name} in {argument.alias}.{argument.mixin_name}"
            )
            return _resolve_argument(document, argument.alias, argument.mixin_name,
                                     argument.argument_name, include_paths)

        reference = extract_reference(line, position.character)
        if reference is None:
            logger.debug("No valid token found at cursor position")
            return None

        logger.info(
            f"Resolving: {reference.text} (namespace: {reference.alias}, member: {reference.member})"
        )
        return _resolve_reference(document, reference.alias, reference.member,
                                  reference.target, include_paths)
    except Exception:
        logger.exception("Error in find_definition")
        return None


def _resolve_reference(
    document: Document,
    alias: str,
    member: str,
    target: CursorTarget,
    include_paths: Sequence[Path],
) -> Optional[Location]:
    module_path = resolve_alias(
        document.text, alias, document.file_path, document.workspace_root, include_paths
    )
    if module_path is None:
        return None

    if target == CursorTarget.ALIAS:
        logger.info(f"Jumping to module file: {module_path}")
        return Location(file_path=module_path, line=0, column=0)

    definition = resolve_member(module_path, member, document.workspace_root, include_paths)
    if definition is None:
        logger.debug(f"Definition not found: {member}")
        return None

    column = definition.name_column if isinstance(definition, MixinDefinition) else definition.column
    location = Location(file_path=definition.file_path, line=definition.line, column=column)
    logger.info(f"Definition found: {location}")
    return location


def _resolve_argument(
    document: Document,
    alias: str,
    mixin_name: str,
    argument_name: str,
    include_paths: Sequence[Path],
) -> Optional[Location]:
    module_path = resolve_alias(
        document.text, alias, document.file_path, document.workspace_root, include_paths
    )
    if module_path is None:
        return None

    definition = resolve_member(module_path, mixin_name, document.workspace_root, include_paths)
    if not isinstance(definition, MixinDefinition):
        logger.debug(f"Mixin definition not found: {mixin_name}")
        return None

    if not definition.parameters:
        logger.debug(f"Mixin has no parameters: {definition.name}")
        return None

    parameter = definition.find_parameter(argument_name)
    if parameter is None:
        available = ", ".join(p.name for p in definition.parameters)
        logger.debug(f"Parameter not found: {argument_name} (available: {available})")
        return None

    location = Location(file_path=definition.file_path, line=parameter.line, column=parameter.column)
    logger.info(f"Argument definition found: {location}")
    return location
