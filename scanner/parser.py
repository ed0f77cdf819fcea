"""Line-oriented scanners for stylesheet declarations.

There is no tokenizer: every entry point works on raw lines with regular
expressions. Lines whose stripped form starts with ``//`` are skipped. Block
comments are only honoured when enumerating variables, so a ``@mixin`` or
``@use`` written inside ``/* ... */`` is still reported by the other scanners.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from graph.records import (
    ImportDeclaration,
    ReexportDeclaration,
    MixinDefinition,
    Parameter,
    VariableDefinition,
)


logger = logging.getLogger(__name__)

# @use "<path>" (as <alias>)?
USE_PATTERN = re.compile(r"""@use\s+["']([^"']+)["'](?:\s+as\s+([\w-]+))?""")

# @forward "<path>" (as <prefix>-*)? ; the prefix only counts with the trailing "-*"
FORWARD_PATTERN = re.compile(r"""@forward\s+["']([^"']+)["'](?:\s+as\s+([\w-]+)-\*)?""")

# @mixin name( ... or @mixin name {
MIXIN_PATTERN = re.compile(r"@mixin\s+([\w-]+)(?:\s*\(|\s*\{)")

VARIABLE_PATTERN = re.compile(r"(\$[\w-]+)\s*:")

# A "//" comment running to the end of the line; "url(http://...)" is not one
TRAILING_COMMENT_PATTERN = re.compile(r"(?:^|(?<=[\s,(]))//.*$")

# One token of a parameter list: $name, $name..., $name: default
PARAMETER_PATTERN = re.compile(r"^\$([\w-]+)(?:\.\.\.)?\s*(?::\s*(.*))?$", re.DOTALL)

LINE_COMMENT = "//"
BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"
STATEMENT_TERMINATOR = ";"

BUILTIN_PREFIX = "sass:"
STYLE_EXTENSIONS = (".scss", ".sass")
PARTIAL_MARKER = "_"

# How far below a @mixin line a parameter's own position is searched
PARAMETER_SEARCH_LINES = 10

OPENING_BRACKETS = "({"
CLOSING_BRACKETS = ")}"


def _is_line_comment(line: str) -> bool:
    return line.strip().startswith(LINE_COMMENT)


def _strip_line_comment(text: str) -> str:
    return TRAILING_COMMENT_PATTERN.sub("", text)


# --- @use / @forward ---

def default_alias(module_path: str) -> str:
    """
    Derive the namespace a ``@use`` binds when it has no ``as`` clause.

    Examples:
        "@example/styles" -> "styles"
        "./components/_button.scss" -> "button"
        "sass:math" -> "math"
    """
    alias = module_path.split("/")[-1]
    if alias.startswith(BUILTIN_PREFIX):
        alias = alias[len(BUILTIN_PREFIX):]
    for extension in STYLE_EXTENSIONS:
        if alias.endswith(extension):
            alias = alias[: -len(extension)]
            break
    if alias.startswith(PARTIAL_MARKER):
        alias = alias[len(PARTIAL_MARKER):]
    return alias


def scan_imports(content: str) -> List[ImportDeclaration]:
    """Extract every ``@use`` declaration, in source order."""
    declarations: List[ImportDeclaration] = []

    for line_number, line in enumerate(content.split("\n")):
        if _is_line_comment(line):
            continue

        for match in USE_PATTERN.finditer(line):
            path = match.group(1)
            alias = match.group(2) or default_alias(path)
            declarations.append(ImportDeclaration(path=path, alias=alias, line=line_number))
            logger.debug(f"Found @use: {path} as {alias} (line {line_number})")

    return declarations


def find_import(content: str, alias: str) -> Optional[ImportDeclaration]:
    """Return the first ``@use`` declaration that binds ``alias``."""
    for declaration in scan_imports(content):
        if declaration.alias == alias:
            return declaration
    return None


def is_builtin_module(module_path: str) -> bool:
    return module_path.startswith(BUILTIN_PREFIX)


def scan_reexports(content: str) -> List[ReexportDeclaration]:
    """Extract every ``@forward`` declaration, in source order."""
    declarations: List[ReexportDeclaration] = []

    for line_number, line in enumerate(content.split("\n")):
        if _is_line_comment(line):
            continue

        for match in FORWARD_PATTERN.finditer(line):
            path = match.group(1)
            prefix = f"{match.group(2)}-" if match.group(2) else None
            declarations.append(ReexportDeclaration(path=path, prefix=prefix, line=line_number))
            logger.debug(
                f"Found @forward: {path}{f' as {prefix}*' if prefix else ''} (line {line_number})"
            )

    return declarations


# --- @mixin ---

def find_mixin_definition(content: str, name: str, file_path: Path) -> Optional[MixinDefinition]:
    """
    Find the first ``@mixin`` named ``name``, with its parameter list.

    Args:
        content: File content.
        name: Mixin name, without namespace.
        file_path: Path recorded on the returned definition.

    Returns:
        The definition, or None if the file does not define the mixin.
    """
    lines = content.split("\n")

    for line_number, line in enumerate(lines):
        if _is_line_comment(line):
            continue

        for match in MIXIN_PATTERN.finditer(line):
            if match.group(1) != name:
                continue
            definition = _build_mixin(lines, line_number, match, file_path, with_params=True)
            logger.debug(
                f"Found mixin definition: {name} at {file_path}:{line_number}:{definition.column}"
            )
            return definition

    logger.debug(f'Mixin "{name}" not found in {file_path}')
    return None


def find_all_mixin_definitions(
    content: str,
    file_path: Path,
    with_params: bool = False,
) -> List[MixinDefinition]:
    """Enumerate every ``@mixin`` in a file, optionally with parameter lists."""
    definitions: List[MixinDefinition] = []
    lines = content.split("\n")

    for line_number, line in enumerate(lines):
        if _is_line_comment(line):
            continue

        for match in MIXIN_PATTERN.finditer(line):
            definitions.append(_build_mixin(lines, line_number, match, file_path, with_params))

    return definitions


def find_all_mixin_definitions_with_params(content: str, file_path: Path) -> List[MixinDefinition]:
    return find_all_mixin_definitions(content, file_path, with_params=True)


def _build_mixin(
    lines: List[str],
    line_number: int,
    match: "re.Match[str]",
    file_path: Path,
    with_params: bool,
) -> MixinDefinition:
    parameters: Tuple[Parameter, ...] = ()
    if with_params and match.group(0).endswith("("):
        parameters = parse_parameters(lines, line_number, match.end() - 1, match.start())

    return MixinDefinition(
        name=match.group(1),
        file_path=Path(file_path),
        line=line_number,
        column=match.start(),
        name_column=match.start(1),
        parameters=parameters,
    )


def parse_parameters(
    lines: List[str],
    line_number: int,
    paren_column: int,
    definition_column: int = 0,
) -> Tuple[Parameter, ...]:
    """
    Parse the parameter list whose ``(`` sits at ``lines[line_number][paren_column]``.

    The list may span several lines. Each parameter is then located on its own,
    since reformatted argument lists put parameters on other lines than the
    ``@mixin`` keyword.
    """
    span = _capture_parenthesized(lines, line_number, paren_column)
    if span is None:
        logger.debug(f"Unbalanced parameter list at line {line_number}")
        return ()

    parameters: List[Parameter] = []
    seen = set()
    for token in _split_top_level(span):
        match = PARAMETER_PATTERN.match(token.strip())
        if not match:
            continue
        name = match.group(1)
        if name in seen:
            continue
        seen.add(name)

        default = match.group(2).strip() if match.group(2) else None
        param_line, param_column = _locate_parameter(lines, name, line_number, definition_column)
        parameters.append(
            Parameter(name=name, default=default or None, line=param_line, column=param_column)
        )

    return tuple(parameters)


def _capture_parenthesized(lines: List[str], line_number: int, column: int) -> Optional[str]:
    """
    Return the text between a ``(`` and its matching ``)``, newlines preserved.

    ``//`` comments are dropped, so commented lines and trailing notes never
    reach the parameter splitter.
    """
    depth = 0
    captured: List[str] = []

    for current in range(line_number, len(lines)):
        start = column if current == line_number else 0
        segment = _strip_line_comment(lines[current][start:])
        if current != line_number:
            captured.append("\n")

        for char in segment:
            if char == "(":
                depth += 1
                if depth == 1:
                    continue
            elif char == ")":
                depth -= 1
                if depth == 0:
                    return "".join(captured)
            captured.append(char)

    return None


def _split_top_level(span: str) -> List[str]:
    """Split on commas that are not nested inside () or {}."""
    tokens: List[str] = []
    depth = 0
    current: List[str] = []

    for char in span:
        if char in OPENING_BRACKETS:
            depth += 1
        elif char in CLOSING_BRACKETS:
            depth -= 1
        elif char == "," and depth == 0:
            tokens.append("".join(current))
            current = []
            continue
        current.append(char)

    if "".join(current).strip():
        tokens.append("".join(current))
    return tokens


def _locate_parameter(
    lines: List[str],
    name: str,
    line_number: int,
    definition_column: int,
) -> Tuple[int, int]:
    pattern = re.compile(r"\$" + re.escape(name) + r"(?![\w-])")
    last_line = min(line_number + PARAMETER_SEARCH_LINES, len(lines) - 1)

    for current in range(line_number, last_line + 1):
        start = definition_column if current == line_number else 0
        match = pattern.search(_strip_line_comment(lines[current]), start)
        if match:
            return current, match.start()

    return line_number, definition_column


# --- Variables ---

def find_variable_definition(content: str, name: str, file_path: Path) -> Optional[VariableDefinition]:
    """
    Find the first ``<name>:`` binding.

    Args:
        content: File content.
        name: Variable name including the ``$`` sigil.
        file_path: Path recorded on the returned definition.
    """
    pattern = re.compile(re.escape(name) + r"\s*:")

    for line_number, line in enumerate(content.split("\n")):
        if _is_line_comment(line):
            continue

        match = pattern.search(line)
        if match:
            logger.debug(
                f"Found variable definition: {name} at {file_path}:{line_number}:{match.start()}"
            )
            return VariableDefinition(
                name=name,
                file_path=Path(file_path),
                line=line_number,
                column=match.start(),
                value=_value_after(line, match.end()),
            )

    logger.debug(f'Variable "{name}" not found in {file_path}')
    return None


def find_all_variable_definitions(content: str, file_path: Path) -> List[VariableDefinition]:
    """
    Enumerate every ``$name:`` binding outside comments.

    A line that opens a block comment is skipped, and so is everything up to
    the line that closes it.
    """
    definitions: List[VariableDefinition] = []
    in_block_comment = False

    for line_number, line in enumerate(content.split("\n")):
        if in_block_comment:
            if BLOCK_COMMENT_CLOSE in line:
                in_block_comment = False
            continue

        if _is_line_comment(line):
            continue

        opener = line.find(BLOCK_COMMENT_OPEN)
        if opener != -1:
            if BLOCK_COMMENT_CLOSE not in line[opener + len(BLOCK_COMMENT_OPEN):]:
                in_block_comment = True
            continue

        for match in VARIABLE_PATTERN.finditer(line):
            definitions.append(
                VariableDefinition(
                    name=match.group(1),
                    file_path=Path(file_path),
                    line=line_number,
                    column=match.start(),
                    value=_value_after(line, match.end()),
                )
            )

    return definitions


def _value_after(line: str, start: int) -> Optional[str]:
    """Text after a binding's colon, up to ``;`` or the end of the line."""
    end = line.find(STATEMENT_TERMINATOR, start)
    value = line[start:] if end == -1 else line[start:end]
    value = value.strip()
    return value or None
