#!/usr/bin/env python3
"""
Sass Reference Resolver CLI

Resolves namespaced mixin and variable references across @use / @forward
chains, lists completion candidates, and renders module graphs.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from exporters import (
    to_ascii,
    to_json,
    location_to_json,
    location_to_text,
    candidates_to_json,
    candidates_to_text,
)
from providers import Document, Position, find_definition, provide_completions
from scanner.builder import build_graph
from scanner.discovery import DEFAULT_EXCLUDE_DIRS
from utils.config import ConfigError, load_settings, parse_trace_level
from utils.log import TraceLevel, configure_logging


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="sassref",
        description="Resolve namespaced Sass references across @use and @forward chains.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sassref definition src/app.scss 12 18            # Where is the token at line 12, column 18 defined?
  sassref complete src/app.scss 4 22 -f json       # Completion candidates as JSON
  sassref graph . -f ascii --ascii-style=ascii     # @use/@forward tree of every stylesheet
  sassref graph --entry src/app.scss               # Only modules reachable from app.scss
  sassref definition a.scss 3 10 --trace verbose   # Log every resolution step to stderr

Lines and columns are 0-indexed.
        """,
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--root",
        type=str,
        default=None,
        help="Workspace root (default: current directory)",
    )
    common.add_argument(
        "--config",
        type=str,
        default=None,
        help="Settings file (default: .sassref.yaml in the workspace root)",
    )
    common.add_argument(
        "--trace",
        choices=[level.value for level in TraceLevel],
        default=None,
        help="Log verbosity on stderr (overrides the settings file)",
    )
    common.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("definition", "Find the definition of the reference at a position"),
        ("complete", "List completion candidates at a position"),
    ):
        sub = subparsers.add_parser(name, parents=[common], help=help_text)
        sub.add_argument("file", help="Stylesheet containing the cursor")
        sub.add_argument("line", type=int, help="Cursor line (0-indexed)")
        sub.add_argument("column", type=int, help="Cursor column (0-indexed)")
        sub.add_argument(
            "-f", "--format",
            choices=["text", "json"],
            default="text",
            help="Output format (default: text)",
        )

    graph_parser = subparsers.add_parser("graph", parents=[common], help="Render the module graph")
    graph_parser.add_argument(
        "scan_root",
        nargs="?",
        default=None,
        help="Directory to scan (default: the workspace root)",
    )
    graph_parser.add_argument(
        "--entry",
        type=str,
        default=None,
        help="Only follow modules reachable from this stylesheet",
    )
    graph_parser.add_argument(
        "-f", "--format",
        choices=["ascii", "json"],
        default="ascii",
        help="Output format (default: ascii)",
    )
    graph_parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )
    graph_parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Additional directory names to exclude",
    )
    graph_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum directory depth to scan",
    )
    graph_parser.add_argument(
        "--ignore-missing",
        action="store_true",
        help="Hide unresolved module paths from output",
    )
    graph_parser.add_argument(
        "--show-builtins",
        action="store_true",
        help="Show built-in (sass:) modules",
    )

    return parser.parse_args(args)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    root = Path(parsed.root).resolve() if parsed.root else Path.cwd().resolve()
    if not root.is_dir():
        print(f"Error: '{parsed.root}' is not a directory", file=sys.stderr)
        return 1

    try:
        settings = load_settings(Path(parsed.config) if parsed.config else None, root)
        if parsed.trace is not None:
            settings.trace = parse_trace_level(parsed.trace)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.trace)
    include_paths = settings.resolved_include_paths(root)

    if parsed.command == "graph":
        output = _run_graph(parsed, root, include_paths)
    else:
        output = _run_lookup(parsed, root, include_paths)
    if output is None:
        return 1

    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except Exception as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


def _run_lookup(parsed, root: Path, include_paths: List[Path]) -> Optional[str]:
    file_path = Path(parsed.file).resolve()
    try:
        document = Document.from_file(file_path, root)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading '{parsed.file}': {e}", file=sys.stderr)
        return None

    position = Position(parsed.line, parsed.column)

    if parsed.command == "definition":
        location = find_definition(document, position, include_paths)
        if parsed.format == "json":
            return location_to_json(location, root)
        return location_to_text(location, root)

    candidates = provide_completions(document, position, include_paths)
    if parsed.format == "json":
        return candidates_to_json(candidates)
    return candidates_to_text(candidates)


def _run_graph(parsed, root: Path, include_paths: List[Path]) -> Optional[str]:
    scan_root = Path(parsed.scan_root).resolve() if parsed.scan_root else root
    if not scan_root.is_dir():
        print(f"Error: '{parsed.scan_root}' is not a directory", file=sys.stderr)
        return None

    exclude_dirs = None
    if parsed.exclude_dir:
        exclude_dirs = set(parsed.exclude_dir) | DEFAULT_EXCLUDE_DIRS

    try:
        graph = build_graph(
            root=scan_root,
            entry=Path(parsed.entry).resolve() if parsed.entry else None,
            exclude_dirs=exclude_dirs,
            max_depth=parsed.max_depth,
            include_paths=include_paths,
        )
    except Exception as e:
        print(f"Error scanning workspace: {e}", file=sys.stderr)
        return None

    if parsed.format == "json":
        return to_json(
            graph,
            scan_root,
            include_missing=not parsed.ignore_missing,
            include_builtins=parsed.show_builtins,
        )
    return to_ascii(
        graph,
        scan_root,
        style=parsed.ascii_style,
        include_missing=not parsed.ignore_missing,
        include_builtins=parsed.show_builtins,
    )


if __name__ == "__main__":
    sys.exit(main())
