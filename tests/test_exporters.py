"""Tests for exporters."""

import json
from pathlib import Path

from graph.model import ModuleGraph, USE, FORWARD
from graph.records import Location
from exporters.ascii_exporter import to_ascii
from exporters.json_exporter import to_json, location_to_json, candidates_to_json
from exporters.text_exporter import location_to_text, candidates_to_text
from providers.completion import CandidateKind, CompletionCandidate
from providers.document import Position, Range


ROOT = Path("/repo")


def _sample_graph():
    graph = ModuleGraph()
    main = ROOT / "main.scss"
    graph.add_edge(main, ROOT / "_theme.scss", USE, "t")
    graph.add_edge(main, ROOT / "tools.scss", FORWARD, "tl-")
    graph.add_edge(ROOT / "_theme.scss", ROOT / "tools.scss", FORWARD)
    graph.add_missing(main, "./gone")
    graph.add_builtin(main, "sass:math")
    return graph


CANDIDATES = [
    CompletionCandidate(
        label="$primary",
        kind=CandidateKind.VARIABLE,
        insert_text="$primary",
        detail="$primary: #036",
        replace_range=Range(Position(1, 17), Position(1, 18)),
    ),
    CompletionCandidate(
        label="bordered",
        kind=CandidateKind.MIXIN,
        insert_text="bordered",
        detail="($width)",
        filter_text="x",
    ),
]


class TestASCIIExporter:
    """Tests for ASCII exporter."""

    def test_empty_graph(self):
        """Test exporting empty graph."""
        assert to_ascii(ModuleGraph(), ROOT) == ""

    def test_tree(self):
        """Test a tree with labels and a missing leaf."""
        output = to_ascii(_sample_graph(), ROOT)

        assert output.split("\n") == [
            "main.scss",
            "├── _theme.scss  (@use as t)",
            "│   └── tools.scss  (@forward)",
            "├── tools.scss  (@forward as tl-*)",
            "└── ./gone [MISSING]",
        ]

    def test_ascii_style_with_builtins(self):
        """Test pure ASCII output and built-in leaves."""
        output = to_ascii(_sample_graph(), ROOT, style="ascii", include_missing=False, include_builtins=True)

        assert output.split("\n") == [
            "main.scss",
            "|-- _theme.scss  (@use as t)",
            "|   \\-- tools.scss  (@forward)",
            "|-- tools.scss  (@forward as tl-*)",
            "\\-- sass:math [BUILTIN]",
        ]

    def test_cycle_marker(self):
        """Test a module already on the branch is marked and not expanded."""
        graph = ModuleGraph()
        graph.add_edge(ROOT / "entry.scss", ROOT / "a.scss", USE, "a")
        graph.add_edge(ROOT / "a.scss", ROOT / "b.scss", FORWARD)
        graph.add_edge(ROOT / "b.scss", ROOT / "a.scss", FORWARD)

        output = to_ascii(graph, ROOT)

        assert output.split("\n") == [
            "entry.scss",
            "└── a.scss  (@use as a)",
            "    └── b.scss  (@forward)",
            "        └── a.scss [*]  (@forward)",
        ]

    def test_pure_cycle(self):
        """Test a graph without roots still renders."""
        graph = ModuleGraph()
        graph.add_edge(ROOT / "a.scss", ROOT / "b.scss", FORWARD)
        graph.add_edge(ROOT / "b.scss", ROOT / "a.scss", FORWARD)

        output = to_ascii(graph, ROOT)

        assert output.startswith("a.scss\n")
        assert "b.scss [*]" in output


class TestJSONExporter:
    """Tests for JSON exporter."""

    def test_graph(self):
        """Test nodes and edges of every kind."""
        data = json.loads(to_json(_sample_graph(), ROOT))

        assert data["nodes"] == ["_theme.scss", "main.scss", "tools.scss"]
        assert data["edges"] == [
            {"source": "_theme.scss", "target": "tools.scss", "kind": "forward"},
            {"source": "main.scss", "target": "_theme.scss", "kind": "use", "alias": "t"},
            {"source": "main.scss", "target": "tools.scss", "kind": "forward", "prefix": "tl-"},
            {"source": "main.scss", "target": "./gone", "missing": True},
            {"source": "main.scss", "target": "sass:math", "builtin": True},
        ]

    def test_graph_without_extras(self):
        """Test missing and built-in entries can be left out."""
        data = json.loads(to_json(_sample_graph(), ROOT, include_missing=False, include_builtins=False))

        assert all("kind" in edge for edge in data["edges"])

    def test_location(self):
        """Test found and not-found definitions."""
        found = json.loads(location_to_json(Location(ROOT / "lib" / "_a.scss", 3, 7), ROOT))

        assert found == {"found": True, "file": "lib/_a.scss", "line": 3, "column": 7}
        assert json.loads(location_to_json(None, ROOT)) == {"found": False}

    def test_candidates(self):
        """Test optional fields are only present when set."""
        data = json.loads(candidates_to_json(CANDIDATES))

        assert data[0] == {
            "label": "$primary",
            "kind": "variable",
            "insertText": "$primary",
            "detail": "$primary: #036",
            "range": {
                "start": {"line": 1, "character": 17},
                "end": {"line": 1, "character": 18},
            },
        }
        assert "range" not in data[1]
        assert data[1]["filterText"] == "x"


class TestTextExporter:
    """Tests for plain text exporter."""

    def test_location(self):
        """Test `path:line:column` output."""
        assert location_to_text(Location(ROOT / "a.scss", 1, 7), ROOT) == "a.scss:1:7"
        assert location_to_text(None, ROOT) == "No definition found"

    def test_location_outside_root(self):
        """Test files outside the workspace keep their absolute path."""
        assert location_to_text(Location(Path("/elsewhere/a.scss"), 0, 0), ROOT) == "/elsewhere/a.scss:0:0"

    def test_candidates(self):
        """Test aligned rows."""
        assert candidates_to_text(CANDIDATES).split("\n") == [
            "$primary  variable  $primary: #036",
            "bordered  mixin     ($width)",
        ]
        assert candidates_to_text([]) == "No completions"
