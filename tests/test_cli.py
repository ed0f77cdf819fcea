"""Tests for the command line interface."""

import json

import pytest

from cli import main


@pytest.fixture
def project(workspace, write):
    write({
        "main.scss": '@use "./a" as m;\n.x { @include m.go; }\n',
        "a.scss": "// tools\n@mixin go($size) {}\n$gap: 4px;\n",
    })
    return workspace


class TestLookupCommands:
    """Tests for `definition` and `complete`."""

    def test_definition_text(self, project, capsys):
        """Test the definition is printed relative to the root."""
        code = main(["definition", str(project / "main.scss"), "1", "16", "--root", str(project)])

        assert code == 0
        assert capsys.readouterr().out == "a.scss:1:7\n"

    def test_definition_json_not_found(self, project, capsys):
        """Test a position without a reference."""
        code = main(["definition", str(project / "main.scss"), "0", "0", "--root", str(project), "-f", "json"])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {"found": False}

    def test_complete_json(self, project, capsys):
        """Test completion candidates as JSON."""
        (project / "main.scss").write_text('@use "./a" as m;\na { b: m.$', encoding="utf-8")

        code = main(["complete", str(project / "main.scss"), "1", "10", "--root", str(project), "-f", "json"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert [item["label"] for item in data] == ["$gap"]

    def test_output_file(self, project, capsys):
        """Test writing the result to a file."""
        target = project / "out.txt"

        code = main(["definition", str(project / "main.scss"), "1", "16", "--root", str(project), "-o", str(target)])

        assert code == 0
        assert target.read_text(encoding="utf-8") == "a.scss:1:7\n"
        assert "Output written to" in capsys.readouterr().err

    def test_missing_file(self, project, capsys):
        """Test an unreadable input file."""
        code = main(["definition", str(project / "nope.scss"), "0", "0", "--root", str(project)])

        assert code == 1
        assert "Error reading" in capsys.readouterr().err


class TestGraphCommand:
    """Tests for `graph`."""

    def test_ascii(self, project, capsys):
        """Test the default tree output."""
        code = main(["graph", "--root", str(project)])

        assert code == 0
        assert capsys.readouterr().out == "main.scss\n└── a.scss  (@use as m)\n"

    def test_json(self, project, capsys):
        """Test JSON output."""
        code = main(["graph", str(project), "--root", str(project), "-f", "json"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["edges"] == [{"source": "main.scss", "target": "a.scss", "kind": "use", "alias": "m"}]


class TestSettings:
    """Tests for settings handling in main()."""

    def test_invalid_settings_file(self, project, capsys):
        """Test a broken settings file aborts with an error."""
        (project / ".sassref.yaml").write_text("trace: loud\n", encoding="utf-8")

        code = main(["graph", "--root", str(project)])

        assert code == 1
        assert "Invalid trace level" in capsys.readouterr().err

    def test_trace_flag(self, project, capsys):
        """Test `--trace verbose` logs resolution steps to stderr."""
        code = main(["definition", str(project / "main.scss"), "1", "16", "--root", str(project), "--trace", "verbose"])

        assert code == 0
        err = capsys.readouterr().err
        assert "[INFO] Definition found" in err
        assert "[DEBUG]" in err

    def test_root_must_exist(self, project, capsys):
        """Test a --root that is not a directory."""
        code = main(["graph", "--root", str(project / "nope")])

        assert code == 1
