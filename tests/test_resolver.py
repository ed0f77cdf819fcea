"""Tests for module path resolution."""

import json

from scanner.resolver import resolve_module, relative_candidates


class TestRelativeResolution:
    """Tests for ./ and ../ module paths."""

    def test_flat_file(self, workspace, write):
        """Test `./a` resolves to `a.scss` next to the importer."""
        write({"main.scss": "", "a.scss": ""})

        resolved = resolve_module("./a", workspace / "main.scss", workspace)

        assert resolved == workspace / "a.scss"

    def test_parent_directory(self, workspace, write):
        """Test `../` paths are normalized."""
        write({"src/main.scss": "", "lib/_grid.scss": ""})

        resolved = resolve_module("../lib/grid", workspace / "src" / "main.scss", workspace)

        assert resolved == workspace / "lib" / "_grid.scss"

    def test_flat_file_wins_over_index(self, workspace, write):
        """Test `x.scss` takes precedence over `x/_index.scss`."""
        write({"main.scss": "", "x.scss": "", "x/_index.scss": ""})

        resolved = resolve_module("./x", workspace / "main.scss", workspace)

        assert resolved == workspace / "x.scss"

    def test_index_files(self, workspace, write):
        """Test `_index` before `index`, and `.scss` before `.sass`."""
        write({"main.scss": "", "x/_index.sass": "", "x/index.scss": ""})

        resolved = resolve_module("./x", workspace / "main.scss", workspace)

        assert resolved == workspace / "x" / "_index.sass"

    def test_sass_extension(self, workspace, write):
        """Test indented-syntax files are found."""
        write({"main.scss": "", "_mixins.sass": ""})

        resolved = resolve_module("./mixins", workspace / "main.scss", workspace)

        assert resolved == workspace / "_mixins.sass"

    def test_candidate_order(self, workspace):
        """Test the fixed candidate order."""
        base = workspace / "x"

        names = [str(p.relative_to(workspace)) for p in relative_candidates(base)]

        assert names == [
            "x.scss", "x.sass",
            "x/_index.scss", "x/_index.sass",
            "x/index.scss", "x/index.sass",
            "_x.scss", "_x.sass",
        ]

    def test_missing(self, workspace, write):
        """Test an unresolvable path returns None."""
        write({"main.scss": ""})

        assert resolve_module("./nope", workspace / "main.scss", workspace) is None

    def test_builtin(self, workspace, write):
        """Test built-in modules are never resolved, even if a file matches."""
        write({"main.scss": "", "sass:math.scss": ""})

        assert resolve_module("sass:math", workspace / "main.scss", workspace) is None


class TestPackageResolution:
    """Tests for node_modules lookups."""

    def test_manifest_entry(self, workspace, write):
        """Test the manifest's style entry bypasses the default candidates."""
        write({
            "src/app.scss": "",
            "node_modules/@pkg/x/package.json": json.dumps({"style": "lib/main.scss"}),
            "node_modules/@pkg/x/lib/main.scss": "",
            "node_modules/@pkg/x/_index.scss": "",
        })

        resolved = resolve_module("@pkg/x", workspace / "src" / "app.scss", workspace)

        assert resolved == workspace / "node_modules" / "@pkg" / "x" / "lib" / "main.scss"

    def test_sass_field_wins(self, workspace, write):
        """Test `sass` is consulted before `style`."""
        write({
            "app.scss": "",
            "node_modules/pkg/package.json": json.dumps({"sass": "a.scss", "style": "b.scss"}),
            "node_modules/pkg/a.scss": "",
            "node_modules/pkg/b.scss": "",
        })

        resolved = resolve_module("pkg", workspace / "app.scss", workspace)

        assert resolved == workspace / "node_modules" / "pkg" / "a.scss"

    def test_missing_manifest_entry_falls_back(self, workspace, write):
        """Test a manifest pointing at a missing file falls back to index files."""
        write({
            "app.scss": "",
            "node_modules/pkg/package.json": json.dumps({"style": "dist/gone.css"}),
            "node_modules/pkg/_index.scss": "",
        })

        resolved = resolve_module("pkg", workspace / "app.scss", workspace)

        assert resolved == workspace / "node_modules" / "pkg" / "_index.scss"

    def test_invalid_manifest(self, workspace, write):
        """Test a broken manifest is ignored."""
        write({
            "app.scss": "",
            "node_modules/pkg/package.json": "{not json",
            "node_modules/pkg/index.scss": "",
        })

        resolved = resolve_module("pkg", workspace / "app.scss", workspace)

        assert resolved == workspace / "node_modules" / "pkg" / "index.scss"

    def test_package_subpath_partial(self, workspace, write):
        """Test a path inside a package resolves to a partial file."""
        write({
            "app.scss": "",
            "node_modules/pkg/src/_tokens.scss": "",
        })

        resolved = resolve_module("pkg/src/tokens", workspace / "app.scss", workspace)

        assert resolved == workspace / "node_modules" / "pkg" / "src" / "_tokens.scss"

    def test_walks_up_to_workspace_root(self, workspace, write):
        """Test node_modules of an ancestor directory is found."""
        write({
            "packages/web/src/app.scss": "",
            "node_modules/pkg/_index.scss": "",
        })

        resolved = resolve_module("pkg", workspace / "packages" / "web" / "src" / "app.scss", workspace)

        assert resolved == workspace / "node_modules" / "pkg" / "_index.scss"

    def test_nearest_node_modules_wins(self, workspace, write):
        """Test the closest node_modules containing the package is used."""
        write({
            "packages/web/app.scss": "",
            "packages/web/node_modules/pkg/_index.scss": "",
            "node_modules/pkg/_index.scss": "",
        })

        resolved = resolve_module("pkg", workspace / "packages" / "web" / "app.scss", workspace)

        assert resolved == workspace / "packages" / "web" / "node_modules" / "pkg" / "_index.scss"

    def test_stops_at_workspace_root(self, workspace, write):
        """Test node_modules above the workspace root is not consulted."""
        write({
            "project/app.scss": "",
            "node_modules/pkg/_index.scss": "",
        })
        project = workspace / "project"

        assert resolve_module("pkg", project / "app.scss", project) is None

    def test_include_paths(self, workspace, write):
        """Test include paths are tried after node_modules."""
        write({
            "app.scss": "",
            "vendor/theme/_index.scss": "",
        })

        assert resolve_module("theme", workspace / "app.scss", workspace) is None
        resolved = resolve_module("theme", workspace / "app.scss", workspace, [workspace / "vendor"])

        assert resolved == workspace / "vendor" / "theme" / "_index.scss"
