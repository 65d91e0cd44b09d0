"""Tests for the project scanner and structure analyzer."""

from pathlib import Path

import pytest

from nextlens.analysis.application.scanner import (
    ProjectScanner,
    directory_role_flags,
    file_role_flags,
    iter_directories,
    iter_files,
    scan_project,
)
from nextlens.analysis.application.structure_analyzer import analyze_structure, count_files_by_type
from nextlens.analysis.domain.structure import DirectoryEntry
from nextlens.shared.domain.exceptions import ConfigurationError, ProjectRootError


def _assert_sorted(directory: DirectoryEntry) -> None:
    keys = [(0 if isinstance(child, DirectoryEntry) else 1, child.name) for child in directory.children]
    assert keys == sorted(keys)
    for child in directory.directories:
        _assert_sorted(child)


class TestProjectScanner:
    """Scanning real directories."""

    def test_children_sorted_directories_first(self, project_factory):
        """Test every directory lists subdirectories before files, each by name."""
        root = project_factory(
            {
                "zeta.ts": "",
                "Alpha.tsx": "",
                "b/index.ts": "",
                "a/z.ts": "",
                "a/m/x.ts": "",
                "a/B.tsx": "",
            }
        )

        tree = scan_project(root)

        _assert_sorted(tree)
        assert [child.name for child in tree.children] == ["a", "b", "Alpha.tsx", "zeta.ts"]

    def test_excludes_dependency_and_build_directories(self, sample_project):
        tree = scan_project(sample_project)

        names = {directory.name for directory in iter_directories(tree)}
        assert "node_modules" not in names
        assert all("node_modules" not in file.path for file in iter_files(tree))

    def test_configured_exclusions(self, project_factory):
        root = project_factory({"stories/Button.stories.tsx": "", "src/a.ts": ""})

        tree = ProjectScanner(root, exclude_dirs=["stories"]).scan()

        assert [directory.name for directory in tree.directories] == ["src"]

    def test_extension_allow_list(self, project_factory):
        root = project_factory({"logo.png": "", "notes.md": "", "app.tsx": "", "data.json": "{}"})

        tree = scan_project(root)

        assert sorted(file.name for file in tree.files) == ["app.tsx", "data.json", "notes.md"]

    def test_file_counts_are_transitive(self, sample_project):
        tree = scan_project(sample_project)

        assert tree.file_count == sum(1 for _ in iter_files(tree))
        pages = next(d for d in tree.directories if d.name == "pages")
        assert pages.file_count == 2

    def test_relative_paths(self, sample_project):
        tree = scan_project(sample_project)

        assert tree.relative_path == ""
        relative = sorted(file.relative_path for file in iter_files(tree))
        assert "components/Header.tsx" in relative
        assert "pages/[id].tsx" in relative

    def test_missing_root_is_fatal(self, tmp_path):
        with pytest.raises(ProjectRootError) as exc_info:
            scan_project(tmp_path / "does-not-exist")

        assert isinstance(exc_info.value, ConfigurationError)
        assert "path" in exc_info.value.context

    def test_file_root_is_fatal(self, tmp_path):
        target = tmp_path / "file.ts"
        target.write_text("")

        with pytest.raises(ProjectRootError):
            scan_project(target)

    def test_unreadable_subdirectory_is_skipped(self, project_factory, monkeypatch):
        """Test a subdirectory that cannot be listed is left out and the scan continues."""
        root = project_factory(
            {
                "locked/secret.ts": "",
                "locked/deep/more.ts": "",
                "open/a.ts": "",
                "open/b.tsx": "",
                "top.ts": "",
            }
        )
        original_iterdir = Path.iterdir

        def iterdir(self):
            if self.name == "locked":
                raise PermissionError(13, "Permission denied", str(self))
            return original_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", iterdir)

        tree = scan_project(root)

        assert [child.name for child in tree.children] == ["open", "top.ts"]
        assert tree.file_count == 3
        assert all("locked" not in file.relative_path for file in iter_files(tree))
        assert tree.directories[0].file_count == 2

    def test_empty_project(self, project_factory):
        tree = scan_project(project_factory({}))

        assert tree.children == []
        assert tree.file_count == 0


class TestRoleFlags:
    """Path-based role guesses."""

    def test_directory_flags(self):
        assert directory_role_flags("pages").is_pages
        assert directory_role_flags("app").is_app
        assert directory_role_flags("ui").is_components
        assert not directory_role_flags("src").is_components

    def test_page_flags(self):
        assert file_role_flags("pages/index.tsx", ".tsx").is_page
        assert file_role_flags("src/app/dashboard/page.tsx", ".tsx").is_page
        assert not file_role_flags("app/components/Nav.tsx", ".tsx").is_page
        assert not file_role_flags("pages/notes.md", ".md").is_page

    def test_composable_unit_flags(self):
        assert file_role_flags("src/Button.tsx", ".tsx").is_composable_unit
        assert file_role_flags("components/button.jsx", ".jsx").is_composable_unit
        assert file_role_flags("widgets/index.tsx", ".tsx").is_composable_unit
        assert not file_role_flags("components/Button.ts", ".ts").is_composable_unit

    def test_layout_flag(self):
        assert file_role_flags("app/layout.tsx", ".tsx").is_layout

    def test_flags_ignore_directories_above_the_root(self):
        """Test only segments below the scan root are considered."""
        assert not file_role_flags("lib/format.ts", ".ts").is_page


class TestStructureAnalyzer:
    """File counts per category."""

    def test_counts(self, sample_project):
        report = analyze_structure(scan_project(sample_project))
        stats = report.stats

        assert report.name == "project"
        assert stats.total == 6
        assert stats.pages == 2
        assert stats.components == 2
        assert stats.styles == 1
        assert stats.utils == 1
        assert stats.apis == 0

    def test_api_and_layout_counts(self, project_factory):
        root = project_factory({"pages/api/users.ts": "", "app/layout.tsx": "", "src/utils/a.ts": ""})

        counts = count_files_by_type(scan_project(root))

        assert counts.apis == 1
        assert counts.layouts == 1
        assert counts.utils == 1

    def test_report_json_uses_camel_case(self, sample_project):
        data = analyze_structure(scan_project(sample_project)).to_json()

        assert set(data) == {"name", "structure", "stats"}
        assert data["structure"]["relativePath"] == ""
        assert "fileCount" in data["structure"]
        first_dir = data["structure"]["children"][0]
        assert first_dir["type"] == "directory"
        assert "isComponents" in first_dir["roleFlags"]
