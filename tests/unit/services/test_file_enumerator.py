"""Tests for recursive file enumeration with ignore rules and filters."""

from pathlib import Path

import pytest

from repo_reader.services.file_enumerator import list_files
from repo_reader.services.glob_matcher import FilterSet


@pytest.fixture
def project(make_project):
    return make_project(
        {
            "README.md": "# readme",
            "src/a.ts": "a",
            "src/a.test.ts": "test",
            "src/nested/b.ts": "b",
            "lib/a.ts": "lib",
            ".git/HEAD": "ref",
            "node_modules/pkg/index.js": "module",
            "docs/.DS_Store": "meta",
        }
    )


class TestListFiles:
    """Test enumeration of visible files."""

    def test_lists_all_files_relative_to_root(self, project):
        files = list_files(project)

        assert sorted(files) == [
            "README.md",
            "lib/a.ts",
            "src/a.test.ts",
            "src/a.ts",
            "src/nested/b.ts",
        ]

    def test_ignores_metadata_and_dependency_directories(self, project):
        files = list_files(project)

        assert not any(f.startswith(".git/") for f in files)
        assert not any(f.startswith("node_modules/") for f in files)
        assert "docs/.DS_Store" not in files

    def test_sub_path_keeps_paths_relative_to_root(self, project):
        files = list_files(project, "src/nested")

        assert files == ["src/nested/b.ts"]

    def test_sub_path_is_normalized(self, project):
        assert sorted(list_files(project, "/../src/")) == sorted(
            list_files(project, "src")
        )

    def test_missing_sub_path_yields_nothing(self, project):
        assert list_files(project, "does/not/exist") == []

    def test_filters_match_full_relative_paths(self, project):
        files = list_files(project, filters=FilterSet(["src/**"], ["**/*.test.ts"]))

        assert sorted(files) == ["src/a.ts", "src/nested/b.ts"]

    def test_filters_with_sub_path(self, project):
        files = list_files(project, "src", FilterSet(["**/b.ts"]))

        assert files == ["src/nested/b.ts"]

    def test_repeated_calls_return_same_set(self, project):
        assert set(list_files(project)) == set(list_files(project))

    def test_unreadable_directory_is_skipped(self, project, monkeypatch):
        locked = project / "locked"
        locked.mkdir()
        (locked / "secret.txt").write_text("hidden")
        original_iterdir = Path.iterdir

        def iterdir(self):
            if self.name == "locked":
                raise PermissionError(f"Permission denied: {self}")
            return original_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", iterdir)

        files = list_files(project)

        assert "locked/secret.txt" not in files
        assert "src/a.ts" in files
