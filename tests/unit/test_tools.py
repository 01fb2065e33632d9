"""Tests for the configuration-aware tool facade."""

import json

import pytest

from repo_reader.exceptions import DocumentNotFoundError
from repo_reader.local_reference import create_local_reference
from repo_reader.tools import RepoReaderTools


@pytest.fixture
def tools(make_project):
    root = make_project(
        {
            "repo-reader.config.json": json.dumps(
                {"name": "lib", "files": ["docs/**", "README.md"], "depth": 1}
            ),
            "README.md": "intro needle",
            "docs/guide/setup.md": "setup needle",
            "src/core.py": "needle = 1",
        }
    )
    return RepoReaderTools(create_local_reference(root))


class TestRepoReaderTools:
    """Test that configuration supplies defaults for every operation."""

    def test_tool_names_derive_from_config_name(self, tools):
        assert [t.name for t in tools.describe()] == [
            "lib-menu",
            "lib-read-document",
            "lib-search",
        ]

    def test_menu_uses_config_files_and_depth(self, tools):
        assert tools.hierarchy_menu() == "project\n├── docs\n└── README.md"

    def test_menu_explicit_depth_wins(self, tools):
        assert tools.hierarchy_menu(depth=-1) == "\n".join(
            [
                "project",
                "├── docs",
                "│   └── guide",
                "│       └── setup.md",
                "└── README.md",
            ]
        )

    def test_menu_explicit_includes_replace_config_files(self, tools):
        assert tools.hierarchy_menu(include_globs=["src/**"]) == "project\n└── src"

    def test_read_respects_config_files(self, tools):
        assert tools.read_document("setup") == "setup needle"
        with pytest.raises(DocumentNotFoundError):
            tools.read_document("core.py")

    def test_search_respects_config_files(self, tools):
        assert tools.search("needle", files_only=True) == "README.md\ndocs/guide/setup.md"
        assert tools.search("needle", include_globs=["src/**"]) == "src/core.py\n  1:needle = 1"
