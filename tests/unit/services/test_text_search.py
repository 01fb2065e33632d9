"""
Tests for multi-file text search.

Covers pattern construction, per-line matching, ordering, output formats,
pagination and the skip rules for oversized or unreadable files.
"""

import builtins
from pathlib import Path

import pytest

from repo_reader.exceptions import RootNotADirectoryError
from repo_reader.services import text_search
from repo_reader.services.text_search import (
    NO_RESULTS_MESSAGE,
    make_text_search_pattern,
    paginate,
    search,
)


class TestPatternConstruction:
    """Test how queries become compiled patterns."""

    def test_blank_query_has_no_pattern(self):
        built = make_text_search_pattern("   ")

        assert built.compiled is None
        assert built.error is None

    def test_literal_mode_escapes_metacharacters(self):
        built = make_text_search_pattern("a.b(")

        assert built.compiled.search("xa.b(y")
        assert not built.compiled.search("axb(")

    def test_whole_word(self):
        built = make_text_search_pattern("foo", whole_word=True)

        assert built.compiled.search("call foo()")
        assert not built.compiled.search("foobar")

    def test_invalid_regex_reports_error(self):
        built = make_text_search_pattern("foo(", regex=True)

        assert built.compiled is None
        assert built.error.startswith("Invalid regular expression:")


class TestSearch:
    """Test searching a project."""

    def test_case_insensitive_by_default(self, make_project):
        root = make_project({"a.py": "Foo()\n"})

        assert search(root, "foo") == "a.py\n  1:Foo()"
        assert search(root, "foo", case_sensitive=True) == NO_RESULTS_MESSAGE

    def test_blank_query_returns_empty_string(self, make_project):
        root = make_project({"a.py": "x"})

        assert search(root, "  ") == ""

    def test_invalid_regex_is_returned_as_text(self, make_project):
        root = make_project({"a.py": "x"})

        assert search(root, "[unclosed", regex=True).startswith(
            "Invalid regular expression:"
        )

    def test_regex_mode(self, make_project):
        root = make_project({"a.py": "def alpha():\nvalue = 1\ndef beta():\n"})

        assert search(root, r"^def \w+", regex=True) == (
            "a.py\n  1:def alpha():\n  3:def beta():"
        )

    def test_line_with_multiple_matches_counts_once(self, make_project):
        root = make_project({"a.txt": "foo foo foo\nbar\nfoo"})

        assert search(root, "foo") == "a.txt\n  1:foo foo foo\n  3:foo"

    def test_every_line_is_tested_independently(self, make_project):
        root = make_project({"a.txt": "foo\nfoo\nfoo\n"})

        assert search(root, "foo", regex=True) == "a.txt\n  1:foo\n  2:foo\n  3:foo"

    def test_crlf_lines(self, make_project):
        root = make_project({})
        (root / "win.txt").write_bytes(b"first\r\nsecond match\r\n")

        assert search(root, "match") == "win.txt\n  2:second match"

    def test_sections_sorted_by_path_and_joined_by_blank_line(self, make_project):
        root = make_project(
            {"b.txt": "needle", "a/z.txt": "x\nneedle", "a/a.txt": "needle"}
        )

        assert search(root, "needle") == (
            "a/a.txt\n  1:needle\n\na/z.txt\n  2:needle\n\nb.txt\n  1:needle"
        )

    def test_filters_apply(self, make_project):
        root = make_project(
            {
                "src/a.ts": "needle",
                "src/a.test.ts": "needle",
                "lib/a.ts": "needle",
            }
        )

        result = search(
            root,
            "needle",
            include_globs=["src/**"],
            exclude_globs=["**/*.test.ts"],
            files_only=True,
        )

        assert result == "src/a.ts"

    def test_ignored_directories_are_not_searched(self, make_project):
        root = make_project({"node_modules/x/i.js": "needle", ".git/config": "needle"})

        assert search(root, "needle") == NO_RESULTS_MESSAGE

    def test_oversized_files_are_skipped(self, make_project, monkeypatch):
        root = make_project({"big.txt": "needle " * 10, "small.txt": "needle"})
        monkeypatch.setattr(text_search, "MAX_FILE_SIZE_BYTES", 20)

        assert search(root, "needle", files_only=True) == "small.txt"

    def test_unreadable_files_are_skipped(self, make_project, monkeypatch):
        root = make_project(
            {"a.txt": "needle", "locked.txt": "needle", "z.txt": "x\nneedle"}
        )

        def fake_open(file, *args, **kwargs):
            if Path(file).name == "locked.txt":
                raise PermissionError(f"Permission denied: {file}")
            return builtins.open(file, *args, **kwargs)

        monkeypatch.setattr(text_search, "open", fake_open, raising=False)

        assert search(root, "needle") == "a.txt\n  1:needle\n\nz.txt\n  2:needle"

    def test_trailing_newline_is_not_an_extra_line(self, make_project):
        root = make_project({"a.txt": "x\n", "empty.txt": ""})

        assert search(root, "^$", regex=True) == NO_RESULTS_MESSAGE

    def test_blank_lines_inside_a_file_still_match(self, make_project):
        root = make_project({"a.txt": "x\n\ny\n"})

        assert search(root, "^$", regex=True) == "a.txt\n  2:"

    def test_root_must_be_a_directory(self, tmp_path):
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")

        with pytest.raises(RootNotADirectoryError):
            search(file_path, "x")


class TestPagination:
    """Test paging of files and file sections."""

    @pytest.fixture
    def root(self, make_project):
        return make_project({f"f{i}.txt": f"hit {i}" for i in range(1, 6)})

    def test_files_only_pages(self, root):
        assert search(root, "hit", files_only=True, page=1, page_size=2) == (
            "f1.txt\nf2.txt"
        )
        assert search(root, "hit", files_only=True, page=3, page_size=2) == "f5.txt"
        assert (
            search(root, "hit", files_only=True, page=4, page_size=2)
            == NO_RESULTS_MESSAGE
        )

    def test_section_pages(self, root):
        assert search(root, "hit", page=2, page_size=2) == (
            "f3.txt\n  1:hit 3\n\nf4.txt\n  1:hit 4"
        )

    def test_no_page_size_returns_everything(self, root):
        assert search(root, "hit", files_only=True, page=3).split("\n") == [
            "f1.txt",
            "f2.txt",
            "f3.txt",
            "f4.txt",
            "f5.txt",
        ]

    def test_paginate_helper(self):
        items = list(range(7))

        assert paginate(items, 1, 3) == [0, 1, 2]
        assert paginate(items, 3, 3) == [6]
        assert paginate(items, 4, 3) == []
        assert paginate(items, 0, 3) == [0, 1, 2]
        assert paginate(items, 2, 0) == items
        assert paginate(items, 2, None) == items
