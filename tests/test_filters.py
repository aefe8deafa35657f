"""Tests for the glob matcher and the ordered filter evaluator."""

import pytest

from changedfiles.filters.evaluator import (
    FilterPattern,
    build_filter,
    include_file,
    parse_patterns,
    trace_file,
)
from changedfiles.filters.matcher import matches


class TestMatcher:
    def test_star_matches_everything(self):
        assert matches("a.txt", "*") is True
        assert matches("deep/nested/dir/a.txt", "*") is True

    def test_basename_matching(self):
        assert matches("src/pkg/module.py", "*.py") is True
        assert matches("src/pkg/module.py", "module.py") is True
        assert matches("src/pkg/module.pyc", "*.py") is False

    def test_dotfiles_are_matched(self):
        assert matches(".env", "*") is True
        assert matches(".github/workflows/ci.yml", "*.yml") is True
        assert matches("config/.hidden/file.txt", "*.txt") is True

    def test_case_sensitive(self):
        assert matches("README.md", "*.md") is True
        assert matches("README.MD", "*.md") is False
        assert matches("readme.md", "README.md") is False

    def test_question_mark_and_classes(self):
        assert matches("v1.txt", "v?.txt") is True
        assert matches("v10.txt", "v?.txt") is False
        assert matches("a.c", "*.[ch]") is True
        assert matches("a.h", "*.[ch]") is True
        assert matches("a.o", "*.[ch]") is False

    def test_path_pattern_matches_from_root(self):
        assert matches(".github/workflows/ci.yml", ".github/*/*.yml") is True
        assert matches("src/app.py", "src/*.py") is True

    def test_path_pattern_matches_nested_suffix(self):
        assert matches("dir/.github/a/b.yml", ".github/*/*.yml") is True
        assert matches("x.yml", ".github/*/*.yml") is False

    def test_path_pattern_needs_segment_boundary(self):
        assert matches("not.github/a/b.yml", ".github/*/*.yml") is False

    def test_leading_slash_anchors(self):
        assert matches("src/app.py", "/src/*.py") is True
        assert matches("lib/src/app.py", "/src/*.py") is False

    def test_malformed_pattern_does_not_raise(self):
        assert matches("a.txt", "[") is False
        assert matches("[", "[") is True
        assert matches("a.txt", "") is False


class TestFilterPattern:
    def test_parse_plain(self):
        assert FilterPattern.parse("*.yml") == FilterPattern("*.yml", negated=False)

    def test_parse_negated(self):
        assert FilterPattern.parse("!docs/*") == FilterPattern("docs/*", negated=True)

    def test_str_round_trip(self):
        assert str(FilterPattern.parse("!docs/*")) == "!docs/*"

    def test_default_when_empty(self):
        assert parse_patterns(None) == [FilterPattern("*")]
        assert parse_patterns([]) == [FilterPattern("*")]
        assert parse_patterns(["", "  "]) == [FilterPattern("*")]

    def test_blank_lines_dropped(self):
        assert parse_patterns(["*.py", "", "!tests/*"]) == [
            FilterPattern("*.py"),
            FilterPattern("tests/*", negated=True),
        ]


class TestIncludeFile:
    @pytest.mark.parametrize(
        "filename", ["a.txt", ".env", "deep/dir/file name.md", "x"]
    )
    def test_default_filter_includes_all(self, filename):
        assert include_file(filename, [FilterPattern("*")]) is True

    def test_empty_pattern_list_excludes(self):
        assert include_file("a.txt", []) is False

    def test_negation_narrows_positive_match(self):
        include = build_filter(["*.yml", "!.github/*/*.yml"])
        assert include("x.yml") is True
        assert include(".github/workflows/ci.yml") is False
        assert include("dir/.github/a/b.yml") is False

    def test_negation_first_cannot_include(self):
        patterns = parse_patterns(["!*.md"])
        assert include_file("README.md", patterns) is False
        assert include_file("a.py", patterns) is False

    def test_leading_negation_then_positive(self):
        patterns = parse_patterns(["!*.md", "*.md"])
        # The later positive pattern still includes the file.
        assert include_file("README.md", patterns) is True
        assert include_file("a.py", patterns) is False

    def test_later_positive_re_includes(self):
        include = build_filter(["*", "!docs/*", "docs/keep.md"])
        assert include("docs/drop.md") is False
        assert include("docs/keep.md") is True
        assert include("src/a.py") is True

    def test_unmatched_file_excluded(self):
        include = build_filter(["src/*"])
        assert include("src/a.py") is True
        assert include("README.md") is False

    def test_independent_per_file(self):
        include = build_filter(["*.py", "!tests/*"])
        results = [include(f) for f in ["a.py", "tests/t.py", "b.py"]]
        assert results == [True, False, True]


class TestTrace:
    def test_trace_records_each_step(self):
        steps = trace_file(".github/w/ci.yml", parse_patterns(["*.yml", "!.github/*/*.yml"]))
        assert steps == [("*.yml", True), ("!.github/*/*.yml", False)]
