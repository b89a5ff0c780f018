"""Tests for the branch glob dialect and keyword layer."""

import pytest

from branchguard.matching.glob import (
    ALL_KEYWORD,
    DEFAULT_KEYWORD,
    branch_matches_patterns,
    glob_match,
    translate,
)


class TestGlobMatch:
    @pytest.mark.parametrize(
        "pattern,name",
        [
            ("main", "main"),
            ("release/*", "release/1.0"),
            ("*", "main"),
            ("feature/*-fix", "feature/login-fix"),
            ("v?.*", "v1.2"),
            ("release-[0-9]*", "release-1x"),
            ("[!a]b", "cb"),
            ("[^a]b", "cb"),
            ("feature/**", "feature/a/b/c"),
            ("**/hotfix", "hotfix"),
            ("**/hotfix", "team/a/hotfix"),
            ("a/**/b", "a/b"),
            ("a/**/b", "a/x/y/b"),
            ("a//b", "a//b"),
            ("[abc", "[abc"),
            ("{a,b}", "{a,b}"),
            ("a\\*", "a*"),
            ("!main", "!main"),
        ],
    )
    def test_matches(self, pattern, name):
        assert glob_match(name, pattern) is True

    @pytest.mark.parametrize(
        "pattern,name",
        [
            ("main", "dev"),
            ("main", "Main"),
            ("main", "main2"),
            ("release/*", "release/1.0/hotfix"),
            ("*", "feature/x"),
            ("*", ".hidden"),
            ("feature/?", "feature/ab"),
            ("release-[0-9]*", "release-x"),
            ("[!a]b", "ab"),
            ("a?b", "a/b"),
            ("a[/]b", "a/b"),
            ("**/hotfix", "team/hotfixes"),
            ("a//b", "a/b"),
            ("{a,b}", "a"),
            ("a\\*", "ab"),
            ("!main", "dev"),
        ],
    )
    def test_does_not_match(self, pattern, name):
        assert glob_match(name, pattern) is False

    def test_double_star_inside_segment_acts_like_star(self):
        assert glob_match("ab/c", "a**") is False
        assert glob_match("abc", "a**") is True

    def test_translate_is_anchored(self):
        assert translate("main").endswith(r"\Z")


class TestBranchMatchesPatterns:
    def test_empty_or_none_never_matches(self):
        assert branch_matches_patterns("main", [], "main", True) is False
        assert branch_matches_patterns("main", None, "main", True) is False

    def test_first_matching_pattern_wins(self):
        assert branch_matches_patterns("dev", ["main", "d*"], None, False) is True

    def test_all_keyword(self):
        assert branch_matches_patterns("anything/at/all", [ALL_KEYWORD], None, True) is True

    def test_default_keyword(self):
        assert branch_matches_patterns("main", [DEFAULT_KEYWORD], "main", True) is True
        assert branch_matches_patterns("feature/x", [DEFAULT_KEYWORD], "main", True) is False

    def test_default_keyword_unknown_default_branch(self):
        assert branch_matches_patterns("main", [DEFAULT_KEYWORD], None, True) is False
        assert branch_matches_patterns("", [DEFAULT_KEYWORD], "", True) is False

    def test_keywords_are_literal_without_keyword_matching(self):
        assert branch_matches_patterns("main", [ALL_KEYWORD], "main", False) is False
        assert branch_matches_patterns("main", [DEFAULT_KEYWORD], "main", False) is False

    def test_keywords_fall_through_to_glob(self):
        # a literal branch named like the keyword still matches as a glob
        assert branch_matches_patterns("~ALL", [ALL_KEYWORD], None, False) is True
