"""Pattern matching — branch globs and metadata matchers."""

from branchguard.matching.glob import (
    ALL_KEYWORD,
    DEFAULT_KEYWORD,
    branch_matches_patterns,
    glob_match,
)
from branchguard.matching.metadata import (
    UNSUPPORTED,
    MetadataMatcher,
    compile_matcher,
    describe,
    matches,
)

__all__ = [
    "ALL_KEYWORD",
    "DEFAULT_KEYWORD",
    "MetadataMatcher",
    "UNSUPPORTED",
    "branch_matches_patterns",
    "compile_matcher",
    "describe",
    "glob_match",
    "matches",
]
