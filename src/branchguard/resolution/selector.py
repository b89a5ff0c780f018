"""Ruleset selection — which rulesets target a given branch."""

from __future__ import annotations

from typing import List, Mapping, Optional

from branchguard.matching.glob import branch_matches_patterns
from branchguard.rules.models import Ruleset


def select_rulesets(
    branch_name: str,
    rulesets: Mapping[int, Ruleset],
    default_branch_name: Optional[str],
) -> List[Ruleset]:
    """Return rulesets whose ref_name condition selects *branch_name*.

    A ruleset applies when the branch matches its include list (keywords
    honoured) and does not match its exclude list (keywords not honoured).
    Rulesets with neither list are skipped. Input order is preserved.
    """
    applicable: List[Ruleset] = []

    if not branch_name or not rulesets:
        return applicable

    for rs in rulesets.values():
        included = rs.include
        excluded = rs.exclude

        # nothing to match against
        if not included and not excluded:
            continue

        if not branch_matches_patterns(
            branch_name, included, default_branch_name, match_keywords=True
        ):
            continue

        if branch_matches_patterns(
            branch_name, excluded, default_branch_name, match_keywords=False
        ):
            continue

        applicable.append(rs)

    return applicable
