"""Evaluation engine — select rulesets, aggregate rules, check metadata.

Only rulesets that target the branch are handed to the aggregator, so rules
belonging to any other ruleset are dropped as unknown.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from branchguard.config.schema import status_blocks
from branchguard.resolution.aggregator import aggregate
from branchguard.resolution.models import MetadataFailures, MetadataRules, RepoRulesInfo
from branchguard.resolution.selector import select_rulesets
from branchguard.rules.loader import RulesDocument
from branchguard.rules.models import Ruleset

logger = logging.getLogger(__name__)


class EvaluationError(Exception):
    """Raised on internal evaluation error."""


@dataclass
class MetadataCheck:
    """Outcome of checking one metadata value against its rules."""

    name: str  # 'commit_message' | 'author_email' | 'committer_email' | 'branch_name'
    value: str
    failures: MetadataFailures
    rule_count: int

    @property
    def status(self) -> str:
        return self.failures.status


@dataclass
class EvaluationResult:
    branch: str
    applicable_rulesets: List[Ruleset] = field(default_factory=list)
    info: RepoRulesInfo = field(default_factory=RepoRulesInfo)
    checks: List[MetadataCheck] = field(default_factory=list)
    blocked: bool = False
    duration_ms: float = 0.0

    @property
    def failed_checks(self) -> List[MetadataCheck]:
        return [c for c in self.checks if c.status != "pass"]


def _check(field_name: str, value: Optional[str], rules: MetadataRules) -> Optional[MetadataCheck]:
    if value is None or not rules.has_rules():
        return None
    return MetadataCheck(
        name=field_name,
        value=value,
        failures=rules.get_failed_rules(value),
        rule_count=len(rules),
    )


def evaluate(
    document: RulesDocument,
    branch: str,
    *,
    commit_message: Optional[str] = None,
    author_email: Optional[str] = None,
    committer_email: Optional[str] = None,
    default_branch: Optional[str] = None,
    fail_on: str = "enforced",
) -> EvaluationResult:
    """Evaluate *document* for a push of *branch* with the given metadata."""
    start = time.perf_counter()
    default_branch = default_branch or document.default_branch

    try:
        applicable = select_rulesets(branch, document.rulesets, default_branch)
        logger.debug(
            "%d of %d rulesets apply to %r",
            len(applicable), len(document.rulesets), branch,
        )

        info = aggregate(document.rules, {rs.id: rs for rs in applicable})

        checks: List[MetadataCheck] = []
        for check in (
            _check("commit_message", commit_message, info.commit_message_patterns),
            _check("author_email", author_email, info.commit_author_email_patterns),
            _check("committer_email", committer_email, info.committer_email_patterns),
            _check("branch_name", branch, info.branch_name_patterns),
        ):
            if check is not None:
                checks.append(check)
    except Exception as exc:
        raise EvaluationError(f"Internal evaluation error for branch {branch!r}: {exc}") from exc

    blocked = any(status_blocks(c.status, fail_on) for c in checks)
    elapsed = (time.perf_counter() - start) * 1000

    return EvaluationResult(
        branch=branch,
        applicable_rulesets=applicable,
        info=info,
        checks=checks,
        blocked=blocked,
        duration_ms=round(elapsed, 2),
    )
