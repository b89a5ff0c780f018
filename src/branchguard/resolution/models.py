"""Resolution models — enforcement levels, metadata rules, per-branch summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Literal, Optional

from branchguard.matching.metadata import MetadataMatcher, matches
from branchguard.rules.models import RuleParameters


class Enforcement(IntEnum):
    """How strictly a rule category applies to the current actor.

    Ordered so that the strictest instance wins a merge.
    """

    NOT_PRESENT = 0
    BYPASS = 1
    ENFORCED = 2

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


def merge_enforcement(current: Enforcement, incoming: Enforcement) -> Enforcement:
    """Return the stricter of two levels."""
    return max(current, incoming)


CheckStatus = Literal["pass", "bypass", "fail"]


@dataclass(frozen=True)
class MetadataRule:
    """A compiled metadata rule from one ruleset."""

    enforced: Enforcement
    matcher: MetadataMatcher
    human_description: Optional[str]
    ruleset_id: int
    parameters: Optional[RuleParameters] = None  # as configured, even when the matcher is unsupported

    def matches(self, candidate: str) -> bool:
        return matches(self.matcher, candidate)


@dataclass(frozen=True)
class MetadataFailure:
    description: Optional[str]
    ruleset_id: int


@dataclass
class MetadataFailures:
    """Rules a candidate string failed, split by enforcement."""

    failed: List[MetadataFailure] = field(default_factory=list)
    bypassed: List[MetadataFailure] = field(default_factory=list)

    @property
    def status(self) -> CheckStatus:
        if self.failed:
            return "fail"
        if self.bypassed:
            return "bypass"
        return "pass"


class MetadataRules:
    """Ordered collection of metadata rules constraining one field."""

    def __init__(self) -> None:
        self._rules: List[MetadataRule] = []

    def push(self, rule: Optional[MetadataRule]) -> None:
        if rule is None:
            return
        self._rules.append(rule)

    def has_rules(self) -> bool:
        return len(self._rules) > 0

    def get_failed_rules(self, candidate: str) -> MetadataFailures:
        """Evaluate every rule against *candidate* and collect failures."""
        failures = MetadataFailures()
        for rule in self._rules:
            if rule.matches(candidate):
                continue
            failure = MetadataFailure(rule.human_description, rule.ruleset_id)
            if rule.enforced == Enforcement.BYPASS:
                failures.bypassed.append(failure)
            else:
                failures.failed.append(failure)
        return failures

    def __iter__(self) -> Iterator[MetadataRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __getitem__(self, index: int) -> MetadataRule:
        return self._rules[index]


@dataclass
class RepoRulesInfo:
    """Merged view of every rule that applies to one branch."""

    basic_commit_warning: Enforcement = Enforcement.NOT_PRESENT
    update_restricted: Enforcement = Enforcement.NOT_PRESENT
    creation_restricted: Enforcement = Enforcement.NOT_PRESENT
    pull_request_required: Enforcement = Enforcement.NOT_PRESENT
    commit_message_patterns: MetadataRules = field(default_factory=MetadataRules)
    commit_author_email_patterns: MetadataRules = field(default_factory=MetadataRules)
    committer_email_patterns: MetadataRules = field(default_factory=MetadataRules)
    branch_name_patterns: MetadataRules = field(default_factory=MetadataRules)
