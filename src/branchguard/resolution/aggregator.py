"""Rule aggregation — merge rule instances into one per-branch summary."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from branchguard.matching.metadata import compile_matcher, describe
from branchguard.resolution.models import (
    Enforcement,
    MetadataRule,
    RepoRulesInfo,
    merge_enforcement,
)
from branchguard.rules.models import Rule, RuleType, Ruleset, parse_rule_type

logger = logging.getLogger(__name__)

_BASIC_COMMIT_TYPES = frozenset({
    RuleType.UPDATE,
    RuleType.REQUIRED_DEPLOYMENTS,
    RuleType.REQUIRED_SIGNATURES,
    RuleType.REQUIRED_STATUS_CHECKS,
})


def to_metadata_rule(rule: Rule, enforced: Enforcement) -> Optional[MetadataRule]:
    """Compile a pattern-typed rule. Returns None if it has no parameters."""
    if rule.parameters is None:
        return None
    return MetadataRule(
        enforced=enforced,
        matcher=compile_matcher(rule.parameters),
        human_description=describe(rule.parameters),
        ruleset_id=rule.ruleset_id,
        parameters=rule.parameters,
    )


def aggregate(rules: Iterable[Rule], rulesets: Mapping[int, Ruleset]) -> RepoRulesInfo:
    """Build a RepoRulesInfo from *rules*, resolving each against *rulesets*.

    Rules whose ruleset is missing are dropped: without the ruleset the
    bypass behaviour for the actor is unknown. A category configured more
    than once takes its strictest level.
    """
    info = RepoRulesInfo()

    for rule in rules:
        ruleset = rulesets.get(rule.ruleset_id)
        if ruleset is None:
            logger.debug(
                "Dropping %s rule: unknown ruleset %s", rule.type, rule.ruleset_id
            )
            continue

        enforced = Enforcement.BYPASS if ruleset.always_bypassable else Enforcement.ENFORCED
        rule_type = parse_rule_type(rule.type)

        if rule_type in _BASIC_COMMIT_TYPES:
            info.basic_commit_warning = merge_enforcement(info.basic_commit_warning, enforced)
            if rule_type == RuleType.UPDATE:
                info.update_restricted = merge_enforcement(info.update_restricted, enforced)

        elif rule_type == RuleType.CREATION:
            info.creation_restricted = merge_enforcement(info.creation_restricted, enforced)

        elif rule_type == RuleType.PULL_REQUEST:
            info.pull_request_required = merge_enforcement(
                info.pull_request_required, enforced
            )

        elif rule_type == RuleType.COMMIT_MESSAGE_PATTERN:
            info.commit_message_patterns.push(to_metadata_rule(rule, enforced))

        elif rule_type == RuleType.COMMIT_AUTHOR_EMAIL_PATTERN:
            info.commit_author_email_patterns.push(to_metadata_rule(rule, enforced))

        elif rule_type == RuleType.COMMITTER_EMAIL_PATTERN:
            info.committer_email_patterns.push(to_metadata_rule(rule, enforced))

        elif rule_type == RuleType.BRANCH_NAME_PATTERN:
            info.branch_name_patterns.push(to_metadata_rule(rule, enforced))

        else:
            # unsupported rule type, not surfaced
            logger.debug("Ignoring unsupported rule type %r", rule_type)

    return info
