"""Rule resolution — ruleset selection and rule aggregation."""

from branchguard.resolution.aggregator import aggregate
from branchguard.resolution.models import (
    Enforcement,
    MetadataFailures,
    MetadataRule,
    MetadataRules,
    RepoRulesInfo,
    merge_enforcement,
)
from branchguard.resolution.selector import select_rulesets

__all__ = [
    "Enforcement",
    "MetadataFailures",
    "MetadataRule",
    "MetadataRules",
    "RepoRulesInfo",
    "aggregate",
    "merge_enforcement",
    "select_rulesets",
]
