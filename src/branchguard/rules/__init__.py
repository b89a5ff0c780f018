"""Rules — data models and document loading."""

from branchguard.rules.loader import (
    RulesDocument,
    RulesLoadError,
    load_rules_document,
    parse_rules_document,
)
from branchguard.rules.models import (
    BypassMode,
    MetadataOperator,
    RefNameCondition,
    Rule,
    RuleParameters,
    RuleType,
    Ruleset,
)

__all__ = [
    "BypassMode",
    "MetadataOperator",
    "RefNameCondition",
    "Rule",
    "RuleParameters",
    "RuleType",
    "Ruleset",
    "RulesDocument",
    "RulesLoadError",
    "load_rules_document",
    "parse_rules_document",
]
