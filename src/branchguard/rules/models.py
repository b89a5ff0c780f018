"""Rule and ruleset data models — already-deserialised repository rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class RuleType(str, Enum):
    UPDATE = "update"
    CREATION = "creation"
    PULL_REQUEST = "pull_request"
    REQUIRED_DEPLOYMENTS = "required_deployments"
    REQUIRED_SIGNATURES = "required_signatures"
    REQUIRED_STATUS_CHECKS = "required_status_checks"
    COMMIT_MESSAGE_PATTERN = "commit_message_pattern"
    COMMIT_AUTHOR_EMAIL_PATTERN = "commit_author_email_pattern"
    COMMITTER_EMAIL_PATTERN = "committer_email_pattern"
    BRANCH_NAME_PATTERN = "branch_name_pattern"


class MetadataOperator(str, Enum):
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    CONTAINS = "contains"
    REGEX = "regex"


class BypassMode(str, Enum):
    ALWAYS = "always"
    PULL_REQUESTS_ONLY = "pull_requests_only"
    NEVER = "never"


def parse_rule_type(value: str) -> Union[RuleType, str]:
    """Return the RuleType for *value*, or the raw string if unknown."""
    try:
        return RuleType(value)
    except ValueError:
        return value


def parse_operator(value: str) -> Union[MetadataOperator, str]:
    """Return the MetadataOperator for *value*, or the raw string if unknown."""
    try:
        return MetadataOperator(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class RuleParameters:
    """Parameters of a metadata (pattern-typed) rule."""

    operator: Union[MetadataOperator, str]
    pattern: str
    negate: bool = False
    name: Optional[str] = None


@dataclass(frozen=True)
class Rule:
    """A single rule instance as returned for a branch.

    ``type`` keeps unrecognised rule types as raw strings so newer rule
    kinds load without error; the aggregator ignores them.
    """

    type: Union[RuleType, str]
    ruleset_id: int
    parameters: Optional[RuleParameters] = None


@dataclass(frozen=True)
class RefNameCondition:
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Ruleset:
    """A named group of rules targeting branches by ref name."""

    id: int
    name: str = ""
    current_user_can_bypass: Union[BypassMode, str] = BypassMode.NEVER
    ref_name: Optional[RefNameCondition] = None

    @property
    def always_bypassable(self) -> bool:
        """True if the current actor can always bypass this ruleset."""
        return self.current_user_can_bypass == BypassMode.ALWAYS

    @property
    def include(self) -> List[str]:
        return self.ref_name.include if self.ref_name else []

    @property
    def exclude(self) -> List[str]:
        return self.ref_name.exclude if self.ref_name else []
