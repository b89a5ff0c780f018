"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

FailOn = Literal["bypass", "enforced"]

FAIL_ON_LEVELS = ("bypass", "enforced")
OUTPUT_FORMATS = ("terminal", "json")

STATUS_ORDER: dict[str, int] = {
    "pass": 0,
    "bypass": 1,
    "fail": 2,
}

# status a check must reach to block, per fail_on threshold
_THRESHOLD_STATUS: dict[str, str] = {
    "bypass": "bypass",
    "enforced": "fail",
}


def status_blocks(status: str, fail_on: str) -> bool:
    """Return True if a check *status* is at or above the *fail_on* threshold."""
    threshold = _THRESHOLD_STATUS.get(fail_on, "fail")
    return STATUS_ORDER.get(status, 0) >= STATUS_ORDER[threshold]


@dataclass
class RulesConfig:
    file: str = ".github/rulesets.yaml"
    default_branch: Optional[str] = None


@dataclass
class CheckConfig:
    fail_on: FailOn = "enforced"  # block on strict failures only, or on bypassable ones too


@dataclass
class OutputConfig:
    format: Literal["terminal", "json"] = "terminal"
    show_summary: bool = True


@dataclass
class BranchGuardConfig:
    version: str = "1.0"
    rules: RulesConfig = field(default_factory=RulesConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
