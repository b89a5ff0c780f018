"""Shared test fixtures — sample rulesets, rules documents, temp git repos."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from branchguard.rules.models import (
    MetadataOperator,
    RefNameCondition,
    Rule,
    RuleParameters,
    RuleType,
    Ruleset,
)


def make_ruleset(
    id: int,
    include=None,
    exclude=None,
    bypass: str = "never",
    name: str = "",
) -> Ruleset:
    """Build a Ruleset with a ref_name condition."""
    return Ruleset(
        id=id,
        name=name or f"ruleset-{id}",
        current_user_can_bypass=bypass,
        ref_name=RefNameCondition(include=list(include or []), exclude=list(exclude or [])),
    )


def make_pattern_rule(
    rule_type: RuleType,
    ruleset_id: int,
    operator: MetadataOperator,
    pattern: str,
    negate: bool = False,
) -> Rule:
    return Rule(
        type=rule_type,
        ruleset_id=ruleset_id,
        parameters=RuleParameters(operator=operator, pattern=pattern, negate=negate),
    )


@pytest.fixture
def sample_document_data() -> Dict[str, Any]:
    """An exported rules document covering every rule category."""
    return {
        "default_branch": "main",
        "rulesets": [
            {
                "id": 1,
                "name": "protect-default",
                "current_user_can_bypass": "never",
                "conditions": {"ref_name": {"include": ["~DEFAULT"], "exclude": []}},
                "rules": [
                    {"type": "pull_request"},
                    {"type": "required_status_checks"},
                    {
                        "type": "commit_message_pattern",
                        "parameters": {"operator": "starts_with", "pattern": "JIRA-", "negate": False},
                    },
                ],
            },
            {
                "id": 2,
                "name": "all-branches",
                "current_user_can_bypass": "always",
                "conditions": {"ref_name": {"include": ["~ALL"], "exclude": ["release/*"]}},
                "rules": [
                    {
                        "type": "commit_author_email_pattern",
                        "parameters": {"operator": "ends_with", "pattern": "@example.com"},
                    },
                ],
            },
            {
                "id": 3,
                "name": "releases",
                "current_user_can_bypass": "pull_requests_only",
                "conditions": {"ref_name": {"include": ["release/*"], "exclude": []}},
                "rules": [
                    {"type": "creation"},
                    {"type": "update"},
                ],
            },
            {
                "id": 4,
                "name": "untargeted",
                "conditions": {"ref_name": {"include": [], "exclude": []}},
                "rules": [{"type": "pull_request"}],
            },
        ],
        "rules": [
            {
                "type": "branch_name_pattern",
                "ruleset_id": 2,
                "parameters": {"operator": "regex", "pattern": "^[a-z0-9/._-]+$"},
            },
            {"type": "pull_request", "ruleset_id": 99},
        ],
    }


@pytest.fixture
def rules_file(tmp_path: Path, sample_document_data: Dict[str, Any]) -> Path:
    """The sample rules document written as YAML."""
    path = tmp_path / "rulesets.yaml"
    path.write_text(yaml.safe_dump(sample_document_data), encoding="utf-8")
    return path


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository on branch ``main``."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "dev@example.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "symbolic-ref", "HEAD", "refs/heads/main"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
