"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List

from branchguard.engine import EvaluationResult
from branchguard.resolution.models import MetadataRules, RepoRulesInfo


def _value(operator: Any) -> str:
    return operator.value if isinstance(operator, Enum) else str(operator)


def _metadata_rules(rules: MetadataRules) -> List[Dict[str, Any]]:
    return [
        {
            "ruleset_id": r.ruleset_id,
            "enforcement": r.enforced.label,
            "description": r.human_description,
            "operator": _value(r.parameters.operator) if r.parameters else None,
            "pattern": r.parameters.pattern if r.parameters else "",
            "negate": r.parameters.negate if r.parameters else False,
            "supported": r.matcher.supported,
        }
        for r in rules
    ]


def info_to_dict(info: RepoRulesInfo) -> Dict[str, Any]:
    """Convert a RepoRulesInfo to a JSON-serialisable dict."""
    return {
        "basic_commit_warning": info.basic_commit_warning.label,
        "update_restricted": info.update_restricted.label,
        "creation_restricted": info.creation_restricted.label,
        "pull_request_required": info.pull_request_required.label,
        "commit_message_patterns": _metadata_rules(info.commit_message_patterns),
        "commit_author_email_patterns": _metadata_rules(info.commit_author_email_patterns),
        "committer_email_patterns": _metadata_rules(info.committer_email_patterns),
        "branch_name_patterns": _metadata_rules(info.branch_name_patterns),
    }


def to_dict(result: EvaluationResult) -> Dict[str, Any]:
    """Convert an EvaluationResult to a JSON-serialisable dict."""
    checks_list: List[Dict[str, Any]] = []
    for c in result.checks:
        checks_list.append({
            "field": c.name,
            "value": c.value,
            "status": c.status,
            "rules": c.rule_count,
            "failed": [
                {"ruleset_id": f.ruleset_id, "description": f.description}
                for f in c.failures.failed
            ],
            "bypassed": [
                {"ruleset_id": f.ruleset_id, "description": f.description}
                for f in c.failures.bypassed
            ],
        })

    return {
        "version": "1.0",
        "branch": result.branch,
        "blocked": result.blocked,
        "rulesets": [
            {"id": rs.id, "name": rs.name} for rs in result.applicable_rulesets
        ],
        "rules": info_to_dict(result.info),
        "checks": checks_list,
        "duration_ms": result.duration_ms,
    }


def render(result: EvaluationResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
