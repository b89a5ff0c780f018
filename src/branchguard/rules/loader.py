"""Load exported rulesets and rules from a YAML or JSON document."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from branchguard.rules.models import (
    RefNameCondition,
    Rule,
    RuleParameters,
    Ruleset,
    parse_operator,
    parse_rule_type,
)


class RulesLoadError(Exception):
    """Raised when a rules document is unreadable or malformed."""


@dataclass
class RulesDocument:
    """Rulesets keyed by id plus the flat list of rule instances."""

    rulesets: Dict[int, Ruleset] = field(default_factory=dict)
    rules: List[Rule] = field(default_factory=list)
    default_branch: Optional[str] = None


def _parse_parameters(data: Any) -> Optional[RuleParameters]:
    if not isinstance(data, dict) or "operator" not in data:
        return None
    negate = data.get("negate", False)
    if not isinstance(negate, bool):
        raise RulesLoadError(f"'negate' must be true or false, got {negate!r}")
    return RuleParameters(
        operator=parse_operator(str(data["operator"])),
        pattern=str(data.get("pattern", "")),
        negate=negate,
        name=data.get("name"),
    )


def _parse_rule(entry: Any, ruleset_id: Optional[int]) -> Rule:
    if not isinstance(entry, dict) or "type" not in entry:
        raise RulesLoadError(f"Rule entry must be a mapping with a 'type': {entry!r}")
    rid = entry.get("ruleset_id", ruleset_id)
    if rid is None:
        raise RulesLoadError(f"Rule {entry['type']!r} has no ruleset_id")
    try:
        rid = int(rid)
    except (TypeError, ValueError) as exc:
        raise RulesLoadError(f"Invalid ruleset_id: {rid!r}") from exc
    return Rule(
        type=parse_rule_type(str(entry["type"])),
        ruleset_id=rid,
        parameters=_parse_parameters(entry.get("parameters")),
    )


def _parse_ref_name(conditions: Any) -> Optional[RefNameCondition]:
    if not isinstance(conditions, dict):
        return None
    ref_name = conditions.get("ref_name")
    if not isinstance(ref_name, dict):
        return None
    return RefNameCondition(
        include=[str(p) for p in ref_name.get("include") or []],
        exclude=[str(p) for p in ref_name.get("exclude") or []],
    )


def parse_rules_document(data: Any) -> RulesDocument:
    """Build a RulesDocument from already-deserialised data."""
    if not isinstance(data, dict):
        raise RulesLoadError("Rules document must be a mapping")

    doc = RulesDocument(default_branch=data.get("default_branch"))

    for entry in data.get("rulesets") or []:
        if not isinstance(entry, dict) or "id" not in entry:
            raise RulesLoadError(f"Ruleset entry must be a mapping with an 'id': {entry!r}")
        try:
            rs_id = int(entry["id"])
        except (TypeError, ValueError) as exc:
            raise RulesLoadError(f"Invalid ruleset id: {entry['id']!r}") from exc

        doc.rulesets[rs_id] = Ruleset(
            id=rs_id,
            name=str(entry.get("name", rs_id)),
            current_user_can_bypass=str(entry.get("current_user_can_bypass", "never")),
            ref_name=_parse_ref_name(entry.get("conditions")),
        )
        for rule_entry in entry.get("rules") or []:
            doc.rules.append(_parse_rule(rule_entry, rs_id))

    for rule_entry in data.get("rules") or []:
        doc.rules.append(_parse_rule(rule_entry, None))

    return doc


def load_rules_document(path: Path) -> RulesDocument:
    """Read *path* (``.yaml``, ``.yml`` or ``.json``) into a RulesDocument."""
    if not path.is_file():
        raise RulesLoadError(f"Rules file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise RulesLoadError(f"Failed to parse {path}: {exc}") from exc
    return parse_rules_document(data)
