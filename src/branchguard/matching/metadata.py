"""Metadata matchers — starts-with / ends-with / contains / regex with negation.

A compiled matcher is a plain tagged value (operator, pattern, negate) so it
stays hashable and serialisable; ``matches`` evaluates it.

Regex patterns are evaluated with RE2, whose matching time is linear in the
input. Patterns come from repository admins but candidates (commit
messages, emails) come from any contributor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

import re2

from branchguard.rules.models import MetadataOperator, RuleParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetadataMatcher:
    """Compiled form of a metadata rule's parameters.

    ``operator`` is None for the unsupported matcher, which never matches.
    """

    operator: Optional[MetadataOperator]
    pattern: str = ""
    negate: bool = False

    @property
    def supported(self) -> bool:
        return self.operator is not None


UNSUPPORTED = MetadataMatcher(operator=None)


def compile_matcher(params: Optional[RuleParameters]) -> MetadataMatcher:
    """Build a matcher from rule parameters.

    Absent parameters, unknown operators and regexes that fail to compile
    all produce the unsupported matcher.
    """
    if params is None:
        return UNSUPPORTED

    operator = params.operator
    if operator in (
        MetadataOperator.STARTS_WITH,
        MetadataOperator.ENDS_WITH,
        MetadataOperator.CONTAINS,
    ):
        return MetadataMatcher(MetadataOperator(operator), params.pattern, params.negate)

    if operator == MetadataOperator.REGEX:
        if _compile_regex(params.pattern) is None:
            return UNSUPPORTED
        return MetadataMatcher(MetadataOperator.REGEX, params.pattern, params.negate)

    logger.debug("Unsupported metadata operator %r", operator)
    return UNSUPPORTED


@lru_cache(maxsize=256)
def _compile_regex(pattern: str) -> Optional[Any]:
    try:
        return re2.compile(pattern)
    except (re2.error, UnicodeEncodeError) as exc:
        logger.warning("Ignoring invalid rule regex %r: %s", pattern, exc)
        return None


def _utf8_safe(text: str) -> str:
    # RE2 only accepts encodable text; surrogateescape'd argv bytes are not
    return text.encode("utf-8", "replace").decode("utf-8")


def _test(matcher: MetadataMatcher, candidate: str) -> bool:
    op = matcher.operator
    if op == MetadataOperator.STARTS_WITH:
        return candidate.startswith(matcher.pattern)
    if op == MetadataOperator.ENDS_WITH:
        return candidate.endswith(matcher.pattern)
    if op == MetadataOperator.CONTAINS:
        return matcher.pattern in candidate
    if op == MetadataOperator.REGEX:
        compiled = _compile_regex(matcher.pattern)
        return compiled is not None and compiled.search(_utf8_safe(candidate)) is not None
    raise AssertionError(f"unhandled operator: {op!r}")


def matches(matcher: MetadataMatcher, candidate: str) -> bool:
    """Return True if *candidate* satisfies *matcher*."""
    if not matcher.supported:
        return False
    result = _test(matcher, candidate)
    return not result if matcher.negate else result


_VERBS: dict[MetadataOperator, str] = {
    MetadataOperator.STARTS_WITH: "start with",
    MetadataOperator.ENDS_WITH: "end with",
    MetadataOperator.CONTAINS: "contain",
    MetadataOperator.REGEX: "match the regular expression",
}


def describe(params: Optional[RuleParameters]) -> Optional[str]:
    """Human-readable description, e.g. ``must not start with "WIP"``."""
    if params is None:
        return None
    try:
        verb = _VERBS[MetadataOperator(params.operator)]
    except ValueError:
        return None
    negation = "not " if params.negate else ""
    return f'must {negation}{verb} "{params.pattern}"'
