"""Branch-name glob dialect used by ruleset ref_name conditions.

Matching follows Ruby's ``File.fnmatch`` with ``File::FNM_PATHNAME``:

  - ``*`` matches any run of characters except ``/``.
  - ``?`` matches a single character except ``/``.
  - ``[abc]`` / ``[a-z]`` / ``[!abc]`` / ``[^abc]`` never match ``/``.
  - ``**`` forming a whole path segment matches zero or more segments.
  - ``\\`` escapes the next character.
  - A wildcard at the start of a segment does not match a leading ``.``.

No brace expansion, extglobs, ``!`` negation prefixes or comments. Repeated
slashes are literal and matching is case-sensitive.

Two keywords are layered on top for include lists only: ``~ALL`` matches
every branch and ``~DEFAULT`` matches the repository's default branch.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Optional

ALL_KEYWORD = "~ALL"
DEFAULT_KEYWORD = "~DEFAULT"

_NO_LEADING_DOT = r"(?!\.)"
_SEGMENT_CHARS = r"[^/]*"


def _parse_bracket(pattern: str, start: int) -> Optional[tuple[str, int]]:
    """Translate the bracket expression opening at *start*.

    Returns (regex, index after ``]``) or None if the bracket is unclosed,
    in which case ``[`` is taken literally.
    """
    i = start + 1
    negated = False
    if i < len(pattern) and pattern[i] in "!^":
        negated = True
        i += 1
    body_start = i
    # a ']' straight after the opening (or negation) is a literal member
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    while i < len(pattern) and pattern[i] != "]":
        if pattern[i] == "\\" and i + 1 < len(pattern):
            i += 1
        i += 1
    if i >= len(pattern):
        return None

    members: list[str] = []
    j = body_start
    while j < i:
        ch = pattern[j]
        if ch == "\\" and j + 1 < i:
            j += 1
            members.append(re.escape(pattern[j]))
        elif ch == "-" and members and j + 1 < i:
            members.append("-")
        else:
            members.append(re.escape(ch))
        j += 1
    body = "".join(members)

    if negated:
        return f"[^/{body}]", i + 1
    return f"(?!/)[{body}]", i + 1


def translate(pattern: str) -> str:
    """Translate a branch glob into an anchored regular expression."""
    out: list[str] = []
    i = 0
    n = len(pattern)

    while i < n:
        ch = pattern[i]
        at_segment_start = i == 0 or pattern[i - 1] == "/"

        if ch == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            stars = j - i
            whole_segment = at_segment_start and (j == n or pattern[j] == "/")

            if stars >= 2 and whole_segment:
                if j == n:
                    # trailing ``**``: everything below this point
                    out.append(
                        f"{_NO_LEADING_DOT}{_SEGMENT_CHARS}"
                        f"(?:/{_NO_LEADING_DOT}{_SEGMENT_CHARS})*"
                    )
                    i = j
                else:
                    # ``**/``: zero or more whole directories
                    out.append(f"(?:{_NO_LEADING_DOT}{_SEGMENT_CHARS}/)*")
                    i = j + 1
                continue

            if at_segment_start:
                out.append(_NO_LEADING_DOT)
            out.append(_SEGMENT_CHARS)
            i = j
            continue

        if ch == "?":
            if at_segment_start:
                out.append(_NO_LEADING_DOT)
            out.append("[^/]")
            i += 1
            continue

        if ch == "[":
            parsed = _parse_bracket(pattern, i)
            if parsed is not None:
                regex, i = parsed
                if at_segment_start:
                    out.append(_NO_LEADING_DOT)
                out.append(regex)
                continue
            out.append(re.escape(ch))
            i += 1
            continue

        if ch == "\\" and i + 1 < n:
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue

        out.append(re.escape(ch))
        i += 1

    return "(?s:" + "".join(out) + r")\Z"


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(translate(pattern))


def glob_match(name: str, pattern: str) -> bool:
    """Return True if *name* matches the glob *pattern* in full."""
    return _compile(pattern).match(name) is not None


def _matches_keyword(
    pattern: str, branch_name: str, default_branch_name: Optional[str]
) -> bool:
    if pattern == ALL_KEYWORD:
        return True
    if pattern == DEFAULT_KEYWORD:
        return bool(default_branch_name) and default_branch_name == branch_name
    return False


def branch_matches_patterns(
    branch_name: str,
    patterns: Optional[Iterable[str]],
    default_branch_name: Optional[str],
    match_keywords: bool,
) -> bool:
    """Return True if *branch_name* matches any of *patterns*.

    Keywords are tested first and only when *match_keywords* is set;
    otherwise ``~ALL`` and ``~DEFAULT`` are ordinary literal globs.
    """
    for pattern in patterns or ():
        if match_keywords and _matches_keyword(pattern, branch_name, default_branch_name):
            return True
        if glob_match(branch_name, pattern):
            return True
    return False
